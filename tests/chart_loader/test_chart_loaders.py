"""
Tests for the chart loader implementations
"""

# Standard
from unittest import mock
import os

# Third Party
import pytest

# Local
from landscaper.chart_loader import (
    Chart,
    HelmChartLoader,
    InMemoryChartLoader,
    LocalChartLoader,
    read_chart_dir,
)
from landscaper.chart_loader.base import split_chart_ref
from landscaper.exceptions import BackendError, NotFoundError

## Helpers #####################################################################


def write_chart(chart_dir, name="connector-hdfs", version="0.1.0", templates=None):
    templates = templates if templates is not None else {"job.yaml": "kind: Job"}
    os.makedirs(os.path.join(chart_dir, "templates"), exist_ok=True)
    with open(os.path.join(chart_dir, "Chart.yaml"), "w", encoding="utf-8") as handle:
        handle.write(f"name: {name}\nversion: {version}\n")
    for file_name, body in templates.items():
        with open(
            os.path.join(chart_dir, "templates", file_name), "w", encoding="utf-8"
        ) as handle:
            handle.write(body)


## split_chart_ref #############################################################


def test_split_chart_ref():
    assert split_chart_ref("repo/chart:1.2.3") == ("repo", "chart", "1.2.3")
    assert split_chart_ref("repo/chart") == ("repo", "chart", None)
    assert split_chart_ref("oci/host/chart:1") == ("oci/host", "chart", "1")


@pytest.mark.parametrize("chart_ref", ["chart", "/chart", "repo/"])
def test_split_chart_ref_invalid(chart_ref):
    with pytest.raises(BackendError):
        split_chart_ref(chart_ref)


## read_chart_dir ##############################################################


def test_read_chart_dir(tmp_path):
    write_chart(
        str(tmp_path),
        templates={"a.yaml": "type: ScheduledJob", "b.yaml": "kind: Service"},
    )
    chart = read_chart_dir(str(tmp_path))
    assert chart.name == "connector-hdfs"
    assert chart.version == "0.1.0"
    assert sorted(t.name for t in chart.templates) == [
        os.path.join("templates", "a.yaml"),
        os.path.join("templates", "b.yaml"),
    ]
    assert b"type: ScheduledJob" in [t.data for t in chart.templates]


def test_read_chart_dir_missing_chart_file(tmp_path):
    with pytest.raises(NotFoundError):
        read_chart_dir(str(tmp_path))


def test_read_chart_dir_bad_yaml(tmp_path):
    (tmp_path / "Chart.yaml").write_text("name: [unclosed")
    with pytest.raises(BackendError):
        read_chart_dir(str(tmp_path))


## InMemoryChartLoader #########################################################


def test_in_memory_loader():
    chart = Chart("c")
    loader = InMemoryChartLoader({"repo/c": (chart, "/path")})
    assert loader.load("repo/c") == (chart, "/path")
    assert loader.loaded == ["repo/c"]
    with pytest.raises(NotFoundError):
        loader.load("repo/other")


## LocalChartLoader ############################################################


def test_local_loader_versioned_dir(tmp_path):
    chart_dir = os.path.join(str(tmp_path), "repo", "connector-hdfs-0.1.0")
    write_chart(chart_dir)
    chart, path = LocalChartLoader(str(tmp_path)).load("repo/connector-hdfs:0.1.0")
    assert path == chart_dir
    assert chart.name == "connector-hdfs"


def test_local_loader_plain_dir(tmp_path):
    chart_dir = os.path.join(str(tmp_path), "repo", "connector-hdfs")
    write_chart(chart_dir)
    _, path = LocalChartLoader(str(tmp_path)).load("repo/connector-hdfs:0.1.0")
    assert path == chart_dir


def test_local_loader_version_mismatch(tmp_path):
    write_chart(os.path.join(str(tmp_path), "repo", "connector-hdfs"), version="0.2.0")
    with pytest.raises(NotFoundError):
        LocalChartLoader(str(tmp_path)).load("repo/connector-hdfs:0.1.0")


def test_local_loader_missing(tmp_path):
    with pytest.raises(NotFoundError):
        LocalChartLoader(str(tmp_path)).load("repo/nothing")


## HelmChartLoader #############################################################


def test_helm_loader_pulls_and_reads(tmp_path):
    """Make sure helm pull is run with the right args and the untarred chart
    is read
    """

    def fake_run_helm(args, binary=None):
        untar_dir = args[args.index("--untardir") + 1]
        write_chart(os.path.join(untar_dir, "connector-hdfs"))

    with mock.patch(
        "landscaper.chart_loader.helm_chart_loader.run_helm", side_effect=fake_run_helm
    ) as run_mock:
        chart, path = HelmChartLoader(cache_dir=str(tmp_path)).load(
            "repo/connector-hdfs:0.1.0"
        )

    args = run_mock.call_args[0][0]
    assert args[:2] == ["pull", "repo/connector-hdfs"]
    assert args[-2:] == ["--version", "0.1.0"]
    assert path == os.path.join(
        str(tmp_path), "repo", "connector-hdfs-0.1.0", "connector-hdfs"
    )
    assert chart.version == "0.1.0"


def test_helm_loader_uses_cache(tmp_path):
    write_chart(
        os.path.join(str(tmp_path), "repo", "connector-hdfs-0.1.0", "connector-hdfs")
    )
    with mock.patch("landscaper.chart_loader.helm_chart_loader.run_helm") as run_mock:
        chart, _ = HelmChartLoader(cache_dir=str(tmp_path)).load(
            "repo/connector-hdfs:0.1.0"
        )
    assert not run_mock.called
    assert chart.name == "connector-hdfs"


def test_helm_loader_propagates_errors(tmp_path):
    with mock.patch(
        "landscaper.chart_loader.helm_chart_loader.run_helm",
        side_effect=BackendError("no such chart"),
    ):
        with pytest.raises(BackendError, match="no such chart"):
            HelmChartLoader(cache_dir=str(tmp_path)).load("repo/missing:1.0.0")
