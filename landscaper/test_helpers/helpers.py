"""
This module holds common helper functions for making testing easy
"""

# Standard
from contextlib import contextmanager
from typing import Callable, Optional
import os

# First Party
import alog

# Local
from landscaper.chart_loader import Chart, ChartLoaderBase, ChartTemplate
from landscaper.component import Component, Metadata, Release
from landscaper.config import library_config as config_detail_dict
from landscaper.release_backend import ReleaseBackendBase
from landscaper.secrets import SecretsReadWriteDeleterBase

log = alog.use_channel("TEST")


def configure_logging():
    alog.configure(
        os.environ.get("LOG_LEVEL", "off"),
        os.environ.get("LOG_FILTERS", ""),
        formatter="json"
        if os.environ.get("LOG_JSON", "").lower() == "true"
        else "pretty",
        thread_id=os.environ.get("LOG_THREAD_ID", "").lower() == "true",
    )


configure_logging()

TEST_NAMESPACE = "myNameSpace"
TEST_REPOSITORY = "repo"
TEST_CHART = "connector-hdfs:0.1.0"
TEST_CHART_PATH = "/opt/store/whatever/path/"


def make_test_component(name: str, namespace: str = TEST_NAMESPACE) -> Component:
    """Build a fully populated component with two secrets"""
    component = Component(
        name,
        namespace,
        Release(chart=TEST_CHART, version="1.0.0"),
        {
            "GroupID": "hdfs-rtwind",
            "HdfsUrl": "hdfs://hadoop:8020",
            "PartitionField": "partition1",
            "TasksMax": 1,
            "Topics": "topic1,topic2",
            "FlushSize": 3,
            "FilenameOffsetZeroPadWidth": 1,
        },
        ["TestSecret1", "TestSecret2"],
    )
    component.secret_values = {
        "TestSecret1": b"secret value 1",
        "TestSecret2": b"secret value 2",
    }
    component.configuration.set_metadata(
        Metadata(chart_repository=TEST_REPOSITORY, release_version="1.0.0")
    )
    return component


def make_chart(*template_bodies: str, name: str = "connector-hdfs") -> Chart:
    """Build a chart whose templates hold the given bodies"""
    return Chart(
        name=name,
        version="0.1.0",
        templates=[
            ChartTemplate(f"templates/t{i}.yaml", body.encode("utf-8"))
            for i, body in enumerate(template_bodies)
        ],
    )


@contextmanager
def library_config(**config_overrides):
    """This context manager sets library config values temporarily and reverts
    them on completion
    """
    old_vals = {}
    for key, val in config_overrides.items():
        if key in config_detail_dict:
            old_vals[key] = config_detail_dict[key]
        config_detail_dict[key] = val

    try:
        yield
    finally:
        for key in config_overrides:
            if key in old_vals:
                config_detail_dict[key] = old_vals[key]
            else:
                del config_detail_dict[key]


## Mock collaborators ##########################################################


def _not_expected(name: str) -> Callable:
    def fail(*args, **kwargs):
        raise AssertionError(f"Unexpected call to {name}{args}{kwargs}")

    return fail


class MockChartLoader(ChartLoaderBase):
    """Chart loader which delegates to a callback"""

    def __init__(self, load: Callable):
        self._load = load

    def load(self, chart_ref):
        log.debug2("MockChartLoader %s", chart_ref)
        return self._load(chart_ref)


class MockReleaseBackend(ReleaseBackendBase):
    """Release backend whose operations delegate to optional callbacks. A call
    without a configured callback fails the test.
    """

    def __init__(
        self,
        install: Optional[Callable] = None,
        update: Optional[Callable] = None,
        delete: Optional[Callable] = None,
    ):
        self._install = install or _not_expected("install")
        self._update = update or _not_expected("update")
        self._delete = delete or _not_expected("delete")
        self.calls = []

    def install(self, chart_path, namespace, release_name, values=None, dry_run=False):
        self.calls.append(("install", release_name))
        return self._install(chart_path, namespace, release_name)

    def update(
        self,
        release_name,
        chart_path,
        namespace=None,
        values=None,
        dry_run=False,
        force=False,
    ):
        self.calls.append(("update", release_name))
        return self._update(release_name, chart_path)

    def delete(self, release_name, namespace=None):
        self.calls.append(("delete", release_name))
        return self._delete(release_name)

    def list_releases(self):
        return {}


class MockSecretsStore(SecretsReadWriteDeleterBase):
    """Secret store whose operations delegate to optional callbacks. A call
    without a configured callback fails the test.
    """

    def __init__(
        self,
        read: Optional[Callable] = None,
        write: Optional[Callable] = None,
        delete: Optional[Callable] = None,
    ):
        super().__init__()
        self._read = read or _not_expected("read")
        self._write = write or _not_expected("write")
        self._delete = delete or _not_expected("delete")
        self.calls = []

    def read(self, component_name, namespace, secret_names):
        self.calls.append(("read", component_name))
        return self._read(component_name, namespace, secret_names)

    def write(self, component_name, namespace, secret_values):
        self.calls.append(("write", component_name))
        return self._write(component_name, namespace, secret_values)

    def delete(self, component_name, namespace):
        self.calls.append(("delete", component_name))
        return self._delete(component_name, namespace)
