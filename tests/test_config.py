"""
Tests for the library config module

NOTE: Python makes it hard to change env vars in a way that will effect import
    time, so we're relying on the fact that aconfig is well tested and not
    actually validating the env-var override behavior!
"""

# Third Party
import pytest

# First Party
import aconfig

# Local
from landscaper import config
from landscaper.config import validation


def test_config_keys():
    """Make sure the expected keys are present with their defaults"""
    assert config.dry_run is False
    assert config.force is False
    assert config.fail_fast is False
    assert config.cron_job_markers == ["type: ScheduledJob"]
    assert config.helm.binary == "helm"
    assert isinstance(config.helm.timeout, int)


def test_missing_key():
    with pytest.raises(AttributeError):
        config.not_a_key  # pylint: disable=pointless-statement


def test_get_invalid_params_all_valid_params():
    assert not validation.get_invalid_params(
        config=aconfig.Config({"key": 1}),
        validation_config=aconfig.Config({"key": {"type": "int", "min": 0, "max": 1}}),
    )


def test_get_invalid_params_out_of_bounds():
    assert validation.get_invalid_params(
        config=aconfig.Config({"key": 3}),
        validation_config=aconfig.Config({"key": {"type": "int", "min": 0, "max": 1}}),
    ) == ["key"]


def test_get_invalid_params_nested():
    """Make sure nested keys are validated with dotted names"""
    assert validation.get_invalid_params(
        config=aconfig.Config({"helm": {"binary": ""}}),
        validation_config=aconfig.Config(
            {"helm": {"binary": {"type": "str", "min_len": 1}}}
        ),
    ) == ["helm.binary"]


def test_get_invalid_params_bool_is_not_int():
    assert validation.get_invalid_params(
        config=aconfig.Config({"key": True}),
        validation_config=aconfig.Config({"key": {"type": "int"}}),
    ) == ["key"]


def test_get_invalid_params_list_item_type():
    validation_config = aconfig.Config(
        {"key": {"type": "list", "min_len": 1, "item_type": "str"}}
    )
    assert not validation.get_invalid_params(
        aconfig.Config({"key": ["a"]}), validation_config
    )
    assert validation.get_invalid_params(
        aconfig.Config({"key": [1]}), validation_config
    ) == ["key"]
    assert validation.get_invalid_params(
        aconfig.Config({"key": []}), validation_config
    ) == ["key"]


def test_get_invalid_params_enum():
    validation_config = aconfig.Config({"key": {"type": "enum", "values": ["a", "b"]}})
    assert not validation.get_invalid_params(
        aconfig.Config({"key": "a"}), validation_config
    )
    assert validation.get_invalid_params(
        aconfig.Config({"key": "c"}), validation_config
    ) == ["key"]


def test_get_invalid_params_optional():
    assert not validation.get_invalid_params(
        config=aconfig.Config({}),
        validation_config=aconfig.Config({"key": {"type": "bool", "optional": True}}),
    )
