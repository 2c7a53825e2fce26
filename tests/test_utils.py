"""
Tests for the common utilities
"""

# Third Party
import pytest

# Local
from landscaper import utils


def test_nested_get():
    dct = {"a": {"b": {"c": 1}}}
    assert utils.nested_get(dct, "a.b.c") == 1
    assert utils.nested_get(dct, "a.x.c") is None
    assert utils.nested_get(dct, "a.x", 5) == 5


def test_nested_get_non_dict_intermediate():
    with pytest.raises(TypeError):
        utils.nested_get({"a": 1}, "a.b")


@pytest.mark.parametrize(
    ["secret_name", "env_name"],
    [
        ("db-password", "DB_PASSWORD"),
        ("TestSecret1", "TESTSECRET1"),
        ("a-b-c", "A_B_C"),
    ],
)
def test_env_var_name(secret_name, env_name):
    assert utils.env_var_name(secret_name) == env_name


def test_to_bytes():
    assert utils.to_bytes(b"x") == b"x"
    assert utils.to_bytes("x") == b"x"
    assert utils.to_bytes(None) == b""
    assert utils.to_bytes(12) == b"12"
