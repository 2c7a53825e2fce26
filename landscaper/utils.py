"""
Common utilities shared across the library
"""

# Standard
from typing import Any

# Local
from . import constants

# Sentinel for missing dict values
__MISSING__ = "__MISSING__"


def nested_get(dct: dict, key: str, dflt=None) -> Any:
    """Helper to get values from a dict using 'foo.bar' key notation

    Args:
        dct:  dict
            The dict to search
        key:  str
            Key that may contain '.' notation indicating dict nesting

    Returns:
        val:  Any
            Whatever is found at the given key or dflt if the key is not found.
            This includes missing intermediate dicts.
    """
    parts = key.split(constants.NESTED_DICT_DELIM)
    for i, part in enumerate(parts[:-1]):
        dct = dct.get(part, __MISSING__)
        if dct is __MISSING__:
            return dflt
        if not isinstance(dct, dict):
            raise TypeError(
                f"Intermediate key {constants.NESTED_DICT_DELIM.join(parts[:i + 1])} is not a dict"
            )
    return dct.get(parts[-1], dflt)


def env_var_name(secret_name: str) -> str:
    """Convert a secret name to the environment variable that holds its value,
    e.g. "db-password" -> "DB_PASSWORD"
    """
    return secret_name.upper().replace("-", "_")


def to_bytes(value: Any) -> bytes:
    """Coerce str values to utf-8 bytes, leaving bytes untouched"""
    if isinstance(value, bytes):
        return value
    if value is None:
        return b""
    return str(value).encode("utf-8")
