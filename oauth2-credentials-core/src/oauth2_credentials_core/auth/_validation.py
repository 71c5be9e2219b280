"""Argument checks shared by tokens, credential sources and credentials."""

from collections.abc import Mapping
from typing import Any, TypeVar

from oauth2_credentials_core.auth.exceptions import InvalidArgumentError

T = TypeVar("T")


def check_not_none(value: T | None, name: str) -> T:
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None", argument=name)
    return value


def require_key(mapping: Mapping[str, Any], key: str, message: str) -> Any:
    if key not in mapping:
        raise InvalidArgumentError(message, argument=key)
    return mapping[key]


def optional_str(mapping: Mapping[str, Any], key: str) -> str | None:
    """Return ``mapping[key]`` if present, rejecting non-string values."""
    value = mapping.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidArgumentError(
            f"Expected '{key}' to be a string, got {type(value).__name__}", argument=key
        )
    return value
