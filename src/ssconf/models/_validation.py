"""Field checks shared by the ``__post_init__`` of every model.

Private module. Each helper raises ``TypeError`` for a value of the wrong
type and ``ValueError`` for a value of the right type that is out of range,
so callers can tell a programming error from bad input.
"""

from __future__ import annotations

from typing import Any


_PORT_RANGE = (1, 65_535)


def _type_name(value: Any) -> str:
    return type(value).__name__


def validate_instance(value: Any, expected: type, name: str) -> None:
    if not isinstance(value, expected):
        raise TypeError(f"{name} must be of type {expected.__name__}, got {_type_name(value)}")


def validate_int(value: Any, name: str, *, minimum: int, maximum: int) -> None:
    """Require a plain ``int`` (not ``bool``) in ``[minimum, maximum]``."""
    if type(value) is bool or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {_type_name(value)}")
    if value < minimum or value > maximum:
        raise ValueError(f"{name} must be between {minimum} and {maximum}, got {value}")


def validate_port(value: Any, name: str) -> None:
    validate_int(value, name, minimum=_PORT_RANGE[0], maximum=_PORT_RANGE[1])


def validate_str_no_null(value: Any, name: str) -> None:
    """Require a ``str`` free of NUL characters (may be empty)."""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str, got {_type_name(value)}")
    if "\x00" in value:
        raise ValueError(f"{name} contains null bytes")


def validate_str_not_empty(value: Any, name: str) -> None:
    validate_str_no_null(value, name)
    if value == "":
        raise ValueError(f"{name} must not be empty")


def validate_optional_str(value: Any, name: str) -> None:
    if value is None:
        return
    validate_str_no_null(value, name)
