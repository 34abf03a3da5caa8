"""
Declarative, lenient field extraction for SIP008 JSON objects.

A [FieldSpec][ssconf.sip008.parsing.FieldSpec] names the keys an object may
carry and the JSON type each one must have.
[parse_fields][ssconf.sip008.parsing.parse_fields] keeps the keys whose
value has that type and silently forgets everything else.

Note:
    Nothing here raises on bad data. An online config server is trusted for
    its identity, not for the shape of what it publishes, so a stray
    ``"server_port": "8388"`` costs one entry, not the whole document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _is_int(value: Any) -> bool:
    # JSON true/false decode to bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Expected JSON types of an object's keys.

    Attributes:
        int_fields: Keys whose value must be a JSON integer.
        str_fields: Keys whose value must be a JSON string.
        required: Keys an object cannot be used without. Only consulted by
            [missing_fields][ssconf.sip008.parsing.missing_fields].
    """

    int_fields: frozenset[str] = field(default_factory=frozenset)
    str_fields: frozenset[str] = field(default_factory=frozenset)
    required: frozenset[str] = field(default_factory=frozenset)

    def accepts(self, key: str, value: Any) -> bool:
        """Return True if *key* is declared and *value* has its declared type."""
        if key in self.int_fields:
            return _is_int(value)
        if key in self.str_fields:
            return _is_str(value)
        return False


def parse_fields(data: dict[str, Any], spec: FieldSpec) -> dict[str, Any]:
    """Keep the entries of *data* that *spec* accepts.

    Undeclared keys, which is how SIP008 extension fields show up, are
    dropped along with values of the wrong type. *data* is not modified.
    """
    return {key: value for key, value in data.items() if spec.accepts(key, value)}


def missing_fields(parsed: dict[str, Any], spec: FieldSpec) -> frozenset[str]:
    """Return the required keys absent from an already parsed dictionary."""
    return spec.required - parsed.keys()


__all__ = ["FieldSpec", "missing_fields", "parse_fields"]
