"""
SIP008 online config document model.

The wire envelope is a JSON object::

    {
        "version": 1,
        "servers": [
            {"id": "...", "server": "...", "server_port": 8388,
             "password": "...", "method": "chacha20-ietf-poly1305"},
            ...
        ],
        "bytes_used": 274877906944,
        "bytes_remaining": 824633720832
    }

Raw JSON is sanitized through ``parse()`` and then validated into a frozen
Pydantic model whose ``servers`` are
[ProxyConfig][ssconf.models.proxy.ProxyConfig] instances in document order.
"""

from __future__ import annotations

import json
import logging
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, StrictInt

from ssconf.models.proxy import ProxyConfig

from .parsing import FieldSpec, missing_fields, parse_fields


logger = logging.getLogger("ssconf.sip008")


class Sip008Document(BaseModel):
    """Validated SIP008 document.

    ``version`` is kept for the caller's information but is not checked
    against a supported range: every published revision of SIP008 is
    version 1 and the server list has never changed shape.
    """

    model_config = ConfigDict(frozen=True)

    version: StrictInt | None = None
    servers: tuple[InstanceOf[ProxyConfig], ...] = ()
    bytes_used: StrictInt | None = Field(default=None, ge=0)
    bytes_remaining: StrictInt | None = Field(default=None, ge=0)

    _FIELD_SPEC: ClassVar[FieldSpec] = FieldSpec(
        int_fields=frozenset({"version", "bytes_used", "bytes_remaining"}),
    )
    _COUNTER_FIELDS: ClassVar[tuple[str, ...]] = ("bytes_used", "bytes_remaining")
    _SERVER_FIELD_SPEC: ClassVar[FieldSpec] = FieldSpec(
        int_fields=frozenset({"server_port"}),
        str_fields=frozenset(
            {"id", "server", "password", "method", "remarks", "plugin", "plugin_opts"}
        ),
        required=frozenset({"server", "server_port", "password", "method"}),
    )

    @classmethod
    def parse_server(cls, data: Any) -> ProxyConfig | None:
        """Build a [ProxyConfig][ssconf.models.proxy.ProxyConfig] from one raw entry.

        Returns:
            The proxy, or ``None`` when the entry is not an object, lacks a
            required field, or holds an out-of-range value.
        """
        if not isinstance(data, dict):
            return None
        fields = parse_fields(data, cls._SERVER_FIELD_SPEC)
        missing = missing_fields(fields, cls._SERVER_FIELD_SPEC)
        if missing:
            logger.debug("sip008_server_dropped missing=%s", ",".join(sorted(missing)))
            return None
        try:
            return ProxyConfig(**fields)
        except (TypeError, ValueError) as e:
            logger.debug("sip008_server_dropped error=%s", e)
            return None

    @classmethod
    def parse(cls, data: Any) -> dict[str, Any]:
        """Parse a raw JSON value into constructor arguments.

        Raises:
            ValueError: If *data* is not an object or has no ``servers`` list.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected JSON object, got {type(data).__name__}")
        servers = data.get("servers")
        if not isinstance(servers, list):
            raise ValueError("Document has no 'servers' list")

        result = parse_fields(data, cls._FIELD_SPEC)
        for key in cls._COUNTER_FIELDS:
            if result.get(key, 0) < 0:
                logger.debug("sip008_field_dropped field=%s value=%s", key, result.pop(key))
        parsed = (cls.parse_server(entry) for entry in servers)
        result["servers"] = tuple(p for p in parsed if p is not None)
        return result

    @classmethod
    def from_json(cls, body: bytes | str) -> Self:
        """Decode and validate a SIP008 document from a response body.

        Raises:
            ValueError: If the body is not UTF-8 JSON, is not a SIP008
                envelope, or fails validation (``pydantic.ValidationError``
                is a ``ValueError``).
        """
        data = json.loads(body)
        return cls.model_validate(cls.parse(data))

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to SIP008 key names, excluding ``None`` values."""
        result: dict[str, Any] = {"servers": [s.to_dict() for s in self.servers]}
        for key in ("version", "bytes_used", "bytes_remaining"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result
