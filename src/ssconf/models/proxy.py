"""Single proxy server entry of a SIP008 online config document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ._validation import (
    validate_optional_str,
    validate_port,
    validate_str_no_null,
    validate_str_not_empty,
)


@dataclass(frozen=True, slots=True)
class ProxyConfig:
    """Immutable Shadowsocks server configuration.

    Field names follow the SIP008 JSON keys. No uniqueness is enforced
    across entries of a document; the ``id`` chosen by the operator is
    trusted as is.

    Attributes:
        server: Hostname or IP address of the proxy server.
        server_port: TCP/UDP port of the proxy server.
        password: Shared secret. Excluded from ``repr()``.
        method: AEAD cipher identifier (e.g. ``chacha20-ietf-poly1305``).
        id: Operator-assigned identifier, empty when the document omits it.
        remarks: Optional human-readable label.
        plugin: Optional SIP003 plugin executable name.
        plugin_opts: Optional SIP003 plugin options. Excluded from ``repr()``.

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If ``server`` or ``method`` is empty, the port is out of
            range, or any string contains null bytes.

    Examples:
        ```python
        proxy = ProxyConfig(
            server="ssconf.test",
            server_port=123,
            password="passw0rd",
            method="chacha20-ietf-poly1305",
            id="ssconf-test-1",
        )
        proxy.to_dict()["server_port"]  # 123
        ```
    """

    server: str
    server_port: int
    password: str = field(repr=False)
    method: str
    id: str = ""
    remarks: str | None = None
    plugin: str | None = None
    plugin_opts: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        validate_str_not_empty(self.server, "server")
        validate_port(self.server_port, "server_port")
        validate_str_no_null(self.password, "password")
        validate_str_not_empty(self.method, "method")
        validate_str_no_null(self.id, "id")
        validate_optional_str(self.remarks, "remarks")
        validate_optional_str(self.plugin, "plugin")
        validate_optional_str(self.plugin_opts, "plugin_opts")

    def to_dict(self, *, include_password: bool = True) -> dict[str, Any]:
        """Serialize using SIP008 key names, omitting unset optional fields.

        Args:
            include_password: When False, ``password`` and ``plugin_opts`` are
                replaced by ``"***"`` (for display and logs).
        """
        result: dict[str, Any] = {
            "id": self.id,
            "server": self.server,
            "server_port": self.server_port,
            "password": self.password if include_password else "***",
            "method": self.method,
        }
        for key in ("remarks", "plugin", "plugin_opts"):
            value = getattr(self, key)
            if value is None:
                continue
            if key == "plugin_opts" and not include_password:
                value = "***"
            result[key] = value
        return result
