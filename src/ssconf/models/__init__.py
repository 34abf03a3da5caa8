"""Pure frozen dataclasses with zero I/O for online config fetches.

The models layer sits at the bottom of the package: it depends only on the
standard library. Every model uses ``@dataclass(frozen=True, slots=True)``
and validates in ``__post_init__`` so invalid instances never escape the
constructor.

Attributes:
    FetchConfigRequest: URL, HTTP method and pinned certificate fingerprint
        of one fetch.
    FetchConfigResult: Status code plus either a redirect target or the
        proxies of the fetched document.
    ProxyConfig: One Shadowsocks server entry of a SIP008 document.
    FetchOutcome: ``success`` / ``redirect`` / ``empty`` tag of a result.
"""

from .constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_RESPONSE_SIZE,
    DEFAULT_TIMEOUT,
    HTTPS_SCHEME,
    SIP008_VERSION,
    FetchOutcome,
)
from .proxy import ProxyConfig
from .request import FetchConfigRequest
from .result import FetchConfigResult


__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_MAX_RESPONSE_SIZE",
    "DEFAULT_TIMEOUT",
    "HTTPS_SCHEME",
    "SIP008_VERSION",
    "FetchConfigRequest",
    "FetchConfigResult",
    "FetchOutcome",
    "ProxyConfig",
]
