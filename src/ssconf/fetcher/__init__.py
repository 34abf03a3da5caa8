"""Pinned HTTPS fetcher for SIP008 online configuration.

Attributes:
    PinnedFetcher: Validates the URL and pin, performs one HTTPS exchange
        with certificate pinning and decodes the response.
        See [PinnedFetcher][ssconf.fetcher.fetcher.PinnedFetcher].
    FetcherConfig: Timeouts, size limit, User-Agent and optional proxy.
        See [FetcherConfig][ssconf.fetcher.configs.FetcherConfig].
"""

from .configs import DEFAULT_USER_AGENT, FetcherConfig
from .fetcher import PinnedFetcher, fetch_config, fetch_config_blocking, validate_url


__all__ = [
    "DEFAULT_USER_AGENT",
    "FetcherConfig",
    "PinnedFetcher",
    "fetch_config",
    "fetch_config_blocking",
    "validate_url",
]
