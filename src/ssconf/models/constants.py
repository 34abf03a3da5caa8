"""Shared constants for the models layer.

Defaults used by the fetcher configuration and the outcome enumeration
returned by [FetchConfigResult.outcome][ssconf.models.result.FetchConfigResult.outcome].
Kept here so the models, sip008 and fetcher layers can share them without
importing each other.
"""

from __future__ import annotations

from enum import StrEnum


HTTPS_SCHEME = "https"

DEFAULT_TIMEOUT: float = 10.0
DEFAULT_CONNECT_TIMEOUT: float = 5.0
DEFAULT_MAX_RESPONSE_SIZE: int = 1_048_576  # 1 MiB

# SIP008 documents published today all declare version 1.
SIP008_VERSION: int = 1


class FetchOutcome(StrEnum):
    """The three shapes a completed fetch can take.

    Attributes:
        SUCCESS: HTTP 200 with a parsable document listing at least one proxy.
        REDIRECT: A 3xx response that carried a ``Location`` header.
        EMPTY: Anything else (404, 5xx, 3xx without ``Location``, malformed
            or empty document). The status code tells the caller which.
    """

    SUCCESS = "success"
    REDIRECT = "redirect"
    EMPTY = "empty"
