"""Outcome of a pinned online config fetch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ._validation import validate_instance, validate_int, validate_str_no_null
from .constants import FetchOutcome
from .proxy import ProxyConfig


@dataclass(frozen=True, slots=True)
class FetchConfigResult:
    """Immutable result of a fetch that reached a trusted server.

    A result only exists once the TLS connection passed the pin check, so
    every field can be acted upon. Redirects, error statuses and malformed
    documents are all represented here rather than raised.

    Attributes:
        http_status_code: Status code of the response actually received.
        redirect_url: ``Location`` of a 3xx response, empty otherwise.
        proxies: Servers listed by a 200 response, in document order.

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If both ``redirect_url`` and ``proxies`` are non-empty,
            or the status code is not a three-digit number.

    Examples:
        ```python
        FetchConfigResult(404).outcome                 # FetchOutcome.EMPTY
        FetchConfigResult(301, "https://a/b").outcome  # FetchOutcome.REDIRECT
        ```
    """

    http_status_code: int
    redirect_url: str = ""
    proxies: tuple[ProxyConfig, ...] = ()

    def __post_init__(self) -> None:
        validate_int(self.http_status_code, "http_status_code", minimum=0, maximum=999)
        validate_str_no_null(self.redirect_url, "redirect_url")
        if isinstance(self.proxies, list):
            object.__setattr__(self, "proxies", tuple(self.proxies))
        validate_instance(self.proxies, tuple, "proxies")
        for proxy in self.proxies:
            validate_instance(proxy, ProxyConfig, "proxies item")
        if self.redirect_url and self.proxies:
            raise ValueError("redirect_url and proxies are mutually exclusive")

    @property
    def outcome(self) -> FetchOutcome:
        if self.redirect_url:
            return FetchOutcome.REDIRECT
        if self.proxies:
            return FetchOutcome.SUCCESS
        return FetchOutcome.EMPTY

    @property
    def is_redirect(self) -> bool:
        return self.outcome is FetchOutcome.REDIRECT

    @property
    def is_success(self) -> bool:
        return self.outcome is FetchOutcome.SUCCESS

    def to_dict(self, *, include_passwords: bool = True) -> dict[str, Any]:
        """Serialize for JSON output.

        Args:
            include_passwords: When False, proxy secrets are masked.
        """
        return {
            "http_status_code": self.http_status_code,
            "redirect_url": self.redirect_url,
            "proxies": [p.to_dict(include_password=include_passwords) for p in self.proxies],
        }
