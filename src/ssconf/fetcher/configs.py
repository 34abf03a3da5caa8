"""Pinned fetcher configuration model.

See Also:
    [PinnedFetcher][ssconf.fetcher.PinnedFetcher]: The class that consumes
        this configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ssconf.models.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_RESPONSE_SIZE,
    DEFAULT_TIMEOUT,
)


DEFAULT_USER_AGENT = "ssconf"

_PROXY_SCHEMES = ("socks4://", "socks5://", "http://", "https://")


class FetcherConfig(BaseModel):
    """Transport settings for [PinnedFetcher][ssconf.fetcher.PinnedFetcher].

    A fetch is never retried, so ``timeout`` is the longest a caller can be
    blocked by a hung peer.

    Examples:
        ```yaml
        timeout: 15
        connect_timeout: 5
        max_response_size: 262144
        proxy_url: socks5://127.0.0.1:1080
        ```
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        le=300.0,
        description="Total time allowed for connect, handshake and body read (seconds)",
    )
    connect_timeout: float = Field(
        default=DEFAULT_CONNECT_TIMEOUT,
        gt=0,
        le=300.0,
        description="Time allowed for TCP connect plus TLS handshake (seconds)",
    )
    max_response_size: int = Field(
        default=DEFAULT_MAX_RESPONSE_SIZE,
        ge=1,
        description="Largest accepted response body in bytes",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent header sent with every request",
    )
    proxy_url: str | None = Field(
        default=None,
        description="Optional SOCKS or HTTP proxy used to reach the config server",
    )

    @field_validator("proxy_url")
    @classmethod
    def _validate_proxy_url(cls, v: str | None) -> str | None:
        if v is not None and not v.lower().startswith(_PROXY_SCHEMES):
            raise ValueError(f"proxy_url must start with one of {', '.join(_PROXY_SCHEMES)}")
        return v

    @model_validator(mode="after")
    def _validate_connect_timeout(self) -> FetcherConfig:
        if self.connect_timeout > self.timeout:
            raise ValueError(
                f"connect_timeout ({self.connect_timeout}) must not exceed timeout ({self.timeout})"
            )
        return self
