"""
Certificate-pinned fetcher for SIP008 online configuration.

[PinnedFetcher][ssconf.fetcher.fetcher.PinnedFetcher] performs exactly one
HTTPS request per call. The server's leaf certificate is compared against
the caller's pin before the request is written; any mismatch aborts the
fetch. Redirects are never followed: a 3xx comes back as a
[FetchConfigResult][ssconf.models.result.FetchConfigResult] carrying the
``Location`` so the caller can decide whether to fetch it, with whatever
pin applies to that host.

Note:
    Everything that means "the fetch did not happen or cannot be trusted"
    is raised as a
    [FetchValidationError][ssconf.core.exceptions.FetchValidationError]
    subclass. Everything the server says over a trusted connection, 404 and
    garbage bodies included, is a result.

See Also:
    [PinnedCertificate][ssconf.utils.tls.PinnedCertificate]: The aiohttp
        verification hook enforcing the pin.
    [decode_response][ssconf.sip008.decoder.decode_response]: Response
        decoding applied after a trusted exchange.
"""

from __future__ import annotations

import asyncio
import base64
from pathlib import Path
from typing import TYPE_CHECKING, Any, Self

import aiohttp
import pydantic
from aiohttp_socks import ProxyConnector, ProxyError
from rfc3986 import uri_reference
from rfc3986.exceptions import UnpermittedComponentError, ValidationError
from rfc3986.validators import Validator

from ssconf.core.exceptions import (
    CertificateFingerprintError,
    ConfigurationError,
    FetchConnectionError,
    FetchTimeoutError,
    InsecureSchemeError,
    InvalidURLError,
    ResponseTooLargeError,
)
from ssconf.core.logger import Logger
from ssconf.core.yaml import load_yaml
from ssconf.models.constants import HTTPS_SCHEME
from ssconf.sip008.decoder import ConfigDecoder
from ssconf.utils.http import read_bounded
from ssconf.utils.tls import PinnedCertificate

from .configs import FetcherConfig


if TYPE_CHECKING:
    from ssconf.models.request import FetchConfigRequest
    from ssconf.models.result import FetchConfigResult


_ACCEPT = "application/json"


def validate_url(url: str) -> str:
    """Normalize a config URL and require the ``https`` scheme.

    Returns:
        The normalized URL (lowercased scheme and host).

    Raises:
        InsecureSchemeError: If the scheme is anything but ``https``.
        InvalidURLError: If the host is missing, a component is malformed,
            or the URL embeds credentials.
    """
    uri = uri_reference(url.strip()).normalize()

    validator = (
        Validator()
        .require_presence_of("scheme", "host")
        .allow_schemes(HTTPS_SCHEME)
        .forbid_use_of_password()
        .check_validity_of("scheme", "host", "port", "path")
    )

    try:
        validator.validate(uri)
    except UnpermittedComponentError:
        raise InsecureSchemeError(
            f"Invalid scheme {uri.scheme!r}: online config must be fetched over https"
        ) from None
    except ValidationError as e:
        raise InvalidURLError(f"Invalid URL: {e}") from None

    return uri.unsplit()


class PinnedFetcher:
    """Fetch SIP008 documents from servers identified by a certificate pin.

    A fetcher holds only immutable transport settings. Each
    [fetch()][ssconf.fetcher.fetcher.PinnedFetcher.fetch] builds its own
    connector, session and pin, so one instance can serve any number of
    concurrent fetches against different hosts and pins.

    Examples:
        ```python
        fetcher = PinnedFetcher.from_dict({"timeout": 15})
        result = await fetcher.fetch(
            FetchConfigRequest(
                url="https://config.example.com/sip008.json",
                certificate_fingerprint="IA3K+nZ8hFDs5kSHnAYqDN9SJA/gW7frKEYRw67z7C4=",
            )
        )
        if result.is_redirect:
            ...
        ```
    """

    def __init__(
        self,
        config: FetcherConfig | None = None,
        *,
        decoder: ConfigDecoder | None = None,
    ) -> None:
        self._config = config or FetcherConfig()
        self._decoder = decoder or ConfigDecoder()
        self._logger = Logger("ssconf.fetcher")

    @property
    def config(self) -> FetcherConfig:
        return self._config

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> Self:
        """Create a fetcher from a configuration dictionary.

        Raises:
            ConfigurationError: If *data* does not validate as a
                [FetcherConfig][ssconf.fetcher.configs.FetcherConfig].
        """
        try:
            config = FetcherConfig(**data)
        except pydantic.ValidationError as e:
            raise ConfigurationError(f"Invalid fetcher configuration: {e}") from e
        return cls(config=config, **kwargs)

    @classmethod
    def from_yaml(cls, config_path: str | Path, **kwargs: Any) -> Self:
        """Create a fetcher from a YAML configuration file.

        Delegates to [load_yaml()][ssconf.core.yaml.load_yaml] and then to
        [from_dict()][ssconf.fetcher.fetcher.PinnedFetcher.from_dict].
        """
        return cls.from_dict(load_yaml(config_path), **kwargs)

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _connector(self, pin: PinnedCertificate) -> aiohttp.BaseConnector:
        # force_close: a pooled connection must never outlive its pin
        if self._config.proxy_url:
            return ProxyConnector.from_url(self._config.proxy_url, ssl=pin, force_close=True)
        return aiohttp.TCPConnector(ssl=pin, force_close=True)

    async def _exchange(
        self,
        method: str,
        url: str,
        pin: PinnedCertificate,
    ) -> tuple[int, dict[str, str], bytes]:
        """Run one request and return status, headers and the bounded body."""
        timeout = aiohttp.ClientTimeout(
            total=self._config.timeout,
            connect=self._config.connect_timeout,
        )
        headers = {"User-Agent": self._config.user_agent, "Accept": _ACCEPT}

        async with (
            aiohttp.ClientSession(connector=self._connector(pin), timeout=timeout) as session,
            session.request(method, url, headers=headers, allow_redirects=False) as resp,
        ):
            try:
                body = await read_bounded(resp, self._config.max_response_size)
            except ValueError as e:
                raise ResponseTooLargeError(str(e)) from e
            return resp.status, dict(resp.headers), body

    # -------------------------------------------------------------------------
    # Fetch
    # -------------------------------------------------------------------------

    async def fetch(self, request: FetchConfigRequest) -> FetchConfigResult:
        """Fetch and decode the online config described by *request*.

        The URL and the pin are validated before any socket is opened. The
        TLS handshake skips chain and hostname verification; trust comes
        solely from the SHA-256 pin of the leaf certificate.

        Returns:
            A result that is a redirect (3xx with ``Location``), a list of
            proxies (200 with a SIP008 body), or empty (anything else).

        Raises:
            InsecureSchemeError: The URL is not ``https``.
            InvalidURLError: The URL is malformed.
            CertificateFingerprintError: The pin is malformed, or the server
                presented a different certificate.
            FetchTimeoutError: The connect or the whole exchange timed out.
            FetchConnectionError: DNS, TCP, TLS or HTTP transport failure.
            ResponseTooLargeError: The body exceeded ``max_response_size``.
        """
        url = validate_url(request.url)
        pin = PinnedCertificate.from_base64(request.certificate_fingerprint)
        host = uri_reference(url).host

        try:
            status, headers, body = await self._exchange(request.method, url, pin)
        except (asyncio.CancelledError, KeyboardInterrupt, SystemExit):
            raise
        except aiohttp.ServerFingerprintMismatch as e:
            got = base64.b64encode(e.got).decode("ascii") if e.got else None
            self._logger.warning(
                "certificate_fingerprint_mismatch",
                host=host,
                expected=pin.expected,
                got=got,
            )
            raise CertificateFingerprintError(
                f"Certificate fingerprint mismatch for {host}: expected {pin.expected}, got {got}",
                expected=pin.expected,
                got=got,
            ) from e
        except ResponseTooLargeError as e:
            self._logger.warning("online_config_fetch_failed", host=host, error=str(e))
            raise
        except TimeoutError as e:
            self._logger.warning(
                "online_config_fetch_failed",
                host=host,
                error="timeout",
                timeout=self._config.timeout,
            )
            raise FetchTimeoutError(
                f"Fetching online config from {host} timed out after {self._config.timeout}s"
            ) from e
        except (aiohttp.ClientError, ProxyError, OSError) as e:
            reason = str(e) or type(e).__name__
            self._logger.warning("online_config_fetch_failed", host=host, error=reason)
            raise FetchConnectionError(
                f"Fetching online config from {host} failed: {reason}"
            ) from e

        result = self._decoder.decode(status, headers, body)

        if result.is_redirect:
            self._logger.info(
                "online_config_redirect",
                host=host,
                status=status,
                location=result.redirect_url,
            )
        else:
            self._logger.info(
                "online_config_fetched",
                host=host,
                status=status,
                outcome=result.outcome,
                proxies=len(result.proxies),
                size=len(body),
            )
        return result


async def fetch_config(
    request: FetchConfigRequest,
    config: FetcherConfig | None = None,
) -> FetchConfigResult:
    """One-shot helper: build a [PinnedFetcher][ssconf.fetcher.fetcher.PinnedFetcher] and fetch."""
    return await PinnedFetcher(config).fetch(request)


def fetch_config_blocking(
    request: FetchConfigRequest,
    config: FetcherConfig | None = None,
) -> FetchConfigResult:
    """Synchronous wrapper around [fetch_config()][ssconf.fetcher.fetcher.fetch_config].

    Runs its own event loop, so it must not be called from inside one.
    """
    return asyncio.run(fetch_config(request, config))
