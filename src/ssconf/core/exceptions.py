"""ssconf exception hierarchy.

Separates the two ways an online config fetch can end badly. Configuration
problems are raised while building a fetcher. Transport and validation
failures mean the fetch did not happen and nothing from the server may be
trusted. Protocol-level outcomes (404, redirects, malformed documents) are
never exceptions: they come back as ordinary
[FetchConfigResult][ssconf.models.result.FetchConfigResult] values.

Exception hierarchy:

```text
SsconfError (base -- never raised directly)
├── ConfigurationError              -- fetcher config validation, bad YAML
└── FetchValidationError            -- fetch did not happen, trust nothing
    ├── InvalidURLError             -- URL is malformed
    │   └── InsecureSchemeError     -- URL is not https
    ├── CertificateFingerprintError -- pin malformed or leaf cert mismatch
    ├── FetchConnectionError        -- DNS, TCP or TLS failure
    ├── FetchTimeoutError           -- connect or read timed out
    └── ResponseTooLargeError       -- body exceeded max_response_size
```

See Also:
    [PinnedFetcher][ssconf.fetcher.PinnedFetcher]: Raises the
        [FetchValidationError][ssconf.core.exceptions.FetchValidationError]
        subclasses.
    [PinnedCertificate][ssconf.utils.tls.PinnedCertificate]: Decodes the
        pin and raises
        [CertificateFingerprintError][ssconf.core.exceptions.CertificateFingerprintError]
        for malformed values.
"""

from __future__ import annotations


class SsconfError(Exception):
    """Base exception for all ssconf errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(SsconfError):
    """Invalid or missing fetcher configuration (YAML, dict, CLI flags)."""


# ---------------------------------------------------------------------------
# Fetch
# ---------------------------------------------------------------------------


class FetchValidationError(SsconfError):
    """The fetch did not happen, or happened over an untrusted connection.

    Callers must not act on any configuration when this is raised. A
    certificate fingerprint mismatch in particular must never be retried
    automatically or downgraded to a warning.
    """


class InvalidURLError(FetchValidationError):
    """The target URL is malformed (missing host, bad port, credentials).

    Raised before any socket is opened.
    """


class InsecureSchemeError(InvalidURLError):
    """The target URL does not use the ``https`` scheme.

    Raised before any socket is opened, so a typo can never turn into a
    plaintext fetch.
    """


class CertificateFingerprintError(FetchValidationError):
    """The pinned fingerprint is malformed or does not match the server.

    Attributes:
        expected: The pin supplied by the caller (base64), if known.
        got: Fingerprint of the certificate the server presented (base64),
            or ``None`` when the pin itself could not be decoded.
    """

    def __init__(self, message: str, *, expected: str | None = None, got: str | None = None):
        super().__init__(message)
        self.expected = expected
        self.got = got


class FetchConnectionError(FetchValidationError):
    """DNS resolution, TCP connect, TLS handshake or HTTP exchange failed."""


class FetchTimeoutError(FetchValidationError):
    """The connection or the response exceeded the configured timeout."""


class ResponseTooLargeError(FetchValidationError):
    """The response body exceeded ``FetcherConfig.max_response_size``."""


__all__ = [
    "CertificateFingerprintError",
    "ConfigurationError",
    "FetchConnectionError",
    "FetchTimeoutError",
    "FetchValidationError",
    "InsecureSchemeError",
    "InvalidURLError",
    "ResponseTooLargeError",
    "SsconfError",
]
