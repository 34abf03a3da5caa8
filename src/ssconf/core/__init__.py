"""Core layer: exceptions, structured logging and YAML configuration loading.

Depends on nothing else in ssconf and is used by every other layer.

Attributes:
    SsconfError: Root of the exception hierarchy. See
        [ssconf.core.exceptions][ssconf.core.exceptions].
    Logger: Structured logger supporting key=value and JSON output modes.
        See [Logger][ssconf.core.logger.Logger].
    load_yaml: Safe YAML loading with ``yaml.safe_load()``.
        See [load_yaml()][ssconf.core.yaml.load_yaml].
"""

from .exceptions import (
    CertificateFingerprintError,
    ConfigurationError,
    FetchConnectionError,
    FetchTimeoutError,
    FetchValidationError,
    InsecureSchemeError,
    InvalidURLError,
    ResponseTooLargeError,
    SsconfError,
)
from .logger import (
    Logger,
    StructuredFormatter,
    format_kv_pairs,
    mask_sensitive,
    sanitize_fields,
    setup_logging,
)
from .yaml import load_yaml


__all__ = [
    "CertificateFingerprintError",
    "ConfigurationError",
    "FetchConnectionError",
    "FetchTimeoutError",
    "FetchValidationError",
    "InsecureSchemeError",
    "InvalidURLError",
    "Logger",
    "ResponseTooLargeError",
    "SsconfError",
    "StructuredFormatter",
    "format_kv_pairs",
    "load_yaml",
    "mask_sensitive",
    "sanitize_fields",
    "setup_logging",
]
