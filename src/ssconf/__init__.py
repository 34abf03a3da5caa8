r"""ssconf -- certificate-pinned fetcher for SIP008 online proxy configuration.

A client fetches a list of Shadowsocks servers over HTTPS from a host it
identifies by the SHA-256 fingerprint of its leaf certificate instead of by
a CA chain. Redirects are reported, never followed.

Architecture follows a **diamond DAG** dependency structure where imports
flow strictly downward:

```text
              fetcher          Pinned HTTPS exchange, CLI
             /   |   \
          core sip008 utils    Exceptions/logging, decoding, TLS pinning
             \   |   /
              models           Pure frozen dataclasses (zero I/O)
```

Attributes:
    models: Request, result and proxy dataclasses. Depends only on stdlib.
    core: Exceptions, structured logging, YAML loading.
    sip008: SIP008 document parsing and HTTP response decoding.
    utils: Bounded body reads and certificate pinning.
    fetcher: [PinnedFetcher][ssconf.fetcher.PinnedFetcher] and its config.

Note:
    Top-level imports (``from ssconf import PinnedFetcher``) use lazy
    loading and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("ssconf")

__all__ = [
    "CertificateFingerprintError",
    "ConfigDecoder",
    "FetchConfigRequest",
    "FetchConfigResult",
    "FetchValidationError",
    "FetcherConfig",
    "InsecureSchemeError",
    "PinnedFetcher",
    "ProxyConfig",
    "Sip008Document",
    "compute_certificate_fingerprint",
    "decode_response",
    "fetch_config",
    "fetch_config_blocking",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "CertificateFingerprintError": ("ssconf.core", "CertificateFingerprintError"),
    "FetchValidationError": ("ssconf.core", "FetchValidationError"),
    "InsecureSchemeError": ("ssconf.core", "InsecureSchemeError"),
    "FetchConfigRequest": ("ssconf.models", "FetchConfigRequest"),
    "FetchConfigResult": ("ssconf.models", "FetchConfigResult"),
    "ProxyConfig": ("ssconf.models", "ProxyConfig"),
    "ConfigDecoder": ("ssconf.sip008", "ConfigDecoder"),
    "Sip008Document": ("ssconf.sip008", "Sip008Document"),
    "decode_response": ("ssconf.sip008", "decode_response"),
    "compute_certificate_fingerprint": ("ssconf.utils", "compute_certificate_fingerprint"),
    "FetcherConfig": ("ssconf.fetcher", "FetcherConfig"),
    "PinnedFetcher": ("ssconf.fetcher", "PinnedFetcher"),
    "fetch_config": ("ssconf.fetcher", "fetch_config"),
    "fetch_config_blocking": ("ssconf.fetcher", "fetch_config_blocking"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'ssconf' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
