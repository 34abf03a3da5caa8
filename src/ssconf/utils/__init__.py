"""Helpers shared by the fetcher: bounded HTTP reads and certificate pinning.

Attributes:
    read_bounded: Read a response body with a hard size limit.
        See [read_bounded()][ssconf.utils.http.read_bounded].
    compute_certificate_fingerprint: Base64 SHA-256 pin of a DER certificate.
        See [compute_certificate_fingerprint()][ssconf.utils.tls.compute_certificate_fingerprint].
    PinnedCertificate: aiohttp verification strategy enforcing a pin.
        See [PinnedCertificate][ssconf.utils.tls.PinnedCertificate].
"""

from .http import read_bounded
from .tls import (
    PinnedCertificate,
    certificate_digest,
    compute_certificate_fingerprint,
    decode_certificate_fingerprint,
    load_certificate_der,
)


__all__ = [
    "PinnedCertificate",
    "certificate_digest",
    "compute_certificate_fingerprint",
    "decode_certificate_fingerprint",
    "load_certificate_der",
    "read_bounded",
]
