"""
Certificate fingerprint pinning for the online config fetcher.

A pin is the standard base64 encoding (with padding) of the SHA-256 digest
of the server's leaf certificate, hashed over its DER bytes exactly as they
came off the wire. No normalization or re-encoding happens anywhere: two
byte-identical certificates always produce the same pin and nothing else
does.

Note:
    [PinnedCertificate][ssconf.utils.tls.PinnedCertificate] is the only
    place in ssconf where TLS chain verification is turned off. Handing an
    ``aiohttp.Fingerprint`` to a connector makes aiohttp handshake with an
    unverified context (no chain or hostname check) and then call
    ``check()`` on the fresh transport before a single request byte is
    written. The pin comparison replaces CA trust for this code path.

See Also:
    [PinnedFetcher][ssconf.fetcher.PinnedFetcher]: Builds one
        ``PinnedCertificate`` per fetch.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import aiohttp
from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding

from ssconf.core.exceptions import CertificateFingerprintError


if TYPE_CHECKING:
    import asyncio


logger = logging.getLogger("ssconf.tls")

FINGERPRINT_DIGEST_SIZE = hashlib.sha256().digest_size


def certificate_digest(der: bytes) -> bytes:
    """Return the raw SHA-256 digest of a DER-encoded certificate."""
    return hashlib.sha256(der).digest()


def compute_certificate_fingerprint(der: bytes) -> str:
    """Compute the pin of a DER-encoded certificate.

    Args:
        der: Certificate bytes exactly as presented during the handshake.

    Returns:
        Standard base64 (padded) of the SHA-256 digest, e.g.
        ``"IA3K+nZ8hFDs5kSHnAYqDN9SJA/gW7frKEYRw67z7C4="``.
    """
    return base64.b64encode(certificate_digest(der)).decode("ascii")


def decode_certificate_fingerprint(fingerprint: str) -> bytes:
    """Decode a base64 pin into the raw digest it stands for.

    Raises:
        CertificateFingerprintError: If the value is not strict standard
            base64 or does not decode to a 32-byte SHA-256 digest.
    """
    try:
        digest = base64.b64decode(fingerprint.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise CertificateFingerprintError(
            f"Certificate fingerprint is not valid base64: {fingerprint!r}",
            expected=fingerprint,
        ) from e
    if len(digest) != FINGERPRINT_DIGEST_SIZE:
        raise CertificateFingerprintError(
            f"Certificate fingerprint must be a SHA-256 digest "
            f"({FINGERPRINT_DIGEST_SIZE} bytes), got {len(digest)} bytes",
            expected=fingerprint,
        )
    return digest


class PinnedCertificate(aiohttp.Fingerprint):
    """aiohttp verification strategy that accepts exactly one leaf certificate.

    Each instance captures a single expected digest and nothing else, so
    concurrent fetches never share verification state.

    Examples:
        ```python
        pin = PinnedCertificate.from_base64("IA3K+nZ8hFDs5kSHnAYqDN9SJA/gW7frKEYRw67z7C4=")
        connector = aiohttp.TCPConnector(ssl=pin)
        ```
    """

    def __init__(self, fingerprint: bytes) -> None:
        super().__init__(fingerprint)
        self._digest = fingerprint

    @classmethod
    def from_base64(cls, fingerprint: str) -> PinnedCertificate:
        """Build a pin from its base64 form.

        Raises:
            CertificateFingerprintError: If *fingerprint* cannot be decoded.
        """
        return cls(decode_certificate_fingerprint(fingerprint))

    @property
    def expected(self) -> str:
        """The pinned fingerprint in base64 form."""
        return base64.b64encode(self._digest).decode("ascii")

    def check(self, transport: asyncio.Transport) -> None:
        """Compare the peer's leaf certificate against the pin.

        Called by the aiohttp connector right after the TLS handshake. The
        peer chain as exposed by ``ssl`` starts with the leaf, which is the
        only certificate hashed.

        Raises:
            aiohttp.ServerFingerprintMismatch: On mismatch, or when the
                transport carries no TLS session or certificate. The
                connector closes the transport before propagating it.
        """
        host, port = _peer(transport)
        ssl_object = transport.get_extra_info("ssl_object")
        der = ssl_object.getpeercert(binary_form=True) if ssl_object is not None else None
        if not der:
            raise aiohttp.ServerFingerprintMismatch(self._digest, b"", host, port)

        got = certificate_digest(der)
        if not hmac.compare_digest(got, self._digest):
            logger.debug(
                "certificate_pin_rejected host=%s port=%s expected=%s got=%s",
                host,
                port,
                self.expected,
                base64.b64encode(got).decode("ascii"),
            )
            raise aiohttp.ServerFingerprintMismatch(self._digest, got, host, port)


def _peer(transport: asyncio.Transport) -> tuple[str, int]:
    peername = transport.get_extra_info("peername")
    if peername:
        return str(peername[0]), int(peername[1])
    return "", 0


def load_certificate_der(path: str | Path) -> bytes:
    """Read a PEM or DER certificate file and return its DER bytes.

    Used to compute the pin an operator should publish for a server
    certificate. For PEM input only the first certificate (the leaf in a
    full-chain file) is returned.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file holds neither a PEM nor a DER certificate.
    """
    data = Path(path).read_bytes()
    if b"-----BEGIN CERTIFICATE-----" in data:
        cert = x509.load_pem_x509_certificate(data)
        return cert.public_bytes(Encoding.DER)
    x509.load_der_x509_certificate(data)
    return data
