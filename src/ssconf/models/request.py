"""Input of a pinned online config fetch."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from ._validation import validate_str_not_empty


@dataclass(frozen=True, slots=True)
class FetchConfigRequest:
    """Immutable description of one online config fetch.

    Only structural checks happen here. The ``https`` scheme requirement
    and the decoding of the pin are enforced by
    [PinnedFetcher.fetch()][ssconf.fetcher.PinnedFetcher.fetch] so that a
    bad value always surfaces as a
    [FetchValidationError][ssconf.core.exceptions.FetchValidationError]
    before any socket is opened.

    Attributes:
        url: Location of the SIP008 document. Must use ``https``.
        certificate_fingerprint: Expected fingerprint of the server's leaf
            certificate: standard base64 of its SHA-256 digest.
        method: HTTP method, normalized to upper case. Defaults to ``GET``.

    Raises:
        TypeError: If a field is not a ``str``.
        ValueError: If a field is empty, contains null bytes, or ``method``
            is not a valid HTTP token.

    Examples:
        ```python
        request = FetchConfigRequest(
            url="https://127.0.0.1:9999/200",
            certificate_fingerprint="IA3K+nZ8hFDs5kSHnAYqDN9SJA/gW7frKEYRw67z7C4=",
        )
        request.method  # 'GET'
        ```
    """

    url: str
    certificate_fingerprint: str
    method: str = "GET"

    # RFC 9110 token characters
    _METHOD_TOKEN: ClassVar[re.Pattern[str]] = re.compile(r"[!#$%&'*+.^_`|~0-9A-Za-z-]+")

    def __post_init__(self) -> None:
        validate_str_not_empty(self.url, "url")
        validate_str_not_empty(self.certificate_fingerprint, "certificate_fingerprint")
        validate_str_not_empty(self.method, "method")
        if not self._METHOD_TOKEN.fullmatch(self.method):
            raise ValueError(f"method is not a valid HTTP method: {self.method!r}")
        object.__setattr__(self, "method", self.method.upper())
