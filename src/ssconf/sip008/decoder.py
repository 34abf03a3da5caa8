"""
Turn a trusted HTTP response into a
[FetchConfigResult][ssconf.models.result.FetchConfigResult].

[decode_response][ssconf.sip008.decoder.decode_response] is a total
function: a redirect, an error status or an unusable body are expected
outcomes of the online config protocol, so they are encoded in the result
instead of being raised. Only the fetcher decides what is an error, and it
does so before this module is ever reached.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import TYPE_CHECKING

from ssconf.models.constants import SIP008_VERSION
from ssconf.models.result import FetchConfigResult

from .document import Sip008Document


if TYPE_CHECKING:
    from collections.abc import Mapping


logger = logging.getLogger("ssconf.sip008")


def is_redirect_status(status: int) -> bool:
    """Return True for any 3xx status code."""
    return 300 <= status < 400


def get_header(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup that works on plain dicts too.

    Returns:
        The stripped header value, or ``None`` when the header is absent,
        blank, or contains characters that cannot appear in a URL.
    """
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() != wanted:
            continue
        value = value.strip()
        if value and "\x00" not in value:
            return value
    return None


def decode_response(
    status: int,
    headers: Mapping[str, str],
    body: bytes,
) -> FetchConfigResult:
    """Decode a response from a pinned online config server.

    * 3xx with a ``Location`` header: ``redirect_url`` is set and the body is
      not looked at.
    * 200 whose body is a SIP008 document: ``proxies`` lists its servers in
      document order.
    * Anything else: the literal status with no redirect and no proxies.

    Args:
        status: HTTP status code of the response.
        headers: Response headers.
        body: Complete response body.

    Returns:
        The decoded result. This function does not raise for any response
        content.
    """
    if is_redirect_status(status):
        location = get_header(headers, "Location")
        if location is None:
            logger.debug("sip008_redirect_without_location status=%s", status)
            return FetchConfigResult(status)
        return FetchConfigResult(status, redirect_url=location)

    if status != HTTPStatus.OK:
        return FetchConfigResult(status)

    try:
        document = Sip008Document.from_json(body)
    except (ValueError, RecursionError) as e:
        logger.debug("sip008_decode_failed size=%s error=%s", len(body), e)
        return FetchConfigResult(status)

    if document.version is not None and document.version != SIP008_VERSION:
        logger.debug("sip008_unexpected_version version=%s", document.version)

    return FetchConfigResult(status, proxies=document.servers)


class ConfigDecoder:
    """Object form of [decode_response][ssconf.sip008.decoder.decode_response].

    Lets callers inject a different decoder into
    [PinnedFetcher][ssconf.fetcher.PinnedFetcher], e.g. in tests.
    """

    def decode(
        self,
        status: int,
        headers: Mapping[str, str],
        body: bytes,
    ) -> FetchConfigResult:
        return decode_response(status, headers, body)
