"""Size-bounded HTTP body reads.

A server that passed the pin check is trusted to be who it claims, not to
be well behaved: it could still stream an endless "config document".

Note:
    Depends only on ``aiohttp``; importable from any layer above ``models``.
"""

from __future__ import annotations

import aiohttp


def _declared_length(response: aiohttp.ClientResponse) -> int | None:
    value = response.headers.get("Content-Length")
    if value and value.isdigit():
        return int(value)
    return None


async def read_bounded(response: aiohttp.ClientResponse, max_size: int) -> bytes:
    """Read the whole body of *response*, refusing more than *max_size* bytes.

    A declared ``Content-Length`` above the limit fails before anything is
    read. Otherwise the body is pulled in pieces, each request asking only
    for what is left of the budget plus one byte, so an oversize body is
    detected without buffering it. Chunked responses may return short reads,
    hence the loop.

    Raises:
        ValueError: If the body is larger than *max_size*.
    """
    declared = _declared_length(response)
    if declared is not None and declared > max_size:
        raise ValueError(f"Response body too large: {declared} > {max_size} bytes")

    body = bytearray()
    while piece := await response.content.read(max_size + 1 - len(body)):
        body += piece
        if len(body) > max_size:
            raise ValueError(f"Response body too large: >{max_size} bytes")
    return bytes(body)
