"""SIP008 online config document parsing and response decoding.

Implements the client side of
[SIP008](https://shadowsocks.org/doc/sip008.html): raw JSON is sanitized
through ``parse()`` methods and validated into frozen models. Invalid
fields or malformed server entries are dropped rather than raised, and
[decode_response][ssconf.sip008.decoder.decode_response] maps a whole HTTP
response onto a [FetchConfigResult][ssconf.models.result.FetchConfigResult].

Model hierarchy:

```text
Sip008Document                       Validated envelope
+-- version: int | None              Declared document version
+-- bytes_used / bytes_remaining     Optional usage counters
+-- servers: tuple[ProxyConfig]      Servers in document order
```
"""

from .decoder import ConfigDecoder, decode_response, get_header, is_redirect_status
from .document import Sip008Document
from .parsing import FieldSpec, missing_fields, parse_fields


__all__ = [
    "ConfigDecoder",
    "FieldSpec",
    "Sip008Document",
    "decode_response",
    "get_header",
    "is_redirect_status",
    "missing_fields",
    "parse_fields",
]
