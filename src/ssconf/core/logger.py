"""
Structured event logging for ssconf.

Events are short snake_case names (``online_config_fetched``) with their
context passed as keyword fields, never interpolated into the message. The
fields travel on the ``LogRecord`` as ``structured_kv`` and are rendered by
[StructuredFormatter][ssconf.core.logger.StructuredFormatter] as
``key=value`` pairs, or the whole event is serialized as one JSON line when
a [Logger][ssconf.core.logger.Logger] is created with ``json_output=True``.

Every field passes through
[sanitize_fields][ssconf.core.logger.sanitize_fields] once, when the event
is logged. Online config documents are full of proxy passwords and plugin
options, and none of them belong in a log file.

Examples:
    ```python
    from ssconf.core.logger import Logger

    log = Logger("ssconf.fetcher")
    log.info("online_config_fetched", host="config.example.com", proxies=2)
    # info ssconf.fetcher online_config_fetched host=config.example.com proxies=2
    ```
"""

from __future__ import annotations

import datetime
import json
import logging
from typing import Any


MASK = "***"
SENSITIVE_KEYS: frozenset[str] = frozenset({"password", "plugin_opts", "passwd", "secret"})
DEFAULT_MAX_VALUE_LENGTH = 1000

# Characters that force a value to be quoted in key=value output.
_QUOTE_TRIGGERS = frozenset(" ='\"")


def mask_sensitive(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *kwargs* with credential-like values replaced by ``***``."""
    return {k: (MASK if k.lower() in SENSITIVE_KEYS else v) for k, v in kwargs.items()}


def _truncate(value: str, max_length: int) -> str:
    return value[:max_length] + f"...<truncated {len(value) - max_length} chars>"


def _render_value(text: str) -> str:
    if text and not _QUOTE_TRIGGERS.intersection(text):
        return text
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def sanitize_fields(
    kwargs: dict[str, Any],
    max_value_length: int | None = DEFAULT_MAX_VALUE_LENGTH,
) -> dict[str, Any]:
    """Mask credential-like fields, then truncate values whose string form is too long.

    Values within the limit keep their type, so JSON output still carries
    numbers as numbers.
    """
    fields = mask_sensitive(kwargs)
    for key, value in fields.items():
        text = str(value)
        if max_value_length and len(text) > max_value_length:
            fields[key] = _truncate(text, max_value_length)
    return fields


def format_kv_pairs(kwargs: dict[str, Any], prefix: str = " ") -> str:
    """Render already sanitized event fields as ``key=value`` pairs.

    Values that are empty or contain spaces, ``=`` or quotes are wrapped in
    double quotes. Masking and truncation are
    [sanitize_fields][ssconf.core.logger.sanitize_fields]'s job.

    Returns:
        ``prefix`` followed by the space-separated pairs, or ``""`` when
        there are no fields.
    """
    if not kwargs:
        return ""
    pairs = (f"{key}={_render_value(str(value))}" for key, value in kwargs.items())
    return prefix + " ".join(pairs)


class StructuredFormatter(logging.Formatter):
    """Render records as ``level logger event key=value ...``.

    Records emitted through plain ``logging.getLogger()`` in the lower layers
    carry no ``structured_kv`` and keep just the prefix, so CLI output reads
    the same whichever layer logged.
    """

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname.lower()} {record.name} {record.getMessage()}"
        fields: dict[str, Any] = getattr(record, "structured_kv", {})
        if fields:
            line += format_kv_pairs(fields)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class Logger:
    """Event logger whose keyword arguments become structured fields.

    Args:
        name: Name of the underlying ``logging.Logger``.
        json_output: Emit each event as a single JSON object.
        max_value_length: Truncate field values longer than this many
            characters (default 1000). ``0`` disables truncation.
    """

    def __init__(
        self,
        name: str,
        *,
        json_output: bool = False,
        max_value_length: int | None = None,
    ) -> None:
        self._logger = logging.getLogger(name)
        self._json_output = json_output
        self._max_value_length = (
            DEFAULT_MAX_VALUE_LENGTH if max_value_length is None else max_value_length
        )

    @property
    def name(self) -> str:
        return self._logger.name

    def _as_json(self, event: str, level: int, fields: dict[str, Any]) -> str:
        payload = {
            "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            "level": logging.getLevelName(level).lower(),
            "logger": self._logger.name,
            "message": event,
            **fields,
        }
        return json.dumps(payload, default=str)

    def _log(
        self, level: int, event: str, kwargs: dict[str, Any], *, exc_info: bool = False
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        fields = sanitize_fields(kwargs, self._max_value_length)
        if self._json_output:
            self._logger.log(level, self._as_json(event, level, fields), exc_info=exc_info)
        else:
            extra = {"structured_kv": fields} if fields else {}
            self._logger.log(level, event, extra=extra, exc_info=exc_info)

    def debug(self, event: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, event, kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        self._log(logging.INFO, event, kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, event, kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, event, kwargs)

    def critical(self, event: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, event, kwargs)

    def exception(self, event: str, **kwargs: Any) -> None:
        """Log at ERROR level with the active exception's traceback."""
        self._log(logging.ERROR, event, kwargs, exc_info=True)


def setup_logging(level: str = "INFO") -> None:
    """Install a [StructuredFormatter][ssconf.core.logger.StructuredFormatter] on the root logger.

    Calling it again replaces the handler installed by the previous call
    instead of stacking a second one.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, StructuredFormatter):
            root.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
