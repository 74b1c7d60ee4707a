"""
Structured logging with key=value and JSON output support.

Wraps the standard library ``logging`` module so client-level events are
emitted as an event name followed by structured fields, either as
human-readable key=value pairs (default) or as one JSON object per line.

The ``StructuredFormatter`` is a stdlib ``logging.Formatter`` that reads
structured data from the ``structured_kv`` extra field (attached by Logger)
and appends it as key=value pairs. Installed on the root handler by the CLI,
it unifies output from ``Logger`` and the plain ``logging.getLogger()`` calls
used in the ``mapi`` and ``utils`` layers.

Examples:
    ```python
    from minercraft.core.logger import Logger

    logger = Logger("client")
    logger.info("best_quote_started", miners=3, fee_type="standard")
    # Output: best_quote_started miners=3 fee_type=standard

    taal = logger.bind(miner="Taal")
    taal.warning("miner_request_failed", error="HTTP 503")
    # Output: miner_request_failed miner=Taal error="HTTP 503"
    ```
"""

from __future__ import annotations

import datetime
import json
import logging
from typing import Any, ClassVar


def format_kv_pairs(
    kwargs: dict[str, Any],
    max_value_length: int | None = 1000,
    prefix: str = " ",
) -> str:
    """Format a dictionary as space-separated key=value pairs.

    Values are truncated to ``max_value_length`` characters, and values
    containing whitespace, equals signs, or quotes are escaped and quoted.

    Args:
        kwargs: Key-value pairs to format.
        max_value_length: Maximum characters per value before truncation.
            Pass None to disable truncation.
        prefix: String prepended to the output (default: single space).

    Returns:
        Formatted string, e.g. ' key1=value1 key2="value with spaces"'.
        Returns empty string if kwargs is empty.
    """
    if not kwargs:
        return ""

    parts = []
    for k, v in kwargs.items():
        s = _truncate(str(v), max_value_length)
        if not s or " " in s or "=" in s or '"' in s or "'" in s:
            escaped = s.replace("\\", "\\\\").replace('"', '\\"')
            parts.append(f'{k}="{escaped}"')
        else:
            parts.append(f"{k}={s}")

    return prefix + " ".join(parts)


def _truncate(value: str, max_length: int | None) -> str:
    if max_length and len(value) > max_length:
        return value[:max_length] + f"...<truncated {len(value) - max_length} chars>"
    return value


class StructuredFormatter(logging.Formatter):
    """Formats all log records as ``level name message key=value ...``.

    Records without ``structured_kv`` (plain ``logging.getLogger()`` calls)
    are emitted with the same prefix and no trailing fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        base = f"{record.levelname.lower()} {record.name} {record.getMessage()}"
        extra: dict[str, Any] = getattr(record, "structured_kv", {})
        if extra:
            base += format_kv_pairs(extra)
        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)
        return base


class Logger:
    """Structured logger that appends keyword arguments as extra fields.

    All public methods mirror the standard logging API with an added
    ``**kwargs`` parameter. Fields given to ``bind()`` are prepended to every
    record emitted by the returned logger.
    """

    _DEFAULT_MAX_VALUE_LENGTH: ClassVar[int] = 1000

    def __init__(
        self,
        name: str,
        *,
        json_output: bool = False,
        max_value_length: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize a structured logger.

        Args:
            name: Logger name. Prefixed with ``minercraft.`` unless it already
                is, so records propagate through the package logger.
            json_output: If True, emit JSON objects instead of key=value pairs.
            max_value_length: Maximum character length for individual values
                before truncation. Defaults to 1000.
            context: Fields attached to every record.
        """
        if not name.startswith("minercraft"):
            name = f"minercraft.{name}"
        if max_value_length is None:
            max_value_length = self._DEFAULT_MAX_VALUE_LENGTH
        self._logger = logging.getLogger(name)
        self._json_output = json_output
        self._max_value_length = max_value_length
        self._context: dict[str, Any] = dict(context or {})

    @property
    def name(self) -> str:
        """Name of the underlying stdlib logger."""
        return self._logger.name

    def bind(self, **context: Any) -> Logger:
        """Return a logger sharing this one's output that always includes *context*."""
        return Logger(
            self._logger.name,
            json_output=self._json_output,
            max_value_length=self._max_value_length,
            context={**self._context, **context},
        )

    def _format_json(self, msg: str, level: str, fields: dict[str, Any]) -> str:
        record = {
            "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            "level": level,
            "logger": self._logger.name,
            "message": msg,
            **fields,
        }
        return json.dumps(record, default=str)

    def _log(self, level: int, msg: str, kwargs: dict[str, Any], *, exc_info: bool = False) -> None:
        if not self._logger.isEnabledFor(level):
            return
        fields = {**self._context, **kwargs}
        if self._json_output:
            line = self._format_json(msg, logging.getLevelName(level).lower(), fields)
            self._logger.log(level, line, exc_info=exc_info)
            return
        truncated = {
            k: _truncate(str(v), self._max_value_length) if not isinstance(v, int | float) else v
            for k, v in fields.items()
        }
        extra = {"structured_kv": truncated} if truncated else {}
        self._logger.log(level, msg, extra=extra, exc_info=exc_info)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log a DEBUG level message with optional key=value pairs."""
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log an INFO level message with optional key=value pairs."""
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log a WARNING level message with optional key=value pairs."""
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log an ERROR level message with optional key=value pairs."""
        self._log(logging.ERROR, msg, kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log an ERROR level message with the active exception's traceback."""
        self._log(logging.ERROR, msg, kwargs, exc_info=True)
