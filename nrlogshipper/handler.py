"""
Python logging integration for the New Relic Log API.

Usage:
    from nrlogshipper import setup_logging

    # Option 1: attach to the root logger (recommended)
    setup_logging(license_key="eu01xx...")

    import logging
    logger = logging.getLogger(__name__)
    logger.info("Payment processed", extra={"user_id": "u123", "amount": 99.99})

    # Option 2: configure from the environment
    from nrlogshipper import from_env
    logging.getLogger().addHandler(from_env())

    # Option 3: ship a batch of records in one request
    handler = NewRelicLogHandler(config=HandlerConfig(license_key="..."))
    handler.handle_batch(records)
"""

import json
import logging
import math
from collections.abc import Iterable

from .config import HandlerConfig
from .transport import LogTransport, SendResult

# Attributes every LogRecord has; anything else came in through ``extra``
_RECORD_ATTRIBUTES = frozenset(
    (
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
        "asctime",
    )
)

# Loggers whose records would feed back into the handler that produced them
_INTERNAL_LOGGERS = ("nrlogshipper", "httpx", "httpcore")


def _extra_attributes(record: logging.LogRecord) -> dict:
    """Collect JSON-serializable ``extra`` attributes from a record."""
    attributes = {}
    for key, value in record.__dict__.items():
        if key in _RECORD_ATTRIBUTES or key.startswith("_"):
            continue
        if isinstance(value, float) and not math.isfinite(value):
            # NaN and Infinity are not valid JSON
            continue
        if isinstance(value, str | int | float | bool | type(None)):
            attributes[key] = value
        elif isinstance(value, list | dict):
            try:
                json.dumps(value, allow_nan=False)
                attributes[key] = value
            except (TypeError, ValueError):
                pass
    return attributes


class NewRelicFormatter(logging.Formatter):
    """
    Formats records as New Relic Log API JSON objects.

    Produces ``message``, ``timestamp`` (epoch milliseconds), ``log.level``,
    ``logger.name``, ``thread.name`` and ``process.id``, the ``error.*``
    attributes when the record carries an exception, and any serializable
    ``extra`` attributes.
    """

    def to_dict(self, record: logging.LogRecord) -> dict:
        entry = {
            "message": record.getMessage(),
            "timestamp": int(record.created * 1000),
            "log.level": record.levelname,
            "logger.name": record.name,
            "thread.name": record.threadName,
            "process.id": record.process,
        }

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry["error.class"] = exc_type.__name__
            entry["error.message"] = str(exc_value)
            entry["error.stack"] = self.formatException(record.exc_info)
        elif record.stack_info:
            entry["error.stack"] = self.formatStack(record.stack_info)

        for key, value in _extra_attributes(record).items():
            entry.setdefault(key, value)

        return entry

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self.to_dict(record), default=str)

    def format_batch(self, records: Iterable[logging.LogRecord]) -> str:
        """Format records as a JSON array."""
        return json.dumps([self.to_dict(record) for record in records], default=str)


class _DropInternalRecords(logging.Filter):
    """Reject records emitted by the transport and its HTTP client."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not any(
            record.name == prefix or record.name.startswith(prefix + ".")
            for prefix in _INTERNAL_LOGGERS
        )


class NewRelicLogHandler(logging.Handler):
    """
    Logging handler that ships records to the New Relic Log API.

    Each record is posted synchronously in its own request. Delivery is best
    effort: failures are recorded in ``last_result`` and never raised.
    """

    def __init__(
        self,
        level: int | str = logging.NOTSET,
        *,
        config: HandlerConfig | None = None,
        transport: LogTransport | None = None,
    ):
        """
        Initialize the handler.

        Args:
            level: Minimum level to ship
            config: Handler settings, ignored when ``transport`` is given
            transport: Pre-built LogTransport

        Raises:
            MissingExtensionError: If httpx is not installed.
        """
        super().__init__(level=level)
        self.transport = transport if transport is not None else LogTransport(config)
        self.last_result: SendResult | None = None
        self.setFormatter(NewRelicFormatter())
        self.addFilter(_DropInternalRecords())

    @property
    def config(self) -> HandlerConfig:
        return self.transport.config

    def set_license_key(self, key: str | None):
        self.transport.set_license_key(key)

    def set_host(self, host: str):
        self.transport.set_host(host)

    def emit(self, record: logging.LogRecord):
        """Format and ship one record."""
        try:
            payload = self.format(record)
            self.last_result = self.transport.send(payload)
        except Exception:
            self.handleError(record)

    def handle_batch(self, records: Iterable[logging.LogRecord]) -> SendResult | None:
        """
        Ship several records in a single request.

        Records below the handler level or rejected by its filters are skipped.
        Returns None when nothing was left to send.
        """
        accepted = [r for r in records if r.levelno >= self.level and self.filter(r)]
        if not accepted:
            return None

        self.acquire()
        try:
            formatter = self.formatter
            if isinstance(formatter, NewRelicFormatter):
                payload = formatter.format_batch(accepted)
            else:
                payload = "[" + ",".join(self.format(r) for r in accepted) + "]"
            self.last_result = self.transport.send_batch(payload)
        except Exception:
            self.handleError(accepted[0])
            return None
        finally:
            self.release()

        return self.last_result


def setup_logging(
    license_key: str | None = None,
    host: str | None = None,
    level: int = logging.INFO,
    logger: logging.Logger | None = None,
    also_console: bool = False,
    **config_kwargs,
) -> NewRelicLogHandler:
    """
    Attach a NewRelicLogHandler to a logger.

    Call once at startup; existing logging calls are then shipped as-is.

    Args:
        license_key: New Relic license key
        host: Explicit Log API host (derived from the key when omitted)
        level: Minimum log level to ship
        logger: Logger to attach to (default: root logger)
        also_console: Also log to the console
        **config_kwargs: Additional HandlerConfig fields

    Returns:
        The installed handler (for ``last_result`` and reconfiguration)
    """
    config = HandlerConfig(license_key=license_key, host=host, **config_kwargs)
    handler = NewRelicLogHandler(level=level, config=config)

    target = logger or logging.getLogger()
    target.addHandler(handler)

    if also_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        target.addHandler(console_handler)

    if target.level == logging.NOTSET:
        target.setLevel(level)

    return handler


def from_env(level: int = logging.INFO) -> NewRelicLogHandler:
    """
    Create a NewRelicLogHandler from environment variables.

    See ``HandlerConfig.from_env`` for the variables read.
    """
    return NewRelicLogHandler(level=level, config=HandlerConfig.from_env())
