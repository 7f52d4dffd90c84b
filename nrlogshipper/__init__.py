"""
nrlogshipper - Ship Python logs to the New Relic Log API.

This package provides:
- NewRelicLogHandler: logging.Handler that posts records to the Log API
- LogTransport: one best-effort HTTPS POST per record or batch
- resolve_default_host: regional host derived from a license key

Usage:
    from nrlogshipper import setup_logging

    handler = setup_logging(license_key="eu01xx...")

    import logging
    logger = logging.getLogger(__name__)
    logger.info("Service started")
"""

from .config import DEFAULT_ENDPOINT, NO_LICENSE_KEY, HandlerConfig
from .errors import InvalidLicenseKeyError, MissingExtensionError
from .handler import NewRelicFormatter, NewRelicLogHandler, from_env, setup_logging
from .region import DEFAULT_HOST, resolve_default_host
from .transport import LogTransport, SendResult

__all__ = [
    # Handler
    "NewRelicLogHandler",
    "NewRelicFormatter",
    "setup_logging",
    "from_env",
    # Transport
    "LogTransport",
    "SendResult",
    "resolve_default_host",
    # Config
    "HandlerConfig",
    "DEFAULT_ENDPOINT",
    "DEFAULT_HOST",
    "NO_LICENSE_KEY",
    # Errors
    "InvalidLicenseKeyError",
    "MissingExtensionError",
]

__version__ = "1.0.0"
