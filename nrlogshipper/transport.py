"""
HTTP transport for the New Relic Log API.

Each call makes exactly one POST and reports the outcome as a SendResult.
Network errors, timeouts and non-2xx responses never propagate to the caller:
log shipping must not break the application that is logging.
"""

import logging
from dataclasses import dataclass

from .config import HandlerConfig
from .errors import MissingExtensionError
from .region import resolve_default_host

try:
    import httpx

    HTTPX_AVAILABLE = True
except ImportError:
    httpx = None
    HTTPX_AVAILABLE = False

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendResult:
    """Outcome of a single POST to the Log API."""

    ok: bool
    status_code: int | None = None
    error: str | None = None

    def __bool__(self) -> bool:
        return self.ok


class LogTransport:
    """
    Posts pre-serialized JSON log payloads to the New Relic Log API.

    The transport does not validate or build JSON; callers hand it strings
    produced by a formatter.
    """

    def __init__(self, config: HandlerConfig | None = None, *, http_transport=None):
        """
        Initialize the transport.

        Args:
            config: Handler settings (defaults to HandlerConfig())
            http_transport: Optional httpx transport, e.g. ``httpx.MockTransport``

        Raises:
            MissingExtensionError: If httpx is not installed.
        """
        if not HTTPX_AVAILABLE:
            raise MissingExtensionError("The httpx package is required to use this handler")

        self.config = config or HandlerConfig()
        self._http_transport = http_transport

    def set_license_key(self, key: str | None):
        """Set the license key. None or empty falls back to the sentinel key."""
        self.config.license_key = key

    def set_host(self, host: str):
        """
        Set the Log API host, e.g. ``log-api.eu.newrelic.com``.

        An explicit host wins over the region encoded in the license key.
        """
        self.config.host = host

    def resolve_host(self, license_key: str | None = None) -> str:
        """Return the explicit host, or the one derived from the license key."""
        if self.config.host is not None:
            return self.config.host
        if license_key is None:
            license_key = self.config.license_key
        return resolve_default_host(license_key)

    def build_url(self, license_key: str | None = None) -> str:
        return f"{self.config.protocol}{self.resolve_host(license_key)}/{self.config.endpoint}"

    @property
    def headers(self) -> dict[str, str]:
        return self._headers(self.config.license_key)

    @staticmethod
    def _headers(license_key: str) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-License-Key": license_key,
        }

    def send(self, payload: str) -> SendResult:
        """
        POST a single JSON-formatted log record.

        Args:
            payload: JSON string, sent as the request body unchanged

        Returns:
            SendResult describing the attempt. Never raises for network or
            server failures.
        """
        return self._post(payload)

    def send_batch(self, payload: str) -> SendResult:
        """
        POST a JSON array of log records.

        With ``batch_envelope`` enabled the array is wrapped in the Log API
        detailed format ``[{"logs": <payload>}]``.
        """
        if self.config.batch_envelope:
            payload = '[{"logs":' + payload + "}]"
        return self._post(payload)

    def _client(self) -> "httpx.Client":
        kwargs = {"timeout": self.config.timeout, "verify": self.config.verify_tls}
        if self._http_transport is not None:
            kwargs["transport"] = self._http_transport
        return httpx.Client(**kwargs)

    def _post(self, payload: str) -> SendResult:
        # URL and header must come from the same key
        license_key = self.config.license_key
        url = self.build_url(license_key)
        headers = self._headers(license_key)

        try:
            with self._client() as client:
                response = client.post(url, content=payload.encode("utf-8"), headers=headers)

            if response.is_success:
                return SendResult(ok=True, status_code=response.status_code)

            error_msg = f"HTTP {response.status_code}: {response.reason_phrase}"
            logger.debug(f"Log API rejected payload at {url}: {error_msg}")
            return SendResult(ok=False, status_code=response.status_code, error=error_msg)

        except httpx.TimeoutException as e:
            error_msg = f"Timed out after {self.config.timeout}s: {e}"
        except Exception as e:
            error_msg = str(e) or type(e).__name__

        logger.debug(f"Failed to ship logs to {url}: {error_msg}")
        return SendResult(ok=False, error=error_msg)
