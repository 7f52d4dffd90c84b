"""
Configuration for the New Relic log handler.

The handler never reads the environment on its own. Integrators build a
HandlerConfig directly or call ``HandlerConfig.from_env()`` at startup and
pass the result in.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Sent as the license key when none was configured
NO_LICENSE_KEY = "NO_LICENSE_KEY_FOUND"

DEFAULT_ENDPOINT = "log/v1"
DEFAULT_PROTOCOL = "https://"
DEFAULT_TIMEOUT = 5.0

LICENSE_KEY_ENV = "NEW_RELIC_LICENSE_KEY"
HOST_ENV = "NEW_RELIC_LOG_HOST"
VERIFY_TLS_ENV = "NEW_RELIC_LOG_VERIFY_TLS"

_TRUTHY = {"1", "true", "yes", "on"}


class HandlerConfig(BaseModel):
    """
    Settings shared by LogTransport and NewRelicLogHandler.

    Args:
        license_key: License key sent as ``X-License-Key``. Also selects the
            regional host when ``host`` is unset. None or empty becomes
            ``NO_LICENSE_KEY_FOUND``.
        host: Explicit Log API host. Overrides region derivation when set.
        endpoint: URL path appended to the host.
        protocol: URL scheme prefix.
        timeout: Seconds to wait for each POST.
        verify_tls: Verify the server certificate. Off by default to match the
            upstream New Relic agents; turn it on unless you are behind a
            TLS-intercepting proxy.
        batch_envelope: Wrap batch payloads as ``[{"logs": ...}]``. When False,
            batches are posted unwrapped.
    """

    model_config = ConfigDict(validate_assignment=True)

    license_key: str = NO_LICENSE_KEY
    host: str | None = None
    endpoint: str = DEFAULT_ENDPOINT
    protocol: str = DEFAULT_PROTOCOL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    verify_tls: bool = False
    batch_envelope: bool = True

    @field_validator("license_key", mode="before")
    @classmethod
    def _default_license_key(cls, value):
        if value is None or value == "":
            return NO_LICENSE_KEY
        return value

    @field_validator("host", mode="before")
    @classmethod
    def _blank_host_is_unset(cls, value):
        if value == "":
            return None
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "HandlerConfig":
        """
        Build a config from environment variables.

        Environment variables:
            NEW_RELIC_LICENSE_KEY: License key (optional, sentinel if missing)
            NEW_RELIC_LOG_HOST: Explicit Log API host (optional)
            NEW_RELIC_LOG_VERIFY_TLS: "1", "true", "yes" or "on" to verify TLS

        Args:
            environ: Mapping to read instead of ``os.environ``.
            **overrides: Field values that win over the environment.
        """
        env = os.environ if environ is None else environ

        values = {
            "license_key": env.get(LICENSE_KEY_ENV),
            "host": env.get(HOST_ENV),
        }
        verify = env.get(VERIFY_TLS_ENV)
        if verify is not None:
            values["verify_tls"] = verify.strip().lower() in _TRUTHY

        values.update(overrides)
        return cls(**values)
