"""
Ingestion host resolution for the New Relic Log API.

License keys issued outside the US carry a region prefix: two or three
lowercase letters, two digits, then a literal ``x`` (e.g. ``eu01x...``).
The letters select the regional ingestion host. Keys without the prefix
go to the US endpoint.
"""

import re

from .errors import InvalidLicenseKeyError

DEFAULT_HOST = "log-api.newrelic.com"

REGION_PATTERN = re.compile(r"^([a-z]{2,3})[0-9]{2}x")


def region_from_license_key(license_key: str) -> str | None:
    """Return the region code embedded in a license key, or None for US keys."""
    if not isinstance(license_key, str):
        raise InvalidLicenseKeyError(
            f"Unknown license key of type {type(license_key).__name__}"
        )

    match = REGION_PATTERN.match(license_key)
    if match is None:
        return None
    return match.group(1)


def resolve_default_host(license_key: str) -> str:
    """
    Derive the Log API host for a license key.

    Args:
        license_key: The New Relic license key.

    Returns:
        ``log-api.<region>.newrelic.com`` for region-prefixed keys,
        ``log-api.newrelic.com`` otherwise (including the empty string).

    Raises:
        InvalidLicenseKeyError: If license_key is not a string.
    """
    region = region_from_license_key(license_key)
    if region is None:
        return DEFAULT_HOST
    return f"log-api.{region}.newrelic.com"
