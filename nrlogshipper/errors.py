"""
Exceptions raised by nrlogshipper.

Only configuration and construction problems raise. Failures while shipping a
record are reported through ``SendResult`` instead.
"""


class MissingExtensionError(RuntimeError):
    """Raised when the HTTP client library needed to ship logs is not installed."""


class InvalidLicenseKeyError(TypeError):
    """Raised when a license key that is not a string reaches host resolution."""
