"""Pytest configuration and shared fixtures for nrlogshipper tests."""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx
import pytest

from nrlogshipper import HandlerConfig, LogTransport


@pytest.fixture
def eu_license_key() -> str:
    """Return a license key carrying the EU region prefix."""
    return "eu01xx0123456789abcdef0123456789abcdNRAL"


@pytest.fixture
def us_license_key() -> str:
    """Return a license key without a region prefix."""
    return "0123456789abcdef0123456789abcdef01234567"


@pytest.fixture
def captured_requests() -> list[httpx.Request]:
    """Requests seen by the ``mock_http`` transport."""
    return []


@pytest.fixture
def mock_http(captured_requests: list[httpx.Request]) -> httpx.MockTransport:
    """An httpx transport that records requests and answers 202 Accepted."""

    def handler(request: httpx.Request) -> httpx.Response:
        captured_requests.append(request)
        return httpx.Response(202, json={"requestId": "test-request"})

    return httpx.MockTransport(handler)


@pytest.fixture
def transport(eu_license_key: str, mock_http: httpx.MockTransport) -> LogTransport:
    """A LogTransport wired to the recording mock transport."""
    return LogTransport(HandlerConfig(license_key=eu_license_key), http_transport=mock_http)


@pytest.fixture
def make_record() -> Callable[..., logging.LogRecord]:
    """Factory for LogRecords, with ``extra`` applied the way Logger does."""

    def _make(
        msg: str = "Test log message",
        level: int = logging.INFO,
        name: str = "app.test",
        args: tuple = (),
        exc_info=None,
        extra: dict | None = None,
    ) -> logging.LogRecord:
        record = logging.LogRecord(
            name=name,
            level=level,
            pathname=__file__,
            lineno=42,
            msg=msg,
            args=args,
            exc_info=exc_info,
        )
        for key, value in (extra or {}).items():
            setattr(record, key, value)
        return record

    return _make
