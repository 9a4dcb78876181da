"""Pytest configuration cho company_info tests."""

import threading

import pytest

from company_info.constants import ApiType, ResponseType
from company_info.exceptions import TransportError
from company_info.models import ApiConfig, HttpResponse
from company_info.transport import HttpTransport

MOF_BASE = "https://api.example.test"
METI_BASE = "https://meti.example.test"
NUMBER = "7000012050002"


class FakeTransport(HttpTransport):
    """
    HttpTransport giả: map URL (không gồm query) -> HttpResponse hoặc Exception.
    URL không có trong routes trả về 200 với body "{}".
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False
        self._lock = threading.Lock()

    def get(self, url, headers=None):
        with self._lock:
            self.calls.append((url, headers))
        route = self.routes.get(url.split("?", 1)[0], HttpResponse(200, b"{}"))
        if isinstance(route, Exception):
            raise route
        return route

    def close(self):
        self.closed = True

    @property
    def urls(self):
        return [url for url, _ in self.calls]


def json_response(body: str, status: int = 200) -> HttpResponse:
    return HttpResponse(status, body.encode("utf-8"), {"Content-Type": "application/json"})


def connection_refused(url: str) -> TransportError:
    return TransportError(message="Connection refused", url=url, original_error=ConnectionRefusedError())


@pytest.fixture
def mof_config():
    return ApiConfig(
        application_id="app-id-12345",
        version="4",
        response_type=ResponseType.XML_UNICODE,
        base_url=MOF_BASE,
        api_type=ApiType.MOF,
    )


@pytest.fixture
def meti_config():
    return ApiConfig(
        application_id="meti-token-abcdef",
        version="1",
        response_type=ResponseType.JSON,
        base_url=METI_BASE,
        api_type=ApiType.METI,
    )


@pytest.fixture
def fake_transport():
    return FakeTransport()
