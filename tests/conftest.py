"""Shared pytest fixtures and configuration."""

import pytest
from loguru import logger


class FakeGateway:
    """
    Records gateway calls and answers from a method -> response table.

    A response may be a value, an exception instance (raised), or a
    callable taking ``params``.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def __call__(self, method, params=None):
        self.calls.append((method, params))
        if method not in self.responses:
            raise RuntimeError(f"unexpected gateway method: {method}")
        response = self.responses[method]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(params)
        return response

    def methods(self):
        return [method for method, _ in self.calls]


@pytest.fixture
def fake_gateway():
    """A FakeGateway with no canned responses."""
    return FakeGateway()


@pytest.fixture
def studio_directory():
    """Two canvas nodes, only the Mac connected."""
    return {
        "nodes": [
            {
                "nodeId": "mac-123",
                "displayName": "Studio Mac",
                "platform": "macos",
                "remoteIp": "10.0.0.5",
                "connected": True,
                "caps": ["canvas"],
            },
            {"nodeId": "pc-7", "connected": False, "caps": ["canvas"]},
        ]
    }


@pytest.fixture(autouse=True)
def _clean_gateway_env(monkeypatch):
    """Keep developer environment variables out of the tests."""
    for key in ("NODEGATE_GATEWAY_URL", "NODEGATE_GATEWAY_TOKEN", "NODEGATE_TIMEOUT_MS"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop sinks bound to CliRunner's captured streams after each test."""
    yield
    logger.remove()
