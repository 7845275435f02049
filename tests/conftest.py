"""Shared fixtures and stub detectors for the clouddetect test suite.

Stub detectors replace real provider probes so orchestrator tests control exactly
when and how each probe concludes. Provider tests stub ``requests.request`` so no
real network call is ever made.
"""

import asyncio
import json
from typing import Dict, Optional, Tuple, Union
from unittest.mock import MagicMock, patch

import pytest
import requests

from clouddetect.core.context import DetectionContext
from clouddetect.detectors import CloudDetector
from clouddetect.exceptions import ProbeError
from clouddetect.models import ProviderId


class StubDetector(CloudDetector):
    """Detector whose probe sleeps, optionally waits on a gate, then returns or raises."""

    def __init__(self, provider_id: ProviderId, result: bool = False, delay: float = 0.0,
                 error: Optional[BaseException] = None, gate: Optional[asyncio.Event] = None,
                 yield_first: bool = False):
        super().__init__(metadata_uri="http://stub.invalid", vendor_files=())
        self.provider_id = provider_id
        self.result = result
        self.delay = delay
        self.error = error
        self.gate = gate
        self.yield_first = yield_first
        self.calls = 0
        self.cancelled = False
        self.finished = False

    async def check_metadata_server(self, ctx: DetectionContext) -> bool:
        self.calls += 1
        try:
            if self.yield_first:
                await asyncio.sleep(0)
            if self.gate is not None:
                await self.gate.wait()
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        self.finished = True
        return self.result


class StubbornDetector(StubDetector):
    """Ignores cancellation and reports a positive anyway."""

    async def check_metadata_server(self, ctx: DetectionContext) -> bool:
        self.calls += 1
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            await asyncio.sleep(0.05)
        self.finished = True
        return True


def positive(provider_id: ProviderId, delay: float = 0.0) -> StubDetector:
    return StubDetector(provider_id, result=True, delay=delay)


def negative(provider_id: ProviderId, delay: float = 0.0) -> StubDetector:
    return StubDetector(provider_id, result=False, delay=delay)


def failing(provider_id: ProviderId, message: str = "connection refused", delay: float = 0.0) -> StubDetector:
    return StubDetector(provider_id, delay=delay, error=ProbeError(provider_id, message))


def make_response(status_code: int = 200, json_data=None, text: str = "",
                  headers: Optional[Dict[str, str]] = None) -> MagicMock:
    """Build a minimal mock requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.url = "http://metadata.test"
    resp.headers = headers or {}
    if json_data is not None:
        resp.json.return_value = json_data
        resp.text = json.dumps(json_data)
    else:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
        resp.text = text
    return resp


Route = Union[MagicMock, BaseException]


def route_requests(routes: Dict[Tuple[str, str], Route]):
    """side_effect for requests.request: look up (method, url); unknown routes refuse the connection."""

    def _request(method, url, headers=None, timeout=None):
        target = routes.get((method, url))
        if target is None:
            raise requests.exceptions.ConnectionError(f"Connection refused: {url}")
        if isinstance(target, BaseException):
            raise target
        return target

    return _request


@pytest.fixture
def mock_request():
    """Patch the HTTP collaborator's requests.request; tests set side_effect/return_value."""
    with patch("clouddetect.detectors.http_client.requests.request") as mocked:
        mocked.side_effect = requests.exceptions.ConnectionError("Connection refused")
        yield mocked


@pytest.fixture
def ctx() -> DetectionContext:
    return DetectionContext(2.0, observer=None)
