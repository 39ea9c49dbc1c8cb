"""Pytest configuration and shared fixtures."""

import asyncio
from typing import Any, Dict, List, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from main import app, get_http_client
from utils import CARBON_INTENSITY_API

CARBON_HOST = httpx.URL(CARBON_INTENSITY_API).host

SAMPLE_CARBON = {
    "data": {
        "regionid": 13,
        "dnoregion": "UKPN London",
        "shortname": "London",
        "data": [
            {
                "from": "2020-05-01T00:00Z",
                "to": "2020-05-01T00:30Z",
                "intensity": {"forecast": 120, "index": "low"},
            }
        ],
    }
}


def banner(day: str, body: str = "Daily summary") -> Dict[str, Any]:
    return {"date": day, "type": "Daily Summary", "body": body}


class FakeUpstreams:
    """Serves both upstream APIs from memory and records every request."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.carbon: Tuple[int, Any] = (200, SAMPLE_CARBON)
        self.covid_days: Dict[str, Tuple[int, Any]] = {}
        self.covid_delays: Dict[str, float] = {}
        self.answered: List[str] = []
        self.cancelled: List[str] = []

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == CARBON_HOST:
            status, body = self.carbon
            return httpx.Response(status, json=body)

        parts = request.url.path.split("/")
        day = parts[parts.index("log_banners") + 1]
        try:
            await asyncio.sleep(self.covid_delays.get(day, 0))
        except asyncio.CancelledError:
            self.cancelled.append(day)
            raise
        self.answered.append(day)
        status, body = self.covid_days.get(day, (200, []))
        return httpx.Response(status, json=body)

    @property
    def carbon_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == CARBON_HOST]

    @property
    def covid_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host != CARBON_HOST]


@pytest.fixture
def upstreams():
    """In-memory stand-in for the carbon intensity and covid APIs."""
    return FakeUpstreams()


@pytest.fixture
def client(upstreams):
    """Test client whose upstream calls are answered by `upstreams`."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(upstreams.handler))
    app.dependency_overrides[get_http_client] = lambda: http
    yield TestClient(app)
    app.dependency_overrides.clear()
