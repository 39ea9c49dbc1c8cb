"""Thin async clients for the two upstream APIs.

Both share one httpx.AsyncClient owned by the app lifespan. Payloads are
returned as decoded JSON and never reshaped.
"""
import logging
from typing import Any, Type

import httpx

from errors import UpstreamCarbonError, UpstreamCovidError, UpstreamError
from models import RegionDescriptor
from utils import CARBON_INTENSITY_API, COVID_API

logger = logging.getLogger(__name__)


def _error_payload(response: httpx.Response) -> Any:
    """The upstream's `error` field when it sent one, otherwise its raw body."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "error" in body:
        return body["error"]
    return body


class UpstreamClient:
    name = "upstream"
    error: Type[UpstreamError] = UpstreamError

    def __init__(self, http: httpx.AsyncClient, base_url: str):
        self.http = http
        self.base_url = base_url.rstrip("/")

    async def _get(self, path: str, **kwargs) -> Any:
        """Perform a GET request with shared error handling."""
        url = f"{self.base_url}{path}"
        logger.debug("%s GET %s", self.name, url)
        try:
            response = await self.http.get(url, **kwargs)
        except httpx.RequestError as exc:
            logger.error("%s request error: %s", self.name, exc)
            raise self.error(f"{self.name} service unavailable") from exc

        if not response.is_success:
            payload = _error_payload(response)
            logger.warning("%s returned %s for %s: %s", self.name, response.status_code, url, payload)
            raise self.error(payload)

        return response.json()


class CarbonIntensityClient(UpstreamClient):
    """UK carbon intensity API: https://api.carbonintensity.org.uk/"""

    name = "carbon intensity"
    error = UpstreamCarbonError

    def __init__(self, http: httpx.AsyncClient, base_url: str = CARBON_INTENSITY_API):
        super().__init__(http, base_url)

    async def fetch(self, path: str) -> Any:
        return await self._get(path, headers={"Accept": "application/json"})

    async def get_day(self, region: RegionDescriptor, day: str) -> Any:
        return await self.fetch(
            f"/regional/intensity/{day}/pt24h/regionid/{region.carbon_region_id}"
        )

    async def get_range(self, region: RegionDescriptor, start: str, end: str) -> Any:
        return await self.fetch(
            f"/regional/intensity/{start}/{end}/regionid/{region.carbon_region_id}"
        )


class CovidClient(UpstreamClient):
    """Coronavirus dashboard generic API (log banners)."""

    name = "covid"
    error = UpstreamCovidError

    def __init__(self, http: httpx.AsyncClient, base_url: str = COVID_API):
        super().__init__(http, base_url)

    async def get_banners(self, region: RegionDescriptor, day: str) -> Any:
        return await self._get(
            f"/log_banners/{day}/Daily Summary/"
            f"{region.covid_region_type}/{region.covid_region_name}"
        )
