"""Combine carbon intensity and covid banners for one region.

Validation is synchronous and runs to completion before any upstream call,
so a bad region or date never costs a request to either API.
"""
import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from clients import CarbonIntensityClient, CovidClient
from errors import InvalidDate, InvalidDateOrder, InvalidRegion, MissingDateBound
from models import AggregatedResponse, CovidFallback, RegionDescriptor
from regions import covid_regions, get_region
from utils import parse_date, days_between

logger = logging.getLogger(__name__)


# -----------------------------------
# Validation
# -----------------------------------
def resolve_region(key: str) -> RegionDescriptor:
    region = get_region(key)
    if region is None:
        raise InvalidRegion()
    return region


def _to_date(value: str) -> date:
    try:
        return parse_date(value)
    except ValueError:
        raise InvalidDate() from None


def validate_day(region_key: str, day: str) -> Tuple[RegionDescriptor, date]:
    region = resolve_region(region_key)
    return region, _to_date(day)


def validate_range(
    region_key: str, start: Optional[str], end: Optional[str]
) -> Tuple[RegionDescriptor, date, date]:
    region = resolve_region(region_key)

    if not start or not end:
        raise MissingDateBound()

    start_date, end_date = _to_date(start), _to_date(end)
    if start_date >= end_date:
        raise InvalidDateOrder()

    return region, start_date, end_date


# -----------------------------------
# Covid fallbacks
# -----------------------------------
def no_covid_capability(region_key: str) -> Dict[str, str]:
    message = f"no covid data available for {region_key}. data available for "
    message += ", ".join(covid_regions())
    return CovidFallback(error=message).model_dump()


def no_covid_data(region_key: str, start: str, end: Optional[str] = None) -> Dict[str, str]:
    if end is None:
        message = f"no data found for {region_key} on {start}"
    else:
        message = f"no data found for {region_key} between {start} and {end}"
    return CovidFallback(error=message).model_dump()


def _as_records(payload: Any) -> List[Any]:
    return payload if isinstance(payload, list) else [payload]


# -----------------------------------
# Aggregation
# -----------------------------------
async def aggregate_day(
    carbon_client: CarbonIntensityClient,
    covid_client: CovidClient,
    region_key: str,
    day: str,
) -> AggregatedResponse:
    region, parsed = validate_day(region_key, day)
    day = parsed.isoformat()
    logger.info("Aggregating %s on %s", region.key, day)

    carbon = await carbon_client.get_day(region, day)

    if not region.has_covid:
        return AggregatedResponse(carbon=carbon, covid=no_covid_capability(region.key))

    covid = await covid_client.get_banners(region, day)
    if isinstance(covid, list) and not covid:
        covid = no_covid_data(region.key, day)

    return AggregatedResponse(carbon=carbon, covid=covid)


async def fetch_covid_range(
    covid_client: CovidClient, region: RegionDescriptor, days: List[str]
) -> List[Any]:
    """
    One banner request per day, issued together.
    gather() returns results in argument order, so records stay in ascending
    day order. The first failing day propagates, the remaining requests are
    cancelled and nothing is returned.
    """
    tasks = [asyncio.ensure_future(covid_client.get_banners(region, day)) for day in days]
    try:
        per_day = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise

    records: List[Any] = []
    for payload in per_day:
        records.extend(_as_records(payload))
    return records


async def aggregate_range(
    carbon_client: CarbonIntensityClient,
    covid_client: CovidClient,
    region_key: str,
    start: Optional[str],
    end: Optional[str],
) -> AggregatedResponse:
    region, start_date, end_date = validate_range(region_key, start, end)
    start, end = start_date.isoformat(), end_date.isoformat()
    logger.info("Aggregating %s between %s and %s", region.key, start, end)

    carbon = await carbon_client.get_range(region, start, end)

    if not region.has_covid:
        return AggregatedResponse(carbon=carbon, covid=no_covid_capability(region.key))

    covid: Any = await fetch_covid_range(covid_client, region, days_between(start_date, end_date))
    if not covid:
        covid = no_covid_data(region.key, start, end)

    return AggregatedResponse(carbon=carbon, covid=covid)
