# main.py
import logging
from contextlib import asynccontextmanager
from typing import Dict

import httpx
import uvicorn
from fastapi import FastAPI, Request, Depends
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from aggregation import aggregate_day, aggregate_range
from clients import CarbonIntensityClient, CovidClient
from errors import AggregationError, InvalidMethod
from models import AggregatedResponse, AvailabilityEntry
from regions import AVAILABILITY
from utils import CARBON_INTENSITY_API, COVID_API, LOG_LEVEL, PORT, UPSTREAM_TIMEOUT

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


# -----------------------------------
# Shared upstream HTTP client
# -----------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.http_client = httpx.AsyncClient(timeout=UPSTREAM_TIMEOUT)
    logger.info("Upstream client ready (carbon=%s, covid=%s)", CARBON_INTENSITY_API, COVID_API)
    yield
    await app.state.http_client.aclose()
    logger.info("Upstream client closed")


# -----------------------------------
# FastAPI app
# -----------------------------------
app = FastAPI(
    title="Regional Carbon & COVID API",
    description=(
        "Combines regional carbon intensity readings from the National Grid "
        "Carbon Intensity API with COVID-19 daily summary banners from the "
        "UK coronavirus dashboard, for a region and a date or date range."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

# -----------------------------------
# CORS
# -----------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Common verbs reach verify_method; anything else is turned into InvalidMethod
# by the 405 handler below.
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def verify_method(request: Request):
    if request.method != "GET":
        raise InvalidMethod(request.method)


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_carbon_client(http: httpx.AsyncClient = Depends(get_http_client)) -> CarbonIntensityClient:
    return CarbonIntensityClient(http)


def get_covid_client(http: httpx.AsyncClient = Depends(get_http_client)) -> CovidClient:
    return CovidClient(http)


# -----------------------------------
# Error responses
# -----------------------------------
@app.exception_handler(AggregationError)
async def aggregation_error_handler(request: Request, exc: AggregationError):
    """Messages go out as plain text, upstream error payloads as JSON."""
    if isinstance(exc.detail, str):
        return PlainTextResponse(exc.detail, status_code=exc.status_code)
    return JSONResponse(exc.detail, status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return await aggregation_error_handler(request, InvalidMethod(request.method))
    return await http_exception_handler(request, exc)


# -----------------------------------
# HOME
# -----------------------------------
@app.api_route(
    "/",
    methods=ALL_METHODS,
    response_class=PlainTextResponse,
    tags=["Overview"],
    dependencies=[Depends(verify_method)]
)
def hello():
    return "hello! try /data_availability or /regional/{region}/{date}"


# -----------------------------------
# REGIONAL DATA
# -----------------------------------
@app.api_route(
    "/regional/{region}/{date}",
    methods=ALL_METHODS,
    response_model=AggregatedResponse,
    tags=["Regional Data"],
    dependencies=[Depends(verify_method)]
)
async def regional_day(
    region: str,
    date: str,
    carbon_client: CarbonIntensityClient = Depends(get_carbon_client),
    covid_client: CovidClient = Depends(get_covid_client),
):
    """
    Carbon intensity for the 24 hours starting at `date` (YYYY-MM-DD), plus
    that day's covid summary banners where the region has them.
    """
    return await aggregate_day(carbon_client, covid_client, region, date)


@app.api_route(
    "/regional/{region}/{start}/{end}",
    methods=ALL_METHODS,
    response_model=AggregatedResponse,
    tags=["Regional Data"],
    dependencies=[Depends(verify_method)]
)
async def regional_range(
    region: str,
    start: str,
    end: str,
    carbon_client: CarbonIntensityClient = Depends(get_carbon_client),
    covid_client: CovidClient = Depends(get_covid_client),
):
    """
    Carbon intensity between `start` and `end`, plus covid summary banners for
    every day in between (inclusive). `start` must be strictly before `end`.
    """
    return await aggregate_range(carbon_client, covid_client, region, start, end)


# -----------------------------------
# DATA AVAILABILITY
# -----------------------------------
@app.api_route(
    "/data_availability",
    methods=ALL_METHODS,
    response_model=Dict[str, AvailabilityEntry],
    tags=["Regions"],
    dependencies=[Depends(verify_method)]
)
def data_availability():
    return dict(AVAILABILITY)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
