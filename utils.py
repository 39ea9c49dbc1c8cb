# utils.py
import os
from datetime import date
from typing import List, Optional

import pandas as pd
from dotenv import load_dotenv

load_dotenv()

# Upstream endpoints (override via environment or .env)
CARBON_INTENSITY_API = os.getenv("CARBON_INTENSITY_API", "https://api.carbonintensity.org.uk").rstrip("/")
COVID_API = os.getenv("COVID_API", "https://api.coronavirus.data.gov.uk/generic").rstrip("/")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "3000"))

DATE_FORMAT = "%Y-%m-%d"


def _read_timeout(raw: Optional[str]) -> Optional[float]:
    """Unset or empty means wait forever, matching the upstream clients' contract."""
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


UPSTREAM_TIMEOUT = _read_timeout(os.getenv("UPSTREAM_TIMEOUT"))


def parse_date(value: str) -> date:
    """
    Parses a strict YYYY-MM-DD calendar date.
    Raises ValueError for anything else, including impossible days like 2020-02-30.
    """
    if not value or len(value) != 10:
        raise ValueError(f"not a YYYY-MM-DD date: {value!r}")
    return pd.to_datetime(value, format=DATE_FORMAT).date()


def days_between(start: date, end: date) -> List[str]:
    """Every calendar day from start to end inclusive, ascending, as YYYY-MM-DD."""
    return [day.strftime(DATE_FORMAT) for day in pd.date_range(start, end, freq="D")]
