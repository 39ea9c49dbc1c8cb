# errors.py
from typing import Any

from fastapi import HTTPException


class AggregationError(HTTPException):
    """Base for every failure this API reports; rendered by the handler in main.py."""

    status = 400

    def __init__(self, detail: Any):
        super().__init__(status_code=self.status, detail=detail)


class InvalidMethod(AggregationError):
    def __init__(self, method: str):
        super().__init__(f"Invalid request method {method}")


class InvalidRegion(AggregationError):
    def __init__(self):
        super().__init__("Invalid region")


class InvalidDate(AggregationError):
    def __init__(self):
        super().__init__("Invalid date, please enter in YYYY-MM-DD format")


class InvalidDateOrder(AggregationError):
    def __init__(self):
        super().__init__("Start date must be before end date")


class MissingDateBound(AggregationError):
    def __init__(self):
        super().__init__(
            "Start and end dates are required. If you're looking for data "
            "from just one day, perhaps try /regional/{region}/{date}?"
        )


class UpstreamError(AggregationError):
    """An upstream answered with a non-success status or could not be reached."""

    status = 500


class UpstreamCarbonError(UpstreamError):
    pass


class UpstreamCovidError(UpstreamError):
    pass
