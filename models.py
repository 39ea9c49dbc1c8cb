# models.py
from pydantic import BaseModel, ConfigDict, PositiveInt, model_validator
from typing import Any, Literal, Optional


class RegionDescriptor(BaseModel):
    """
    One UK geography as known to both upstreams.
    The covid fields travel together: a region either has both or neither.
    """
    model_config = ConfigDict(frozen=True)

    key: str
    carbon_region_id: PositiveInt
    covid_region_type: Optional[Literal["Region", "Nation"]] = None
    covid_region_name: Optional[str] = None

    @model_validator(mode="after")
    def check_covid_pair(self):
        if (self.covid_region_type is None) != (self.covid_region_name is None):
            raise ValueError(
                f"{self.key}: covid_region_type and covid_region_name "
                "must both be set or both be omitted"
            )
        return self

    @property
    def has_covid(self) -> bool:
        return self.covid_region_type is not None


class AvailabilityEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    carbon: bool
    covid: bool


class CovidFallback(BaseModel):
    error: str


class AggregatedResponse(BaseModel):
    carbon: Any
    covid: Any
