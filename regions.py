"""Region registry: carbon-intensity region ids and, where published, the
matching coronavirus dashboard area for each UK geography.

Carbon ids follow https://carbon-intensity.github.io/api-definitions/#region-list.
Scottish and Welsh sub-regions and southEngland have no dashboard equivalent.
"""
from types import MappingProxyType
from typing import List, Mapping, Optional

from models import AvailabilityEntry, RegionDescriptor

_REGION_TABLE = {
    "northScotland": {"carbon_region_id": 1},
    "southScotland": {"carbon_region_id": 2},
    "northWestEngland": {
        "carbon_region_id": 3,
        "covid_region_type": "Region",
        "covid_region_name": "North West",
    },
    "northEastEngland": {
        "carbon_region_id": 4,
        "covid_region_type": "Region",
        "covid_region_name": "North East",
    },
    "yorkshire": {
        "carbon_region_id": 5,
        "covid_region_type": "Region",
        "covid_region_name": "Yorkshire and The Humber",
    },
    "northWales": {"carbon_region_id": 6},
    "southWales": {"carbon_region_id": 7},
    "westMidlands": {
        "carbon_region_id": 8,
        "covid_region_type": "Region",
        "covid_region_name": "West Midlands",
    },
    "eastMidlands": {
        "carbon_region_id": 9,
        "covid_region_type": "Region",
        "covid_region_name": "East Midlands",
    },
    "eastEngland": {
        "carbon_region_id": 10,
        "covid_region_type": "Region",
        "covid_region_name": "East of England",
    },
    "southWestEngland": {
        "carbon_region_id": 11,
        "covid_region_type": "Region",
        "covid_region_name": "South West",
    },
    "southEngland": {"carbon_region_id": 12},
    "london": {
        "carbon_region_id": 13,
        "covid_region_type": "Region",
        "covid_region_name": "London",
    },
    "southEastEngland": {
        "carbon_region_id": 14,
        "covid_region_type": "Region",
        "covid_region_name": "South East",
    },
    "england": {
        "carbon_region_id": 15,
        "covid_region_type": "Nation",
        "covid_region_name": "England",
    },
    "scotland": {
        "carbon_region_id": 16,
        "covid_region_type": "Nation",
        "covid_region_name": "Scotland",
    },
    "wales": {
        "carbon_region_id": 17,
        "covid_region_type": "Nation",
        "covid_region_name": "Wales",
    },
}

REGIONS: Mapping[str, RegionDescriptor] = MappingProxyType({
    key: RegionDescriptor(key=key, **fields) for key, fields in _REGION_TABLE.items()
})

# Built once at import; handlers only read it.
AVAILABILITY: Mapping[str, AvailabilityEntry] = MappingProxyType({
    key: AvailabilityEntry(carbon=region.carbon_region_id is not None, covid=region.has_covid)
    for key, region in REGIONS.items()
})


def get_region(key: str) -> Optional[RegionDescriptor]:
    return REGIONS.get(key)


def covid_regions() -> List[str]:
    """Keys of every region the coronavirus dashboard reports on, in registry order."""
    return [key for key, region in REGIONS.items() if region.has_covid]
