"""Tests for the region registry and the availability index."""

import pytest
from pydantic import ValidationError

from models import RegionDescriptor
from regions import AVAILABILITY, REGIONS, covid_regions, get_region


class TestRegistry:

    def test_seventeen_regions_with_unique_carbon_ids(self):
        ids = [region.carbon_region_id for region in REGIONS.values()]
        assert len(REGIONS) == 17
        assert sorted(ids) == list(range(1, 18))

    def test_covid_fields_travel_together(self):
        for region in REGIONS.values():
            assert (region.covid_region_type is None) == (region.covid_region_name is None)

    def test_lookup(self):
        london = get_region("london")
        assert london.carbon_region_id == 13
        assert london.covid_region_type == "Region"
        assert london.covid_region_name == "London"
        assert get_region("atlantis") is None

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            REGIONS["atlantis"] = REGIONS["london"]
        with pytest.raises(ValidationError):
            REGIONS["london"].carbon_region_id = 99

    def test_covid_regions_in_registry_order(self):
        keys = covid_regions()
        assert keys[0] == "northWestEngland"
        assert keys[-1] == "wales"
        assert "northScotland" not in keys
        assert len(keys) == 12


class TestRegionDescriptor:

    def test_half_covid_mapping_rejected(self):
        with pytest.raises(ValidationError):
            RegionDescriptor(key="bad", carbon_region_id=1, covid_region_type="Region")
        with pytest.raises(ValidationError):
            RegionDescriptor(key="bad", carbon_region_id=1, covid_region_name="Somewhere")

    def test_unknown_region_type_rejected(self):
        with pytest.raises(ValidationError):
            RegionDescriptor(
                key="bad", carbon_region_id=1,
                covid_region_type="County", covid_region_name="Kent",
            )

    def test_carbon_id_must_be_positive(self):
        with pytest.raises(ValidationError):
            RegionDescriptor(key="bad", carbon_region_id=0)


class TestAvailability:

    def test_every_region_has_carbon(self):
        assert set(AVAILABILITY) == set(REGIONS)
        assert all(entry.carbon for entry in AVAILABILITY.values())

    def test_covid_mirrors_descriptor(self):
        for key, entry in AVAILABILITY.items():
            assert entry.covid == REGIONS[key].has_covid
        assert AVAILABILITY["london"].covid is True
        assert AVAILABILITY["northScotland"].covid is False
