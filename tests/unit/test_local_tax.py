"""Tests for local (city/county) income tax lookup."""

import pytest

from benefitscalc.sdk.taxes import (
    calculate_local_tax,
    get_cities_with_local_tax,
    get_local_tax_config,
    state_has_local_tax,
)


class TestLocalTaxConfig:

    def test_detroit(self):
        config = get_local_tax_config("MI", "Detroit")
        assert config.city == "Detroit"
        assert config.resident_rate == 0.024
        assert config.non_resident_rate == 0.012

    def test_case_insensitive(self):
        assert get_local_tax_config("oh", " columbus ") == get_local_tax_config("OH", "COLUMBUS")

    def test_unknown(self):
        assert get_local_tax_config("TX", "Houston") is None
        assert get_local_tax_config("MI", "Nowhere") is None
        assert get_local_tax_config(None, None) is None


class TestCalculateLocalTax:

    def test_resident(self):
        assert calculate_local_tax(50000, "MI", "Detroit") == pytest.approx(1200)

    def test_same_work_city_not_double_taxed(self):
        assert calculate_local_tax(50000, "MI", "Detroit", "MI", "detroit") == pytest.approx(1200)

    def test_resident_plus_non_resident(self):
        # Dayton resident 2.25% + Columbus non-resident 2.5%
        assert calculate_local_tax(60000, "OH", "Dayton", "OH", "Columbus") == pytest.approx(2850)

    def test_non_taxing_residence_taxing_work(self):
        assert calculate_local_tax(50000, "TX", "Austin", "MI", "Detroit") == pytest.approx(600)

    def test_no_local_tax(self):
        assert calculate_local_tax(50000, "TX", "Austin") == 0

    def test_negative_income(self):
        assert calculate_local_tax(-1000, "MI", "Detroit") == 0


class TestJurisdictionLists:

    @pytest.mark.parametrize("state", ["MI", "OH", "PA", "NY", "IN", "MD", "KY"])
    def test_states_with_local_tax(self, state):
        assert state_has_local_tax(state)
        assert get_cities_with_local_tax(state)

    def test_states_without_local_tax(self):
        assert not state_has_local_tax("TX")
        assert get_cities_with_local_tax("CA") == []

    def test_maryland_apostrophe_counties(self):
        names = get_cities_with_local_tax("MD")
        assert "PRINCE GEORGES" in names
