"""Tests for fee model resolution and fee amounts."""

import pytest

from benefitscalc.sdk.fees import (
    FeeRates,
    compute_fees,
    compute_fees_for_models,
    resolve_fee_rates,
)


def rates(ee, er):
    return FeeRates(employee_pct=ee, employer_pct=er)


class TestResolveFeeRates:
    """Fee split by tier and company fee model."""

    @pytest.mark.parametrize("model", ["5/3", "8", 7, None, "garbage"])
    def test_state_school_fixed(self, model):
        assert resolve_fee_rates("state_school", model) == rates(6, 0)

    @pytest.mark.parametrize("model", ["5/3", "8", "3/4"])
    def test_original_6pct_fixed(self, model):
        assert resolve_fee_rates("original_6pct", model) == rates(1, 5)

    @pytest.mark.parametrize("model,expected", [
        ("5/3", (5, 3)),
        ("3/4", (3, 4)),
        ("1/5", (1, 5)),
        ("4.5/2.5", (4.5, 2.5)),
        (" 5 / 3 ", (5, 3)),
        ("8", (5, 3)),
        ("7", (3, 4)),
        ("6", (1, 5)),
        (8, (5, 3)),
        ("7.0", (3, 4)),
    ])
    def test_models(self, model, expected):
        assert resolve_fee_rates("year_2025", model) == rates(*expected)

    @pytest.mark.parametrize("model", ["9", "", None, "abc", "-5"])
    def test_unrecognised_model_is_zero(self, model):
        assert resolve_fee_rates("year_2025", model) == rates(0, 0)

    def test_split_with_bad_part(self):
        assert resolve_fee_rates("pre_2025", "x/3") == rates(0, 3)
        assert resolve_fee_rates("pre_2025", "5/") == rates(5, 0)

    def test_extra_segments_ignored(self):
        assert resolve_fee_rates("year_2025", "5/3/1") == rates(5, 3)

    def test_rates_never_negative(self):
        assert resolve_fee_rates("year_2025", "-5/-3") == rates(0, 0)


class TestComputeFees:

    def test_fees_on_benefit(self):
        ee, er = compute_fees(600, rates(5, 3))
        assert ee == pytest.approx(30)
        assert er == pytest.approx(18)

    def test_zero_benefit(self):
        assert compute_fees(0, rates(5, 3)) == (0, 0)

    def test_label_and_total(self):
        r = rates(5, 3)
        assert r.total_pct == 8
        assert r.label() == "5.0% / 3.0%"


class TestComputeFeesForModels:

    def test_comparison_rows(self):
        rows = compute_fees_for_models(1300, "year_2025", ["5/3", "8", "3/4"])
        assert [r["model"] for r in rows] == ["5/3", "8", "3/4"]
        assert rows[0]["employee_fee_monthly"] == 65.0
        assert rows[0]["employer_fee_monthly"] == 39.0
        assert rows[1] == {**rows[0], "model": "8"}
        assert rows[2]["employee_fee_monthly"] == 39.0
        assert rows[2]["employer_fee_monthly"] == 52.0

    def test_rounds_to_cents(self):
        rows = compute_fees_for_models(333.33, "year_2025", ["5/3"])
        assert rows[0]["employee_fee_monthly"] == 16.67
        assert rows[0]["employer_fee_monthly"] == 10.0

    def test_unrounded(self):
        rows = compute_fees_for_models(333.33, "year_2025", ["5/3"], round_to_cents=False)
        assert rows[0]["employee_fee_monthly"] == pytest.approx(16.6665)
