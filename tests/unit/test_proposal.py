"""Tests for the Section 125 proposal projection.

Reference scenario: a single Texas employee with no dependents, 2025
pricing (1300/month target), fee model 5/3 and a 50% safety cap.
"""

import pytest
from pydantic import ValidationError

from benefitscalc.sdk.proposal import (
    CompanyTerms,
    EmployeeCensusRow,
    build_proposal,
    project,
    project_employee,
    resolve_employee_cap,
)
from benefitscalc.sdk.pay_frequency import PayPeriod
from benefitscalc.sdk.section125 import FilingStatus, PricingTier


def tx_projection(gross, **overrides):
    kwargs = dict(
        paycheck_gross=gross,
        pay_period="biweekly",
        filing_status="single",
        dependents=0,
        state="TX",
        fee_model="5/3",
        tier="year_2025",
        safety_cap_pct=50,
    )
    kwargs.update(overrides)
    return project(**kwargs)


@pytest.fixture
def company():
    return CompanyTerms(tier="year_2025", fee_model="5/3", pay_period="biweekly",
                        state="TX", safety_cap_percent=50)


class TestProjectUncapped:
    """$2,000 biweekly gross: full 600 per-pay benefit fits under the cap."""

    def test_benefit(self):
        p = tx_projection(2000)
        assert p.benefit.per_pay == 600.0
        assert p.benefit.monthly == 1300.0
        assert p.benefit.annual == 15600.0
        assert p.is_capped is False
        assert p.is_sufficient is True
        assert p.shortfall_per_pay == 0

    def test_fees(self):
        p = tx_projection(2000)
        assert p.employee_fee.per_pay == 30.0
        assert p.employer_fee.per_pay == 18.0
        assert p.employee_fee.monthly == 65.0
        assert p.employer_fee.monthly == 39.0

    def test_employer_savings(self):
        p = tx_projection(2000)
        assert p.employer_fica_savings.per_pay == pytest.approx(45.9)
        assert p.employer_net_savings.per_pay == pytest.approx(27.9)
        assert p.employer_net_savings.monthly == pytest.approx(60.45, abs=0.01)

    def test_employee_net_pay(self):
        p = tx_projection(2000)
        # 2000 - (240 federal + 0 state + 153 FICA)
        assert p.net_pay_before == pytest.approx(1607.0)
        # 2000 - (168 + 0 + 107.10) - 30 fee
        assert p.net_pay_after == pytest.approx(1694.9)
        assert p.employee_net_pay_change.per_pay == pytest.approx(87.9)
        assert p.employee_net_pay_change.monthly == pytest.approx(190.45, abs=0.01)
        assert p.employee_net_pay_change.annual == pytest.approx(2285.4, abs=0.01)

    def test_no_state_tax_savings_in_texas(self):
        assert tx_projection(2000).state_tax_savings.annual == 0

    def test_resolved_inputs(self):
        p = tx_projection(2000, pay_period="B", filing_status="S", state="tx")
        assert p.pay_period is PayPeriod.BIWEEKLY
        assert p.periods_per_year == 26
        assert p.tier is PricingTier.YEAR_2025
        assert p.filing_status is FilingStatus.SINGLE
        assert p.state == "TX"
        assert p.target_monthly == 1300.0
        assert p.target_per_pay == 600.0


class TestProjectCapped:
    """$800 biweekly gross: 50% cap allows only 400 of the 600 target."""

    def test_capped_benefit(self):
        p = tx_projection(800)
        assert p.benefit.per_pay == 400.0
        assert p.is_capped is True
        assert p.is_sufficient is False
        assert p.shortfall_per_pay == 200.0

    def test_fees_on_capped_benefit(self):
        p = tx_projection(800)
        assert p.employee_fee.per_pay == 20.0
        assert p.employer_fee.per_pay == 12.0

    def test_benefit_never_exceeds_cap(self):
        for gross in (100, 500, 800, 1199, 1200, 1201, 3000):
            p = tx_projection(gross)
            assert p.benefit.per_pay <= gross * 0.5 + 0.005
            assert p.benefit.per_pay <= 600


class TestProjectEdgeCases:

    def test_idempotent(self):
        assert tx_projection(1750.55) == tx_projection(1750.55)

    def test_negative_gross_clamped(self):
        p = tx_projection(-100)
        assert p.gross_per_pay == 0
        assert p.benefit.per_pay == 0
        assert p.employee_net_pay_change.per_pay == 0
        assert p.is_capped is True

    def test_zero_cap(self):
        p = tx_projection(2000, safety_cap_pct=0)
        assert p.benefit.per_pay == 0
        assert p.employer_net_savings.per_pay == 0

    def test_negative_state_rate_override_taxes_nothing(self):
        p = tx_projection(2000, state_tax_rate_override=-0.05)
        assert p.net_pay_before == pytest.approx(1607.0)
        assert p.state_tax_savings.per_pay == 0
        assert p.employee_net_pay_change.per_pay == pytest.approx(87.9)

    def test_unknown_pay_period_is_biweekly(self):
        assert tx_projection(2000, pay_period="fortnightly").benefit.per_pay == 600.0

    def test_unknown_state_pays_no_state_tax(self):
        p = tx_projection(2000, state="ZZ")
        assert p.state_tax_savings.per_pay == 0
        assert p.net_pay_before == pytest.approx(1607.0)

    def test_unrecognised_fee_model_charges_nothing(self):
        p = tx_projection(2000, fee_model="bogus")
        assert p.employee_fee.per_pay == 0
        assert p.employer_fee.per_pay == 0

    def test_monetary_fields_rounded_to_cents(self):
        p = tx_projection(1234.567, pay_period="weekly", state="MO")
        for amounts in (p.benefit, p.employee_fee, p.employee_net_pay_change, p.state_tax_savings):
            for value in (amounts.per_pay, amounts.monthly, amounts.annual):
                assert round(value, 2) == value


class TestProjectStateTax:

    def test_missouri_savings(self):
        p = tx_projection(2000, state="MO")
        # (52000 - 16100) * 4.7% before, (36400 - 16100) * 4.7% after
        assert p.state_tax_savings.annual == pytest.approx(733.2, abs=0.01)
        assert p.state_tax_savings.per_pay == pytest.approx(28.2)
        assert p.employee_net_pay_change.per_pay == pytest.approx(87.9 + 28.2)

    def test_rate_override(self):
        p = tx_projection(2000, state="TX", state_tax_rate_override=0.05)
        assert p.state_tax_savings.per_pay == pytest.approx(30.0)


class TestCompanyTerms:

    def test_parses_codes(self):
        terms = CompanyTerms(tier="2025", fee_model=8, pay_period="S", safety_cap_percent=30)
        assert terms.tier is PricingTier.YEAR_2025
        assert terms.fee_model == "8"
        assert terms.pay_period is PayPeriod.SEMIMONTHLY

    def test_cap_required(self):
        with pytest.raises(ValidationError):
            CompanyTerms(fee_model="5/3")

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            CompanyTerms(fee_model="5/3", safety_cap_percent=50, discount=10)


class TestProjectEmployee:

    def test_defaults_from_company(self, company):
        employee = EmployeeCensusRow(name="Ann", gross_per_pay=2000)
        assert project_employee(employee, company) == tx_projection(2000)

    def test_employee_cap_override(self, company):
        employee = EmployeeCensusRow(name="Bo", gross_per_pay=800, safety_cap_percent=75)
        assert resolve_employee_cap(employee, company) == 75
        assert project_employee(employee, company).benefit.per_pay == 600.0

    def test_census_codes(self):
        row = EmployeeCensusRow(name="Cy", gross_per_pay=1500, pay_period="W",
                                filing_status="HOH", dependents="2")
        assert row.pay_period is PayPeriod.WEEKLY
        assert row.filing_status is FilingStatus.HEAD
        assert row.dependents == 2

    def test_blank_pay_period_uses_company(self, company):
        row = EmployeeCensusRow(name="Di", gross_per_pay=2000, pay_period="")
        assert row.pay_period is None
        assert project_employee(row, company).pay_period is PayPeriod.BIWEEKLY


class TestBuildProposal:

    def test_totals(self, company):
        employees = [
            EmployeeCensusRow(name="Ann", gross_per_pay=2000),
            EmployeeCensusRow(name="Bo", gross_per_pay=800),
            EmployeeCensusRow(name="Cy", gross_per_pay=300),
        ]
        summary = build_proposal(employees, company, min_gross_per_pay=500)

        assert summary.total_employees == 3
        assert summary.qualified_employees == 2
        assert summary.capped_employees == 1
        assert summary.total_benefit_monthly == pytest.approx(1300 + 866.67)

        cy = summary.employees[2]
        assert cy.qualifies is False
        assert cy.projection is None
        assert cy.disqualification_reason == "Gross pay below $500"

        ann = summary.employees[0]
        assert summary.total_employer_net_savings_monthly == pytest.approx(
            ann.projection.employer_net_savings.monthly
            + summary.employees[1].projection.employer_net_savings.monthly
        )

    def test_empty_census(self, company):
        summary = build_proposal([], company, min_gross_per_pay=0)
        assert summary.total_employees == 0
        assert summary.total_benefit_monthly == 0

    def test_zero_threshold_qualifies_everyone(self, company):
        summary = build_proposal([EmployeeCensusRow(name="Zed", gross_per_pay=0)], company, 0)
        assert summary.qualified_employees == 1
        assert summary.capped_employees == 1
