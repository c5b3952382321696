"""Tests for the monthly billing fee breakdown."""

import pytest

from benefitscalc.sdk.billing import billing_breakdown
from benefitscalc.sdk.proposal import CompanyTerms, EmployeeCensusRow


@pytest.fixture
def company():
    return CompanyTerms(tier="year_2025", fee_model="5/3", pay_period="biweekly",
                        state="TX", safety_cap_percent=50)


class TestBillingBreakdown:

    def test_lines(self, company):
        employees = [
            EmployeeCensusRow(name="Ann", gross_per_pay=2000),
            EmployeeCensusRow(name="Bo", gross_per_pay=800),
        ]
        breakdown = billing_breakdown(employees, company)

        assert breakdown.employee_count == 2
        assert breakdown.summary_description == "Benefits Builder Fees - 2 employees"

        ann, bo = breakdown.lines
        assert ann.name == "Ann"
        assert ann.section_125_monthly == 1300.0
        assert ann.employee_fee_monthly == 65.0
        assert ann.employer_fee_monthly == 39.0
        assert ann.total_fee_cents == 10400
        assert ann.allowable_benefit_monthly == pytest.approx(190.45, abs=0.01)
        assert ann.is_capped is False

        assert bo.is_capped is True
        assert bo.section_125_monthly == pytest.approx(866.67)
        assert bo.employee_fee_monthly == pytest.approx(43.33)
        assert bo.employer_fee_monthly == pytest.approx(26.0)

    def test_total(self, company):
        employees = [
            EmployeeCensusRow(name="Ann", gross_per_pay=2000),
            EmployeeCensusRow(name="Bo", gross_per_pay=800),
        ]
        breakdown = billing_breakdown(employees, company)
        assert breakdown.total_fees_monthly == pytest.approx(65 + 39 + 43.33 + 26)
        assert breakdown.total_fees_cents == 17333

    def test_no_employees(self, company):
        breakdown = billing_breakdown([], company)
        assert breakdown.employee_count == 0
        assert breakdown.total_fees_cents == 0
        assert breakdown.lines == []

    def test_state_school_employee_pays_all_fees(self):
        terms = CompanyTerms(tier="state_school", fee_model="5/3", safety_cap_percent=50, state="TX")
        breakdown = billing_breakdown([EmployeeCensusRow(name="Ed", gross_per_pay=2000)], terms)
        line = breakdown.lines[0]
        assert line.employee_fee_monthly == 78.0
        assert line.employer_fee_monthly == 0
