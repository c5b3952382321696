"""Section 125 proposal projections.

Projects, for one employee, what adopting the pre-tax benefit does to their
take-home pay and what it saves the employer, per paycheck, per month and
per year.

Pipeline:
1. Fee rates (fees) and target monthly benefit (section125)
2. Benefit capped at a percentage of gross pay (safety_cap)
3. State tax before and after the benefit (taxes.state)
4. FICA 7.65% and a flat 12% federal estimate before and after
5. Employee/employer fees as a percentage of the benefit
6. Net pay before and after; savings scaled to monthly and annual

Nothing is rounded until the result is built; every monetary field is then
rounded half-up to cents. Out-of-range inputs degrade to zero amounts and
flags instead of raising.
"""

import logging
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .fees import FeeRates, compute_fees, resolve_fee_rates
from .money import round_money
from .pay_frequency import PayPeriod, monthly_to_per_pay, parse_pay_period
from .safety_cap import safe_deduction
from .section125 import (
    FilingStatus,
    PricingTier,
    calculate_section125_amount,
    normalize_dependents,
    parse_filing_status,
    parse_pricing_tier,
)
from .taxes.payroll import calc_federal_estimate, calc_fica
from .taxes.schemas import StateTaxTable
from .taxes.state import annual_state_tax

logger = logging.getLogger(__name__)


# =============================================================================
# Result schemas
# =============================================================================


class PeriodAmounts(BaseModel):
    """One amount on per-paycheck, monthly and annual bases."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    per_pay: float
    monthly: float
    annual: float

    @classmethod
    def from_per_pay(cls, per_pay: float, periods_per_year: int) -> "PeriodAmounts":
        """Scale an unrounded per-pay amount, rounding each basis once."""
        return cls(
            per_pay=round_money(per_pay),
            monthly=round_money(per_pay * periods_per_year / 12),
            annual=round_money(per_pay * periods_per_year),
        )


class BenefitProjection(BaseModel):
    """Projected effect of the Section 125 benefit for one employee."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pay_period: PayPeriod
    periods_per_year: int
    tier: PricingTier
    filing_status: FilingStatus
    dependents: int
    state: str
    fee_rates: FeeRates

    target_monthly: float = Field(..., description="Uncapped tier target")
    target_per_pay: float = Field(..., description="Uncapped tier target per paycheck")
    shortfall_per_pay: float = Field(..., description="Target not covered by the capped benefit")
    is_capped: bool = Field(..., description="Safety cap reduced the benefit below target")
    is_sufficient: bool = Field(..., description="Capped benefit covers the full target")

    benefit: PeriodAmounts = Field(..., description="Pre-tax benefit allotment")
    employee_fee: PeriodAmounts
    employer_fee: PeriodAmounts
    employee_net_pay_change: PeriodAmounts = Field(..., description="Net pay after minus before")
    employer_fica_savings: PeriodAmounts
    employer_net_savings: PeriodAmounts = Field(..., description="FICA savings minus employer fee")
    state_tax_savings: PeriodAmounts

    gross_per_pay: float
    net_pay_before: float = Field(..., description="Net pay per paycheck without the benefit")
    net_pay_after: float = Field(..., description="Net pay per paycheck with the benefit")


# =============================================================================
# Projection
# =============================================================================


def project(
    paycheck_gross: float,
    pay_period: Union[PayPeriod, str, None],
    filing_status: Union[FilingStatus, str, None],
    dependents: int,
    state: Optional[str],
    fee_model: Union[str, float, int, None],
    tier: Union[PricingTier, str, None],
    safety_cap_pct: float,
    state_tax_rate_override: Optional[float] = None,
    *,
    tax_table: Optional[StateTaxTable] = None,
) -> BenefitProjection:
    """Project benefit, fees, net pay change and savings for one employee.

    Args:
        paycheck_gross: Gross pay per paycheck (negative treated as 0)
        pay_period: Pay period code (unknown -> biweekly)
        filing_status: Filing status or census code (unknown -> single)
        dependents: Dependent count (negative -> 0)
        state: Two-letter state code (unknown -> no state tax)
        fee_model: Company fee model ("5/3", "8", ...)
        tier: Company pricing tier (unknown -> 2025 pricing)
        safety_cap_pct: Max benefit as a percentage of gross pay
        state_tax_rate_override: Flat decimal rate replacing the state table
        tax_table: State tax table (default: bundled current year)

    Returns:
        BenefitProjection with all monetary fields rounded to cents
    """
    period = parse_pay_period(pay_period)
    periods_per_year = period.periods_per_year
    tier = parse_pricing_tier(tier)
    status = parse_filing_status(filing_status)
    dependents = normalize_dependents(dependents)
    state_code = (state or "").strip().upper()

    if paycheck_gross is None or paycheck_gross < 0:
        logger.debug(f"Gross {paycheck_gross!r} clamped to 0")
    gross = max(0.0, paycheck_gross or 0.0)

    # 1. Fee rates and tier target
    rates = resolve_fee_rates(tier, fee_model)
    target_monthly = calculate_section125_amount(tier, status, dependents)
    target_per_pay = monthly_to_per_pay(target_monthly, period)

    # 2. Safety cap
    benefit = safe_deduction(target_monthly, gross, period, safety_cap_pct)
    is_capped = benefit < target_per_pay
    shortfall = max(0.0, target_per_pay - benefit)

    # 3. State tax, annualized then back to per pay
    annual_gross = gross * periods_per_year
    annual_after = (gross - benefit) * periods_per_year
    state_before = annual_state_tax(
        annual_gross, state_code, state_tax_rate_override, tax_table
    ) / periods_per_year
    state_after = annual_state_tax(
        annual_after, state_code, state_tax_rate_override, tax_table
    ) / periods_per_year

    # 4. FICA and federal estimate
    fica_before = calc_fica(gross)["fica"]
    fica_after = calc_fica(gross, pre_fica=benefit)["fica"]
    fed_before = calc_federal_estimate(gross)
    fed_after = calc_federal_estimate(gross - benefit)

    # 5. Fees on the benefit
    employee_fee, employer_fee = compute_fees(benefit, rates)

    # 6. Net pay
    net_before = gross - (fed_before + state_before + fica_before)
    net_after = gross - (fed_after + state_after + fica_after) - employee_fee

    # 7. Derived savings
    fica_savings = fica_before - fica_after
    employer_net = fica_savings - employer_fee

    def scaled(per_pay: float) -> PeriodAmounts:
        return PeriodAmounts.from_per_pay(per_pay, periods_per_year)

    # 8. Round at the boundary
    return BenefitProjection(
        pay_period=period,
        periods_per_year=periods_per_year,
        tier=tier,
        filing_status=status,
        dependents=dependents,
        state=state_code,
        fee_rates=rates,
        target_monthly=round_money(target_monthly),
        target_per_pay=round_money(target_per_pay),
        shortfall_per_pay=round_money(shortfall),
        is_capped=is_capped,
        is_sufficient=not is_capped,
        benefit=scaled(benefit),
        employee_fee=scaled(employee_fee),
        employer_fee=scaled(employer_fee),
        employee_net_pay_change=scaled(net_after - net_before),
        employer_fica_savings=scaled(fica_savings),
        employer_net_savings=scaled(employer_net),
        state_tax_savings=scaled(state_before - state_after),
        gross_per_pay=round_money(gross),
        net_pay_before=round_money(net_before),
        net_pay_after=round_money(net_after),
    )


# =============================================================================
# Proposal across a census
# =============================================================================


class CompanyTerms(BaseModel):
    """Company-level inputs shared by every employee in a proposal."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tier: PricingTier = PricingTier.YEAR_2025
    fee_model: str = Field(..., description="Fee model, e.g. '5/3' or '8'")
    pay_period: PayPeriod = PayPeriod.BIWEEKLY
    state: Optional[str] = None
    safety_cap_percent: float = Field(..., ge=0, description="Company safety cap (percent of gross)")
    state_tax_rate_override: Optional[float] = Field(default=None, ge=0, le=1)

    @field_validator("tier", mode="before")
    @classmethod
    def _parse_tier(cls, v):
        return parse_pricing_tier(v)

    @field_validator("pay_period", mode="before")
    @classmethod
    def _parse_pay_period(cls, v):
        return parse_pay_period(v)

    @field_validator("fee_model", mode="before")
    @classmethod
    def _model_to_str(cls, v):
        return "" if v is None else str(v)


class EmployeeCensusRow(BaseModel):
    """One employee as supplied by the caller (census or enrollment)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = ""
    gross_per_pay: float = 0
    pay_period: Optional[PayPeriod] = Field(default=None, description="Defaults to company pay period")
    filing_status: FilingStatus = FilingStatus.SINGLE
    dependents: int = 0
    state: Optional[str] = Field(default=None, description="Defaults to company state")
    safety_cap_percent: Optional[float] = Field(default=None, ge=0, description="Overrides company cap")

    @field_validator("pay_period", mode="before")
    @classmethod
    def _parse_pay_period(cls, v):
        return None if v in (None, "") else parse_pay_period(v)

    @field_validator("filing_status", mode="before")
    @classmethod
    def _parse_filing_status(cls, v):
        return parse_filing_status(v)

    @field_validator("dependents", mode="before")
    @classmethod
    def _parse_dependents(cls, v):
        return normalize_dependents(v)


class EmployeeProjection(BaseModel):
    """Projection for one census row, or why it does not qualify."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    qualifies: bool
    disqualification_reason: Optional[str] = None
    projection: Optional[BenefitProjection] = None


class ProposalSummary(BaseModel):
    """Projections for every employee plus proposal totals."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    total_employees: int
    qualified_employees: int
    capped_employees: int
    total_benefit_monthly: float
    total_employer_net_savings_monthly: float
    total_employer_net_savings_annual: float
    total_employee_net_increase_monthly: float
    total_employee_net_increase_annual: float
    employees: List[EmployeeProjection]


def resolve_employee_cap(employee: EmployeeCensusRow, company: CompanyTerms) -> float:
    """Employee safety cap override, else the company's."""
    if employee.safety_cap_percent is not None:
        return employee.safety_cap_percent
    return company.safety_cap_percent


def project_employee(
    employee: EmployeeCensusRow,
    company: CompanyTerms,
    *,
    tax_table: Optional[StateTaxTable] = None,
) -> BenefitProjection:
    """Run project() for a census row under company terms."""
    return project(
        paycheck_gross=employee.gross_per_pay,
        pay_period=employee.pay_period or company.pay_period,
        filing_status=employee.filing_status,
        dependents=employee.dependents,
        state=employee.state or company.state,
        fee_model=company.fee_model,
        tier=company.tier,
        safety_cap_pct=resolve_employee_cap(employee, company),
        state_tax_rate_override=company.state_tax_rate_override,
        tax_table=tax_table,
    )


def build_proposal(
    employees: Iterable[EmployeeCensusRow],
    company: CompanyTerms,
    min_gross_per_pay: float,
    *,
    tax_table: Optional[StateTaxTable] = None,
) -> ProposalSummary:
    """Project every employee and total the proposal.

    Employees whose gross pay per paycheck is below min_gross_per_pay do
    not qualify and contribute nothing to the totals.

    Args:
        employees: Census rows
        company: Company terms (tier, fee model, defaults, safety cap)
        min_gross_per_pay: Qualification threshold per paycheck
        tax_table: State tax table (default: bundled current year)

    Returns:
        ProposalSummary with per-employee results and totals
    """
    results = []
    for employee in employees:
        if employee.gross_per_pay < min_gross_per_pay:
            results.append(EmployeeProjection(
                name=employee.name,
                qualifies=False,
                disqualification_reason=f"Gross pay below ${min_gross_per_pay:,.0f}",
            ))
            continue

        results.append(EmployeeProjection(
            name=employee.name,
            qualifies=True,
            projection=project_employee(employee, company, tax_table=tax_table),
        ))

    qualified = [r.projection for r in results if r.qualifies]
    logger.debug(f"Proposal: {len(qualified)} of {len(results)} employees qualify")

    return ProposalSummary(
        total_employees=len(results),
        qualified_employees=len(qualified),
        capped_employees=sum(1 for p in qualified if p.is_capped),
        total_benefit_monthly=round_money(sum(p.benefit.monthly for p in qualified)),
        total_employer_net_savings_monthly=round_money(
            sum(p.employer_net_savings.monthly for p in qualified)
        ),
        total_employer_net_savings_annual=round_money(
            sum(p.employer_net_savings.annual for p in qualified)
        ),
        total_employee_net_increase_monthly=round_money(
            sum(p.employee_net_pay_change.monthly for p in qualified)
        ),
        total_employee_net_increase_annual=round_money(
            sum(p.employee_net_pay_change.annual for p in qualified)
        ),
        employees=results,
    )
