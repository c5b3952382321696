"""Safety cap on the Section 125 deduction.

The tier table gives a target monthly benefit, but the deduction can never
exceed a configured percentage of the employee's per-paycheck gross pay.
The cap percentage is always passed in by the caller; company and employee
settings decide its value (see config.resolve_safety_cap_percent).
"""

import logging
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .pay_frequency import PayPeriod, get_periods_per_year, monthly_to_per_pay
from .section125 import FilingStatus, PricingTier, calculate_section125_amount

logger = logging.getLogger(__name__)


class Affordability(BaseModel):
    """Whether the target benefit fits under the safety cap."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    is_sufficient: bool = Field(..., description="Safe deduction covers the full target")
    target_per_pay: float = Field(..., ge=0, description="Uncapped target per paycheck")
    safe_per_pay: float = Field(..., ge=0, description="Capped deduction per paycheck")
    shortfall_per_pay: float = Field(..., ge=0, description="Target minus safe, per paycheck")
    target_monthly: float = Field(..., ge=0)
    safe_monthly: float = Field(..., ge=0)
    shortfall_monthly: float = Field(..., ge=0)
    percent_of_gross: Optional[float] = Field(
        None, description="Safe deduction as percent of gross; None when gross is not positive"
    )


def max_allowed_per_pay(gross_per_pay: float, max_pct_of_gross: float) -> float:
    """Largest deduction the cap allows for one paycheck (never negative)."""
    if gross_per_pay <= 0:
        return 0.0
    return max(0.0, gross_per_pay * max_pct_of_gross / 100)


def safe_deduction(
    target_monthly: float,
    gross_per_pay: float,
    pay_period: Union[PayPeriod, str, None],
    max_pct_of_gross: float,
) -> float:
    """Per-paycheck deduction after applying the safety cap.

    Args:
        target_monthly: Target monthly benefit from the tier table
        gross_per_pay: Employee gross pay per paycheck
        pay_period: Pay period code (unknown -> biweekly)
        max_pct_of_gross: Cap as a percentage of gross (50 = 50%)

    Returns:
        max(0, min(target per pay, gross x cap%)); 0 when gross <= 0
    """
    if gross_per_pay <= 0:
        logger.debug(f"Non-positive gross {gross_per_pay}, safe deduction is 0")
        return 0.0

    target_per_pay = monthly_to_per_pay(target_monthly, pay_period)
    max_allowed = max_allowed_per_pay(gross_per_pay, max_pct_of_gross)
    return max(0.0, min(target_per_pay, max_allowed))


def affordability(
    target_monthly: float,
    gross_per_pay: float,
    pay_period: Union[PayPeriod, str, None],
    max_pct_of_gross: float,
) -> Affordability:
    """Compare the target benefit with what the safety cap allows.

    Args:
        target_monthly: Target monthly benefit from the tier table
        gross_per_pay: Employee gross pay per paycheck
        pay_period: Pay period code (unknown -> biweekly)
        max_pct_of_gross: Cap as a percentage of gross

    Returns:
        Affordability with per-pay and monthly target, safe and shortfall
        amounts (unrounded)
    """
    periods_per_month = get_periods_per_year(pay_period) / 12
    target_per_pay = max(0.0, monthly_to_per_pay(target_monthly, pay_period))
    safe_per_pay = safe_deduction(target_monthly, gross_per_pay, pay_period, max_pct_of_gross)
    shortfall_per_pay = max(0.0, target_per_pay - safe_per_pay)

    percent_of_gross = None
    if gross_per_pay > 0:
        percent_of_gross = safe_per_pay / gross_per_pay * 100

    return Affordability(
        is_sufficient=safe_per_pay >= target_per_pay,
        target_per_pay=target_per_pay,
        safe_per_pay=safe_per_pay,
        shortfall_per_pay=shortfall_per_pay,
        target_monthly=target_per_pay * periods_per_month,
        safe_monthly=safe_per_pay * periods_per_month,
        shortfall_monthly=shortfall_per_pay * periods_per_month,
        percent_of_gross=percent_of_gross,
    )


def calculate_safe_section125_deduction(
    tier: Union[PricingTier, str, None],
    filing_status: Union[FilingStatus, str, None],
    dependents: int,
    gross_per_pay: float,
    pay_period: Union[PayPeriod, str, None],
    max_pct_of_gross: float,
) -> float:
    """Tier target run through the safety cap, per paycheck.

    This is the amount the billing run deducts for each enrolled employee.
    """
    target_monthly = calculate_section125_amount(tier, filing_status, dependents)
    return safe_deduction(target_monthly, gross_per_pay, pay_period, max_pct_of_gross)
