"""Service fee rates charged against the pre-tax benefit.

The fee model on a company record is either a split ("5/3" = 5% employee,
3% employer) or a single aggregate number ("8", "7", "6") that maps to a
fixed historical split. Two tiers ignore the model entirely.

Fees are always a percentage of the benefit amount, never of gross pay.
"""

import logging
import math
from typing import Iterable, Union

from pydantic import BaseModel, ConfigDict, Field

from .money import round_money
from .section125 import PricingTier, parse_pricing_tier

logger = logging.getLogger(__name__)


class FeeRates(BaseModel):
    """Employee and employer fee rates as percentages (5 = 5%)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    employee_pct: float = Field(..., ge=0, description="Employee fee, percent of benefit")
    employer_pct: float = Field(..., ge=0, description="Employer fee, percent of benefit")

    @property
    def total_pct(self) -> float:
        return self.employee_pct + self.employer_pct

    def label(self) -> str:
        """Format as 'EE% / ER%' (e.g., '5.0% / 3.0%')."""
        return f"{self.employee_pct:.1f}% / {self.employer_pct:.1f}%"


# Tiers with a fixed split regardless of the company's model
TIER_FIXED_RATES = {
    PricingTier.STATE_SCHOOL: FeeRates(employee_pct=6, employer_pct=0),
    PricingTier.ORIGINAL_6PCT: FeeRates(employee_pct=1, employer_pct=5),
}

# Aggregate model number -> historical fixed split
AGGREGATE_MODEL_RATES = {
    8: FeeRates(employee_pct=5, employer_pct=3),
    7: FeeRates(employee_pct=3, employer_pct=4),
    6: FeeRates(employee_pct=1, employer_pct=5),
}

ZERO_RATES = FeeRates(employee_pct=0, employer_pct=0)


def _parse_pct(value) -> float:
    """Parse a percentage segment; unparseable, negative or non-finite -> 0."""
    try:
        pct = float(str(value).strip())
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(pct) or pct < 0:
        return 0.0
    return pct


def resolve_fee_rates(
    tier: Union[PricingTier, str, None],
    model: Union[str, float, int, None],
) -> FeeRates:
    """Resolve the fee split for a company.

    Args:
        tier: Company pricing tier
        model: Fee model, e.g. "5/3", "8", 7

    Returns:
        FeeRates with employee and employer percentages
    """
    tier = parse_pricing_tier(tier)
    if tier in TIER_FIXED_RATES:
        return TIER_FIXED_RATES[tier]

    text = str(model if model is not None else "").strip()

    if "/" in text:
        parts = text.split("/")
        return FeeRates(
            employee_pct=_parse_pct(parts[0]),
            employer_pct=_parse_pct(parts[1]),
        )

    total = _parse_pct(text)
    rates = AGGREGATE_MODEL_RATES.get(total)
    if rates is None:
        logger.debug(f"Unrecognised fee model {model!r} for tier {tier.value}, using 0/0")
        return ZERO_RATES
    return rates


def compute_fees(benefit_per_pay: float, rates: FeeRates) -> tuple:
    """Compute employee and employer fees on a benefit amount.

    Args:
        benefit_per_pay: Pre-tax benefit amount (any basis; fees share it)
        rates: Resolved fee rates

    Returns:
        Tuple of (employee_fee, employer_fee), unrounded
    """
    employee_fee = benefit_per_pay * rates.employee_pct / 100
    employer_fee = benefit_per_pay * rates.employer_pct / 100
    return (employee_fee, employer_fee)


def compute_fees_for_models(
    pretax_monthly: float,
    tier: Union[PricingTier, str, None],
    models: Iterable[Union[str, float, int]],
    round_to_cents: bool = True,
) -> list[dict]:
    """Fee split for several candidate models, for side-by-side comparison.

    Args:
        pretax_monthly: Monthly pre-tax benefit amount
        tier: Company pricing tier (fixed-rate tiers give the same row for
            every model)
        models: Fee models to compare
        round_to_cents: Round fee amounts to cents

    Returns:
        List of dicts with model, employee_pct, employer_pct,
        employee_fee_monthly, employer_fee_monthly
    """
    rows = []
    for model in models:
        rates = resolve_fee_rates(tier, model)
        employee_fee, employer_fee = compute_fees(pretax_monthly, rates)
        if round_to_cents:
            employee_fee = round_money(employee_fee)
            employer_fee = round_money(employer_fee)
        rows.append({
            "model": str(model),
            "employee_pct": rates.employee_pct,
            "employer_pct": rates.employer_pct,
            "employee_fee_monthly": employee_fee,
            "employer_fee_monthly": employer_fee,
        })
    return rows
