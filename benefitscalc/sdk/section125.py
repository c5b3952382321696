"""Section 125 benefit amounts by company pricing tier.

Each company is assigned a pricing tier when it signs up. The tier selects
the monthly pre-tax benefit an employee is targeted for, based on filing
status and whether they claim any dependents.

This is a pure lookup. Affordability caps are applied downstream in
safety_cap.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

logger = logging.getLogger(__name__)


class PricingTier(str, Enum):
    """Company-level pricing tier."""

    STATE_SCHOOL = "state_school"
    YEAR_2025 = "year_2025"
    PRE_2025 = "pre_2025"
    ORIGINAL_6PCT = "original_6pct"


class FilingStatus(str, Enum):
    """Employee filing status as recorded on the census."""

    SINGLE = "single"
    MARRIED = "married"
    HEAD = "head"


DEFAULT_TIER = PricingTier.YEAR_2025

_TIER_ALIASES = {
    "2025": PricingTier.YEAR_2025,
}

_FILING_STATUS_ALIASES = {
    "s": FilingStatus.SINGLE,
    "single": FilingStatus.SINGLE,
    "m": FilingStatus.MARRIED,
    "married": FilingStatus.MARRIED,
    "mfj": FilingStatus.MARRIED,
    "h": FilingStatus.HEAD,
    "hoh": FilingStatus.HEAD,
    "head": FilingStatus.HEAD,
    "head of household": FilingStatus.HEAD,
}

# Monthly benefit by tier, keyed (filing status, has dependents).
# Head of household is looked up as single.
_BENEFIT_TABLES = {
    PricingTier.STATE_SCHOOL: {
        (FilingStatus.SINGLE, False): 1300,
        (FilingStatus.SINGLE, True): 1300,
        (FilingStatus.MARRIED, False): 1300,
        (FilingStatus.MARRIED, True): 1300,
    },
    PricingTier.YEAR_2025: {
        (FilingStatus.SINGLE, False): 1300,
        (FilingStatus.SINGLE, True): 1700,
        (FilingStatus.MARRIED, False): 1700,
        (FilingStatus.MARRIED, True): 1700,
    },
    PricingTier.PRE_2025: {
        (FilingStatus.SINGLE, False): 800,
        (FilingStatus.SINGLE, True): 1200,
        (FilingStatus.MARRIED, False): 1200,
        (FilingStatus.MARRIED, True): 1600,
    },
    PricingTier.ORIGINAL_6PCT: {
        (FilingStatus.SINGLE, False): 700,
        (FilingStatus.SINGLE, True): 1100,
        (FilingStatus.MARRIED, False): 1500,
        (FilingStatus.MARRIED, True): 1500,
    },
}

BENEFIT_TABLES: Mapping[PricingTier, Mapping[tuple, int]] = MappingProxyType(
    {tier: MappingProxyType(rows) for tier, rows in _BENEFIT_TABLES.items()}
)


def parse_pricing_tier(value: Union[PricingTier, str, None]) -> PricingTier:
    """Convert a stored tier value to a PricingTier.

    Accepts enum members, their values, and the legacy stored value "2025".
    Unknown or missing tiers fall back to the 2025 pricing.
    """
    if isinstance(value, PricingTier):
        return value
    key = str(value or "").strip().lower()
    if key in _TIER_ALIASES:
        return _TIER_ALIASES[key]
    try:
        return PricingTier(key)
    except ValueError:
        logger.debug(f"Unknown pricing tier {value!r}, using {DEFAULT_TIER.value}")
        return DEFAULT_TIER


def parse_filing_status(value: Union[FilingStatus, str, None]) -> FilingStatus:
    """Convert a filing status name or census code (S, M, HOH) to FilingStatus.

    Unrecognised values are treated as single.
    """
    if isinstance(value, FilingStatus):
        return value
    key = str(value or "").strip().lower()
    status = _FILING_STATUS_ALIASES.get(key)
    if status is None:
        logger.debug(f"Unknown filing status {value!r}, treating as single")
        return FilingStatus.SINGLE
    return status


def normalize_dependents(dependents) -> int:
    """Coerce a dependent count to a non-negative integer.

    Missing, non-numeric and negative counts become 0.
    """
    try:
        count = int(float(dependents or 0))
    except (TypeError, ValueError, OverflowError):
        logger.debug(f"Non-numeric dependents {dependents!r}, treating as 0")
        return 0
    return max(0, count)


def calculate_section125_amount(
    tier: Union[PricingTier, str, None],
    filing_status: Union[FilingStatus, str, None],
    dependents: int,
) -> float:
    """Calculate the target monthly Section 125 benefit for an employee.

    Args:
        tier: Company pricing tier (unknown tiers use 2025 pricing)
        filing_status: Employee filing status; head of household uses the
            single row
        dependents: Number of dependents; only zero vs one-or-more matters

    Returns:
        Monthly benefit amount in dollars
    """
    tier = parse_pricing_tier(tier)
    status = parse_filing_status(filing_status)
    if status is FilingStatus.HEAD:
        status = FilingStatus.SINGLE
    has_dependents = normalize_dependents(dependents) >= 1

    return float(BENEFIT_TABLES[tier][(status, has_dependents)])


def benefit_table() -> list[dict]:
    """Benefit table as rows for display.

    Returns:
        One dict per tier with keys tier, single_0, single_1plus,
        married_0, married_1plus.
    """
    rows = []
    for tier, amounts in BENEFIT_TABLES.items():
        rows.append({
            "tier": tier.value,
            "single_0": amounts[(FilingStatus.SINGLE, False)],
            "single_1plus": amounts[(FilingStatus.SINGLE, True)],
            "married_0": amounts[(FilingStatus.MARRIED, False)],
            "married_1plus": amounts[(FilingStatus.MARRIED, True)],
        })
    return rows
