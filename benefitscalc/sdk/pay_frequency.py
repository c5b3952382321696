"""Pay frequency conversion between annual, monthly and per-paycheck bases.

Pay periods arrive from census data in many spellings ("B", "bi-weekly",
"Biweekly"). Anything unrecognised is treated as biweekly rather than
rejected, matching how upstream data entry has always been interpreted.

No rounding happens here. Callers round at their output boundary.
"""

import logging
from enum import Enum
from typing import Optional, Union

logger = logging.getLogger(__name__)


class PayPeriod(str, Enum):
    """Pay frequency with its fixed number of paychecks per year."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"

    @property
    def periods_per_year(self) -> int:
        return PAY_PERIODS[self]

    @property
    def periods_per_month(self) -> float:
        return PAY_PERIODS[self] / 12


class AmountBasis(str, Enum):
    """Time basis an amount is expressed in."""

    ANNUAL = "annual"
    MONTHLY = "monthly"
    PER_PAY = "per_pay"


PAY_PERIODS = {
    PayPeriod.WEEKLY: 52,
    PayPeriod.BIWEEKLY: 26,
    PayPeriod.SEMIMONTHLY: 24,
    PayPeriod.MONTHLY: 12,
}

DEFAULT_PAY_PERIOD = PayPeriod.BIWEEKLY

# Census codes and alternate spellings seen in uploaded data
_PAY_PERIOD_ALIASES = {
    "w": PayPeriod.WEEKLY,
    "weekly": PayPeriod.WEEKLY,
    "b": PayPeriod.BIWEEKLY,
    "biweekly": PayPeriod.BIWEEKLY,
    "bi-weekly": PayPeriod.BIWEEKLY,
    "s": PayPeriod.SEMIMONTHLY,
    "semimonthly": PayPeriod.SEMIMONTHLY,
    "semi-monthly": PayPeriod.SEMIMONTHLY,
    "m": PayPeriod.MONTHLY,
    "monthly": PayPeriod.MONTHLY,
}


def parse_pay_period(value: Union[PayPeriod, str, None]) -> PayPeriod:
    """Convert a pay period code or name to a PayPeriod.

    Accepts enum members, full names ("biweekly", "semi-monthly") and
    single-letter census codes ("W", "B", "S", "M") in any case.

    Returns:
        The matching PayPeriod, or biweekly if the value is missing or
        unrecognised.
    """
    if isinstance(value, PayPeriod):
        return value
    key = str(value or "").strip().lower()
    period = _PAY_PERIOD_ALIASES.get(key)
    if period is None:
        logger.debug(f"Unrecognised pay period {value!r}, defaulting to {DEFAULT_PAY_PERIOD.value}")
        return DEFAULT_PAY_PERIOD
    return period


def get_periods_per_year(pay_period: Union[PayPeriod, str, None]) -> int:
    """Get number of paychecks per year for a pay period code."""
    return parse_pay_period(pay_period).periods_per_year


def to_per_pay(
    amount: float,
    basis: Union[AmountBasis, str],
    pay_period: Union[PayPeriod, str, None],
) -> float:
    """Convert an amount to a per-paycheck amount.

    Args:
        amount: Amount in dollars
        basis: Basis the amount is expressed in ('annual', 'monthly', 'per_pay')
        pay_period: Pay period code; unknown codes default to biweekly

    Returns:
        Per-paycheck amount (unrounded)

    Raises:
        ValueError: If basis is not a known AmountBasis
    """
    basis = AmountBasis(basis)
    periods = get_periods_per_year(pay_period)

    if basis is AmountBasis.ANNUAL:
        return amount / periods
    if basis is AmountBasis.MONTHLY:
        # amount / (periods / 12), kept exact for whole-dollar inputs
        return amount * 12 / periods
    return amount


def annual_to_per_pay(annual_amount: float, pay_period: Union[PayPeriod, str, None]) -> float:
    """Convert an annual amount to a per-paycheck amount."""
    return to_per_pay(annual_amount, AmountBasis.ANNUAL, pay_period)


def monthly_to_per_pay(monthly_amount: float, pay_period: Union[PayPeriod, str, None]) -> float:
    """Convert a monthly amount to a per-paycheck amount."""
    return to_per_pay(monthly_amount, AmountBasis.MONTHLY, pay_period)


def per_pay_to_monthly(per_pay_amount: float, pay_period: Union[PayPeriod, str, None]) -> float:
    """Convert a per-paycheck amount to a monthly amount."""
    return per_pay_amount * get_periods_per_year(pay_period) / 12


def per_pay_to_annual(per_pay_amount: float, pay_period: Union[PayPeriod, str, None]) -> float:
    """Convert a per-paycheck amount to an annual amount."""
    return per_pay_amount * get_periods_per_year(pay_period)


def format_pay_period(value: Optional[Union[PayPeriod, str]]) -> str:
    """Human-readable pay period label (e.g., 'Bi-Weekly')."""
    labels = {
        PayPeriod.WEEKLY: "Weekly",
        PayPeriod.BIWEEKLY: "Bi-Weekly",
        PayPeriod.SEMIMONTHLY: "Semi-Monthly",
        PayPeriod.MONTHLY: "Monthly",
    }
    return labels[parse_pay_period(value)]
