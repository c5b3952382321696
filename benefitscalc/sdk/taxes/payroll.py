"""Payroll tax rates and helpers used by the savings projections.

Section 125 deductions reduce both FICA and federal income tax wages. The
proposal projection uses fixed rates: 7.65% FICA (6.2% Social Security +
1.45% Medicare) and a flat 12% estimate of federal withholding.
"""

from typing import Any, Dict, Optional, Sequence

SS_RATE = 0.062
MEDICARE_RATE = 0.0145
FICA_RATE = SS_RATE + MEDICARE_RATE  # 0.0765
ADDITIONAL_MEDICARE_RATE = 0.009

# Flat estimate of federal withholding used in proposals
FEDERAL_WITHHOLDING_ESTIMATE_RATE = 0.12


def calc_fica(
    gross: float,
    pre_fica: float = 0,
    ss_rate: float = SS_RATE,
    medicare_rate: float = MEDICARE_RATE,
) -> Dict[str, float]:
    """FICA on gross pay less pre-FICA (Section 125) deductions.

    Args:
        gross: Gross pay for the period
        pre_fica: Deductions exempt from FICA
        ss_rate: Social Security rate
        medicare_rate: Medicare rate

    Returns:
        Dict with ss, medicare, fica (unrounded)
    """
    base = max(0.0, gross - (pre_fica or 0))
    ss = base * ss_rate
    medicare = base * medicare_rate
    return {"ss": ss, "medicare": medicare, "fica": ss + medicare}


def calc_federal_estimate(taxable: float, rate: float = FEDERAL_WITHHOLDING_ESTIMATE_RATE) -> float:
    """Flat-rate federal withholding estimate on non-negative wages."""
    return max(0.0, taxable) * rate


def calc_fica_savings(
    annual_wages: float,
    wage_base: Optional[float] = None,
    additional_medicare_threshold: Optional[float] = None,
) -> float:
    """FICA avoided on an annual amount of wages.

    Args:
        annual_wages: Annual wages moved out of FICA
        wage_base: Social Security wage base; wages above it owe no SS.
            None or 0 means no wage base applies
        additional_medicare_threshold: If given, the 0.9% Additional
            Medicare Tax applies to wages above it

    Returns:
        FICA amount (unrounded)
    """
    wages = max(0.0, annual_wages)
    ss_wages = min(wages, wage_base) if wage_base else wages
    savings = ss_wages * SS_RATE + wages * MEDICARE_RATE

    if additional_medicare_threshold is not None:
        excess = max(0.0, wages - additional_medicare_threshold)
        savings += excess * ADDITIONAL_MEDICARE_RATE

    return savings


def calc_fit_from_table(taxable: float, table: Sequence[Dict[str, Any]]) -> float:
    """Federal income tax from an IRS Pub 15-T percentage method table.

    Rows are dicts {over, base_tax, pct} sorted ascending by `over`. The
    last row whose `over` is at or below the taxable amount applies.

    Returns:
        base_tax + (taxable - over) * pct, or 0 for an empty table
    """
    if not table:
        return 0.0

    row = table[0]
    for candidate in table:
        if taxable >= candidate["over"]:
            row = candidate
        else:
            break

    over_amount = max(0.0, taxable - row["over"])
    return float(row.get("base_tax") or 0) + over_amount * float(row.get("pct") or 0)
