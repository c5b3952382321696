"""Local (city and county) income tax lookup.

Covers the states with local wage taxes: MI, OH, PA, NY, IN, MD, KY.
Residents pay their home jurisdiction's resident rate; working in a
different taxing jurisdiction adds that jurisdiction's non-resident rate.

Local tax is reported alongside projections, not folded into them.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .schemas import LocalTaxConfig, LocalTaxTable
from .state import StateTaxConfigError

logger = logging.getLogger(__name__)


def _get_local_tax_path() -> Path:
    package_root = Path(__file__).parent.parent.parent
    return package_root / "data" / "local_tax.yaml"


@lru_cache(maxsize=1)
def load_local_tax_table() -> LocalTaxTable:
    """Load the bundled local tax table (cached).

    Raises:
        StateTaxConfigError: If the file fails validation
    """
    path = _get_local_tax_path()
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}

    try:
        return LocalTaxTable.model_validate(raw)
    except ValidationError as e:
        raise StateTaxConfigError(f"Invalid local tax table {path}:\n{e}") from e


def _norm(value: Optional[str]) -> str:
    return (value or "").strip().upper()


def get_local_tax_config(state: Optional[str], city: Optional[str]) -> Optional[LocalTaxConfig]:
    """Local tax config for a city or county, or None if it has no local tax."""
    state_taxes = load_local_tax_table().states.get(_norm(state))
    if not state_taxes:
        return None
    return state_taxes.get(_norm(city))


def calculate_local_tax(
    annual_income: float,
    residence_state: Optional[str],
    residence_city: Optional[str],
    work_state: Optional[str] = None,
    work_city: Optional[str] = None,
) -> float:
    """Annual local tax based on where the employee lives and works.

    Args:
        annual_income: Annual taxable income
        residence_state: State the employee lives in
        residence_city: City or county the employee lives in
        work_state: State of the work location
        work_city: City or county of the work location

    Returns:
        Annual local tax (unrounded); 0 outside taxing jurisdictions
    """
    income = max(0.0, annual_income)
    total = 0.0

    residence = get_local_tax_config(residence_state, residence_city)
    if residence:
        total += income * residence.resident_rate

    if work_state and work_city:
        same_place = (
            _norm(work_city) == _norm(residence_city)
            and _norm(work_state) == _norm(residence_state)
        )
        if not same_place:
            work = get_local_tax_config(work_state, work_city)
            if work:
                total += income * work.non_resident_rate

    return total


def get_cities_with_local_tax(state: Optional[str]) -> list[str]:
    """Names (upper-case keys) of taxing jurisdictions in a state."""
    state_taxes = load_local_tax_table().states.get(_norm(state))
    if not state_taxes:
        return []
    return list(state_taxes.keys())


def state_has_local_tax(state: Optional[str]) -> bool:
    """True if any jurisdiction in the state levies a local income tax."""
    return bool(get_cities_with_local_tax(state))
