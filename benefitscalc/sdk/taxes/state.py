"""State income tax calculation.

Each state uses one of three methods:
- none: no wage income tax
- flat: single rate above an optional standard deduction
- brackets: marginal rates above an optional standard deduction

Tables are loaded from data/state_tax/{year}.yaml once per process and
treated as read-only. Personal and dependent exemptions are carried in the
data but not applied.
"""

import logging
import math
from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence, Union

import yaml
from pydantic import ValidationError

from .schemas import StateTaxBracket, StateTaxConfig, StateTaxTable

logger = logging.getLogger(__name__)

DEFAULT_TAX_YEAR = 2026


class StateTaxConfigError(Exception):
    """Raised when a state tax table is missing or malformed."""
    pass


def _get_state_tax_dir() -> Path:
    """Get the bundled state tax data directory."""
    package_root = Path(__file__).parent.parent.parent  # taxes -> sdk -> benefitscalc
    return package_root / "data" / "state_tax"


def available_tax_years() -> list[int]:
    """Get sorted list of bundled tax years (descending)."""
    data_dir = _get_state_tax_dir()
    years = [int(p.stem) for p in data_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


@lru_cache(maxsize=None)
def _load_table(config_file: Path) -> StateTaxTable:
    if not config_file.exists():
        raise StateTaxConfigError(f"State tax table not found: {config_file}")

    with open(config_file, "r") as f:
        raw = yaml.safe_load(f) or {}

    try:
        table = StateTaxTable.model_validate(raw)
    except ValidationError as e:
        raise StateTaxConfigError(f"Invalid state tax table {config_file}:\n{e}") from e

    logger.debug(f"Loaded {len(table.states)} state tax configs for {table.tax_year} from {config_file}")
    return table


def load_state_tax_table(
    year: Optional[Union[int, str]] = None,
    path: Optional[Union[str, Path]] = None,
) -> StateTaxTable:
    """Load and validate a state tax table.

    Args:
        year: Tax year of a bundled table (default: DEFAULT_TAX_YEAR)
        path: Explicit YAML file to load instead of a bundled year

    Returns:
        Validated StateTaxTable (cached per file)

    Raises:
        StateTaxConfigError: If the file is missing or fails validation
    """
    if path is not None:
        config_file = Path(path).expanduser().resolve()
    else:
        config_file = _get_state_tax_dir() / f"{year or DEFAULT_TAX_YEAR}.yaml"
    return _load_table(config_file)


def get_state_tax_config(
    state_code: Optional[str],
    table: Optional[StateTaxTable] = None,
) -> Optional[StateTaxConfig]:
    """Get a state's tax configuration, or None if the state is unknown."""
    table = table or load_state_tax_table()
    return table.get(state_code)


def calc_flat_tax(taxable_income: float, flat_rate: float) -> float:
    """Flat tax on non-negative taxable income."""
    return max(0.0, taxable_income) * flat_rate


def calc_bracket_tax(taxable_income: float, brackets: Sequence[StateTaxBracket]) -> float:
    """Marginal tax over ascending brackets.

    Each bracket's rate applies to income between its threshold and the
    next bracket's threshold (unbounded for the last). Accrual stops at the
    first bracket whose threshold is at or above the income.
    """
    tax = 0.0
    for i, bracket in enumerate(brackets):
        if taxable_income <= bracket.over:
            break
        upper = brackets[i + 1].over if i + 1 < len(brackets) else float("inf")
        tax += (min(taxable_income, upper) - bracket.over) * bracket.rate
    return tax


def calculate_state_tax(annual_taxable_income: float, config: StateTaxConfig) -> float:
    """Annual tax for one state configuration."""
    if config.method == "none":
        return 0.0

    taxable = max(0.0, annual_taxable_income - config.standard_deduction)

    if config.method == "flat":
        return calc_flat_tax(taxable, config.flat_rate)

    return calc_bracket_tax(taxable, config.brackets)


def annual_state_tax(
    annual_taxable_income: float,
    state_code: Optional[str],
    override_rate: Optional[float] = None,
    table: Optional[StateTaxTable] = None,
) -> float:
    """Annual state income tax for an employee.

    Args:
        annual_taxable_income: Annual income subject to state tax
        state_code: Two-letter state code (case-insensitive)
        override_rate: Flat rate (decimal) to use instead of the table
        table: State tax table (default: bundled DEFAULT_TAX_YEAR table)

    Returns:
        Annual tax in dollars (unrounded). Unknown states pay 0.
    """
    if override_rate is not None:
        if not math.isfinite(override_rate) or override_rate < 0:
            logger.debug(f"Invalid state tax override {override_rate!r}, using 0")
            return 0.0
        return max(0.0, annual_taxable_income) * override_rate

    config = get_state_tax_config(state_code, table)
    if config is None:
        logger.debug(f"No state tax config for {state_code!r}, using 0")
        return 0.0

    return calculate_state_tax(annual_taxable_income, config)
