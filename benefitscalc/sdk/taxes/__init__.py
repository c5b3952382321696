"""taxes - State, local and payroll tax calculations.

Scope:
- State income tax: none / flat / marginal brackets (state.py)
- Local city and county income taxes (local.py)
- FICA, flat federal estimate, Pub 15-T table lookup (payroll.py)

Constraints:
- Pure calculation - no company or employee config
- Tables loaded from benefitscalc/data/*.yaml once and treated as read-only

Usage:
    from benefitscalc.sdk.taxes import annual_state_tax, load_state_tax_table

    tax = annual_state_tax(52000, "MO")
    table = load_state_tax_table(2026)
"""

from .schemas import (
    StateTaxBracket,
    StateTaxConfig,
    StateTaxTable,
    LocalTaxConfig,
    LocalTaxTable,
)

from .state import (
    DEFAULT_TAX_YEAR,
    StateTaxConfigError,
    available_tax_years,
    load_state_tax_table,
    get_state_tax_config,
    calc_flat_tax,
    calc_bracket_tax,
    calculate_state_tax,
    annual_state_tax,
)

from .local import (
    load_local_tax_table,
    get_local_tax_config,
    calculate_local_tax,
    get_cities_with_local_tax,
    state_has_local_tax,
)

from .payroll import (
    SS_RATE,
    MEDICARE_RATE,
    FICA_RATE,
    FEDERAL_WITHHOLDING_ESTIMATE_RATE,
    calc_fica,
    calc_federal_estimate,
    calc_fica_savings,
    calc_fit_from_table,
)

__all__ = [
    # Schemas
    "StateTaxBracket",
    "StateTaxConfig",
    "StateTaxTable",
    "LocalTaxConfig",
    "LocalTaxTable",
    # State
    "DEFAULT_TAX_YEAR",
    "StateTaxConfigError",
    "available_tax_years",
    "load_state_tax_table",
    "get_state_tax_config",
    "calc_flat_tax",
    "calc_bracket_tax",
    "calculate_state_tax",
    "annual_state_tax",
    # Local
    "load_local_tax_table",
    "get_local_tax_config",
    "calculate_local_tax",
    "get_cities_with_local_tax",
    "state_has_local_tax",
    # Payroll
    "SS_RATE",
    "MEDICARE_RATE",
    "FICA_RATE",
    "FEDERAL_WITHHOLDING_ESTIMATE_RATE",
    "calc_fica",
    "calc_federal_estimate",
    "calc_fica_savings",
    "calc_fit_from_table",
]
