"""Benefits Calc SDK - Section 125 benefit, fee and tax-savings calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    resolve_safety_cap_percent,
    load_configured_state_tax_table,
    get_profile_path,
    load_profile,
    save_profile,
    list_companies,
    get_company_terms,
    Settings,
    SETTING_KEYS,
    ConfigNotFoundError,
    SettingsValidationError,
)

from .pay_frequency import (
    PayPeriod,
    AmountBasis,
    PAY_PERIODS,
    DEFAULT_PAY_PERIOD,
    parse_pay_period,
    get_periods_per_year,
    to_per_pay,
    annual_to_per_pay,
    monthly_to_per_pay,
    per_pay_to_monthly,
    per_pay_to_annual,
    format_pay_period,
)

from .section125 import (
    PricingTier,
    FilingStatus,
    DEFAULT_TIER,
    BENEFIT_TABLES,
    parse_pricing_tier,
    parse_filing_status,
    normalize_dependents,
    calculate_section125_amount,
    benefit_table,
)

from .fees import (
    FeeRates,
    TIER_FIXED_RATES,
    AGGREGATE_MODEL_RATES,
    ZERO_RATES,
    resolve_fee_rates,
    compute_fees,
    compute_fees_for_models,
)

from .safety_cap import (
    Affordability,
    max_allowed_per_pay,
    safe_deduction,
    affordability,
    calculate_safe_section125_deduction,
)

from .money import (
    round_money,
    to_cents,
    from_cents,
    format_usd,
)

from .proposal import (
    PeriodAmounts,
    BenefitProjection,
    CompanyTerms,
    EmployeeCensusRow,
    EmployeeProjection,
    ProposalSummary,
    project,
    project_employee,
    resolve_employee_cap,
    build_proposal,
)

from .billing import (
    InvoiceLine,
    InvoiceBreakdown,
    billing_breakdown,
)

from . import taxes

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "resolve_safety_cap_percent",
    "load_configured_state_tax_table",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "list_companies",
    "get_company_terms",
    "Settings",
    "SETTING_KEYS",
    "ConfigNotFoundError",
    "SettingsValidationError",
    # Pay frequency
    "PayPeriod",
    "AmountBasis",
    "PAY_PERIODS",
    "DEFAULT_PAY_PERIOD",
    "parse_pay_period",
    "get_periods_per_year",
    "to_per_pay",
    "annual_to_per_pay",
    "monthly_to_per_pay",
    "per_pay_to_monthly",
    "per_pay_to_annual",
    "format_pay_period",
    # Tier benefit
    "PricingTier",
    "FilingStatus",
    "DEFAULT_TIER",
    "BENEFIT_TABLES",
    "parse_pricing_tier",
    "parse_filing_status",
    "normalize_dependents",
    "calculate_section125_amount",
    "benefit_table",
    # Fees
    "FeeRates",
    "TIER_FIXED_RATES",
    "AGGREGATE_MODEL_RATES",
    "ZERO_RATES",
    "resolve_fee_rates",
    "compute_fees",
    "compute_fees_for_models",
    # Safety cap
    "Affordability",
    "max_allowed_per_pay",
    "safe_deduction",
    "affordability",
    "calculate_safe_section125_deduction",
    # Money
    "round_money",
    "to_cents",
    "from_cents",
    "format_usd",
    # Proposal
    "PeriodAmounts",
    "BenefitProjection",
    "CompanyTerms",
    "EmployeeCensusRow",
    "EmployeeProjection",
    "ProposalSummary",
    "project",
    "project_employee",
    "resolve_employee_cap",
    "build_proposal",
    # Billing
    "InvoiceLine",
    "InvoiceBreakdown",
    "billing_breakdown",
    # Taxes subpackage
    "taxes",
]
