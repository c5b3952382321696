"""Configuration management for Benefits Calc.

Configuration is split into two files:

1. settings.json - Machine-specific defaults
   - safety_cap_percent: default safety cap (percent of gross pay)
   - min_gross_per_pay: proposal qualification threshold per paycheck
   - tax_year: bundled state tax table year
   - state_tax_file: path to a custom state tax YAML
   - profile: path to profile.yaml (optional, if not colocated)

2. profile.yaml - Registered company terms
   - companies: name -> {tier, fee_model, pay_period, state, safety_cap_percent}

Config directory resolution:
1. BENEFITS_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/benefits-calc/ (XDG_CONFIG_HOME fallback)

The calculation engine never reads configuration. The CLI and MCP server
resolve settings here and pass every value explicitly.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .proposal import CompanyTerms
from .taxes.schemas import StateTaxTable
from .taxes.state import load_state_tax_table


APP_NAME = "benefits-calc"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"


class ConfigNotFoundError(Exception):
    """Raised when a required setting or profile entry is not configured."""
    pass


class SettingsValidationError(Exception):
    """Raised when settings.json or profile.yaml contains invalid values."""
    pass


class Settings(BaseModel):
    """Validated contents of settings.json."""
    model_config = ConfigDict(extra="forbid")

    safety_cap_percent: Optional[float] = Field(default=None, ge=0, le=100)
    min_gross_per_pay: Optional[float] = Field(default=None, ge=0)
    tax_year: Optional[int] = Field(default=None, ge=2000, le=2100)
    state_tax_file: Optional[str] = None
    profile: Optional[str] = None


SETTING_KEYS = tuple(Settings.model_fields.keys())


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. BENEFITS_CALC_CONFIG_PATH environment variable
    2. ~/.config/benefits-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    # 1. Check environment variable
    env_path = os.environ.get("BENEFITS_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    # 2. Fall back to XDG config path
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        SettingsValidationError: If the file holds unknown keys or bad values
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise SettingsValidationError(f"Invalid JSON in {settings_file}: {e}") from e

    try:
        Settings.model_validate(raw)
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid settings in {settings_file}:\n{e}") from e

    return raw


def save_settings(settings: dict) -> Path:
    """Validate and save settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file

    Raises:
        SettingsValidationError: If a key or value is invalid
    """
    try:
        Settings.model_validate(settings)
    except ValidationError as e:
        raise SettingsValidationError(str(e)) from e

    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    settings = load_settings()
    value = settings.get(key)
    return default if value is None else value


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    String values from the command line are coerced to the setting's type
    ("50" -> 50.0 for safety_cap_percent).

    Returns:
        Path to the saved settings file

    Raises:
        SettingsValidationError: If the key is unknown or the value invalid
    """
    try:
        parsed = Settings.model_validate({key: value})
    except ValidationError as e:
        raise SettingsValidationError(str(e)) from e

    settings = load_settings()
    settings[key] = getattr(parsed, key)
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def resolve_safety_cap_percent(
    employee_value: Optional[float] = None,
    company_value: Optional[float] = None,
) -> float:
    """Resolve the safety cap for an employee.

    Resolution order:
    1. Employee override
    2. Company setting
    3. settings.json safety_cap_percent

    Raises:
        ConfigNotFoundError: If none of the three is set
    """
    for value in (employee_value, company_value, get_setting("safety_cap_percent")):
        if value is not None:
            return float(value)

    raise ConfigNotFoundError(
        "No safety cap configured.\n\n"
        "Pass one explicitly, or set a default with:\n"
        "  benefits-calc settings set safety_cap_percent 50"
    )


def load_configured_state_tax_table() -> StateTaxTable:
    """State tax table selected by settings (custom file, tax year, or bundled default)."""
    custom_file = get_setting("state_tax_file")
    if custom_file:
        return load_state_tax_table(path=custom_file)
    return load_state_tax_table(year=get_setting("tax_year"))


def get_profile_path() -> Path:
    """Get the path to profile.yaml.

    Resolution order:
    1. settings.json "profile" key (if set)
    2. profile.yaml in config directory
    """
    custom_profile = get_setting("profile")
    if custom_profile:
        return Path(custom_profile).expanduser()
    return get_config_dir() / PROFILE_FILENAME


def load_profile() -> dict:
    """Load profile.yaml (empty dict if it doesn't exist).

    Raises:
        SettingsValidationError: If the file is not valid YAML or its top
            level is not a mapping
    """
    profile_path = get_profile_path()

    if not profile_path.exists():
        return {}

    try:
        with open(profile_path, "r") as f:
            profile = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SettingsValidationError(f"Invalid YAML in {profile_path}: {e}") from e

    if not isinstance(profile, dict):
        raise SettingsValidationError(
            f"Profile must be a YAML mapping, got {type(profile).__name__}: {profile_path}"
        )
    if not isinstance(profile.get("companies") or {}, dict):
        raise SettingsValidationError(f"'companies' must be a mapping of name -> terms: {profile_path}")

    return profile


def save_profile(profile: dict) -> Path:
    """Save profile.yaml. Returns the path written."""
    path = get_profile_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(profile, f, default_flow_style=False, sort_keys=False)

    return path


def list_companies() -> list[str]:
    """Names of companies registered in profile.yaml."""
    return sorted((load_profile().get("companies") or {}).keys())


def get_company_terms(name: str) -> CompanyTerms:
    """Load a registered company's terms from profile.yaml.

    A company without its own safety_cap_percent falls back to the
    settings.json default.

    Raises:
        ConfigNotFoundError: If the company is not registered or no cap
            can be resolved
        SettingsValidationError: If the company entry is invalid
    """
    companies = load_profile().get("companies") or {}
    entry = companies.get(name)
    if entry is None:
        raise ConfigNotFoundError(
            f"Company '{name}' not found in {get_profile_path()}\n"
            f"Registered companies: {', '.join(sorted(companies)) or '(none)'}"
        )

    if not isinstance(entry, dict):
        raise SettingsValidationError(f"Terms for company '{name}' must be a mapping")

    entry = dict(entry)
    entry["safety_cap_percent"] = resolve_safety_cap_percent(
        company_value=entry.get("safety_cap_percent")
    )

    try:
        return CompanyTerms.model_validate(entry)
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid terms for company '{name}':\n{e}") from e
