"""Tests for settings.json and profile.yaml handling."""

import json

import pytest
import yaml

from benefitscalc.sdk.config import (
    ConfigNotFoundError,
    SettingsValidationError,
    get_company_terms,
    get_config_dir,
    get_profile_path,
    get_setting,
    list_companies,
    load_configured_state_tax_table,
    load_settings,
    resolve_safety_cap_percent,
    save_profile,
    set_setting,
    unset_setting,
)
from benefitscalc.sdk.pay_frequency import PayPeriod


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point the config directory at an empty temp directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("BENEFITS_CALC_CONFIG_PATH", str(config_dir))
    return config_dir


class TestConfigDir:

    def test_env_var(self, isolated_env):
        assert get_config_dir() == isolated_env

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("BENEFITS_CALC_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / "benefits-calc"


class TestSettings:

    def test_missing_file_is_empty(self, isolated_env):
        assert load_settings() == {}
        assert get_setting("safety_cap_percent") is None
        assert get_setting("min_gross_per_pay", 0) == 0

    def test_set_and_get(self, isolated_env):
        path = set_setting("safety_cap_percent", "50")
        assert path == isolated_env / "settings.json"
        assert get_setting("safety_cap_percent") == 50.0
        assert json.loads(path.read_text()) == {"safety_cap_percent": 50.0}

    def test_set_int_setting(self, isolated_env):
        set_setting("tax_year", "2026")
        assert get_setting("tax_year") == 2026

    def test_unknown_key_rejected(self, isolated_env):
        with pytest.raises(SettingsValidationError):
            set_setting("color", "blue")

    @pytest.mark.parametrize("value", ["150", "-1", "abc"])
    def test_invalid_cap_rejected(self, isolated_env, value):
        with pytest.raises(SettingsValidationError):
            set_setting("safety_cap_percent", value)

    def test_invalid_file_rejected(self, isolated_env):
        isolated_env.mkdir()
        (isolated_env / "settings.json").write_text(json.dumps({"min_gross_per_pay": -5}))
        with pytest.raises(SettingsValidationError, match="Invalid settings"):
            load_settings()

    def test_corrupt_json_rejected(self, isolated_env):
        isolated_env.mkdir()
        (isolated_env / "settings.json").write_text("{not json")
        with pytest.raises(SettingsValidationError, match="Invalid JSON"):
            load_settings()

    def test_unset(self, isolated_env):
        set_setting("min_gross_per_pay", 500)
        assert unset_setting("min_gross_per_pay") is True
        assert unset_setting("min_gross_per_pay") is False
        assert get_setting("min_gross_per_pay") is None


class TestResolveSafetyCap:

    def test_employee_wins(self, isolated_env):
        set_setting("safety_cap_percent", 50)
        assert resolve_safety_cap_percent(employee_value=30, company_value=40) == 30

    def test_company_then_settings(self, isolated_env):
        set_setting("safety_cap_percent", 50)
        assert resolve_safety_cap_percent(company_value=40) == 40
        assert resolve_safety_cap_percent() == 50

    def test_zero_is_a_value(self, isolated_env):
        assert resolve_safety_cap_percent(employee_value=0) == 0

    def test_missing_raises(self, isolated_env):
        with pytest.raises(ConfigNotFoundError, match="safety_cap_percent"):
            resolve_safety_cap_percent()


class TestConfiguredStateTaxTable:

    def test_default_year(self, isolated_env):
        assert load_configured_state_tax_table().tax_year == 2026

    def test_custom_file(self, isolated_env, tmp_path):
        custom = tmp_path / "rates.yaml"
        custom.write_text("tax_year: 2031\nstates:\n  TX: {method: none}\n")
        set_setting("state_tax_file", str(custom))
        assert load_configured_state_tax_table().tax_year == 2031


class TestCompanies:

    @pytest.fixture
    def profile(self, isolated_env):
        save_profile({
            "companies": {
                "acme": {"tier": "2025", "fee_model": "5/3", "pay_period": "S",
                         "state": "TX", "safety_cap_percent": 40},
                "globex": {"tier": "pre_2025", "fee_model": "7"},
            }
        })
        return get_profile_path()

    def test_profile_path(self, isolated_env):
        assert get_profile_path() == isolated_env / "profile.yaml"

    def test_list(self, profile):
        assert list_companies() == ["acme", "globex"]

    def test_terms(self, profile):
        terms = get_company_terms("acme")
        assert terms.pay_period is PayPeriod.SEMIMONTHLY
        assert terms.safety_cap_percent == 40
        assert terms.fee_model == "5/3"

    def test_cap_from_settings(self, profile):
        set_setting("safety_cap_percent", 50)
        assert get_company_terms("globex").safety_cap_percent == 50

    def test_cap_missing(self, profile):
        with pytest.raises(ConfigNotFoundError):
            get_company_terms("globex")

    def test_unknown_company(self, profile):
        with pytest.raises(ConfigNotFoundError, match="acme, globex"):
            get_company_terms("initech")

    def test_invalid_terms(self, isolated_env):
        save_profile({"companies": {"bad": {"fee_model": "5/3", "safety_cap_percent": 50,
                                            "discount": 5}}})
        with pytest.raises(SettingsValidationError):
            get_company_terms("bad")

    def test_list_shaped_profile_rejected(self, isolated_env):
        isolated_env.mkdir()
        (isolated_env / "profile.yaml").write_text("- acme\n- globex\n")
        with pytest.raises(SettingsValidationError, match="mapping"):
            list_companies()

    def test_list_shaped_companies_rejected(self, isolated_env):
        save_profile({"companies": ["acme"]})
        with pytest.raises(SettingsValidationError):
            get_company_terms("acme")

    def test_scalar_company_entry_rejected(self, isolated_env):
        save_profile({"companies": {"acme": "5/3"}})
        with pytest.raises(SettingsValidationError, match="acme"):
            get_company_terms("acme")

    def test_malformed_yaml_rejected(self, isolated_env):
        isolated_env.mkdir()
        (isolated_env / "profile.yaml").write_text("companies: [unclosed\n")
        with pytest.raises(SettingsValidationError, match="Invalid YAML"):
            list_companies()

    def test_profile_is_yaml(self, profile):
        data = yaml.safe_load(profile.read_text())
        assert "acme" in data["companies"]
