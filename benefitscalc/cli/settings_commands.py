"""Settings CLI commands for Benefits Calc.

Manages settings.json - default safety cap, proposal threshold, tax tables.
"""

import click

from benefitscalc.sdk import (
    SETTING_KEYS,
    SettingsValidationError,
    get_settings_path,
    load_settings,
    set_setting,
    unset_setting,
)
from benefitscalc.sdk.taxes import DEFAULT_TAX_YEAR


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - safety_cap_percent: default cap on the benefit, percent of gross pay
    - min_gross_per_pay: proposal qualification threshold per paycheck
    - tax_year: bundled state tax table year
    - state_tax_file: path to a custom state tax YAML
    - profile: path to profile.yaml
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    try:
        current = load_settings()
    except SettingsValidationError as e:
        raise click.ClickException(str(e))

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective values:")
    cap = current.get("safety_cap_percent")
    click.echo(f"  safety_cap_percent: {cap if cap is not None else '(not set - pass --cap)'}")
    click.echo(f"  min_gross_per_pay: {current.get('min_gross_per_pay', 0)}")
    click.echo(f"  tax_year: {current.get('tax_year', DEFAULT_TAX_YEAR)}")


@settings.command("set")
@click.argument("key", type=click.Choice(SETTING_KEYS))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE.

    Examples:
        benefits-calc settings set safety_cap_percent 50
        benefits-calc settings set min_gross_per_pay 500
    """
    try:
        path = set_setting(key, value)
    except SettingsValidationError as e:
        raise click.ClickException(f"Invalid value for {key}: {value}\n{e}")

    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key", type=click.Choice(SETTING_KEYS))
def settings_unset(key):
    """Remove KEY, reverting to the default."""
    try:
        removed = unset_setting(key)
    except SettingsValidationError as e:
        raise click.ClickException(str(e))

    if removed:
        click.echo(f"Cleared {key} setting.")
    else:
        click.echo(f"{key} was not set.")
