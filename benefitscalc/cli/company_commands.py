"""Company CLI commands for Benefits Calc.

Manages registered company terms in profile.yaml.
"""

import click
import yaml

from benefitscalc.sdk import (
    CompanyTerms,
    ConfigNotFoundError,
    PayPeriod,
    PricingTier,
    SettingsValidationError,
    get_company_terms,
    get_profile_path,
    list_companies,
    load_profile,
    save_profile,
)


def _load_profile() -> dict:
    try:
        return load_profile()
    except SettingsValidationError as e:
        raise click.ClickException(str(e))


@click.group()
def company():
    """Manage registered companies (profile.yaml).

    Registered terms are used by 'benefits-calc project --company NAME'.
    """
    pass


@company.command("list")
def company_list():
    """List registered companies."""
    try:
        names = list_companies()
    except SettingsValidationError as e:
        raise click.ClickException(str(e))

    if not names:
        click.echo(f"No companies registered in {get_profile_path()}")
        return
    for name in names:
        click.echo(name)


@company.command("show")
@click.argument("name")
def company_show(name):
    """Show the resolved terms for company NAME."""
    try:
        terms = get_company_terms(name)
    except (ConfigNotFoundError, SettingsValidationError) as e:
        raise click.ClickException(str(e))

    click.echo(f"Company: {name}")
    click.echo(yaml.dump(terms.model_dump(mode="json"), default_flow_style=False, sort_keys=False))


@company.command("add")
@click.argument("name")
@click.option("--tier", "-t", type=click.Choice([t.value for t in PricingTier]), default="year_2025")
@click.option("--model", "-m", "fee_model", required=True, help="Fee model, e.g. 5/3 or 8")
@click.option("--pay-period", "-p", type=click.Choice([p.value for p in PayPeriod]), default="biweekly")
@click.option("--state", "-s", help="Default two-letter state code")
@click.option("--cap", type=float, help="Company safety cap, percent of gross (default: settings)")
@click.option("--state-rate", type=click.FloatRange(0, 1), help="Flat state tax rate override (decimal)")
@click.option("--force", is_flag=True, help="Replace an existing entry")
def company_add(name, tier, fee_model, pay_period, state, cap, state_rate, force):
    """Register company NAME with its terms.

    Example:
        benefits-calc company add acme -m 5/3 -p biweekly -s TX --cap 50
    """
    profile = _load_profile()
    companies = profile.get("companies") or {}
    profile["companies"] = companies

    if name in companies and not force:
        raise click.ClickException(f"Company '{name}' already registered (use --force to replace)")

    entry = {"tier": tier, "fee_model": fee_model, "pay_period": pay_period}
    if state:
        entry["state"] = state.upper()
    if cap is not None:
        entry["safety_cap_percent"] = cap
    if state_rate is not None:
        entry["state_tax_rate_override"] = state_rate

    # Validate with a placeholder cap; the real cap may come from settings
    try:
        CompanyTerms.model_validate({"safety_cap_percent": 0, **entry})
    except ValueError as e:
        raise click.ClickException(f"Invalid company terms:\n{e}")

    companies[name] = entry
    path = save_profile(profile)
    click.echo(f"Registered {name}")
    click.echo(f"Saved to: {path}")


@company.command("remove")
@click.argument("name")
def company_remove(name):
    """Remove company NAME."""
    profile = _load_profile()
    companies = profile.get("companies") or {}
    if name not in companies:
        raise click.ClickException(f"Company '{name}' is not registered")

    del companies[name]
    save_profile(profile)
    click.echo(f"Removed {name}")
