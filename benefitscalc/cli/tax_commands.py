"""State and local tax lookup commands."""

import json

import click

from benefitscalc.sdk import SettingsValidationError, load_configured_state_tax_table
from benefitscalc.sdk.taxes import (
    StateTaxConfigError,
    available_tax_years,
    calculate_local_tax,
    calculate_state_tax,
    get_cities_with_local_tax,
    get_local_tax_config,
    load_state_tax_table,
)


@click.command("state-tax")
@click.argument("income", type=float)
@click.argument("state")
@click.option("--year", type=int, help="Bundled tax table year (default: settings or latest)")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text")
def state_tax_cmd(income, state, year, output_format):
    """Annual state income tax on INCOME for STATE.

    Example:
        benefits-calc state-tax 52000 MO
    """
    try:
        if year:
            table = load_state_tax_table(year=year)
        else:
            table = load_configured_state_tax_table()
    except StateTaxConfigError as e:
        years = ", ".join(str(y) for y in available_tax_years())
        raise click.ClickException(f"{e}\nBundled years: {years}")
    except SettingsValidationError as e:
        raise click.ClickException(str(e))

    code = state.strip().upper()
    config = table.get(code)
    if config is None:
        click.echo(f"Unknown state '{state}': no state tax applied.", err=True)
        tax = 0.0
        method = "unknown"
    else:
        tax = calculate_state_tax(income, config)
        method = config.method

    if output_format == "json":
        click.echo(json.dumps({
            "state": code,
            "tax_year": table.tax_year,
            "method": method,
            "annual_income": income,
            "annual_tax": round(tax, 2),
            "effective_rate": round(tax / income, 6) if income > 0 else 0.0,
        }, indent=2))
        return

    click.echo(f"{code} {table.tax_year} ({method}): ${tax:,.2f} on ${income:,.2f}")
    if income > 0:
        click.echo(f"Effective rate: {tax / income:.2%}")


@click.command("local-tax")
@click.argument("income", type=float)
@click.option("--state", "-s", required=True, help="Residence state")
@click.option("--city", "-c", help="Residence city or county")
@click.option("--work-state", help="Work location state")
@click.option("--work-city", help="Work location city or county")
@click.option("--list", "list_cities", is_flag=True, help="List taxing jurisdictions in --state")
def local_tax_cmd(income, state, city, work_state, work_city, list_cities):
    """Annual local (city/county) income tax on INCOME.

    Examples:
        benefits-calc local-tax 60000 -s MI -c Detroit
        benefits-calc local-tax 60000 -s OH -c Dayton --work-state OH --work-city Columbus
        benefits-calc local-tax 0 -s PA --list
    """
    if list_cities:
        cities = get_cities_with_local_tax(state)
        if not cities:
            click.echo(f"No local income taxes in {state.upper()}.")
            return
        for name in sorted(cities):
            config = get_local_tax_config(state, name)
            click.echo(f"  {config.city}: {config.resident_rate:.2%} resident, "
                       f"{config.non_resident_rate:.2%} non-resident")
        return

    if not city:
        raise click.BadParameter("--city is required unless --list is given", param_hint="--city")

    residence = get_local_tax_config(state, city)
    if residence is None and not work_city:
        click.echo(f"No local income tax for {city}, {state.upper()}.")
        return

    tax = calculate_local_tax(income, state, city, work_state, work_city)
    click.echo(f"Local tax: ${tax:,.2f} on ${income:,.2f}")
    if residence and residence.notes:
        click.echo(f"Note: {residence.notes}")
