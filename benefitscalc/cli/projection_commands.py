"""Projection commands: project, cap, tiers, fees."""

import json

import click
from rich.console import Console

from benefitscalc.sdk import (
    PayPeriod,
    FilingStatus,
    PricingTier,
    ConfigNotFoundError,
    SettingsValidationError,
    affordability,
    benefit_table,
    calculate_section125_amount,
    compute_fees_for_models,
    get_company_terms,
    load_configured_state_tax_table,
    project,
    resolve_fee_rates,
    resolve_safety_cap_percent,
)
from benefitscalc.sdk.taxes import StateTaxConfigError

from .renderers.projection_renderer import (
    render_affordability,
    render_benefit_table,
    render_fee_comparison,
    render_projection,
)

PAY_PERIOD_CHOICES = [p.value for p in PayPeriod]
TIER_CHOICES = [t.value for t in PricingTier] + ["2025"]
FILING_STATUS_CHOICES = [s.value for s in FilingStatus]

FORMAT_OPTION = click.option(
    "--format", "output_format", type=click.Choice(["table", "json"]), default="table",
    help="Output format (default: table)",
)


def _resolve_cap(cap, company_cap=None) -> float:
    """Explicit --cap, else company terms, else the settings default."""
    try:
        return resolve_safety_cap_percent(employee_value=cap, company_value=company_cap)
    except (ConfigNotFoundError, SettingsValidationError) as e:
        raise click.ClickException(str(e))


@click.command("project")
@click.argument("gross", type=float)
@click.option("--company", "company_name", help="Registered company (see 'company list')")
@click.option("--pay-period", "-p", type=click.Choice(PAY_PERIOD_CHOICES), help="Pay period (default: biweekly)")
@click.option("--filing-status", "-f", type=click.Choice(FILING_STATUS_CHOICES), default="single",
              show_default=True, help="Filing status")
@click.option("--dependents", "-d", type=int, default=0, show_default=True, help="Number of dependents")
@click.option("--state", "-s", help="Two-letter state code")
@click.option("--model", "-m", "fee_model", help="Fee model, e.g. 5/3 or 8")
@click.option("--tier", "-t", type=click.Choice(TIER_CHOICES), help="Pricing tier (default: year_2025)")
@click.option("--cap", type=float, help="Safety cap, percent of gross (default: settings)")
@click.option("--state-rate", type=click.FloatRange(0, 1), help="Flat state tax rate override (decimal, e.g. 0.05)")
@FORMAT_OPTION
def project_cmd(gross, company_name, pay_period, filing_status, dependents, state,
                fee_model, tier, cap, state_rate, output_format):
    """Project the Section 125 benefit for one paycheck.

    GROSS is the employee's gross pay per paycheck. Options given on the
    command line override a registered company's terms.

    Examples:
        benefits-calc project 2000 -p biweekly -s TX -m 5/3 --cap 50
        benefits-calc project 3200 --company acme -f married -d 2
    """
    company = None
    if company_name:
        try:
            company = get_company_terms(company_name)
        except (ConfigNotFoundError, SettingsValidationError) as e:
            raise click.ClickException(str(e))

    if company:
        pay_period = pay_period or company.pay_period
        state = state or company.state
        fee_model = fee_model or company.fee_model
        tier = tier or company.tier
        if state_rate is None:
            state_rate = company.state_tax_rate_override

    safety_cap = _resolve_cap(cap, company.safety_cap_percent if company else None)

    try:
        tax_table = load_configured_state_tax_table()
    except (StateTaxConfigError, SettingsValidationError) as e:
        raise click.ClickException(str(e))

    result = project(
        paycheck_gross=gross,
        pay_period=pay_period,
        filing_status=filing_status,
        dependents=dependents,
        state=state,
        fee_model=fee_model,
        tier=tier,
        safety_cap_pct=safety_cap,
        state_tax_rate_override=state_rate,
        tax_table=tax_table,
    )
    data = result.model_dump(mode="json")

    if output_format == "json":
        click.echo(json.dumps(data, indent=2))
        return

    render_projection(Console(width=120), data)


@click.command("cap")
@click.argument("target_monthly", type=float)
@click.argument("gross", type=float)
@click.option("--pay-period", "-p", type=click.Choice(PAY_PERIOD_CHOICES), default="biweekly",
              show_default=True, help="Pay period")
@click.option("--cap", type=float, help="Safety cap, percent of gross (default: settings)")
@FORMAT_OPTION
def cap_cmd(target_monthly, gross, pay_period, cap, output_format):
    """Check whether a monthly benefit fits under the safety cap.

    TARGET_MONTHLY is the desired monthly benefit; GROSS is gross pay per
    paycheck.

    Example:
        benefits-calc cap 1300 800 --cap 50
    """
    safety_cap = _resolve_cap(cap)
    result = affordability(target_monthly, gross, pay_period, safety_cap)
    data = result.model_dump(mode="json")

    if output_format == "json":
        click.echo(json.dumps(data, indent=2))
        return

    render_affordability(Console(), data)


@click.command("tiers")
@click.option("--tier", "-t", type=click.Choice(TIER_CHOICES), help="Show one tier's amount")
@click.option("--filing-status", "-f", type=click.Choice(FILING_STATUS_CHOICES), default="single")
@click.option("--dependents", "-d", type=int, default=0)
@FORMAT_OPTION
def tiers_cmd(tier, filing_status, dependents, output_format):
    """Show the monthly benefit table by pricing tier.

    With --tier, prints the single amount for that tier, filing status and
    dependent count.
    """
    if tier:
        amount = calculate_section125_amount(tier, filing_status, dependents)
        if output_format == "json":
            click.echo(json.dumps({"tier": tier, "filing_status": filing_status,
                                   "dependents": dependents, "monthly_amount": amount}, indent=2))
        else:
            click.echo(f"${amount:,.2f}/month")
        return

    rows = benefit_table()
    if output_format == "json":
        click.echo(json.dumps(rows, indent=2))
        return

    render_benefit_table(Console(), rows)


@click.command("fees")
@click.option("--tier", "-t", type=click.Choice(TIER_CHOICES), default="year_2025", show_default=True)
@click.option("--model", "-m", "models", multiple=True,
              help="Fee model (repeatable). Default: compare 5/3, 3/4 and 1/5")
@click.option("--pretax-monthly", type=float, help="Monthly benefit to price (default: tier single amount)")
@FORMAT_OPTION
def fees_cmd(tier, models, pretax_monthly, output_format):
    """Show fee rates and compare fee models.

    Examples:
        benefits-calc fees -m 5/3
        benefits-calc fees -m 8 -m 7 -m 6 --pretax-monthly 1300
    """
    models = list(models) or ["5/3", "3/4", "1/5"]
    if pretax_monthly is None:
        pretax_monthly = calculate_section125_amount(tier, "single", 0)

    if len(models) == 1 and output_format == "table":
        rates = resolve_fee_rates(tier, models[0])
        click.echo(f"Fee model {models[0]} ({tier}): {rates.label()}")

    rows = compute_fees_for_models(pretax_monthly, tier, models)
    if output_format == "json":
        click.echo(json.dumps({"pretax_monthly": pretax_monthly, "models": rows}, indent=2))
        return

    render_fee_comparison(Console(), rows, pretax_monthly)
