"""Rich renderers for benefit projections and lookup tables.

Each renderer takes SDK output dumped to a dict (model_dump(mode="json"))
so the same data backs both the table and --format json output.
"""

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box


def render_projection(console: Console, data: dict) -> None:
    """Render a BenefitProjection.

    Args:
        console: Rich Console instance
        data: BenefitProjection.model_dump(mode="json")
    """
    if data.get("is_capped"):
        console.print(Panel(
            f"[yellow]Benefit capped below the tier target by "
            f"{_fmt(data.get('shortfall_per_pay'))} per paycheck[/yellow]",
            title="Safety Cap",
            border_style="yellow"
        ))

    _render_inputs(console, data)
    _render_amounts_table(console, data)


def _render_inputs(console: Console, data: dict) -> None:
    """Render the resolved inputs panel."""
    rates = data.get("fee_rates", {})

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    table.add_row("Pay Period", f"{data.get('pay_period')} ({data.get('periods_per_year')}/yr)")
    table.add_row("Tier", str(data.get("tier")))
    table.add_row("Filing Status", f"{data.get('filing_status')}, {data.get('dependents')} dependent(s)")
    table.add_row("State", data.get("state") or "[dim]none[/dim]")
    table.add_row("Fee Rates", f"{rates.get('employee_pct')}% employee / {rates.get('employer_pct')}% employer")
    table.add_row("Tier Target", f"{_fmt(data.get('target_monthly'))}/mo")

    console.print(Panel(table, title="Inputs", border_style="dim"))


def _render_amounts_table(console: Console, data: dict) -> None:
    """Render per-pay / monthly / annual amounts."""
    table = Table(
        title=f"Section 125 Projection: {_fmt(data.get('gross_per_pay'))} gross per paycheck",
        box=box.ROUNDED,
    )
    table.add_column("", style="bold", min_width=26)
    table.add_column("Per Pay", justify="right", min_width=12)
    table.add_column("Monthly", justify="right", min_width=12)
    table.add_column("Annual", justify="right", min_width=12)

    def add(label: str, key: str, style: str = "") -> None:
        amounts = data.get(key, {})
        table.add_row(
            label,
            _fmt(amounts.get("per_pay")),
            _fmt(amounts.get("monthly")),
            _fmt(amounts.get("annual")),
            style=style,
        )

    table.add_row("[bold]BENEFIT[/bold]", "", "", "")
    add("  Pre-tax Benefit", "benefit")
    add("  Employee Fee", "employee_fee")
    add("  Employer Fee", "employer_fee")
    table.add_row("", "", "", "")

    table.add_row("[bold]EMPLOYEE[/bold]", "", "", "")
    table.add_row("  Net Pay Before", _fmt(data.get("net_pay_before")), "", "", style="dim")
    table.add_row("  Net Pay After", _fmt(data.get("net_pay_after")), "", "", style="dim")
    add("  State Tax Savings", "state_tax_savings")
    add("  [green]Net Pay Change[/green]", "employee_net_pay_change")
    table.add_row("", "", "", "")

    table.add_row("[bold]EMPLOYER[/bold]", "", "", "")
    add("  FICA Savings", "employer_fica_savings")
    add("  [bold green]Net Savings[/bold green]", "employer_net_savings")

    console.print(table)


def render_affordability(console: Console, data: dict) -> None:
    """Render an Affordability result."""
    sufficient = data.get("is_sufficient")
    status = "[green]Sufficient[/green]" if sufficient else "[red]Shortfall[/red]"

    table = Table(title=f"Affordability: {status}", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=12)
    table.add_column("Per Pay", justify="right", min_width=12)
    table.add_column("Monthly", justify="right", min_width=12)

    table.add_row("Target", _fmt(data.get("target_per_pay")), _fmt(data.get("target_monthly")))
    table.add_row("Safe", _fmt(data.get("safe_per_pay")), _fmt(data.get("safe_monthly")))
    table.add_row("Shortfall", _fmt(data.get("shortfall_per_pay")), _fmt(data.get("shortfall_monthly")))

    console.print(table)

    pct = data.get("percent_of_gross")
    if pct is None:
        console.print("[dim]Percent of gross: n/a (no gross pay)[/dim]")
    else:
        console.print(f"[dim]Safe deduction is {pct:.1f}% of gross pay[/dim]")


def render_benefit_table(console: Console, rows: list) -> None:
    """Render the tier benefit table (output of benefit_table())."""
    table = Table(title="Monthly Section 125 Benefit by Tier", box=box.ROUNDED)
    table.add_column("Tier", style="bold")
    table.add_column("Single, 0 dep", justify="right")
    table.add_column("Single, 1+ dep", justify="right")
    table.add_column("Married, 0 dep", justify="right")
    table.add_column("Married, 1+ dep", justify="right")

    for row in rows:
        table.add_row(
            row["tier"],
            _fmt(row["single_0"]),
            _fmt(row["single_1plus"]),
            _fmt(row["married_0"]),
            _fmt(row["married_1plus"]),
        )

    console.print(table)
    console.print("[dim]Head of household uses the single amounts.[/dim]")


def render_fee_comparison(console: Console, rows: list, pretax_monthly: float) -> None:
    """Render compute_fees_for_models() output."""
    table = Table(
        title=f"Fee Models on {_fmt(pretax_monthly)}/mo Pre-tax Benefit",
        box=box.ROUNDED,
    )
    table.add_column("Model", style="bold")
    table.add_column("Employee %", justify="right")
    table.add_column("Employer %", justify="right")
    table.add_column("Employee Fee", justify="right")
    table.add_column("Employer Fee", justify="right")

    for row in rows:
        table.add_row(
            row["model"],
            f"{row['employee_pct']:g}%",
            f"{row['employer_pct']:g}%",
            _fmt(row["employee_fee_monthly"]),
            _fmt(row["employer_fee_monthly"]),
        )

    console.print(table)


def _fmt(amount: float | None) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"
