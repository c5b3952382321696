"""Benefits Calc MCP Server - FastMCP implementation for benefit projection tools."""

import json
import logging
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from benefitscalc.sdk import (
    CompanyTerms,
    EmployeeCensusRow,
    affordability,
    benefit_table,
    billing_breakdown,
    build_proposal,
    get_company_terms,
    get_setting,
    load_configured_state_tax_table,
    project,
    resolve_safety_cap_percent,
)
from benefitscalc.sdk.taxes import calculate_local_tax, calculate_state_tax

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("benefits-calc")


def _company_terms(company: Optional[str], terms: Optional[dict]) -> CompanyTerms:
    """Registered company by name, else inline terms (cap from settings if omitted)."""
    if company:
        return get_company_terms(company)
    if not terms:
        raise ValueError("Provide either 'company' (registered name) or 'terms'")

    terms = dict(terms)
    terms["safety_cap_percent"] = resolve_safety_cap_percent(
        company_value=terms.get("safety_cap_percent")
    )
    return CompanyTerms.model_validate(terms)


# --- Tools ---

@mcp.tool()
async def project_benefit(
    gross_per_pay: float = Field(description="Gross pay per paycheck"),
    pay_period: str = Field(default="biweekly", description="weekly, biweekly, semimonthly or monthly"),
    filing_status: str = Field(default="single", description="single, married or head"),
    dependents: int = Field(default=0, description="Number of dependents"),
    state: str | None = Field(default=None, description="Two-letter state code"),
    fee_model: str | None = Field(default=None, description="Fee model, e.g. '5/3' or '8'"),
    tier: str | None = Field(default=None, description="Pricing tier (default year_2025)"),
    safety_cap_percent: float | None = Field(default=None, description="Cap as percent of gross (default: settings)"),
    state_tax_rate: float | None = Field(default=None, description="Flat state tax rate override (decimal)"),
) -> dict[str, Any]:
    """Project the Section 125 benefit, fees, net pay change and employer savings for one employee."""
    try:
        result = project(
            paycheck_gross=gross_per_pay,
            pay_period=pay_period,
            filing_status=filing_status,
            dependents=dependents,
            state=state,
            fee_model=fee_model,
            tier=tier,
            safety_cap_pct=resolve_safety_cap_percent(employee_value=safety_cap_percent),
            state_tax_rate_override=state_tax_rate,
            tax_table=load_configured_state_tax_table(),
        )
        return result.model_dump(mode="json")

    except Exception as e:
        logger.error(f"Error projecting benefit: {e}")
        return {"error": str(e)}


@mcp.tool()
async def check_affordability(
    target_monthly: float = Field(description="Desired monthly pre-tax benefit"),
    gross_per_pay: float = Field(description="Gross pay per paycheck"),
    pay_period: str = Field(default="biweekly", description="weekly, biweekly, semimonthly or monthly"),
    safety_cap_percent: float | None = Field(default=None, description="Cap as percent of gross (default: settings)"),
) -> dict[str, Any]:
    """Check whether a monthly benefit fits under the safety cap. Returns safe amount and shortfall."""
    try:
        cap = resolve_safety_cap_percent(employee_value=safety_cap_percent)
        result = affordability(target_monthly, gross_per_pay, pay_period, cap)
        return result.model_dump(mode="json")

    except Exception as e:
        logger.error(f"Error checking affordability: {e}")
        return {"error": str(e)}


@mcp.tool()
async def state_income_tax(
    annual_income: float = Field(description="Annual taxable income"),
    state: str = Field(description="Two-letter state code"),
) -> dict[str, Any]:
    """Annual state income tax for an income and state, from the configured tax table."""
    try:
        table = load_configured_state_tax_table()
        config = table.get(state)
        if config is None:
            return {"state": state.upper(), "annual_tax": 0.0, "method": "unknown",
                    "note": "Unknown state, no state tax applied"}

        tax = calculate_state_tax(annual_income, config)
        return {
            "state": state.upper(),
            "tax_year": table.tax_year,
            "method": config.method,
            "annual_tax": round(tax, 2),
        }

    except Exception as e:
        logger.error(f"Error computing state tax: {e}")
        return {"error": str(e)}


@mcp.tool()
async def local_income_tax(
    annual_income: float = Field(description="Annual taxable income"),
    state: str = Field(description="Residence state"),
    city: str = Field(description="Residence city or county"),
    work_state: str | None = Field(default=None, description="Work location state"),
    work_city: str | None = Field(default=None, description="Work location city or county"),
) -> dict[str, Any]:
    """Annual local (city/county) income tax based on where the employee lives and works."""
    try:
        tax = calculate_local_tax(annual_income, state, city, work_state, work_city)
        return {"annual_tax": round(tax, 2)}

    except Exception as e:
        logger.error(f"Error computing local tax: {e}")
        return {"error": str(e)}


@mcp.tool()
async def generate_proposal(
    employees: list[dict] = Field(description="Employees: name, gross_per_pay, pay_period, filing_status, dependents, state, safety_cap_percent"),
    company: str | None = Field(default=None, description="Registered company name"),
    terms: dict | None = Field(default=None, description="Inline company terms: tier, fee_model, pay_period, state, safety_cap_percent"),
    min_gross_per_pay: float | None = Field(default=None, description="Qualification threshold (default: settings, else 0)"),
) -> dict[str, Any]:
    """Project every employee under company terms and total the proposal savings."""
    try:
        company_terms = _company_terms(company, terms)
        rows = [EmployeeCensusRow.model_validate(e) for e in employees]
        if min_gross_per_pay is None:
            min_gross_per_pay = get_setting("min_gross_per_pay", 0)

        summary = build_proposal(
            rows, company_terms, min_gross_per_pay,
            tax_table=load_configured_state_tax_table(),
        )
        return summary.model_dump(mode="json")

    except Exception as e:
        logger.error(f"Error generating proposal: {e}")
        return {"error": str(e)}


@mcp.tool()
async def invoice_breakdown(
    employees: list[dict] = Field(description="Enrolled employees: name, gross_per_pay, filing_status, dependents, ..."),
    company: str | None = Field(default=None, description="Registered company name"),
    terms: dict | None = Field(default=None, description="Inline company terms"),
) -> dict[str, Any]:
    """Monthly fee lines (employee fee, employer fee, allowable benefit) for enrolled employees."""
    try:
        company_terms = _company_terms(company, terms)
        rows = [EmployeeCensusRow.model_validate(e) for e in employees]
        breakdown = billing_breakdown(
            rows, company_terms, tax_table=load_configured_state_tax_table(),
        )
        result = breakdown.model_dump(mode="json")
        result["summary_description"] = breakdown.summary_description
        return result

    except Exception as e:
        logger.error(f"Error computing invoice breakdown: {e}")
        return {"error": str(e)}


# --- Resources ---

@mcp.resource("benefitscalc://tiers")
async def tiers_resource() -> str:
    """Monthly benefit table by pricing tier."""
    return json.dumps({"tiers": benefit_table()}, indent=2)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
