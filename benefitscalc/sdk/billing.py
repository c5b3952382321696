"""Monthly fee breakdown for enrolled employees.

Each billing period the capped Section 125 deduction is recomputed for
every enrolled employee. Invoices carry one combined fee line plus one
detail line per employee (allowable benefit, employee fee, employer fee).
"""

import logging
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from .money import round_money, to_cents
from .proposal import CompanyTerms, EmployeeCensusRow, project_employee
from .taxes.schemas import StateTaxTable

logger = logging.getLogger(__name__)


class InvoiceLine(BaseModel):
    """Per-employee detail line (monthly amounts)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    section_125_monthly: float
    employee_fee_monthly: float
    employer_fee_monthly: float
    allowable_benefit_monthly: float
    is_capped: bool
    total_fee_cents: int
    allowable_benefit_cents: int


class InvoiceBreakdown(BaseModel):
    """Fee lines for one company and billing period."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    employee_count: int
    total_fees_monthly: float
    total_fees_cents: int
    lines: List[InvoiceLine]

    @property
    def summary_description(self) -> str:
        return f"Benefits Builder Fees - {self.employee_count} employees"


def billing_breakdown(
    employees: Iterable[EmployeeCensusRow],
    company: CompanyTerms,
    *,
    tax_table: Optional[StateTaxTable] = None,
) -> InvoiceBreakdown:
    """Compute monthly fee lines for a company's enrolled employees.

    Args:
        employees: Enrolled employees (active and elected)
        company: Company terms; each employee's cap overrides the company's
        tax_table: State tax table (default: bundled current year)

    Returns:
        InvoiceBreakdown with per-employee lines and the combined total
    """
    lines = []
    for employee in employees:
        projection = project_employee(employee, company, tax_table=tax_table)
        employee_fee = projection.employee_fee.monthly
        employer_fee = projection.employer_fee.monthly
        allowable = projection.employee_net_pay_change.monthly

        lines.append(InvoiceLine(
            name=employee.name,
            section_125_monthly=projection.benefit.monthly,
            employee_fee_monthly=employee_fee,
            employer_fee_monthly=employer_fee,
            allowable_benefit_monthly=allowable,
            is_capped=projection.is_capped,
            total_fee_cents=to_cents(employee_fee + employer_fee),
            allowable_benefit_cents=to_cents(allowable),
        ))

    total_fees = round_money(sum(l.employee_fee_monthly + l.employer_fee_monthly for l in lines))
    if any(l.is_capped for l in lines):
        logger.debug(f"{sum(l.is_capped for l in lines)} employee(s) capped below tier target")

    return InvoiceBreakdown(
        employee_count=len(lines),
        total_fees_monthly=total_fees,
        total_fees_cents=to_cents(total_fees),
        lines=lines,
    )
