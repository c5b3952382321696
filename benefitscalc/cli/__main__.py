"""Benefits Calc CLI - Section 125 benefit projections from the command line."""

import logging

import click

from benefitscalc import __version__

from .company_commands import company as company_group
from .projection_commands import cap_cmd, fees_cmd, project_cmd, tiers_cmd
from .settings_commands import settings as settings_group
from .tax_commands import local_tax_cmd, state_tax_cmd


@click.group()
@click.version_option(version=__version__, prog_name="benefits-calc")
@click.option("--verbose", "-v", is_flag=True, help="Log calculation fallbacks (DEBUG)")
def cli(verbose):
    """Benefits Calc - Section 125 pre-tax benefit projections.

    Projects the pre-tax benefit, fees, net pay change and employer
    savings for an employee, and looks up state and local tax.

    Configuration is loaded from (in order):

    \b
    1. BENEFITS_CALC_CONFIG_PATH environment variable
    2. ~/.config/benefits-calc/ (XDG default)

    Set a default safety cap with
    'benefits-calc settings set safety_cap_percent 50'.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Add subcommand groups
cli.add_command(settings_group)
cli.add_command(company_group)

cli.add_command(project_cmd)
cli.add_command(cap_cmd)
cli.add_command(tiers_cmd)
cli.add_command(fees_cmd)
cli.add_command(state_tax_cmd)
cli.add_command(local_tax_cmd)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
