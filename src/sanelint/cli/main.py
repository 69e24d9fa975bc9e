"""SaneLint CLI - sanelint command."""

import click

from sanelint.cli.check import check_command
from sanelint.cli.rules import rules_command
from sanelint.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="sanelint")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """SaneLint - structural style rules for Ruby."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(check_command, name="check")
cli.add_command(rules_command, name="rules")


if __name__ == "__main__":
    cli()
