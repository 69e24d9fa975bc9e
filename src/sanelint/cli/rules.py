"""sanelint rules command - list available rules."""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from sanelint.cli.utils import find_project_root, load_cli_config
from sanelint.lint.rules import registry


@click.command()
@click.option(
    "--config",
    "config_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file to use instead of .sanelint.yml",
)
def rules_command(config_file: Path | None) -> None:
    """List rules with their enabled state and severity."""
    config = load_cli_config(find_project_root(), config_file)

    table = Table(title="SaneLint rules")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Enabled")
    table.add_column("Severity")
    table.add_column("Description")

    for rule in registry.instantiate(config.rules):
        enabled = "[green]yes[/green]" if rule.enabled else "[dim]no[/dim]"
        table.add_row(rule.rule_id, enabled, rule.default_severity.value, rule.description)

    Console().print(table)
