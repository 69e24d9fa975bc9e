"""sanelint check command - report and optionally fix violations."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from sanelint.cli.utils import find_project_root, load_cli_config
from sanelint.core.errors import SaneLintError
from sanelint.core.logging import (
    clear_run_id,
    configure_logging,
    get_log_file_path,
    set_run_id,
)
from sanelint.lint.models import LintResult
from sanelint.lint.ops import LintOps


def _print_text(result: LintResult) -> None:
    for diagnostic in result.diagnostics:
        click.echo(diagnostic.format())

    console = Console(stderr=True)
    log_file = get_log_file_path()
    for file_result in result.files:
        for error in file_result.errors:
            message = f"[red]{escape(file_result.path)}[/red]: {escape(str(error))}"
            if log_file:
                message += f". See {escape(str(log_file))} for details."
            console.print(message, highlight=False)

    corrected = result.total_diagnostics - result.remaining_diagnostics
    summary = (
        f"{len(result.files)} file(s) inspected, "
        f"{result.total_diagnostics} offense(s) detected"
    )
    if corrected:
        summary += f", {corrected} corrected"
    color = "green" if result.remaining_diagnostics == 0 else "yellow"
    console.print(f"\n[{color}]{summary}[/{color}]")


@click.command()
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option("--fix", is_flag=True, help="Apply automatic fixes in place")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Report format",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file to use instead of .sanelint.yml",
)
@click.option("--only", multiple=True, help="Run only this rule (repeatable)")
@click.pass_context
def check_command(
    ctx: click.Context,
    paths: tuple[Path, ...],
    fix: bool,
    output_format: str,
    config_file: Path | None,
    only: tuple[str, ...],
) -> None:
    """Check Ruby files for style violations.

    PATHS are files or directories (default: current directory). Exits 1 when
    any offense remains uncorrected.
    """
    project_root = find_project_root()
    config = load_cli_config(project_root, config_file)

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    if not verbose:
        configure_logging(config=config.logging)

    set_run_id()
    try:
        ops = LintOps(project_root, config, only=only or None)
        targets = [str(p.resolve()) for p in paths] if paths else [str(Path.cwd())]
        result = ops.check(targets, fix=fix)
    except SaneLintError as e:
        raise click.ClickException(str(e)) from e
    finally:
        clear_run_id()

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_text(result)

    if result.remaining_diagnostics or any(f.errors for f in result.files):
        ctx.exit(1)
