"""CLI utilities."""

from pathlib import Path

import click

from sanelint.config import SaneLintConfig, load_config
from sanelint.config.loader import REPO_CONFIG_NAME
from sanelint.core.errors import ConfigError


def find_project_root(start_path: Path | None = None) -> Path:
    """Find the directory holding the repo config.

    Walks up from start_path looking for ``.sanelint.yml`` or a ``.git``
    directory. Falls back to start_path itself when neither is found.
    """
    if start_path is None:
        start_path = Path.cwd()

    start = start_path.resolve()
    current = start
    while True:
        if (current / REPO_CONFIG_NAME).exists() or (current / ".git").exists():
            return current
        if current == current.parent:
            return start
        current = current.parent


def load_cli_config(project_root: Path, config_file: Path | None) -> SaneLintConfig:
    """Load config, turning config errors into click errors."""
    try:
        return load_config(project_root, config_file=config_file)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
