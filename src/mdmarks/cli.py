"""CLI entry point for mdmarks: validate and inspect the settings file."""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

import mdmarks.io.logging_setup
import mdmarks.settings
from mdmarks.config import ConfigError, RenderConfig

logger = logging.getLogger(__name__)

_SECTIONS = ("heading", "code", "dash", "bullet", "checkbox", "quote", "pipe_table", "sign")


def config_table(config: RenderConfig) -> Table:
    """Effective option values, one row per feature option."""
    table = Table(title="mdmarks configuration")
    table.add_column("option")
    table.add_column("value")
    for key in ("enabled", "file_types", "max_file_size", "render_modes", "width"):
        table.add_row(key, Text(repr(getattr(config, key))))
    for section in _SECTIONS:
        values = getattr(config, section)
        for f in dataclasses.fields(values):
            table.add_row(f"{section}.{f.name}", Text(repr(getattr(values, f.name))))
    table.add_row("callouts", ", ".join(c.name for c in config.callouts))
    return table


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Markdown decoration marks: settings check")
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings file (default: $XDG_CONFIG_HOME/mdmarks/settings.json)",
    )
    parser.add_argument("--quiet", action="store_true", help="Only report errors")
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also log to this file (default: $MDMARKS_LOG_FILE, else none)",
    )
    args = parser.parse_args(argv)

    runtime = mdmarks.io.logging_setup.configure(log_file=args.log_file)
    if runtime.file_path:
        logger.debug("logging to %s", runtime.file_path)

    console = Console()
    path = args.settings or mdmarks.settings.get_config_path()
    try:
        config = mdmarks.settings.load_config(path)
    except ConfigError as exc:
        console.print(f"[bold red]invalid settings[/] {escape(str(path))}: {escape(str(exc))}")
        return 1
    if not args.quiet:
        console.print(config_table(config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
