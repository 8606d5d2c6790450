# ABOUTME: CLI package for audioshelf, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from audioshelf.cli.commands import info_cmd, inspect_cmd, ls_cmd, scan_cmd, settings_cmd


@click.group()
@click.version_option(package_name="audioshelf")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """audioshelf - an audiobook library manager."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


cli.add_command(scan_cmd.scan)
cli.add_command(ls_cmd.ls)
cli.add_command(info_cmd.info)
cli.add_command(inspect_cmd.inspect)
cli.add_command(settings_cmd.settings)
