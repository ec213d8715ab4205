"""
cargo-features CLI entry point.

Installed as the ``cargo-features`` executable, which Cargo runs for
``cargo features ...`` with ``features`` as the first argument:

    cargo features [-p PACKAGE] [-d DEPENDENCY]
    cargo features list [-p PACKAGE] [-d DEPENDENCY] [--all]
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..config import Settings
from ..errors import is_cancelled
from ..metadata import CargoMetadataSource, MetadataSource
from ..pipeline import list_features, manage_features
from ..prompts import QuestionarySelector, Selector
from .errors import handle_cli_exception
from .output import make_console, print_notice, print_success, render_listing

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CONSOLE_HANDLER = 'cargo_features.console'

_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


@dataclass
class CLIContext:
    """
    Collaborators shared by the ``features`` commands.

    ``source`` and ``selector`` are created lazily from the settings unless
    a caller (tests, embedders) supplies them through click's ``obj``.
    """

    settings: Settings = field(default_factory=Settings.from_env)
    source: Optional[MetadataSource] = None
    selector: Optional[Selector] = None


def configure_logging(settings: Settings) -> None:
    """Configure the ``cargo_features`` logger from settings."""
    level = logging.DEBUG if settings.verbose else _LEVELS.get(settings.log_level, logging.WARNING)

    logger = logging.getLogger('cargo_features')
    logger.setLevel(level)

    if not any(handler.get_name() == CONSOLE_HANDLER for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(CONSOLE_HANDLER)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False


@click.group(name="cargo")
@click.version_option(__version__, prog_name="cargo-features")
def cli():
    """Cargo plugin for toggling dependency features."""


@cli.group(name="features", invoke_without_command=True)
@click.option("-p", "--package", metavar="PACKAGE", help="Workspace package name")
@click.option("-d", "--dependency", metavar="DEPENDENCY", help="Dependency name")
@click.option(
    "--manifest-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to Cargo.toml, forwarded to cargo metadata",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs and error details")
@click.pass_context
def features(ctx, package, dependency, manifest_path, verbose):
    """Manage workspace dependency features."""
    obj = ctx.ensure_object(CLIContext)
    if verbose:
        obj.settings.verbose = True
    configure_logging(obj.settings)

    if obj.source is None:
        obj.source = CargoMetadataSource(cargo=obj.settings.cargo, manifest_path=manifest_path)
    if obj.selector is None:
        obj.selector = QuestionarySelector()

    if ctx.invoked_subcommand is not None:
        return

    try:
        result = manage_features(obj.source, obj.selector, package, dependency)
    except Exception as exc:
        handle_cli_exception(exc, obj.settings)
        return

    if is_cancelled(result):
        print_notice(make_console(obj.settings.color, stderr=True), "Cancelled, no changes made.")
        return

    print_success(
        make_console(obj.settings.color),
        f"Updated {result.dependency.manifest_key} in {result.manifest_path}",
    )


@features.command(name="list")
@click.option("-p", "--package", metavar="PACKAGE", help="Only packages whose name contains PACKAGE")
@click.option("-d", "--dependency", metavar="DEPENDENCY", help="Only dependencies whose name contains DEPENDENCY")
@click.option("-a", "--all", "show_all", is_flag=True, default=False, help="Show every feature with its state")
@click.pass_obj
def list_command(obj, package, dependency, show_all):
    """List workspace dependencies and their features."""
    try:
        listings = list_features(obj.source, package, dependency)
    except Exception as exc:
        handle_cli_exception(exc, obj.settings)
        return

    render_listing(make_console(obj.settings.color), listings, show_all=show_all)


def main(argv=None) -> None:
    """Console-script entry point."""
    cli.main(args=argv, prog_name="cargo")


__all__ = ["cli", "features", "list_command", "main", "CLIContext", "configure_logging"]
