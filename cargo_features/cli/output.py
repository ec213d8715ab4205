"""
Terminal rendering for cargo-features.

Listing output is indented two spaces per level: package, dependency,
feature. Everything is built from rich ``Text`` objects so square brackets
in feature lists are never read as console markup.
"""

from typing import Iterable

from rich.console import Console
from rich.text import Text

from ..listing import PackageListing
from ..models import Feature


def make_console(color: bool = True, stderr: bool = False) -> Console:
    return Console(highlight=False, no_color=not color, stderr=stderr, soft_wrap=True)


def feature_text(feature: Feature) -> Text:
    """
    Render ``name = [includes]`` with the includes dimmed.

    Examples:
        >>> feature_text(Feature("derive", ["serde_derive"])).plain
        'derive = [serde_derive]'
    """
    return Text.assemble(
        (feature.name, "blue"),
        (f" = [{', '.join(feature.includes)}]", "bright_black"),
    )


def enabled_marker(enabled: bool) -> Text:
    return Text.assemble(
        ("[", "bright_black"),
        ("x", "green") if enabled else " ",
        ("]", "bright_black"),
    )


def render_listing(console: Console, listings: Iterable[PackageListing], show_all: bool = False) -> None:
    """
    Print packages, their dependencies and dependency features.

    With ``show_all`` every declared feature is printed behind an
    enabled/disabled marker; otherwise only enabled features are shown.
    """
    for listing in listings:
        console.print(Text.assemble((listing.package.name, "cyan"), ":"))
        for entry in listing.dependencies:
            console.print(Text.assemble("  ", entry.dependency.label, ":"))
            state = entry.state
            if show_all:
                for feature in state.features:
                    console.print(
                        Text.assemble("    ", enabled_marker(state.is_enabled(feature.name)), " ", feature_text(feature))
                    )
            else:
                for name in state.enabled_features:
                    feature = state.get_feature(name) or Feature(name=name)
                    console.print(Text.assemble("    ", feature_text(feature)))


def print_success(console: Console, message: str) -> None:
    """
    Print success message with checkmark prefix.

    Examples:
        >>> print_success(make_console(color=False), "Updated serde")  # doctest: +SKIP
        ✓ Updated serde
    """
    console.print(Text.assemble(("✓", "green"), " ", message))


def print_notice(console: Console, message: str) -> None:
    console.print(Text(message, style="yellow"))
