"""Test the read-only listing mode."""

from rich.console import Console

from cargo_features.cli.output import render_listing
from cargo_features.listing import collect_listing
from cargo_features.metadata import parse_metadata


def _render(listings, show_all):
    console = Console(record=True, width=200, color_system=None, highlight=False)
    render_listing(console, listings, show_all=show_all)
    return console.export_text()


def test_collect_all(metadata_dict):
    listings = collect_listing(parse_metadata(metadata_dict))
    assert [entry.package.name for entry in listings] == ["app", "app-cli"]
    assert len(listings[0].dependencies) == 5


def test_package_filter_is_substring(metadata_dict):
    listings = collect_listing(parse_metadata(metadata_dict), package_pattern="cli")
    assert [entry.package.name for entry in listings] == ["app-cli"]


def test_longer_pattern_does_not_match_shorter_name(metadata_dict):
    metadata = parse_metadata(metadata_dict)
    assert [entry.package.name for entry in collect_listing(metadata, package_pattern="app-cli")] == ["app-cli"]
    assert [entry.package.name for entry in collect_listing(metadata, package_pattern="app")] == ["app", "app-cli"]


def test_dependency_filter(metadata_dict):
    listings = collect_listing(parse_metadata(metadata_dict), dependency_pattern="to")
    deps = [dep.dependency.name for dep in listings[0].dependencies]
    assert deps == ["tokio"]
    assert listings[1].dependencies == []


def test_render_enabled_only(metadata_dict):
    listings = collect_listing(parse_metadata(metadata_dict), package_pattern="app-cli")
    output = _render(listings, show_all=False)
    assert output.splitlines() == [
        "app-cli:",
        "  clap:",
        "    default = [std, color]",
        "    derive = [clap_derive]",
    ]


def test_render_all_with_markers(metadata_dict):
    listings = collect_listing(parse_metadata(metadata_dict), package_pattern="app-cli")
    output = _render(listings, show_all=True)
    assert output.splitlines() == [
        "app-cli:",
        "  clap:",
        "    [x] default = [std, color]",
        "    [ ] color = []",
        "    [x] derive = [clap_derive]",
        "    [ ] std = []",
    ]


def test_render_labels_non_normal_dependencies(metadata_dict):
    listings = collect_listing(parse_metadata(metadata_dict), package_pattern="app", dependency_pattern="pretty")
    output = _render(listings[:1], show_all=False)
    assert "  pretty_assertions (dev):" in output.splitlines()
