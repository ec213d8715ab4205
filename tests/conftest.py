"""Shared fixtures for cargo-features tests."""

from pathlib import Path
from textwrap import dedent

import pytest

from cargo_features.metadata import StaticMetadataSource
from cargo_features.prompts import Selector


APP_MANIFEST = dedent("""\
    [package]
    name = "app"
    version = "0.1.0"
    edition = "2021"

    # runtime deps
    [dependencies]
    serde = "1.0" # serialization
    tokio = { version = "1.4.2", default-features = false, features = ["rt"] }
    tinyvec = "1.6"

    [dev-dependencies]
    pretty_assertions = "1"

    [target.'cfg(windows)'.dependencies]
    winapi = "0.3"
""")

CLI_MANIFEST = dedent("""\
    [package]
    name = "app-cli"
    version = "0.1.0"

    [dependencies]
    clap = { version = "4.5", features = ["derive"] }
""")

TARGET_FEATURES = {
    "serde": {
        "std": [],
        "derive": ["serde_derive"],
        "default": ["std"],
        "alloc": [],
        "rc": [],
    },
    "tokio": {
        "rt": [],
        "macros": ["tokio-macros"],
        "full": ["macros", "rt"],
        "default": [],
    },
    "tinyvec": {
        "std": ["alloc"],
        "alloc": [],
    },
    "pretty_assertions": {
        "default": ["std"],
        "std": [],
    },
    "winapi": {
        "winuser": [],
        "std": [],
    },
    "clap": {
        "default": ["std", "color"],
        "std": [],
        "color": [],
        "derive": ["clap_derive"],
    },
}


def dependency_entry(name, req, uses_default_features=True, features=(), kind=None, rename=None, target=None):
    return {
        "name": name,
        "source": "registry+https://github.com/rust-lang/crates.io-index",
        "req": req,
        "kind": kind,
        "rename": rename,
        "optional": False,
        "uses_default_features": uses_default_features,
        "features": list(features),
        "target": target,
        "registry": None,
    }


def package_entry(name, version, manifest_path, dependencies=(), features=None, source=None):
    return {
        "name": name,
        "version": version,
        "id": f"{name} {version} ({source or 'path+file:///ws'})",
        "source": source,
        "dependencies": list(dependencies),
        "features": features or {},
        "manifest_path": str(manifest_path),
    }


def build_metadata(root: Path, members=("app", "app-cli")):
    """Create a ``cargo metadata`` document for the sample workspace rooted at ``root``."""
    registry = "registry+https://github.com/rust-lang/crates.io-index"
    app = package_entry(
        "app",
        "0.1.0",
        root / "app" / "Cargo.toml",
        dependencies=[
            dependency_entry("serde", "^1.0"),
            dependency_entry("tokio", "^1.4.2", uses_default_features=False, features=["rt"]),
            dependency_entry("tinyvec", "^1.6"),
            dependency_entry("pretty_assertions", "^1", kind="dev"),
            dependency_entry("winapi", "^0.3", target="cfg(windows)"),
        ],
    )
    app_cli = package_entry(
        "app-cli",
        "0.1.0",
        root / "app-cli" / "Cargo.toml",
        dependencies=[dependency_entry("clap", "^4.5", features=["derive"])],
    )
    targets = [
        package_entry(name, "1.0.0", f"/registry/{name}/Cargo.toml", features=features, source=registry)
        for name, features in TARGET_FEATURES.items()
    ]
    members_by_name = {"app": app, "app-cli": app_cli}
    selected = [members_by_name[name] for name in members]
    return {
        "packages": [app, app_cli] + targets,
        "workspace_members": [pkg["id"] for pkg in selected],
        "workspace_root": str(root),
        "version": 1,
    }


class ScriptedSelector(Selector):
    """
    Selector replaying canned answers in order.

    An answer may be a value, CANCELLED, or a callable receiving
    ``(options, defaults)`` and returning the value.
    """

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []

    def _next(self, options, defaults):
        if not self.answers:
            raise AssertionError("Unexpected prompt")
        answer = self.answers.pop(0)
        if callable(answer):
            return answer(options, defaults)
        return answer

    def select_one(self, message, options, starting_filter=None):
        self.calls.append(("one", message, list(options), starting_filter))
        return self._next(options, ())

    def select_subset(self, message, options, defaults=()):
        self.calls.append(("subset", message, list(options), list(defaults)))
        return self._next(options, defaults)


def check(*names):
    """Answer a feature prompt by checking exactly ``names``."""

    def answer(options, defaults):
        return [option for option in options if option.split(" = ")[0] in names]

    return answer


def keep_defaults(options, defaults):
    return list(defaults)


@pytest.fixture
def workspace(tmp_path):
    """Temporary workspace with two member manifests."""
    root = tmp_path / "ws"
    (root / "app").mkdir(parents=True)
    (root / "app-cli").mkdir(parents=True)
    (root / "app" / "Cargo.toml").write_text(APP_MANIFEST)
    (root / "app-cli" / "Cargo.toml").write_text(CLI_MANIFEST)
    return root


@pytest.fixture
def metadata_dict(workspace):
    return build_metadata(workspace)


@pytest.fixture
def source(metadata_dict):
    return StaticMetadataSource(metadata_dict)
