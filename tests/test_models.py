"""Test core types."""

from cargo_features.models import (
    Dependency,
    DependencyFeatureState,
    Feature,
    TargetPackage,
    WorkspaceMetadata,
)


class TestDependency:
    """Test Dependency properties"""

    def test_from_dict_defaults(self):
        dep = Dependency.from_dict({"name": "serde"})
        assert dep.req == "*"
        assert dep.uses_default_features is True
        assert dep.features == []
        assert dep.kind is None
        assert dep.optional is False

    def test_from_dict_rename_and_optional(self):
        dep = Dependency.from_dict({"name": "serde", "req": "^1", "rename": "ser", "optional": True})
        assert dep.manifest_key == "ser"
        assert dep.optional is True

    def test_manifest_key_prefers_rename(self):
        assert Dependency(name="serde", req="1", rename="ser").manifest_key == "ser"
        assert Dependency(name="serde", req="1").manifest_key == "serde"

    def test_table(self):
        assert Dependency(name="a", req="1").table == "dependencies"
        assert Dependency(name="a", req="1", kind="dev").table == "dev-dependencies"
        assert Dependency(name="a", req="1", kind="build").table == "build-dependencies"

    def test_label(self):
        assert Dependency(name="serde", req="1").label == "serde"
        assert Dependency(name="serde", req="1", kind="dev").label == "serde (dev)"
        assert Dependency(name="winapi", req="1", target="cfg(windows)").label == "winapi (cfg(windows))"


def test_feature_str():
    assert str(Feature("full", ["macros", "rt"])) == "full = [macros, rt]"
    assert str(Feature("alloc")) == "alloc = []"


def test_state_lookup():
    state = DependencyFeatureState(features=[Feature("std")], enabled_features=["std"])
    assert state.is_enabled("std")
    assert state.get_feature("std").name == "std"
    assert state.get_feature("alloc") is None


def test_find_target_prefers_matching_source():
    registry = "registry+https://github.com/rust-lang/crates.io-index"
    metadata = WorkspaceMetadata(packages=[
        TargetPackage(name="rand", version="0.7.3", source="git+https://example.com/rand"),
        TargetPackage(name="rand", version="0.8.5", source=registry),
    ])
    assert metadata.find_target(Dependency(name="rand", req="^0.8", source=registry)).version == "0.8.5"
    assert metadata.find_target(Dependency(name="rand", req="*")).version == "0.7.3"
