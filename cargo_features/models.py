"""
Core types for cargo-features.

These are read views over one ``cargo metadata`` snapshot plus the values
derived from it while a single invocation runs. Nothing here is persisted;
the manifest text is the only durable state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import WorkspaceError

DEFAULT_FEATURE = "default"

# Manifest table holding each dependency kind reported by cargo metadata.
DEPENDENCY_TABLES = {
    None: "dependencies",
    "normal": "dependencies",
    "dev": "dev-dependencies",
    "build": "build-dependencies",
}


@dataclass
class Dependency:
    """A direct dependency edge of a workspace package."""

    name: str
    req: str
    uses_default_features: bool = True
    features: List[str] = field(default_factory=list)
    kind: Optional[str] = None
    rename: Optional[str] = None
    target: Optional[str] = None
    source: Optional[str] = None
    optional: bool = False

    @property
    def manifest_key(self) -> str:
        """Key under which the dependency is declared in the manifest."""
        return self.rename or self.name

    @property
    def table(self) -> str:
        return DEPENDENCY_TABLES.get(self.kind, "dependencies")

    @property
    def label(self) -> str:
        """Text shown for this dependency in prompts and listings."""
        qualifiers = []
        if self.kind in ("dev", "build"):
            qualifiers.append(self.kind)
        if self.target:
            qualifiers.append(self.target)
        if qualifiers:
            return f"{self.manifest_key} ({', '.join(qualifiers)})"
        return self.manifest_key

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Dependency:
        """Create a Dependency from one ``dependencies`` entry of cargo metadata."""
        return cls(
            name=data["name"],
            req=data.get("req") or "*",
            uses_default_features=bool(data.get("uses_default_features", True)),
            features=list(data.get("features") or []),
            kind=data.get("kind"),
            rename=data.get("rename"),
            target=data.get("target"),
            source=data.get("source"),
            optional=bool(data.get("optional", False)),
        )


@dataclass
class WorkspacePackage:
    """A workspace member with its manifest and direct dependencies."""

    name: str
    manifest_path: Path
    dependencies: List[Dependency] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> WorkspacePackage:
        return cls(
            name=data["name"],
            manifest_path=Path(data["manifest_path"]),
            dependencies=[Dependency.from_dict(dep) for dep in data.get("dependencies") or []],
        )


@dataclass
class TargetPackage:
    """A package some workspace member depends on, with its declared feature map."""

    name: str
    version: Optional[str] = None
    source: Optional[str] = None
    features: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def has_default(self) -> bool:
        return DEFAULT_FEATURE in self.features

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TargetPackage:
        features = data.get("features") or {}
        return cls(
            name=data["name"],
            version=data.get("version"),
            source=data.get("source"),
            features={name: list(includes) for name, includes in features.items()},
        )


@dataclass
class Feature:
    """One feature of a target package and the names it directly enables."""

    name: str
    includes: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.name} = [{', '.join(self.includes)}]"


@dataclass
class DependencyFeatureState:
    """Candidate features of a dependency and the subset currently enabled."""

    features: List[Feature] = field(default_factory=list)
    enabled_features: List[str] = field(default_factory=list)
    has_default: bool = False

    def is_enabled(self, name: str) -> bool:
        return name in self.enabled_features

    def get_feature(self, name: str) -> Optional[Feature]:
        for feature in self.features:
            if feature.name == name:
                return feature
        return None


@dataclass
class FeatureSelection:
    """Normalized result of a feature selection, ready to be written."""

    uses_default_features: bool
    explicit_features: List[str] = field(default_factory=list)


@dataclass
class WorkspaceMetadata:
    """One snapshot of ``cargo metadata`` output."""

    workspace_packages: List[WorkspacePackage] = field(default_factory=list)
    packages: List[TargetPackage] = field(default_factory=list)

    def find_target(self, dependency: Dependency) -> TargetPackage:
        """
        Find the package a dependency points at.

        When several versions of the same package are present, the one from
        the same source as the dependency wins; otherwise the first is used.

        Raises:
            WorkspaceError: If no package with that name is in the metadata
        """
        candidates = [pkg for pkg in self.packages if pkg.name == dependency.name]
        if not candidates:
            raise WorkspaceError(
                f"Package '{dependency.name}' is not present in the workspace metadata",
                hint="Run `cargo fetch` or `cargo update` so the dependency is resolved",
                context={"dependency": dependency.manifest_key},
            )
        if dependency.source is not None:
            for candidate in candidates:
                if candidate.source == dependency.source:
                    return candidate
        return candidates[0]


__all__ = [
    "DEFAULT_FEATURE",
    "DEPENDENCY_TABLES",
    "Dependency",
    "WorkspacePackage",
    "TargetPackage",
    "Feature",
    "DependencyFeatureState",
    "FeatureSelection",
    "WorkspaceMetadata",
]
