"""Read-only listing of dependency features across the workspace."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .features import resolve_features
from .models import Dependency, DependencyFeatureState, WorkspaceMetadata, WorkspacePackage


@dataclass
class DependencyListing:
    dependency: Dependency
    state: DependencyFeatureState


@dataclass
class PackageListing:
    package: WorkspacePackage
    dependencies: List[DependencyListing] = field(default_factory=list)


def _matches(name: str, pattern: Optional[str]) -> bool:
    return not pattern or pattern in name


def collect_listing(
    metadata: WorkspaceMetadata,
    package_pattern: Optional[str] = None,
    dependency_pattern: Optional[str] = None,
) -> List[PackageListing]:
    """
    Resolve features for every dependency of every matching workspace package.

    Patterns are plain substrings: a package is kept when its name contains
    ``package_pattern`` and a dependency when its manifest key contains
    ``dependency_pattern``.
    """
    listings = []
    for package in metadata.workspace_packages:
        if not _matches(package.name, package_pattern):
            continue
        entry = PackageListing(package=package)
        for dependency in package.dependencies:
            if not _matches(dependency.manifest_key, dependency_pattern):
                continue
            target = metadata.find_target(dependency)
            entry.dependencies.append(
                DependencyListing(dependency=dependency, state=resolve_features(target, dependency))
            )
        listings.append(entry)
    return listings


__all__ = ["DependencyListing", "PackageListing", "collect_listing"]
