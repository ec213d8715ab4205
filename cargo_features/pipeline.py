"""
Staged pipeline: package → dependency → features → manifest.

Each stage either yields a value or CANCELLED; the first cancellation ends
the run before any later stage, so the manifest is only opened once a
selection exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Union

from .errors import CANCELLED, Cancelled, is_cancelled
from .features import choose_features, resolve_features
from .listing import PackageListing, collect_listing
from .manifest import ManifestWriter
from .metadata import MetadataSource
from .models import Dependency, FeatureSelection, WorkspacePackage
from .prompts import Selector
from .resolver import choose_dependency, choose_package

logger = logging.getLogger(__name__)


@dataclass
class FeatureUpdate:
    """What a completed run wrote."""

    package: WorkspacePackage
    dependency: Dependency
    selection: FeatureSelection

    @property
    def manifest_path(self) -> Path:
        return self.package.manifest_path


def manage_features(
    source: MetadataSource,
    selector: Selector,
    package_keyword: Optional[str] = None,
    dependency_keyword: Optional[str] = None,
    writer_factory: Callable[[Path], ManifestWriter] = ManifestWriter,
) -> Union[FeatureUpdate, Cancelled]:
    """Run the interactive flow and persist the selection."""
    metadata = source.load()

    package = choose_package(metadata.workspace_packages, package_keyword, selector)
    if is_cancelled(package):
        return CANCELLED
    logger.debug("Package: %s", package.name)

    dependency = choose_dependency(package, dependency_keyword, selector)
    if is_cancelled(dependency):
        return CANCELLED
    logger.debug("Dependency: %s", dependency.label)

    target = metadata.find_target(dependency)
    state = resolve_features(target, dependency)
    selection = choose_features(state, selector)
    if is_cancelled(selection):
        return CANCELLED

    writer_factory(package.manifest_path).update(dependency, selection)
    return FeatureUpdate(package=package, dependency=dependency, selection=selection)


def list_features(
    source: MetadataSource,
    package_pattern: Optional[str] = None,
    dependency_pattern: Optional[str] = None,
) -> List[PackageListing]:
    """Resolve features for the listing mode; never touches a manifest."""
    return collect_listing(source.load(), package_pattern, dependency_pattern)


__all__ = ["FeatureUpdate", "manage_features", "list_features"]
