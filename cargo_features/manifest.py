"""
Manifest writer.

Rewrites a single dependency entry of a ``Cargo.toml`` with tomlkit so that
every other line of the document, comments included, survives untouched.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional, Union

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import InlineTable
from tomlkit.toml_document import TOMLDocument

from .errors import ManifestParseError, ManifestWriteError
from .models import Dependency, FeatureSelection

logger = logging.getLogger(__name__)


def strip_caret(req: str) -> str:
    """Drop caret operators: ``^1.4.2`` is written as ``1.4.2``."""
    return req.strip().lstrip("^")


def render_dependency_value(
    version: str,
    selection: FeatureSelection,
    package: Optional[str] = None,
    optional: bool = False,
) -> Union[str, InlineTable]:
    """
    Build the manifest value for a dependency.

    A bare version string is used when default features are on and nothing
    else is selected; any other combination becomes an inline table with
    ``version``, then ``default-features = false`` if needed, then
    ``features``. A renamed dependency keeps ``package`` as its first key and
    an optional one keeps ``optional = true`` as its last, so both always
    get the table form.
    """
    if selection.uses_default_features and not selection.explicit_features:
        if package is None and not optional:
            return version

    table = tomlkit.inline_table()
    if package is not None:
        table.append("package", package)
    table.append("version", version)
    if not selection.uses_default_features:
        table.append("default-features", False)
    if selection.explicit_features:
        features = tomlkit.array()
        features.extend(selection.explicit_features)
        table.append("features", features)
    if optional:
        table.append("optional", True)
    return table


class ManifestWriter:
    """Reads, edits and writes back one manifest file."""

    def __init__(self, manifest_path: Union[str, Path]):
        self.manifest_path = Path(manifest_path)

    def read(self) -> TOMLDocument:
        try:
            with open(self.manifest_path, "r", encoding="utf-8", newline="") as handle:
                text = handle.read()
        except OSError as exc:
            raise ManifestParseError(
                f"Could not read manifest {self.manifest_path}: {exc}",
                context={"manifest": str(self.manifest_path)},
            ) from exc
        try:
            return tomlkit.parse(text)
        except TOMLKitError as exc:
            raise ManifestParseError(
                f"Manifest {self.manifest_path} is not valid TOML: {exc}",
                hint="Fix the syntax error and run the command again",
                context={"manifest": str(self.manifest_path)},
            ) from exc

    def _dependency_table(self, doc: TOMLDocument, dependency: Dependency):
        container = doc
        if dependency.target:
            if "target" not in container:
                container["target"] = tomlkit.table(is_super_table=True)
            targets = container["target"]
            if dependency.target not in targets:
                targets[dependency.target] = tomlkit.table(is_super_table=True)
            container = targets[dependency.target]
        if dependency.table not in container:
            container[dependency.table] = tomlkit.table()
        return container[dependency.table]

    def apply(self, doc: TOMLDocument, dependency: Dependency, selection: FeatureSelection) -> TOMLDocument:
        """Replace the dependency's value in ``doc`` in place."""
        value = render_dependency_value(
            strip_caret(dependency.req),
            selection,
            package=dependency.name if dependency.rename else None,
            optional=dependency.optional,
        )
        table = self._dependency_table(doc, dependency)
        key = dependency.manifest_key
        existing = table.get(key)
        if isinstance(value, str) and isinstance(existing, str):
            if str(existing) == value:
                logger.debug("%s already declared as %r, leaving it untouched", key, value)
                return doc
        table[key] = value
        return doc

    def write(self, doc: TOMLDocument) -> None:
        """Write ``doc`` to a sibling temp file, then move it over the manifest."""
        text = tomlkit.dumps(doc)
        temp_path = self.manifest_path.with_name(f"{self.manifest_path.name}.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8", newline="") as handle:
                handle.write(text)
            shutil.copymode(self.manifest_path, temp_path)
            temp_path.replace(self.manifest_path)
        except OSError as exc:
            self._discard(temp_path)
            raise ManifestWriteError(
                f"Could not write manifest {self.manifest_path}: {exc}",
                hint="Check the file permissions and free disk space",
                context={"manifest": str(self.manifest_path)},
            ) from exc

    @staticmethod
    def _discard(temp_path: Path) -> None:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove temporary file %s: %s", temp_path, exc)

    def update(self, dependency: Dependency, selection: FeatureSelection) -> None:
        """Parse the manifest, rewrite one dependency entry and save the whole document."""
        doc = self.read()
        self.apply(doc, dependency, selection)
        self.write(doc)
        logger.info(
            "Updated %s.%s in %s",
            dependency.table,
            dependency.manifest_key,
            self.manifest_path,
        )


__all__ = ["strip_caret", "render_dependency_value", "ManifestWriter"]
