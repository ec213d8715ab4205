"""
Workspace metadata for cargo-features.

Runs ``cargo metadata`` once per invocation and turns its JSON output into
the read views defined in :mod:`cargo_features.models`.
"""

from __future__ import annotations

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import MetadataQueryError
from .models import TargetPackage, WorkspaceMetadata, WorkspacePackage

logger = logging.getLogger(__name__)

METADATA_FORMAT_VERSION = "1"

# Upper bound for stderr echoed back in error messages.
_STDERR_LIMIT = 2000


def parse_metadata(data: Dict[str, Any]) -> WorkspaceMetadata:
    """
    Build a WorkspaceMetadata from decoded ``cargo metadata`` JSON.

    Workspace members are returned in ``workspace_members`` order.

    Raises:
        MetadataQueryError: If required keys are missing or malformed
    """
    try:
        packages_data: List[Dict[str, Any]] = data["packages"]
        member_ids: List[str] = data["workspace_members"]
        by_id = {pkg["id"]: pkg for pkg in packages_data}
        workspace_packages = [
            WorkspacePackage.from_dict(by_id[member_id])
            for member_id in member_ids
            if member_id in by_id
        ]
        packages = [TargetPackage.from_dict(pkg) for pkg in packages_data]
    except (KeyError, TypeError, AttributeError) as exc:
        raise MetadataQueryError(
            f"Unexpected cargo metadata layout: {exc}",
            context={"original_type": exc.__class__.__name__},
        ) from exc

    return WorkspaceMetadata(workspace_packages=workspace_packages, packages=packages)


class MetadataSource(ABC):
    """Anything able to produce a WorkspaceMetadata snapshot."""

    @abstractmethod
    def load(self) -> WorkspaceMetadata:
        """Return a fresh metadata snapshot."""


class StaticMetadataSource(MetadataSource):
    """Metadata source over already-decoded JSON (embedding, tests)."""

    def __init__(self, data: Dict[str, Any]):
        self.data = data

    def load(self) -> WorkspaceMetadata:
        return parse_metadata(self.data)


class CargoMetadataSource(MetadataSource):
    """Queries ``cargo metadata --format-version 1``."""

    def __init__(self, cargo: str = "cargo", manifest_path: Optional[Path] = None):
        self.cargo = cargo
        self.manifest_path = manifest_path

    def command(self) -> List[str]:
        cmd = [self.cargo, "metadata", "--format-version", METADATA_FORMAT_VERSION]
        if self.manifest_path is not None:
            cmd.extend(["--manifest-path", str(self.manifest_path)])
        return cmd

    def load(self) -> WorkspaceMetadata:
        cmd = self.command()
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise MetadataQueryError(
                f"Could not run '{self.cargo}': {exc}",
                hint="Make sure cargo is installed and on PATH, or set $CARGO",
                context={"command": " ".join(cmd)},
            ) from exc

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            if len(stderr) > _STDERR_LIMIT:
                stderr = f"{stderr[:_STDERR_LIMIT - 3]}..."
            raise MetadataQueryError(
                f"cargo metadata exited with status {result.returncode}"
                + (f": {stderr}" if stderr else ""),
                context={"command": " ".join(cmd), "returncode": result.returncode},
            )

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as exc:
            raise MetadataQueryError(
                f"cargo metadata returned invalid JSON: {exc}",
                context={"command": " ".join(cmd)},
            ) from exc

        if not isinstance(data, dict):
            raise MetadataQueryError("cargo metadata returned an unexpected document")

        metadata = parse_metadata(data)
        logger.debug(
            "Loaded metadata: %d workspace packages, %d packages",
            len(metadata.workspace_packages),
            len(metadata.packages),
        )
        return metadata


__all__ = [
    "METADATA_FORMAT_VERSION",
    "parse_metadata",
    "MetadataSource",
    "StaticMetadataSource",
    "CargoMetadataSource",
]
