"""
cargo-features: interactively toggle the features of a Cargo dependency.

The package is organised leaf-first:

* ``metadata`` – runs ``cargo metadata`` and builds read views of the
  workspace (``models``).
* ``resolver`` – picks the workspace package and the dependency, from a
  keyword when possible and through a prompt otherwise (``prompts``,
  ``matching``).
* ``features`` – computes the candidate features and the enabled set, and
  folds the user's answer into a default-features flag plus a feature list.
* ``manifest`` – rewrites that one dependency entry in ``Cargo.toml``
  while preserving the rest of the file.
* ``listing`` and ``pipeline`` – the read-only listing mode and the staged
  interactive flow used by ``cli``.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata


def _local_version() -> str | None:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("cargo-features")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"

__all__ = ["__version__"]
