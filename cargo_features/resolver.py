"""
Package and dependency resolution.

Both resolvers share one shape: skip the prompt when there is a single
candidate, auto-pick the best fuzzy match for a keyword, and otherwise ask
the user. The answer is a label, mapped back to its record with a checked
lookup.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, TypeVar, Union

from .errors import CANCELLED, Cancelled, InvariantViolation, WorkspaceError, is_cancelled
from .matching import fuzzy_match
from .models import Dependency, WorkspacePackage
from .prompts import Selector

logger = logging.getLogger(__name__)

T = TypeVar("T")

PACKAGE_PROMPT = "Select workspace package:"
DEPENDENCY_PROMPT = "Select dependency:"


def lookup_by_label(items: Sequence[T], label: str, label_of: Callable[[T], str]) -> T:
    """
    Return the single item whose label is ``label``.

    Raises:
        InvariantViolation: If zero or several items carry that label
    """
    matches = [item for item in items if label_of(item) == label]
    if len(matches) != 1:
        raise InvariantViolation(
            f"Selected option '{label}' matched {len(matches)} records instead of exactly one",
            context={"label": label, "options": [label_of(item) for item in items]},
        )
    return matches[0]


def _choose(
    items: Sequence[T],
    label_of: Callable[[T], str],
    keyword: Optional[str],
    selector: Selector,
    message: str,
) -> Union[T, Cancelled]:
    labels: List[str] = [label_of(item) for item in items]

    if len(items) == 1:
        logger.debug("Only one option (%s), skipping prompt", labels[0])
        return items[0]

    if keyword:
        matches = fuzzy_match(labels, keyword)
        if matches:
            answer = matches[0][0]
            logger.debug("Keyword %r matched %r", keyword, answer)
        else:
            logger.debug("Keyword %r matched nothing, prompting", keyword)
            answer = selector.select_one(message, labels, starting_filter=keyword)
    else:
        answer = selector.select_one(message, labels)

    if is_cancelled(answer):
        return CANCELLED
    return lookup_by_label(items, answer, label_of)


def choose_package(
    packages: Sequence[WorkspacePackage],
    keyword: Optional[str],
    selector: Selector,
) -> Union[WorkspacePackage, Cancelled]:
    """Pick one workspace package, prompting only when it cannot be decided."""
    if not packages:
        raise WorkspaceError(
            "The workspace has no member packages",
            hint="Run the command inside a Cargo workspace or pass --manifest-path",
        )
    return _choose(packages, lambda pkg: pkg.name, keyword, selector, PACKAGE_PROMPT)


def choose_dependency(
    package: WorkspacePackage,
    keyword: Optional[str],
    selector: Selector,
) -> Union[Dependency, Cancelled]:
    """Pick one direct dependency of ``package``."""
    if not package.dependencies:
        raise WorkspaceError(
            f"Package '{package.name}' has no dependencies",
            context={"manifest": str(package.manifest_path)},
        )
    return _choose(package.dependencies, lambda dep: dep.label, keyword, selector, DEPENDENCY_PROMPT)


__all__ = [
    "PACKAGE_PROMPT",
    "DEPENDENCY_PROMPT",
    "lookup_by_label",
    "choose_package",
    "choose_dependency",
]
