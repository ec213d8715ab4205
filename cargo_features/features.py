"""
Feature resolution and selection.

``resolve_features`` derives what a dependency currently enables and the
ordered list of features the target package offers. ``choose_features``
lets the user toggle them and ``fold_selection`` normalizes the answer into
the default-features flag plus the explicit feature list.
"""

from __future__ import annotations

import logging
from typing import Iterable, Union

from .errors import CANCELLED, Cancelled, is_cancelled
from .models import (
    DEFAULT_FEATURE,
    Dependency,
    DependencyFeatureState,
    Feature,
    FeatureSelection,
    TargetPackage,
)
from .prompts import Selector
from .resolver import lookup_by_label

logger = logging.getLogger(__name__)

FEATURES_PROMPT = "Toggle features"


def feature_sort_key(name: str):
    """Sort key placing ``default`` first and everything else by name."""
    return (name != DEFAULT_FEATURE, name)


def resolve_features(target: TargetPackage, dependency: Dependency) -> DependencyFeatureState:
    """
    Compute candidate features and the enabled baseline for a dependency.

    The baseline is the dependency's explicit feature list, with ``default``
    put in front when the target declares it and default features are on.
    Implied features are shown but never expanded.
    """
    enabled = list(dependency.features)
    if target.has_default and dependency.uses_default_features and DEFAULT_FEATURE not in enabled:
        enabled.insert(0, DEFAULT_FEATURE)

    candidates = [Feature(name=name, includes=list(includes)) for name, includes in target.features.items()]
    candidates.sort(key=lambda feature: feature_sort_key(feature.name))

    return DependencyFeatureState(
        features=candidates,
        enabled_features=enabled,
        has_default=target.has_default,
    )


def fold_selection(state: DependencyFeatureState, checked: Iterable[str]) -> FeatureSelection:
    """
    Normalize checked feature names into a FeatureSelection.

    Without a declared ``default`` feature there is nothing to switch off,
    so default features always stay on. Explicit features follow display
    order, not the order they were checked in.
    """
    checked_names = set(checked)
    uses_default = (not state.has_default) or DEFAULT_FEATURE in checked_names
    explicit = [
        feature.name
        for feature in state.features
        if feature.name in checked_names and feature.name != DEFAULT_FEATURE
    ]
    return FeatureSelection(uses_default_features=uses_default, explicit_features=explicit)


def choose_features(
    state: DependencyFeatureState,
    selector: Selector,
) -> Union[FeatureSelection, Cancelled]:
    """Let the user toggle features; returns the folded selection or CANCELLED."""
    labels = [str(feature) for feature in state.features]
    defaults = [str(feature) for feature in state.features if state.is_enabled(feature.name)]

    answer = selector.select_subset(FEATURES_PROMPT, labels, defaults)
    if is_cancelled(answer):
        return CANCELLED

    checked = [lookup_by_label(state.features, label, str).name for label in answer]
    state.enabled_features = [feature.name for feature in state.features if feature.name in checked]
    selection = fold_selection(state, checked)
    logger.debug(
        "Selected features: default=%s explicit=%s",
        selection.uses_default_features,
        selection.explicit_features,
    )
    return selection


__all__ = [
    "FEATURES_PROMPT",
    "feature_sort_key",
    "resolve_features",
    "fold_selection",
    "choose_features",
]
