"""Canonical DNA string construction."""
from typing import AbstractSet, Iterable, List, Optional

from src.config import DNA_DENYLIST
from src.dna.extractor import FeatureCall
from src.dna.normalize import render_arg

SEPARATOR = "|"


def render_feature(feature: FeatureCall) -> str:
    """Render ``name(arg1,arg2,...)`` keeping argument order."""
    return f"{feature.name}({','.join(render_arg(a) for a in feature.args)})"


def identity_features(
    features: Iterable[FeatureCall],
    denylist: Optional[AbstractSet[str]] = None,
) -> List[FeatureCall]:
    """Drop infrastructure calls that carry no musical identity."""
    excluded = DNA_DENYLIST if denylist is None else denylist
    return [f for f in features if f.name not in excluded]


def canonicalize(
    features: Iterable[FeatureCall],
    denylist: Optional[AbstractSet[str]] = None,
) -> str:
    """Build the canonical DNA string for a sequence of feature calls.

    Features on the denylist are removed, identical renderings collapse to
    one, and the rest are sorted by their full rendered text, so any
    permutation of the input gives the same string.

    Args:
        features: Extracted feature calls, in any order
        denylist: Callee names to exclude. Defaults to DNA_DENYLIST.

    Returns:
        Pipe-joined canonical features, empty when nothing remains
    """
    rendered = {render_feature(f) for f in identity_features(features, denylist)}
    return SEPARATOR.join(sorted(rendered))


def feature_names(
    features: Iterable[FeatureCall],
    denylist: Optional[AbstractSet[str]] = None,
) -> List[str]:
    """Distinct callee names in first-seen order."""
    names: List[str] = []
    for feature in identity_features(features, denylist):
        if feature.name not in names:
            names.append(feature.name)
    return names
