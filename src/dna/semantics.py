"""Musical categories of canonical features.

Categories are descriptive only. They never feed the DNA string or the hash.
"""
from typing import Dict, Iterable, Tuple

from src.dna.canonical import identity_features, render_feature
from src.dna.extractor import FeatureCall

RHYTHMIC_CALLS = frozenset({
    "s", "note", "n", "bd", "sd", "hh", "oh", "cp", "rim",
    # pattern combinators
    "pattern", "stack", "seq", "cat",
})
HARMONIC_CALLS = frozenset({"scale", "chord", "n", "note"})
TEMPORAL_CALLS = frozenset({"slow", "fast", "sometimes", "when", "cpm", "slowfast"})

CATEGORIES = {
    "rhythmic_features": RHYTHMIC_CALLS,
    "harmonic_features": HARMONIC_CALLS,
    "temporal_features": TEMPORAL_CALLS,
}


def categorize(features: Iterable[FeatureCall]) -> Dict[str, Tuple[str, ...]]:
    """Split features into sorted, de-duplicated category tuples.

    A call can belong to more than one category (``note`` is both rhythmic
    and harmonic).
    """
    buckets = {key: set() for key in CATEGORIES}
    for feature in identity_features(features):
        for key, names in CATEGORIES.items():
            if feature.name in names:
                buckets[key].add(render_feature(feature))
    return {key: tuple(sorted(values)) for key, values in buckets.items()}
