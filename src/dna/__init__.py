"""Sonic DNA extraction for Sonic Guardian.

This module turns a Strudel pattern into its "DNA": the canonical set of
literal feature calls it makes, independent of formatting, call order and
duplicates, plus a salted digest of that set.
"""

from src.dna.canonical import canonicalize, feature_names, render_feature
from src.dna.digest import demo_hash_hex, digest, digest_async, generate_salt, sha256_hex
from src.dna.extractor import ArgKind, ClassifiedArg, FeatureCall, classify_arg, extract_features
from src.dna.parser import iter_nodes, parse_pattern
from src.dna.pipeline import (
    canonical_dna,
    compute_sonic_dna,
    compute_sonic_dna_async,
    extract_sonic_dna,
    extract_sonic_dna_async,
    validate_source,
)

__all__ = [
    "ArgKind",
    "ClassifiedArg",
    "FeatureCall",
    "canonical_dna",
    "canonicalize",
    "classify_arg",
    "compute_sonic_dna",
    "compute_sonic_dna_async",
    "demo_hash_hex",
    "digest",
    "digest_async",
    "extract_features",
    "extract_sonic_dna",
    "extract_sonic_dna_async",
    "feature_names",
    "generate_salt",
    "iter_nodes",
    "parse_pattern",
    "render_feature",
    "sha256_hex",
    "validate_source",
]
