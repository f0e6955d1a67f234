"""Sonic DNA extraction: validate, parse, extract, canonicalize, digest."""
import dataclasses
import logging
from typing import Any, Dict, Optional, Tuple

from src.config import MAX_SOURCE_LENGTH
from src.dna.canonical import canonicalize, feature_names
from src.dna.digest import DigestProvider, digest, digest_async
from src.dna.extractor import extract_features
from src.dna.parser import parse_pattern
from src.dna.semantics import categorize
from src.errors import InvalidInputError, PatternSyntaxError
from src.models.sonic import HashScheme, SonicDNA

logger = logging.getLogger(__name__)


def validate_source(source: Any, max_length: int = MAX_SOURCE_LENGTH) -> str:
    """Return the trimmed source or raise InvalidInputError.

    Oversized input is rejected, never truncated.
    """
    if not isinstance(source, str):
        raise InvalidInputError("Invalid code provided", "INVALID_CODE")
    trimmed = source.strip()
    if not trimmed:
        raise InvalidInputError("Empty code provided", "EMPTY_CODE")
    if len(trimmed) > max_length:
        raise InvalidInputError(
            f"Code too long ({len(trimmed)} > {max_length} characters)", "CODE_TOO_LONG"
        )
    return trimmed


def canonical_dna(source: Any, capture_semantics: bool = False) -> Tuple[str, Dict[str, Any]]:
    """Run every stage before the digest.

    Returns:
        The canonical DNA string and the descriptive record fields
        (feature names, plus categories when ``capture_semantics`` is set)
    """
    code = validate_source(source)
    features = extract_features(parse_pattern(code))
    extras: Dict[str, Any] = {"features": tuple(feature_names(features))}
    if capture_semantics:
        extras.update(categorize(features))
    dna = canonicalize(features)
    logger.debug("Extracted %d feature calls, dna=%r", len(features), dna)
    return dna, extras


def compute_sonic_dna(
    source: Any,
    salt: Optional[str] = None,
    include_timestamp: bool = False,
    scheme: HashScheme = HashScheme.SHA256,
    capture_semantics: bool = False,
) -> SonicDNA:
    """Extract the Sonic DNA of a pattern, raising on any failure.

    Args:
        source: Strudel pattern source
        salt: Salt to reuse (registration salt during recovery). A fresh
            128-bit salt is generated when omitted.
        include_timestamp: Record the capture time
        scheme: Digest function, SHA-256 unless explicitly demoing
        capture_semantics: Also fill the rhythmic/harmonic/temporal fields

    Returns:
        A complete SonicDNA record

    Raises:
        InvalidInputError: Empty, non-string or oversized source
        PatternSyntaxError: Source does not parse
        DigestUnavailableError: SHA-256 missing from this interpreter
        RandomnessUnavailableError: No secure randomness for the salt
    """
    dna, extras = canonical_dna(source, capture_semantics)
    record = digest(dna, salt=salt, include_timestamp=include_timestamp, scheme=scheme)
    return dataclasses.replace(record, **extras)


async def compute_sonic_dna_async(
    source: Any,
    salt: Optional[str] = None,
    include_timestamp: bool = False,
    scheme: HashScheme = HashScheme.SHA256,
    capture_semantics: bool = False,
    provider: Optional[DigestProvider] = None,
) -> SonicDNA:
    """Awaitable :func:`compute_sonic_dna`; identical dna and hash for a given salt."""
    dna, extras = canonical_dna(source, capture_semantics)
    record = await digest_async(
        dna,
        salt=salt,
        include_timestamp=include_timestamp,
        scheme=scheme,
        provider=provider,
    )
    return dataclasses.replace(record, **extras)


def extract_sonic_dna(
    source: Any,
    salt: Optional[str] = None,
    include_timestamp: bool = False,
    scheme: HashScheme = HashScheme.SHA256,
    capture_semantics: bool = False,
) -> Optional[SonicDNA]:
    """Extract Sonic DNA, returning None for bad input.

    Invalid or unparseable sources are logged and give None. Missing
    cryptographic primitives still raise: a commitment must never be built
    on a silently weakened hash.
    """
    try:
        return compute_sonic_dna(
            source,
            salt=salt,
            include_timestamp=include_timestamp,
            scheme=scheme,
            capture_semantics=capture_semantics,
        )
    except (InvalidInputError, PatternSyntaxError) as e:
        logger.warning("Failed to extract Sonic DNA [%s]: %s", e.code, e.message)
        return None


async def extract_sonic_dna_async(
    source: Any,
    salt: Optional[str] = None,
    include_timestamp: bool = False,
    scheme: HashScheme = HashScheme.SHA256,
    capture_semantics: bool = False,
    provider: Optional[DigestProvider] = None,
) -> Optional[SonicDNA]:
    try:
        return await compute_sonic_dna_async(
            source,
            salt=salt,
            include_timestamp=include_timestamp,
            scheme=scheme,
            capture_semantics=capture_semantics,
            provider=provider,
        )
    except (InvalidInputError, PatternSyntaxError) as e:
        logger.warning("Failed to extract Sonic DNA [%s]: %s", e.code, e.message)
        return None
