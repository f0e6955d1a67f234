"""Values consumed by the external commitment layer.

The on-chain contract publishes ``commit = H(hash, blinding)`` and later
verifies a revealed pair. This module generates blinding factors, computes
the SHA-256 form of that commitment, and validates field-element encodings;
it makes no network calls.
"""
import hashlib
import hmac
import re
import secrets

from src.config import BLINDING_BYTES
from src.errors import InvalidInputError, RandomnessUnavailableError

# Order of the Stark field used by felt252 values
STARK_PRIME = 0x800000000000011000000000000000000000000000000000000000000000001

_HEX = re.compile(r"^[0-9a-fA-F]+$")


def _strip_prefix(value: str) -> str:
    return value[2:] if value[:2].lower() == "0x" else value


def is_valid_hex(value: str) -> bool:
    """True for a non-empty hex string, with or without a 0x prefix."""
    if not value or not isinstance(value, str):
        return False
    return bool(_HEX.match(_strip_prefix(value)))


def generate_blinding(nbytes: int = BLINDING_BYTES) -> str:
    """Return a secret blinding factor as hex.

    The blinding factor is independent from the DNA salt.

    Raises:
        RandomnessUnavailableError: If no secure randomness source exists
    """
    try:
        return secrets.token_hex(nbytes)
    except (NotImplementedError, OSError) as e:
        raise RandomnessUnavailableError(
            "Secure random number generator not available"
        ) from e


def _hex_bytes(value: str, label: str) -> bytes:
    if not is_valid_hex(value):
        raise InvalidInputError(f"{label} must be a hex string", "INVALID_HEX")
    clean = _strip_prefix(value)
    if len(clean) % 2:
        clean = "0" + clean
    return bytes.fromhex(clean)


def commit(dna_hash: str, blinding: str) -> str:
    """Compute SHA-256(hash bytes || blinding bytes) as lowercase hex."""
    payload = _hex_bytes(dna_hash, "hash") + _hex_bytes(blinding, "blinding")
    return hashlib.sha256(payload).hexdigest()


def verify(dna_hash: str, blinding: str, commitment: str) -> bool:
    """Check a revealed hash and blinding against a published commitment."""
    if not is_valid_hex(commitment):
        return False
    expected = commit(dna_hash, blinding)
    return hmac.compare_digest(expected, _strip_prefix(commitment).lower())


def hex_to_felt(value: str) -> int:
    """Reduce a hex digest into the felt252 range."""
    if not is_valid_hex(value):
        raise InvalidInputError("value must be a hex string", "INVALID_HEX")
    return int(_strip_prefix(value), 16) % STARK_PRIME


def is_valid_felt252(value) -> bool:
    """True when ``value`` (int, decimal or 0x-hex string) is in [0, p)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value, 0)
        except ValueError:
            return False
    else:
        return False
    return 0 <= number < STARK_PRIME
