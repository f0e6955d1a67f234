"""Data models for Sonic DNA records."""
import hmac
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from src.config import DNA_POLICY_VERSION


class HashScheme(str, Enum):
    """Digest function used to produce a SonicDNA hash."""
    SHA256 = "sha256"
    DEMO = "demo"  # non-cryptographic, local development only


@dataclass(frozen=True)
class SonicDNA:
    """Canonical summary of a pattern plus its salted digest.

    Attributes:
        dna: Pipe-joined, sorted, de-duplicated canonical feature calls
        hash: Hex digest of dna + salt (64 characters)
        salt: Salt mixed into the digest
        timestamp: Capture time in epoch milliseconds, 0 when not requested
        scheme: Digest function that produced ``hash``
        policy: Normalization policy version that produced ``dna``
        features: Distinct callee names in first-seen order
        rhythmic_features: Rhythm-related canonical features, if captured
        harmonic_features: Pitch-related canonical features, if captured
        temporal_features: Time-related canonical features, if captured
    """
    dna: str
    hash: str
    salt: str
    timestamp: int = 0
    scheme: HashScheme = HashScheme.SHA256
    policy: str = DNA_POLICY_VERSION
    features: Tuple[str, ...] = field(default_factory=tuple)
    rhythmic_features: Optional[Tuple[str, ...]] = None
    harmonic_features: Optional[Tuple[str, ...]] = None
    temporal_features: Optional[Tuple[str, ...]] = None

    @property
    def is_commitment_safe(self) -> bool:
        """Whether this hash may be bound into a commitment."""
        return self.scheme == HashScheme.SHA256

    def matches(self, other_hash: str) -> bool:
        """Compare against a stored hash in constant time."""
        return hmac.compare_digest(
            self.hash.encode("utf-8"), other_hash.strip().lower().encode("utf-8")
        )

    def to_dict(self, include_salt: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "dna": self.dna,
            "hash": self.hash,
            "timestamp": self.timestamp,
            "scheme": self.scheme.value,
            "policy": self.policy,
            "features": list(self.features),
        }
        if include_salt:
            data["salt"] = self.salt
        if self.rhythmic_features is not None:
            data["rhythmic_features"] = list(self.rhythmic_features)
            data["harmonic_features"] = list(self.harmonic_features or ())
            data["temporal_features"] = list(self.temporal_features or ())
        return data
