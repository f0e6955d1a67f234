"""Error types shared across Sonic Guardian.

Every error carries a machine-readable ``code`` and an HTTP-like ``status``
so that callers at any layer can report failures the same way.
"""
from typing import Any, Dict, Optional


class DNAError(Exception):
    """Base class for all Sonic Guardian failures."""

    default_code = "UNKNOWN_ERROR"
    default_status = 500

    def __init__(self, message: str, code: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status = status or self.default_status

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, "code": self.code}


class InvalidInputError(DNAError):
    """Empty, non-string or over-length input."""

    default_code = "INVALID_INPUT"
    default_status = 400


class PatternSyntaxError(DNAError):
    """Pattern source that does not parse."""

    default_code = "SYNTAX_ERROR"
    default_status = 400


class DigestUnavailableError(DNAError):
    """The secure hashing primitive is missing from this environment."""

    default_code = "DIGEST_UNAVAILABLE"
    default_status = 503


class RandomnessUnavailableError(DNAError):
    """The operating system cannot supply secure random bytes."""

    default_code = "RANDOMNESS_UNAVAILABLE"
    default_status = 503


class GenerationError(DNAError):
    """The pattern generator returned something unusable."""

    default_code = "AI_GENERATION_ERROR"
    default_status = 502
