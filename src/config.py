"""Configuration for Sonic Guardian.

Values are read from the environment once, at import time. The DNA policy
constants at the bottom are versioned together and are not read from the
environment: changing any of them changes every hash.
"""
import os


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


# Generator (prompt -> pattern) settings
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
DEFAULT_MODEL = os.getenv("SONIC_MODEL", "claude-3-5-haiku-latest")
MAX_TOKENS = _env_int("SONIC_MAX_TOKENS", 500)
USE_REAL_AI = _env_bool("SONIC_USE_REAL_AI")
AGENT_CACHE_TTL = _env_int("SONIC_AGENT_CACHE_TTL", 5 * 60)

# Input bounds
MAX_SOURCE_LENGTH = _env_int("SONIC_MAX_SOURCE_LENGTH", 1000)
MIN_PROMPT_LENGTH = 3
MAX_PROMPT_LENGTH = 500

LOG_LEVEL = os.getenv("SONIC_LOG_LEVEL", "WARNING").upper()

# DNA policy
DNA_POLICY_VERSION = "sonic-dna/v2"
NUMERIC_PRECISION = 1  # decimal places kept after rounding numeric arguments
DNA_DENYLIST = frozenset({
    "evaluate",  # evaluation wrapper around a whole pattern
    "m",  # mini-notation identity combinator
})
SALT_BYTES = 16
BLINDING_BYTES = 32
