# Sonic Guardian - recoverable secrets from live-coding music patterns
# This module provides the public API for the sonic_guardian package.

# Re-export the version
from src import __version__

# Re-export main CLI entry point
from src.cli import main, cli

# Re-export key components for programmatic use
from src.dna import (
    FeatureCall,
    canonicalize,
    compute_sonic_dna,
    compute_sonic_dna_async,
    extract_features,
    extract_sonic_dna,
    extract_sonic_dna_async,
    parse_pattern,
)
from src.models.sonic import HashScheme, SonicDNA
from src.errors import (
    DNAError,
    InvalidInputError,
    PatternSyntaxError,
    DigestUnavailableError,
    RandomnessUnavailableError,
    GenerationError,
)
from src.agents.composer import ComposerAgent, AgentResponse
from src.orchestrator.guardian import Guardian, Registration, RecoveryResult
from src.commitment import commit, verify, generate_blinding

__all__ = [
    "__version__",
    "main",
    "cli",
    "FeatureCall",
    "canonicalize",
    "compute_sonic_dna",
    "compute_sonic_dna_async",
    "extract_features",
    "extract_sonic_dna",
    "extract_sonic_dna_async",
    "parse_pattern",
    "HashScheme",
    "SonicDNA",
    "DNAError",
    "InvalidInputError",
    "PatternSyntaxError",
    "DigestUnavailableError",
    "RandomnessUnavailableError",
    "GenerationError",
    "ComposerAgent",
    "AgentResponse",
    "Guardian",
    "Registration",
    "RecoveryResult",
    "commit",
    "verify",
    "generate_blinding",
]
