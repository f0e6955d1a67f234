"""Sonic Guardian - recoverable secrets from live-coding music patterns."""

__version__ = "0.1.0"
