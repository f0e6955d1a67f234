"""Data models for Sonic Guardian."""
from src.models.sonic import HashScheme, SonicDNA

__all__ = ["HashScheme", "SonicDNA"]
