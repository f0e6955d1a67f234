"""Registration and recovery orchestration."""
from src.orchestrator.guardian import Guardian, Registration, RecoveryResult

__all__ = ["Guardian", "Registration", "RecoveryResult"]
