"""Pattern generator agents for Sonic Guardian."""
from src.agents.cache import TTLCache
from src.agents.composer import AgentResponse, ComposerAgent, generate_pattern
from src.agents.personas import PERSONAS, PERSONAS_BY_NAME, Persona, StrudelComposer
from src.agents.templates import mock_generate, reconstruct_from_chunks, template_vibe

__all__ = [
    "AgentResponse",
    "ComposerAgent",
    "PERSONAS",
    "PERSONAS_BY_NAME",
    "Persona",
    "StrudelComposer",
    "TTLCache",
    "generate_pattern",
    "mock_generate",
    "reconstruct_from_chunks",
    "template_vibe",
]
