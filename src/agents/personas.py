"""Composer persona definitions for the Sonic Guardian pattern generator."""
from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class Persona:
    """Defines a pattern-writing persona with its voice and reference outputs."""
    name: str
    role: str
    system_prompt: str
    examples: List[Tuple[str, str]] = field(default_factory=list)
    style: str = ""

    def build_system_prompt(self) -> str:
        """System prompt with the persona's examples appended."""
        if not self.examples:
            return self.system_prompt
        lines = [f'- "{vibe}" -> {code}' for vibe, code in self.examples]
        return self.system_prompt + "\n\nExamples:\n" + "\n".join(lines)


# Strudel Composer - Turns a described vibe into a deterministic pattern
StrudelComposer = Persona(
    name="StrudelComposer",
    role="Live-coding Pattern Composer",
    system_prompt="""You are a musical agent specialized in writing Strudel live coding patterns.
Given a short description of a musical vibe, you write one deterministic Strudel pattern for it.

Rules:
1. Always produce valid Strudel (JavaScript) syntax
2. Use the same function names and parameters for the same vibe, every time
3. Prefer literal arguments: strings and numbers, not variables
4. Return only the code - no markdown, no explanation""",
    examples=[
        ("muffled bass", 's("bass").slow(2).distort(5).lpf(500)'),
        ("fast techno", 'stack(s("bd*4"), s("hh*8").gain(0.8))'),
        ("bright lead", 's("saw").hpf(2000).fast(2)'),
    ],
    style="terse and deterministic, one chained expression per vibe",
)


# List of all personas for easy iteration
PERSONAS: List[Persona] = [
    StrudelComposer,
]

# Dictionary for name-based lookup
PERSONAS_BY_NAME = {p.name: p for p in PERSONAS}
