"""Deterministic prompt-to-pattern templates.

Used when no model is configured or the model call fails. The same prompt
always maps to the same pattern, which is what makes template-backed
registration and recovery agree.
"""
import logging
import re
from typing import List, Optional

logger = logging.getLogger(__name__)

_CHUNK_LINE = re.compile(r"^\d+\.")
_CHUNK_PREFIX = re.compile(r"^\d+\.\s*")


def mock_generate(prompt: str) -> str:
    """Map a vibe to one of a few fixed patterns by keyword."""
    lower_prompt = prompt.lower()

    if "muffled" in lower_prompt or "dark" in lower_prompt:
        return 's("bass").slow(2).distort(5).lpf(500)'
    if "techno" in lower_prompt or "fast" in lower_prompt:
        return 'stack(s("bd*4"), s("hh*8").gain(0.8))'
    if "bright" in lower_prompt or "sharp" in lower_prompt:
        return 's("saw").hpf(2000).fast(2)'
    return 's("bd").slow(2)'


def reconstruct_from_chunks(prompt: str) -> Optional[str]:
    """Rebuild a pattern from a numbered chunk description.

    A chunk prompt lists layers one per line, for example::

        1. sawtooth rhythm four on the floor
        2. triangle melody c4 e4 g4
        3. tempo 128

    Returns:
        A ``stack(...)`` pattern, or None when the prompt has fewer than
        three chunk lines or no rhythm/melody layer
    """
    lines = [line.strip().lower() for line in prompt.split("\n")]
    chunks = [
        line for line in lines
        if _CHUNK_LINE.match(line) or "rhythm" in line or "melody" in line
    ]
    if len(chunks) < 3:
        return None

    rhythm_layers: List[str] = []
    melody_layer = ""
    tempo = 120

    for line in lines:
        clean = _CHUNK_PREFIX.sub("", line)
        if not clean:
            continue
        if "rhythm" in clean:
            synth = clean.split(" ")[0]
            if "four on the floor" in clean:
                pattern = "c1*4"
            elif "half-time" in clean:
                pattern = "c1*2"
            else:
                pattern = "c1 ~ c1 ~"
            rhythm_layers.append(f'note("{pattern}").s("{synth}")')
        elif "melody" in clean:
            synth = clean.split(" ")[0]
            parts = clean.split("melody ", 1)
            notes = parts[1].strip() if len(parts) > 1 and parts[1].strip() else "c4 e4 g4"
            melody_layer = f'note("{notes}").s("{synth}")'
        elif "tempo" in clean:
            match = re.search(r"\d+", clean)
            if match:
                tempo = int(match.group(0))

    layers = [layer for layer in rhythm_layers + [melody_layer] if layer]
    if not layers:
        logger.debug("Chunk prompt had no rhythm or melody layer")
        return None
    body = ",\n  ".join(layers)
    return f"stack(\n  {body}\n).cpm({tempo})"


def template_vibe(prompt: str) -> str:
    """Richer genre templates, with chunk reconstruction tried first."""
    reconstructed = reconstruct_from_chunks(prompt)
    if reconstructed:
        return reconstructed

    lower_prompt = prompt.lower()
    if "techno" in lower_prompt:
        return 'stack(s("bd*4"), s("~ sd ~ sd").bank("RolandTR909"), s("hh*16").gain(0.4)).cpm(128)'
    if "ambient" in lower_prompt or "dark" in lower_prompt:
        return 'note("c2 [eb2 g2] bb1").s("sawtooth").lpf(400).lpq(10).slow(2).room(0.8)'
    if "acid" in lower_prompt:
        return 'note("c3(3,8)").s("sawtooth").lpf("<400 800 1200>").lpq(20).distort(2)'
    return 's("bd [~ sd] [bd bd] sd").bank("RolandTR808")'
