"""Tests for the composer agent, templates and prompt cache."""
import pytest

from src.agents.cache import TTLCache
from src.agents.composer import (
    MODEL_CONFIDENCE,
    TEMPLATE_CONFIDENCE,
    ComposerAgent,
    clean_generated_code,
    generate_pattern,
    validate_prompt,
)
from src.agents.personas import PERSONAS_BY_NAME, StrudelComposer
from src.agents.templates import mock_generate, reconstruct_from_chunks, template_vibe
from src.dna.pipeline import compute_sonic_dna
from src.errors import GenerationError, InvalidInputError


CHUNK_PROMPT = """1. sawtooth rhythm four on the floor
2. triangle melody c4 e4 g4
3. tempo 128"""


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestTemplates:
    """Deterministic templates."""

    @pytest.mark.parametrize("prompt, expected", [
        ("A slow, muffled industrial bassline", 's("bass").slow(2).distort(5).lpf(500)'),
        ("fast techno", 'stack(s("bd*4"), s("hh*8").gain(0.8))'),
        ("something bright", 's("saw").hpf(2000).fast(2)'),
        ("whatever", 's("bd").slow(2)'),
    ])
    def test_mock_generate(self, prompt, expected):
        assert mock_generate(prompt) == expected

    def test_chunk_reconstruction(self):
        code = reconstruct_from_chunks(CHUNK_PROMPT)
        assert code == (
            'stack(\n'
            '  note("c1*4").s("sawtooth"),\n'
            '  note("c4 e4 g4").s("triangle")\n'
            ').cpm(128)'
        )

    def test_too_few_chunks(self):
        assert reconstruct_from_chunks("1. sawtooth rhythm\n2. tempo 90") is None

    def test_template_vibe_prefers_chunks(self):
        assert template_vibe(CHUNK_PROMPT) == reconstruct_from_chunks(CHUNK_PROMPT)

    @pytest.mark.parametrize("prompt", ["dark techno", "ambient drift", "acid line", "anything", CHUNK_PROMPT])
    def test_templates_produce_extractable_patterns(self, prompt):
        assert compute_sonic_dna(template_vibe(prompt)).dna
        assert compute_sonic_dna(mock_generate(prompt)).dna


class TestTTLCache:
    """Prompt cache."""

    def test_keys_are_normalized(self):
        cache = TTLCache()
        cache.set("  Dark Bass ", "value")
        assert cache.get("dark bass") == "value"

    def test_entries_expire(self):
        clock = FakeClock()
        cache = TTLCache(ttl=300, clock=clock)
        cache.set("dark bass", "value")
        clock.now += 299
        assert cache.get("dark bass") == "value"
        clock.now += 1
        assert cache.get("dark bass") is None
        assert len(cache) == 0

    def test_set_drops_expired_entries(self):
        clock = FakeClock()
        cache = TTLCache(ttl=300, clock=clock)
        cache.set("first vibe", 1)
        cache.set("second vibe", 2)
        clock.now += 300
        cache.set("third vibe", 3)
        assert len(cache) == 1
        assert cache.get("third vibe") == 3

    def test_clear(self):
        cache = TTLCache()
        cache.set("a vibe", 1)
        cache.clear()
        assert len(cache) == 0


class TestPromptValidation:
    """Prompt bounds."""

    def test_trimmed(self):
        assert validate_prompt("  dark bass  ") == "dark bass"

    @pytest.mark.parametrize("prompt, code", [
        ("", "INVALID_PROMPT"),
        (None, "INVALID_PROMPT"),
        ("ab", "INVALID_PROMPT_LENGTH"),
        ("x" * 501, "INVALID_PROMPT_LENGTH"),
    ])
    def test_rejections(self, prompt, code):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_prompt(prompt)
        assert exc_info.value.code == code


class TestCleanGeneratedCode:
    """Model output cleanup."""

    def test_strips_fences(self):
        assert clean_generated_code('```js\ns("bd").fast(2)\n```') == 's("bd").fast(2)'

    def test_rejects_prose(self):
        with pytest.raises(GenerationError) as exc_info:
            clean_generated_code("Try a deep house groove.")
        assert exc_info.value.code == "INVALID_STRUDEL_SYNTAX"

    def test_rejects_unparseable_code(self):
        with pytest.raises(GenerationError):
            clean_generated_code('s("bd".fast(2)')

    def test_rejects_deeply_nested_code(self):
        with pytest.raises(GenerationError) as exc_info:
            clean_generated_code("stack(" * 100 + 's("bd")' + ")" * 100)
        assert exc_info.value.code == "INVALID_STRUDEL_SYNTAX"

    def test_rejects_long_code(self):
        with pytest.raises(GenerationError) as exc_info:
            clean_generated_code('s("' + "bd " * 400 + '")')
        assert exc_info.value.code == "CODE_TOO_LONG"


class TestComposerAgent:
    """Generation with model and template paths."""

    def test_template_generation(self, template_agent):
        response = template_agent.generate("  A slow, MUFFLED industrial bassline ")
        assert response.code == 's("bass").slow(2).distort(5).lpf(500)'
        assert response.prompt == "a slow, muffled industrial bassline"
        assert response.confidence == TEMPLATE_CONFIDENCE
        assert response.source == "template"
        assert response.timestamp > 0

    def test_cached_response_is_reused(self, template_agent):
        first = template_agent.generate("dark bass")
        second = template_agent.generate("  DARK BASS")
        assert first is second

    def test_clear_cache(self, template_agent):
        first = template_agent.generate("dark bass")
        template_agent.clear_cache()
        assert template_agent.generate("dark bass") is not first

    def test_invalid_prompt(self, template_agent):
        with pytest.raises(InvalidInputError):
            template_agent.generate("ab")

    def test_real_ai_disabled_without_key(self):
        agent = ComposerAgent(use_real_ai=True, cache=TTLCache())
        agent.api_key = None
        assert not agent.is_real_ai_enabled()

    def test_model_generation(self, mock_client, mock_model_response):
        mock_client.messages.create.return_value = mock_model_response
        agent = ComposerAgent(use_real_ai=True, client=mock_client, cache=TTLCache())

        response = agent.generate("heavy bass")

        assert response.code == 's("bass").distort(5).lpf(500)'
        assert response.source == "model"
        assert response.confidence == MODEL_CONFIDENCE
        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["system"] == StrudelComposer.build_system_prompt()
        assert "heavy bass" in kwargs["messages"][0]["content"]

    def test_model_garbage_falls_back_to_template(self, mock_client, mock_model_garbage_response):
        mock_client.messages.create.return_value = mock_model_garbage_response
        agent = ComposerAgent(use_real_ai=True, client=mock_client, cache=TTLCache())

        response = agent.generate("dark bass")

        assert response.source == "template"
        assert response.code == mock_generate("dark bass")

    def test_model_garbage_without_fallback_raises(self, mock_client, mock_model_garbage_response):
        mock_client.messages.create.return_value = mock_model_garbage_response
        agent = ComposerAgent(
            use_real_ai=True,
            client=mock_client,
            cache=TTLCache(),
            fallback_to_template=False,
        )
        with pytest.raises(GenerationError):
            agent.generate("dark bass")

    def test_custom_template(self):
        agent = ComposerAgent(use_real_ai=False, template=template_vibe, cache=TTLCache())
        assert agent.generate("acid line").code == template_vibe("acid line")

    def test_generate_pattern_helper(self):
        response = generate_pattern("bright lead", use_real_ai=False, cache=TTLCache())
        assert response.code == 's("saw").hpf(2000).fast(2)'


class TestPersonas:
    """Persona prompts."""

    def test_examples_in_system_prompt(self):
        prompt = StrudelComposer.build_system_prompt()
        assert '"muffled bass" -> s("bass").slow(2).distort(5).lpf(500)' in prompt

    def test_lookup(self):
        assert PERSONAS_BY_NAME["StrudelComposer"] is StrudelComposer

    def test_persona_examples_are_valid_patterns(self):
        for _, code in StrudelComposer.examples:
            assert compute_sonic_dna(code).dna
