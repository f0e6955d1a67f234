"""Composer agent: turns a described vibe into a Strudel pattern."""
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from anthropic import Anthropic, APIError, APIConnectionError, RateLimitError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from src.agents.cache import TTLCache, normalize_prompt
from src.agents.personas import Persona, StrudelComposer
from src.agents.templates import mock_generate
from src.config import (
    ANTHROPIC_API_KEY,
    DEFAULT_MODEL,
    MAX_PROMPT_LENGTH,
    MAX_SOURCE_LENGTH,
    MAX_TOKENS,
    MIN_PROMPT_LENGTH,
    USE_REAL_AI,
)
from src.dna.parser import parse_pattern
from src.errors import GenerationError, InvalidInputError, PatternSyntaxError

logger = logging.getLogger(__name__)

MODEL_CONFIDENCE = 0.95
TEMPLATE_CONFIDENCE = 0.8

_FENCE_OPEN = re.compile(r"```(?:javascript|js)?\n?")
_FENCE_CLOSE = re.compile(r"```$")


@dataclass
class AgentResponse:
    """A generated pattern.

    Attributes:
        code: Strudel pattern source
        prompt: Normalized prompt the pattern was generated for
        confidence: 0.95 for model output, 0.8 for templates
        timestamp: Generation time in epoch milliseconds
        source: "model" or "template"
    """
    code: str
    prompt: str
    confidence: float
    timestamp: int
    source: str = "template"


def validate_prompt(prompt: Any) -> str:
    """Return the trimmed prompt or raise InvalidInputError."""
    if not prompt or not isinstance(prompt, str):
        raise InvalidInputError("Invalid prompt provided", "INVALID_PROMPT")
    trimmed = prompt.strip()
    if not MIN_PROMPT_LENGTH <= len(trimmed) <= MAX_PROMPT_LENGTH:
        raise InvalidInputError(
            f"Prompt must be between {MIN_PROMPT_LENGTH} and {MAX_PROMPT_LENGTH} characters",
            "INVALID_PROMPT_LENGTH",
        )
    return trimmed


def clean_generated_code(text: str) -> str:
    """Strip markdown fences and check the result is a usable pattern.

    Raises:
        GenerationError: If the text does not look like Strudel, is too
            long, or does not parse
    """
    cleaned = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text.strip())).strip()

    if 's("' not in cleaned and "stack(" not in cleaned:
        raise GenerationError(
            "Generated code does not appear to be valid Strudel syntax",
            "INVALID_STRUDEL_SYNTAX",
        )
    if len(cleaned) > MAX_SOURCE_LENGTH:
        raise GenerationError("Generated code is too long", "CODE_TOO_LONG")
    try:
        parse_pattern(cleaned)
    except (PatternSyntaxError, InvalidInputError) as e:
        raise GenerationError(f"Generated code does not parse: {e.message}", "INVALID_STRUDEL_SYNTAX") from e
    return cleaned


def _now_ms() -> int:
    return int(time.time() * 1000)


class ComposerAgent:
    """Generates Strudel patterns from vibes, with a model or templates.

    When the model is disabled, unconfigured or failing, the agent falls
    back to a deterministic template so generation always succeeds unless
    ``fallback_to_template`` is turned off.
    """

    def __init__(
        self,
        use_real_ai: Optional[bool] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        cache: Optional[TTLCache] = None,
        client: Optional[Any] = None,
        template: Callable[[str], str] = mock_generate,
        fallback_to_template: bool = True,
        persona: Persona = StrudelComposer,
    ):
        """Initialize the composer.

        Args:
            use_real_ai: Call the model. Defaults to SONIC_USE_REAL_AI.
            api_key: Anthropic API key. Defaults to ANTHROPIC_API_KEY.
            model: Model name. Defaults to DEFAULT_MODEL.
            max_tokens: Completion budget. Defaults to MAX_TOKENS.
            cache: Prompt cache. A private TTLCache is created if not provided.
            client: Pre-built Anthropic client (mainly for tests)
            template: Deterministic prompt-to-code fallback
            fallback_to_template: Use ``template`` when the model fails
            persona: Persona whose system prompt drives the model
        """
        self.use_real_ai = USE_REAL_AI if use_real_ai is None else use_real_ai
        self.api_key = api_key or ANTHROPIC_API_KEY
        self.model = model or DEFAULT_MODEL
        self.max_tokens = max_tokens or MAX_TOKENS
        self.cache = cache if cache is not None else TTLCache()
        self.template = template
        self.fallback_to_template = fallback_to_template
        self.persona = persona
        self._client = client

    @property
    def client(self) -> Anthropic:
        if self._client is None:
            self._client = Anthropic(api_key=self.api_key)
        return self._client

    def is_real_ai_enabled(self) -> bool:
        return bool(self.use_real_ai and (self.api_key or self._client is not None))

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((APIError, APIConnectionError, RateLimitError)),
        reraise=True
    )
    def _call_api(self, system_prompt: str, user_message: str) -> str:
        """Make a model call with retry logic.

        Args:
            system_prompt: The system prompt to use
            user_message: The user message/query

        Returns:
            The assistant's response text
        """
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=0.1,
            system=system_prompt,
            messages=[
                {"role": "user", "content": user_message}
            ]
        )
        return response.content[0].text

    def _generate_with_model(self, prompt: str) -> AgentResponse:
        text = self._call_api(
            self.persona.build_system_prompt(),
            f'Write the Strudel pattern for: "{prompt}"',
        )
        if not text or not text.strip():
            raise GenerationError("Empty response from model", "INVALID_AI_RESPONSE")
        return AgentResponse(
            code=clean_generated_code(text),
            prompt=prompt,
            confidence=MODEL_CONFIDENCE,
            timestamp=_now_ms(),
            source="model",
        )

    def _generate_with_template(self, prompt: str) -> AgentResponse:
        return AgentResponse(
            code=self.template(prompt),
            prompt=prompt,
            confidence=TEMPLATE_CONFIDENCE,
            timestamp=_now_ms(),
            source="template",
        )

    def generate(self, prompt: str) -> AgentResponse:
        """Generate a pattern for a vibe.

        Args:
            prompt: Free-text description of the vibe

        Returns:
            AgentResponse with validated pattern code

        Raises:
            InvalidInputError: If the prompt is empty or out of bounds
            GenerationError: If the model fails and fallback is disabled
        """
        key = normalize_prompt(validate_prompt(prompt))

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for prompt %r", key)
            return cached

        if self.is_real_ai_enabled():
            try:
                response = self._generate_with_model(key)
            except (GenerationError, APIError) as e:
                if not self.fallback_to_template:
                    if isinstance(e, GenerationError):
                        raise
                    raise GenerationError(f"Failed to generate code with AI: {e}") from e
                logger.warning("Model generation failed, falling back to template: %s", e)
            else:
                self.cache.set(key, response)
                return response

        response = self._generate_with_template(key)
        self.cache.set(key, response)
        return response

    def clear_cache(self) -> None:
        self.cache.clear()

    def __repr__(self) -> str:
        return f"ComposerAgent(persona={self.persona.name}, real_ai={self.is_real_ai_enabled()})"


def generate_pattern(prompt: str, **options) -> AgentResponse:
    """One-shot generation with a fresh agent."""
    return ComposerAgent(**options).generate(prompt)
