"""Shared pytest fixtures for Sonic Guardian tests."""
import io
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from src.agents.cache import TTLCache
from src.agents.composer import ComposerAgent
from src.orchestrator.guardian import Guardian


@pytest.fixture
def muffled_bass():
    """The canonical 'muffled bass' pattern."""
    return 's("bass").slow(2).distort(5).lpf(500)'


@pytest.fixture
def muffled_bass_reordered():
    """Same calls as muffled_bass, chained in a different order."""
    return 's("bass").lpf(500).slow(2).distort(5)'


@pytest.fixture
def fast_techno():
    """The canonical 'fast techno' pattern."""
    return 'stack(s("bd*4"), s("hh*8").gain(0.8))'


@pytest.fixture
def quiet_console():
    """Rich console writing into a buffer."""
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def template_agent():
    """Agent that never calls a model."""
    return ComposerAgent(use_real_ai=False, cache=TTLCache())


@pytest.fixture
def guardian(template_agent, quiet_console):
    """Guardian backed by templates, printing into a buffer."""
    return Guardian(agent=template_agent, console=quiet_console)


def _model_response(text):
    mock_response = MagicMock()
    mock_response.content = [MagicMock()]
    mock_response.content[0].text = text
    return mock_response


@pytest.fixture
def mock_model_response():
    """Model reply wrapped in a markdown fence."""
    return _model_response('```javascript\ns("bass").distort(5).lpf(500)\n```')


@pytest.fixture
def mock_model_garbage_response():
    """Model reply that is not a pattern."""
    return _model_response("I would suggest a deep house groove with warm pads.")


@pytest.fixture
def mock_client():
    """Anthropic client stand-in; set messages.create.return_value per test."""
    return MagicMock()
