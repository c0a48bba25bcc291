import datetime
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from openai.types.chat import ChatCompletion

from backend.api import app
from backend.config import Settings, get_settings
from backend.models.prices import PriceSample


@pytest.fixture
def settings():
    """Proxy settings with a dummy credential."""
    return Settings(api_key="sk-test-key-1234", model="test-model")


@pytest.fixture
def test_client(settings):
    """FastAPI test client with injected settings."""
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def chat_completion():
    """A minimal upstream chat-completion response."""
    return ChatCompletion.model_validate(
        {
            "id": "chatcmpl-123",
            "object": "chat.completion",
            "created": 1760000000,
            "model": "test-model",
            "choices": [
                {
                    "index": 0,
                    "finish_reason": "stop",
                    "message": {"role": "assistant", "content": "Buy now"},
                }
            ],
        }
    )


@pytest.fixture
def mock_openai(chat_completion):
    """Patch the OpenAI client class used by the proxy."""
    with patch("backend.llm.OpenAI") as mock_class:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = chat_completion
        mock_class.return_value = mock_client
        yield mock_class


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the proxy settings read."""
    for name in (
        "ARK_API_KEY",
        "DOUBAO_API_KEY",
        "LLM_BASE_URL",
        "LLM_MODEL",
        "LLM_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def make_samples(prices, start=datetime.date(2025, 6, 1)):
    return [
        PriceSample(
            date=start + datetime.timedelta(days=i), price=price, airline="SkyHigh"
        )
        for i, price in enumerate(prices)
    ]


@pytest.fixture
def rising_samples():
    """Ten samples going from 450 to 500, averaging 460."""
    return make_samples([450, 460, 440, 455, 465, 470, 450, 455, 455, 500])


@pytest.fixture
def falling_samples():
    return make_samples([500, 455, 455, 450, 470, 465, 455, 440, 460, 450])
