"""
Shared fixtures: Flask test client, clean environment, fake LLM backend.
"""
import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from analyzer.cache import analysis_cache

ANALYZER_ENV_VARS = [
    'LLM_PROVIDER', 'GROQ_API_KEY', 'GROQ_MODEL', 'OPENAI_API_KEY', 'OPENAI_MODEL',
    'LLM_TEMPERATURE', 'LLM_MAX_TOKENS', 'LLM_JSON_MODE', 'LLM_TIMEOUT',
    'LLM_MAX_ATTEMPTS', 'ANALYSIS_CACHE_TTL', 'ENFORCE_RUBRIC_LABEL',
]

WELL_FORMED_REPLY = {
    "score": 85,
    "scoreLabel": "Safe",
    "summary": "A short services agreement with one termination concern.",
    "highlights": ["Either party may terminate without cause on 1-day notice"],
    "issues": [
        {"id": 1, "title": "Termination instability", "description": "1-day notice without cause."}
    ],
    "clauses": [
        {"title": "Termination", "text": "Either party may terminate without cause with 1-day notice."}
    ],
}


def make_completion(content):
    """Build an object shaped like an SDK chat completion."""
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without analyzer settings and with an empty cache."""
    for name in ANALYZER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    analysis_cache.clear()
    yield
    analysis_cache.clear()


@pytest.fixture
def app():
    """Create Flask app for testing."""
    from main import app as flask_app

    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()


@pytest.fixture
def groq_key(monkeypatch):
    monkeypatch.setenv('GROQ_API_KEY', 'gsk-test-key')


@pytest.fixture
def fake_backend():
    """
    Replace the SDK client factory with a fake.

    The fake replies with WELL_FORMED_REPLY unless a test overrides
    ``chat.completions.create``.
    """
    fake_client = MagicMock()
    fake_client.chat.completions.create.return_value = make_completion(json.dumps(WELL_FORMED_REPLY))
    with patch('analyzer.services.llm_client._build_client', return_value=fake_client) as mock_build:
        fake_client.build_mock = mock_build
        yield fake_client
