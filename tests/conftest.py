"""
Shared fixtures for the test suite.

The Gemini boundary is always replaced; no test reaches the network.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from mermaid_app.api import chat, diagram
from mermaid_app.main import app


@pytest.fixture(autouse=True)
def gemini_env(monkeypatch):
    """Provide a dummy key and production mode for every test."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("APP_ENV", "production")


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def diagram_model(monkeypatch) -> MagicMock:
    """Replace the diagram agent's model call."""
    fake = MagicMock()
    monkeypatch.setattr(diagram.diagram_agent.client, "generate_text", fake)
    return fake


@pytest.fixture
def chat_model(monkeypatch) -> MagicMock:
    """Replace the content agent's model call."""
    fake = MagicMock()
    monkeypatch.setattr(chat.content_agent.client, "generate_text", fake)
    return fake
