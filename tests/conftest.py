"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from growing_together.main import app
from growing_together.services.ai import MockProvider
from growing_together.services.content_service import ContentService
from growing_together.services.session_registry import SessionRegistry
from growing_together.services.voice_service import VoiceService


@pytest.fixture()
def content_service() -> ContentService:
    """ContentService backed by the canned MockProvider."""
    return ContentService(MockProvider())


@pytest.fixture()
def voice_service():
    """Disabled voice service (no synthesizer)."""
    service = VoiceService()
    yield service
    service.shutdown()


@pytest.fixture()
def registry(content_service: ContentService, voice_service: VoiceService) -> SessionRegistry:
    return SessionRegistry(content_service, voice_service)


@pytest.fixture()
def client(
    content_service: ContentService,
    voice_service: VoiceService,
    registry: SessionRegistry,
) -> TestClient:
    """FastAPI TestClient wired to in-memory services."""
    app.state.content_service = content_service
    app.state.voice_service = voice_service
    app.state.session_registry = registry
    return TestClient(app)
