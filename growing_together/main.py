"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from growing_together.api.game import router as game_router
from growing_together.api.health import router as health_router
from growing_together.config import settings
from growing_together.core.logging import get_logger, setup_logging
from growing_together.services.ai import get_ai_provider
from growing_together.services.content_service import ContentService
from growing_together.services.content_types import ContentConfig
from growing_together.services.session_registry import SessionRegistry
from growing_together.services.voice_service import get_voice_service

setup_logging(settings.log_level)
logger = get_logger(__name__)


def build_content_config() -> ContentConfig:
    return ContentConfig(
        scenario_temperature=settings.SCENARIO_TEMPERATURE,
        outcome_temperature=settings.OUTCOME_TEMPERATURE,
        scenario_max_tokens=settings.SCENARIO_MAX_TOKENS,
        outcome_max_tokens=settings.OUTCOME_MAX_TOKENS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Initializing AI provider...")
    ai_provider = get_ai_provider()
    content_service = ContentService(ai_provider, build_content_config())
    app.state.content_service = content_service
    logger.info("AI provider initialized: %s", ai_provider.name)

    logger.info("Initializing voice playback...")
    voice_service = get_voice_service()
    app.state.voice_service = voice_service
    logger.info("Voice playback: %s", voice_service.name)

    app.state.session_registry = SessionRegistry(content_service, voice_service)

    yield

    logger.info("Shutting down...")
    voice_service.shutdown()


app = FastAPI(title="Growing Together", lifespan=lifespan)

app.include_router(health_router)
app.include_router(game_router)
