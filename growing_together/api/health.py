"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """Return application and collaborator status."""
    content_service = request.app.state.content_service
    voice_service = request.app.state.voice_service
    return {
        "status": "ok",
        "ai_provider": content_service.ai.name,
        "voice": voice_service.name,
    }
