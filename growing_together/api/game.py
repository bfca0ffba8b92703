"""Game API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from growing_together.api.schemas import (
    ChooseRequest,
    ErrorResponse,
    GameStateResponse,
    StartRequest,
)
from growing_together.core.errors import (
    ContentGenerationFailure,
    ControllerBusyError,
    TurnStateError,
)
from growing_together.core.logging import get_logger
from growing_together.services.session_registry import SessionRegistry
from growing_together.services.turn_controller import TurnController, TurnPhase
from growing_together.services.voice_service import VoiceService

logger = get_logger(__name__)

router = APIRouter(prefix="/game", tags=["game"])

SCENARIO_ERROR_MESSAGE = "Failed to generate scenario. Please try again."
OUTCOME_ERROR_MESSAGE = "Failed to evaluate response. Please try again."


def get_registry(request: Request) -> SessionRegistry:
    """SessionRegistry instance (dependency injection)"""
    registry: SessionRegistry = request.app.state.session_registry
    return registry


def get_voice_service(request: Request) -> VoiceService:
    """VoiceService instance (dependency injection)"""
    service: VoiceService = request.app.state.voice_service
    return service


def _get_controller(registry: SessionRegistry, session_id: str) -> TurnController:
    controller = registry.get(session_id)
    if controller is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return controller


def _build_state(
    controller: TurnController, error: Optional[str] = None
) -> GameStateResponse:
    return GameStateResponse(**controller.snapshot(), error=error)


def _request_scenario_softly(controller: TurnController) -> Optional[str]:
    """Request the next scenario, turning failures into a user-facing message."""
    try:
        controller.request_scenario()
    except ContentGenerationFailure as e:
        logger.warning("Scenario generation failed: %s", e)
        return SCENARIO_ERROR_MESSAGE
    except ControllerBusyError:
        return "A request is already in progress."
    return None


@router.post("/start", response_model=GameStateResponse)
def start_game(
    request: StartRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> GameStateResponse:
    """
    Start a new journey

    Creates a session (age 0, Infant) and requests the first scenario.
    If that request fails the session still exists and the scenario can be
    retried through POST /game/{session_id}/scenario.
    A previous_session_id is discarded along with its voice clip.
    """
    if request.previous_session_id:
        controller = registry.replace(
            request.previous_session_id,
            request.player_name,
            request.child_name,
            request.child_gender,
        )
    else:
        controller = registry.create(
            request.player_name, request.child_name, request.child_gender
        )
    error = _request_scenario_softly(controller)
    return _build_state(controller, error)


@router.delete(
    "/{session_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
)
def end_game(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> Response:
    """Discard a session and its voice clip."""
    if not registry.remove(session_id):
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return Response(status_code=204)


@router.get(
    "/{session_id}",
    response_model=GameStateResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_game_state(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> GameStateResponse:
    """Current session snapshot."""
    return _build_state(_get_controller(registry, session_id))


@router.post(
    "/{session_id}/scenario",
    response_model=GameStateResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
def request_scenario(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> GameStateResponse:
    """Request (or retry) the scenario for the current age."""
    controller = _get_controller(registry, session_id)
    try:
        controller.request_scenario()
    except ContentGenerationFailure as e:
        raise HTTPException(status_code=502, detail=str(e))
    except TurnStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _build_state(controller)


@router.post(
    "/{session_id}/choose",
    response_model=GameStateResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
def choose(
    session_id: str,
    request: ChooseRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> GameStateResponse:
    """Submit the parent's choice for the active scenario."""
    controller = _get_controller(registry, session_id)
    try:
        controller.submit_choice(request.choice_id)
    except ContentGenerationFailure as e:
        logger.warning("Outcome evaluation failed: %s", e)
        raise HTTPException(status_code=502, detail=OUTCOME_ERROR_MESSAGE)
    except TurnStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _build_state(controller)


@router.post(
    "/{session_id}/next",
    response_model=GameStateResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def next_turn(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> GameStateResponse:
    """
    Continue growing

    Advances age by one year and, unless the child is now an adult,
    requests the next scenario.
    """
    controller = _get_controller(registry, session_id)
    try:
        controller.complete_turn()
    except TurnStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    error = None
    if controller.phase is TurnPhase.AWAITING_SCENARIO:
        error = _request_scenario_softly(controller)
    return _build_state(controller, error)


@router.get(
    "/{session_id}/voice",
    responses={404: {"model": ErrorResponse}},
)
def get_voice(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
    voice: VoiceService = Depends(get_voice_service),
) -> Response:
    """Latest synthesized child utterance (audio/mpeg), 204 if none."""
    _get_controller(registry, session_id)
    clip = voice.latest_clip(session_id)
    if clip is None:
        return Response(status_code=204)
    return Response(content=clip, media_type="audio/mpeg")
