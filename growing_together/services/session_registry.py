"""In-memory registry of live game sessions.

Sessions are never persisted; they are lost on restart.
"""

import threading
from typing import Optional

from growing_together.core.logging import get_logger
from growing_together.core.models import Gender
from growing_together.services.content_types import ContentProvider
from growing_together.services.turn_controller import TurnController
from growing_together.services.voice_service import VoiceService

logger = get_logger(__name__)


class SessionRegistry:
    """Maps session id -> TurnController."""

    def __init__(
        self,
        content_provider: ContentProvider,
        voice: Optional[VoiceService] = None,
    ) -> None:
        self._content = content_provider
        self._voice = voice
        self._controllers: dict[str, TurnController] = {}
        self._lock = threading.Lock()

    def create(
        self, player_name: str, child_name: str, child_gender: Gender
    ) -> TurnController:
        """Start a new session on a fresh controller and register it."""
        controller = TurnController(self._content, self._voice)
        session = controller.start_session(player_name, child_name, child_gender)
        with self._lock:
            self._controllers[session.session_id] = controller
        logger.debug("Registered session %s (%d live)", session.session_id, len(self))
        return controller

    def replace(
        self,
        previous_session_id: str,
        player_name: str,
        child_name: str,
        child_gender: Gender,
    ) -> TurnController:
        """Discard a previous session and start the new one in its place.

        The previous controller is reused, so a provider result still in
        flight for the old session is dropped by its generation check.
        Falls back to ``create`` when the previous id is unknown.
        """
        with self._lock:
            controller = self._controllers.pop(previous_session_id, None)
        if controller is None:
            return self.create(player_name, child_name, child_gender)
        if self._voice is not None:
            self._voice.forget(previous_session_id)

        session = controller.start_session(player_name, child_name, child_gender)
        with self._lock:
            self._controllers[session.session_id] = controller
        logger.debug(
            "Replaced session %s with %s", previous_session_id, session.session_id
        )
        return controller

    def get(self, session_id: str) -> Optional[TurnController]:
        with self._lock:
            return self._controllers.get(session_id)

    def remove(self, session_id: str) -> bool:
        with self._lock:
            removed = self._controllers.pop(session_id, None) is not None
        if removed and self._voice is not None:
            self._voice.forget(session_id)
        return removed

    def __len__(self) -> int:
        return len(self._controllers)
