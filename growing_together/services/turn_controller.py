"""Turn controller — sequences one play loop per turn.

Phases:
    IDLE -> AWAITING_SCENARIO -> PRESENTING_SCENARIO -> AWAITING_OUTCOME
         -> PRESENTING_OUTCOME -> AWAITING_SCENARIO ... -> TERMINAL

The controller exclusively owns its GameSession. Content requests are
serialized (one in flight at a time) and a result that arrives after the
session was restarted is discarded instead of applied.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator, Optional

from growing_together.core.errors import ControllerBusyError, TurnStateError
from growing_together.core.logging import get_logger
from growing_together.core.models import (
    NEUTRAL_CHOICE,
    GameSession,
    Gender,
    Outcome,
    Scenario,
)
from growing_together.core.progression import advance_turn
from growing_together.core.stats import apply_delta
from growing_together.services.content_types import (
    ContentProvider,
    EvaluationContext,
    ScenarioContext,
)
from growing_together.services.voice_service import VoiceService

logger = get_logger(__name__)


class TurnPhase(str, Enum):
    IDLE = "idle"
    AWAITING_SCENARIO = "awaiting_scenario"
    PRESENTING_SCENARIO = "presenting_scenario"
    AWAITING_OUTCOME = "awaiting_outcome"
    PRESENTING_OUTCOME = "presenting_outcome"
    TERMINAL = "terminal"


class TurnController:
    """Mediates between one GameSession and the content provider."""

    def __init__(
        self,
        content_provider: ContentProvider,
        voice: Optional[VoiceService] = None,
    ) -> None:
        self._content = content_provider
        self._voice = voice
        self._session: Optional[GameSession] = None
        self._scenario: Optional[Scenario] = None
        self._outcome: Optional[Outcome] = None
        self._phase = TurnPhase.IDLE
        # bumped on every start_session; in-flight results compare against it
        self._generation = 0
        self._state_lock = threading.RLock()
        self._request_lock = threading.Lock()

    # === Read-only state ===

    @property
    def session(self) -> Optional[GameSession]:
        return self._session

    @property
    def phase(self) -> TurnPhase:
        return self._phase

    @property
    def scenario(self) -> Optional[Scenario]:
        return self._scenario

    @property
    def outcome(self) -> Optional[Outcome]:
        return self._outcome

    @property
    def busy(self) -> bool:
        return self._request_lock.locked()

    def snapshot(self) -> dict[str, Any]:
        """Read-only view for presentation."""
        with self._state_lock:
            session = self._session
            return {
                "phase": self._phase.value,
                "busy": self.busy,
                "session": session.to_dict() if session else None,
                "scenario": self._scenario.to_dict() if self._scenario else None,
                "outcome": self._outcome.to_dict() if self._outcome else None,
                "summary": (
                    session.journey_summary()
                    if session and self._phase is TurnPhase.TERMINAL
                    else None
                ),
            }

    # === Actions ===

    def start_session(
        self, player_name: str, child_name: str, child_gender: Gender
    ) -> GameSession:
        """Begin a new playthrough, discarding any previous one."""
        with self._state_lock:
            self._generation += 1
            session = GameSession(
                player_name=player_name,
                child_name=child_name,
                child_gender=child_gender,
            )
            self._session = session
            self._scenario = None
            self._outcome = None
            self._phase = TurnPhase.AWAITING_SCENARIO

        logger.info(
            "Session started: %s (child=%s, %s)",
            session.session_id,
            child_name,
            child_gender.value,
        )
        return session

    def request_scenario(self) -> Optional[Scenario]:
        """Fetch the scenario for the current age.

        On failure the session is untouched, the phase stays
        AWAITING_SCENARIO and the error propagates; call again to retry.
        Returns None when the session was restarted mid-request.
        """
        with self._exclusive_request():
            with self._state_lock:
                self._require_phase(TurnPhase.AWAITING_SCENARIO)
                session = self._current_session()
                generation = self._generation
                ctx = ScenarioContext(
                    child_name=session.child_name,
                    age=session.age,
                    stage=session.stage,
                    gender=session.child_gender,
                    stats=session.stats,
                )

            try:
                scenario = self._content.generate_scenario(ctx)
            except Exception as e:
                logger.warning(
                    "Scenario request failed for session %s: %s",
                    session.session_id,
                    e,
                )
                raise

            with self._state_lock:
                if self._is_stale(generation):
                    logger.warning(
                        "Discarding late scenario for replaced session %s",
                        session.session_id,
                    )
                    return None
                self._scenario = scenario
                self._phase = TurnPhase.PRESENTING_SCENARIO

        self._speak(session, scenario.child_dialogue, scenario.emotion)
        return scenario

    def submit_choice(self, choice_id: str) -> Optional[Outcome]:
        """Evaluate the parent's choice and apply its stat changes.

        Stats and the turn log change together, only after a successful
        evaluation. An unknown ``choice_id`` is treated as a neutral choice.
        Returns None when the session was restarted mid-request.
        """
        with self._exclusive_request():
            with self._state_lock:
                self._require_phase(TurnPhase.PRESENTING_SCENARIO)
                session = self._current_session()
                scenario = self._scenario
                assert scenario is not None
                generation = self._generation

                choice = scenario.find_choice(choice_id)
                if choice is None:
                    logger.warning(
                        "Choice %r not in scenario %s, using neutral choice",
                        choice_id,
                        scenario.scenario_id,
                    )
                    choice = NEUTRAL_CHOICE

                ctx = EvaluationContext(
                    scenario_context=scenario.context,
                    scenario_description=scenario.description,
                    child_name=session.child_name,
                    age=session.age,
                    chosen_text=choice.text,
                    chosen_style=choice.style,
                )
                self._phase = TurnPhase.AWAITING_OUTCOME

            try:
                outcome = self._content.evaluate_choice(ctx)
            except Exception as e:
                with self._state_lock:
                    if not self._is_stale(generation):
                        self._phase = TurnPhase.PRESENTING_SCENARIO
                logger.warning(
                    "Outcome request failed for session %s: %s",
                    session.session_id,
                    e,
                )
                raise

            with self._state_lock:
                if self._is_stale(generation):
                    logger.warning(
                        "Discarding late outcome for replaced session %s",
                        session.session_id,
                    )
                    return None
                session.stats = apply_delta(session.stats, outcome.stat_changes)
                entry = session.record_turn(scenario.title)
                self._outcome = outcome
                self._phase = TurnPhase.PRESENTING_OUTCOME

        logger.info("Turn recorded: %s -> stats=%s", entry, session.stats.to_dict())
        self._speak(session, outcome.child_dialogue, outcome.emotion)
        return outcome

    def complete_turn(self) -> GameSession:
        """Advance age/stage and clear the finished scenario."""
        with self._state_lock:
            self._require_phase(TurnPhase.PRESENTING_OUTCOME)
            session = self._current_session()
            session.age, session.stage = advance_turn(session.age, session.stage)
            self._scenario = None
            self._outcome = None
            if session.is_complete:
                self._phase = TurnPhase.TERMINAL
                logger.info("Session %s complete at age %d", session.session_id, session.age)
            else:
                self._phase = TurnPhase.AWAITING_SCENARIO
                logger.debug(
                    "Session %s advanced to age %d (%s)",
                    session.session_id,
                    session.age,
                    session.stage.value,
                )
        return session

    # === Internal ===

    @contextmanager
    def _exclusive_request(self) -> Iterator[None]:
        if not self._request_lock.acquire(blocking=False):
            raise ControllerBusyError("A content request is already in progress")
        try:
            yield
        finally:
            self._request_lock.release()

    def _require_phase(self, expected: TurnPhase) -> None:
        if self._phase is not expected:
            raise TurnStateError(
                f"Action requires phase '{expected.value}', "
                f"current phase is '{self._phase.value}'"
            )

    def _current_session(self) -> GameSession:
        if self._session is None:
            raise TurnStateError("No active session")
        return self._session

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    def _speak(
        self, session: GameSession, text: Optional[str], emotion: Optional[str]
    ) -> None:
        if self._voice is None or not text:
            return
        try:
            self._voice.speak(
                session.session_id,
                text,
                age=session.age,
                gender=session.child_gender,
                emotion=emotion,
            )
        except RuntimeError as e:
            # executor already shut down
            logger.warning("Voice playback unavailable: %s", e)
