"""Turn controller tests."""

import copy
from unittest.mock import MagicMock

import pytest

from growing_together.core.errors import (
    ContentGenerationFailure,
    ControllerBusyError,
    TurnStateError,
)
from growing_together.core.models import Choice, Gender, Outcome, Scenario
from growing_together.core.progression import LifeStage
from growing_together.core.stats import PlayerStats, StatDelta
from growing_together.services.turn_controller import TurnController, TurnPhase


def _scenario(title: str = "Tantrum at the store") -> Scenario:
    return Scenario(
        title=title,
        description="Screaming for candy at checkout.",
        context="Tired after a long day.",
        choices=[
            Choice(id="a", text="Kneel and name the feeling", style="Empathetic"),
            Choice(id="b", text="Buy the candy", style="Permissive"),
        ],
        child_dialogue="I want it!",
        emotion="angry",
    )


def _outcome(delta: StatDelta = StatDelta(5, -10, 0)) -> Outcome:
    return Outcome(
        narrative="The crying slowly stops.",
        child_reaction="Sniffles and holds your hand.",
        feedback="Naming feelings helps regulation.",
        stat_changes=delta,
    )


class FakeContentProvider:
    """Scripted content provider. Queue exceptions or payloads per call."""

    def __init__(self) -> None:
        self.scenarios: list = []
        self.outcomes: list = []
        self.scenario_calls: list = []
        self.evaluation_calls: list = []

    def generate_scenario(self, ctx):
        self.scenario_calls.append(ctx)
        item = self.scenarios.pop(0) if self.scenarios else _scenario()
        if isinstance(item, Exception):
            raise item
        return item

    def evaluate_choice(self, ctx):
        self.evaluation_calls.append(ctx)
        item = self.outcomes.pop(0) if self.outcomes else _outcome()
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture()
def provider() -> FakeContentProvider:
    return FakeContentProvider()


@pytest.fixture()
def controller(provider: FakeContentProvider) -> TurnController:
    ctrl = TurnController(provider)
    ctrl.start_session("Mom", "Charlie", Gender.BOY)
    return ctrl


class TestStartSession:
    def test_initial_state(self, provider):
        ctrl = TurnController(provider)
        assert ctrl.phase is TurnPhase.IDLE

        session = ctrl.start_session("Mom", "Charlie", Gender.GIRL)

        assert ctrl.phase is TurnPhase.AWAITING_SCENARIO
        assert session.age == 0
        assert session.stage is LifeStage.INFANT
        assert session.stats == PlayerStats(50, 30, 30)
        assert session.turn_log == []
        assert provider.scenario_calls == []

    def test_restart_replaces_session(self, controller):
        controller.request_scenario()
        old = controller.session

        new = controller.start_session("Dad", "Robin", Gender.GIRL)

        assert new is not old
        assert controller.scenario is None
        assert controller.phase is TurnPhase.AWAITING_SCENARIO


class TestRequestScenario:
    def test_passes_full_context(self, controller, provider):
        scenario = controller.request_scenario()

        ctx = provider.scenario_calls[0]
        assert ctx.child_name == "Charlie"
        assert ctx.age == 0
        assert ctx.stage is LifeStage.INFANT
        assert ctx.gender is Gender.BOY
        assert ctx.stats == PlayerStats(50, 30, 30)
        assert controller.scenario is scenario
        assert controller.phase is TurnPhase.PRESENTING_SCENARIO

    def test_failure_leaves_session_unchanged_and_retryable(self, controller, provider):
        before = copy.deepcopy(controller.session)
        provider.scenarios.append(ContentGenerationFailure("network down"))

        with pytest.raises(ContentGenerationFailure):
            controller.request_scenario()

        assert controller.session == before
        assert controller.phase is TurnPhase.AWAITING_SCENARIO
        assert controller.busy is False

        assert controller.request_scenario() is not None
        assert controller.phase is TurnPhase.PRESENTING_SCENARIO

    def test_wrong_phase(self, controller):
        controller.request_scenario()
        with pytest.raises(TurnStateError):
            controller.request_scenario()

    def test_requires_session(self, provider):
        with pytest.raises(TurnStateError):
            TurnController(provider).request_scenario()

    def test_late_scenario_for_replaced_session_is_discarded(self, controller, provider):
        def restart_mid_flight(ctx):
            controller.start_session("Dad", "Robin", Gender.GIRL)
            return _scenario("Stale")

        provider.generate_scenario = restart_mid_flight

        assert controller.request_scenario() is None
        assert controller.scenario is None
        assert controller.session.child_name == "Robin"
        assert controller.phase is TurnPhase.AWAITING_SCENARIO

    def test_busy_while_request_in_flight(self, controller, provider):
        seen = {}

        def reentrant(ctx):
            seen["busy"] = controller.busy
            with pytest.raises(ControllerBusyError):
                controller.request_scenario()
            return _scenario()

        provider.generate_scenario = reentrant
        controller.request_scenario()

        assert seen["busy"] is True
        assert controller.busy is False


class TestSubmitChoice:
    def test_applies_delta_and_logs_pre_advance_age(self, controller, provider):
        controller.request_scenario()

        outcome = controller.submit_choice("a")

        session = controller.session
        assert session.stats == PlayerStats(55, 20, 30)
        assert session.turn_log == ["Age 0: Tantrum at the store"]
        assert session.age == 0
        assert controller.outcome is outcome
        assert controller.phase is TurnPhase.PRESENTING_OUTCOME

        ctx = provider.evaluation_calls[0]
        assert ctx.chosen_text == "Kneel and name the feeling"
        assert ctx.chosen_style == "Empathetic"
        assert ctx.scenario_context == "Tired after a long day."
        assert ctx.scenario_description == "Screaming for candy at checkout."

    def test_unknown_choice_degrades_to_neutral(self, controller, provider):
        controller.request_scenario()

        controller.submit_choice("does-not-exist")

        ctx = provider.evaluation_calls[0]
        assert ctx.chosen_text == "Silent observation"
        assert ctx.chosen_style is None
        assert controller.phase is TurnPhase.PRESENTING_OUTCOME

    def test_out_of_range_delta_is_clamped(self, controller, provider):
        provider.outcomes.append(_outcome(StatDelta(80, -99, 500)))
        controller.request_scenario()

        controller.submit_choice("b")

        assert controller.session.stats == PlayerStats(100, 0, 100)

    def test_failure_is_all_or_nothing(self, controller, provider):
        controller.request_scenario()
        before = copy.deepcopy(controller.session)
        provider.outcomes.append(ContentGenerationFailure("bad JSON"))

        with pytest.raises(ContentGenerationFailure):
            controller.submit_choice("a")

        assert controller.session == before
        assert controller.outcome is None
        assert controller.phase is TurnPhase.PRESENTING_SCENARIO

        controller.submit_choice("a")
        assert controller.session.turn_log == ["Age 0: Tantrum at the store"]

    def test_wrong_phase(self, controller):
        with pytest.raises(TurnStateError):
            controller.submit_choice("a")

    def test_late_outcome_for_replaced_session_is_discarded(self, controller, provider):
        controller.request_scenario()
        old_session = controller.session

        def restart_mid_flight(ctx):
            controller.start_session("Dad", "Robin", Gender.GIRL)
            return _outcome()

        provider.evaluate_choice = restart_mid_flight

        assert controller.submit_choice("a") is None
        assert old_session.turn_log == []
        assert old_session.stats == PlayerStats(50, 30, 30)
        assert controller.session.turn_log == []
        assert controller.phase is TurnPhase.AWAITING_SCENARIO


class TestCompleteTurn:
    def test_end_to_end_first_turn(self, controller):
        controller.request_scenario()
        controller.submit_choice("a")

        session = controller.complete_turn()

        assert session.age == 1
        assert session.stage is LifeStage.TODDLER
        assert session.stats == PlayerStats(55, 20, 30)
        assert session.turn_log == ["Age 0: Tantrum at the store"]
        assert controller.scenario is None
        assert controller.outcome is None
        assert controller.phase is TurnPhase.AWAITING_SCENARIO

    def test_wrong_phase(self, controller):
        controller.request_scenario()
        with pytest.raises(TurnStateError):
            controller.complete_turn()

    def test_full_journey_reaches_terminal(self, controller, provider):
        for turn in range(18):
            provider.scenarios.append(_scenario(f"Moment {turn}"))
            provider.outcomes.append(_outcome(StatDelta(1, 1, 1)))
            controller.request_scenario()
            controller.submit_choice("a")
            controller.complete_turn()

        session = controller.session
        assert controller.phase is TurnPhase.TERMINAL
        assert session.age == 18
        assert session.stage is LifeStage.ADULT
        assert len(session.turn_log) == 18
        assert session.turn_log[0] == "Age 0: Moment 0"
        assert session.turn_log[-1] == "Age 17: Moment 17"
        assert session.stats == PlayerStats(68, 48, 48)

        with pytest.raises(TurnStateError):
            controller.request_scenario()
        assert len(provider.scenario_calls) == 18


class TestSnapshot:
    def test_snapshot_before_session(self, provider):
        snap = TurnController(provider).snapshot()
        assert snap["phase"] == "idle"
        assert snap["session"] is None

    def test_snapshot_while_presenting(self, controller):
        controller.request_scenario()
        snap = controller.snapshot()
        assert snap["phase"] == "presenting_scenario"
        assert snap["busy"] is False
        assert snap["scenario"]["title"] == "Tantrum at the store"
        assert snap["outcome"] is None
        assert snap["summary"] is None


class TestVoice:
    def test_child_dialogue_is_spoken(self, provider):
        voice = MagicMock()
        ctrl = TurnController(provider, voice=voice)
        session = ctrl.start_session("Mom", "Charlie", Gender.GIRL)

        ctrl.request_scenario()

        voice.speak.assert_called_once_with(
            session.session_id,
            "I want it!",
            age=0,
            gender=Gender.GIRL,
            emotion="angry",
        )

    def test_outcome_without_dialogue_is_silent(self, provider):
        voice = MagicMock()
        ctrl = TurnController(provider, voice=voice)
        ctrl.start_session("Mom", "Charlie", Gender.GIRL)
        ctrl.request_scenario()
        voice.reset_mock()

        ctrl.submit_choice("a")

        voice.speak.assert_not_called()

    def test_voice_errors_do_not_interrupt_turn(self, provider):
        voice = MagicMock()
        voice.speak.side_effect = RuntimeError("cannot schedule new futures after shutdown")
        ctrl = TurnController(provider, voice=voice)
        ctrl.start_session("Mom", "Charlie", Gender.GIRL)

        assert ctrl.request_scenario() is not None
        assert ctrl.phase is TurnPhase.PRESENTING_SCENARIO
