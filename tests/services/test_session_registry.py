"""SessionRegistry tests."""

from growing_together.core.models import Gender
from growing_together.services.turn_controller import TurnPhase


class TestSessionRegistry:
    def test_create_and_get(self, registry):
        controller = registry.create("Mom", "Charlie", Gender.BOY)
        session_id = controller.session.session_id

        assert registry.get(session_id) is controller
        assert controller.phase is TurnPhase.AWAITING_SCENARIO
        assert len(registry) == 1

    def test_sessions_are_independent(self, registry):
        first = registry.create("Mom", "A", Gender.BOY)
        second = registry.create("Dad", "B", Gender.GIRL)

        first.request_scenario()

        assert first is not second
        assert second.phase is TurnPhase.AWAITING_SCENARIO
        assert len(registry) == 2

    def test_get_unknown(self, registry):
        assert registry.get("nope") is None

    def test_remove(self, registry):
        controller = registry.create("Mom", "Charlie", Gender.BOY)
        session_id = controller.session.session_id

        assert registry.remove(session_id) is True
        assert registry.get(session_id) is None
        assert registry.remove(session_id) is False

    def test_replace_reuses_controller(self, registry, voice_service):
        controller = registry.create("Mom", "Charlie", Gender.BOY)
        old_id = controller.session.session_id
        voice_service._clips[old_id] = b"clip"

        replaced = registry.replace(old_id, "Dad", "Robin", Gender.GIRL)

        assert replaced is controller
        assert replaced.session.session_id != old_id
        assert replaced.session.child_name == "Robin"
        assert registry.get(old_id) is None
        assert registry.get(replaced.session.session_id) is replaced
        assert voice_service.latest_clip(old_id) is None
        assert len(registry) == 1

    def test_replace_unknown_creates(self, registry):
        controller = registry.replace("missing", "Mom", "Charlie", Gender.BOY)

        assert registry.get(controller.session.session_id) is controller
        assert len(registry) == 1
