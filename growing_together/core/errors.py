"""Error taxonomy shared by the turn controller, services and API."""


class ContentGenerationFailure(RuntimeError):
    """Scenario or outcome content could not be produced.

    Covers transport errors from the AI provider and responses that do not
    parse into the expected shape. Always retryable.
    """


class PlaybackFailure(RuntimeError):
    """Speech synthesis failed. Recovered locally, never surfaced."""


class TurnStateError(RuntimeError):
    """Action is not allowed in the controller's current phase."""


class ControllerBusyError(TurnStateError):
    """A content request is already in flight for this session."""
