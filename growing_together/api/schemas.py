"""API request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from growing_together.core.models import Gender


# === Request Schemas ===


class StartRequest(BaseModel):
    """Start a new journey"""

    player_name: str = Field(..., min_length=1, max_length=50, description="Parent name")
    child_name: str = Field(..., min_length=1, max_length=50, description="Child name")
    child_gender: Gender = Field(Gender.BOY, description="boy | girl")
    previous_session_id: Optional[str] = Field(
        None, description="Session being restarted; it is discarded"
    )


class ChooseRequest(BaseModel):
    """Parent's response to the current scenario"""

    choice_id: str = Field(..., description="Choice id from the active scenario")


# === Response Schemas ===


class StatsInfo(BaseModel):
    bonding: int
    resilience: int
    confidence: int


class SessionInfo(BaseModel):
    """Session state"""

    session_id: str
    player_name: str
    child_name: str
    child_gender: Gender
    age: int
    stage: str
    stage_label: str
    stats: StatsInfo
    turn_log: list[str] = []


class ChoiceInfo(BaseModel):
    id: str
    text: str
    style: Optional[str] = None


class ScenarioInfo(BaseModel):
    """Active scenario (hidden context omitted)"""

    scenario_id: str
    title: str
    description: str
    child_dialogue: Optional[str] = None
    emotion: Optional[str] = None
    image_url: Optional[str] = None
    choices: list[ChoiceInfo]


class OutcomeInfo(BaseModel):
    narrative: str
    child_reaction: str
    feedback: str
    stat_changes: StatsInfo
    child_dialogue: Optional[str] = None
    emotion: Optional[str] = None


class JourneySummary(BaseModel):
    """Shown once the child reaches adulthood"""

    child_name: str
    final_age: int
    final_stats: StatsInfo
    turns: list[str]


class GameStateResponse(BaseModel):
    """Snapshot of one session"""

    success: bool = True
    phase: str
    busy: bool = False
    session: Optional[SessionInfo] = None
    scenario: Optional[ScenarioInfo] = None
    outcome: Optional[OutcomeInfo] = None
    summary: Optional[JourneySummary] = None
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error response"""

    success: bool = False
    error: str
    detail: Optional[str] = None
