"""Offseason phase models: phases, tasks, events, and the OffSeasonState container."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Phase = Literal[
    "season_end",
    "coaching_decisions",
    "contract_management",
    "combine",
    "free_agency",
    "draft",
    "udfa",
    "otas",
    "training_camp",
    "preseason",
    "final_cuts",
    "season_start",
]

TaskActionType = Literal["navigate", "view", "validate", "auto"]

TaskTargetScreen = Literal[
    "DraftBoard",
    "DraftRoom",
    "FreeAgency",
    "Staff",
    "Finances",
    "ContractManagement",
    "Roster",
    "FinalCuts",
    "OTAs",
    "TrainingCamp",
    "Preseason",
    "SeasonRecap",
    "OwnerRelations",
]

TaskCompletionCondition = Literal[
    "visited",
    "draftComplete",
    "rosterSize<=53",
    "hasSigned",
    "optional",
]

OffSeasonEventType = Literal[
    "phase_start",
    "phase_complete",
    "task_complete",
    "signing",
    "release",
    "trade",
    "draft_pick",
    "coaching_change",
    "development_reveal",
    "injury",
    "award",
    "contract",
    "roster_move",
]


class OffSeasonTask(BaseModel):
    """A checklist item scoped to a single phase. Required tasks gate advancement."""

    id: str
    name: str
    description: str = ""
    is_required: bool = False
    is_complete: bool = False
    action_type: TaskActionType = "view"
    target_screen: TaskTargetScreen | None = None
    completion_condition: TaskCompletionCondition = "optional"


class PhaseTaskStatus(BaseModel):
    """Task list and completion flags for one phase."""

    phase: Phase
    required_complete: bool = False
    optional_complete: bool = False
    tasks: list[OffSeasonTask] = Field(default_factory=list)
    tasks_completed: list[str] = Field(default_factory=list)


class OffSeasonEvent(BaseModel):
    """Append-only log entry. Insertion order is chronological."""

    id: str
    phase: Phase
    type: OffSeasonEventType
    description: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    payload: dict = Field(default_factory=dict)


class TeamRecord(BaseModel):
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    ties: int = Field(default=0, ge=0)

    @property
    def win_pct(self) -> float:
        games = self.wins + self.losses + self.ties
        if not games:
            return 0.0
        return (self.wins + 0.5 * self.ties) / games


class TopPerformer(BaseModel):
    player_id: str
    player_name: str
    position: str
    grade: str


class SeasonRecap(BaseModel):
    """Summary of the user team's completed season. Set once, during season_end."""

    year: int
    team_record: TeamRecord = Field(default_factory=TeamRecord)
    division_finish: int = Field(default=1, ge=1, le=4)
    made_playoffs: bool = False
    playoff_result: str | None = None
    draft_position: int = 0
    top_performers: list[TopPerformer] = Field(default_factory=list)
    awards: list[str] = Field(default_factory=list)
    season_write_up: str = ""


class RosterChange(BaseModel):
    id: str
    type: Literal["signing", "release", "trade", "draft", "waiver", "ir"]
    player_id: str
    player_name: str
    position: str
    team_id: str
    phase: Phase
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    details: dict = Field(default_factory=dict)


class PlayerSigning(BaseModel):
    player_id: str
    player_name: str
    position: str
    team_id: str
    contract_years: int = Field(ge=1)
    contract_value: int = Field(ge=0)
    signing_type: Literal["free_agent", "udfa", "extension", "restructure"]
    phase: Phase


class PlayerRelease(BaseModel):
    player_id: str
    player_name: str
    position: str
    team_id: str
    release_type: Literal["cut", "waived", "released", "buyout"]
    cap_savings: int = 0
    dead_cap: int = 0
    phase: Phase


class OffSeasonState(BaseModel):
    """Complete offseason progression state for one season.

    Frozen: every transition in gridiron.core.phases returns a new instance.
    ``phase_tasks`` is fully populated for all 12 phases at creation.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    current_phase: Phase = "season_end"
    phase_day: int = Field(default=1, ge=1)
    phase_tasks: dict[Phase, PhaseTaskStatus] = Field(default_factory=dict)
    events: list[OffSeasonEvent] = Field(default_factory=list)
    completed_phases: list[Phase] = Field(default_factory=list)
    is_complete: bool = False

    season_recap: SeasonRecap | None = None
    roster_changes: list[RosterChange] = Field(default_factory=list)
    signings: list[PlayerSigning] = Field(default_factory=list)
    releases: list[PlayerRelease] = Field(default_factory=list)


class OffSeasonProgress(BaseModel):
    """Read-only progress view for display."""

    current_phase: Phase
    current_phase_number: int
    current_phase_name: str
    phase_day: int
    completed_phases: int
    total_phases: int
    percent_complete: int
    required_tasks_complete: bool
    all_tasks_complete: bool
    can_advance: bool
    is_complete: bool


class OffSeasonSummary(BaseModel):
    year: int
    phases_completed: int
    total_signings: int
    total_releases: int
    total_roster_moves: int
    key_events: list[OffSeasonEvent] = Field(default_factory=list)
