"""PhaseAction: the closed set of user-triggered offseason mutations.

A pydantic discriminated union on ``type``. Adding a variant means adding it to
the union here and a branch in gridiron.core.orchestrator._dispatch, which ends
in ``assert_never`` so a missing branch fails type checking.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter

from gridiron.models.records import (
    AwardWinner,
    CampInjury,
    CoachingChangeRecord,
    CombineResult,
    ContractDecisionRecord,
    DevelopmentChange,
    DevelopmentReveal,
    DraftSelectionRecord,
    FreeAgentSigningRecord,
    MediaProjection,
    OTAReport,
    OwnerExpectations,
    PositionBattle,
    PreseasonEvaluation,
    PreseasonGame,
    PreseasonInjury,
    SeasonGoal,
    UDFASigningRecord,
)


class CompleteTask(BaseModel):
    type: Literal["complete_task"] = "complete_task"
    task_id: str


class ApplyCoachingChanges(BaseModel):
    type: Literal["apply_coaching_changes"] = "apply_coaching_changes"
    changes: list[CoachingChangeRecord]


class ApplyContractDecisions(BaseModel):
    type: Literal["apply_contract_decisions"] = "apply_contract_decisions"
    decisions: list[ContractDecisionRecord]


class ApplyDraftSelections(BaseModel):
    type: Literal["apply_draft_selections"] = "apply_draft_selections"
    selections: list[DraftSelectionRecord]


class ApplyFreeAgencySignings(BaseModel):
    type: Literal["apply_fa_signings"] = "apply_fa_signings"
    signings: list[FreeAgentSigningRecord]


class ApplyUDFASignings(BaseModel):
    type: Literal["apply_udfa_signings"] = "apply_udfa_signings"
    signings: list[UDFASigningRecord]


class ApplyInjuries(BaseModel):
    type: Literal["apply_injuries"] = "apply_injuries"
    injuries: list[CampInjury | PreseasonInjury]


class ApplyRosterMoves(BaseModel):
    type: Literal["apply_roster_moves"] = "apply_roster_moves"
    cuts: list[str] = Field(default_factory=list)
    practice_squad_signings: list[str] = Field(default_factory=list)
    ir_placements: list[str] = Field(default_factory=list)


class ApplyDevelopment(BaseModel):
    type: Literal["apply_development"] = "apply_development"
    changes: list[DevelopmentChange]


class StorePositionBattles(BaseModel):
    type: Literal["store_position_battles"] = "store_position_battles"
    battles: list[PositionBattle]


class StoreDevelopmentReveals(BaseModel):
    type: Literal["store_development_reveals"] = "store_development_reveals"
    reveals: list[DevelopmentReveal]


class StoreCampInjuries(BaseModel):
    type: Literal["store_camp_injuries"] = "store_camp_injuries"
    injuries: list[CampInjury]


class StorePreseasonGames(BaseModel):
    type: Literal["store_preseason_games"] = "store_preseason_games"
    games: list[PreseasonGame]


class StorePreseasonEvaluations(BaseModel):
    type: Literal["store_preseason_evaluations"] = "store_preseason_evaluations"
    evaluations: list[PreseasonEvaluation]


class StoreOTAReports(BaseModel):
    type: Literal["store_ota_reports"] = "store_ota_reports"
    reports: list[OTAReport]


class StoreOwnerExpectations(BaseModel):
    type: Literal["store_owner_expectations"] = "store_owner_expectations"
    expectations: OwnerExpectations
    projections: list[MediaProjection] = Field(default_factory=list)
    goals: list[SeasonGoal] = Field(default_factory=list)


class StoreCombineResults(BaseModel):
    type: Literal["store_combine_results"] = "store_combine_results"
    results: dict[str, CombineResult]


class StoreAwards(BaseModel):
    type: Literal["store_awards"] = "store_awards"
    awards: list[AwardWinner]


class MarkCombineComplete(BaseModel):
    type: Literal["mark_combine_complete"] = "mark_combine_complete"


class MarkDraftComplete(BaseModel):
    type: Literal["mark_draft_complete"] = "mark_draft_complete"


PhaseAction = Annotated[
    CompleteTask
    | ApplyCoachingChanges
    | ApplyContractDecisions
    | ApplyDraftSelections
    | ApplyFreeAgencySignings
    | ApplyUDFASignings
    | ApplyInjuries
    | ApplyRosterMoves
    | ApplyDevelopment
    | StorePositionBattles
    | StoreDevelopmentReveals
    | StoreCampInjuries
    | StorePreseasonGames
    | StorePreseasonEvaluations
    | StoreOTAReports
    | StoreOwnerExpectations
    | StoreCombineResults
    | StoreAwards
    | MarkCombineComplete
    | MarkDraftComplete,
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter[PhaseAction] = TypeAdapter(PhaseAction)


def parse_action(raw: dict) -> PhaseAction:
    """Build a PhaseAction from a plain dict (e.g. a UI payload). Raises ValidationError."""
    return _action_adapter.validate_python(raw)
