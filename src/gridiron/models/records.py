"""Offseason records and the persistent data container threaded across all phases.

Records are grouped by the phase that produces them. OffseasonData is the
single accumulated store, attached to LeagueState.offseason_data.

Accumulator fields (draft_selections, free_agent_signings, udfa_signings,
contract_decisions, coaching_changes, practice_squad_signings) are only ever
appended to; callers pass the full concatenated list when merging.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from gridiron.models.offseason import SeasonRecap
from gridiron.models.roster import CoachRole, Prospect

LetterGrade = Literal["A", "B", "C", "D", "F"]

# Numeric midpoint for each letter grade (preseason grading scale).
GRADE_VALUES: dict[str, int] = {"A": 90, "B": 80, "C": 70, "D": 60, "F": 50}


def grade_from_score(score: float) -> LetterGrade:
    """Map a 0-100 performance score onto the letter scale."""
    if score >= 85:
        return "A"
    if score >= 75:
        return "B"
    if score >= 65:
        return "C"
    if score >= 55:
        return "D"
    return "F"


# ---------------------------------------------------------------------------
# Phase 1: Season End
# ---------------------------------------------------------------------------


class AwardWinner(BaseModel):
    award: str
    player_id: str
    player_name: str
    team_id: str = ""
    team_name: str = ""
    stats: dict[str, float] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Phase 2: Coaching Decisions
# ---------------------------------------------------------------------------


class CoachEvaluationResult(BaseModel):
    coach_id: str
    coach_name: str
    role: CoachRole
    overall_grade: LetterGrade
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    recommendation: Literal["keep", "extend", "fire", "demote"] = "keep"
    years_remaining: int = 1


class CoachingChangeRecord(BaseModel):
    type: Literal["hire", "fire", "promote", "demote"]
    coach_id: str
    coach_name: str
    role: CoachRole
    team_id: str
    previous_role: CoachRole | None = None
    reason: str | None = None
    dead_money: int = 0


# ---------------------------------------------------------------------------
# Phase 3: Contract Management
# ---------------------------------------------------------------------------


class ContractDecisionDetails(BaseModel):
    previous_salary: int | None = None
    new_salary: int | None = None
    cap_savings: int | None = None
    dead_money: int | None = None
    years_added: int | None = None
    guarantee_added: int | None = None


class ContractDecisionRecord(BaseModel):
    type: Literal["cut", "restructure", "franchise_tag", "transition_tag", "extension"]
    player_id: str
    player_name: str
    position: str
    team_id: str
    details: ContractDecisionDetails = Field(default_factory=ContractDecisionDetails)


# ---------------------------------------------------------------------------
# Phase 4: Combine
# ---------------------------------------------------------------------------


class CombineResult(BaseModel):
    prospect_id: str
    forty_yard: float
    bench_press: int
    vertical_jump: float
    broad_jump: int
    three_cone: float
    shuttle: float
    athletic_score: float = Field(ge=0.0, le=100.0)
    stock_change: Literal["rising", "steady", "falling"] = "steady"


class ProDayResult(BaseModel):
    prospect_id: str
    school: str
    improved_drills: list[str] = Field(default_factory=list)
    notes: str = ""


# ---------------------------------------------------------------------------
# Phases 5-7: Free Agency, Draft, UDFA
# ---------------------------------------------------------------------------


class FreeAgentSigningRecord(BaseModel):
    player_id: str
    player_name: str
    position: str
    team_id: str
    previous_team_id: str | None = None
    contract_years: int = Field(ge=1)
    total_value: int = Field(ge=0)
    guaranteed_money: int = 0
    signing_bonus: int = 0
    phase: Literal["legal_tampering", "frenzy", "trickle"] = "frenzy"
    day: int = 1


class DraftSelectionRecord(BaseModel):
    round: int = Field(ge=1, le=7)
    pick: int = Field(ge=1)
    overall_pick: int = Field(ge=1)
    team_id: str
    prospect_id: str
    player_name: str
    position: str
    school: str = ""
    grade: str = ""
    contract_years: int = Field(default=4, ge=1)
    contract_value: int = Field(default=4000, ge=0)


class UDFASigningRecord(BaseModel):
    prospect_id: str
    player_name: str
    position: str
    school: str = ""
    team_id: str
    signing_bonus: int = 0
    contract_years: int = Field(default=3, ge=1)
    base_salary: int = 750


# ---------------------------------------------------------------------------
# Phase 8: OTAs
# ---------------------------------------------------------------------------


class OTAReport(BaseModel):
    player_id: str
    player_name: str
    position: str
    type: Literal["rookie", "veteran", "free_agent"] = "veteran"
    attendance: Literal["full", "partial", "holdout", "excused"] = "full"
    impression: Literal["standout", "solid", "average", "concerning", "injury"] = "average"
    notes: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    conditioning_level: int = Field(default=70, ge=1, le=100)
    scheme_grasp: int = Field(default=60, ge=1, le=100)
    coach_feedback: str = ""


class BattleChallenger(BaseModel):
    player_id: str
    player_name: str
    early_impression: Literal["strong", "average", "weak"] = "average"


class PositionBattlePreview(BaseModel):
    position: str
    incumbent_id: str
    incumbent_name: str
    challengers: list[BattleChallenger] = Field(default_factory=list)
    competition_level: Literal["heated", "competitive", "clear_starter"] = "competitive"
    preview_notes: str = ""


class RookieIntegrationReport(BaseModel):
    player_id: str
    player_name: str
    position: str
    draft_round: int | None = None  # None for undrafted
    learning_curve: Literal["ahead", "on_track", "behind"] = "on_track"
    physical_readiness: Literal["pro_ready", "needs_work", "project"] = "needs_work"
    mental_readiness: Literal["sharp", "average", "struggling"] = "average"
    veteran_mentor: str | None = None
    adjustment_notes: list[str] = Field(default_factory=list)


class OTADecision(BaseModel):
    player_id: str
    player_name: str
    decision_type: Literal["rest_or_push", "assign_mentor"]
    choice: Literal["rest", "push", "mentor_assigned"] | None = None
    mentor_player_id: str | None = None


# ---------------------------------------------------------------------------
# Phase 9: Training Camp
# ---------------------------------------------------------------------------


class PositionBattleCompetitor(BaseModel):
    player_id: str
    player_name: str
    current_score: float = Field(ge=0.0, le=100.0)
    trend: Literal["rising", "steady", "falling"] = "steady"
    highlights: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    practice_grade: LetterGrade = "C"


class PositionBattle(BaseModel):
    battle_id: str
    position: str
    spot_type: Literal["starter", "backup", "depth"] = "starter"
    competitors: list[PositionBattleCompetitor] = Field(default_factory=list)
    status: Literal["ongoing", "decided", "too_close"] = "ongoing"
    winner: str | None = None
    camp_week: int = 1
    updates: list[str] = Field(default_factory=list)


class DevelopmentReveal(BaseModel):
    player_id: str
    player_name: str
    position: str
    reveal_type: Literal["trait", "skill_jump", "decline", "injury_concern", "intangible"]
    description: str = ""
    impact: Literal["positive", "negative", "neutral"] = "neutral"
    details: dict = Field(default_factory=dict)


InjuryLevel = Literal["minor", "moderate", "serious", "season_ending"]


class CampInjury(BaseModel):
    player_id: str
    player_name: str
    position: str
    injury_type: str
    severity: InjuryLevel
    estimated_return: str = "TBD"
    practice_status: Literal["full", "limited", "out"] = "limited"


class DevelopmentChange(BaseModel):
    """Attribute deltas applied to a player after camp or OTAs."""

    player_id: str
    attribute_changes: dict[str, int] = Field(default_factory=dict)
    overall_change: int | None = None


# ---------------------------------------------------------------------------
# Phase 10: Preseason
# ---------------------------------------------------------------------------


class PreseasonPlayerPerformance(BaseModel):
    player_id: str
    player_name: str
    position: str
    snaps: int = Field(default=0, ge=0)
    score: float = Field(default=70.0, ge=0.0, le=100.0)
    grade: LetterGrade = "C"
    stats: dict[str, float] = Field(default_factory=dict)
    notes: list[str] = Field(default_factory=list)
    roster_impact: Literal["lock", "bubble", "cut_candidate", "practice_squad"] = "bubble"


class PreseasonInjury(BaseModel):
    player_id: str
    player_name: str
    position: str
    game_number: int
    injury_type: str
    severity: InjuryLevel
    missed_time: str = "TBD"


class PreseasonGame(BaseModel):
    game_number: int = Field(ge=1, le=4)
    opponent: str
    is_home: bool = True
    team_score: int = 0
    opponent_score: int = 0
    result: Literal["win", "loss", "tie"] = "tie"
    player_performances: list[PreseasonPlayerPerformance] = Field(default_factory=list)
    injuries: list[PreseasonInjury] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)


RosterProjection = Literal["lock", "bubble", "cut_candidate", "practice_squad"]


class PreseasonEvaluation(BaseModel):
    player_id: str
    player_name: str
    position: str
    games_played: int = 0
    total_snaps: int = 0
    avg_grade: float = 70.0
    trend: Literal["improving", "steady", "declining"] = "steady"
    roster_projection: RosterProjection = "bubble"
    key_moments: list[str] = Field(default_factory=list)
    recommendation: str = ""


# ---------------------------------------------------------------------------
# Phase 11: Final Cuts
# ---------------------------------------------------------------------------


class CutEvaluationPlayer(BaseModel):
    player_id: str
    player_name: str
    position: str
    age: int
    experience: int
    overall_rating: int = 70
    preseason_grade: float = 70.0
    salary: int = 0
    guaranteed: int = 0
    dead_cap_if_cut: int = 0
    is_vested: bool = False
    practice_squad_eligible: bool = False
    cut_priority: int = 50
    recommendation: Literal["keep", "cut", "ir", "practice_squad", "trade_block"] = "cut"
    notes: list[str] = Field(default_factory=list)


class FinalCutsPlan(BaseModel):
    """Cut-priority partition of the user roster, derived from preseason results."""

    cut_candidates: list[CutEvaluationPlayer] = Field(default_factory=list)
    practice_squad_candidates: list[str] = Field(default_factory=list)
    must_keep: list[str] = Field(default_factory=list)
    bubble: list[str] = Field(default_factory=list)
    priorities: dict[str, int] = Field(default_factory=dict)


class WaiverPlayer(BaseModel):
    player_id: str
    player_name: str
    position: str
    previous_team_id: str
    previous_team_name: str
    overall_rating: int
    age: int
    salary: int = 0
    waiver_priority: int = Field(ge=1)
    claimed_by: str | None = None


class WaiverClaim(BaseModel):
    team_id: str
    player_id: str
    claimed: bool = False


# ---------------------------------------------------------------------------
# Phase 12: Season Start
# ---------------------------------------------------------------------------


class WinTargets(BaseModel):
    minimum: int
    expected: int
    stretch: int


class FinancialTargets(BaseModel):
    min_revenue: int = 0
    max_spending: int = 200


class OwnerExpectations(BaseModel):
    wins: WinTargets
    playoffs: bool = False
    division: bool = False
    championship: bool = False
    player_development: list[str] = Field(default_factory=list)
    financial_targets: FinancialTargets = Field(default_factory=FinancialTargets)
    patience: int = Field(default=50, ge=1, le=100)


class MediaProjection(BaseModel):
    source: str
    projected_wins: int
    projected_losses: int
    playoff_odds: int = Field(ge=0, le=100)
    division_odds: int = Field(ge=0, le=100)
    championship_odds: int = Field(ge=0, le=100)
    ranking: int = Field(ge=1, le=32)
    analysis: str = ""


class SeasonGoal(BaseModel):
    id: str
    type: Literal[
        "wins",
        "playoffs",
        "division",
        "championship",
        "player_development",
        "financial",
        "custom",
    ]
    description: str
    target: str | int
    status: Literal["pending", "on_track", "at_risk", "achieved", "failed"] = "pending"


# ---------------------------------------------------------------------------
# Persistent container
# ---------------------------------------------------------------------------


class OffseasonData(BaseModel):
    """Accumulated results of every offseason phase.

    Frozen: updated only through gridiron.core.store.merge_offseason_data.
    Every field has a zero value so the container is never partially built.
    """

    model_config = ConfigDict(frozen=True)

    # Phase 1: Season End
    season_recap: SeasonRecap | None = None
    awards: list[AwardWinner] = Field(default_factory=list)
    draft_order: list[str] = Field(default_factory=list)  # team ids, first pick first

    # Phase 2: Coaching Decisions
    coach_evaluations: list[CoachEvaluationResult] = Field(default_factory=list)
    coaching_changes: list[CoachingChangeRecord] = Field(default_factory=list)

    # Phase 3: Contract Management
    contract_decisions: list[ContractDecisionRecord] = Field(default_factory=list)
    cap_space_after_decisions: int = 0

    # Phase 4: Combine
    combine_results: dict[str, CombineResult] = Field(default_factory=dict)
    pro_day_results: dict[str, ProDayResult] = Field(default_factory=dict)
    combine_complete: bool = False

    # Phase 5: Free Agency
    free_agent_signings: list[FreeAgentSigningRecord] = Field(default_factory=list)
    free_agency_day: int = 0
    remaining_free_agents: list[str] = Field(default_factory=list)

    # Phase 6: Draft
    draft_selections: list[DraftSelectionRecord] = Field(default_factory=list)
    draft_complete: bool = False
    trades_executed: int = 0

    # Phase 7: UDFA
    udfa_pool: list[Prospect] = Field(default_factory=list)
    udfa_signings: list[UDFASigningRecord] = Field(default_factory=list)

    # Phase 8: OTAs
    ota_reports: list[OTAReport] = Field(default_factory=list)
    rookie_integration_reports: list[RookieIntegrationReport] = Field(default_factory=list)
    position_battle_previews: list[PositionBattlePreview] = Field(default_factory=list)
    ota_decisions: list[OTADecision] = Field(default_factory=list)

    # Phase 9: Training Camp
    position_battles: list[PositionBattle] = Field(default_factory=list)
    development_reveals: list[DevelopmentReveal] = Field(default_factory=list)
    camp_injuries: list[CampInjury] = Field(default_factory=list)

    # Phase 10: Preseason
    preseason_games: list[PreseasonGame] = Field(default_factory=list)
    preseason_evaluations: list[PreseasonEvaluation] = Field(default_factory=list)
    preseason_injuries: list[PreseasonInjury] = Field(default_factory=list)

    # Phase 11: Final Cuts
    cut_plan: FinalCutsPlan | None = None
    waiver_wire: list[WaiverPlayer] = Field(default_factory=list)
    waiver_claims: list[WaiverClaim] = Field(default_factory=list)
    practice_squad_signings: list[str] = Field(default_factory=list)

    # Phase 12: Season Start
    owner_expectations: OwnerExpectations | None = None
    media_projections: list[MediaProjection] = Field(default_factory=list)
    season_goals: list[SeasonGoal] = Field(default_factory=list)

    # Metadata
    last_updated_phase: str = ""
    last_updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
