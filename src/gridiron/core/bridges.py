"""Phase data-flow bridges.

Pure functions that turn one phase's stored records into seed data for the
next phase: OTAs feed training camp, camp feeds preseason, preseason feeds
final cuts. The orchestrator applies the seeds as additive nudges on freshly
generated content. Upstream signal adjusts downstream output; it never
replaces it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from gridiron.models.league import LeagueState
from gridiron.models.records import (
    CampInjury,
    CutEvaluationPlayer,
    DevelopmentReveal,
    FinalCutsPlan,
    OffseasonData,
    OTAReport,
    PositionBattle,
    PositionBattlePreview,
    PreseasonEvaluation,
    PreseasonGame,
    RookieIntegrationReport,
    grade_from_score,
)

logger = logging.getLogger(__name__)

# Incumbent head start in a camp battle, by OTA preview competition level.
INCUMBENT_ADVANTAGE: dict[str, int] = {"heated": 5, "competitive": 10, "clear_starter": 20}

# OTA baselines. Scores above these nudge camp battle scores upward.
CONDITIONING_BASELINE = 70
SCHEME_GRASP_BASELINE = 60
OTA_NUDGE_FACTOR = 0.1
INCUMBENT_NUDGE_FACTOR = 0.25
ROOKIE_READINESS_NUDGE: dict[str, float] = {"ahead": 3.0, "on_track": 0.0, "behind": -3.0}

# Preseason evaluation reps (percent) for decided winners vs. everyone else.
WINNER_REPS = 30
COMPETITOR_REPS = 60
BASELINE_REPS = 50

# Performance bonus from camp development reveals.
DEVELOPMENT_BONUS_SKILL_JUMP = 10
DEVELOPMENT_BONUS_POSITIVE_TRAIT = 7
DEVELOPMENT_BONUS_DECLINE = -5
DEVELOPMENT_BONUS_INJURY_CONCERN = -3

# Final-cut priority. Higher means more likely to be cut.
CUT_PRIORITY_BASE = 50
PROJECTION_ADJUSTMENT: dict[str, int] = {
    "cut_candidate": 30,
    "bubble": 15,
    "practice_squad": 20,
    "lock": -30,
}
BATTLE_WINNER_ADJUSTMENT = -25
GUARANTEE_ADJUSTMENT = -20
MUST_KEEP_BELOW = 25
BUBBLE_BELOW = 45
PRACTICE_SQUAD_PRIORITY_BELOW = 70
RECOMMEND_CUT_AT = 60
VESTED_EXPERIENCE = 4
DEFAULT_PRESEASON_GRADE = 70.0

# Winner margins when re-deciding a battle after adjustment.
WINNER_MARGIN = 10
DECIDED_MARGIN = 15
ONGOING_MARGIN = 5

IDEAL_POSITION_COUNTS: dict[str, int] = {
    "QB": 3, "RB": 4, "WR": 6, "TE": 3, "OT": 4, "OG": 4, "C": 2,
    "DE": 4, "DT": 4, "LB": 7, "CB": 6, "S": 4, "K": 1, "P": 1,
}


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


# ---------------------------------------------------------------------------
# OTAs -> Training Camp
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BattleSeed:
    position: str
    incumbent_id: str
    challenger_ids: tuple[str, ...]
    incumbent_advantage: int


@dataclass
class CampSeedInput:
    """What OTAs tell training camp about each player."""

    conditioning: dict[str, int] = field(default_factory=dict)
    scheme_grasp: dict[str, int] = field(default_factory=dict)
    rookie_readiness: dict[str, Literal["ahead", "on_track", "behind"]] = field(
        default_factory=dict
    )
    battle_seeds: list[BattleSeed] = field(default_factory=list)


def ota_to_training_camp_input(
    ota_reports: list[OTAReport],
    rookie_reports: list[RookieIntegrationReport],
    battle_previews: list[PositionBattlePreview],
) -> CampSeedInput:
    """Collect conditioning, scheme grasp, rookie readiness, and battle seeds."""
    seeds = CampSeedInput()
    for report in ota_reports:
        seeds.conditioning[report.player_id] = report.conditioning_level
        seeds.scheme_grasp[report.player_id] = report.scheme_grasp
    for rookie in rookie_reports:
        seeds.rookie_readiness[rookie.player_id] = rookie.learning_curve
    for preview in battle_previews:
        seeds.battle_seeds.append(
            BattleSeed(
                position=preview.position,
                incumbent_id=preview.incumbent_id,
                challenger_ids=tuple(c.player_id for c in preview.challengers),
                incumbent_advantage=INCUMBENT_ADVANTAGE.get(preview.competition_level, 10),
            )
        )
    return seeds


def decide_battle(battle: PositionBattle) -> PositionBattle:
    """Re-rank competitors and settle winner/status from the score margin."""
    ranked = sorted(battle.competitors, key=lambda c: c.current_score, reverse=True)
    if not ranked:
        return battle.model_copy(update={"winner": None, "status": "ongoing"})
    if len(ranked) == 1:
        return battle.model_copy(
            update={"competitors": ranked, "winner": ranked[0].player_id, "status": "decided"}
        )
    margin = ranked[0].current_score - ranked[1].current_score
    winner = ranked[0].player_id if margin > WINNER_MARGIN else None
    if margin > DECIDED_MARGIN:
        status = "decided"
    elif margin > ONGOING_MARGIN:
        status = "ongoing"
    else:
        status = "too_close"
    return battle.model_copy(update={"competitors": ranked, "winner": winner, "status": status})


def adjust_battles_for_ota(
    battles: list[PositionBattle], seeds: CampSeedInput
) -> list[PositionBattle]:
    """Nudge generated camp battle scores with OTA signal, then re-decide each battle.

    Every competitor score is clamped to [0, 100].
    """
    incumbents: dict[str, int] = {
        seed.incumbent_id: seed.incumbent_advantage for seed in seeds.battle_seeds
    }
    adjusted: list[PositionBattle] = []
    for battle in battles:
        competitors = []
        for competitor in battle.competitors:
            pid = competitor.player_id
            nudge = 0.0
            if pid in seeds.conditioning:
                nudge += (seeds.conditioning[pid] - CONDITIONING_BASELINE) * OTA_NUDGE_FACTOR
            if pid in seeds.scheme_grasp:
                nudge += (seeds.scheme_grasp[pid] - SCHEME_GRASP_BASELINE) * OTA_NUDGE_FACTOR
            if pid in incumbents:
                nudge += incumbents[pid] * INCUMBENT_NUDGE_FACTOR
            nudge += ROOKIE_READINESS_NUDGE.get(seeds.rookie_readiness.get(pid, "on_track"), 0.0)
            score = round(clamp(competitor.current_score + nudge), 1)
            competitors.append(competitor.model_copy(update={"current_score": score}))
        adjusted.append(decide_battle(battle.model_copy(update={"competitors": competitors})))
    return adjusted


# ---------------------------------------------------------------------------
# Training Camp -> Preseason
# ---------------------------------------------------------------------------


@dataclass
class PreseasonSeedInput:
    """What camp tells the preseason about playing time and form."""

    starter_projections: dict[str, bool] = field(default_factory=dict)
    development_bonuses: dict[str, int] = field(default_factory=dict)
    sidelined: set[str] = field(default_factory=set)
    reps: dict[str, int] = field(default_factory=dict)


def development_bonus(reveal: DevelopmentReveal) -> int:
    if reveal.reveal_type == "skill_jump":
        return DEVELOPMENT_BONUS_SKILL_JUMP
    if reveal.reveal_type == "trait" and reveal.impact == "positive":
        return DEVELOPMENT_BONUS_POSITIVE_TRAIT
    if reveal.reveal_type == "decline":
        return DEVELOPMENT_BONUS_DECLINE
    if reveal.reveal_type == "injury_concern":
        return DEVELOPMENT_BONUS_INJURY_CONCERN
    return 0


def training_camp_to_preseason_input(
    battles: list[PositionBattle],
    reveals: list[DevelopmentReveal],
    injuries: list[CampInjury],
) -> PreseasonSeedInput:
    """Starter projections, reps split, development bonuses, and sidelined players."""
    seeds = PreseasonSeedInput()
    for battle in battles:
        if battle.winner:
            seeds.starter_projections[battle.winner] = True
            seeds.reps[battle.winner] = WINNER_REPS
        for competitor in battle.competitors:
            if competitor.player_id != battle.winner:
                seeds.starter_projections[competitor.player_id] = False
                seeds.reps[competitor.player_id] = COMPETITOR_REPS

    for reveal in reveals:
        seeds.development_bonuses[reveal.player_id] = development_bonus(reveal)

    for injury in injuries:
        if injury.severity in ("serious", "season_ending") or injury.practice_status == "out":
            seeds.sidelined.add(injury.player_id)
    return seeds


def adjust_preseason_for_camp(
    games: list[PreseasonGame], seeds: PreseasonSeedInput
) -> list[PreseasonGame]:
    """Apply camp signal to generated preseason performances.

    Sidelined players are dropped from box scores, snaps scale with the reps
    split, and development bonuses shift the performance score before the
    letter grade is recomputed.
    """
    adjusted: list[PreseasonGame] = []
    for game in games:
        performances = []
        for perf in game.player_performances:
            pid = perf.player_id
            if pid in seeds.sidelined:
                continue
            snaps = perf.snaps
            if pid in seeds.reps:
                snaps = max(0, round(snaps * seeds.reps[pid] / BASELINE_REPS))
            score = round(clamp(perf.score + seeds.development_bonuses.get(pid, 0)), 1)
            performances.append(
                perf.model_copy(
                    update={"snaps": snaps, "score": score, "grade": grade_from_score(score)}
                )
            )
        adjusted.append(game.model_copy(update={"player_performances": performances}))
    return adjusted


# ---------------------------------------------------------------------------
# Preseason -> Final Cuts
# ---------------------------------------------------------------------------


def preseason_to_final_cuts_input(
    evaluations: list[PreseasonEvaluation],
    battles: list[PositionBattle],
    league: LeagueState,
    *,
    guarantee_threshold: int = 500,
    practice_squad_max_experience: int = 3,
) -> FinalCutsPlan:
    """Score every rostered user-team player for cut priority and partition them.

    must_keep is priority < 25, bubble is 25-44, everything else is a cut
    candidate. Cut candidates are ordered worst preseason grade first.
    """
    team = league.teams.get(league.user_team_id)
    if team is None:
        logger.warning("final_cuts_no_user_team team_id=%s", league.user_team_id)
        return FinalCutsPlan()

    by_player = {e.player_id: e for e in evaluations}
    winners = {b.winner for b in battles if b.winner}

    plan = FinalCutsPlan()
    for player_id in team.roster_player_ids:
        player = league.players.get(player_id)
        if player is None:
            continue
        evaluation = by_player.get(player_id)
        contract = league.contracts.get(player.contract_id) if player.contract_id else None

        priority = CUT_PRIORITY_BASE
        if evaluation is not None:
            priority += PROJECTION_ADJUSTMENT.get(evaluation.roster_projection, 0)
        if player_id in winners:
            priority += BATTLE_WINNER_ADJUSTMENT

        guaranteed = 0
        if contract is not None:
            current = contract.year_data(league.year)
            if current is not None:
                guaranteed = current.bonus
                if current.bonus > guarantee_threshold:
                    priority += GUARANTEE_ADJUSTMENT

        plan.priorities[player_id] = priority
        ps_eligible = player.experience < practice_squad_max_experience

        if priority < MUST_KEEP_BELOW:
            plan.must_keep.append(player_id)
            continue
        if priority < BUBBLE_BELOW:
            plan.bubble.append(player_id)
            continue

        plan.cut_candidates.append(
            CutEvaluationPlayer(
                player_id=player_id,
                player_name=player.full_name,
                position=player.position,
                age=player.age,
                experience=player.experience,
                overall_rating=player.overall,
                preseason_grade=evaluation.avg_grade if evaluation else DEFAULT_PRESEASON_GRADE,
                salary=contract.average_annual_value if contract else 0,
                guaranteed=guaranteed,
                dead_cap_if_cut=guaranteed,
                is_vested=player.experience >= VESTED_EXPERIENCE,
                practice_squad_eligible=ps_eligible,
                cut_priority=priority,
                recommendation="cut" if priority >= RECOMMEND_CUT_AT else "practice_squad",
            )
        )
        if ps_eligible and priority < PRACTICE_SQUAD_PRIORITY_BELOW:
            plan.practice_squad_candidates.append(player_id)

    plan.cut_candidates.sort(key=lambda c: c.preseason_grade)
    logger.info(
        "final_cuts_plan must_keep=%d bubble=%d cut_candidates=%d practice_squad=%d",
        len(plan.must_keep),
        len(plan.bubble),
        len(plan.cut_candidates),
        len(plan.practice_squad_candidates),
    )
    return plan


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PositionCount:
    current: int
    ideal: int


@dataclass
class RosterNeeds:
    over_by: int
    need_to_cut: int
    position_breakdown: dict[str, PositionCount]


def calculate_roster_needs(league: LeagueState, target_roster_size: int = 53) -> RosterNeeds:
    """How far the user roster is over the limit, and its depth by position."""
    roster = league.roster(league.user_team_id)
    over_by = max(0, len(roster) - target_roster_size)
    counts: dict[str, int] = {}
    for player in roster:
        counts[player.position] = counts.get(player.position, 0) + 1
    breakdown = {
        position: PositionCount(current=counts.get(position, 0), ideal=ideal)
        for position, ideal in IDEAL_POSITION_COUNTS.items()
    }
    return RosterNeeds(over_by=over_by, need_to_cut=over_by, position_breakdown=breakdown)


@dataclass
class DataFlowSummary:
    ota_reports: int
    rookie_reports: int
    camp_battles: int
    camp_reveals: int
    camp_injuries: int
    preseason_games: int
    preseason_evaluations: int
    preseason_injuries: int

    @property
    def status(self) -> Literal["complete", "partial", "none"]:
        stages = (self.ota_reports > 0, self.camp_battles > 0, self.preseason_games > 0)
        if all(stages):
            return "complete"
        if any(stages):
            return "partial"
        return "none"


def summarize_phase_data_flow(data: OffseasonData) -> DataFlowSummary:
    """Record counts along the OTA -> camp -> preseason chain."""
    return DataFlowSummary(
        ota_reports=len(data.ota_reports),
        rookie_reports=len(data.rookie_integration_reports),
        camp_battles=len(data.position_battles),
        camp_reveals=len(data.development_reveals),
        camp_injuries=len(data.camp_injuries),
        preseason_games=len(data.preseason_games),
        preseason_evaluations=len(data.preseason_evaluations),
        preseason_injuries=len(data.preseason_injuries),
    )
