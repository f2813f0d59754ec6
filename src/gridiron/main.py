"""Offseason driver: logging setup and a hands-off run through all twelve phases."""

from __future__ import annotations

import logging

from gridiron.config import Settings
from gridiron.core.orchestrator import (
    PhaseProcessResult,
    advance_to_next_phase,
    initialize_offseason,
    is_offseason_complete,
    process_phase_action,
)
from gridiron.core.phases import get_required_tasks
from gridiron.models.actions import (
    ApplyDraftSelections,
    ApplyRosterMoves,
    CompleteTask,
    MarkDraftComplete,
)
from gridiron.models.league import LeagueState
from gridiron.models.records import DraftSelectionRecord

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.gridiron_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _first_round(league: LeagueState) -> list[DraftSelectionRecord]:
    """One round in draft order, every team taking the best-graded prospect left."""
    data = league.offseason_data
    if data is None:
        return []
    board = sorted(league.prospects.values(), key=lambda p: (-p.grade, p.id))
    picks: list[DraftSelectionRecord] = []
    for number, (team_id, prospect) in enumerate(zip(data.draft_order, board), start=1):
        picks.append(
            DraftSelectionRecord(
                round=1,
                pick=number,
                overall_pick=number,
                team_id=team_id,
                prospect_id=prospect.id,
                player_name=prospect.player.full_name,
                position=prospect.player.position,
                school=prospect.school,
                grade=f"{prospect.grade:.0f}",
            )
        )
    return picks


def _cuts_to_limit(league: LeagueState, limit: int) -> list[str]:
    """Cut plan candidates first, then the lowest-rated players outside must_keep."""
    roster = league.user_team.roster_player_ids
    over = len(roster) - limit
    if over <= 0:
        return []
    plan = league.offseason_data.cut_plan if league.offseason_data else None
    cuts = [c.player_id for c in plan.cut_candidates] if plan else []
    protected = set(plan.must_keep) if plan else set()
    rest = sorted(
        (pid for pid in roster if pid not in cuts),
        key=lambda pid: (pid in protected, league.players[pid].overall, pid),
    )
    ordered = dict.fromkeys([*cuts, *rest])
    return [pid for pid in ordered if pid in roster][:over]


def _play_phase(league: LeagueState, settings: Settings) -> PhaseProcessResult | None:
    """Take the actions a phase's required tasks cannot complete without."""
    state = league.offseason_state
    if state is None:
        return None
    result: PhaseProcessResult | None = None
    if state.current_phase == "draft":
        result = process_phase_action(
            league, ApplyDraftSelections(selections=_first_round(league)), settings
        )
        result = process_phase_action(result.league, MarkDraftComplete(), settings)
    elif state.current_phase == "final_cuts":
        cuts = _cuts_to_limit(league, settings.gridiron_roster_limit)
        if cuts:
            result = process_phase_action(league, ApplyRosterMoves(cuts=cuts), settings)
    if result is not None and result.errors:
        logger.warning(
            "run_phase_errors phase=%s errors=%d", state.current_phase, len(result.errors)
        )
    return result


def run_offseason(league: LeagueState, settings: Settings | None = None) -> PhaseProcessResult:
    """Initialize and simulate the whole offseason with default decisions.

    Returns the last result: either the completed offseason or the first failure.
    """
    settings = settings or Settings()
    result = initialize_offseason(league, settings)
    if not result.success:
        return result

    while not is_offseason_complete(result.league):
        played = _play_phase(result.league, settings)
        current = played.league if played is not None else result.league
        for task in get_required_tasks(current.offseason_state):
            if not task.is_complete:
                current = process_phase_action(
                    current, CompleteTask(task_id=task.id), settings
                ).league
        result = advance_to_next_phase(current, settings)
        if not result.success:
            logger.warning("run_offseason_stalled errors=%s", result.errors)
            return result

    logger.info("run_offseason_complete year=%d", result.league.year)
    return result
