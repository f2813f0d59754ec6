"""Offseason orchestrator: the single entry point a UI or driver calls.

Every operation takes a LeagueState snapshot and returns a PhaseProcessResult
carrying a new snapshot. Nothing raises for domain failures. Missing state,
gating, and per-record mapper errors all come back in ``errors``.

Phase entry generates content once per field (see gridiron.core.store.set_if_empty),
seeding each step from the previous phase's stored records through
gridiron.core.bridges.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, assert_never

from pydantic import ValidationError

from gridiron.config import Settings, get_settings
from gridiron.core import mappers
from gridiron.core.bridges import (
    adjust_battles_for_ota,
    adjust_preseason_for_camp,
    ota_to_training_camp_input,
    preseason_to_final_cuts_input,
    training_camp_to_preseason_input,
)
from gridiron.core.generators import PhaseGenerators, SeasonStartData, preseason_injuries_from_games
from gridiron.core.phases import (
    PHASE_NAMES,
    add_event,
    add_release,
    add_roster_change,
    add_signing,
    advance_phase,
    can_advance_phase,
    complete_task,
    create_offseason_state,
    get_current_phase_tasks,
    get_progress,
    set_season_recap,
)
from gridiron.core.store import (
    append_records,
    create_empty_offseason_data,
    is_empty,
    merge_offseason_data,
    set_if_empty,
)
from gridiron.models.actions import (
    ApplyCoachingChanges,
    ApplyContractDecisions,
    ApplyDevelopment,
    ApplyDraftSelections,
    ApplyFreeAgencySignings,
    ApplyInjuries,
    ApplyRosterMoves,
    ApplyUDFASignings,
    CompleteTask,
    MarkCombineComplete,
    MarkDraftComplete,
    PhaseAction,
    StoreAwards,
    StoreCampInjuries,
    StoreCombineResults,
    StoreDevelopmentReveals,
    StoreOTAReports,
    StoreOwnerExpectations,
    StorePositionBattles,
    StorePreseasonEvaluations,
    StorePreseasonGames,
    parse_action,
)
from gridiron.models.league import LeagueState
from gridiron.models.offseason import (
    OffSeasonProgress,
    OffSeasonState,
    Phase,
    PlayerRelease,
    PlayerSigning,
)
from gridiron.models.records import OffseasonData

logger = logging.getLogger(__name__)

NO_STATE_ERROR = "No offseason state found"
ALREADY_INITIALIZED_ERROR = "Offseason already initialized"
CANNOT_ADVANCE_ERROR = "Cannot advance phase - required tasks not complete"


@dataclass
class PhaseProcessResult:
    league: LeagueState
    offseason_state: OffSeasonState | None
    offseason_data: OffseasonData | None
    success: bool = True
    errors: list[str] = field(default_factory=list)
    changes: list[str] = field(default_factory=list)


def _failure(league: LeagueState, error: str) -> PhaseProcessResult:
    logger.warning("offseason_operation_failed error=%s", error)
    return PhaseProcessResult(
        league=league,
        offseason_state=league.offseason_state,
        offseason_data=league.offseason_data,
        success=False,
        errors=[error],
    )


@dataclass
class _Context:
    """Working copy for one orchestrator call. Discarded once the result is built."""

    league: LeagueState
    state: OffSeasonState
    data: OffseasonData
    settings: Settings
    generators: PhaseGenerators
    entering: Phase | None = None
    errors: list[str] = field(default_factory=list)
    changes: list[str] = field(default_factory=list)

    @property
    def phase(self) -> Phase:
        return self.entering or self.state.current_phase

    def rng(self, step: str) -> random.Random:
        return self.settings.rng_for(self.league.year, self.phase, step)

    def generate(self, name: str, factory: Callable[[], Any]) -> bool:
        self.data, ran = set_if_empty(self.data, name, factory, phase=self.phase)
        if ran:
            logger.info("phase_generated phase=%s field=%s", self.phase, name)
            self.changes.append(f"Generated {name.replace('_', ' ')}")
        return ran

    def merge(self, **updates: Any) -> None:
        self.data = merge_offseason_data(self.data, updates, phase=self.phase)

    def fold(self, batch: mappers.BatchResult) -> list[bool]:
        """Take a mapper's league and errors. Returns per-record success flags."""
        self.league = batch.league
        self.errors.extend(batch.errors)
        applied = batch.applied
        if applied:
            self.changes.append(f"Applied {applied} of {len(batch.outcomes)} records")
        return [o.ok for o in batch.outcomes]

    def result(self) -> PhaseProcessResult:
        league = self.league.model_copy(
            update={"offseason_state": self.state, "offseason_data": self.data}
        )
        return PhaseProcessResult(
            league=league,
            offseason_state=self.state,
            offseason_data=self.data,
            success=not self.errors,
            errors=self.errors,
            changes=self.changes,
        )


def _context(
    league: LeagueState,
    settings: Settings | None,
    generators: PhaseGenerators | None,
) -> _Context | None:
    if league.offseason_state is None:
        return None
    return _Context(
        league=league,
        state=league.offseason_state,
        data=league.offseason_data or create_empty_offseason_data(),
        settings=settings or get_settings(),
        generators=generators or PhaseGenerators(),
    )


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


def initialize_offseason(
    league: LeagueState,
    settings: Settings | None = None,
    generators: PhaseGenerators | None = None,
) -> PhaseProcessResult:
    """Attach a fresh offseason to the league and enter season_end.

    Fails if the league already carries offseason state or data; tear it down first.
    """
    if league.offseason_state is not None or league.offseason_data is not None:
        return _failure(league, ALREADY_INITIALIZED_ERROR)

    fresh = league.model_copy(
        update={
            "offseason_state": create_offseason_state(league.year),
            "offseason_data": create_empty_offseason_data(),
        }
    )
    logger.info("offseason_initialized year=%d team=%s", league.year, league.user_team_id)
    result = enter_phase(fresh, "season_end", settings, generators)
    result.changes.insert(0, f"Initialized offseason for year {league.year}")
    return result


def teardown_offseason(league: LeagueState) -> PhaseProcessResult:
    """Detach offseason state and data so the next initialize can run."""
    if league.offseason_state is None and league.offseason_data is None:
        return _failure(league, NO_STATE_ERROR)
    cleared = league.model_copy(update={"offseason_state": None, "offseason_data": None})
    logger.info("offseason_torn_down year=%d", league.year)
    return PhaseProcessResult(
        league=cleared,
        offseason_state=None,
        offseason_data=None,
        changes=[f"Tore down offseason for year {league.year}"],
    )


# ---------------------------------------------------------------------------
# Phase entry
# ---------------------------------------------------------------------------


def _enter_season_end(ctx: _Context) -> None:
    gens = ctx.generators
    ctx.generate("draft_order", lambda: gens.draft_order(ctx.league, ctx.rng("draft_order")))
    if ctx.generate("awards", lambda: gens.season_awards(ctx.league, ctx.rng("awards"))):
        for award in ctx.data.awards:
            ctx.state = add_event(
                ctx.state,
                "award",
                f"{award.award}: {award.player_name}",
                {"player_id": award.player_id, "team_id": award.team_id},
            )
    ctx.generate(
        "season_recap",
        lambda: gens.season_recap(
            ctx.league, ctx.rng("season_recap"), ctx.data.awards, ctx.data.draft_order
        ),
    )
    if ctx.data.season_recap is not None:
        ctx.state = set_season_recap(ctx.state, ctx.data.season_recap)


def _enter_coaching_decisions(ctx: _Context) -> None:
    gens = ctx.generators
    ctx.generate(
        "coach_evaluations",
        lambda: gens.coach_evaluations(ctx.league, ctx.rng("coach_evaluations")),
    )


def _cap_space(league: LeagueState, salary_cap: int) -> int:
    """Salary cap minus the user team's current-year cap hits and dead money."""
    team = league.user_team
    committed = 0
    for contract in league.contracts.values():
        if contract.team_id != team.id:
            continue
        current = contract.year_data(league.year)
        if current is not None:
            committed += current.cap_hit
    return salary_cap - committed - team.dead_money


def _enter_contract_management(ctx: _Context) -> None:
    ctx.generate(
        "cap_space_after_decisions",
        lambda: _cap_space(ctx.league, ctx.settings.gridiron_salary_cap),
    )


def _enter_combine(ctx: _Context) -> None:
    gens = ctx.generators
    ctx.generate(
        "combine_results", lambda: gens.combine_results(ctx.league, ctx.rng("combine_results"))
    )


def _enter_free_agency(ctx: _Context) -> None:
    ctx.generate("free_agency_day", lambda: 1)
    # Union rather than generate-once: cuts made in contract management are
    # already listed and must not hide the rest of the market.
    existing = ctx.data.remaining_free_agents
    missing = [pid for pid in ctx.league.free_agent_ids() if pid not in existing]
    if missing:
        ctx.merge(remaining_free_agents=[*existing, *missing])
        ctx.changes.append(f"Listed {len(missing)} free agents")


def _enter_draft(ctx: _Context) -> None:
    gens = ctx.generators
    ctx.generate("draft_order", lambda: gens.draft_order(ctx.league, ctx.rng("draft_order")))


def _enter_udfa(ctx: _Context) -> None:
    gens = ctx.generators
    ctx.generate("udfa_pool", lambda: gens.udfa_pool(ctx.league, ctx.rng("udfa_pool")))


def _enter_otas(ctx: _Context) -> None:
    gens = ctx.generators
    ctx.generate("ota_reports", lambda: gens.ota_reports(ctx.league, ctx.rng("ota_reports")))
    ctx.generate(
        "rookie_integration_reports",
        lambda: gens.rookie_reports(ctx.league, ctx.rng("rookie_integration_reports")),
    )
    ctx.generate(
        "position_battle_previews",
        lambda: gens.battle_previews(ctx.league, ctx.rng("position_battle_previews")),
    )


def _enter_training_camp(ctx: _Context) -> None:
    gens = ctx.generators
    seeds = ota_to_training_camp_input(
        ctx.data.ota_reports,
        ctx.data.rookie_integration_reports,
        ctx.data.position_battle_previews,
    )
    ctx.generate(
        "position_battles",
        lambda: adjust_battles_for_ota(
            gens.position_battles(ctx.league, ctx.rng("position_battles")), seeds
        ),
    )
    ctx.generate(
        "development_reveals",
        lambda: gens.development_reveals(ctx.league, ctx.rng("development_reveals")),
    )
    if ctx.generate(
        "camp_injuries", lambda: gens.camp_injuries(ctx.league, ctx.rng("camp_injuries"))
    ):
        ctx.fold(mappers.apply_injuries(ctx.league, list(ctx.data.camp_injuries)))


def _enter_preseason(ctx: _Context) -> None:
    gens = ctx.generators
    seeds = training_camp_to_preseason_input(
        ctx.data.position_battles, ctx.data.development_reveals, ctx.data.camp_injuries
    )
    ctx.generate(
        "preseason_games",
        lambda: adjust_preseason_for_camp(
            gens.preseason_games(
                ctx.league, ctx.rng("preseason_games"), ctx.settings.gridiron_preseason_games
            ),
            seeds,
        ),
    )
    ctx.generate(
        "preseason_evaluations",
        lambda: gens.preseason_evaluations(ctx.data.preseason_games, ctx.league),
    )
    if ctx.generate(
        "preseason_injuries", lambda: preseason_injuries_from_games(ctx.data.preseason_games)
    ):
        ctx.fold(mappers.apply_injuries(ctx.league, list(ctx.data.preseason_injuries)))


def _enter_final_cuts(ctx: _Context) -> None:
    gens = ctx.generators
    ctx.generate(
        "cut_plan",
        lambda: preseason_to_final_cuts_input(
            ctx.data.preseason_evaluations,
            ctx.data.position_battles,
            ctx.league,
            guarantee_threshold=ctx.settings.gridiron_guarantee_threshold,
            practice_squad_max_experience=ctx.settings.gridiron_practice_squad_max_experience,
        ),
    )
    ctx.generate(
        "waiver_wire",
        lambda: gens.waiver_wire(
            ctx.league, ctx.rng("waiver_wire"), ctx.settings.gridiron_roster_limit
        ),
    )


def _enter_season_start(ctx: _Context) -> None:
    fields = ("owner_expectations", "media_projections", "season_goals")
    if not any(is_empty(getattr(ctx.data, name)) for name in fields):
        return
    bundle: SeasonStartData = ctx.generators.season_start(ctx.league, ctx.rng("season_start"))
    for name in fields:
        ctx.generate(name, lambda name=name: getattr(bundle, name))


_PHASE_ENTRY: dict[Phase, Callable[[_Context], None]] = {
    "season_end": _enter_season_end,
    "coaching_decisions": _enter_coaching_decisions,
    "contract_management": _enter_contract_management,
    "combine": _enter_combine,
    "free_agency": _enter_free_agency,
    "draft": _enter_draft,
    "udfa": _enter_udfa,
    "otas": _enter_otas,
    "training_camp": _enter_training_camp,
    "preseason": _enter_preseason,
    "final_cuts": _enter_final_cuts,
    "season_start": _enter_season_start,
}


def _complete_auto_tasks(ctx: _Context) -> None:
    for task in get_current_phase_tasks(ctx.state):
        if task.action_type == "auto" and not task.is_complete:
            ctx.state = complete_task(ctx.state, task.id)


def _refresh_validated_tasks(ctx: _Context) -> None:
    """Complete tasks whose completion condition the league now satisfies."""
    league, data = ctx.league, ctx.data
    for task in get_current_phase_tasks(ctx.state):
        if task.is_complete:
            continue
        condition = task.completion_condition
        if condition == "draftComplete":
            satisfied = data.draft_complete
        elif condition == "rosterSize<=53":
            roster = league.user_team.roster_player_ids
            satisfied = len(roster) <= ctx.settings.gridiron_roster_limit
        elif condition == "hasSigned":
            satisfied = any(s.team_id == league.user_team_id for s in data.free_agent_signings)
        else:
            satisfied = False
        if satisfied:
            ctx.state = complete_task(ctx.state, task.id)
            ctx.changes.append(f"Completed task {task.name}")


def enter_phase(
    league: LeagueState,
    phase: Phase,
    settings: Settings | None = None,
    generators: PhaseGenerators | None = None,
) -> PhaseProcessResult:
    """Log the phase start and generate whatever the phase still lacks.

    Safe to call repeatedly: fields that already hold content are left alone.
    """
    ctx = _context(league, settings, generators)
    if ctx is None:
        return _failure(league, NO_STATE_ERROR)

    ctx.state = add_event(
        ctx.state, "phase_start", f"Entering {PHASE_NAMES[phase]}", {"phase": phase}, phase=phase
    )
    logger.info("phase_entered year=%d phase=%s", league.year, phase)
    ctx.entering = phase
    _PHASE_ENTRY[phase](ctx)

    if phase == ctx.state.current_phase:
        _complete_auto_tasks(ctx)
        _refresh_validated_tasks(ctx)
    ctx.merge()
    ctx.changes.insert(0, f"Entered {PHASE_NAMES[phase]}")
    return ctx.result()


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


def _note_cuts(ctx: _Context, player_ids: list[str], before: LeagueState) -> None:
    """List cut players as free agents once and log releases off the user team."""
    listed = list(ctx.data.remaining_free_agents)
    user_roster = set(before.user_team.roster_player_ids)
    user_roster.update(before.user_team.practice_squad_ids)
    user_roster.update(before.user_team.injured_reserve_ids)
    for pid in player_ids:
        if pid not in listed:
            listed.append(pid)
        player = before.players.get(pid)
        if player is None or pid not in user_roster:
            continue
        contract = before.contracts.get(player.contract_id or "")
        current = contract.year_data(before.year) if contract else None
        ctx.state = add_release(
            ctx.state,
            PlayerRelease(
                player_id=pid,
                player_name=player.full_name,
                position=player.position,
                team_id=before.user_team_id,
                release_type="cut",
                cap_savings=current.salary if current else 0,
                dead_cap=current.bonus if current else 0,
                phase=ctx.phase,
            ),
        )
    ctx.merge(remaining_free_agents=listed)


def _dispatch(ctx: _Context, action: PhaseAction) -> None:
    if isinstance(action, CompleteTask):
        before = ctx.state
        ctx.state = complete_task(ctx.state, action.task_id)
        if ctx.state is not before:
            ctx.changes.append(f"Completed task {action.task_id}")
    elif isinstance(action, ApplyCoachingChanges):
        ok = ctx.fold(mappers.apply_coaching_changes(ctx.league, action.changes))
        applied = [c for c, good in zip(action.changes, ok, strict=True) if good]
        for change in applied:
            ctx.state = add_event(
                ctx.state,
                "coaching_change",
                f"{change.type.capitalize()}: {change.coach_name} ({change.role})",
                {"coach_id": change.coach_id, "team_id": change.team_id},
            )
        ctx.data = append_records(ctx.data, "coaching_changes", applied, phase=ctx.phase)
    elif isinstance(action, ApplyContractDecisions):
        before = ctx.league
        ok = ctx.fold(mappers.apply_contract_decisions(ctx.league, action.decisions))
        applied = [d for d, good in zip(action.decisions, ok, strict=True) if good]
        ctx.data = append_records(ctx.data, "contract_decisions", applied, phase=ctx.phase)
        cuts = [d.player_id for d in applied if d.type == "cut"]
        if cuts:
            _note_cuts(ctx, cuts, before)
        ctx.merge(cap_space_after_decisions=_cap_space(ctx.league, ctx.settings.gridiron_salary_cap))
    elif isinstance(action, ApplyDraftSelections):
        ok = ctx.fold(mappers.apply_draft_selections(ctx.league, action.selections))
        applied = [s for s, good in zip(action.selections, ok, strict=True) if good]
        for pick in applied:
            ctx.state = add_event(
                ctx.state,
                "draft_pick",
                f"Pick {pick.overall_pick}: {pick.player_name} ({pick.position})",
                {"prospect_id": pick.prospect_id, "team_id": pick.team_id},
            )
            if pick.team_id == ctx.league.user_team_id:
                ctx.state = add_roster_change(
                    ctx.state, "draft", pick.prospect_id, pick.player_name, pick.position,
                    pick.team_id, {"round": pick.round, "pick": pick.overall_pick},
                )
        ctx.data = append_records(ctx.data, "draft_selections", applied, phase=ctx.phase)
    elif isinstance(action, ApplyFreeAgencySignings):
        ok = ctx.fold(mappers.apply_free_agency_signings(ctx.league, action.signings))
        applied = [s for s, good in zip(action.signings, ok, strict=True) if good]
        for signing in applied:
            if signing.team_id != ctx.league.user_team_id:
                continue
            ctx.state = add_signing(
                ctx.state,
                PlayerSigning(
                    player_id=signing.player_id,
                    player_name=signing.player_name,
                    position=signing.position,
                    team_id=signing.team_id,
                    contract_years=signing.contract_years,
                    contract_value=signing.total_value,
                    signing_type="free_agent",
                    phase=ctx.phase,
                ),
            )
        ctx.data = append_records(ctx.data, "free_agent_signings", applied, phase=ctx.phase)
        signed = {s.player_id for s in applied}
        if signed:
            ctx.merge(
                remaining_free_agents=[
                    pid for pid in ctx.data.remaining_free_agents if pid not in signed
                ]
            )
    elif isinstance(action, ApplyUDFASignings):
        ok = ctx.fold(mappers.apply_udfa_signings(ctx.league, action.signings))
        applied = [s for s, good in zip(action.signings, ok, strict=True) if good]
        for signing in applied:
            if signing.team_id != ctx.league.user_team_id:
                continue
            ctx.state = add_signing(
                ctx.state,
                PlayerSigning(
                    player_id=signing.prospect_id,
                    player_name=signing.player_name,
                    position=signing.position,
                    team_id=signing.team_id,
                    contract_years=signing.contract_years,
                    contract_value=signing.base_salary * signing.contract_years
                    + signing.signing_bonus,
                    signing_type="udfa",
                    phase=ctx.phase,
                ),
            )
        ctx.data = append_records(ctx.data, "udfa_signings", applied, phase=ctx.phase)
        signed = {s.prospect_id for s in applied}
        if signed:
            ctx.merge(udfa_pool=[p for p in ctx.data.udfa_pool if p.id not in signed])
    elif isinstance(action, ApplyInjuries):
        ctx.fold(mappers.apply_injuries(ctx.league, action.injuries))
    elif isinstance(action, ApplyRosterMoves):
        before = ctx.league
        ok = ctx.fold(
            mappers.apply_roster_moves(
                ctx.league,
                action.cuts,
                action.practice_squad_signings,
                action.ir_placements,
                practice_squad_limit=ctx.settings.gridiron_practice_squad_limit,
            )
        )
        cut_ok = ok[: len(action.cuts)]
        ps_ok = ok[len(action.cuts) : len(action.cuts) + len(action.practice_squad_signings)]
        cuts = [pid for pid, good in zip(action.cuts, cut_ok, strict=True) if good]
        signed = [
            pid for pid, good in zip(action.practice_squad_signings, ps_ok, strict=True) if good
        ]
        if cuts:
            _note_cuts(ctx, cuts, before)
        if signed:
            # Practice-squad players are no longer on the open market.
            ctx.merge(
                practice_squad_signings=list(
                    dict.fromkeys([*ctx.data.practice_squad_signings, *signed])
                ),
                remaining_free_agents=[
                    pid for pid in ctx.data.remaining_free_agents if pid not in signed
                ],
            )
    elif isinstance(action, ApplyDevelopment):
        ctx.fold(mappers.apply_development_changes(ctx.league, action.changes))
    elif isinstance(action, StorePositionBattles):
        ctx.merge(position_battles=action.battles)
    elif isinstance(action, StoreDevelopmentReveals):
        ctx.merge(development_reveals=action.reveals)
    elif isinstance(action, StoreCampInjuries):
        ctx.merge(camp_injuries=action.injuries)
        ctx.fold(mappers.apply_injuries(ctx.league, list(action.injuries)))
    elif isinstance(action, StorePreseasonGames):
        ctx.merge(preseason_games=action.games)
    elif isinstance(action, StorePreseasonEvaluations):
        ctx.merge(preseason_evaluations=action.evaluations)
    elif isinstance(action, StoreOTAReports):
        ctx.merge(ota_reports=action.reports)
    elif isinstance(action, StoreOwnerExpectations):
        ctx.merge(
            owner_expectations=action.expectations,
            media_projections=action.projections,
            season_goals=action.goals,
        )
    elif isinstance(action, StoreCombineResults):
        ctx.merge(
            combine_results={**ctx.data.combine_results, **action.results},
            combine_complete=True,
        )
    elif isinstance(action, StoreAwards):
        ctx.merge(awards=action.awards)
    elif isinstance(action, MarkCombineComplete):
        ctx.merge(combine_complete=True)
    elif isinstance(action, MarkDraftComplete):
        ctx.merge(draft_complete=True)
    else:
        assert_never(action)


def process_phase_action(
    league: LeagueState,
    action: PhaseAction | Mapping[str, Any],
    settings: Settings | None = None,
) -> PhaseProcessResult:
    """Apply one user action. ``success`` is False when any record failed.

    Failed records do not roll back the ones that applied; the returned league
    reflects every record that could be applied.
    """
    ctx = _context(league, settings, None)
    if ctx is None:
        return _failure(league, NO_STATE_ERROR)
    if isinstance(action, Mapping):
        try:
            action = parse_action(dict(action))
        except ValidationError as exc:
            return _failure(league, f"Invalid action: {exc.error_count()} validation errors")

    logger.info("phase_action phase=%s type=%s", ctx.phase, action.type)
    _dispatch(ctx, action)
    _refresh_validated_tasks(ctx)
    ctx.merge()
    if ctx.errors:
        logger.warning(
            "phase_action_partial phase=%s type=%s errors=%d",
            ctx.phase,
            action.type,
            len(ctx.errors),
        )
    return ctx.result()


# ---------------------------------------------------------------------------
# Advancement and queries
# ---------------------------------------------------------------------------


def advance_to_next_phase(
    league: LeagueState,
    settings: Settings | None = None,
    generators: PhaseGenerators | None = None,
) -> PhaseProcessResult:
    """Transition to the next phase and enter it, or finish the offseason."""
    state = league.offseason_state
    if state is None:
        return _failure(league, NO_STATE_ERROR)
    if not can_advance_phase(state):
        return _failure(league, CANNOT_ADVANCE_ERROR)

    previous = state.current_phase
    advanced = advance_phase(state)
    moved = league.model_copy(update={"offseason_state": advanced})

    if advanced.is_complete:
        return PhaseProcessResult(
            league=moved,
            offseason_state=advanced,
            offseason_data=league.offseason_data,
            changes=[f"Completed {PHASE_NAMES[previous]}", "Offseason complete"],
        )

    result = enter_phase(moved, advanced.current_phase, settings, generators)
    result.changes.insert(
        0, f"Advanced from {PHASE_NAMES[previous]} to {PHASE_NAMES[advanced.current_phase]}"
    )
    return result


def is_offseason_complete(league: LeagueState) -> bool:
    return league.offseason_state is not None and league.offseason_state.is_complete


def get_current_phase(league: LeagueState) -> Phase | None:
    if league.offseason_state is None:
        return None
    return league.offseason_state.current_phase


def get_offseason_progress(league: LeagueState) -> OffSeasonProgress | None:
    if league.offseason_state is None:
        return None
    return get_progress(league.offseason_state)
