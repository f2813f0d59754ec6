"""Tests for the offseason orchestrator."""

from gridiron.config import Settings
from gridiron.core.generators import PhaseGenerators
from gridiron.core.orchestrator import (
    ALREADY_INITIALIZED_ERROR,
    CANNOT_ADVANCE_ERROR,
    NO_STATE_ERROR,
    PhaseProcessResult,
    advance_to_next_phase,
    enter_phase,
    get_current_phase,
    get_offseason_progress,
    initialize_offseason,
    is_offseason_complete,
    process_phase_action,
    teardown_offseason,
)
from gridiron.core.phases import PHASE_ORDER, get_required_tasks
from gridiron.models.actions import (
    ApplyContractDecisions,
    ApplyDraftSelections,
    ApplyRosterMoves,
    CompleteTask,
    MarkDraftComplete,
    StoreCombineResults,
)
from gridiron.models.league import LeagueState
from gridiron.models.offseason import Phase, TeamRecord
from gridiron.models.records import (
    CombineResult,
    ContractDecisionDetails,
    ContractDecisionRecord,
    DraftSelectionRecord,
)


def _start(league: LeagueState, settings: Settings) -> LeagueState:
    result = initialize_offseason(league, settings)
    assert result.success
    return result.league


def _advance_to(league: LeagueState, phase: Phase, settings: Settings) -> LeagueState:
    """Tick required tasks and advance until ``phase`` is current."""
    while league.offseason_state.current_phase != phase:
        for task in get_required_tasks(league.offseason_state):
            if not task.is_complete:
                league = process_phase_action(league, CompleteTask(task_id=task.id), settings).league
        result = advance_to_next_phase(league, settings)
        assert result.success, result.errors
        league = result.league
    return league


def _cut(league: LeagueState, player_id: str) -> ContractDecisionRecord:
    player = league.players[player_id]
    return ContractDecisionRecord(
        type="cut",
        player_id=player_id,
        player_name=player.full_name,
        position=player.position,
        team_id=league.user_team_id,
        details=ContractDecisionDetails(dead_money=100),
    )


class TestInitialize:
    def test_initialize_enters_season_end(self, league: LeagueState, settings: Settings) -> None:
        """A fresh offseason starts at season_end with its content generated."""
        result = initialize_offseason(league, settings)
        assert isinstance(result, PhaseProcessResult)
        assert result.success
        assert result.changes[0] == "Initialized offseason for year 2025"
        assert get_current_phase(result.league) == "season_end"
        data = result.offseason_data
        assert set(data.draft_order) == set(league.teams)
        assert data.awards
        assert data.season_recap is not None
        assert result.offseason_state.season_recap == data.season_recap
        assert data.last_updated_phase == "season_end"
        assert result.league.offseason_state == result.offseason_state

    def test_initialize_twice_fails(self, league: LeagueState, settings: Settings) -> None:
        """A league that already has an offseason is rejected unchanged."""
        started = _start(league, settings)
        result = initialize_offseason(started, settings)
        assert not result.success
        assert result.errors == [ALREADY_INITIALIZED_ERROR]
        assert result.league is started

    def test_teardown_allows_reinitialize(self, league: LeagueState, settings: Settings) -> None:
        """Tearing down clears state so a new offseason can start."""
        torn = teardown_offseason(_start(league, settings))
        assert torn.success
        assert torn.league.offseason_state is None
        assert torn.league.offseason_data is None
        assert initialize_offseason(torn.league, settings).success

    def test_same_seed_same_content(self, league: LeagueState, settings: Settings) -> None:
        """Seeded generation replays identically."""
        a = initialize_offseason(league, settings).offseason_data
        b = initialize_offseason(league, settings).offseason_data
        assert a.draft_order == b.draft_order
        assert a.awards == b.awards


class TestMissingState:
    def test_operations_without_offseason(self, league: LeagueState, settings: Settings) -> None:
        """Every operation on a league with no offseason fails with the same error."""
        results = [
            enter_phase(league, "draft", settings),
            process_phase_action(league, MarkDraftComplete(), settings),
            advance_to_next_phase(league, settings),
            teardown_offseason(league),
        ]
        for result in results:
            assert not result.success
            assert result.errors == [NO_STATE_ERROR]
            assert result.league is league
        assert get_current_phase(league) is None
        assert get_offseason_progress(league) is None
        assert not is_offseason_complete(league)


class TestEnterPhase:
    def test_reentry_keeps_generated_content(
        self, league: LeagueState, settings: Settings
    ) -> None:
        """Entering season_end twice keeps the same draft order and awards."""
        started = _start(league, settings)
        first = started.offseason_data
        again = enter_phase(started, "season_end", settings)
        assert again.success
        assert again.offseason_data.draft_order == first.draft_order
        assert again.offseason_data.awards == first.awards
        assert not any(c.startswith("Generated") for c in again.changes)
        award_events = [e for e in again.offseason_state.events if e.type == "award"]
        assert len(award_events) == len(first.awards)

    def test_entry_logs_phase_start(self, league: LeagueState, settings: Settings) -> None:
        """Every entry logs a phase_start event for the entered phase."""
        started = _start(league, settings)
        events = started.offseason_state.events
        assert events[0].type == "phase_start"
        assert events[0].phase == "season_end"
        assert events[0].description == "Entering Season End"

    def test_draft_order_worst_first(self, league: LeagueState, settings: Settings) -> None:
        """A 2-10 team is drafted ahead of a 12-4 team."""
        teams = dict(league.teams)
        strong, weak = list(teams)[:2]
        teams[strong] = teams[strong].model_copy(update={"record": TeamRecord(wins=12, losses=4)})
        teams[weak] = teams[weak].model_copy(update={"record": TeamRecord(wins=2, losses=10)})
        order = _start(league.model_copy(update={"teams": teams}), settings).offseason_data.draft_order
        assert order.index(weak) < order.index(strong)

    def test_injected_generator(self, league: LeagueState, settings: Settings) -> None:
        """A replacement generator is used in place of the default."""
        ids = list(league.teams)
        generators = PhaseGenerators(draft_order=lambda league, rng=None: list(reversed(ids)))
        result = initialize_offseason(league, settings, generators)
        assert result.offseason_data.draft_order == list(reversed(ids))


class TestAdvance:
    def test_gated_on_required_tasks(self, league: LeagueState, settings: Settings) -> None:
        """Advancing with required tasks open fails and changes nothing."""
        started = _start(league, settings)
        result = advance_to_next_phase(started, settings)
        assert not result.success
        assert result.errors == [CANNOT_ADVANCE_ERROR]
        assert result.league is started

    def test_advance_enters_next_phase(self, league: LeagueState, settings: Settings) -> None:
        """A successful advance generates the next phase's content immediately."""
        started = _start(league, settings)
        ready = process_phase_action(started, CompleteTask(task_id="view_recap"), settings).league
        result = advance_to_next_phase(ready, settings)
        assert result.success
        assert result.changes[0] == "Advanced from Season End to Coaching Decisions"
        assert get_current_phase(result.league) == "coaching_decisions"
        assert result.offseason_data.coach_evaluations

    def test_full_walk_completes(self, league: LeagueState, settings: Settings) -> None:
        """Walking every phase ends with the offseason complete."""
        walked = _advance_to(_start(league, settings), "season_start", settings)
        data = walked.offseason_data
        assert data.owner_expectations is not None
        assert data.media_projections
        assert data.season_goals
        season_start = walked.offseason_state.phase_tasks["season_start"]
        auto_ids = {"media_projections", "set_goals"}
        assert auto_ids <= set(season_start.tasks_completed)

        league = walked
        for task in get_required_tasks(league.offseason_state):
            league = process_phase_action(league, CompleteTask(task_id=task.id), settings).league
        done = advance_to_next_phase(league, settings)
        assert done.success
        assert is_offseason_complete(done.league)
        assert done.offseason_state.completed_phases == list(PHASE_ORDER)
        progress = get_offseason_progress(done.league)
        assert progress.percent_complete == 100


class TestActions:
    def test_cut_lists_free_agent_once(self, league: LeagueState, settings: Settings) -> None:
        """A cut player leaves the roster and is listed as a free agent exactly once."""
        current = _advance_to(_start(league, settings), "contract_management", settings)
        pid = current.user_team.roster_player_ids[0]
        result = process_phase_action(
            current, ApplyContractDecisions(decisions=[_cut(current, pid)]), settings
        )
        assert result.success
        assert pid not in result.league.user_team.roster_player_ids
        assert result.league.players[pid].contract_id is None
        assert result.offseason_data.remaining_free_agents.count(pid) == 1
        assert result.offseason_data.contract_decisions[0].player_id == pid
        assert result.offseason_state.releases[0].player_id == pid

        in_free_agency = _advance_to(result.league, "free_agency", settings)
        listed = in_free_agency.offseason_data.remaining_free_agents
        assert listed.count(pid) == 1
        assert set(league.free_agent_ids()) <= set(listed)

    def test_cut_updates_cap_space(self, league: LeagueState, settings: Settings) -> None:
        """Cutting a player frees cap space net of dead money."""
        current = _advance_to(_start(league, settings), "contract_management", settings)
        before = current.offseason_data.cap_space_after_decisions
        pid = current.user_team.roster_player_ids[0]
        cap_hit = current.contracts[current.players[pid].contract_id].year_data(2025).cap_hit
        result = process_phase_action(
            current, ApplyContractDecisions(decisions=[_cut(current, pid)]), settings
        )
        assert result.offseason_data.cap_space_after_decisions == before + cap_hit - 100

    def test_partial_batch(self, league: LeagueState, settings: Settings) -> None:
        """One bad draft pick fails the action but the good pick still lands."""
        current = _advance_to(_start(league, settings), "draft", settings)
        prospect_id, prospect = next(iter(current.prospects.items()))
        picks = [
            DraftSelectionRecord(
                round=1, pick=1, overall_pick=1, team_id=current.user_team_id,
                prospect_id="missing", player_name="Nobody", position="QB",
            ),
            DraftSelectionRecord(
                round=1, pick=2, overall_pick=2, team_id=current.user_team_id,
                prospect_id=prospect_id, player_name=prospect.player.full_name,
                position=prospect.player.position,
            ),
        ]
        result = process_phase_action(current, ApplyDraftSelections(selections=picks), settings)
        assert not result.success
        assert result.errors == ["Prospect not found: missing"]
        assert prospect.player.id in result.league.user_team.roster_player_ids
        assert [s.prospect_id for s in result.offseason_data.draft_selections] == [prospect_id]
        assert any(e.type == "draft_pick" for e in result.offseason_state.events)

    def test_mark_draft_complete_satisfies_task(
        self, league: LeagueState, settings: Settings
    ) -> None:
        """The draft's required task completes once the draft is marked complete."""
        current = _advance_to(_start(league, settings), "draft", settings)
        assert advance_to_next_phase(current, settings).errors == [CANNOT_ADVANCE_ERROR]
        result = process_phase_action(current, {"type": "mark_draft_complete"}, settings)
        assert result.success
        assert result.offseason_data.draft_complete
        assert "make_picks" in result.offseason_state.phase_tasks["draft"].tasks_completed
        assert advance_to_next_phase(result.league, settings).success

    def test_invalid_action_payload(self, league: LeagueState, settings: Settings) -> None:
        """A malformed action dict is reported, not raised."""
        started = _start(league, settings)
        result = process_phase_action(started, {"type": "launch_rocket"}, settings)
        assert not result.success
        assert result.errors[0].startswith("Invalid action")

    def test_store_combine_results_merges(self, league: LeagueState, settings: Settings) -> None:
        """Stored combine results merge into the generated ones and mark the combine done."""
        current = _advance_to(_start(league, settings), "combine", settings)
        generated = current.offseason_data.combine_results
        assert set(generated) == set(league.prospects)
        extra = CombineResult(
            prospect_id="walk-on",
            forty_yard=4.6,
            bench_press=20,
            vertical_jump=32.0,
            broad_jump=115,
            three_cone=7.1,
            shuttle=4.3,
            athletic_score=70.0,
        )
        result = process_phase_action(
            current, StoreCombineResults(results={"walk-on": extra}), settings
        )
        assert set(result.offseason_data.combine_results) == set(generated) | {"walk-on"}
        assert result.offseason_data.combine_complete

    def test_cut_to_limit_completes_final_cuts(
        self, league: LeagueState, settings: Settings
    ) -> None:
        """Cutting down to the roster limit completes the required final-cuts task."""
        current = _advance_to(_start(league, settings), "final_cuts", settings)
        assert current.offseason_data.cut_plan is not None
        assert current.offseason_data.waiver_wire
        tasks = current.offseason_state.phase_tasks["final_cuts"]
        assert "cut_to_53" not in tasks.tasks_completed

        roster = current.user_team.roster_player_ids
        over = len(roster) - settings.gridiron_roster_limit
        result = process_phase_action(current, ApplyRosterMoves(cuts=roster[:over]), settings)
        assert result.success
        assert len(result.league.user_team.roster_player_ids) == 53
        assert "cut_to_53" in result.offseason_state.phase_tasks["final_cuts"].tasks_completed
        for pid in roster[:over]:
            assert result.offseason_data.remaining_free_agents.count(pid) == 1

    def test_practice_squad_signings_capped_and_listed_once(self, league: LeagueState) -> None:
        """The configured practice-squad limit applies and repeat signings are stored once."""
        settings = Settings(
            gridiron_env="test", gridiron_rng_seed=7, gridiron_practice_squad_limit=2
        )
        started = _start(league, settings)
        a, b, c = started.user_team.roster_player_ids[:3]

        result = process_phase_action(
            started, ApplyRosterMoves(practice_squad_signings=[a, b, c]), settings
        )
        assert not result.success
        assert len(result.errors) == 1
        assert result.league.user_team.practice_squad_ids == [a, b]
        assert result.offseason_data.practice_squad_signings == [a, b]

        again = process_phase_action(
            result.league, ApplyRosterMoves(practice_squad_signings=[a]), settings
        )
        assert again.success
        assert again.offseason_data.practice_squad_signings == [a, b]



class TestPhaseGeneration:
    def test_camp_injuries_applied_on_entry(
        self, league: LeagueState, settings: Settings
    ) -> None:
        """Camp injuries land on player injury status when camp opens."""
        current = _advance_to(_start(league, settings), "training_camp", settings)
        data = current.offseason_data
        assert data.position_battles
        assert data.development_reveals
        for injury in data.camp_injuries:
            assert current.players[injury.player_id].injury_status.severity != "healthy"

    def test_preseason_game_count_from_settings(
        self, league: LeagueState, settings: Settings
    ) -> None:
        """The number of preseason games follows the configured count."""
        current = _advance_to(_start(league, settings), "preseason", settings)
        games = current.offseason_data.preseason_games
        assert [g.game_number for g in games] == list(range(1, settings.gridiron_preseason_games + 1))
        assert current.offseason_data.preseason_evaluations
