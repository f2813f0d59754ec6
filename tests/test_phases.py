"""Tests for the offseason phase registry and state machine."""

from gridiron.core.phases import (
    PHASE_NAMES,
    PHASE_ORDER,
    TASK_DEFINITIONS,
    add_event,
    add_roster_change,
    advance_day,
    advance_phase,
    auto_complete_phase,
    can_advance_phase,
    complete_task,
    create_offseason_state,
    get_next_phase,
    get_optional_tasks,
    get_phase_events,
    get_progress,
    get_recent_events,
    get_required_tasks,
    get_summary,
    reset_phase,
    set_season_recap,
    simulate_remaining_offseason,
    skip_to_next_phase,
    validate_offseason_state,
)
from gridiron.models.offseason import SeasonRecap


class TestRegistry:
    def test_twelve_phases_in_order(self) -> None:
        """The offseason runs season_end through season_start."""
        assert len(PHASE_ORDER) == 12
        assert PHASE_ORDER[0] == "season_end"
        assert PHASE_ORDER[5] == "draft"
        assert PHASE_ORDER[-1] == "season_start"

    def test_every_phase_has_a_name_and_a_required_task(self) -> None:
        """Each phase has display metadata and at least one required task."""
        for phase in PHASE_ORDER:
            assert PHASE_NAMES[phase]
            assert any(t.is_required for t in TASK_DEFINITIONS[phase])

    def test_final_cuts_requires_roster_validation(self) -> None:
        """Cutting to the limit is a validated, required task."""
        required = [t for t in TASK_DEFINITIONS["final_cuts"] if t.is_required]
        assert [t.id for t in required] == ["cut_to_53"]
        assert required[0].action_type == "validate"
        assert required[0].completion_condition == "rosterSize<=53"


class TestCreateState:
    def test_fresh_state(self) -> None:
        """A new offseason starts at season_end, day 1, with every checklist."""
        state = create_offseason_state(2025)
        assert state.current_phase == "season_end"
        assert state.phase_day == 1
        assert set(state.phase_tasks) == set(PHASE_ORDER)
        assert state.events == []
        assert state.is_complete is False
        assert validate_offseason_state(state)

    def test_required_and_optional_split(self) -> None:
        """season_end has one required task and two optional ones."""
        state = create_offseason_state(2025)
        assert [t.id for t in get_required_tasks(state)] == ["view_recap"]
        assert len(get_optional_tasks(state)) == 2


class TestCompleteTask:
    def test_completes_and_logs(self) -> None:
        """Completing a task flips its flag and logs a task_complete event."""
        state = complete_task(create_offseason_state(2025), "view_recap")
        task = next(t for t in state.phase_tasks["season_end"].tasks if t.id == "view_recap")
        assert task.is_complete
        assert state.phase_tasks["season_end"].required_complete
        assert state.phase_tasks["season_end"].tasks_completed == ["view_recap"]
        assert len(state.events) == 1
        assert state.events[0].type == "task_complete"
        assert state.events[0].id == "2025-0001"

    def test_unknown_task_is_noop(self) -> None:
        """An unknown task id returns the state unchanged."""
        state = create_offseason_state(2025)
        assert complete_task(state, "not_a_task") is state

    def test_already_complete_is_noop(self) -> None:
        """Completing a task twice logs only one event."""
        state = complete_task(create_offseason_state(2025), "view_recap")
        again = complete_task(state, "view_recap")
        assert again is state
        assert len(again.events) == 1


class TestAdvance:
    def test_blocked_until_required_done(self) -> None:
        """Advancing with required tasks open changes nothing."""
        state = create_offseason_state(2025)
        assert not can_advance_phase(state)
        assert advance_phase(state) is state

    def test_optional_tasks_never_block(self) -> None:
        """Only the required task is needed to advance."""
        state = complete_task(create_offseason_state(2025), "view_recap")
        assert can_advance_phase(state)

    def test_advance_logs_complete_then_start(self) -> None:
        """A transition logs phase_complete for the old phase and phase_start for the new."""
        state = advance_day(complete_task(create_offseason_state(2025), "view_recap"))
        assert state.phase_day == 2
        advanced = advance_phase(state)
        assert advanced.current_phase == "coaching_decisions"
        assert advanced.phase_day == 1
        assert advanced.completed_phases == ["season_end"]
        last_two = advanced.events[-2:]
        assert [e.type for e in last_two] == ["phase_complete", "phase_start"]
        assert last_two[0].phase == "season_end"
        assert last_two[1].phase == "coaching_decisions"
        assert [e.id for e in advanced.events] == ["2025-0001", "2025-0002", "2025-0003"]

    def test_skip_to_next_phase(self) -> None:
        """Skipping leaves optional tasks incomplete."""
        state = skip_to_next_phase(complete_task(create_offseason_state(2025), "view_recap"))
        assert state.current_phase == "coaching_decisions"
        season_end = state.phase_tasks["season_end"]
        assert not season_end.optional_complete

    def test_simulate_to_completion(self) -> None:
        """Auto-completing every phase finishes the offseason."""
        state = simulate_remaining_offseason(create_offseason_state(2025))
        assert state.is_complete
        assert state.completed_phases == list(PHASE_ORDER)
        assert state.current_phase == "season_start"
        assert state.events[-1].type == "phase_complete"
        assert get_next_phase(state) is None
        assert not can_advance_phase(state)
        assert validate_offseason_state(state)

    def test_terminal_advance_logs_single_event(self) -> None:
        """Leaving season_start logs one phase_complete and no phase_start."""
        state = create_offseason_state(2025)
        while state.current_phase != "season_start":
            state = advance_phase(auto_complete_phase(state))
        before = len(state.events)
        done = advance_phase(auto_complete_phase(state))
        new_events = done.events[before:]
        assert [e.type for e in new_events][-1] == "phase_complete"
        assert "phase_start" not in [e.type for e in new_events]
        assert done.is_complete


class TestResetAndRecap:
    def test_reset_phase_reopens_checklist(self) -> None:
        """Resetting a completed phase restores its tasks and clears is_complete."""
        state = simulate_remaining_offseason(create_offseason_state(2025))
        reset = reset_phase(state, "draft")
        assert "draft" not in reset.completed_phases
        assert reset.is_complete is False
        assert not any(t.is_complete for t in reset.phase_tasks["draft"].tasks)

    def test_recap_set_once(self) -> None:
        """A second recap never replaces the first."""
        state = set_season_recap(create_offseason_state(2025), SeasonRecap(year=2025))
        other = SeasonRecap(year=2025, season_write_up="other")
        assert set_season_recap(state, other).season_recap.season_write_up == ""


class TestViews:
    def test_recent_events_most_recent_first(self) -> None:
        """Recent events are newest first and capped at the limit."""
        state = create_offseason_state(2025)
        for i in range(5):
            state = add_event(state, "contract", f"item {i}")
        recent = get_recent_events(state, limit=3)
        assert [e.description for e in recent] == ["item 4", "item 3", "item 2"]
        assert get_recent_events(state, limit=0) == []

    def test_phase_events(self) -> None:
        """Events are filtered by the phase they were logged in."""
        state = advance_phase(complete_task(create_offseason_state(2025), "view_recap"))
        state = add_event(state, "contract", "staff meeting")
        coaching = get_phase_events(state, "coaching_decisions")
        assert [e.description for e in coaching][-1] == "staff meeting"

    def test_progress(self) -> None:
        """Progress counts completed phases out of twelve."""
        state = create_offseason_state(2025)
        for _ in range(3):
            state = advance_phase(auto_complete_phase(state))
        progress = get_progress(state)
        assert progress.current_phase == "combine"
        assert progress.current_phase_number == 4
        assert progress.completed_phases == 3
        assert progress.percent_complete == 25

    def test_roster_change_counts_in_summary(self) -> None:
        """Roster changes log a roster_move event and show in the summary."""
        state = add_roster_change(
            create_offseason_state(2025), "draft", "p1", "Sam Rook", "QB", "t1"
        )
        assert state.events[-1].type == "roster_move"
        summary = get_summary(state)
        assert summary.total_roster_moves == 1
        assert summary.year == 2025
