"""Offseason phase registry and state machine.

The registry is static data: the twelve phases in order, their display names,
and the default checklist for each. The state machine functions all take an
OffSeasonState and return a new one; nothing is mutated in place.

Advancement is gated on required tasks only. Optional tasks never block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gridiron.models.offseason import (
    OffSeasonEvent,
    OffSeasonEventType,
    OffSeasonProgress,
    OffSeasonState,
    OffSeasonSummary,
    OffSeasonTask,
    Phase,
    PhaseTaskStatus,
    PlayerRelease,
    PlayerSigning,
    RosterChange,
    SeasonRecap,
    TaskActionType,
    TaskCompletionCondition,
    TaskTargetScreen,
)

logger = logging.getLogger(__name__)

PHASE_ORDER: tuple[Phase, ...] = (
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
)

PHASE_NUMBERS: dict[Phase, int] = {phase: i + 1 for i, phase in enumerate(PHASE_ORDER)}

PHASE_NAMES: dict[Phase, str] = {
    "season_end": "Season End",
    "coaching_decisions": "Coaching Decisions",
    "contract_management": "Contract Management",
    "combine": "Scouting Combine",
    "free_agency": "Free Agency",
    "draft": "Draft",
    "udfa": "UDFA Signing",
    "otas": "OTAs",
    "training_camp": "Training Camp",
    "preseason": "Preseason",
    "final_cuts": "Final Cuts",
    "season_start": "Season Start",
}

PHASE_DESCRIPTIONS: dict[Phase, str] = {
    "season_end": "Review season performance, grades, and awards",
    "coaching_decisions": "Evaluate and make coaching staff changes",
    "contract_management": "Manage roster through cuts, restructures, and tags",
    "combine": "Scout prospects at the combine and pro days",
    "free_agency": "Sign free agents to fill roster needs",
    "draft": "Select new players through the draft",
    "udfa": "Sign undrafted free agents to complete roster",
    "otas": "Organized team activities and first impressions",
    "training_camp": "Competition and development reveals",
    "preseason": "Exhibition games and final evaluations",
    "final_cuts": "Cut roster to the regular-season limit",
    "season_start": "Set expectations and prepare for the season",
}

# Event types surfaced in the offseason summary.
KEY_EVENT_TYPES = frozenset({"signing", "release", "draft_pick", "coaching_change", "award"})


@dataclass(frozen=True)
class TaskDefinition:
    """Static description of one checklist item."""

    id: str
    name: str
    description: str
    action_type: TaskActionType
    target_screen: TaskTargetScreen | None = None
    completion_condition: TaskCompletionCondition = "optional"
    is_required: bool = False

    def to_task(self) -> OffSeasonTask:
        return OffSeasonTask(
            id=self.id,
            name=self.name,
            description=self.description,
            is_required=self.is_required,
            action_type=self.action_type,
            target_screen=self.target_screen,
            completion_condition=self.completion_condition,
        )


def _required(
    id: str,
    name: str,
    description: str,
    action_type: TaskActionType,
    target_screen: TaskTargetScreen | None,
    completion_condition: TaskCompletionCondition = "visited",
) -> TaskDefinition:
    return TaskDefinition(
        id, name, description, action_type, target_screen, completion_condition, True
    )


TASK_DEFINITIONS: dict[Phase, tuple[TaskDefinition, ...]] = {
    "season_end": (
        _required("view_recap", "View Season Recap", "Review your team's season", "view",
                  "SeasonRecap"),
        TaskDefinition("view_awards", "View Awards", "See league awards and team honors",
                       "view", "SeasonRecap"),
        TaskDefinition("view_draft_order", "View Draft Order", "Check your draft position",
                       "view", "DraftBoard"),
    ),
    "coaching_decisions": (
        _required("review_staff", "Review Coaching Staff",
                  "Evaluate your coaching staff performance", "view", "Staff"),
        TaskDefinition("make_changes", "Make Staff Changes", "Fire or hire coaching staff",
                       "navigate", "Staff"),
    ),
    "contract_management": (
        _required("review_cap", "Review Cap Situation", "Analyze your salary cap space",
                  "view", "Finances"),
        TaskDefinition("franchise_tag", "Apply Franchise Tag",
                       "Use franchise or transition tag on a player", "navigate",
                       "ContractManagement"),
        TaskDefinition("cut_players", "Release Players", "Cut players to create cap space",
                       "navigate", "ContractManagement"),
        TaskDefinition("restructure", "Restructure Contracts", "Restructure existing contracts",
                       "navigate", "ContractManagement"),
    ),
    "combine": (
        _required("view_prospects", "View Top Prospects", "Scout the top draft prospects",
                  "view", "DraftBoard"),
        TaskDefinition("attend_combine", "Attend Combine", "Watch combine drills and interviews",
                       "view", "DraftBoard"),
        TaskDefinition("pro_days", "Attend Pro Days", "Visit college pro days", "view",
                       "DraftBoard"),
    ),
    "free_agency": (
        _required("review_market", "Review Free Agent Market", "Evaluate available free agents",
                  "view", "FreeAgency"),
        TaskDefinition("make_offers", "Make Offers", "Submit contract offers to free agents",
                       "navigate", "FreeAgency"),
        TaskDefinition("sign_players", "Sign Free Agents", "Complete free agent signings",
                       "navigate", "FreeAgency", "hasSigned"),
    ),
    "draft": (
        _required("make_picks", "Make Draft Picks", "Select players in the draft", "navigate",
                  "DraftRoom", "draftComplete"),
        TaskDefinition("trade_picks", "Trade Draft Picks", "Trade up or down in the draft",
                       "navigate", "DraftRoom"),
    ),
    "udfa": (
        _required("review_udfa", "Review UDFA Pool", "Evaluate undrafted free agents", "view",
                  "FreeAgency"),
        TaskDefinition("sign_udfa", "Sign UDFAs", "Sign undrafted free agents", "navigate",
                       "FreeAgency"),
    ),
    "otas": (
        _required("view_reports", "View OTA Reports", "Read reports on player progress", "view",
                  "OTAs"),
        TaskDefinition("adjust_depth", "Adjust Depth Chart",
                       "Update depth chart based on OTA performance", "navigate", "Roster"),
    ),
    "training_camp": (
        _required("view_battles", "View Position Battles", "Track position competition results",
                  "view", "TrainingCamp"),
        TaskDefinition("manage_injuries", "Manage Injuries", "Handle training camp injuries",
                       "navigate", "Roster"),
        TaskDefinition("development_check", "Check Development",
                       "Review player development updates", "view", "TrainingCamp"),
    ),
    "preseason": (
        _required("sim_games", "Simulate Preseason", "Play the preseason games", "view",
                  "Preseason"),
        TaskDefinition("evaluate_players", "Evaluate Players", "Review preseason performances",
                       "view", "Preseason"),
    ),
    "final_cuts": (
        _required("cut_to_53", "Cut to 53", "Reduce roster to the regular-season limit",
                  "validate", "FinalCuts", "rosterSize<=53"),
        TaskDefinition("form_practice_squad", "Form Practice Squad",
                       "Sign players to practice squad", "navigate", "FinalCuts"),
        TaskDefinition("claim_waivers", "Claim Waivers", "Claim players from waivers",
                       "navigate", "FinalCuts"),
    ),
    "season_start": (
        _required("view_expectations", "View Owner Expectations",
                  "Understand owner expectations for the season", "view", "OwnerRelations"),
        TaskDefinition("media_projections", "View Media Projections",
                       "See media predictions for your team", "auto"),
        TaskDefinition("set_goals", "Set Season Goals", "Define personal goals for the season",
                       "auto"),
    ),
}


# --- Registry lookups -------------------------------------------------------


def create_phase_tasks(phase: Phase) -> PhaseTaskStatus:
    """Fresh, all-incomplete checklist for a phase."""
    return PhaseTaskStatus(
        phase=phase,
        tasks=[definition.to_task() for definition in TASK_DEFINITIONS[phase]],
    )


def get_next_phase(state: OffSeasonState) -> Phase | None:
    """The phase after the current one, or None at season_start."""
    index = PHASE_ORDER.index(state.current_phase)
    if index >= len(PHASE_ORDER) - 1:
        return None
    return PHASE_ORDER[index + 1]


def get_current_phase_tasks(state: OffSeasonState) -> list[OffSeasonTask]:
    status = state.phase_tasks.get(state.current_phase)
    return list(status.tasks) if status else []


def get_required_tasks(state: OffSeasonState) -> list[OffSeasonTask]:
    return [t for t in get_current_phase_tasks(state) if t.is_required]


def get_optional_tasks(state: OffSeasonState) -> list[OffSeasonTask]:
    return [t for t in get_current_phase_tasks(state) if not t.is_required]


def are_required_tasks_complete(state: OffSeasonState) -> bool:
    return all(t.is_complete for t in get_required_tasks(state))


def are_all_tasks_complete(state: OffSeasonState) -> bool:
    return all(t.is_complete for t in get_current_phase_tasks(state))


# --- Transitions ------------------------------------------------------------


def create_offseason_state(year: int) -> OffSeasonState:
    """New offseason at season_end with every phase's checklist populated."""
    return OffSeasonState(
        year=year,
        phase_tasks={phase: create_phase_tasks(phase) for phase in PHASE_ORDER},
    )


def _new_event(
    state: OffSeasonState,
    type: OffSeasonEventType,
    description: str,
    payload: dict | None = None,
    *,
    phase: Phase | None = None,
    offset: int = 0,
) -> OffSeasonEvent:
    """Build an event whose id is its 1-based position in the season's log."""
    return OffSeasonEvent(
        id=f"{state.year}-{len(state.events) + offset + 1:04d}",
        phase=phase or state.current_phase,
        type=type,
        description=description,
        payload=payload or {},
    )


def add_event(
    state: OffSeasonState,
    type: OffSeasonEventType,
    description: str,
    payload: dict | None = None,
    *,
    phase: Phase | None = None,
) -> OffSeasonState:
    """Append one event to the log, stamped with ``phase`` or the current phase."""
    event = _new_event(state, type, description, payload, phase=phase)
    return state.model_copy(update={"events": [*state.events, event]})


def complete_task(state: OffSeasonState, task_id: str) -> OffSeasonState:
    """Mark a task of the current phase complete.

    Unknown task ids and already-complete tasks return the state unchanged,
    so no task_complete event is logged for them.
    """
    status = state.phase_tasks.get(state.current_phase)
    if status is None:
        return state

    index = next((i for i, t in enumerate(status.tasks) if t.id == task_id), None)
    if index is None:
        return state
    task = status.tasks[index]
    if task.is_complete:
        return state

    tasks = list(status.tasks)
    tasks[index] = task.model_copy(update={"is_complete": True})
    updated_status = status.model_copy(
        update={
            "tasks": tasks,
            "tasks_completed": [*status.tasks_completed, task_id],
            "required_complete": all(t.is_complete for t in tasks if t.is_required),
            "optional_complete": all(t.is_complete for t in tasks if not t.is_required),
        }
    )
    event = _new_event(
        state,
        "task_complete",
        f"Completed: {task.name}",
        {"task_id": task_id, "task_name": task.name},
    )
    logger.debug("task_complete phase=%s task=%s", state.current_phase, task_id)
    return state.model_copy(
        update={
            "phase_tasks": {**state.phase_tasks, state.current_phase: updated_status},
            "events": [*state.events, event],
        }
    )


def can_advance_phase(state: OffSeasonState) -> bool:
    """True when every required task of the current phase is done."""
    return are_required_tasks_complete(state) and not state.is_complete


def advance_phase(state: OffSeasonState) -> OffSeasonState:
    """Move to the next phase, or finish the offseason from season_start.

    Returns the state unchanged when required tasks are outstanding.
    """
    if not can_advance_phase(state):
        return state

    current = state.current_phase
    completed = [*state.completed_phases, current]
    next_phase = get_next_phase(state)

    if next_phase is None:
        done = _new_event(
            state,
            "phase_complete",
            "Offseason complete. Ready for the new season.",
            {"final_phase": current},
        )
        logger.info("offseason_complete year=%d", state.year)
        return state.model_copy(
            update={
                "completed_phases": completed,
                "is_complete": True,
                "events": [*state.events, done],
            }
        )

    done = _new_event(
        state, "phase_complete", f"{PHASE_NAMES[current]} phase complete", {"phase": current}
    )
    start = _new_event(
        state,
        "phase_start",
        f"{PHASE_NAMES[next_phase]} phase begins",
        {"phase": next_phase},
        phase=next_phase,
        offset=1,
    )
    logger.info("phase_advanced year=%d from=%s to=%s", state.year, current, next_phase)
    return state.model_copy(
        update={
            "current_phase": next_phase,
            "phase_day": 1,
            "completed_phases": completed,
            "events": [*state.events, done, start],
        }
    )


def advance_day(state: OffSeasonState) -> OffSeasonState:
    return state.model_copy(update={"phase_day": state.phase_day + 1})


def reset_phase(state: OffSeasonState, phase: Phase) -> OffSeasonState:
    """Reopen a phase for corrective replay.

    Restores the phase's checklist, drops it from completed_phases and clears
    is_complete. current_phase is left where it is.
    """
    return state.model_copy(
        update={
            "phase_tasks": {**state.phase_tasks, phase: create_phase_tasks(phase)},
            "completed_phases": [p for p in state.completed_phases if p != phase],
            "is_complete": False,
        }
    )


def set_season_recap(state: OffSeasonState, recap: SeasonRecap) -> OffSeasonState:
    """Attach the season recap. A recap that is already set is never replaced."""
    if state.season_recap is not None:
        return state
    return state.model_copy(update={"season_recap": recap})


# --- Roster logs ------------------------------------------------------------


def add_roster_change(
    state: OffSeasonState,
    type: str,
    player_id: str,
    player_name: str,
    position: str,
    team_id: str,
    details: dict | None = None,
) -> OffSeasonState:
    """Record a roster transaction and log a roster_move event for it."""
    change = RosterChange(
        id=f"{state.year}-rc-{len(state.roster_changes) + 1:04d}",
        type=type,
        player_id=player_id,
        player_name=player_name,
        position=position,
        team_id=team_id,
        phase=state.current_phase,
        details=details or {},
    )
    event = _new_event(
        state, "roster_move", f"{type}: {player_name}", {"change_id": change.id}
    )
    return state.model_copy(
        update={
            "roster_changes": [*state.roster_changes, change],
            "events": [*state.events, event],
        }
    )


def add_signing(state: OffSeasonState, signing: PlayerSigning) -> OffSeasonState:
    event = _new_event(
        state,
        "signing",
        f"Signed {signing.player_name} ({signing.position})",
        {"player_id": signing.player_id, "team_id": signing.team_id},
    )
    return state.model_copy(
        update={"signings": [*state.signings, signing], "events": [*state.events, event]}
    )


def add_release(state: OffSeasonState, release: PlayerRelease) -> OffSeasonState:
    event = _new_event(
        state,
        "release",
        f"Released {release.player_name} ({release.position})",
        {"player_id": release.player_id, "team_id": release.team_id},
    )
    return state.model_copy(
        update={"releases": [*state.releases, release], "events": [*state.events, event]}
    )


# --- Views ------------------------------------------------------------------


def get_recent_events(state: OffSeasonState, limit: int = 20) -> list[OffSeasonEvent]:
    """Most-recent-first view of the last ``limit`` events."""
    if limit <= 0:
        return []
    return list(reversed(state.events[-limit:]))


def get_phase_events(state: OffSeasonState, phase: Phase) -> list[OffSeasonEvent]:
    return [e for e in state.events if e.phase == phase]


def get_progress(state: OffSeasonState) -> OffSeasonProgress:
    completed = len(state.completed_phases)
    return OffSeasonProgress(
        current_phase=state.current_phase,
        current_phase_number=PHASE_NUMBERS[state.current_phase],
        current_phase_name=PHASE_NAMES[state.current_phase],
        phase_day=state.phase_day,
        completed_phases=completed,
        total_phases=len(PHASE_ORDER),
        percent_complete=round(completed / len(PHASE_ORDER) * 100),
        required_tasks_complete=are_required_tasks_complete(state),
        all_tasks_complete=are_all_tasks_complete(state),
        can_advance=can_advance_phase(state),
        is_complete=state.is_complete,
    )


def get_summary(state: OffSeasonState) -> OffSeasonSummary:
    key_events = [e for e in state.events if e.type in KEY_EVENT_TYPES]
    return OffSeasonSummary(
        year=state.year,
        phases_completed=len(state.completed_phases),
        total_signings=len(state.signings),
        total_releases=len(state.releases),
        total_roster_moves=len(state.roster_changes),
        key_events=key_events[-10:],
    )


def validate_offseason_state(state: OffSeasonState) -> bool:
    """Check the structural invariants a deserialized state must satisfy.

    Every phase has a checklist, completed phases are a strictly increasing
    prefix-ordered subset of PHASE_ORDER, and is_complete agrees with them.
    """
    if not 2000 <= state.year <= 2100:
        return False
    if set(state.phase_tasks) != set(PHASE_ORDER):
        return False
    indexes = [PHASE_ORDER.index(p) for p in state.completed_phases]
    if any(b <= a for a, b in zip(indexes, indexes[1:], strict=False)):
        return False
    if state.is_complete != (len(state.completed_phases) == len(PHASE_ORDER)):
        return False
    return True


# --- Simulation helpers -----------------------------------------------------


def skip_to_next_phase(state: OffSeasonState) -> OffSeasonState:
    """Advance, leaving optional tasks of the current phase incomplete."""
    if not are_required_tasks_complete(state):
        return state
    return advance_phase(state)


def auto_complete_phase(state: OffSeasonState) -> OffSeasonState:
    """Complete every outstanding required task of the current phase."""
    for task in get_required_tasks(state):
        if not task.is_complete:
            state = complete_task(state, task.id)
    return state


def simulate_remaining_offseason(state: OffSeasonState) -> OffSeasonState:
    """Auto-complete and advance through every remaining phase.

    Only the state machine moves; no content is generated. Use
    gridiron.main.run_offseason to simulate with generation.
    """
    while not state.is_complete:
        state = auto_complete_phase(state)
        if not can_advance_phase(state):
            break
        state = advance_phase(state)
    return state
