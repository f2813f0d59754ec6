"""State mappers: apply offseason decisions to players, teams, contracts, and coaches.

Each mapper takes a LeagueState and a batch of records and returns a
BatchResult. Application is best-effort: a record that references a missing
player, prospect, or contract is reported as a failed ItemOutcome and the rest
of the batch still applies. Mappers never raise for bad records.

Money is in thousands of dollars.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from pydantic import ValidationError

from gridiron.models.league import LeagueState
from gridiron.models.records import (
    CampInjury,
    CoachingChangeRecord,
    ContractDecisionRecord,
    DevelopmentChange,
    DraftSelectionRecord,
    FreeAgentSigningRecord,
    PreseasonInjury,
    UDFASigningRecord,
)
from gridiron.models.roster import (
    Coach,
    Contract,
    ContractYear,
    InjuryStatus,
    Player,
    StaffHierarchy,
    Team,
)

logger = logging.getLogger(__name__)

FailureKind = Literal["not_found", "invalid", "no_contract"]

INJURY_WEEKS: dict[str, int] = {"minor": 1, "moderate": 4, "serious": 8, "season_ending": 17}
INJURY_STATUS: dict[str, str] = {
    "minor": "questionable",
    "moderate": "out",
    "serious": "ir",
    "season_ending": "ir",
}

ROOKIE_BONUS_PCT = 15
ROOKIE_GUARANTEE_PCT = 80
ROOKIE_GUARANTEED_YEARS = 2

PRACTICE_SQUAD_LIMIT = 16


@dataclass
class ChangeSet:
    """Ids touched by a batch, grouped by entity and kind of change."""

    players_added: list[str] = field(default_factory=list)
    players_removed: list[str] = field(default_factory=list)
    players_modified: list[str] = field(default_factory=list)
    coaches_added: list[str] = field(default_factory=list)
    coaches_removed: list[str] = field(default_factory=list)
    contracts_added: list[str] = field(default_factory=list)
    contracts_removed: list[str] = field(default_factory=list)
    contracts_modified: list[str] = field(default_factory=list)
    teams_modified: list[str] = field(default_factory=list)

    def touch_team(self, team_id: str) -> None:
        if team_id not in self.teams_modified:
            self.teams_modified.append(team_id)


@dataclass
class ItemOutcome:
    """Result of applying one record. ``ref`` is the record's primary id."""

    ref: str
    ok: bool = True
    kind: FailureKind | None = None
    error: str | None = None


@dataclass
class BatchResult:
    league: LeagueState
    changes: ChangeSet = field(default_factory=ChangeSet)
    outcomes: list[ItemOutcome] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [o.error for o in self.outcomes if not o.ok and o.error]

    @property
    def applied(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)


class _Workspace:
    """Copy-on-write views of the league maps for one batch."""

    def __init__(self, league: LeagueState) -> None:
        self.league = league
        self.players = dict(league.players)
        self.teams = dict(league.teams)
        self.contracts = dict(league.contracts)
        self.coaches = dict(league.coaches)
        self.prospects = dict(league.prospects)
        self.result = BatchResult(league=league)

    def ok(self, ref: str) -> None:
        self.result.outcomes.append(ItemOutcome(ref=ref))

    def fail(self, ref: str, kind: FailureKind, error: str) -> None:
        logger.warning("mapper_record_failed ref=%s kind=%s error=%s", ref, kind, error)
        self.result.outcomes.append(ItemOutcome(ref=ref, ok=False, kind=kind, error=error))

    def update_team(self, team_id: str, **fields: object) -> None:
        team = self.teams.get(team_id)
        if team is None:
            return
        self.teams[team_id] = team.model_copy(update=fields)
        self.result.changes.touch_team(team_id)

    def contract_for(self, player_id: str) -> Contract | None:
        player = self.players.get(player_id)
        if player is not None and player.contract_id in self.contracts:
            return self.contracts[player.contract_id]
        for contract in self.contracts.values():
            if contract.player_id == player_id:
                return contract
        return None

    def team_holding(self, player_id: str) -> Team | None:
        for team in self.teams.values():
            if (
                player_id in team.roster_player_ids
                or player_id in team.practice_squad_ids
                or player_id in team.injured_reserve_ids
            ):
                return team
        return None

    def release(self, player_id: str) -> None:
        """Drop a player from every squad list, delete their contract, null contract_id."""
        for team in list(self.teams.values()):
            if (
                player_id in team.roster_player_ids
                or player_id in team.practice_squad_ids
                or player_id in team.injured_reserve_ids
            ):
                self.update_team(
                    team.id,
                    roster_player_ids=[p for p in team.roster_player_ids if p != player_id],
                    practice_squad_ids=[p for p in team.practice_squad_ids if p != player_id],
                    injured_reserve_ids=[p for p in team.injured_reserve_ids if p != player_id],
                )
        contract = self.contract_for(player_id)
        if contract is not None:
            del self.contracts[contract.id]
            self.result.changes.contracts_removed.append(contract.id)
        player = self.players.get(player_id)
        if player is not None and player.contract_id is not None:
            self.players[player_id] = player.model_copy(update={"contract_id": None})
            self.result.changes.players_modified.append(player_id)

    def add_to_roster(self, team_id: str, player_id: str) -> None:
        team = self.teams.get(team_id)
        if team is None or player_id in team.roster_player_ids:
            return
        self.update_team(team_id, roster_player_ids=[*team.roster_player_ids, player_id])

    def finish(self) -> BatchResult:
        self.result.league = self.league.model_copy(
            update={
                "players": self.players,
                "teams": self.teams,
                "contracts": self.contracts,
                "coaches": self.coaches,
                "prospects": self.prospects,
            }
        )
        return self.result


def _contract_id(player_id: str, year: int) -> str:
    return f"contract-{player_id}-{year}"


# ---------------------------------------------------------------------------
# Coaching
# ---------------------------------------------------------------------------


def _clear_from_staff(staff: StaffHierarchy, coach_id: str) -> StaffHierarchy:
    return StaffHierarchy(
        head_coach=None if staff.head_coach == coach_id else staff.head_coach,
        offensive_coordinator=(
            None if staff.offensive_coordinator == coach_id else staff.offensive_coordinator
        ),
        defensive_coordinator=(
            None if staff.defensive_coordinator == coach_id else staff.defensive_coordinator
        ),
    )


def apply_coaching_changes(
    league: LeagueState, changes: list[CoachingChangeRecord]
) -> BatchResult:
    """Fire, hire, promote, or demote coaches on a team's staff."""
    ws = _Workspace(league)
    for change in changes:
        team = ws.teams.get(change.team_id)
        if team is None:
            ws.fail(change.coach_id, "not_found", f"Team not found: {change.team_id}")
            continue

        if change.type == "fire":
            staff = _clear_from_staff(team.staff, change.coach_id)
            ws.update_team(team.id, staff=staff, dead_money=team.dead_money + change.dead_money)
            if change.coach_id in ws.coaches:
                del ws.coaches[change.coach_id]
                ws.result.changes.coaches_removed.append(change.coach_id)
            ws.ok(change.coach_id)
            continue

        coach = ws.coaches.get(change.coach_id)
        if coach is None and change.type != "hire":
            ws.fail(change.coach_id, "not_found", f"Coach not found: {change.coach_id}")
            continue
        if coach is None:
            first, _, last = change.coach_name.partition(" ")
            coach = Coach(
                id=change.coach_id,
                first_name=first or "Coach",
                last_name=last or "Unknown",
                role=change.role,
            )
            ws.result.changes.coaches_added.append(change.coach_id)
        ws.coaches[change.coach_id] = coach.model_copy(
            update={"role": change.role, "team_id": team.id, "is_available": False}
        )

        staff = _clear_from_staff(team.staff, change.coach_id)
        staff = staff.model_copy(update={change.role: change.coach_id})
        ws.update_team(team.id, staff=staff)
        ws.ok(change.coach_id)
    return ws.finish()


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------


def apply_contract_decisions(
    league: LeagueState, decisions: list[ContractDecisionRecord]
) -> BatchResult:
    """Cut, restructure, tag, or extend contracts.

    A cut removes the player from every squad list, deletes the contract,
    nulls the player's contract_id, and charges dead money to the team. Cut
    player ids are reported in ``changes.players_removed``.
    """
    ws = _Workspace(league)
    year = league.year
    for decision in decisions:
        pid = decision.player_id
        if pid not in ws.players:
            ws.fail(pid, "not_found", f"Player not found: {pid}")
            continue

        if decision.type == "cut":
            ws.release(pid)
            ws.result.changes.players_removed.append(pid)
            team = ws.teams.get(decision.team_id)
            if team is not None and decision.details.dead_money:
                ws.update_team(team.id, dead_money=team.dead_money + decision.details.dead_money)
            ws.ok(pid)
            continue

        contract = ws.contract_for(pid)
        if contract is None:
            ws.fail(pid, "no_contract", f"No contract for {decision.player_name}")
            continue

        details = decision.details
        if decision.type == "restructure":
            if details.new_salary is None:
                ws.fail(pid, "invalid", f"Restructure for {decision.player_name} has no salary")
                continue
            breakdown = list(contract.yearly_breakdown)
            if breakdown:
                # Restructure the league year, or the first year if the deal has not started.
                index = next((i for i, y in enumerate(breakdown) if y.year == year), 0)
                entry = breakdown[index]
                breakdown[index] = entry.model_copy(
                    update={"salary": details.new_salary, "cap_hit": entry.bonus + details.new_salary}
                )
            updated = contract.model_copy(update={"yearly_breakdown": breakdown})
        elif decision.type in ("franchise_tag", "transition_tag"):
            if details.new_salary is None:
                ws.fail(pid, "invalid", f"Tag for {decision.player_name} has no salary")
                continue
            tag_year = ContractYear(
                year=year,
                salary=details.new_salary,
                cap_hit=details.new_salary,
                is_guaranteed=True,
            )
            updated = contract.model_copy(
                update={
                    "yearly_breakdown": [tag_year],
                    "total_years": 1,
                    "years_remaining": 1,
                    "total_value": details.new_salary,
                    "average_annual_value": details.new_salary,
                    "type": decision.type,
                }
            )
        else:
            added = details.years_added or 0
            if added <= 0:
                ws.fail(pid, "invalid", f"Extension for {decision.player_name} adds no years")
                continue
            last = contract.yearly_breakdown[-1] if contract.yearly_breakdown else None
            salary = details.new_salary or (last.salary if last else contract.average_annual_value)
            start = (last.year + 1) if last else year
            extra = [
                ContractYear(year=start + i, salary=salary, cap_hit=salary) for i in range(added)
            ]
            total_years = contract.total_years + added
            total_value = contract.total_value + salary * added
            updated = contract.model_copy(
                update={
                    "yearly_breakdown": [*contract.yearly_breakdown, *extra],
                    "total_years": total_years,
                    "years_remaining": contract.years_remaining + added,
                    "total_value": total_value,
                    "guaranteed_money": contract.guaranteed_money + (details.guarantee_added or 0),
                    "average_annual_value": total_value // total_years,
                    "type": "extension",
                }
            )
        ws.contracts[contract.id] = updated
        ws.result.changes.contracts_modified.append(contract.id)
        ws.ok(pid)
    return ws.finish()


# ---------------------------------------------------------------------------
# Signings
# ---------------------------------------------------------------------------


def apply_draft_selections(
    league: LeagueState, selections: list[DraftSelectionRecord]
) -> BatchResult:
    """Turn drafted prospects into rostered players on rookie contracts."""
    ws = _Workspace(league)
    year = league.year
    for pick in selections:
        prospect = ws.prospects.get(pick.prospect_id)
        if prospect is None:
            ws.fail(pick.prospect_id, "not_found", f"Prospect not found: {pick.prospect_id}")
            continue
        if pick.team_id not in ws.teams:
            ws.fail(pick.prospect_id, "not_found", f"Team not found: {pick.team_id}")
            continue

        pid = prospect.player.id
        contract_id = _contract_id(pid, year)
        value, years = pick.contract_value, pick.contract_years
        bonus = value * ROOKIE_BONUS_PCT // 100
        try:
            contract = Contract(
                id=contract_id,
                player_id=pid,
                player_name=prospect.player.full_name,
                team_id=pick.team_id,
                position=prospect.player.position,
                type="rookie",
                signed_year=year,
                total_years=years,
                years_remaining=years,
                total_value=value,
                guaranteed_money=value * ROOKIE_GUARANTEE_PCT // 100,
                signing_bonus=bonus,
                average_annual_value=value // years,
                yearly_breakdown=[
                    ContractYear(
                        year=year + i,
                        bonus=bonus if i == 0 else 0,
                        salary=(value - bonus) // years,
                        cap_hit=value // years,
                        is_guaranteed=i < ROOKIE_GUARANTEED_YEARS,
                    )
                    for i in range(years)
                ],
                notes=[f"Drafted in round {pick.round}, pick {pick.overall_pick}"],
            )
        except ValidationError as exc:
            ws.fail(pick.prospect_id, "invalid", f"Bad rookie contract for {pick.player_name}: {exc}")
            continue

        ws.players[pid] = prospect.player.model_copy(
            update={
                "contract_id": contract_id,
                "experience": 0,
                "draft_year": year,
                "draft_round": pick.round,
                "draft_pick": pick.overall_pick,
            }
        )
        ws.contracts[contract_id] = contract
        ws.add_to_roster(pick.team_id, pid)
        del ws.prospects[pick.prospect_id]
        ws.result.changes.players_added.append(pid)
        ws.result.changes.contracts_added.append(contract_id)
        ws.ok(pick.prospect_id)
    return ws.finish()


def apply_free_agency_signings(
    league: LeagueState, signings: list[FreeAgentSigningRecord]
) -> BatchResult:
    """Move signed free agents onto their new team with a veteran contract."""
    ws = _Workspace(league)
    year = league.year
    for signing in signings:
        pid = signing.player_id
        player = ws.players.get(pid)
        if player is None:
            ws.fail(pid, "not_found", f"Player not found: {pid}")
            continue
        if signing.team_id not in ws.teams:
            ws.fail(pid, "not_found", f"Team not found: {signing.team_id}")
            continue

        years, total, bonus = signing.contract_years, signing.total_value, signing.signing_bonus
        contract_id = _contract_id(pid, year)
        try:
            contract = Contract(
                id=contract_id,
                player_id=pid,
                player_name=signing.player_name,
                team_id=signing.team_id,
                position=player.position,
                type="veteran",
                signed_year=year,
                total_years=years,
                years_remaining=years,
                total_value=total,
                guaranteed_money=signing.guaranteed_money,
                signing_bonus=bonus,
                average_annual_value=total // years,
                yearly_breakdown=[
                    ContractYear(
                        year=year + i,
                        bonus=bonus if i == 0 else 0,
                        salary=(total - bonus) // years,
                        cap_hit=total // years,
                        is_guaranteed=i == 0,
                    )
                    for i in range(years)
                ],
                notes=["Signed as free agent"],
            )
        except ValidationError as exc:
            ws.fail(pid, "invalid", f"Bad contract for {signing.player_name}: {exc}")
            continue

        ws.release(pid)
        ws.contracts[contract_id] = contract
        ws.players[pid] = ws.players[pid].model_copy(update={"contract_id": contract_id})
        ws.add_to_roster(signing.team_id, pid)
        ws.result.changes.players_modified.append(pid)
        ws.result.changes.contracts_added.append(contract_id)
        ws.ok(pid)
    return ws.finish()


def apply_udfa_signings(league: LeagueState, signings: list[UDFASigningRecord]) -> BatchResult:
    """Sign undrafted prospects to minimum-salary rookie deals."""
    ws = _Workspace(league)
    year = league.year
    for signing in signings:
        prospect = ws.prospects.get(signing.prospect_id)
        if prospect is None:
            ws.fail(signing.prospect_id, "not_found", f"UDFA prospect not found: {signing.prospect_id}")
            continue
        if signing.team_id not in ws.teams:
            ws.fail(signing.prospect_id, "not_found", f"Team not found: {signing.team_id}")
            continue

        pid = prospect.player.id
        contract_id = _contract_id(pid, year)
        years, base, bonus = signing.contract_years, signing.base_salary, signing.signing_bonus
        contract = Contract(
            id=contract_id,
            player_id=pid,
            player_name=signing.player_name,
            team_id=signing.team_id,
            position=prospect.player.position,
            type="rookie",
            signed_year=year,
            total_years=years,
            years_remaining=years,
            total_value=base * years + bonus,
            guaranteed_money=bonus,
            signing_bonus=bonus,
            average_annual_value=base,
            yearly_breakdown=[
                ContractYear(
                    year=year + i,
                    bonus=bonus if i == 0 else 0,
                    salary=base,
                    cap_hit=base + bonus // years,
                )
                for i in range(years)
            ],
            notes=["Signed as undrafted free agent"],
        )
        ws.players[pid] = prospect.player.model_copy(
            update={
                "contract_id": contract_id,
                "experience": 0,
                "draft_year": year,
                "draft_round": None,
                "draft_pick": None,
            }
        )
        ws.contracts[contract_id] = contract
        ws.add_to_roster(signing.team_id, pid)
        del ws.prospects[signing.prospect_id]
        ws.result.changes.players_added.append(pid)
        ws.result.changes.contracts_added.append(contract_id)
        ws.ok(signing.prospect_id)
    return ws.finish()


# ---------------------------------------------------------------------------
# Injuries, roster moves, development
# ---------------------------------------------------------------------------


def apply_injuries(
    league: LeagueState, injuries: list[CampInjury | PreseasonInjury]
) -> BatchResult:
    """Write camp or preseason injuries into player injury status."""
    ws = _Workspace(league)
    for injury in injuries:
        player = ws.players.get(injury.player_id)
        if player is None:
            ws.fail(injury.player_id, "not_found", f"Player not found for injury: {injury.player_id}")
            continue
        status = InjuryStatus(
            severity=INJURY_STATUS.get(injury.severity, "out"),
            type=injury.injury_type,
            weeks_remaining=INJURY_WEEKS.get(injury.severity, 2),
        )
        ws.players[injury.player_id] = player.model_copy(update={"injury_status": status})
        ws.result.changes.players_modified.append(injury.player_id)
        ws.ok(injury.player_id)
    return ws.finish()


def apply_roster_moves(
    league: LeagueState,
    cuts: list[str],
    practice_squad_signings: list[str],
    ir_placements: list[str],
    *,
    team_id: str | None = None,
    practice_squad_limit: int = PRACTICE_SQUAD_LIMIT,
) -> BatchResult:
    """Cut players, move players to the practice squad, and place players on IR.

    Practice-squad signings of unattached players (e.g. just cut) land on
    ``team_id``, which defaults to the user team. Signings onto a practice
    squad already at ``practice_squad_limit`` fail as invalid.
    """
    ws = _Workspace(league)
    default_team = team_id or league.user_team_id

    for pid in cuts:
        if pid not in ws.players:
            ws.fail(pid, "not_found", f"Player not found for cut: {pid}")
            continue
        ws.release(pid)
        ws.result.changes.players_removed.append(pid)
        ws.ok(pid)

    for pid in practice_squad_signings:
        if pid not in ws.players:
            ws.fail(pid, "not_found", f"Player not found for practice squad: {pid}")
            continue
        team = ws.team_holding(pid) or ws.teams.get(default_team)
        if team is None:
            ws.fail(pid, "not_found", f"Team not found: {default_team}")
            continue
        if pid not in team.practice_squad_ids:
            if len(team.practice_squad_ids) >= practice_squad_limit:
                ws.fail(
                    pid,
                    "invalid",
                    f"Practice squad full ({practice_squad_limit}) for team {team.id}: {pid}",
                )
                continue
            ws.update_team(
                team.id,
                roster_player_ids=[p for p in team.roster_player_ids if p != pid],
                practice_squad_ids=[*team.practice_squad_ids, pid],
                injured_reserve_ids=[p for p in team.injured_reserve_ids if p != pid],
            )
        ws.result.changes.players_modified.append(pid)
        ws.ok(pid)

    for pid in ir_placements:
        player = ws.players.get(pid)
        if player is None:
            ws.fail(pid, "not_found", f"Player not found for IR: {pid}")
            continue
        team = ws.team_holding(pid)
        if team is not None and pid not in team.injured_reserve_ids:
            ws.update_team(
                team.id,
                roster_player_ids=[p for p in team.roster_player_ids if p != pid],
                injured_reserve_ids=[*team.injured_reserve_ids, pid],
            )
        injury = player.injury_status.model_copy(update={"severity": "ir"})
        ws.players[pid] = player.model_copy(update={"injury_status": injury})
        ws.result.changes.players_modified.append(pid)
        ws.ok(pid)
    return ws.finish()


def _clamp_rating(value: int) -> int:
    return max(1, min(99, value))


def apply_development_changes(
    league: LeagueState, changes: list[DevelopmentChange]
) -> BatchResult:
    """Shift existing skill ratings (and optionally overall), clamped to 1-99.

    Attributes a player does not already have are ignored.
    """
    ws = _Workspace(league)
    for change in changes:
        player: Player | None = ws.players.get(change.player_id)
        if player is None:
            ws.fail(change.player_id, "not_found", f"Player not found: {change.player_id}")
            continue
        skills = dict(player.skills)
        for attr, delta in change.attribute_changes.items():
            if attr in skills:
                skills[attr] = _clamp_rating(skills[attr] + delta)
        update: dict[str, object] = {"skills": skills}
        if change.overall_change:
            update["overall"] = _clamp_rating(player.overall + change.overall_change)
        ws.players[change.player_id] = player.model_copy(update=update)
        ws.result.changes.players_modified.append(change.player_id)
        ws.ok(change.player_id)
    return ws.finish()
