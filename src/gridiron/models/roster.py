"""Roster entities: players, contracts, coaches, teams, and draft prospects.

These are the records the offseason mutates through gridiron.core.mappers.
Money is expressed in thousands of dollars throughout.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from gridiron.models.offseason import TeamRecord

Position = Literal[
    "QB", "RB", "WR", "TE", "OT", "OG", "C",
    "DE", "DT", "LB", "CB", "S", "K", "P",
]

OFFENSIVE_POSITIONS: frozenset[str] = frozenset({"QB", "RB", "WR", "TE", "OT", "OG", "C"})
DEFENSIVE_POSITIONS: frozenset[str] = frozenset({"DE", "DT", "LB", "CB", "S"})

InjurySeverity = Literal["healthy", "questionable", "doubtful", "out", "ir"]

CoachRole = Literal["head_coach", "offensive_coordinator", "defensive_coordinator"]


class InjuryStatus(BaseModel):
    severity: InjurySeverity = "healthy"
    type: str = "none"
    weeks_remaining: int = Field(default=0, ge=0)
    is_public: bool = True
    lingering_effect: int = 0


class Player(BaseModel):
    """A rostered (or unsigned) professional player."""

    id: str
    first_name: str
    last_name: str
    position: Position
    age: int = Field(default=25, ge=18, le=50)
    experience: int = Field(default=0, ge=0)
    overall: int = Field(default=60, ge=1, le=99)
    skills: dict[str, int] = Field(default_factory=dict)
    work_ethic: int = Field(default=60, ge=1, le=100)
    contract_id: str | None = None
    injury_status: InjuryStatus = Field(default_factory=InjuryStatus)
    draft_year: int | None = None
    draft_round: int | None = None
    draft_pick: int | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class ContractYear(BaseModel):
    year: int
    bonus: int = 0
    salary: int = 0
    cap_hit: int = 0
    is_void_year: bool = False
    is_guaranteed: bool = False


class Contract(BaseModel):
    id: str
    player_id: str
    player_name: str
    team_id: str
    position: str
    status: Literal["active", "expired", "voided"] = "active"
    type: Literal["rookie", "veteran", "franchise_tag", "transition_tag", "extension"] = "veteran"
    signed_year: int
    total_years: int = Field(ge=1)
    years_remaining: int = Field(ge=0)
    total_value: int = 0
    guaranteed_money: int = 0
    signing_bonus: int = 0
    average_annual_value: int = 0
    yearly_breakdown: list[ContractYear] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)

    def year_data(self, year: int) -> ContractYear | None:
        """The breakdown entry for a given league year, if the contract covers it."""
        for entry in self.yearly_breakdown:
            if entry.year == year:
                return entry
        return None


class Coach(BaseModel):
    id: str
    first_name: str
    last_name: str
    role: CoachRole
    team_id: str | None = None
    is_available: bool = False
    rating: int = Field(default=60, ge=1, le=100)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class StaffHierarchy(BaseModel):
    head_coach: str | None = None
    offensive_coordinator: str | None = None
    defensive_coordinator: str | None = None


class Team(BaseModel):
    id: str
    city: str
    nickname: str
    abbreviation: str = ""
    division: str = ""
    record: TeamRecord = Field(default_factory=TeamRecord)
    roster_player_ids: list[str] = Field(default_factory=list)
    practice_squad_ids: list[str] = Field(default_factory=list)
    injured_reserve_ids: list[str] = Field(default_factory=list)
    staff: StaffHierarchy = Field(default_factory=StaffHierarchy)
    dead_money: int = 0
    owner_patience: int = Field(default=50, ge=1, le=100)

    @property
    def name(self) -> str:
        return f"{self.city} {self.nickname}"


class Prospect(BaseModel):
    """A draft-eligible college player. Wraps the Player record created on signing."""

    id: str
    player: Player
    school: str
    grade: float = Field(default=50.0, ge=0.0, le=100.0)
    projected_round: int = Field(default=7, ge=1, le=8)
