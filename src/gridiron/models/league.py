"""LeagueState, the game-state aggregate the offseason core reads and returns.

The core only owns ``offseason_state`` and ``offseason_data``; everything else
is mutated by gridiron.core.mappers on the caller's behalf.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from gridiron.models.offseason import OffSeasonState
from gridiron.models.records import OffseasonData
from gridiron.models.roster import Coach, Contract, Player, Prospect, Team


class LeagueState(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    user_team_id: str
    teams: dict[str, Team] = Field(default_factory=dict)
    players: dict[str, Player] = Field(default_factory=dict)
    contracts: dict[str, Contract] = Field(default_factory=dict)
    coaches: dict[str, Coach] = Field(default_factory=dict)
    prospects: dict[str, Prospect] = Field(default_factory=dict)
    seasons_completed: int = 0

    offseason_state: OffSeasonState | None = None
    offseason_data: OffseasonData | None = None

    @property
    def user_team(self) -> Team:
        return self.teams[self.user_team_id]

    def roster(self, team_id: str) -> list[Player]:
        """Players on a team's active roster, in roster order. Unknown ids are skipped."""
        team = self.teams.get(team_id)
        if team is None:
            return []
        return [self.players[pid] for pid in team.roster_player_ids if pid in self.players]

    def free_agent_ids(self) -> list[str]:
        """Players with no contract and no roster spot anywhere."""
        rostered: set[str] = set()
        for team in self.teams.values():
            rostered.update(team.roster_player_ids)
            rostered.update(team.practice_squad_ids)
            rostered.update(team.injured_reserve_ids)
        return [
            pid
            for pid, player in self.players.items()
            if player.contract_id is None and pid not in rostered
        ]
