"""League seeding: generate a playable league and save/load it as YAML.

Supports two flows:
1. Generate programmatically from a seed (demos and tests)
2. Load from YAML (a saved league, hand-edited or produced by a previous run)
"""

from __future__ import annotations

import random
import uuid
from pathlib import Path

import yaml

from gridiron.models.league import LeagueState
from gridiron.models.offseason import TeamRecord
from gridiron.models.roster import (
    Coach,
    CoachRole,
    Contract,
    ContractYear,
    Player,
    Position,
    Prospect,
    StaffHierarchy,
    Team,
)

# Rust Belt franchises
TEAM_DATA: list[tuple[str, str, str, str]] = [
    ("Pittsburgh", "Ironclads", "PIT", "North"),
    ("Cleveland", "Lakers", "CLE", "North"),
    ("Buffalo", "Blizzard", "BUF", "East"),
    ("Detroit", "Pistons", "DET", "North"),
    ("Toledo", "Glassmen", "TOL", "East"),
    ("Akron", "Rubbermen", "AKR", "South"),
    ("Gary", "Steelers", "GAR", "South"),
    ("Youngstown", "Furnace", "YNG", "East"),
]

FIRST_NAMES = [
    "Marcus", "Darnell", "Tyler", "Jalen", "Cody", "Andre", "Brett", "Isaiah", "Dante",
    "Kyle", "Malik", "Travis", "Devon", "Logan", "Terrell", "Garrett", "Xavier", "Cole",
]
LAST_NAMES = [
    "Washington", "Kowalski", "Henderson", "Brooks", "Novak", "Jefferson", "Mueller",
    "Carter", "Sullivan", "Okafor", "Reyes", "Lindqvist", "Barnes", "Haddad", "Price",
]
SCHOOLS = ["Ohio State", "Michigan", "Penn State", "Pitt", "Toledo", "Kent State", "Akron"]

# One depth chart's worth of positions; larger rosters cycle through it again.
ROSTER_TEMPLATE: list[Position] = (
    ["QB"] * 3 + ["RB"] * 4 + ["WR"] * 6 + ["TE"] * 3 + ["OT"] * 4 + ["OG"] * 4 + ["C"] * 2
    + ["DE"] * 4 + ["DT"] * 4 + ["LB"] * 6 + ["CB"] * 6 + ["S"] * 4 + ["K", "P"]
)

SKILLS = ("speed", "strength", "awareness")

COACH_ROLES: tuple[CoachRole, ...] = (
    "head_coach",
    "offensive_coordinator",
    "defensive_coordinator",
)


def _uid(kind: str, seed: int, *parts: int) -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_DNS, f"{kind}-{seed}-" + "-".join(map(str, parts))))


def _player(rng: random.Random, player_id: str, position: Position, *, rookie: bool = False) -> Player:
    age = rng.randint(21, 22) if rookie else rng.randint(22, 34)
    overall = rng.randint(45, 80) if rookie else rng.randint(50, 90)
    return Player(
        id=player_id,
        first_name=rng.choice(FIRST_NAMES),
        last_name=rng.choice(LAST_NAMES),
        position=position,
        age=age,
        experience=0 if rookie else max(0, age - 22),
        overall=overall,
        skills={s: max(1, min(99, overall + rng.randint(-8, 8))) for s in SKILLS},
        work_ethic=rng.randint(40, 95),
    )


def _contract(rng: random.Random, player: Player, team_id: str, year: int) -> Contract:
    """A veteran deal scaled to the player's overall, signed this year or earlier."""
    years = rng.randint(1, 4)
    signed = year - rng.randint(0, years - 1)
    aav = 750 + (player.overall - 50) * 150
    total = aav * years
    bonus = total // 10
    return Contract(
        id=f"contract-{player.id}-{signed}",
        player_id=player.id,
        player_name=player.full_name,
        team_id=team_id,
        position=player.position,
        type="rookie" if player.experience < 4 else "veteran",
        signed_year=signed,
        total_years=years,
        years_remaining=signed + years - year,
        total_value=total,
        guaranteed_money=bonus,
        signing_bonus=bonus,
        average_annual_value=aav,
        yearly_breakdown=[
            ContractYear(
                year=signed + i,
                bonus=bonus // years,
                salary=aav - bonus // years,
                cap_hit=aav,
                is_guaranteed=i == 0,
            )
            for i in range(years)
        ],
    )


def generate_league(
    num_teams: int = 8,
    players_per_team: int = 55,
    seed: int = 42,
    year: int = 2025,
    prospects_per_team: int = 8,
    free_agents_per_team: int = 3,
) -> LeagueState:
    """Generate a league with records, rosters, contracts, staffs, prospects, and free agents.

    The first team is the user team. Same arguments, same league.
    """
    rng = random.Random(seed)
    teams: dict[str, Team] = {}
    players: dict[str, Player] = {}
    contracts: dict[str, Contract] = {}
    coaches: dict[str, Coach] = {}
    prospects: dict[str, Prospect] = {}

    for team_idx in range(min(num_teams, len(TEAM_DATA))):
        city, nickname, abbr, division = TEAM_DATA[team_idx]
        team_id = _uid("team", seed, team_idx)

        roster: list[str] = []
        for slot in range(players_per_team):
            position = ROSTER_TEMPLATE[slot % len(ROSTER_TEMPLATE)]
            player = _player(rng, _uid("player", seed, team_idx, slot), position)
            contract = _contract(rng, player, team_id, year)
            players[player.id] = player.model_copy(update={"contract_id": contract.id})
            contracts[contract.id] = contract
            roster.append(player.id)

        staff: dict[str, str] = {}
        for role_idx, role in enumerate(COACH_ROLES):
            coach_id = _uid("coach", seed, team_idx, role_idx)
            coaches[coach_id] = Coach(
                id=coach_id,
                first_name=rng.choice(FIRST_NAMES),
                last_name=rng.choice(LAST_NAMES),
                role=role,
                team_id=team_id,
                rating=rng.randint(40, 90),
            )
            staff[role] = coach_id

        wins = rng.randint(2, 15)
        teams[team_id] = Team(
            id=team_id,
            city=city,
            nickname=nickname,
            abbreviation=abbr,
            division=division,
            record=TeamRecord(wins=wins, losses=17 - wins),
            roster_player_ids=roster,
            staff=StaffHierarchy(**staff),
            owner_patience=rng.randint(20, 80),
        )

        for idx in range(prospects_per_team):
            prospect_id = _uid("prospect", seed, team_idx, idx)
            position = rng.choice(ROSTER_TEMPLATE)
            player = _player(rng, _uid("rookie", seed, team_idx, idx), position, rookie=True)
            grade = round(min(100.0, player.overall + rng.uniform(-5, 10)), 1)
            prospects[prospect_id] = Prospect(
                id=prospect_id,
                player=player,
                school=rng.choice(SCHOOLS),
                grade=grade,
                projected_round=max(1, min(7, 8 - int((grade - 40) / 7))),
            )

        for idx in range(free_agents_per_team):
            position = rng.choice(ROSTER_TEMPLATE)
            player = _player(rng, _uid("free-agent", seed, team_idx, idx), position)
            players[player.id] = player

    first_team = next(iter(teams))
    return LeagueState(
        year=year,
        user_team_id=first_team,
        teams=teams,
        players=players,
        contracts=contracts,
        coaches=coaches,
        prospects=prospects,
    )


def save_league_yaml(league: LeagueState, path: Path) -> None:
    """Save a league, offseason state included, to YAML."""
    data = league.model_dump(mode="json")
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def load_league_yaml(path: Path) -> LeagueState:
    """Load a league from YAML. Raises pydantic.ValidationError on a malformed file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return LeagueState.model_validate(data)
