"""Default content generators for each offseason phase.

Every generator is a pure function of the league (plus any upstream records)
and an explicit ``random.Random``. None of them mutate their inputs. Given the
same league and the same seeded rng they return identical output.

The orchestrator calls them through a PhaseGenerators bundle, so callers can
swap in their own implementations.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from gridiron.core.bridges import decide_battle
from gridiron.models.league import LeagueState
from gridiron.models.offseason import SeasonRecap, TopPerformer
from gridiron.models.records import (
    AwardWinner,
    BattleChallenger,
    CampInjury,
    CoachEvaluationResult,
    CombineResult,
    DevelopmentReveal,
    MediaProjection,
    OTAReport,
    OwnerExpectations,
    PositionBattle,
    PositionBattleCompetitor,
    PositionBattlePreview,
    PreseasonEvaluation,
    PreseasonGame,
    PreseasonInjury,
    PreseasonPlayerPerformance,
    RookieIntegrationReport,
    SeasonGoal,
    WaiverPlayer,
    WinTargets,
    grade_from_score,
)
from gridiron.models.roster import DEFENSIVE_POSITIONS, OFFENSIVE_POSITIONS, Player, Prospect, Team

logger = logging.getLogger(__name__)

Side = Literal["offense", "defense"]

SEASON_GAMES = 17

INJURY_TYPES = (
    "Hamstring strain",
    "Ankle sprain",
    "Knee soreness",
    "Shoulder inflammation",
    "Back tightness",
)

ESTIMATED_RETURN = {
    "minor": "1-2 days",
    "moderate": "1-2 weeks",
    "serious": "4-6 weeks",
    "season_ending": "Season",
}

MEDIA_SOURCES = (
    "National Power Rankings",
    "League Network",
    "Sports Weekly",
    "The Film Room",
    "Pro Football Grades",
)

# (elite, good, average, poor). Timed drills: lower is better.
DRILL_BENCHMARKS: dict[str, tuple[float, float, float, float]] = {
    "forty_yard": (4.40, 4.55, 4.75, 5.00),
    "three_cone": (6.80, 7.00, 7.25, 7.50),
    "shuttle": (4.10, 4.25, 4.45, 4.65),
    "bench_press": (30, 24, 18, 12),
    "vertical_jump": (38.0, 34.0, 30.0, 26.0),
    "broad_jump": (126, 118, 110, 100),
}
TIMED_DRILLS = frozenset({"forty_yard", "three_cone", "shuttle"})


def player_score(player: Player) -> float:
    return float(player.overall)


def _team_of(league: LeagueState, player_id: str) -> Team | None:
    for team in league.teams.values():
        if player_id in team.roster_player_ids:
            return team
    return None


def _user_roster(league: LeagueState) -> list[Player]:
    return league.roster(league.user_team_id)


# ---------------------------------------------------------------------------
# Season End
# ---------------------------------------------------------------------------


def calculate_draft_order(league: LeagueState, rng: random.Random | None = None) -> list[str]:
    """Team ids, worst record first. Ties fall back to fewer wins, then team id."""
    teams = sorted(
        league.teams.values(),
        key=lambda t: (t.record.win_pct, t.record.wins, t.id),
    )
    return [t.id for t in teams]


def _award(league: LeagueState, name: str, player: Player | None) -> AwardWinner | None:
    if player is None:
        return None
    team = _team_of(league, player.id)
    return AwardWinner(
        award=name,
        player_id=player.id,
        player_name=player.full_name,
        team_id=team.id if team else "",
        team_name=team.name if team else "",
        stats={"overall": float(player.overall)},
    )


def _best(players: list[Player]) -> Player | None:
    # max() keeps the first of equal scores, so dict order breaks ties.
    return max(players, key=player_score, default=None)


def generate_season_awards(league: LeagueState, rng: random.Random) -> list[AwardWinner]:
    """MVP, offensive/defensive player of the year, and the two rookie awards."""
    rostered = [p for p in league.players.values() if _team_of(league, p.id) is not None]

    def side(players: list[Player], which: Side) -> list[Player]:
        positions = OFFENSIVE_POSITIONS if which == "offense" else DEFENSIVE_POSITIONS
        return [p for p in players if p.position in positions]

    rookies = [p for p in rostered if p.experience == 0]
    candidates = [
        ("Most Valuable Player", _best(rostered)),
        ("Offensive Player of the Year", _best(side(rostered, "offense"))),
        ("Defensive Player of the Year", _best(side(rostered, "defense"))),
        ("Offensive Rookie of the Year", _best(side(rookies, "offense"))),
        ("Defensive Rookie of the Year", _best(side(rookies, "defense"))),
    ]
    awards = [_award(league, name, player) for name, player in candidates]
    return [a for a in awards if a is not None]


def generate_season_recap(
    league: LeagueState,
    rng: random.Random,
    awards: list[AwardWinner],
    draft_order: list[str],
) -> SeasonRecap:
    """Summarize the user team's finished season."""
    team = league.user_team
    record = team.record
    division = sorted(
        (t for t in league.teams.values() if t.division == team.division),
        key=lambda t: (-t.record.win_pct, t.id),
    )
    finish = min(4, 1 + [t.id for t in division].index(team.id))
    made_playoffs = record.win_pct >= 0.6
    playoff_result = None
    if made_playoffs:
        playoff_result = rng.choice(
            ["Lost in Wild Card round", "Lost in Divisional round", "Lost in Conference final"]
        )

    top = sorted(_user_roster(league), key=player_score, reverse=True)[:5]
    performers = [
        TopPerformer(
            player_id=p.id,
            player_name=p.full_name,
            position=p.position,
            grade=grade_from_score(player_score(p)),
        )
        for p in top
    ]
    team_awards = [f"{a.award}: {a.player_name}" for a in awards if a.team_id == team.id]
    draft_position = draft_order.index(team.id) + 1 if team.id in draft_order else 0

    write_up = (
        f"The {team.name} finished {record.wins}-{record.losses}"
        + (f"-{record.ties}" if record.ties else "")
        + f", placing {_ordinal(finish)} in the division."
    )
    return SeasonRecap(
        year=league.year,
        team_record=record,
        division_finish=finish,
        made_playoffs=made_playoffs,
        playoff_result=playoff_result,
        draft_position=draft_position,
        top_performers=performers,
        awards=team_awards,
        season_write_up=write_up,
    )


def _ordinal(n: int) -> str:
    return {1: "1st", 2: "2nd", 3: "3rd"}.get(n, f"{n}th")


# ---------------------------------------------------------------------------
# Coaching Decisions
# ---------------------------------------------------------------------------


def _grade_from_win_pct(win_pct: float) -> Literal["A", "B", "C", "D", "F"]:
    if win_pct >= 0.75:
        return "A"
    if win_pct >= 0.6:
        return "B"
    if win_pct >= 0.4:
        return "C"
    if win_pct >= 0.25:
        return "D"
    return "F"


def generate_coach_evaluations(
    league: LeagueState, rng: random.Random
) -> list[CoachEvaluationResult]:
    """Grade the user team's head coach on record and the coordinators on a coin flip."""
    team = league.user_team
    win_pct = team.record.win_pct
    evaluations: list[CoachEvaluationResult] = []

    head = league.coaches.get(team.staff.head_coach or "")
    if head is not None:
        if win_pct >= 0.6:
            strengths = ["Game management", "Player motivation", "In-game adjustments"]
            weaknesses: list[str] = []
        elif win_pct >= 0.4:
            strengths = ["Player development", "Team culture"]
            weaknesses = ["Clock management", "Fourth down decisions"]
        else:
            strengths = ["Effort", "Communication"]
            weaknesses = ["Play calling", "Game preparation", "Adjustments"]
        if win_pct >= 0.7:
            recommendation = "extend"
        elif win_pct >= 0.4:
            recommendation = "keep"
        else:
            recommendation = "fire"
        evaluations.append(
            CoachEvaluationResult(
                coach_id=head.id,
                coach_name=head.full_name,
                role="head_coach",
                overall_grade=_grade_from_win_pct(win_pct),
                strengths=strengths,
                weaknesses=weaknesses,
                recommendation=recommendation,
                years_remaining=2,
            )
        )

    coordinators = (
        ("offensive_coordinator", team.staff.offensive_coordinator,
         ["Play design", "Player development"], "Red zone efficiency"),
        ("defensive_coordinator", team.staff.defensive_coordinator,
         ["Scheme versatility", "Third down defense"], "Run defense"),
    )
    for role, coach_id, strengths, weakness in coordinators:
        coach = league.coaches.get(coach_id or "")
        if coach is None:
            continue
        grade = "B" if rng.random() > 0.5 else "C"
        evaluations.append(
            CoachEvaluationResult(
                coach_id=coach.id,
                coach_name=coach.full_name,
                role=role,
                overall_grade=grade,
                strengths=list(strengths),
                weaknesses=[weakness] if grade == "C" else [],
                recommendation="keep",
                years_remaining=1,
            )
        )
    return evaluations


# ---------------------------------------------------------------------------
# Combine
# ---------------------------------------------------------------------------


def drill_score(drill: str, result: float) -> int:
    """Score one drill result 30-95 against its benchmarks."""
    elite, good, average, poor = DRILL_BENCHMARKS[drill]
    if drill in TIMED_DRILLS:
        beats = (result <= elite, result <= good, result <= average, result <= poor)
    else:
        beats = (result >= elite, result >= good, result >= average, result >= poor)
    for hit, score in zip(beats, (95, 80, 65, 45), strict=True):
        if hit:
            return score
    return 30


def generate_combine_results(
    league: LeagueState, rng: random.Random
) -> dict[str, CombineResult]:
    """Drill results for every draft prospect, keyed by prospect id."""
    results: dict[str, CombineResult] = {}
    for prospect_id, prospect in league.prospects.items():
        # Better athletes drift toward the elite end of every drill.
        talent = (prospect.player.overall - 50) / 50
        drills = {
            "forty_yard": round(rng.uniform(4.35, 5.2) - 0.2 * talent, 2),
            "bench_press": int(rng.uniform(10, 32) + 4 * talent),
            "vertical_jump": round(rng.uniform(26, 40) + 2 * talent, 1),
            "broad_jump": int(rng.uniform(100, 130) + 4 * talent),
            "three_cone": round(rng.uniform(6.7, 7.6) - 0.15 * talent, 2),
            "shuttle": round(rng.uniform(4.0, 4.7) - 0.1 * talent, 2),
        }
        athletic = sum(drill_score(name, value) for name, value in drills.items()) / len(drills)
        if athletic >= 85:
            stock = "rising"
        elif athletic < 45:
            stock = "falling"
        else:
            stock = "steady"
        results[prospect_id] = CombineResult(
            prospect_id=prospect_id,
            forty_yard=drills["forty_yard"],
            bench_press=drills["bench_press"],
            vertical_jump=drills["vertical_jump"],
            broad_jump=drills["broad_jump"],
            three_cone=drills["three_cone"],
            shuttle=drills["shuttle"],
            athletic_score=round(athletic, 1),
            stock_change=stock,
        )
    return results


# ---------------------------------------------------------------------------
# UDFA
# ---------------------------------------------------------------------------


def generate_udfa_pool(league: LeagueState, rng: random.Random | None = None) -> list[Prospect]:
    """Every prospect still undrafted, best grade first."""
    return sorted(league.prospects.values(), key=lambda p: (-p.grade, p.id))


# ---------------------------------------------------------------------------
# OTAs
# ---------------------------------------------------------------------------

_IMPRESSION_NOTES = {
    "standout": "One of the most impressive performers in OTAs",
    "solid": "Meeting expectations with steady improvement",
    "average": "Performing at expected level",
    "concerning": "Coaches working to address concerns",
    "injury": "Limited participation due to minor injury",
}

_COACH_FEEDBACK = {
    "standout": "Extremely pleased with the progress. Going to be a key contributor.",
    "solid": "Doing exactly what we expected. Steady and reliable.",
    "average": "Still evaluating, but showing flashes.",
    "concerning": "We're working to get up to speed.",
    "injury": "Taking it slow, being smart with the recovery.",
}


def generate_ota_reports(league: LeagueState, rng: random.Random) -> list[OTAReport]:
    """One report per user-roster player: attendance, impression, conditioning, scheme grasp."""
    reports: list[OTAReport] = []
    for player in _user_roster(league):
        attendance = "full"
        roll = rng.random()
        if roll < 0.05:
            attendance = "excused"
        elif roll < 0.13:
            attendance = "partial"

        performance = player_score(player) * 0.6 + player.work_ethic * 0.4 + rng.uniform(-10, 10)
        if rng.random() < 0.03:
            impression = "injury"
        elif performance >= 85:
            impression = "standout"
        elif performance >= 75:
            impression = "solid"
        elif performance >= 60:
            impression = "average"
        else:
            impression = "concerning"

        reports.append(
            OTAReport(
                player_id=player.id,
                player_name=player.full_name,
                position=player.position,
                type="rookie" if player.experience == 0 else "veteran",
                attendance=attendance,
                impression=impression,
                notes=[_IMPRESSION_NOTES[impression]],
                highlights=["Exceptional practice performance"] if impression == "standout" else [],
                concerns=["Struggling with playbook"] if impression == "concerning" else [],
                conditioning_level=round(60 + rng.random() * 30),
                scheme_grasp=round(50 + rng.random() * 40),
                coach_feedback=_COACH_FEEDBACK[impression],
            )
        )
    return reports


def generate_rookie_integration_reports(
    league: LeagueState, rng: random.Random
) -> list[RookieIntegrationReport]:
    reports: list[RookieIntegrationReport] = []
    for player in _user_roster(league):
        if player.experience != 0:
            continue
        score = player_score(player)
        if score >= 75 or rng.random() < 0.2:
            curve = "ahead"
        elif score < 60 or rng.random() < 0.2:
            curve = "behind"
        else:
            curve = "on_track"
        if curve == "ahead":
            notes = ["Picking up the playbook quickly", "Showing pro-level instincts"]
        elif curve == "behind":
            notes = ["Taking extra time in meetings", "Needs more reps"]
        else:
            notes = ["Progressing as expected", "Fitting in well with teammates"]
        reports.append(
            RookieIntegrationReport(
                player_id=player.id,
                player_name=player.full_name,
                position=player.position,
                draft_round=player.draft_round or None,
                learning_curve=curve,
                physical_readiness="pro_ready" if score >= 70 else "needs_work",
                mental_readiness="sharp" if curve == "ahead" else "average",
                adjustment_notes=notes,
            )
        )
    return reports


def _by_position(players: list[Player]) -> dict[str, list[Player]]:
    groups: dict[str, list[Player]] = {}
    for player in players:
        groups.setdefault(player.position, []).append(player)
    return groups


def generate_position_battle_previews(
    league: LeagueState, rng: random.Random
) -> list[PositionBattlePreview]:
    """Incumbent vs. top two challengers at every position with depth."""
    previews: list[PositionBattlePreview] = []
    for position, players in _by_position(_user_roster(league)).items():
        if len(players) < 2:
            continue
        ranked = sorted(players, key=player_score, reverse=True)
        incumbent, challengers = ranked[0], ranked[1:3]
        gap = player_score(incumbent) - player_score(challengers[0])
        if gap <= 3:
            level = "heated"
        elif gap <= 8:
            level = "competitive"
        else:
            level = "clear_starter"
        previews.append(
            PositionBattlePreview(
                position=position,
                incumbent_id=incumbent.id,
                incumbent_name=incumbent.full_name,
                challengers=[
                    BattleChallenger(
                        player_id=c.id,
                        player_name=c.full_name,
                        early_impression=rng.choice(["strong", "average", "weak"]),
                    )
                    for c in challengers
                ],
                competition_level=level,
                preview_notes=f"{incumbent.full_name} enters camp as the {position} starter",
            )
        )
    return previews


# ---------------------------------------------------------------------------
# Training Camp
# ---------------------------------------------------------------------------


def generate_position_battles(league: LeagueState, rng: random.Random) -> list[PositionBattle]:
    """Starter battles among the top three at every position with depth."""
    battles: list[PositionBattle] = []
    for position, players in _by_position(_user_roster(league)).items():
        if len(players) < 2:
            continue
        ranked = sorted(players, key=player_score, reverse=True)[:3]
        competitors = [
            PositionBattleCompetitor(
                player_id=p.id,
                player_name=p.full_name,
                current_score=round(min(100.0, 70 + (2 - i) * 10 + rng.random() * 10), 1),
                practice_grade="A" if i == 0 else "B",
            )
            for i, p in enumerate(ranked)
        ]
        battle = PositionBattle(
            battle_id=f"battle-{len(battles) + 1}",
            position=position,
            competitors=competitors,
            updates=[f"{position} position battle heating up"],
        )
        battles.append(decide_battle(battle))
    return battles


_REVEAL_DESCRIPTIONS = {
    "skill_jump": "{name} showing significant improvement in practice",
    "trait": "{name} displaying leadership qualities in camp",
    "decline": "{name} appears to have lost a step",
    "injury_concern": "{name} dealing with nagging injury concerns",
    "intangible": "{name} showing exceptional work ethic",
}


def generate_development_reveals(
    league: LeagueState, rng: random.Random
) -> list[DevelopmentReveal]:
    """Two to four surprise development findings on random user-roster players."""
    roster = _user_roster(league)
    count = min(len(roster), 2 + rng.randrange(3))
    reveals: list[DevelopmentReveal] = []
    for player in rng.sample(roster, count):
        kind = rng.choice(["trait", "skill_jump", "decline", "injury_concern", "intangible"])
        if kind in ("skill_jump", "intangible"):
            impact = "positive"
        elif kind in ("decline", "injury_concern"):
            impact = "negative"
        else:
            impact = rng.choice(["positive", "neutral"])
        reveals.append(
            DevelopmentReveal(
                player_id=player.id,
                player_name=player.full_name,
                position=player.position,
                reveal_type=kind,
                description=_REVEAL_DESCRIPTIONS[kind].format(name=player.full_name),
                impact=impact,
            )
        )
    return reveals


def generate_camp_injuries(league: LeagueState, rng: random.Random) -> list[CampInjury]:
    """About 8% of the user roster picks up a camp injury."""
    injuries: list[CampInjury] = []
    for player in _user_roster(league):
        if rng.random() > 0.08:
            continue
        severity = rng.choice(["minor", "moderate", "serious"])
        injuries.append(
            CampInjury(
                player_id=player.id,
                player_name=player.full_name,
                position=player.position,
                injury_type=rng.choice(INJURY_TYPES),
                severity=severity,
                estimated_return=ESTIMATED_RETURN[severity],
                practice_status="limited" if severity == "minor" else "out",
            )
        )
    return injuries


# ---------------------------------------------------------------------------
# Preseason
# ---------------------------------------------------------------------------


def _roster_impact(grade: str) -> Literal["lock", "bubble", "cut_candidate"]:
    if grade == "A":
        return "lock"
    if grade in ("D", "F"):
        return "cut_candidate"
    return "bubble"


def generate_preseason_games(
    league: LeagueState, rng: random.Random, games: int = 3
) -> list[PreseasonGame]:
    """Exhibition results with 10-15 notable performances per game."""
    user = league.user_team
    opponents = [t for t in league.teams.values() if t.id != user.id] or [user]
    roster = _user_roster(league)
    results: list[PreseasonGame] = []
    for number in range(1, games + 1):
        opponent = rng.choice(opponents)
        team_score = 10 + rng.randrange(20)
        opponent_score = 10 + rng.randrange(20)
        if team_score > opponent_score:
            result = "win"
        elif team_score < opponent_score:
            result = "loss"
        else:
            result = "tie"

        featured = rng.sample(roster, min(len(roster), 10 + rng.randrange(6)))
        performances = []
        for player in featured:
            score = round(max(0.0, min(100.0, player_score(player) + rng.gauss(0, 8))), 1)
            grade = grade_from_score(score)
            snaps = 10 + rng.randrange(20) if number == games else 20 + rng.randrange(30)
            performances.append(
                PreseasonPlayerPerformance(
                    player_id=player.id,
                    player_name=player.full_name,
                    position=player.position,
                    snaps=snaps,
                    score=score,
                    grade=grade,
                    roster_impact=_roster_impact(grade),
                )
            )

        injuries = []
        if performances and rng.random() < 0.25:
            hurt = rng.choice(performances)
            severity = rng.choice(["minor", "minor", "moderate", "serious"])
            injuries.append(
                PreseasonInjury(
                    player_id=hurt.player_id,
                    player_name=hurt.player_name,
                    position=hurt.position,
                    game_number=number,
                    injury_type=rng.choice(INJURY_TYPES),
                    severity=severity,
                    missed_time=ESTIMATED_RETURN[severity],
                )
            )

        results.append(
            PreseasonGame(
                game_number=number,
                opponent=opponent.name,
                is_home=number % 2 == 1,
                team_score=team_score,
                opponent_score=opponent_score,
                result=result,
                player_performances=performances,
                injuries=injuries,
                highlights=[f"Game {number} {'victory' if result == 'win' else result}"],
            )
        )
    return results


def generate_preseason_evaluations(
    games: list[PreseasonGame], league: LeagueState
) -> list[PreseasonEvaluation]:
    """Average each player's preseason scores into a roster projection."""
    by_player: dict[str, list[PreseasonPlayerPerformance]] = {}
    for game in games:
        for perf in game.player_performances:
            by_player.setdefault(perf.player_id, []).append(perf)

    evaluations: list[PreseasonEvaluation] = []
    for player_id, perfs in by_player.items():
        player = league.players.get(player_id)
        if player is None:
            continue
        avg = round(sum(p.score for p in perfs) / len(perfs), 1)
        if avg >= 85:
            projection = "lock"
        elif avg >= 75:
            projection = "bubble"
        elif avg >= 65:
            projection = "practice_squad"
        else:
            projection = "cut_candidate"
        if avg >= 80:
            trend = "improving"
        elif avg >= 65:
            trend = "steady"
        else:
            trend = "declining"
        evaluations.append(
            PreseasonEvaluation(
                player_id=player_id,
                player_name=player.full_name,
                position=player.position,
                games_played=len(perfs),
                total_snaps=sum(p.snaps for p in perfs),
                avg_grade=avg,
                trend=trend,
                roster_projection=projection,
                recommendation="Keep on roster" if avg >= 75 else "Consider for PS or cut",
            )
        )
    return evaluations


def preseason_injuries_from_games(games: list[PreseasonGame]) -> list[PreseasonInjury]:
    return [injury for game in games for injury in game.injuries]


# ---------------------------------------------------------------------------
# Final Cuts
# ---------------------------------------------------------------------------


def generate_waiver_wire(
    league: LeagueState, rng: random.Random, roster_limit: int = 53
) -> list[WaiverPlayer]:
    """Players other teams expose to waivers in cutdown.

    Each team over the limit waives its lowest-rated excess players, and any
    team may waive one more fringe player. Claim priority follows the draft
    order: worst record first.
    """
    order = calculate_draft_order(league)
    priority = {team_id: i + 1 for i, team_id in enumerate(order)}
    wire: list[WaiverPlayer] = []
    for team in league.teams.values():
        if team.id == league.user_team_id:
            continue
        ranked = sorted(league.roster(team.id), key=player_score)
        excess = max(0, len(ranked) - roster_limit)
        waived = ranked[:excess]
        remaining = ranked[excess:]
        if remaining and rng.random() < 0.5:
            waived.append(remaining[0])
        for player in waived:
            contract = league.contracts.get(player.contract_id or "")
            wire.append(
                WaiverPlayer(
                    player_id=player.id,
                    player_name=player.full_name,
                    position=player.position,
                    previous_team_id=team.id,
                    previous_team_name=team.name,
                    overall_rating=player.overall,
                    age=player.age,
                    salary=contract.average_annual_value if contract else 0,
                    waiver_priority=priority[team.id],
                )
            )
    return sorted(wire, key=lambda w: (-w.overall_rating, w.player_id))


# ---------------------------------------------------------------------------
# Season Start
# ---------------------------------------------------------------------------


@dataclass
class SeasonStartData:
    owner_expectations: OwnerExpectations
    media_projections: list[MediaProjection]
    season_goals: list[SeasonGoal]


def generate_season_start_data(league: LeagueState, rng: random.Random) -> SeasonStartData:
    """Owner expectations, media projections, and goals from roster strength."""
    team = league.user_team
    roster = _user_roster(league)
    strength = sum(player_score(p) for p in roster) / len(roster) if roster else 60.0
    previous_wins = team.record.wins

    if strength >= 85:
        minimum, playoffs, division, championship = 12, True, True, True
    elif strength >= 75:
        minimum, playoffs, division, championship = 10, True, True, False
    elif strength >= 65:
        minimum, playoffs, division, championship = 9, True, False, False
    elif strength >= 55:
        minimum, playoffs, division, championship = 7, True, False, False
    else:
        minimum, playoffs, division, championship = 5, False, False, False

    patience = 50
    if team.owner_patience >= 70:
        minimum -= 1
        patience = 70
    elif team.owner_patience <= 30:
        minimum += 1
        patience = 30
    if league.seasons_completed >= 3:
        patience -= 10
    elif league.seasons_completed == 1:
        patience += 15
    patience = max(1, min(100, patience))

    top = sorted(roster, key=player_score, reverse=True)[:5]
    expectations = OwnerExpectations(
        wins=WinTargets(
            minimum=minimum, expected=minimum + 2, stretch=min(SEASON_GAMES, minimum + 4)
        ),
        playoffs=playoffs,
        division=division,
        championship=championship,
        player_development=[f"Develop {p.full_name}" for p in top if p.experience <= 2],
        patience=patience,
    )

    projections: list[MediaProjection] = []
    for source in MEDIA_SOURCES:
        variance = rng.randrange(6) - 3
        wins = max(2, min(15, round(strength / 100 * 12 + 4) + variance))
        if wins >= 12:
            odds = (85, 60, 12)
        elif wins >= 10:
            odds = (70, 40, 5)
        elif wins >= 8:
            odds = (50, 15, 1)
        else:
            odds = (20, 15, 1)
        projections.append(
            MediaProjection(
                source=source,
                projected_wins=wins,
                projected_losses=SEASON_GAMES - wins,
                playoff_odds=odds[0],
                division_odds=odds[1],
                championship_odds=odds[2],
                ranking=max(1, min(32, 32 - round(strength / 3.5) + variance)),
                analysis=f"{team.name} project for {wins} wins coming off {previous_wins}.",
            )
        )

    goals = [
        SeasonGoal(
            id="goal-wins",
            type="wins",
            description=f"Win at least {minimum} games",
            target=minimum,
        )
    ]
    if playoffs:
        goals.append(
            SeasonGoal(
                id="goal-playoffs", type="playoffs", description="Make the playoffs",
                target="Playoff berth",
            )
        )
    if championship:
        goals.append(
            SeasonGoal(
                id="goal-championship", type="championship",
                description="Win the championship", target="Championship",
            )
        )
    for player in top[:3]:
        goals.append(
            SeasonGoal(
                id=f"goal-player-{player.id}",
                type="player_development",
                description=f"{player.full_name} makes the all-star team",
                target="All-star selection",
            )
        )
    goals.append(
        SeasonGoal(
            id="goal-job-security",
            type="custom",
            description="Keep the owner satisfied throughout the season",
            target="Job security",
        )
    )
    return SeasonStartData(
        owner_expectations=expectations, media_projections=projections, season_goals=goals
    )


# ---------------------------------------------------------------------------
# Bundle
# ---------------------------------------------------------------------------


@dataclass
class PhaseGenerators:
    """The content generators the orchestrator calls on phase entry.

    Pass keyword overrides to inject a different implementation of any step.
    """

    draft_order: Callable[..., list[str]] = calculate_draft_order
    season_awards: Callable[..., list[AwardWinner]] = generate_season_awards
    season_recap: Callable[..., SeasonRecap] = generate_season_recap
    coach_evaluations: Callable[..., list[CoachEvaluationResult]] = generate_coach_evaluations
    combine_results: Callable[..., dict[str, CombineResult]] = generate_combine_results
    udfa_pool: Callable[..., list[Prospect]] = generate_udfa_pool
    ota_reports: Callable[..., list[OTAReport]] = generate_ota_reports
    rookie_reports: Callable[..., list[RookieIntegrationReport]] = (
        generate_rookie_integration_reports
    )
    battle_previews: Callable[..., list[PositionBattlePreview]] = (
        generate_position_battle_previews
    )
    position_battles: Callable[..., list[PositionBattle]] = generate_position_battles
    development_reveals: Callable[..., list[DevelopmentReveal]] = generate_development_reveals
    camp_injuries: Callable[..., list[CampInjury]] = generate_camp_injuries
    preseason_games: Callable[..., list[PreseasonGame]] = generate_preseason_games
    preseason_evaluations: Callable[..., list[PreseasonEvaluation]] = (
        generate_preseason_evaluations
    )
    waiver_wire: Callable[..., list[WaiverPlayer]] = generate_waiver_wire
    season_start: Callable[..., SeasonStartData] = generate_season_start_data
