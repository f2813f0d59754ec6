"""Tests for the default content generators."""

import random

from gridiron.core.generators import (
    MEDIA_SOURCES,
    PhaseGenerators,
    calculate_draft_order,
    generate_camp_injuries,
    generate_coach_evaluations,
    generate_combine_results,
    generate_development_reveals,
    generate_ota_reports,
    generate_position_battle_previews,
    generate_position_battles,
    generate_preseason_evaluations,
    generate_preseason_games,
    generate_season_awards,
    generate_season_recap,
    generate_season_start_data,
    generate_udfa_pool,
    generate_waiver_wire,
    preseason_injuries_from_games,
)
from gridiron.models.league import LeagueState
from gridiron.models.offseason import TeamRecord


def _with_records(league: LeagueState, records: list[tuple[int, int]]) -> LeagueState:
    teams = dict(league.teams)
    for team_id, (wins, losses) in zip(list(teams), records, strict=False):
        teams[team_id] = teams[team_id].model_copy(
            update={"record": TeamRecord(wins=wins, losses=losses)}
        )
    return league.model_copy(update={"teams": teams})


class TestSeasonEnd:
    def test_draft_order_worst_record_first(self, league: LeagueState) -> None:
        """A 2-10 team picks before a 12-4 team."""
        league = _with_records(league, [(12, 4), (2, 10), (8, 8), (6, 10)])
        ids = list(league.teams)
        order = calculate_draft_order(league)
        assert order.index(ids[1]) < order.index(ids[0])
        assert order[0] == ids[1]
        assert order[-1] == ids[0]

    def test_awards_are_deterministic(self, league: LeagueState) -> None:
        """Same league and seed, same awards."""
        a = generate_season_awards(league, random.Random(1))
        b = generate_season_awards(league, random.Random(1))
        assert a == b
        assert a[0].award == "Most Valuable Player"

    def test_mvp_is_best_rostered_player(self, league: LeagueState) -> None:
        """The MVP has the league's highest overall among rostered players."""
        awards = generate_season_awards(league, random.Random(1))
        best = max(p.overall for p in league.players.values() if p.contract_id is not None)
        assert awards[0].stats["overall"] == best

    def test_recap_uses_draft_order(self, league: LeagueState) -> None:
        """The recap's draft position is the user team's slot in the order."""
        rng = random.Random(1)
        order = calculate_draft_order(league)
        recap = generate_season_recap(league, rng, generate_season_awards(league, rng), order)
        assert recap.draft_position == order.index(league.user_team_id) + 1
        assert recap.team_record == league.user_team.record
        assert len(recap.top_performers) == 5

    def test_coach_evaluations_cover_staff(self, league: LeagueState) -> None:
        """The head coach and both coordinators are evaluated."""
        evaluations = generate_coach_evaluations(league, random.Random(1))
        assert {e.role for e in evaluations} == {
            "head_coach",
            "offensive_coordinator",
            "defensive_coordinator",
        }


class TestDraftSeason:
    def test_combine_results_keyed_by_prospect(self, league: LeagueState) -> None:
        """Every prospect gets drill results with a bounded athletic score."""
        results = generate_combine_results(league, random.Random(1))
        assert set(results) == set(league.prospects)
        for prospect_id, result in results.items():
            assert result.prospect_id == prospect_id
            assert 30 <= result.athletic_score <= 95

    def test_udfa_pool_best_first(self, league: LeagueState) -> None:
        """The UDFA pool is every remaining prospect, highest grade first."""
        pool = generate_udfa_pool(league)
        grades = [p.grade for p in pool]
        assert grades == sorted(grades, reverse=True)
        assert len(pool) == len(league.prospects)


class TestCampAndPreseason:
    def test_ota_reports_cover_user_roster(self, league: LeagueState) -> None:
        """One OTA report per user-roster player."""
        reports = generate_ota_reports(league, random.Random(1))
        assert [r.player_id for r in reports] == league.user_team.roster_player_ids

    def test_battle_previews_have_challengers(self, league: LeagueState) -> None:
        """Each preview names an incumbent and up to two challengers."""
        previews = generate_position_battle_previews(league, random.Random(1))
        assert previews
        for preview in previews:
            assert 1 <= len(preview.challengers) <= 2
            assert preview.incumbent_id not in {c.player_id for c in preview.challengers}

    def test_battles_scores_in_range(self, league: LeagueState) -> None:
        """Battle scores are within 0-100 and competitors are ranked."""
        battles = generate_position_battles(league, random.Random(1))
        for battle in battles:
            scores = [c.current_score for c in battle.competitors]
            assert scores == sorted(scores, reverse=True)
            assert all(0 <= s <= 100 for s in scores)

    def test_reveals_and_injuries_from_user_roster(self, league: LeagueState) -> None:
        """Reveals and camp injuries only touch user-roster players."""
        roster = set(league.user_team.roster_player_ids)
        reveals = generate_development_reveals(league, random.Random(1))
        assert 2 <= len(reveals) <= 4
        assert {r.player_id for r in reveals} <= roster
        injuries = generate_camp_injuries(league, random.Random(1))
        assert {i.player_id for i in injuries} <= roster

    def test_preseason_games_and_evaluations(self, league: LeagueState) -> None:
        """Games are numbered from 1 and every performer gets an evaluation."""
        games = generate_preseason_games(league, random.Random(1), games=3)
        assert [g.game_number for g in games] == [1, 2, 3]
        evaluations = generate_preseason_evaluations(games, league)
        performers = {p.player_id for g in games for p in g.player_performances}
        assert {e.player_id for e in evaluations} == performers
        injuries = preseason_injuries_from_games(games)
        assert len(injuries) == sum(len(g.injuries) for g in games)

    def test_generators_do_not_mutate_league(self, league: LeagueState) -> None:
        """Generators leave their input untouched."""
        before = league.model_dump()
        rng = random.Random(5)
        generate_ota_reports(league, rng)
        generate_position_battles(league, rng)
        generate_camp_injuries(league, rng)
        generate_preseason_games(league, rng)
        assert league.model_dump() == before


class TestFinalCutsAndSeasonStart:
    def test_waiver_wire_excludes_user_team(self, league: LeagueState) -> None:
        """Other teams' waived players only, with claim priority from 1."""
        wire = generate_waiver_wire(league, random.Random(1), roster_limit=53)
        assert wire
        assert all(w.previous_team_id != league.user_team_id for w in wire)
        assert all(w.waiver_priority >= 1 for w in wire)

    def test_season_start(self, league: LeagueState) -> None:
        """Owner expectations, one projection per outlet, and a wins goal."""
        data = generate_season_start_data(league, random.Random(1))
        assert data.owner_expectations.wins.minimum <= data.owner_expectations.wins.expected
        assert len(data.media_projections) == len(MEDIA_SOURCES)
        assert data.season_goals[0].id == "goal-wins"


class TestBundle:
    def test_override_one_generator(self, league: LeagueState) -> None:
        """A bundle can swap a single step and keep the defaults for the rest."""
        bundle = PhaseGenerators(draft_order=lambda league, rng=None: ["fixed"])
        assert bundle.draft_order(league, None) == ["fixed"]
        assert bundle.udfa_pool is generate_udfa_pool
