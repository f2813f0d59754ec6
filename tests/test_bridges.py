"""Tests for the phase data-flow bridges (OTAs -> camp -> preseason -> cuts)."""

from gridiron.core.bridges import (
    adjust_battles_for_ota,
    adjust_preseason_for_camp,
    calculate_roster_needs,
    decide_battle,
    development_bonus,
    ota_to_training_camp_input,
    preseason_to_final_cuts_input,
    summarize_phase_data_flow,
    training_camp_to_preseason_input,
)
from gridiron.core.store import create_empty_offseason_data
from gridiron.models.league import LeagueState
from gridiron.models.records import (
    BattleChallenger,
    CampInjury,
    DevelopmentReveal,
    OTAReport,
    PositionBattle,
    PositionBattleCompetitor,
    PositionBattlePreview,
    PreseasonEvaluation,
    PreseasonGame,
    PreseasonPlayerPerformance,
    RookieIntegrationReport,
)
from gridiron.models.roster import Contract, ContractYear, Player, Team


def _battle(*scores: float, battle_id: str = "battle-1") -> PositionBattle:
    return PositionBattle(
        battle_id=battle_id,
        position="WR",
        competitors=[
            PositionBattleCompetitor(player_id=f"p{i}", player_name=f"Player {i}", current_score=s)
            for i, s in enumerate(scores)
        ],
    )


def _evaluation(player_id: str, projection: str, avg: float) -> PreseasonEvaluation:
    return PreseasonEvaluation(
        player_id=player_id,
        player_name=player_id,
        position="WR",
        avg_grade=avg,
        roster_projection=projection,
    )


def _mini_league() -> LeagueState:
    """Five rostered user players, one with a large current-year bonus."""
    ids = ["lock", "winner", "cut", "guaranteed", "noeval"]
    players = {
        pid: Player(
            id=pid,
            first_name=pid.title(),
            last_name="Test",
            position="WR",
            experience=1 if pid == "noeval" else 5,
        )
        for pid in ids
    }
    contract = Contract(
        id="c-guaranteed",
        player_id="guaranteed",
        player_name="Guaranteed Test",
        team_id="t1",
        position="WR",
        signed_year=2025,
        total_years=2,
        years_remaining=2,
        yearly_breakdown=[
            ContractYear(year=2025, bonus=600, salary=1000, cap_hit=1600),
            ContractYear(year=2026, salary=1000, cap_hit=1000),
        ],
    )
    players["guaranteed"] = players["guaranteed"].model_copy(update={"contract_id": "c-guaranteed"})
    team = Team(id="t1", city="Erie", nickname="Anchors", roster_player_ids=ids)
    return LeagueState(
        year=2025,
        user_team_id="t1",
        teams={"t1": team},
        players=players,
        contracts={"c-guaranteed": contract},
    )


class TestOtaToCamp:
    def test_collects_seeds(self) -> None:
        """Conditioning, scheme grasp, readiness, and incumbent advantage are carried over."""
        seeds = ota_to_training_camp_input(
            [OTAReport(player_id="p0", player_name="A", position="WR", conditioning_level=90,
                       scheme_grasp=80)],
            [RookieIntegrationReport(player_id="r1", player_name="R", position="WR",
                                     learning_curve="ahead")],
            [PositionBattlePreview(
                position="WR", incumbent_id="p0", incumbent_name="A",
                challengers=[BattleChallenger(player_id="p1", player_name="B")],
                competition_level="heated",
            )],
        )
        assert seeds.conditioning == {"p0": 90}
        assert seeds.scheme_grasp == {"p0": 80}
        assert seeds.rookie_readiness == {"r1": "ahead"}
        assert seeds.battle_seeds[0].incumbent_advantage == 5
        assert seeds.battle_seeds[0].challenger_ids == ("p1",)

    def test_competition_level_advantages(self) -> None:
        """clear_starter gives the biggest incumbent edge."""
        previews = [
            PositionBattlePreview(position="QB", incumbent_id="q", incumbent_name="Q",
                                  competition_level="clear_starter"),
            PositionBattlePreview(position="RB", incumbent_id="r", incumbent_name="R",
                                  competition_level="competitive"),
        ]
        seeds = ota_to_training_camp_input([], [], previews)
        assert [s.incumbent_advantage for s in seeds.battle_seeds] == [20, 10]


class TestDecideBattle:
    def test_wide_margin_decided(self) -> None:
        """A margin over 15 produces a decided winner."""
        battle = decide_battle(_battle(60.0, 80.0))
        assert battle.winner == "p1"
        assert battle.status == "decided"
        assert battle.competitors[0].player_id == "p1"

    def test_moderate_margin_winner_still_ongoing(self) -> None:
        """A margin between 10 and 15 names a winner but stays ongoing."""
        battle = decide_battle(_battle(80.0, 68.0))
        assert battle.winner == "p0"
        assert battle.status == "ongoing"

    def test_small_margin_no_winner(self) -> None:
        """A margin of 8 is ongoing with no winner; 3 is too close."""
        assert decide_battle(_battle(80.0, 72.0)).winner is None
        assert decide_battle(_battle(80.0, 72.0)).status == "ongoing"
        assert decide_battle(_battle(80.0, 77.0)).status == "too_close"

    def test_single_competitor_wins(self) -> None:
        """A lone competitor wins outright."""
        battle = decide_battle(_battle(55.0))
        assert battle.winner == "p0"
        assert battle.status == "decided"


class TestAdjustBattles:
    def test_ota_nudges_and_clamps(self) -> None:
        """High conditioning and scheme grasp push a 95 past 100, which clamps."""
        seeds = ota_to_training_camp_input(
            [OTAReport(player_id="p0", player_name="A", position="WR", conditioning_level=100,
                       scheme_grasp=100)],
            [],
            [],
        )
        [battle] = adjust_battles_for_ota([_battle(95.0, 70.0)], seeds)
        scores = {c.player_id: c.current_score for c in battle.competitors}
        assert scores == {"p0": 100.0, "p1": 70.0}

    def test_baseline_players_unchanged(self) -> None:
        """Players at the OTA baselines get no nudge."""
        seeds = ota_to_training_camp_input(
            [OTAReport(player_id="p0", player_name="A", position="WR")], [], []
        )
        [battle] = adjust_battles_for_ota([_battle(72.0, 71.0)], seeds)
        assert battle.competitors[0].current_score == 72.0

    def test_nudge_can_flip_the_result(self) -> None:
        """A clear_starter incumbent gains 5 points and can become the winner."""
        seeds = ota_to_training_camp_input(
            [],
            [],
            [PositionBattlePreview(position="WR", incumbent_id="p0", incumbent_name="A",
                                   competition_level="clear_starter")],
        )
        [battle] = adjust_battles_for_ota([_battle(80.0, 72.0)], seeds)
        assert battle.competitors[0].current_score == 85.0
        assert battle.winner == "p0"


class TestCampToPreseason:
    def test_reps_bonuses_and_sidelined(self) -> None:
        """Winners get fewer reps, reveals set bonuses, serious injuries sideline."""
        battle = decide_battle(_battle(90.0, 60.0))
        reveals = [
            DevelopmentReveal(player_id="p0", player_name="A", position="WR",
                              reveal_type="skill_jump"),
            DevelopmentReveal(player_id="x", player_name="X", position="LB",
                              reveal_type="decline"),
        ]
        injuries = [
            CampInjury(player_id="s1", player_name="S", position="CB", injury_type="Knee",
                       severity="serious"),
            CampInjury(player_id="m1", player_name="M", position="CB", injury_type="Ankle",
                       severity="minor", practice_status="limited"),
            CampInjury(player_id="o1", player_name="O", position="CB", injury_type="Ankle",
                       severity="minor", practice_status="out"),
        ]
        seeds = training_camp_to_preseason_input([battle], reveals, injuries)
        assert seeds.starter_projections == {"p0": True, "p1": False}
        assert seeds.reps == {"p0": 30, "p1": 60}
        assert seeds.development_bonuses == {"p0": 10, "x": -5}
        assert seeds.sidelined == {"s1", "o1"}

    def test_development_bonus_table(self) -> None:
        """Only positive traits earn the trait bonus."""
        def reveal(kind: str, impact: str = "neutral") -> DevelopmentReveal:
            return DevelopmentReveal(player_id="p", player_name="P", position="QB",
                                     reveal_type=kind, impact=impact)

        assert development_bonus(reveal("trait", "positive")) == 7
        assert development_bonus(reveal("trait", "neutral")) == 0
        assert development_bonus(reveal("injury_concern")) == -3
        assert development_bonus(reveal("intangible", "positive")) == 0

    def test_adjust_preseason(self) -> None:
        """Sidelined players drop out; reps scale snaps; bonuses regrade scores."""
        game = PreseasonGame(
            game_number=1,
            opponent="Erie Anchors",
            player_performances=[
                PreseasonPlayerPerformance(player_id="p0", player_name="A", position="WR",
                                           snaps=40, score=70.0, grade="C"),
                PreseasonPlayerPerformance(player_id="s1", player_name="S", position="CB",
                                           snaps=40, score=70.0, grade="C"),
            ],
        )
        seeds = training_camp_to_preseason_input(
            [decide_battle(_battle(90.0, 60.0))],
            [DevelopmentReveal(player_id="p0", player_name="A", position="WR",
                               reveal_type="skill_jump")],
            [CampInjury(player_id="s1", player_name="S", position="CB", injury_type="Knee",
                        severity="season_ending")],
        )
        [adjusted] = adjust_preseason_for_camp([game], seeds)
        [perf] = adjusted.player_performances
        assert perf.player_id == "p0"
        assert perf.snaps == 24
        assert perf.score == 80.0
        assert perf.grade == "B"


class TestFinalCuts:
    def test_partition(self) -> None:
        """Priorities partition the roster into must-keep, bubble, and cut candidates."""
        league = _mini_league()
        battles = [
            PositionBattle(
                battle_id="battle-1",
                position="WR",
                competitors=[
                    PositionBattleCompetitor(player_id="winner", player_name="W",
                                             current_score=90.0),
                ],
                winner="winner",
                status="decided",
            )
        ]
        evaluations = [
            _evaluation("lock", "lock", 88.0),
            _evaluation("winner", "bubble", 76.0),
            _evaluation("cut", "cut_candidate", 50.0),
            _evaluation("guaranteed", "cut_candidate", 55.0),
        ]
        plan = preseason_to_final_cuts_input(evaluations, battles, league)
        assert plan.priorities == {
            "lock": 20,
            "winner": 40,
            "cut": 80,
            "guaranteed": 60,
            "noeval": 50,
        }
        assert plan.must_keep == ["lock"]
        assert plan.bubble == ["winner"]
        assert [c.player_id for c in plan.cut_candidates] == ["cut", "guaranteed", "noeval"]
        by_id = {c.player_id: c for c in plan.cut_candidates}
        assert by_id["cut"].recommendation == "cut"
        assert by_id["noeval"].recommendation == "practice_squad"
        assert by_id["guaranteed"].guaranteed == 600
        assert plan.practice_squad_candidates == ["noeval"]

    def test_lock_without_battle_win_is_must_keep(self) -> None:
        """A lock projection alone is enough to be kept."""
        plan = preseason_to_final_cuts_input([_evaluation("lock", "lock", 90.0)], [],
                                             _mini_league())
        assert "lock" in plan.must_keep

    def test_small_bonus_is_not_protected(self) -> None:
        """A bonus at or under the threshold earns no guarantee adjustment."""
        plan = preseason_to_final_cuts_input(
            [_evaluation("guaranteed", "cut_candidate", 55.0)], [], _mini_league(),
            guarantee_threshold=600,
        )
        assert plan.priorities["guaranteed"] == 80


class TestAggregates:
    def test_roster_needs(self, league: LeagueState) -> None:
        """A 55-man roster is two over a 53-man limit."""
        needs = calculate_roster_needs(league)
        assert needs.over_by == 2
        assert needs.need_to_cut == 2
        assert needs.position_breakdown["QB"].ideal == 3

    def test_data_flow_status(self) -> None:
        """An empty store has no data flow."""
        summary = summarize_phase_data_flow(create_empty_offseason_data())
        assert summary.status == "none"
        assert summary.ota_reports == 0
