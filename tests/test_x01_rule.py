from __future__ import annotations

import pytest

from core.exceptions import ConsistencyError
from rules import get_rule, list_rules
from rules.context import LegRecord
from rules.x01 import ShootoutRule, X01Rule
from scoring.darts import DOUBLE, TRIPLE
from scoring.match_types import MatchType


def test_get_rule_shares_x01_between_variants() -> None:
    assert isinstance(get_rule(MatchType.X01), X01Rule)
    assert isinstance(get_rule(MatchType.X01HANDICAP), X01Rule)
    assert isinstance(get_rule(2), ShootoutRule)


def test_get_rule_unknown_type() -> None:
    with pytest.raises(KeyError, match="Unknown match type '99'"):
        get_rule(99)


def test_list_rules_names_every_table() -> None:
    rules = {info["name"]: info for info in list_rules()}

    assert len(rules) == 15
    assert rules["x01"]["match_types"] == [1, 3]
    assert rules["x01"]["table"] == "statistics_x01"


def checkout_301(make_visit) -> LegRecord:
    visits = [
        make_visit(1, 7, 20, 20, 20),
        make_visit(1, 7, 20, 20, 20),
        make_visit(1, 7, 20, 20, 20),
        make_visit(1, 7, 20, 20, 20),
        make_visit(1, 7, 0, 1, 20),
        make_visit(1, 7, 0, 0, (20, DOUBLE)),
    ]
    return LegRecord(match_type=MatchType.X01, starting_score=301, players=[7], visits=visits, id=1)


def test_x01_checkout_statistics(make_visit) -> None:
    [stats] = X01Rule().calculate(checkout_301(make_visit))

    assert stats.darts_thrown == 18
    assert stats.ppd_score == 301
    assert stats.ppd == pytest.approx(301 / 18)
    assert stats.three_dart_avg == pytest.approx(301 / 6)
    assert stats.first_nine_ppd_score == 180
    assert stats.first_nine_ppd == pytest.approx(20.0)
    assert stats.checkout == 40
    assert stats.checkout_attempts == 3
    assert stats.checkout_percentage == pytest.approx(100 / 3)
    assert stats.score_60s_plus == 4
    assert stats.accuracy_20 == pytest.approx(100.0)
    assert stats.accuracy_19 is None


def test_x01_checkout_with_first_dart_counts_one_dart(make_visit) -> None:
    record = LegRecord(
        match_type=MatchType.X01,
        starting_score=40,
        players=[7],
        visits=[make_visit(1, 7, (20, DOUBLE), 20, 20)],
    )

    result = X01Rule().replay(record)

    assert result.states[7].current_score == 0
    assert result.statistics[7].darts_thrown == 1


def test_x01_bust_is_recomputed_from_darts(make_visit) -> None:
    # Stored flag says no bust, the darts say otherwise
    bust = make_visit(1, 7, (20, TRIPLE), (20, TRIPLE), 20)
    record = LegRecord(match_type=MatchType.X01, starting_score=100, players=[7], visits=[bust])

    result = X01Rule().replay(record)

    assert result.states[7].current_score == 100
    assert result.statistics[7].ppd_score == 0
    assert result.statistics[7].darts_thrown == 2


@pytest.mark.parametrize("later", [None, 20])
def test_x01_bust_ignores_voided_darts(make_visit, later) -> None:
    record = LegRecord(
        match_type=MatchType.X01,
        starting_score=50,
        players=[7],
        visits=[make_visit(1, 7, (20, TRIPLE), later, later)],
    )

    stats = X01Rule().calculate(record)[0]

    assert stats.darts_thrown == 1
    assert stats.ppd_score == 0


def test_x01_first_nine_covers_darts_after_a_short_bust(make_visit) -> None:
    # One dart bust, then nine single 1s: darts 2 to 9 are the first nine
    visits = [make_visit(1, 7, (20, TRIPLE), None, None)] + [make_visit(1, 7, 1, 1, 1) for _ in range(3)]
    record = LegRecord(match_type=MatchType.X01, starting_score=61, players=[7], visits=visits)

    stats = X01Rule().calculate(record)[0]

    assert stats.darts_thrown == 10
    assert stats.first_nine_ppd_score == 8
    assert stats.ppd_score == 9


def test_x01_handicap_adds_to_starting_score(make_visit) -> None:
    record = LegRecord(
        match_type=MatchType.X01HANDICAP,
        starting_score=301,
        players=[7, 8],
        handicaps={7: None, 8: 100},
    )

    scores = X01Rule().current_scores(X01Rule().replay(record))

    assert scores == {7: 301, 8: 401}


def test_x01_verify_finish_rejects_non_checkout(make_visit) -> None:
    rule = X01Rule()
    visit = make_visit(1, 7, 20, 20, 20)
    record = LegRecord(match_type=MatchType.X01, starting_score=301, players=[7])

    after = rule.replay(record.with_visit(visit))

    assert not rule.is_leg_finished(after, visit)
    with pytest.raises(ConsistencyError, match="does not check out"):
        rule.verify_finish(after, visit)


def test_x01_prepare_visit_flags_bust(make_visit) -> None:
    rule = X01Rule()
    record = LegRecord(match_type=MatchType.X01, starting_score=50, players=[7])
    visit = make_visit(1, 7, (20, TRIPLE), 20, 20)

    rule.prepare_visit(rule.replay(record), visit)

    assert visit.is_bust
    assert visit.count_darts_thrown() == 1


def test_shootout_finishes_after_three_rounds(make_visit) -> None:
    rule = ShootoutRule()
    visits = [make_visit(1, pid, 20, 20, 20) for _ in range(3) for pid in (1, 2, 3)]
    visits[-1] = make_visit(1, 3, (20, TRIPLE), (20, TRIPLE), (20, TRIPLE))
    record = LegRecord(match_type=MatchType.SHOOTOUT, starting_score=0, players=[1, 2, 3], visits=visits)

    after = rule.replay(record)

    assert rule.is_leg_finished(after, visits[-1])
    assert rule.winner(after, visits[-1]) == 3
    assert after.statistics[3].score == 300
    assert after.statistics[3].score_180s == 1
    assert after.statistics[1].ppd == pytest.approx(20.0)


def test_shootout_heads_up_continues_on_tie(make_visit) -> None:
    rule = ShootoutRule()
    visits = [make_visit(1, pid, 20, 20, 20) for _ in range(3) for pid in (1, 2)]
    record = LegRecord(match_type=MatchType.SHOOTOUT, starting_score=0, players=[1, 2], visits=visits)

    assert not rule.is_leg_finished(rule.replay(record), visits[-1])

    extra = [make_visit(1, 1, 20), make_visit(1, 2, 19)]
    after = rule.replay(LegRecord(
        match_type=MatchType.SHOOTOUT, starting_score=0, players=[1, 2], visits=visits + extra,
    ))

    assert rule.is_leg_finished(after, extra[-1])
    assert rule.winner(after, extra[-1]) == 1
