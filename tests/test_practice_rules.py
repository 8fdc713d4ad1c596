from __future__ import annotations

import pytest

from rules.around_the_clock import AroundTheClockRule
from rules.around_the_world import AroundTheWorldRule, ShanghaiRule
from rules.bermuda_triangle import BermudaTriangleRule
from rules.context import LegRecord
from rules.darts_at_x import DartsAtXRule
from rules.four_twenty import FourTwentyRule
from rules.jdc_practice import JDCPracticeRule
from rules.kill_bull import KillBullRule
from scoring.darts import BULLSEYE, DOUBLE, TRIPLE
from scoring.match_types import MatchType


def leg(match_type: MatchType, visits, players=(1,), starting_score: int = 0) -> LegRecord:
    return LegRecord(match_type=match_type, starting_score=starting_score, players=list(players), visits=list(visits))


# ------------------------------- Around the Clock ------------------------------- #

def test_around_the_clock_hit_rates_and_streak(make_visit) -> None:
    record = leg(MatchType.AROUNDTHECLOCK, [
        make_visit(1, 1, 1, 2, 3),
        make_visit(1, 1, 4, 0, 5),
    ])

    [stats] = AroundTheClockRule().calculate(record)

    assert stats.score == 5
    assert stats.darts_thrown == 6
    assert stats.hit_rate_1 == pytest.approx(1.0)
    assert stats.hit_rate_5 == pytest.approx(0.5)
    assert stats.hit_rate_6 == 0.0
    assert stats.longest_streak == 4
    assert stats.total_hit_rate == pytest.approx(4.5 / 21)


def test_around_the_clock_skips_unthrown_darts(make_visit) -> None:
    record = leg(MatchType.AROUNDTHECLOCK, [make_visit(1, 1, 1)])

    [stats] = AroundTheClockRule().calculate(record)

    assert stats.darts_thrown == 1
    assert stats.score == 1


def test_around_the_clock_finishes_on_bull(make_visit) -> None:
    rule = AroundTheClockRule()
    visits = [make_visit(1, 1, start, start + 1, start + 2) for start in range(1, 19, 3)]
    visits.append(make_visit(1, 1, 19, 20, BULLSEYE))

    after = rule.replay(leg(MatchType.AROUNDTHECLOCK, visits))

    assert after.states[1].current_score == 21
    assert rule.is_leg_finished(after, visits[-1])


# ------------------------------- Around the World / Shanghai ------------------------------- #

def test_around_the_world_ends_after_bull_round(make_visit) -> None:
    rule = AroundTheWorldRule()
    visits = [make_visit(1, 1, target, 0, 0) for target in range(1, 21)]

    after = rule.replay(leg(MatchType.AROUNDTHEWORLD, visits))
    assert not rule.is_leg_finished(after, visits[-1])

    visits.append(make_visit(1, 1, BULLSEYE, 0, 0))
    after = rule.replay(leg(MatchType.AROUNDTHEWORLD, visits))

    assert rule.is_leg_finished(after, visits[-1])
    assert after.statistics[1].score == 210 + 25
    assert after.statistics[1].hit_rate_bull == pytest.approx(1 / 3)
    assert after.statistics[1].shanghai is None


def test_shanghai_ends_leg_immediately(make_visit) -> None:
    rule = ShanghaiRule()
    shanghai = make_visit(1, 1, 1, (1, DOUBLE), (1, TRIPLE))

    after = rule.replay(leg(MatchType.SHANGHAI, [shanghai], players=(1, 2)))

    assert rule.is_leg_finished(after, shanghai)
    assert rule.winner(after, shanghai) == 1
    assert after.statistics[1].shanghai == 1
    assert after.statistics[1].score == 6


def test_shanghai_off_target_does_not_count(make_visit) -> None:
    rule = ShanghaiRule()
    visit = make_visit(1, 1, 2, (2, DOUBLE), (2, TRIPLE))

    after = rule.replay(leg(MatchType.SHANGHAI, [visit], players=(1, 2)))

    assert not rule.is_leg_finished(after, visit)
    assert after.statistics[1].score == 0


# ------------------------------- Darts at X ------------------------------- #

def test_darts_at_x_counts_multipliers(make_visit) -> None:
    record = leg(MatchType.DARTSATX, [make_visit(1, 1, (20, TRIPLE), (20, DOUBLE), 20)], starting_score=20)

    [stats] = DartsAtXRule().calculate(record)

    assert stats.score == 6
    assert (stats.singles, stats.doubles, stats.triples) == (1, 1, 1)
    assert stats.hits6 == 1
    assert stats.hit_rate == pytest.approx(3 / 99)


# ------------------------------- Bermuda Triangle ------------------------------- #

def test_bermuda_triangle_halves_on_empty_visit(make_visit) -> None:
    record = leg(MatchType.BERMUDATRIANGLE, [
        make_visit(1, 1, 12, (12, DOUBLE), 0),
        make_visit(1, 1, 0, 0, 0),
    ])

    [stats] = BermudaTriangleRule().calculate(record)

    assert stats.score == 18
    assert stats.highest_score_reached == 36
    assert stats.total_marks == 3
    assert stats.hit_rate_1 == pytest.approx(2 / 3)
    assert stats.hit_rate_2 == 0.0


# ------------------------------- 420 ------------------------------- #

def test_four_twenty_counts_down_and_lowest_wins(make_visit) -> None:
    rule = FourTwentyRule()
    record = leg(MatchType.FOURTWENTY, [
        make_visit(1, 1, (1, DOUBLE), 0, 0),
        make_visit(1, 2, 1, 0, 0),
    ], players=(1, 2))

    after = rule.replay(record)

    assert after.statistics[1].score == 418
    assert after.statistics[2].score == 420
    assert after.statistics[1].hit_rate_1 == pytest.approx(1 / 3)
    assert rule.lowest_score(after) == 1


# ------------------------------- JDC Practice ------------------------------- #

def test_jdc_practice_shanghai_and_doubles(make_visit) -> None:
    visits = [make_visit(1, 1, 10, (10, DOUBLE), (10, TRIPLE))]
    visits += [make_visit(1, 1, 0, 0, 0) for _ in range(5)]
    visits.append(make_visit(1, 1, (1, DOUBLE), (2, DOUBLE), 3))

    [stats] = JDCPracticeRule().calculate(leg(MatchType.JDCPRACTICE, visits))

    assert stats.shanghai_count == 1
    assert stats.score == 60 + 2 + 4
    assert stats.mpr == pytest.approx(6 / 12)
    assert stats.doubles_hitrate == pytest.approx(2 / 21)


# ------------------------------- Kill Bull ------------------------------- #

def test_kill_bull_resets_on_empty_visit(make_visit) -> None:
    rule = KillBullRule()
    visits = [
        make_visit(1, 1, BULLSEYE, (BULLSEYE, DOUBLE), 0),
        make_visit(1, 1, 0, 0, 0),
        make_visit(1, 1, (BULLSEYE, DOUBLE), (BULLSEYE, DOUBLE), (BULLSEYE, DOUBLE)),
    ]

    after = rule.replay(leg(MatchType.KILLBULL, visits, starting_score=100))
    stats = after.statistics[1]

    assert stats.times_busted == 1
    assert stats.marks3 == 1
    assert stats.marks6 == 1
    assert stats.score == 0
    assert stats.longest_streak == 1
    assert rule.is_leg_finished(after, visits[-1])
