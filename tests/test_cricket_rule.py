from __future__ import annotations

import pytest

from rules.context import LegRecord
from rules.cricket import CricketRule
from scoring.darts import BULLSEYE, DOUBLE, TRIPLE
from scoring.match_types import MatchType


def cricket_leg(*visits) -> LegRecord:
    return LegRecord(match_type=MatchType.CRICKET, starting_score=0, players=[1, 2], visits=list(visits))


def test_marks_beyond_closing_score_for_open_opponents(make_visit) -> None:
    record = cricket_leg(
        make_visit(1, 1, (20, TRIPLE), (20, TRIPLE), (20, TRIPLE)),
        make_visit(1, 2, (20, TRIPLE), 19, 19),
    )

    result = CricketRule().replay(record)

    assert result.states[1].current_score == 0
    assert result.states[2].current_score == 120
    assert result.statistics[1].total_marks == 9
    assert result.statistics[1].marks9 == 1
    assert result.statistics[2].total_marks == 5
    assert result.statistics[2].marks5 == 1


def test_closing_a_number_closed_by_everyone_only_counts_needed_marks(make_visit) -> None:
    record = cricket_leg(
        make_visit(1, 1, (20, TRIPLE)),
        make_visit(1, 2, (20, TRIPLE), (20, TRIPLE)),
    )

    result = CricketRule().replay(record)

    assert result.statistics[2].total_marks == 3
    assert result.states[1].current_score == 0


def test_misses_outside_cricket_numbers(make_visit) -> None:
    record = cricket_leg(make_visit(1, 1, 14, 1, 0))

    result = CricketRule().replay(record)

    assert result.statistics[1].total_marks == 0


def test_mpr_and_first_nine(make_visit) -> None:
    record = cricket_leg(
        make_visit(1, 1, (20, TRIPLE), (19, TRIPLE)),
        make_visit(1, 2, 0, 0, 0),
        make_visit(1, 1, (18, TRIPLE)),
        make_visit(1, 2, 0, 0, 0),
    )

    stats = CricketRule().calculate(record)

    assert stats[0].rounds == 2
    assert stats[0].total_marks == 9
    assert stats[0].mpr == pytest.approx(4.5)
    assert stats[0].first_nine_mpr == pytest.approx(3.0)


def test_leg_finishes_when_all_closed_and_not_behind(make_visit) -> None:
    rule = CricketRule()
    visits = [
        make_visit(1, 1, (15, TRIPLE), (16, TRIPLE), (17, TRIPLE)),
        make_visit(1, 2, 0, 0, 0),
        make_visit(1, 1, (18, TRIPLE), (19, TRIPLE), (20, TRIPLE)),
        make_visit(1, 2, 0, 0, 0),
    ]
    before = rule.replay(cricket_leg(*visits))
    assert not rule.is_leg_finished(before, visits[-2])

    closing = make_visit(1, 1, (BULLSEYE, DOUBLE), BULLSEYE, 0)
    after = rule.replay(cricket_leg(*visits, closing))

    assert rule.is_leg_finished(after, closing)
    assert rule.winner(after, closing) == 1
