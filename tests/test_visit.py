from __future__ import annotations

import pytest

from core.exceptions import ValidationError
from scoring.darts import DOUBLE, TRIPLE, Dart
from scoring.match_types import OutshotType
from scoring.visit import Visit


def test_validate_reports_first_bad_dart(make_visit) -> None:
    visit = make_visit(1, 1, 20, (20, 5), 30)

    with pytest.raises(ValidationError, match="multiplier"):
        visit.validate()


def test_set_is_bust_voids_darts_after_bust(make_visit) -> None:
    visit = make_visit(1, 1, (20, TRIPLE), (20, TRIPLE), 20)

    visit.set_is_bust(100)

    assert visit.is_bust
    assert visit.first_dart == Dart(20, TRIPLE)
    assert visit.second_dart == Dart(20, TRIPLE)
    assert not visit.third_dart.is_thrown()
    assert visit.score() == 0


def test_set_is_bust_voids_darts_after_checkout(make_visit) -> None:
    visit = make_visit(1, 1, (20, DOUBLE), 20, 20)

    visit.set_is_bust(40)

    assert not visit.is_bust
    assert visit.count_darts_thrown() == 1
    assert visit.score() == 40
    assert visit.last_dart() == Dart(20, DOUBLE)


def test_set_is_bust_fills_unthrown_darts_before_finish(make_visit) -> None:
    visit = make_visit(1, 1, None, (20, DOUBLE))

    visit.set_is_bust(40)

    assert visit.first_dart == Dart(0)
    assert visit.count_darts_thrown() == 2


def test_walk_does_not_mutate(make_visit) -> None:
    visit = make_visit(1, 1, 20, (10, DOUBLE), 5)

    outcome = visit.walk(40, OutshotType.DOUBLE)

    assert outcome.is_checkout
    assert outcome.remaining == 0
    assert len(outcome.darts) == 2
    assert visit.third_dart == Dart(5)


def test_set_is_bust_above(make_visit) -> None:
    visit = make_visit(1, 1, 10, 20, 20)

    visit.set_is_bust_above(180, 200)

    assert visit.is_bust
    assert not visit.third_dart.is_thrown()


def test_set_is_bust_above_stops_on_target(make_visit) -> None:
    visit = make_visit(1, 1, 10, 10, 20)

    visit.set_is_bust_above(180, 200)

    assert not visit.is_bust
    assert visit.count_darts_thrown() == 2


def test_is_shanghai(make_visit) -> None:
    assert make_visit(1, 1, 5, (5, DOUBLE), (5, TRIPLE)).is_shanghai()
    assert make_visit(1, 1, (5, TRIPLE), 5, (5, DOUBLE)).is_shanghai()
    assert not make_visit(1, 1, 5, (5, DOUBLE), (6, TRIPLE)).is_shanghai()


def test_as_string() -> None:
    visit = Visit(leg_id=1, player_id=1, first_dart=Dart(20, TRIPLE), second_dart=Dart(0))

    assert visit.as_string() == "3-20, 1-0, 1-NULL"
