from __future__ import annotations

import pytest

from core.exceptions import ValidationError
from scoring.darts import DOUBLE, SINGLE, TRIPLE, Dart
from scoring.match_types import MatchType, OutshotType


def test_validate_rejects_out_of_range_values() -> None:
    with pytest.raises(ValidationError, match="less than 0"):
        Dart(-1).validate()
    with pytest.raises(ValidationError, match="less than 21"):
        Dart(21).validate()
    with pytest.raises(ValidationError, match="less than 21"):
        Dart(26).validate()


def test_validate_rejects_unknown_multiplier() -> None:
    with pytest.raises(ValidationError, match="multiplier"):
        Dart(20, 4).validate()


def test_validate_normalizes_miss_multiplier() -> None:
    dart = Dart(0, TRIPLE)
    dart.validate()

    assert dart.multiplier == SINGLE
    assert dart.score() == 0


def test_unthrown_dart_is_distinct_from_miss() -> None:
    unthrown = Dart()
    miss = Dart(0)

    assert not unthrown.is_thrown()
    assert miss.is_thrown()
    assert unthrown.is_miss() and miss.is_miss()
    assert unthrown.as_string() == "1-NULL"
    assert miss.as_string() == "1-0"


def test_score_and_predicates() -> None:
    dart = Dart(20, TRIPLE)

    assert dart.score() == 60
    assert dart.is_triple()
    assert not dart.is_bull()
    assert Dart(25, DOUBLE).score() == 50
    assert Dart(25).is_bull()


def test_cricket_miss() -> None:
    assert Dart(14).is_cricket_miss()
    assert not Dart(15).is_cricket_miss()
    assert not Dart(25, DOUBLE).is_cricket_miss()
    assert Dart().is_cricket_miss()


@pytest.mark.parametrize(
    ("dart", "score", "outshot", "expected"),
    [
        (Dart(20, DOUBLE), 40, OutshotType.DOUBLE, True),
        (Dart(20, SINGLE), 20, OutshotType.DOUBLE, False),
        (Dart(20, TRIPLE), 60, OutshotType.MASTER, True),
        (Dart(20, SINGLE), 20, OutshotType.MASTER, False),
        (Dart(20, SINGLE), 20, OutshotType.ANY, True),
        (Dart(25, DOUBLE), 50, OutshotType.DOUBLE, True),
    ],
)
def test_is_checkout(dart: Dart, score: int, outshot: int, expected: bool) -> None:
    assert dart.is_checkout(score, outshot) is expected


def test_is_bust_on_overshoot_and_one_left() -> None:
    assert Dart(20).is_bust(19)
    assert Dart(20).is_bust(21)
    assert not Dart(20).is_bust(22)


def test_is_bust_on_single_finish_in_double_out() -> None:
    assert Dart(20).is_bust(20, OutshotType.DOUBLE)
    assert not Dart(20).is_bust(20, OutshotType.ANY)


def test_is_bust_any_outshot_only_busts_below_zero() -> None:
    assert not Dart(20).is_bust(21, OutshotType.ANY)
    assert Dart(20).is_bust(19, OutshotType.ANY)


def test_is_bust_turns_unthrown_dart_into_miss() -> None:
    dart = Dart()

    assert not dart.is_bust(100)
    assert dart.value == 0


def test_is_bust_above_target() -> None:
    assert Dart(20).is_bust_above(190, 200)
    assert not Dart(10).is_bust_above(190, 200)


def test_is_checkout_attempt() -> None:
    assert Dart(0).is_checkout_attempt(40, 1)
    assert Dart(0).is_checkout_attempt(50, 1)
    assert not Dart(0).is_checkout_attempt(41, 1)
    assert not Dart().is_checkout_attempt(40, 1)
    assert Dart(0).is_checkout_attempt(57, 1, OutshotType.MASTER)
    assert Dart(0).is_checkout_attempt(60, 1, OutshotType.ANY)


def test_match_type_names() -> None:
    assert MatchType.FOURTWENTY.display_name == "420"
    assert MatchType.X01HANDICAP.is_x01
    assert not MatchType.SHOOTOUT.is_x01
