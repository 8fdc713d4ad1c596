"""
Visit

One player's turn of up to three darts within a leg.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import NamedTuple, Optional

from scoring.darts import DOUBLE, SINGLE, TRIPLE, Dart
from scoring.match_types import OutshotType


class VisitOutcome(NamedTuple):
    """Result of walking a visit's darts against a remaining score."""

    darts: list[Dart]  # darts counted toward the turn, up to bust or checkout
    is_bust: bool
    is_checkout: bool
    remaining: int


@dataclass
class Visit:
    """
    A visit as recorded in the score ledger.

    `darts_thrown` is a read-side decoration set when a leg is loaded:
    the cumulative number of darts thrown by each player at the end of
    the round this visit belongs to.
    """

    leg_id: int
    player_id: int
    first_dart: Dart = field(default_factory=Dart)
    second_dart: Dart = field(default_factory=Dart)
    third_dart: Dart = field(default_factory=Dart)
    is_bust: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    darts_thrown: Optional[int] = None

    @property
    def darts(self) -> tuple[Dart, Dart, Dart]:
        return (self.first_dart, self.second_dart, self.third_dart)

    def validate(self) -> None:
        """Validate all three darts, raising ValidationError on the first bad one."""
        for dart in self.darts:
            dart.validate()

    def walk(self, current_score: int, outshot: int = OutshotType.DOUBLE) -> VisitOutcome:
        """
        Apply the darts in order against `current_score` without mutating them.

        Darts after a bust or a checkout are ignored, whatever value
        is stored for them.
        """
        remaining = current_score
        counted: list[Dart] = []
        for dart in self.darts:
            probe = dart.copy()
            counted.append(probe)
            if probe.is_bust(remaining, outshot):
                return VisitOutcome(counted, True, False, current_score)
            if probe.is_checkout(remaining, outshot):
                return VisitOutcome(counted, False, True, 0)
            remaining -= probe.score()
        return VisitOutcome(counted, False, False, remaining)

    def set_is_bust(self, current_score: int, outshot: int = OutshotType.DOUBLE) -> None:
        """
        Flag the visit as bust and void every dart after the bust or
        checkout point. Darts left unset before that point become misses.
        """
        outcome = self.walk(current_score, outshot)
        self.is_bust = outcome.is_bust
        self._apply(outcome.darts)

    def set_is_bust_above(self, current_score: int, target: int) -> None:
        """Same as set_is_bust, for games counting up to `target`."""
        self.is_bust = False
        counted: list[Dart] = []
        score = current_score
        for dart in self.darts:
            probe = dart.copy()
            counted.append(probe)
            if probe.is_bust_above(score, target):
                self.is_bust = True
                break
            score += probe.score()
            if score == target:
                break
        self._apply(counted)

    def _apply(self, counted: list[Dart]) -> None:
        for idx, dart in enumerate(self.darts):
            if idx < len(counted):
                dart.value = counted[idx].value
                dart.multiplier = counted[idx].multiplier
            else:
                dart.void()

    def score(self) -> int:
        """Sum of all counted darts. A bust visit scores nothing."""
        if self.is_bust:
            return 0
        return sum(dart.score() for dart in self.darts)

    def count_darts_thrown(self) -> int:
        """Number of darts actually thrown in this visit."""
        return sum(1 for dart in self.darts if dart.is_thrown())

    def last_dart(self) -> Dart:
        """The last dart thrown in this visit."""
        for dart in reversed(self.darts):
            if dart.is_thrown():
                return dart
        return self.first_dart

    def is_checkout(self, current_score: int, outshot: int = OutshotType.DOUBLE) -> bool:
        """True if the visit finishes `current_score` under the outshot policy."""
        return self.walk(current_score, outshot).is_checkout

    def is_shanghai(self) -> bool:
        """Single, double and triple of the same number in one visit."""
        hits = {(dart.value, dart.multiplier) for dart in self.darts if not dart.is_miss()}
        return any(
            (value, SINGLE) in hits and (value, DOUBLE) in hits and (value, TRIPLE) in hits
            for value, _ in hits
        )

    def as_string(self) -> str:
        return ", ".join(dart.as_string() for dart in self.darts)
