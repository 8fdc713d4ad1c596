"""
Dart

A single thrown dart. `value` is None when the dart was never thrown
(voided by an earlier bust or checkout in the same visit) and 0 when it
was thrown and missed the board. The two must never be conflated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.exceptions import ValidationError
from scoring.match_types import OutshotType

SINGLE = 1
DOUBLE = 2
TRIPLE = 3

BULLSEYE = 25


@dataclass
class Dart:
    """A target value (0 = miss, 1-20, 25 = bull) and a multiplier."""

    value: Optional[int] = None
    multiplier: int = SINGLE

    def validate(self) -> None:
        """
        Validate the dart and normalize the multiplier of a miss.

        Raises:
            ValidationError: If value or multiplier is out of range
        """
        if self.value is not None:
            if self.value < 0:
                raise ValidationError("value cannot be less than 0")
            if self.value > BULLSEYE or 20 < self.value < BULLSEYE:
                raise ValidationError("value has to be less than 21 (or 25 (bull))")
        if self.multiplier not in (SINGLE, DOUBLE, TRIPLE):
            raise ValidationError(
                "multiplier has to be one of 1 (single), 2 (double), 3 (triple)"
            )
        if self.is_miss():
            self.multiplier = SINGLE

    def score(self) -> int:
        """Value times multiplier. A dart not thrown scores 0."""
        return self.value_raw() * self.multiplier

    def value_raw(self) -> int:
        return self.value if self.value is not None else 0

    def is_thrown(self) -> bool:
        return self.value is not None

    def is_single(self) -> bool:
        return self.multiplier == SINGLE

    def is_double(self) -> bool:
        return self.multiplier == DOUBLE

    def is_triple(self) -> bool:
        return self.multiplier == TRIPLE

    def is_bull(self) -> bool:
        return self.value == BULLSEYE

    def is_miss(self) -> bool:
        return self.value is None or self.value == 0

    def is_cricket_miss(self) -> bool:
        """True if the dart did not land on 15-20 or bull."""
        value = self.value_raw()
        return not (15 <= value <= 20 or value == BULLSEYE)

    def is_checkout(self, current_score: int, outshot: int = OutshotType.DOUBLE) -> bool:
        """
        True if this dart takes `current_score` exactly to zero with
        a dart the outshot policy accepts as a finish.
        """
        if self.value is None or current_score - self.score() != 0:
            return False
        if outshot == OutshotType.ANY:
            return True
        if outshot == OutshotType.MASTER:
            return self.is_double() or self.is_triple()
        return self.is_double()

    def is_bust(self, current_score: int, outshot: int = OutshotType.DOUBLE) -> bool:
        """
        Check if throwing this dart at `current_score` is a bust.

        A dart that does not bust and was never thrown is normalized
        to an explicit miss, since the player had it available.

        Args:
            current_score: Remaining score before this dart
            outshot: Outshot policy of the leg

        Returns:
            True if the dart busts the visit
        """
        remaining = current_score - self.score()
        if outshot == OutshotType.ANY:
            bust = remaining < 0
        elif remaining == 0 and self.is_checkout(current_score, outshot):
            bust = False
        else:
            bust = remaining < 2

        if not bust and self.value is None:
            self.value = 0
        return bust

    def is_bust_above(self, current_score: int, target: int) -> bool:
        """Bust check for games counting up to a fixed target (Gotcha)."""
        bust = current_score + self.score() > target
        if not bust and self.value is None:
            self.value = 0
        return bust

    def is_checkout_attempt(
        self,
        current_score: int,
        dart_index: int,
        outshot: int = OutshotType.DOUBLE,
    ) -> bool:
        """
        Check if this dart was thrown at a finish.

        Only used for checkout attempt counting, never for bust detection.

        Args:
            current_score: Remaining score before this dart
            dart_index: Position of the dart in the visit (1-3)
            outshot: Outshot policy of the leg

        Returns:
            True if the remaining score could be finished with one dart
        """
        if self.value is None:
            return False
        if self.is_checkout(current_score, outshot):
            return True
        if outshot == OutshotType.ANY:
            return current_score <= 60
        on_double = current_score == 50 or (current_score <= 40 and current_score % 2 == 0)
        if outshot == OutshotType.MASTER:
            return on_double or (current_score <= 60 and current_score % 3 == 0)
        return on_double

    def as_string(self) -> str:
        """Format as "<multiplier>-<value>", e.g. "3-20" or "1-NULL"."""
        if self.value is None:
            return f"{self.multiplier}-NULL"
        return f"{self.multiplier}-{self.value}"

    def void(self) -> None:
        """Mark the dart as not thrown."""
        self.value = None
        self.multiplier = SINGLE

    def copy(self) -> Dart:
        return Dart(self.value, self.multiplier)
