"""
Target Tables

Fixed per-round targets for the practice variants, and the target
sets shared by Cricket and Tic-Tac-Toe.
"""

from dataclasses import dataclass
from typing import Optional

from scoring.darts import BULLSEYE, DOUBLE, SINGLE, TRIPLE, Dart

ANY_VALUE = -1


@dataclass(frozen=True)
class Target:
    """
    The legal target for one round.

    Attributes:
        value: Number to hit, or ANY_VALUE for "any double"/"any triple"
        multipliers: Multipliers that count as a hit
        score: Fixed score awarded for a hit (None scores the dart itself)
        values: Per-dart numbers for rounds where each dart has its own target
    """

    value: int
    multipliers: tuple[int, ...]
    score: Optional[int] = None
    values: tuple[int, ...] = ()

    def is_hit(self, dart: Dart, index: int = 0) -> bool:
        """Check whether the dart at position `index` (0-2) hits this target."""
        if dart.is_miss() or dart.multiplier not in self.multipliers:
            return False
        if self.values:
            return dart.value == self.values[index]
        return self.value == ANY_VALUE or dart.value == self.value

    def score_dart(self, dart: Dart, index: int = 0) -> int:
        """Points the dart earns against this target."""
        if not self.is_hit(dart, index):
            return 0
        if self.score is not None:
            return self.score
        return dart.score()


ALL = (SINGLE, DOUBLE, TRIPLE)

BERMUDA_TRIANGLE_TARGETS: tuple[Target, ...] = (
    Target(12, ALL),
    Target(13, ALL),
    Target(14, ALL),
    Target(ANY_VALUE, (DOUBLE,)),
    Target(15, ALL),
    Target(16, ALL),
    Target(17, ALL),
    Target(ANY_VALUE, (TRIPLE,)),
    Target(18, ALL),
    Target(19, ALL),
    Target(20, ALL),
    Target(BULLSEYE, (SINGLE, DOUBLE), score=25),
    Target(BULLSEYE, (DOUBLE,)),
)

FOUR_TWENTY_TARGETS: tuple[Target, ...] = tuple(
    Target(value, (DOUBLE,))
    for value in (1, 18, 4, 13, 6, 10, 15, 2, 17, 3, 19, 7, 16, 8, 11, 14, 9, 12, 5, 20, BULLSEYE)
)

JDC_PRACTICE_TARGETS: tuple[Target, ...] = (
    *(Target(value, ALL) for value in range(10, 16)),
    Target(ANY_VALUE, (DOUBLE,), values=(1, 2, 3)),
    Target(ANY_VALUE, (DOUBLE,), values=(4, 5, 6)),
    Target(ANY_VALUE, (DOUBLE,), values=(7, 8, 9)),
    Target(ANY_VALUE, (DOUBLE,), values=(10, 11, 12)),
    Target(ANY_VALUE, (DOUBLE,), values=(13, 14, 15)),
    Target(ANY_VALUE, (DOUBLE,), values=(16, 17, 18)),
    Target(ANY_VALUE, (DOUBLE,), values=(19, 20, BULLSEYE)),
    *(Target(value, ALL) for value in range(15, 21)),
)

CRICKET_NUMBERS: tuple[int, ...] = (15, 16, 17, 18, 19, 20, BULLSEYE)

SCAM_NUMBERS: tuple[int, ...] = tuple(range(1, 21))

# Indexes into the 3x3 Tic-Tac-Toe grid
TIC_TAC_TOE_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)
