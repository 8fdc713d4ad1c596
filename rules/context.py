"""
Replay Context

The immutable input of a replay (LegRecord) and the transient state a
replay builds up (PlayerLegState, ReplayResult). Player collections are
kept in throwing order so that every iteration over players, including
multi-player reset detection, is deterministic.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Any, Generic, Iterable, Optional, TypeVar

from scoring.darts import DOUBLE, SINGLE, TRIPLE, Dart
from scoring.match_types import MatchType, OutshotType
from scoring.visit import Visit
from schemas.statistics import VariantStatistics


class HitsMap:
    """Count of darts hit per (value, multiplier)."""

    def __init__(self) -> None:
        self._hits: Counter[tuple[int, int]] = Counter()

    def add(self, dart: Dart) -> None:
        if not dart.is_miss():
            self._hits[(dart.value, dart.multiplier)] += 1

    def get(self, value: int, multiplier: int) -> int:
        return self._hits[(value, multiplier)]

    def total(self, value: int) -> int:
        """Darts that landed on `value`, whatever the multiplier."""
        return sum(self.get(value, multiplier) for multiplier in (SINGLE, DOUBLE, TRIPLE))

    def contains_all(self, values: Iterable[int]) -> bool:
        """True if every value has been hit at least once."""
        return all(self.total(value) > 0 for value in values)

    def clear(self) -> None:
        self._hits.clear()

    def __len__(self) -> int:
        return sum(self._hits.values())


@dataclass
class LegRecord:
    """
    Everything a replay may depend on: the leg's starting score and
    parameters, its ordered players and its ordered visits.
    """

    match_type: MatchType
    starting_score: int
    players: list[int]
    visits: list[Visit] = field(default_factory=list)
    handicaps: dict[int, Optional[int]] = field(default_factory=dict)
    outshot_type: int = OutshotType.DOUBLE
    starting_lives: Optional[int] = None
    numbers: list[int] = field(default_factory=list)
    id: Optional[int] = None
    match_id: Optional[int] = None
    winner_id: Optional[int] = None
    is_finished: bool = False

    def with_visit(self, visit: Visit) -> LegRecord:
        """A copy of this record with `visit` appended."""
        return replace(self, visits=[*self.visits, visit])

    def without_last_visit(self) -> LegRecord:
        return replace(self, visits=self.visits[:-1])

    def before_visit(self, visit_id: int) -> LegRecord:
        """A copy of this record holding only the visits thrown before `visit_id`."""
        for index, visit in enumerate(self.visits):
            if visit.id == visit_id:
                return replace(self, visits=self.visits[:index])
        return replace(self, visits=list(self.visits))


@dataclass
class PlayerLegState:
    """Transient per-player state, rebuilt on every replay."""

    player_id: int
    order: int
    current_score: int = 0
    darts_thrown: int = 0
    handicap: Optional[int] = None
    lives: Optional[int] = None
    hits: HitsMap = field(default_factory=HitsMap)
    marks: dict[int, int] = field(default_factory=dict)
    current_streak: int = 0
    longest_streak: int = 0
    extra: dict[str, Any] = field(default_factory=dict)

    def end_streak(self) -> None:
        self.longest_streak = max(self.longest_streak, self.current_streak)
        self.current_streak = 0


S = TypeVar("S", bound=VariantStatistics)


@dataclass
class ReplayStep(Generic[S]):
    """One visit being applied during a replay."""

    index: int  # 0-based position in the leg
    round: int  # 1-based round number
    visit: Visit
    state: PlayerLegState
    statistics: S


@dataclass
class ReplayResult(Generic[S]):
    """States and statistics after replaying a leg."""

    leg: LegRecord
    states: dict[int, PlayerLegState]
    statistics: dict[int, S]
    rounds: int = 0
    extra: dict[str, Any] = field(default_factory=dict)

    def others(self, player_id: int) -> list[PlayerLegState]:
        """States of every other player, in throwing order."""
        return [state for pid, state in self.states.items() if pid != player_id]

    def ordered_statistics(self) -> list[S]:
        return list(self.statistics.values())
