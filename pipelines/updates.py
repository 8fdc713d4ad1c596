"""
Pending Updates

A recalculated statistics row waiting to be written. Dry runs render
it, applied runs hand it to the repository.
"""

from dataclasses import dataclass, field
from typing import Any

from schemas.statistics import VariantStatistics


@dataclass(frozen=True)
class PendingUpdate:
    """
    Rewrite of one player's statistics row of one leg.

    Attributes:
        table: Statistics table name (e.g., "statistics_x01")
        leg_id: Leg the row belongs to
        player_id: Player the row belongs to
        values: Column -> value map, in column declaration order
    """

    table: str
    leg_id: int
    player_id: int
    values: dict[str, Any] = field(hash=False)

    @classmethod
    def from_statistics(cls, table: str, leg_id: int, statistics: VariantStatistics) -> "PendingUpdate":
        return cls(table, leg_id, statistics.player_id, statistics.column_values())

    def statement(self, repository) -> tuple[str, list]:
        """Parameterized SQL and its parameters."""
        return repository.statistics_update(self.table, self.leg_id, self.player_id, self.values).sql()

    def render(self, repository) -> str:
        """The statement as logged by dry runs. Identical input renders identically."""
        sql, params = self.statement(repository)
        return f"{sql} -- {params!r}"

    def apply(self, repository) -> int:
        return repository.update_statistics(self.table, self.leg_id, self.player_id, self.values)

    def __repr__(self) -> str:
        return f"<PendingUpdate(table={self.table}, leg={self.leg_id}, player={self.player_id})>"
