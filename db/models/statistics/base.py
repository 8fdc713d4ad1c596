"""
Statistics Base Model

Every variant stores one row per player per leg. Rows are derived
from the leg's visits and are deleted and rewritten wholesale.
"""

from peewee import ForeignKeyField

from db.base import BaseModel
from db.models.legs import Leg
from db.models.players import Player


class StatisticsModel(BaseModel):
    """Shared (leg, player) key of every statistics table."""

    leg = ForeignKeyField(Leg, on_delete="CASCADE", column_name="leg_id")
    player = ForeignKeyField(Player, on_delete="CASCADE", column_name="player_id")

    class Meta:
        indexes = (
            # One row per player per leg
            (("leg", "player"), True),
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(leg={self.leg_id}, player={self.player_id})>"
