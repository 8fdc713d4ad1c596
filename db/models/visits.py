"""
Score Ledger

One row per visit. Rows are append-only and ordered by id, which is
the authoritative replay order of a leg. A dart column holding NULL
means the dart was never thrown; 0 means it was thrown and missed.
"""

from datetime import datetime

from peewee import (
    AutoField,
    BooleanField,
    DateTimeField,
    ForeignKeyField,
    SmallIntegerField,
)

from db.base import BaseModel
from db.models.legs import Leg
from db.models.players import Player


class Score(BaseModel):
    """A single visit of three darts."""

    id = AutoField(primary_key=True)
    leg = ForeignKeyField(
        Leg,
        backref="visits",
        on_delete="CASCADE",
        column_name="leg_id",
    )
    player = ForeignKeyField(
        Player,
        backref="visits",
        on_delete="CASCADE",
        column_name="player_id",
    )
    first_dart = SmallIntegerField(null=True)
    first_dart_multiplier = SmallIntegerField(default=1)
    second_dart = SmallIntegerField(null=True)
    second_dart_multiplier = SmallIntegerField(default=1)
    third_dart = SmallIntegerField(null=True)
    third_dart_multiplier = SmallIntegerField(default=1)
    is_bust = BooleanField(default=False)
    created_at = DateTimeField(default=datetime.utcnow)
    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "score"
        indexes = (
            (("leg", "id"), False),
        )

    def __repr__(self) -> str:
        return (
            f"<Score(id={self.id}, leg={self.leg_id}, player={self.player_id}, "
            f"darts=({self.first_dart_multiplier}-{self.first_dart}, "
            f"{self.second_dart_multiplier}-{self.second_dart}, "
            f"{self.third_dart_multiplier}-{self.third_dart}), bust={self.is_bust})>"
        )
