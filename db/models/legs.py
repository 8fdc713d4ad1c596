"""
Leg Tables

A leg is one game within a match. Player order lives in `player2leg`,
variant parameters (outshot policy, lives, Tic-Tac-Toe grid) in
`leg_parameters`.
"""

import json
from datetime import datetime
from typing import Optional

from peewee import (
    AutoField,
    BooleanField,
    DateTimeField,
    ForeignKeyField,
    IntegerField,
    SmallIntegerField,
    TextField,
)

from db.base import BaseModel
from db.models.matches import Match
from db.models.players import Player


class Leg(BaseModel):
    """
    One leg of a match.

    Attributes:
        id: Auto-incrementing primary key
        match: Owning match
        leg_type: Variant override for this leg (None uses the match type)
        starting_score: Starting score, or the target number for Darts at X
        current_player: Player whose turn is next
        winner: Winning player once finished
        is_finished: Set by finish leg, cleared by undo
    """

    id = AutoField(primary_key=True)
    match = ForeignKeyField(
        Match,
        backref="legs",
        on_delete="CASCADE",
        column_name="match_id",
    )
    leg_type = SmallIntegerField(column_name="leg_type_id", null=True)
    starting_score = IntegerField()
    current_player = ForeignKeyField(
        Player,
        backref="+",
        column_name="current_player_id",
        null=True,
    )
    winner = ForeignKeyField(
        Player,
        backref="legs_won",
        on_delete="SET NULL",
        column_name="winner_id",
        null=True,
    )
    is_finished = BooleanField(default=False)
    created_at = DateTimeField(default=datetime.utcnow)
    updated_at = DateTimeField(default=datetime.utcnow)
    end_time = DateTimeField(null=True)

    class Meta:
        table_name = "leg"
        indexes = (
            (("match", "is_finished"), False),
        )

    def __repr__(self) -> str:
        return (
            f"<Leg(id={self.id}, match={self.match_id}, "
            f"finished={self.is_finished}, winner={self.winner_id})>"
        )

    def save(self, *args, **kwargs):
        """Override save to auto-update updated_at timestamp."""
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)


class LegParameters(BaseModel):
    """
    Variant parameters for a leg.

    Attributes:
        leg: Owning leg (one row per leg)
        outshot_type: 1 = double, 2 = master, 3 = any
        starting_lives: Lives per player in Knockout
        numbers: JSON list of the nine Tic-Tac-Toe grid numbers
        hits: JSON object mapping a claimed Tic-Tac-Toe number to a player id
    """

    leg = ForeignKeyField(
        Leg,
        backref="parameters",
        on_delete="CASCADE",
        column_name="leg_id",
        unique=True,
    )
    outshot_type = SmallIntegerField(default=1, column_name="outshot_type_id")
    starting_lives = SmallIntegerField(null=True)
    numbers = TextField(null=True)  # JSON string
    hits = TextField(null=True)  # JSON string

    class Meta:
        table_name = "leg_parameters"

    def get_numbers(self) -> list[int]:
        return json.loads(self.numbers) if self.numbers else []

    def get_hits(self) -> dict[int, int]:
        if not self.hits:
            return {}
        return {int(number): player_id for number, player_id in json.loads(self.hits).items()}

    def set_hits(self, hits: dict[int, int]) -> None:
        self.hits = json.dumps({str(number): player_id for number, player_id in sorted(hits.items())})


class Player2Leg(BaseModel):
    """
    A player's seat in a leg.

    Attributes:
        leg: The leg
        player: The player
        order: Throwing order, 1-based
        handicap: Extra starting score for X01 Handicap (optional)
    """

    leg = ForeignKeyField(
        Leg,
        backref="players",
        on_delete="CASCADE",
        column_name="leg_id",
    )
    player = ForeignKeyField(
        Player,
        backref="legs",
        on_delete="CASCADE",
        column_name="player_id",
    )
    order = SmallIntegerField()
    handicap = IntegerField(null=True)

    class Meta:
        table_name = "player2leg"
        indexes = (
            # One seat per player per leg
            (("leg", "player"), True),
        )

    def __repr__(self) -> str:
        return f"<Player2Leg(leg={self.leg_id}, player={self.player_id}, order={self.order})>"

    @classmethod
    def get_handicap(cls, leg_id: int, player_id: int) -> Optional[int]:
        row = cls.get_or_none((cls.leg == leg_id) & (cls.player == player_id))
        return row.handicap if row else None
