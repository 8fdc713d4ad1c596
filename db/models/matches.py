"""
Match Tables

A match groups the legs played between one set of players. The match
finishes when a player reaches `wins_required` leg wins, or as a draw
when `legs_required` legs have been played without a winner.
"""

from datetime import datetime

from peewee import (
    AutoField,
    BooleanField,
    CharField,
    DateTimeField,
    ForeignKeyField,
    IntegerField,
    SmallIntegerField,
)

from db.base import BaseModel
from db.models.players import Player


class OweType(BaseModel):
    """The stake of a match (e.g. "Beer"), owed by every loser to the winner."""

    id = AutoField(primary_key=True)
    item = CharField(max_length=100)

    class Meta:
        table_name = "owe_type"

    def __repr__(self) -> str:
        return f"<OweType(id={self.id}, item='{self.item}')>"


class Match(BaseModel):
    """
    A best-of-N legs match.

    Attributes:
        id: Auto-incrementing primary key
        match_type: Variant id (see scoring.match_types.MatchType)
        wins_required: Leg wins needed to take the match
        legs_required: Legs after which the match ends as a draw (optional)
        current_leg_id: Leg currently in play (plain id, legs reference matches)
        winner: Winning player, None while in progress or on a draw
        is_finished: Set once the match outcome is decided
        is_abandoned: Abandoned matches are excluded from recalculation
        owe_type: Stake owed by losers to the winner (optional)
    """

    id = AutoField(primary_key=True)
    match_type = SmallIntegerField(column_name="match_type_id")
    wins_required = SmallIntegerField()
    legs_required = SmallIntegerField(null=True)
    current_leg_id = IntegerField(null=True)
    winner = ForeignKeyField(
        Player,
        backref="matches_won",
        on_delete="SET NULL",
        column_name="winner_id",
        null=True,
    )
    is_finished = BooleanField(default=False)
    is_abandoned = BooleanField(default=False)
    owe_type = ForeignKeyField(
        OweType,
        backref="matches",
        on_delete="SET NULL",
        column_name="owe_type_id",
        null=True,
    )
    created_at = DateTimeField(default=datetime.utcnow)
    updated_at = DateTimeField(default=datetime.utcnow)
    end_time = DateTimeField(null=True)

    class Meta:
        table_name = "matches"

    def __repr__(self) -> str:
        return (
            f"<Match(id={self.id}, type={self.match_type}, "
            f"finished={self.is_finished}, winner={self.winner_id})>"
        )

    def save(self, *args, **kwargs):
        """Override save to auto-update updated_at timestamp."""
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)
