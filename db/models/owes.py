"""
Owe Ledger

Tracks what each player owes another for a given stake. Finishing a
match with an owe type adds one to every loser's entry toward the
winner; paybacks subtract.
"""

from peewee import ForeignKeyField, IntegerField

from db.base import BaseModel
from db.models.matches import OweType
from db.models.players import Player


class Owe(BaseModel):
    """
    Amount `ower` owes `owee` of a given owe type.

    Attributes:
        ower: Player who owes
        owee: Player who is owed
        owe_type: The stake
        amount: Outstanding count, never negative
    """

    ower = ForeignKeyField(
        Player,
        backref="owes",
        on_delete="CASCADE",
        column_name="player_ower_id",
        object_id_name="ower_id",
    )
    owee = ForeignKeyField(
        Player,
        backref="owed",
        on_delete="CASCADE",
        column_name="player_owee_id",
        object_id_name="owee_id",
    )
    owe_type = ForeignKeyField(
        OweType,
        backref="owes",
        on_delete="CASCADE",
        column_name="owe_type_id",
    )
    amount = IntegerField(default=0)

    class Meta:
        table_name = "owes"
        indexes = (
            (("ower", "owee", "owe_type"), True),
        )

    def __repr__(self) -> str:
        return (
            f"<Owe(ower={self.ower_id}, owee={self.owee_id}, "
            f"type={self.owe_type_id}, amount={self.amount})>"
        )

    @classmethod
    def add_owe(cls, ower_id: int, owee_id: int, owe_type_id: int, amount: int = 1) -> "Owe":
        """
        Add `amount` to the ledger entry, creating it if needed.

        Args:
            ower_id: Player who owes
            owee_id: Player who is owed
            owe_type_id: The stake
            amount: How much to add (negative to reverse an earlier add)

        Returns:
            The updated Owe row
        """
        owe, created = cls.get_or_create(
            ower=ower_id,
            owee=owee_id,
            owe_type=owe_type_id,
            defaults={"amount": 0},
        )
        owe.amount = max(owe.amount + amount, 0)
        owe.save()
        return owe
