"""
Player Dimension Table

Players referenced by legs, visits, owes and statistics rows.
"""

from datetime import datetime

from peewee import AutoField, CharField, DateTimeField

from db.base import BaseModel


class Player(BaseModel):
    """
    A darts player.

    Attributes:
        id: Auto-incrementing primary key
        first_name: Given name
        last_name: Family name (optional)
        created_at: When this record was first created
    """

    id = AutoField(primary_key=True)
    first_name = CharField(max_length=100)
    last_name = CharField(max_length=100, null=True)
    created_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "player"

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, name='{self.name}')>"

    @property
    def name(self) -> str:
        if self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name
