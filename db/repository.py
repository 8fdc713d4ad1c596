"""
Darts Repository

The single persistence port of the scoring engines. Constructed once and
injected into LegService, MatchService and the recalculation driver, so
no engine reaches for the models directly.
"""

from datetime import datetime
from typing import Iterable, Optional

from peewee import JOIN, fn

from core.exceptions import NotFoundError
from core.logging import get_logger
from core.settings import settings
from db.base import db
from db.models import Leg, LegParameters, Match, Owe, OweType, Player2Leg, Score
from db.models.statistics import STATISTICS_MODELS, STATISTICS_TABLES
from rules.context import LegRecord
from schemas.statistics import VariantStatistics
from scoring.darts import Dart
from scoring.match_types import MatchType
from scoring.visit import Visit

log = get_logger("repository")


def score_to_visit(row: Score) -> Visit:
    """Convert a score ledger row to a domain visit."""
    return Visit(
        leg_id=row.leg_id,
        player_id=row.player_id,
        first_dart=Dart(row.first_dart, row.first_dart_multiplier),
        second_dart=Dart(row.second_dart, row.second_dart_multiplier),
        third_dart=Dart(row.third_dart, row.third_dart_multiplier),
        is_bust=row.is_bust,
        id=row.id,
        created_at=row.created_at,
    )


def visit_columns(visit: Visit) -> dict:
    """Column values of the dart fields of a visit."""
    return {
        "first_dart": visit.first_dart.value,
        "first_dart_multiplier": visit.first_dart.multiplier,
        "second_dart": visit.second_dart.value,
        "second_dart_multiplier": visit.second_dart.multiplier,
        "third_dart": visit.third_dart.value,
        "third_dart_multiplier": visit.third_dart.multiplier,
        "is_bust": visit.is_bust,
    }


class DartsRepository:
    """Reads and writes matches, legs, visits, owes and statistics rows."""

    def atomic(self):
        """Transaction (or savepoint, when nested) spanning the block."""
        return db.atomic()

    # ------------------------------------------------------------------ #
    # Point lookups
    # ------------------------------------------------------------------ #

    def get_match(self, match_id: int) -> Match:
        match = Match.get_or_none(Match.id == match_id)
        if match is None:
            raise NotFoundError("match", match_id)
        return match

    def get_leg(self, leg_id: int) -> Leg:
        leg = Leg.get_or_none(Leg.id == leg_id)
        if leg is None:
            raise NotFoundError("leg", leg_id)
        return leg

    def get_visit(self, visit_id: int) -> Score:
        row = Score.get_or_none(Score.id == visit_id)
        if row is None:
            raise NotFoundError("visit", visit_id)
        return row

    def get_last_visit(self, leg_id: int) -> Optional[Score]:
        return (
            Score.select()
            .where(Score.leg == leg_id)
            .order_by(Score.id.desc())
            .first()
        )

    def get_parameters(self, leg_id: int) -> Optional[LegParameters]:
        return LegParameters.get_or_none(LegParameters.leg == leg_id)

    # ------------------------------------------------------------------ #
    # Legs
    # ------------------------------------------------------------------ #

    def effective_type(self, leg: Leg) -> MatchType:
        """The leg's own variant override, or the match type."""
        if leg.leg_type is not None:
            return MatchType(leg.leg_type)
        return MatchType(leg.match.match_type)

    def seats(self, leg_id: int) -> list[Player2Leg]:
        """Player seats of a leg in throwing order."""
        return list(
            Player2Leg.select()
            .where(Player2Leg.leg == leg_id)
            .order_by(Player2Leg.order, Player2Leg.id)
        )

    def player_ids(self, leg_id: int) -> list[int]:
        return [seat.player_id for seat in self.seats(leg_id)]

    def visits(self, leg_id: int) -> list[Visit]:
        """Visits of a leg in replay order."""
        rows = Score.select().where(Score.leg == leg_id).order_by(Score.id)
        return [score_to_visit(row) for row in rows]

    def load_leg_record(self, leg_id: int) -> LegRecord:
        """
        Load everything a replay of the leg depends on.

        Raises:
            NotFoundError: If the leg does not exist
        """
        leg = self.get_leg(leg_id)
        seats = self.seats(leg_id)
        parameters = self.get_parameters(leg_id)

        return LegRecord(
            match_type=self.effective_type(leg),
            starting_score=leg.starting_score,
            players=[seat.player_id for seat in seats],
            visits=self.visits(leg_id),
            handicaps={seat.player_id: seat.handicap for seat in seats},
            outshot_type=parameters.outshot_type if parameters else settings.default_outshot_type,
            starting_lives=parameters.starting_lives if parameters else None,
            numbers=parameters.get_numbers() if parameters else [],
            id=leg.id,
            match_id=leg.match_id,
            winner_id=leg.winner_id,
            is_finished=leg.is_finished,
        )

    def create_leg(
        self,
        match_id: int,
        starting_score: int,
        players: list[int],
        handicaps: Optional[dict[int, Optional[int]]] = None,
        leg_type: Optional[int] = None,
    ) -> Leg:
        """Insert a leg with its seats in the given order. The first player starts."""
        leg = Leg.create(
            match=match_id,
            starting_score=starting_score,
            current_player=players[0],
            leg_type=leg_type,
        )
        handicaps = handicaps or {}
        for order, player_id in enumerate(players, start=1):
            Player2Leg.create(
                leg=leg.id,
                player=player_id,
                order=order,
                handicap=handicaps.get(player_id),
            )
        return leg

    def copy_parameters(self, source_leg_id: int, target_leg_id: int) -> Optional[LegParameters]:
        """Copy outshot, lives and grid numbers to a new leg. Claims are not copied."""
        source = self.get_parameters(source_leg_id)
        if source is None:
            return None
        return LegParameters.create(
            leg=target_leg_id,
            outshot_type=source.outshot_type,
            starting_lives=source.starting_lives,
            numbers=source.numbers,
        )

    def save_hits(self, leg_id: int, hits: dict[int, int]) -> None:
        parameters = self.get_parameters(leg_id)
        if parameters is None:
            parameters = LegParameters(leg=leg_id)
        parameters.set_hits(hits)
        parameters.save()

    def set_current_player(self, leg_id: int, player_id: Optional[int]) -> None:
        Leg.update(current_player=player_id, updated_at=datetime.utcnow()).where(
            Leg.id == leg_id
        ).execute()

    def finish_leg(self, leg_id: int, winner_id: Optional[int]) -> None:
        Leg.update(
            is_finished=True,
            winner=winner_id,
            end_time=datetime.utcnow(),
            updated_at=datetime.utcnow(),
        ).where(Leg.id == leg_id).execute()

    def reopen_leg(self, leg_id: int, current_player_id: int) -> None:
        Leg.update(
            is_finished=False,
            winner=None,
            end_time=None,
            current_player=current_player_id,
            updated_at=datetime.utcnow(),
        ).where(Leg.id == leg_id).execute()

    def set_player_order(self, leg_id: int, order_map: dict[int, int]) -> None:
        for player_id, order in order_map.items():
            Player2Leg.update(order=order).where(
                (Player2Leg.leg == leg_id) & (Player2Leg.player == player_id)
            ).execute()

    def delete_leg(self, leg_id: int) -> int:
        """Delete a leg and everything it owns."""
        self.delete_statistics(leg_id)
        Score.delete().where(Score.leg == leg_id).execute()
        Player2Leg.delete().where(Player2Leg.leg == leg_id).execute()
        LegParameters.delete().where(LegParameters.leg == leg_id).execute()
        return Leg.delete().where(Leg.id == leg_id).execute()

    def legs_for_match(self, match_id: int) -> list[Leg]:
        return list(Leg.select().where(Leg.match == match_id).order_by(Leg.id))

    def last_finished_leg(self, match_id: int) -> Optional[Leg]:
        return (
            Leg.select()
            .where((Leg.match == match_id) & (Leg.is_finished == True))  # noqa: E712
            .order_by(Leg.id.desc())
            .first()
        )

    def legs_of_type(
        self,
        match_type: int,
        finished_only: bool = True,
        since: Optional[datetime] = None,
    ) -> list[Leg]:
        """
        Legs whose effective variant is `match_type`, oldest first.

        Args:
            match_type: Variant id
            finished_only: Skip legs still in progress
            since: Only legs created at or after this time

        Returns:
            Legs ordered by id
        """
        query = (
            Leg.select(Leg, Match)
            .join(Match, JOIN.INNER, on=(Leg.match == Match.id))
            .where(
                (Leg.leg_type == match_type)
                | (Leg.leg_type.is_null() & (Match.match_type == match_type))
            )
            .where(Match.is_abandoned == False)  # noqa: E712
        )
        if finished_only:
            query = query.where(Leg.is_finished == True)  # noqa: E712
        if since is not None:
            query = query.where(Leg.created_at >= since)
        return list(query.order_by(Leg.id))

    # ------------------------------------------------------------------ #
    # Visits
    # ------------------------------------------------------------------ #

    def insert_visit(self, visit: Visit) -> Visit:
        row = Score.create(leg=visit.leg_id, player=visit.player_id, **visit_columns(visit))
        visit.id = row.id
        visit.created_at = row.created_at
        return visit

    def update_visit(self, visit: Visit) -> int:
        return (
            Score.update(updated_at=datetime.utcnow(), **visit_columns(visit))
            .where(Score.id == visit.id)
            .execute()
        )

    def delete_visit(self, visit_id: int) -> int:
        return Score.delete().where(Score.id == visit_id).execute()

    # ------------------------------------------------------------------ #
    # Matches
    # ------------------------------------------------------------------ #

    def set_current_leg(self, match_id: int, leg_id: Optional[int]) -> None:
        Match.update(current_leg_id=leg_id, updated_at=datetime.utcnow()).where(
            Match.id == match_id
        ).execute()

    def finish_match(self, match_id: int, winner_id: Optional[int]) -> None:
        Match.update(
            is_finished=True,
            winner=winner_id,
            end_time=datetime.utcnow(),
            updated_at=datetime.utcnow(),
        ).where(Match.id == match_id).execute()

    def reopen_match(self, match_id: int, leg_id: int) -> None:
        Match.update(
            is_finished=False,
            winner=None,
            end_time=None,
            current_leg_id=leg_id,
            updated_at=datetime.utcnow(),
        ).where(Match.id == match_id).execute()

    def delete_match(self, match_id: int) -> int:
        return Match.delete().where(Match.id == match_id).execute()

    def wins_per_player(self, match_id: int) -> dict[int, int]:
        """Finished legs won per player."""
        query = (
            Leg.select(Leg.winner, fn.COUNT(Leg.id).alias("wins"))
            .where(
                (Leg.match == match_id)
                & (Leg.is_finished == True)  # noqa: E712
                & Leg.winner.is_null(False)
            )
            .group_by(Leg.winner)
            .order_by(Leg.winner)
        )
        return {row.winner_id: row.wins for row in query}

    # ------------------------------------------------------------------ #
    # Owes
    # ------------------------------------------------------------------ #

    def add_owe(self, ower_id: int, owee_id: int, owe_type_id: int, amount: int = 1) -> Owe:
        return Owe.add_owe(ower_id, owee_id, owe_type_id, amount)

    def owes_for_player(self, player_id: int) -> list[Owe]:
        return list(
            Owe.select(Owe, OweType)
            .join(OweType)
            .where(((Owe.ower == player_id) | (Owe.owee == player_id)) & (Owe.amount > 0))
            .order_by(Owe.ower, Owe.owee, Owe.owe_type)
        )

    # ------------------------------------------------------------------ #
    # Statistics
    # ------------------------------------------------------------------ #

    def write_statistics(self, table: str, leg_id: int, rows: Iterable[VariantStatistics]) -> int:
        """Insert one statistics row per player."""
        model = STATISTICS_TABLES[table]
        data = [
            {"leg": leg_id, "player": row.player_id, **row.column_values()}
            for row in rows
        ]
        if not data:
            return 0
        model.insert_many(data).execute()
        return len(data)

    def statistics_update(self, table: str, leg_id: int, player_id: int, values: dict):
        """Unexecuted UPDATE of one player's statistics row."""
        model = STATISTICS_TABLES[table]
        return model.update(**values).where((model.leg == leg_id) & (model.player == player_id))

    def update_statistics(self, table: str, leg_id: int, player_id: int, values: dict) -> int:
        """Rewrite one player's row, inserting it when the leg has none yet."""
        updated = self.statistics_update(table, leg_id, player_id, values).execute()
        if updated == 0:
            STATISTICS_TABLES[table].insert(leg=leg_id, player=player_id, **values).execute()
            return 1
        return updated

    def delete_statistics(self, leg_id: int) -> int:
        """Delete every statistics row of a leg, whatever its variant."""
        return sum(
            model.delete().where(model.leg == leg_id).execute()
            for model in STATISTICS_MODELS
        )

    def read_statistics(self, table: str, leg_id: int) -> list:
        model = STATISTICS_TABLES[table]
        return list(model.select().where(model.leg == leg_id).order_by(model.id))
