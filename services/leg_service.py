"""
Leg Service

The leg scoring state machine. Every write to a leg happens under that
leg's lock and inside one database transaction. Scores are never stored
on the leg: the current state of every player comes from replaying the
visit log through the variant's scoring rule, the same replay the
statistics are computed with.
"""

import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator, Optional

from peewee import PeeweeException

from core.exceptions import ConsistencyError, TransactionError, ValidationError
from core.logging import get_logger
from db.models import Leg
from db.repository import DartsRepository
from rules import ScoringRule, get_rule
from rules.context import LegRecord, ReplayResult
from scoring.match_types import MatchType
from scoring.visit import Visit
from services.collaborators import BadgeCollaborator, EloCollaborator
from services.match_service import MatchService


class LegLock:
    """A leg's lock and the number of callers holding or waiting for it."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.users = 0


# Locks of the legs being written to, shared by every LegService in the process
_leg_locks: dict[int, LegLock] = {}
_leg_locks_guard = threading.Lock()


@contextmanager
def leg_lock(leg_id: int) -> Iterator[None]:
    """
    Serialize writes to a leg. Re-entrant within a thread.

    The registry entry is dropped once the last caller leaves, so only
    legs with a write in flight hold a lock.
    """
    with _leg_locks_guard:
        entry = _leg_locks.get(leg_id)
        if entry is None:
            entry = _leg_locks[leg_id] = LegLock()
        entry.users += 1
    try:
        with entry.lock:
            yield
    finally:
        with _leg_locks_guard:
            entry.users -= 1
            if entry.users == 0:
                del _leg_locks[leg_id]


def next_player(players: list[int], current_player_id: int, eliminated: set[int]) -> int:
    """
    The player throwing after `current_player_id`.

    Args:
        players: Player ids in throwing order
        current_player_id: Player who just threw
        eliminated: Players no longer taking turns

    Returns:
        The next player still in play, or the current player if nobody else is
    """
    index = players.index(current_player_id)
    for step in range(1, len(players) + 1):
        candidate = players[(index + step) % len(players)]
        if candidate not in eliminated:
            return candidate
    return current_player_id


class LegService:
    """
    Start, score, finish, undo and correct legs.

    Usage:
        repository = DartsRepository()
        service = LegService(repository)
        leg = service.new_leg(match_id, starting_score=501, players=[1, 2])
        service.add_visit(Visit(leg_id=leg.id, player_id=2, ...))
    """

    def __init__(
        self,
        repository: DartsRepository,
        match_service: Optional[MatchService] = None,
        elo: Optional[EloCollaborator] = None,
        badges: Optional[BadgeCollaborator] = None,
    ):
        self.repository = repository
        self.match_service = match_service or MatchService(repository, elo=elo)
        self.badges = badges or BadgeCollaborator()
        self.log = get_logger("leg_service")

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        """Run the block atomically, converting database failures to TransactionError."""
        try:
            with self.repository.atomic():
                yield
        except PeeweeException as e:
            self.log.error("transaction_failed", operation=operation, error=str(e))
            raise TransactionError(operation, e) from e

    def _replay(self, record: LegRecord) -> tuple[ScoringRule, ReplayResult]:
        rule = get_rule(record.match_type)
        return rule, rule.replay(record)

    def _store_claims(self, record: LegRecord, result: ReplayResult) -> None:
        """Keep the Tic-Tac-Toe claims on the leg parameters in step with the visits."""
        if record.match_type == MatchType.TICTACTOE:
            self.repository.save_hits(record.id, result.extra.get("claims", {}))

    def _check_open(self, leg: Leg) -> None:
        if leg.is_finished:
            raise ConsistencyError("leg already finished")

    # ------------------------------------------------------------------ #
    # Leg lifecycle
    # ------------------------------------------------------------------ #

    def new_leg(
        self,
        match_id: int,
        starting_score: Optional[int] = None,
        players: Optional[list[int]] = None,
    ) -> Leg:
        """
        Start the next leg of a match.

        The player order is taken from the previous leg (or `players`)
        and rotated by one, so a different player starts every leg.

        Raises:
            NotFoundError: If the match does not exist
            ValidationError: If neither a previous leg nor players/score are available
        """
        match = self.repository.get_match(match_id)
        legs = self.repository.legs_for_match(match_id)
        previous = legs[-1] if legs else None

        if players is None:
            if previous is None:
                raise ValidationError("players are required for the first leg of a match")
            players = self.repository.player_ids(previous.id)
        if not players:
            raise ValidationError("a leg needs at least one player")
        if starting_score is None:
            if previous is None:
                raise ValidationError("starting score is required for the first leg of a match")
            starting_score = previous.starting_score

        order = players[1:] + players[:1]

        handicaps: dict[int, Optional[int]] = {}
        if previous is not None and match.match_type == MatchType.X01HANDICAP:
            handicaps = {seat.player_id: seat.handicap for seat in self.repository.seats(previous.id)}

        with self._transaction("new leg"):
            leg = self.repository.create_leg(match_id, starting_score, order, handicaps)
            if previous is not None:
                self.repository.copy_parameters(previous.id, leg.id)
            self.repository.set_current_leg(match_id, leg.id)

        self.log.info(
            "leg_started",
            leg_id=leg.id,
            match_id=match_id,
            starting_score=starting_score,
            players=order,
        )
        return leg

    def add_visit(self, visit: Visit) -> Visit:
        """
        Record a visit for the current player.

        Raises:
            ValidationError: If a dart is invalid
            NotFoundError: If the leg does not exist
            ConsistencyError: If the leg is finished or it is not the player's turn
            TransactionError: If the write failed and was rolled back
        """
        visit.validate()

        with leg_lock(visit.leg_id):
            leg = self.repository.get_leg(visit.leg_id)
            self._check_open(leg)
            if leg.current_player_id != visit.player_id:
                raise ConsistencyError("cannot insert score for non-current player")

            record = self.repository.load_leg_record(leg.id)
            rule, before = self._replay(record)
            rule.prepare_visit(before, visit)

            final = record.with_visit(visit)
            after = rule.replay(final)
            if rule.is_leg_finished(after, visit):
                return self.finish_leg(visit)

            current_player = next_player(record.players, visit.player_id, rule.eliminated(after))
            with self._transaction("add visit"):
                self.repository.insert_visit(visit)
                self.repository.set_current_player(leg.id, current_player)
                self._store_claims(final, after)

        self.log.info(
            "visit_added",
            leg_id=visit.leg_id,
            visit_id=visit.id,
            player_id=visit.player_id,
            darts=visit.as_string(),
            is_bust=visit.is_bust,
            next_player_id=current_player,
        )
        return visit

    def finish_leg(self, visit: Visit) -> Visit:
        """
        Store the final visit, decide the winner and write statistics.

        Raises:
            ConsistencyError: If the leg is already finished or the visit cannot end it
            TransactionError: If the write failed and was rolled back
        """
        with leg_lock(visit.leg_id):
            leg = self.repository.get_leg(visit.leg_id)
            self._check_open(leg)

            record = self.repository.load_leg_record(leg.id)
            rule, before = self._replay(record)
            rule.prepare_visit(before, visit)

            final = record.with_visit(visit)
            after = rule.replay(final)
            rule.verify_finish(after, visit)
            winner_id = rule.winner(after, visit)

            with self._transaction("finish leg"):
                self.repository.insert_visit(visit)
                self._store_claims(final, after)
                self.repository.finish_leg(leg.id, winner_id)
                self.repository.delete_statistics(leg.id)
                self.repository.write_statistics(rule.config.table, leg.id, after.ordered_statistics())
                match_finished, match_winner_id = self.match_service.update_after_leg(
                    leg.match_id, record.players
                )

        self.log.info(
            "leg_finished",
            leg_id=leg.id,
            match_id=leg.match_id,
            winner_id=winner_id,
            match_finished=match_finished,
        )

        try:
            self.badges.check_leg_for_badges(replace(final, winner_id=winner_id, is_finished=True), visit)
        except Exception:
            self.log.exception("badge_check_failed", leg_id=leg.id)

        if match_finished:
            self.match_service.notify_match_finished(leg.match_id)
        return visit

    def undo_leg_finish(self, leg_id: int) -> None:
        """
        Reopen a finished leg by removing its final visit.

        Raises:
            ConsistencyError: If the leg is not finished
            TransactionError: If the write failed and was rolled back
        """
        with leg_lock(leg_id):
            leg = self.repository.get_leg(leg_id)
            if not leg.is_finished:
                raise ConsistencyError("leg is not finished")

            match = self.repository.get_match(leg.match_id)
            players = self.repository.player_ids(leg_id)
            last = self.repository.get_last_visit(leg_id)
            current_player_id = last.player_id if last else leg.current_player_id

            with self._transaction("undo leg finish"):
                self.repository.delete_statistics(leg_id)
                if last is not None:
                    self.repository.delete_visit(last.id)
                self.repository.reopen_leg(leg_id, current_player_id)
                self.match_service.reverse_match(match, leg_id, players)
                record = self.repository.load_leg_record(leg_id)
                _, result = self._replay(record)
                self._store_claims(record, result)

        self.log.info("leg_finish_undone", leg_id=leg_id, match_id=match.id, match_reopened=match.is_finished)
        if match.is_finished:
            self.match_service.notify_match_finished(match.id)

    def delete_leg(self, leg_id: int) -> None:
        """
        Delete a leg. The match falls back to its latest finished leg, or
        is deleted when it has none left.
        """
        with leg_lock(leg_id):
            leg = self.repository.get_leg(leg_id)
            match_id = leg.match_id

            with self._transaction("delete leg"):
                self.repository.delete_leg(leg_id)
                latest = self.repository.last_finished_leg(match_id)
                if latest is not None:
                    self.repository.set_current_leg(match_id, latest.id)
                else:
                    for remaining in self.repository.legs_for_match(match_id):
                        self.repository.delete_leg(remaining.id)
                    self.repository.delete_match(match_id)

        self.log.info("leg_deleted", leg_id=leg_id, match_id=match_id, match_deleted=latest is None)

    def change_player_order(self, leg_id: int, order_map: dict[int, int]) -> None:
        """
        Rewrite the throwing order of a leg. The player at order 1 throws next.

        Raises:
            ValidationError: On unknown players, missing players or duplicate orders
        """
        with leg_lock(leg_id):
            self.repository.get_leg(leg_id)
            players = set(self.repository.player_ids(leg_id))

            for player_id in order_map:
                if player_id not in players:
                    raise ValidationError(f"player {player_id} is not part of leg {leg_id}")
            if set(order_map) != players:
                raise ValidationError("order must include every player of the leg")
            if len(set(order_map.values())) != len(order_map):
                raise ValidationError("duplicate order in player order")

            first = min(order_map, key=order_map.get)
            with self._transaction("change player order"):
                self.repository.set_player_order(leg_id, order_map)
                self.repository.set_current_player(leg_id, first)

        self.log.info("player_order_changed", leg_id=leg_id, order=order_map)

    # ------------------------------------------------------------------ #
    # Visit corrections
    # ------------------------------------------------------------------ #

    def modify_visit(self, visit: Visit) -> Visit:
        """Rewrite the darts of an existing visit."""
        visit.validate()
        row = self.repository.get_visit(visit.id)

        with leg_lock(row.leg_id):
            leg = self.repository.get_leg(row.leg_id)
            self._check_open(leg)
            visit.leg_id = row.leg_id
            visit.player_id = row.player_id

            record = self.repository.load_leg_record(leg.id)
            rule, before = self._replay(record.before_visit(visit.id))
            rule.prepare_visit(before, visit)

            with self._transaction("modify visit"):
                self.repository.update_visit(visit)
                updated = self.repository.load_leg_record(leg.id)
                self._store_claims(updated, rule.replay(updated))

        self.log.info("visit_modified", leg_id=leg.id, visit_id=visit.id, darts=visit.as_string())
        return visit

    def delete_visit(self, visit_id: int) -> None:
        """Remove a visit and give the turn back to its player."""
        row = self.repository.get_visit(visit_id)

        with leg_lock(row.leg_id):
            leg = self.repository.get_leg(row.leg_id)
            self._check_open(leg)

            with self._transaction("delete visit"):
                self.repository.delete_visit(visit_id)
                self.repository.set_current_player(leg.id, row.player_id)
                record = self.repository.load_leg_record(leg.id)
                _, result = self._replay(record)
                self._store_claims(record, result)

        self.log.info("visit_deleted", leg_id=leg.id, visit_id=visit_id, player_id=row.player_id)

    def delete_last_visit(self, leg_id: int) -> None:
        """Remove the most recent visit of a leg."""
        self.repository.get_leg(leg_id)
        last = self.repository.get_last_visit(leg_id)
        if last is None:
            raise ConsistencyError("leg has no visits")
        self.delete_visit(last.id)

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def get_leg(self, leg_id: int) -> LegRecord:
        """
        Load a leg with its visits, each decorated with the cumulative
        number of darts thrown per player at the end of its round.
        """
        record = self.repository.load_leg_record(leg_id)
        num_players = max(len(record.players), 1)
        for index, visit in enumerate(record.visits):
            visit.darts_thrown = (index // num_players + 1) * 3
        if record.visits:
            final = record.visits[-1]
            final.darts_thrown = final.darts_thrown - 3 + final.count_darts_thrown()
        return record

    def get_players_score(self, leg_id: int) -> dict[int, int]:
        """Current score of every player, in throwing order."""
        record = self.repository.load_leg_record(leg_id)
        rule, result = self._replay(record)
        return rule.current_scores(result)
