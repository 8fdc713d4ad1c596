"""
Match Service

Decides when a match is over, records the outcome and keeps the owe
ledger in step with it.
"""

from typing import Optional

from core.logging import get_logger
from db.models import Match, Owe
from db.repository import DartsRepository
from services.collaborators import EloCollaborator


class MatchService:
    """Match completion, owes and the Elo trigger."""

    def __init__(self, repository: DartsRepository, elo: Optional[EloCollaborator] = None):
        self.repository = repository
        self.elo = elo or EloCollaborator()
        self.log = get_logger("match_service")

    def get_wins_per_player(self, match_id: int) -> dict[int, int]:
        """Finished legs won per player."""
        return self.repository.wins_per_player(match_id)

    @staticmethod
    def is_match_finished(match: Match, wins: dict[int, int]) -> tuple[bool, Optional[int]]:
        """
        Check whether the leg wins decide the match.

        Args:
            match: The match
            wins: Finished legs won per player

        Returns:
            (finished, winner_id); winner_id is None on a draw
        """
        for player_id, count in wins.items():
            if count == match.wins_required:
                return True, player_id

        if match.legs_required is not None and sum(wins.values()) == match.legs_required:
            return True, None

        return False, None

    def complete_match(self, match: Match, winner_id: Optional[int], players: list[int]) -> None:
        """
        Persist the outcome and charge every loser the match stake.

        Runs inside the caller's finish-leg transaction.
        """
        self.repository.finish_match(match.id, winner_id)
        if match.owe_type_id is not None and winner_id is not None:
            for player_id in players:
                if player_id != winner_id:
                    self.repository.add_owe(player_id, winner_id, match.owe_type_id, 1)

        self.log.info(
            "match_finished",
            match_id=match.id,
            winner_id=winner_id,
            owe_type_id=match.owe_type_id,
        )

    def reverse_match(self, match: Match, leg_id: int, players: list[int]) -> None:
        """Undo `complete_match` for a match being reopened at `leg_id`."""
        if match.is_finished and match.owe_type_id is not None and match.winner_id is not None:
            for player_id in players:
                if player_id != match.winner_id:
                    self.repository.add_owe(player_id, match.winner_id, match.owe_type_id, -1)
        self.repository.reopen_match(match.id, leg_id)
        self.log.info("match_reopened", match_id=match.id, leg_id=leg_id)

    def update_after_leg(self, match_id: int, players: list[int]) -> tuple[bool, Optional[int]]:
        """Re-evaluate completion after a leg finished, completing the match if decided."""
        match = self.repository.get_match(match_id)
        finished, winner_id = self.is_match_finished(match, self.get_wins_per_player(match_id))
        if finished:
            self.complete_match(match, winner_id, players)
        return finished, winner_id

    def notify_match_finished(self, match_id: int) -> None:
        """Called after commit. Elo failures propagate to the caller."""
        self.elo.recalculate_elo_for_match(match_id)

    def list_owes(self, player_id: int) -> list[Owe]:
        """Outstanding owes the player is part of, on either side."""
        return self.repository.owes_for_player(player_id)

    def register_payback(self, ower_id: int, owee_id: int, owe_type_id: int, amount: int = 1) -> Owe:
        """Pay back `amount` of an owe. The amount never goes below zero."""
        with self.repository.atomic():
            owe = self.repository.add_owe(ower_id, owee_id, owe_type_id, -amount)
        self.log.info(
            "owe_paid_back",
            ower_id=ower_id,
            owee_id=owee_id,
            owe_type_id=owe_type_id,
            remaining=owe.amount,
        )
        return owe
