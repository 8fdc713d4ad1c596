"""
Collaborators

Elo rating and badge award hooks. The scoring engines only call these
interfaces; the defaults log the call and do nothing else.
"""

from core.logging import get_logger


class EloCollaborator:
    """Recalculates Elo ratings once a match outcome changes."""

    def __init__(self):
        self.log = get_logger("elo")

    def recalculate_elo_for_match(self, match_id: int) -> None:
        self.log.info("elo_recalculation_stub", match_id=match_id)

    def recalculate_elo_for_tournament(self, tournament_id: int) -> None:
        self.log.info("elo_recalculation_stub", tournament_id=tournament_id)


class BadgeCollaborator:
    """Awards badges for a finished leg."""

    def __init__(self):
        self.log = get_logger("badges")

    def check_leg_for_badges(self, leg, visit) -> None:
        """
        Check a finished leg for badges.

        Args:
            leg: LegRecord of the finished leg, final visit included
            visit: The visit that finished the leg
        """
        self.log.info("badge_check_stub", leg_id=leg.id, visit_id=visit.id)
