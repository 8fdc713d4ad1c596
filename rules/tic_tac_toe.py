"""
Tic-Tac-Toe Scoring Rule

Players claim the numbers of a 3x3 grid by checking them out exactly.
Three claimed numbers in a row win the leg.
"""

from typing import Optional

from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import TicTacToeStatistics
from scoring.darts import Dart
from scoring.match_types import MatchType, OutshotType
from scoring.targets import TIC_TAC_TOE_LINES
from scoring.visit import Visit


def last_scoring_dart(visit: Visit) -> Optional[Dart]:
    for dart in reversed(visit.darts):
        if not dart.is_miss():
            return dart
    return None


def is_valid_finish(dart: Optional[Dart], outshot: int) -> bool:
    if dart is None:
        return False
    if outshot == OutshotType.ANY:
        return True
    if outshot == OutshotType.MASTER:
        return dart.is_double() or dart.is_triple()
    return dart.is_double()


class TicTacToeRule(ScoringRule[TicTacToeStatistics]):
    config = RuleConfig(
        name="tic_tac_toe",
        display_name="Tic-Tac-Toe",
        match_types=(MatchType.TICTACTOE,),
        table="statistics_tic_tac_toe",
    )
    statistics_class = TicTacToeStatistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        return PlayerLegState(player_id=player_id, order=order)

    def claimed_number(self, leg: LegRecord, visit: Visit) -> Optional[int]:
        """The grid number `visit` checks out, if any."""
        if not is_valid_finish(last_scoring_dart(visit), leg.outshot_type):
            return None
        score = visit.score()
        for number in leg.numbers:
            if number == score:
                return number
        return None

    def apply_visit(
        self, step: ReplayStep[TicTacToeStatistics], result: ReplayResult[TicTacToeStatistics]
    ) -> None:
        state, stats, visit = step.state, step.statistics, step.visit
        claims: dict[int, int] = result.extra.setdefault("claims", {})

        number = self.claimed_number(result.leg, visit)
        if number is not None and number not in claims:
            claims[number] = visit.player_id
            state.current_score += number
            stats.numbers_closed += 1
            stats.highest_closed = max(stats.highest_closed, number)
            stats.score = state.current_score

        state.darts_thrown += visit.count_darts_thrown()
        stats.darts_thrown = state.darts_thrown

    def prepare_visit(self, before: ReplayResult[TicTacToeStatistics], visit: Visit) -> None:
        # A claiming visit ends with its finishing dart
        if self.claimed_number(before.leg, visit) is None:
            return
        for dart in reversed(visit.darts):
            if not dart.is_miss():
                break
            dart.void()

    def lines(self, result: ReplayResult[TicTacToeStatistics]) -> list[list[Optional[int]]]:
        """Owner of each cell, per winning line."""
        claims: dict[int, int] = result.extra.get("claims", {})
        numbers = result.leg.numbers
        return [[claims.get(numbers[index]) for index in line] for line in TIC_TAC_TOE_LINES]

    def line_winner(self, result: ReplayResult[TicTacToeStatistics]) -> Optional[int]:
        if len(result.leg.numbers) < 9:
            return None
        for owners in self.lines(result):
            if owners[0] is not None and owners.count(owners[0]) == 3:
                return owners[0]
        return None

    def is_draw(self, result: ReplayResult[TicTacToeStatistics]) -> bool:
        """True when every line already holds numbers of two different players."""
        if len(result.leg.numbers) < 9:
            return False
        for owners in self.lines(result):
            if len({owner for owner in owners if owner is not None}) < 2:
                return False
        return True

    def is_leg_finished(self, after: ReplayResult[TicTacToeStatistics], visit: Visit) -> bool:
        if self.line_winner(after) is not None or self.is_draw(after):
            return True
        return len(after.extra.get("claims", {})) == len(after.leg.numbers) > 0

    def winner(self, after: ReplayResult[TicTacToeStatistics], visit: Visit) -> Optional[int]:
        winner = self.line_winner(after)
        if winner is not None:
            return winner
        return self.highest_score(after)
