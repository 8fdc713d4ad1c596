"""
Cricket Scoring Rule

Cut-throat Cricket on 15-20 and bull. Points scored on a number go to
every opponent who has not closed it; the lowest score wins.
"""

from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import CricketStatistics
from scoring.darts import Dart
from scoring.match_types import MatchType
from scoring.targets import CRICKET_NUMBERS
from scoring.visit import Visit

MARKS_TO_CLOSE = 3


class CricketRule(ScoringRule[CricketStatistics]):
    config = RuleConfig(
        name="cricket",
        display_name="Cricket",
        match_types=(MatchType.CRICKET,),
        table="statistics_cricket",
    )
    statistics_class = CricketStatistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        return PlayerLegState(
            player_id=player_id,
            order=order,
            marks={number: 0 for number in CRICKET_NUMBERS},
        )

    def apply_visit(
        self, step: ReplayStep[CricketStatistics], result: ReplayResult[CricketStatistics]
    ) -> None:
        stats = step.statistics
        marks = sum(self.score_dart(dart, step.state, result) for dart in step.visit.darts)

        stats.total_marks += marks
        if step.round <= 3:
            stats.first_nine_marks += marks
        if 5 <= marks <= 9:
            field = f"marks{marks}"
            setattr(stats, field, getattr(stats, field) + 1)

    def score_dart(
        self, dart: Dart, state: PlayerLegState, result: ReplayResult[CricketStatistics]
    ) -> int:
        """
        Apply one dart for the player and return the marks it counts for.

        Args:
            dart: The dart thrown
            state: State of the throwing player
            result: Replay so far, used to reach the opponents

        Returns:
            Marks the dart counts for in the statistics
        """
        if dart.is_miss() or dart.is_cricket_miss():
            return 0

        value = dart.value
        hits = state.marks[value]
        opponents = result.others(state.player_id)
        open_for_opponents = [other for other in opponents if other.marks[value] < MARKS_TO_CLOSE]

        if open_for_opponents:
            marks = dart.multiplier
        else:
            marks = max(0, min(dart.multiplier, MARKS_TO_CLOSE - hits))

        if hits >= MARKS_TO_CLOSE:
            surplus = dart.multiplier
        else:
            surplus = max(0, hits + dart.multiplier - MARKS_TO_CLOSE)
        for other in open_for_opponents:
            other.current_score += surplus * value

        state.marks[value] = hits + dart.multiplier
        return marks

    def finalize(self, result: ReplayResult[CricketStatistics]) -> None:
        for player_id, stats in result.statistics.items():
            stats.rounds = result.rounds
            stats.score = result.states[player_id].current_score
            if result.rounds > 0:
                stats.mpr = stats.total_marks / result.rounds
            stats.first_nine_mpr = stats.first_nine_marks / 3

    def is_leg_finished(self, after: ReplayResult[CricketStatistics], visit: Visit) -> bool:
        state = after.states[visit.player_id]
        if any(marks < MARKS_TO_CLOSE for marks in state.marks.values()):
            return False
        return all(state.current_score <= other.current_score for other in after.others(visit.player_id))
