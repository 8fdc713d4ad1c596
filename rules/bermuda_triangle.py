"""
Bermuda Triangle Scoring Rule

Thirteen rounds with a fixed target each. A visit that scores nothing
halves the player's score.
"""

from typing import Optional

from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import BermudaTriangleStatistics
from scoring.match_types import MatchType
from scoring.targets import BERMUDA_TRIANGLE_TARGETS
from scoring.visit import Visit


class BermudaTriangleRule(ScoringRule[BermudaTriangleStatistics]):
    config = RuleConfig(
        name="bermuda_triangle",
        display_name="Bermuda Triangle",
        match_types=(MatchType.BERMUDATRIANGLE,),
        table="statistics_bermuda_triangle",
        rounds=len(BERMUDA_TRIANGLE_TARGETS),
    )
    statistics_class = BermudaTriangleStatistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        return PlayerLegState(player_id=player_id, order=order)

    def apply_visit(
        self,
        step: ReplayStep[BermudaTriangleStatistics],
        result: ReplayResult[BermudaTriangleStatistics],
    ) -> None:
        if step.round > self.config.rounds:
            return
        state, stats = step.state, step.statistics
        target = BERMUDA_TRIANGLE_TARGETS[step.round - 1]

        score = 0
        hits = 0
        for index, dart in enumerate(step.visit.darts):
            points = target.score_dart(dart, index)
            if points > 0:
                score += points
                hits += 1
                stats.total_marks += dart.multiplier

        if score == 0:
            state.current_score //= 2
        else:
            state.current_score += score

        setattr(stats, f"hit_rate_{step.round}", hits / 3)
        stats.hit_count += hits
        state.darts_thrown += step.visit.count_darts_thrown()
        stats.darts_thrown = state.darts_thrown
        stats.score = state.current_score
        stats.highest_score_reached = max(stats.highest_score_reached, state.current_score)

    def finalize(self, result: ReplayResult[BermudaTriangleStatistics]) -> None:
        rounds = self.config.rounds
        for stats in result.statistics.values():
            stats.mpr = stats.total_marks / rounds
            stats.total_hit_rate = stats.hit_count / (rounds * 3)

    def is_leg_finished(self, after: ReplayResult[BermudaTriangleStatistics], visit: Visit) -> bool:
        return self.completed_rounds(after, self.config.rounds)

    def winner(self, after: ReplayResult[BermudaTriangleStatistics], visit: Visit) -> Optional[int]:
        return self.highest_score(after)
