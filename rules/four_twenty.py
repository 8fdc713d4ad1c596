"""
420 Scoring Rule

Doubles around the board in a fixed order, counting down from 420.
"""

from typing import Optional

from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import FourTwentyStatistics
from scoring.darts import BULLSEYE
from scoring.match_types import MatchType
from scoring.targets import FOUR_TWENTY_TARGETS
from scoring.visit import Visit

STARTING_SCORE = 420


class FourTwentyRule(ScoringRule[FourTwentyStatistics]):
    config = RuleConfig(
        name="four_twenty",
        display_name="420",
        match_types=(MatchType.FOURTWENTY,),
        table="statistics_420",
        rounds=len(FOUR_TWENTY_TARGETS),
    )
    statistics_class = FourTwentyStatistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        state = PlayerLegState(player_id=player_id, order=order, current_score=STARTING_SCORE)
        state.extra["hits"] = {}
        return state

    def apply_visit(
        self, step: ReplayStep[FourTwentyStatistics], result: ReplayResult[FourTwentyStatistics]
    ) -> None:
        if step.round > self.config.rounds:
            return
        state, stats = step.state, step.statistics
        target = FOUR_TWENTY_TARGETS[step.round - 1]
        hits: dict[int, int] = state.extra["hits"]

        for index, dart in enumerate(step.visit.darts):
            if target.is_hit(dart, index):
                hits[target.value] = hits.get(target.value, 0) + 1
                state.current_score -= target.score_dart(dart, index)

        state.darts_thrown += step.visit.count_darts_thrown()
        stats.darts_thrown = state.darts_thrown
        stats.score = state.current_score

    def finalize(self, result: ReplayResult[FourTwentyStatistics]) -> None:
        total_darts = self.config.rounds * 3
        for player_id, stats in result.statistics.items():
            hits: dict[int, int] = result.states[player_id].extra["hits"]
            for number in range(1, 21):
                setattr(stats, f"hit_rate_{number}", hits.get(number, 0) / 3)
            stats.hit_rate_bull = hits.get(BULLSEYE, 0) / 3
            stats.total_hit_rate = sum(hits.values()) / total_darts

    def is_leg_finished(self, after: ReplayResult[FourTwentyStatistics], visit: Visit) -> bool:
        return self.completed_rounds(after, self.config.rounds)

    def winner(self, after: ReplayResult[FourTwentyStatistics], visit: Visit) -> Optional[int]:
        return self.lowest_score(after)
