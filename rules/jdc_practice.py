"""
JDC Practice Scoring Rule

The JDC challenge routine: 10-15, a tour of doubles in groups of three,
then 15-20.
"""

from typing import Optional

from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import JDCPracticeStatistics
from scoring.match_types import MatchType
from scoring.targets import JDC_PRACTICE_TARGETS
from scoring.visit import Visit

NUMBER_ROUNDS = 12
DOUBLE_DARTS = 21


class JDCPracticeRule(ScoringRule[JDCPracticeStatistics]):
    config = RuleConfig(
        name="jdc_practice",
        display_name="JDC Practice",
        match_types=(MatchType.JDCPRACTICE,),
        table="statistics_jdc_practice",
        rounds=len(JDC_PRACTICE_TARGETS),
    )
    statistics_class = JDCPracticeStatistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        state = PlayerLegState(player_id=player_id, order=order)
        state.extra["marks"] = 0
        state.extra["doubles"] = 0
        return state

    def apply_visit(
        self, step: ReplayStep[JDCPracticeStatistics], result: ReplayResult[JDCPracticeStatistics]
    ) -> None:
        if step.round > self.config.rounds:
            return
        state, stats, visit = step.state, step.statistics, step.visit
        target = JDC_PRACTICE_TARGETS[step.round - 1]

        for index, dart in enumerate(visit.darts):
            if not target.is_hit(dart, index):
                continue
            state.current_score += target.score_dart(dart, index)
            if target.values:
                state.extra["doubles"] += 1
            else:
                state.extra["marks"] += dart.multiplier

        if not target.values and visit.first_dart.value == target.value and visit.is_shanghai():
            stats.shanghai_count += 1

        state.darts_thrown += visit.count_darts_thrown()
        stats.darts_thrown = state.darts_thrown
        stats.score = state.current_score

    def finalize(self, result: ReplayResult[JDCPracticeStatistics]) -> None:
        for player_id, stats in result.statistics.items():
            state = result.states[player_id]
            stats.mpr = state.extra["marks"] / NUMBER_ROUNDS
            stats.doubles_hitrate = state.extra["doubles"] / DOUBLE_DARTS

    def is_leg_finished(self, after: ReplayResult[JDCPracticeStatistics], visit: Visit) -> bool:
        return self.completed_rounds(after, self.config.rounds)

    def winner(self, after: ReplayResult[JDCPracticeStatistics], visit: Visit) -> Optional[int]:
        return self.highest_score(after)
