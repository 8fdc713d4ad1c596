"""
Scam Scoring Rule

One stopper at a time tries to close 1-20 while everyone else scores
on the numbers the stopper has not closed yet. The stopper role moves
on in player order once all twenty numbers are closed.
"""

from typing import Optional

from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import HitsMap, LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import ScamStatistics
from scoring.darts import SINGLE
from scoring.match_types import MatchType
from scoring.targets import SCAM_NUMBERS
from scoring.visit import Visit


class ScamRule(ScoringRule[ScamStatistics]):
    config = RuleConfig(
        name="scam",
        display_name="Scam",
        match_types=(MatchType.SCAM,),
        table="statistics_scam",
    )
    statistics_class = ScamStatistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        state = PlayerLegState(player_id=player_id, order=order)
        state.extra["stopper_darts"] = 0
        state.extra["scorer_darts"] = 0
        return state

    def apply_visit(
        self, step: ReplayStep[ScamStatistics], result: ReplayResult[ScamStatistics]
    ) -> None:
        state, stats, visit = step.state, step.statistics, step.visit
        stopper_order = result.extra.setdefault("stopper_order", 1)
        closed: HitsMap = result.extra.setdefault("closed", HitsMap())

        if state.order == stopper_order:
            for dart in visit.darts:
                closed.add(dart)
            state.extra["stopper_darts"] += visit.count_darts_thrown()
            stats.darts_thrown_stopper = state.extra["stopper_darts"]
            if closed.contains_all(SCAM_NUMBERS):
                result.extra["stopper_order"] = stopper_order + 1
                closed.clear()
            return

        for dart in visit.darts:
            if not dart.is_miss() and closed.get(dart.value, SINGLE) < 1:
                state.current_score += dart.score()
        state.extra["scorer_darts"] += 3
        stats.darts_thrown_scorer = state.extra["scorer_darts"]
        stats.score = state.current_score

    def finalize(self, result: ReplayResult[ScamStatistics]) -> None:
        for stats in result.statistics.values():
            if stats.darts_thrown_scorer > 0:
                stats.ppd = stats.score / stats.darts_thrown_scorer
            stats.three_dart_avg = stats.ppd * 3
            if stats.darts_thrown_stopper > 0:
                stats.mpr = len(SCAM_NUMBERS) / stats.darts_thrown_stopper * 3

    def is_leg_finished(self, after: ReplayResult[ScamStatistics], visit: Visit) -> bool:
        return after.extra.get("stopper_order", 1) > len(after.leg.players)

    def winner(self, after: ReplayResult[ScamStatistics], visit: Visit) -> Optional[int]:
        return self.highest_score(after)
