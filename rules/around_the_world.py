"""
Around the World and Shanghai Scoring Rules

Every round has a fixed target: the round number, and the bull in
round 21. Shanghai stops after round 20 or as soon as a player hits a
single, double and triple of the round number in one visit.
"""

from typing import Optional

from rules.around_the_clock import BULL_TARGET, set_hit_rates
from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import AroundTheStatistics
from scoring.match_types import MatchType
from scoring.visit import Visit


class AroundTheWorldRule(ScoringRule[AroundTheStatistics]):
    config = RuleConfig(
        name="around_the_world",
        display_name="Around the World",
        match_types=(MatchType.AROUNDTHEWORLD,),
        table="statistics_around_the",
        rounds=21,
    )
    statistics_class = AroundTheStatistics
    ends_on_shanghai = False

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        state = PlayerLegState(player_id=player_id, order=order)
        state.extra["hits"] = {target: 0 for target in range(1, BULL_TARGET + 1)}
        state.extra["marks"] = 0
        return state

    def apply_visit(
        self, step: ReplayStep[AroundTheStatistics], result: ReplayResult[AroundTheStatistics]
    ) -> None:
        state, visit = step.state, step.visit
        target = step.round
        hits: dict[int, int] = state.extra["hits"]

        for dart in visit.darts:
            on_target = dart.is_bull() if target == BULL_TARGET else dart.value == target
            if dart.is_miss() or not on_target:
                continue
            hits[target] = hits.get(target, 0) + 1
            state.extra["marks"] += dart.multiplier
            state.current_score += dart.score()

        if self.ends_on_shanghai and visit.is_shanghai() and visit.first_dart.value == target:
            step.statistics.shanghai = target
            result.extra["shanghai"] = target

        state.darts_thrown += visit.count_darts_thrown()
        step.statistics.darts_thrown = state.darts_thrown
        step.statistics.score = state.current_score

    def finalize(self, result: ReplayResult[AroundTheStatistics]) -> None:
        rounds = result.extra.get("shanghai") or result.rounds
        for player_id, stats in result.statistics.items():
            state = result.states[player_id]
            hits: dict[int, int] = state.extra["hits"]
            set_hit_rates(stats, {target: count / 3 for target, count in hits.items()})
            if rounds > 0:
                stats.total_hit_rate = sum(hits.values()) / (rounds * 3)
                stats.mpr = state.extra["marks"] / result.rounds
            else:
                stats.mpr = 0.0

    def is_leg_finished(self, after: ReplayResult[AroundTheStatistics], visit: Visit) -> bool:
        return self.completed_rounds(after, self.config.rounds)

    def winner(self, after: ReplayResult[AroundTheStatistics], visit: Visit) -> Optional[int]:
        return self.highest_score(after)


class ShanghaiRule(AroundTheWorldRule):
    config = RuleConfig(
        name="shanghai",
        display_name="Shanghai",
        match_types=(MatchType.SHANGHAI,),
        table="statistics_around_the",
        rounds=20,
    )
    ends_on_shanghai = True

    def is_leg_finished(self, after: ReplayResult[AroundTheStatistics], visit: Visit) -> bool:
        return "shanghai" in after.extra or self.completed_rounds(after, self.config.rounds)

    def winner(self, after: ReplayResult[AroundTheStatistics], visit: Visit) -> Optional[int]:
        if "shanghai" in after.extra:
            return visit.player_id
        return self.highest_score(after)
