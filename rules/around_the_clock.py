"""
Around the Clock Scoring Rule

Hit 1 through 20 in order with singles, then the bull.
"""

from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import AroundTheStatistics
from scoring.darts import Dart
from scoring.match_types import MatchType
from scoring.visit import Visit

BULL_TARGET = 21


def set_hit_rates(statistics: AroundTheStatistics, rates: dict[int, float]) -> None:
    """Copy per-target rates (1-20, 21 = bull) onto the statistics model."""
    for number in range(1, 21):
        setattr(statistics, f"hit_rate_{number}", rates.get(number, 0.0))
    statistics.hit_rate_bull = rates.get(BULL_TARGET, 0.0)


class AroundTheClockRule(ScoringRule[AroundTheStatistics]):
    """
    Around the Clock.

    The hit rate of a target is the inverse of the attempts it took:
    every miss adds one, and the hit turns the count into 1 / (1 + misses).
    """

    config = RuleConfig(
        name="around_the_clock",
        display_name="Around the Clock",
        match_types=(MatchType.AROUNDTHECLOCK,),
        table="statistics_around_the",
    )
    statistics_class = AroundTheStatistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        state = PlayerLegState(player_id=player_id, order=order)
        state.extra["rates"] = {target: 0.0 for target in range(1, BULL_TARGET + 1)}
        return state

    @staticmethod
    def is_hit(dart: Dart, target: int) -> bool:
        if target == BULL_TARGET:
            return dart.is_bull()
        return dart.value == target and dart.is_single()

    def apply_visit(
        self, step: ReplayStep[AroundTheStatistics], result: ReplayResult[AroundTheStatistics]
    ) -> None:
        state = step.state
        rates: dict[int, float] = state.extra["rates"]
        state.extra["bull_hit"] = False

        for dart in step.visit.darts:
            if not dart.is_thrown() or state.current_score >= BULL_TARGET:
                continue
            target = state.current_score + 1
            if self.is_hit(dart, target):
                rates[target] = 1 / (1 + rates[target])
                state.current_score = target
                state.current_streak += 1
                state.extra["bull_hit"] = target == BULL_TARGET
            else:
                rates[target] += 1
                state.end_streak()
            state.darts_thrown += 1

        step.statistics.darts_thrown = state.darts_thrown
        step.statistics.score = state.current_score

    def finalize(self, result: ReplayResult[AroundTheStatistics]) -> None:
        for player_id, stats in result.statistics.items():
            state = result.states[player_id]
            state.end_streak()
            rates = dict(state.extra["rates"])
            for target in rates:
                if target > state.current_score:
                    rates[target] = 0.0
            set_hit_rates(stats, rates)
            stats.total_hit_rate = sum(rates.values()) / BULL_TARGET
            stats.longest_streak = state.longest_streak

    def is_leg_finished(self, after: ReplayResult[AroundTheStatistics], visit: Visit) -> bool:
        state = after.states[visit.player_id]
        return state.current_score == BULL_TARGET and state.extra.get("bull_hit", False)
