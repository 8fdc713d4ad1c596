"""
Kill Bull Scoring Rule

Count down from the starting score with bulls only. A visit without a
bull starts the player over.
"""

from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import KillBullStatistics
from scoring.match_types import MatchType
from scoring.visit import Visit


class KillBullRule(ScoringRule[KillBullStatistics]):
    config = RuleConfig(
        name="kill_bull",
        display_name="Kill Bull",
        match_types=(MatchType.KILLBULL,),
        table="statistics_kill_bull",
    )
    statistics_class = KillBullStatistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        state = super().initial_state(leg, player_id, order)
        state.extra["bull_hits"] = 0
        return state

    def apply_visit(
        self, step: ReplayStep[KillBullStatistics], result: ReplayResult[KillBullStatistics]
    ) -> None:
        state, stats, visit = step.state, step.statistics, step.visit
        starting_score = result.leg.starting_score

        bulls = [dart for dart in visit.darts if dart.is_bull()]
        score = sum(dart.score() for dart in bulls)
        marks = sum(dart.multiplier for dart in bulls)

        if score == 0:
            if state.current_score < starting_score:
                stats.times_busted += 1
            state.current_score = starting_score
        else:
            state.current_score = max(state.current_score - score, 0)

        if marks > 0:
            state.current_streak += 1
        else:
            state.end_streak()
        if 3 <= marks <= 6:
            field = f"marks{marks}"
            setattr(stats, field, getattr(stats, field) + 1)

        state.extra["bull_hits"] += len(bulls)
        state.darts_thrown += visit.count_darts_thrown()
        stats.darts_thrown = state.darts_thrown
        stats.score = state.current_score

    def finalize(self, result: ReplayResult[KillBullStatistics]) -> None:
        for player_id, stats in result.statistics.items():
            state = result.states[player_id]
            stats.longest_streak = max(state.longest_streak, state.current_streak)
            if stats.darts_thrown > 0:
                stats.total_hit_rate = state.extra["bull_hits"] / stats.darts_thrown

    def is_leg_finished(self, after: ReplayResult[KillBullStatistics], visit: Visit) -> bool:
        return after.states[visit.player_id].current_score <= 0
