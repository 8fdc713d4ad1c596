"""
Gotcha Scoring Rule

Race up to the target score. Landing on an opponent's exact score
sends that opponent back to zero.
"""

from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import GotchaStatistics
from scoring.match_types import MatchType
from scoring.visit import Visit


class GotchaRule(ScoringRule[GotchaStatistics]):
    config = RuleConfig(
        name="gotcha",
        display_name="Gotcha",
        match_types=(MatchType.GOTCHA,),
        table="statistics_gotcha",
    )
    statistics_class = GotchaStatistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        return PlayerLegState(player_id=player_id, order=order)

    def apply_visit(
        self, step: ReplayStep[GotchaStatistics], result: ReplayResult[GotchaStatistics]
    ) -> None:
        state, stats, visit = step.state, step.statistics, step.visit
        target = result.leg.starting_score

        if step.round > 1 and state.current_score == 0:
            stats.times_reset += 1

        running = state.current_score
        resets: dict[int, PlayerLegState] = {}
        bust = False
        for dart in visit.darts:
            if dart.is_miss():
                continue
            if running + dart.score() > target:
                bust = True
                break
            running += dart.score()
            for other in result.others(visit.player_id):
                if other.current_score == running:
                    resets[other.player_id] = other
            if running == target:
                break

        if not bust:
            for other in resets.values():
                other.current_score = 0
            stats.others_reset += len(resets)
            state.current_score = running

        state.darts_thrown += visit.count_darts_thrown()
        stats.darts_thrown = state.darts_thrown
        stats.score = state.current_score
        stats.highest_score = max(stats.highest_score, state.current_score)

    def finalize(self, result: ReplayResult[GotchaStatistics]) -> None:
        # Resets lower other players' scores after their own last visit
        for player_id, stats in result.statistics.items():
            stats.score = result.states[player_id].current_score

    def prepare_visit(self, before: ReplayResult[GotchaStatistics], visit: Visit) -> None:
        visit.set_is_bust_above(before.states[visit.player_id].current_score, before.leg.starting_score)

    def is_leg_finished(self, after: ReplayResult[GotchaStatistics], visit: Visit) -> bool:
        return after.states[visit.player_id].current_score == after.leg.starting_score
