"""
Knockout Scoring Rule

Every visit has to beat the one before it. Scoring less than the
previous player costs a life, and the previous player takes it.
"""

from typing import Optional

from core.settings import settings
from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import KnockoutStatistics
from scoring.match_types import MatchType
from scoring.visit import Visit


class KnockoutRule(ScoringRule[KnockoutStatistics]):
    config = RuleConfig(
        name="knockout",
        display_name="Knockout",
        match_types=(MatchType.KNOCKOUT,),
        table="statistics_knockout",
    )
    statistics_class = KnockoutStatistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        lives = leg.starting_lives or settings.default_starting_lives
        state = PlayerLegState(player_id=player_id, order=order, lives=lives, current_score=lives)
        state.extra["total_score"] = 0
        return state

    def apply_visit(
        self, step: ReplayStep[KnockoutStatistics], result: ReplayResult[KnockoutStatistics]
    ) -> None:
        state, stats, visit = step.state, step.statistics, step.visit
        visit_score = visit.score()

        state.extra["total_score"] += visit_score
        state.darts_thrown += 3
        stats.darts_thrown = state.darts_thrown

        if step.index == 0:
            return
        previous = result.leg.visits[step.index - 1]
        if previous.score() > visit_score:
            state.lives -= 1
            state.current_score = state.lives
            stats.lives_lost += 1
            result.statistics[previous.player_id].lives_taken += 1

            if state.lives == 0:
                # Positions are handed out from the bottom up
                position = result.extra.get("next_position", len(result.leg.players))
                stats.final_position = position
                result.extra["next_position"] = position - 1

    def finalize(self, result: ReplayResult[KnockoutStatistics]) -> None:
        remaining_position = result.extra.get("next_position", len(result.leg.players))
        for player_id, stats in result.statistics.items():
            state = result.states[player_id]
            if stats.darts_thrown > 0:
                stats.avg_score = state.extra["total_score"] / (stats.darts_thrown // 3)
            if stats.final_position == 0:
                stats.final_position = remaining_position

    def eliminated(self, result: ReplayResult[KnockoutStatistics]) -> set[int]:
        return {player_id for player_id, state in result.states.items() if state.lives <= 0}

    def is_leg_finished(self, after: ReplayResult[KnockoutStatistics], visit: Visit) -> bool:
        return len(after.states) - len(self.eliminated(after)) < 2

    def winner(self, after: ReplayResult[KnockoutStatistics], visit: Visit) -> Optional[int]:
        alive = [player_id for player_id, state in after.states.items() if state.lives > 0]
        return alive[0] if alive else visit.player_id
