"""
Darts at X Scoring Rule

99 darts at a single number, the leg's starting score.
"""

from typing import Optional

from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import DartsAtXStatistics
from scoring.match_types import MatchType
from scoring.visit import Visit

DARTS_PER_PLAYER = 99


class DartsAtXRule(ScoringRule[DartsAtXStatistics]):
    config = RuleConfig(
        name="darts_at_x",
        display_name="Darts at X",
        match_types=(MatchType.DARTSATX,),
        table="statistics_darts_at_x",
        rounds=DARTS_PER_PLAYER // 3,
    )
    statistics_class = DartsAtXStatistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        return PlayerLegState(player_id=player_id, order=order)

    def apply_visit(
        self, step: ReplayStep[DartsAtXStatistics], result: ReplayResult[DartsAtXStatistics]
    ) -> None:
        number = result.leg.starting_score
        state, stats = step.state, step.statistics

        hits = 0
        for dart in step.visit.darts:
            if dart.is_miss() or dart.value != number:
                continue
            if dart.is_triple():
                stats.triples += 1
            elif dart.is_double():
                stats.doubles += 1
            else:
                stats.singles += 1
            hits += dart.multiplier

        state.current_score += hits
        state.darts_thrown += 3
        stats.score = state.current_score
        if 5 <= hits <= 9:
            field = f"hits{hits}"
            setattr(stats, field, getattr(stats, field) + 1)

    def finalize(self, result: ReplayResult[DartsAtXStatistics]) -> None:
        for stats in result.statistics.values():
            stats.hit_rate = (stats.singles + stats.doubles + stats.triples) / DARTS_PER_PLAYER

    def is_leg_finished(self, after: ReplayResult[DartsAtXStatistics], visit: Visit) -> bool:
        return self.completed_rounds(after, self.config.rounds)

    def winner(self, after: ReplayResult[DartsAtXStatistics], visit: Visit) -> Optional[int]:
        return self.highest_score(after)
