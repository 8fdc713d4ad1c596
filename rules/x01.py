"""
X01 Scoring Rules

X01 (with X01 Handicap) and the 9 Dart Shootout. Both count visit
scores the same way, so they share the score bucket helper.
"""

from typing import Optional

from core.exceptions import ConsistencyError
from rules.base import ScoringRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from schemas.statistics import ShootoutStatistics, X01Statistics
from scoring.darts import Dart
from scoring.match_types import MatchType
from scoring.visit import Visit

# Weight of each segment when aiming for 20 or 19. Neighbours score less.
ACCURACY_BANDS: dict[int, dict[int, int]] = {
    20: {20: 100, 5: 70, 1: 70, 12: 30, 18: 30, 9: 5, 4: 5},
    19: {19: 100, 7: 70, 3: 70, 16: 30, 17: 30, 8: 5, 2: 5},
}

# Accuracy is only tracked while the player is still scoring, not finishing
ACCURACY_MIN_REMAINING = 171

FIRST_NINE_DARTS = 9

SHOOTOUT_DARTS = 9


def count_score_bucket(statistics, visit_score: int) -> None:
    """Increment the 60+, 100+, 140+ or 180 counter the visit falls in."""
    if 60 <= visit_score < 100:
        statistics.score_60s_plus += 1
    elif 100 <= visit_score < 140:
        statistics.score_100s_plus += 1
    elif 140 <= visit_score < 180:
        statistics.score_140s_plus += 1
    elif visit_score == 180:
        statistics.score_180s += 1


class AccuracyTally:
    """Running accuracy for darts thrown at the 20 and 19 segments."""

    def __init__(self) -> None:
        self.points = {band: 0 for band in ACCURACY_BANDS}
        self.attempts = {band: 0 for band in ACCURACY_BANDS}
        self.misses = 0

    def add(self, remaining: int, dart: Dart) -> None:
        if remaining - dart.score() < ACCURACY_MIN_REMAINING:
            return
        for band, weights in ACCURACY_BANDS.items():
            if dart.value in weights:
                self.attempts[band] += 1
                self.points[band] += weights[dart.value]
                return
        self.misses += 1

    def band(self, band: int) -> Optional[float]:
        if self.attempts[band] == 0:
            return None
        return self.points[band] / self.attempts[band]

    def overall(self) -> Optional[float]:
        darts = sum(self.attempts.values()) + self.misses
        if darts == 0:
            return None
        return sum(self.points.values()) / darts


class X01Rule(ScoringRule[X01Statistics]):
    """
    X01 and X01 Handicap.

    Busts are recomputed from the darts on every replay, so the result
    depends only on the thrown darts and never on a stored bust flag.
    """

    config = RuleConfig(
        name="x01",
        display_name="X01",
        match_types=(MatchType.X01, MatchType.X01HANDICAP),
        table="statistics_x01",
    )
    statistics_class = X01Statistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        state = super().initial_state(leg, player_id, order)
        state.current_score += state.handicap or 0
        state.extra["accuracy"] = AccuracyTally()
        return state

    def apply_visit(self, step: ReplayStep[X01Statistics], result: ReplayResult[X01Statistics]) -> None:
        outshot = result.leg.outshot_type
        state, stats, visit = step.state, step.statistics, step.visit

        current = state.current_score
        outcome = visit.walk(current, outshot)

        remaining = current
        for dart_index, dart in enumerate(outcome.darts, start=1):
            if dart.is_checkout_attempt(remaining, dart_index, outshot):
                stats.checkout_attempts += 1
            remaining -= dart.score()

        # Darts voided by a bust or checkout are not thrown
        darts_before = state.darts_thrown
        state.darts_thrown += len(outcome.darts)
        stats.darts_thrown = state.darts_thrown
        if outcome.is_checkout:
            stats.checkout = current

        if outcome.is_bust:
            return

        visit_score = current - outcome.remaining
        stats.first_nine_ppd_score += sum(
            dart.score()
            for index, dart in enumerate(outcome.darts)
            if darts_before + index < FIRST_NINE_DARTS
        )
        stats.ppd_score += visit_score
        count_score_bucket(stats, visit_score)

        accuracy: AccuracyTally = state.extra["accuracy"]
        remaining = current
        for thrown, dart in zip(visit.darts, outcome.darts):
            if thrown.is_thrown():
                accuracy.add(remaining, dart)
                remaining -= dart.score()

        state.current_score = outcome.remaining

    def finalize(self, result: ReplayResult[X01Statistics]) -> None:
        for player_id, stats in result.statistics.items():
            accuracy: AccuracyTally = result.states[player_id].extra["accuracy"]
            stats.accuracy_20 = accuracy.band(20)
            stats.accuracy_19 = accuracy.band(19)
            stats.overall_accuracy = accuracy.overall()

            if stats.checkout is not None and stats.checkout_attempts > 0:
                stats.checkout_percentage = 100 / stats.checkout_attempts
            else:
                stats.checkout_percentage = None

            if stats.darts_thrown > 0:
                stats.ppd = stats.ppd_score / stats.darts_thrown
                stats.first_nine_ppd = stats.first_nine_ppd_score / min(stats.darts_thrown, FIRST_NINE_DARTS)
            stats.three_dart_avg = stats.ppd * 3
            stats.first_nine_three_dart_avg = stats.first_nine_ppd * 3

    def prepare_visit(self, before: ReplayResult[X01Statistics], visit: Visit) -> None:
        visit.set_is_bust(before.states[visit.player_id].current_score, before.leg.outshot_type)

    def is_leg_finished(self, after: ReplayResult[X01Statistics], visit: Visit) -> bool:
        return after.states[visit.player_id].current_score == 0

    def verify_finish(self, after: ReplayResult[X01Statistics], visit: Visit) -> None:
        if after.states[visit.player_id].current_score != 0:
            raise ConsistencyError("visit does not check out the leg")


class ShootoutRule(ScoringRule[ShootoutStatistics]):
    """Nine darts each, highest score wins."""

    config = RuleConfig(
        name="shootout",
        display_name="9 Dart Shootout",
        match_types=(MatchType.SHOOTOUT,),
        table="statistics_shootout",
        rounds=SHOOTOUT_DARTS // 3,
    )
    statistics_class = ShootoutStatistics

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        return PlayerLegState(player_id=player_id, order=order)

    def apply_visit(
        self, step: ReplayStep[ShootoutStatistics], result: ReplayResult[ShootoutStatistics]
    ) -> None:
        state, stats = step.state, step.statistics
        visit_score = step.visit.score()

        state.current_score += visit_score
        state.darts_thrown += 3
        stats.score = state.current_score
        stats.darts_thrown = state.darts_thrown
        count_score_bucket(stats, visit_score)

    def finalize(self, result: ReplayResult[ShootoutStatistics]) -> None:
        for stats in result.statistics.values():
            if stats.darts_thrown > 0:
                stats.ppd = stats.score / stats.darts_thrown

    def is_leg_finished(self, after: ReplayResult[ShootoutStatistics], visit: Visit) -> bool:
        if not self.completed_rounds(after, self.config.rounds):
            return False
        states = list(after.states.values())
        if len(states) == 2:
            # Heads-up shootouts continue round by round until the scores differ
            first, second = states
            return (
                first.darts_thrown == second.darts_thrown
                and first.current_score != second.current_score
            )
        return True

    def winner(self, after: ReplayResult[ShootoutStatistics], visit: Visit) -> Optional[int]:
        return self.highest_score(after)
