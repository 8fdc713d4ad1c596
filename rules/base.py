"""
Base Scoring Rule

Abstract base class for all variant scoring rules. Every rule replays
the ordered visits of a leg and derives per-player states and
statistics from them. The live scoring path and the batch recalculation
path both go through `replay`, so they always agree.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, Optional

from core.exceptions import ConsistencyError
from core.logging import get_logger
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep, S
from scoring.visit import Visit

log = get_logger("rules")


class ScoringRule(ABC, Generic[S]):
    """
    Abstract base class for variant scoring rules.

    Subclasses must define:
        - config: RuleConfig class attribute
        - statistics_class: pydantic model the rule produces
        - apply_visit(): fold one visit into the states and statistics

    Subclasses may override:
        - initial_state(): per-player starting values
        - finalize(): derive ratios once every visit has been applied
        - prepare_visit(): normalize a new visit before it is stored
        - is_leg_finished() / winner() / eliminated(): live-path decisions

    Example:
        class MyRule(ScoringRule[MyStatistics]):
            config = RuleConfig(
                name="my_variant",
                display_name="My Variant",
                match_types=(MatchType.MY_VARIANT,),
                table="statistics_my_variant",
            )
            statistics_class = MyStatistics

            def apply_visit(self, step, result):
                ...
    """

    config: ClassVar[RuleConfig]
    statistics_class: ClassVar[type]

    def __init__(self):
        self.log = log.bind(rule=self.config.name)

    # ------------------------------------------------------------------ #
    # Replay
    # ------------------------------------------------------------------ #

    def replay(self, leg: LegRecord) -> ReplayResult[S]:
        """
        Replay every visit of `leg` in order.

        Raises:
            ConsistencyError: If a visit belongs to a player not in the leg
        """
        states = {
            player_id: self.initial_state(leg, player_id, order)
            for order, player_id in enumerate(leg.players, start=1)
        }
        statistics = {
            player_id: self.statistics_class(player_id=player_id)
            for player_id in leg.players
        }
        result: ReplayResult[S] = ReplayResult(leg=leg, states=states, statistics=statistics)

        num_players = max(len(leg.players), 1)
        for index, visit in enumerate(leg.visits):
            if visit.player_id not in states:
                raise ConsistencyError(
                    f"visit {visit.id} belongs to player {visit.player_id} who is not in leg {leg.id}"
                )
            step = ReplayStep(
                index=index,
                round=index // num_players + 1,
                visit=visit,
                state=states[visit.player_id],
                statistics=statistics[visit.player_id],
            )
            result.rounds = step.round
            self.apply_visit(step, result)

        self.finalize(result)
        return result

    def initial_state(self, leg: LegRecord, player_id: int, order: int) -> PlayerLegState:
        return PlayerLegState(
            player_id=player_id,
            order=order,
            current_score=leg.starting_score,
            handicap=leg.handicaps.get(player_id),
        )

    @abstractmethod
    def apply_visit(self, step: ReplayStep[S], result: ReplayResult[S]) -> None:
        """Fold one visit into the player's state and statistics."""
        pass

    def finalize(self, result: ReplayResult[S]) -> None:
        """Compute ratios after all visits were applied."""
        pass

    def calculate(self, leg: LegRecord) -> list[S]:
        """Statistics for every player of the leg, in player order."""
        return self.replay(leg).ordered_statistics()

    # ------------------------------------------------------------------ #
    # Live path
    # ------------------------------------------------------------------ #

    def prepare_visit(self, before: ReplayResult[S], visit: Visit) -> None:
        """Normalize a new visit against the state before it is thrown."""
        pass

    @abstractmethod
    def is_leg_finished(self, after: ReplayResult[S], visit: Visit) -> bool:
        """Decide whether `visit`, already replayed into `after`, ends the leg."""
        pass

    def verify_finish(self, after: ReplayResult[S], visit: Visit) -> None:
        """Raise ConsistencyError if `visit` cannot legally end the leg."""
        pass

    def winner(self, after: ReplayResult[S], visit: Visit) -> Optional[int]:
        """The player who won the finished leg. Defaults to the visit's player."""
        return visit.player_id

    def eliminated(self, result: ReplayResult[S]) -> set[int]:
        """Players no longer taking turns."""
        return set()

    def current_scores(self, result: ReplayResult[S]) -> dict[int, int]:
        return {player_id: state.current_score for player_id, state in result.states.items()}

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def highest_score(result: ReplayResult[S]) -> Optional[int]:
        """Player with the highest score. Ties go to the first in player order."""
        best: Optional[PlayerLegState] = None
        for state in result.states.values():
            if best is None or state.current_score > best.current_score:
                best = state
        return best.player_id if best else None

    @staticmethod
    def lowest_score(result: ReplayResult[S]) -> Optional[int]:
        """Player with the lowest score. Ties go to the first in player order."""
        best: Optional[PlayerLegState] = None
        for state in result.states.values():
            if best is None or state.current_score < best.current_score:
                best = state
        return best.player_id if best else None

    @staticmethod
    def completed_rounds(result: ReplayResult[S], rounds: int) -> bool:
        """True once every player has thrown `rounds` visits."""
        return len(result.leg.visits) >= rounds * len(result.leg.players)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({self.config.name})>"
