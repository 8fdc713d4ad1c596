"""
Scoring Rule Registry and Exports

Maps every match type to the rule that replays it, and provides helpers
for looking rules up by match type.
"""

from typing import Type

from rules.around_the_clock import AroundTheClockRule
from rules.around_the_world import AroundTheWorldRule, ShanghaiRule
from rules.base import ScoringRule
from rules.bermuda_triangle import BermudaTriangleRule
from rules.config import RuleConfig
from rules.context import LegRecord, PlayerLegState, ReplayResult, ReplayStep
from rules.cricket import CricketRule
from rules.darts_at_x import DartsAtXRule
from rules.four_twenty import FourTwentyRule
from rules.gotcha import GotchaRule
from rules.jdc_practice import JDCPracticeRule
from rules.kill_bull import KillBullRule
from rules.knockout import KnockoutRule
from rules.scam import ScamRule
from rules.tic_tac_toe import TicTacToeRule
from rules.x01 import ShootoutRule, X01Rule
from scoring.match_types import MatchType

_RULES: list[Type[ScoringRule]] = [
    # X01 family
    X01Rule,
    ShootoutRule,
    CricketRule,
    # Practice games
    DartsAtXRule,
    AroundTheClockRule,
    AroundTheWorldRule,
    ShanghaiRule,
    BermudaTriangleRule,
    FourTwentyRule,
    JDCPracticeRule,
    KillBullRule,
    # Party games
    GotchaRule,
    KnockoutRule,
    TicTacToeRule,
    ScamRule,
]

# Registry of rules by match type; X01 and X01 Handicap share a rule
STATISTICS_REGISTRY: dict[MatchType, Type[ScoringRule]] = {
    match_type: rule for rule in _RULES for match_type in rule.config.match_types
}


def get_rule(match_type: int) -> ScoringRule:
    """
    Get a rule instance for a match type.

    Args:
        match_type: Match type id (e.g., MatchType.CRICKET)

    Returns:
        Instantiated rule

    Raises:
        KeyError: If no rule is registered for the match type
    """
    try:
        key = MatchType(match_type)
    except ValueError:
        key = None
    if key not in STATISTICS_REGISTRY:
        available = ", ".join(match_type.display_name for match_type in STATISTICS_REGISTRY)
        raise KeyError(f"Unknown match type '{match_type}'. Available: {available}")

    return STATISTICS_REGISTRY[key]()


def list_rules() -> list[dict]:
    """List every registered rule with the tables it writes."""
    return [
        {
            "name": rule.config.name,
            "display_name": rule.config.display_name,
            "match_types": [int(match_type) for match_type in rule.config.match_types],
            "table": rule.config.table,
        }
        for rule in _RULES
    ]


__all__ = [
    # Base classes
    "ScoringRule",
    "RuleConfig",
    "LegRecord",
    "PlayerLegState",
    "ReplayResult",
    "ReplayStep",
    # Rules
    "X01Rule",
    "ShootoutRule",
    "CricketRule",
    "DartsAtXRule",
    "AroundTheClockRule",
    "AroundTheWorldRule",
    "ShanghaiRule",
    "BermudaTriangleRule",
    "FourTwentyRule",
    "JDCPracticeRule",
    "KillBullRule",
    "GotchaRule",
    "KnockoutRule",
    "TicTacToeRule",
    "ScamRule",
    # Registry functions
    "STATISTICS_REGISTRY",
    "get_rule",
    "list_rules",
]
