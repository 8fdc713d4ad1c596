"""
Scoring Rule Configuration

Immutable configuration dataclass for scoring rule metadata.
"""

from dataclasses import dataclass

from scoring.match_types import MatchType


@dataclass(frozen=True)
class RuleConfig:
    """
    Immutable configuration for a scoring rule.

    Attributes:
        name: Internal name used for logging and the CLI (e.g., "x01")
        display_name: Human-readable name (e.g., "X01")
        match_types: Variants this rule replays
        table: Statistics table the rule's results are stored in
        rounds: Fixed number of rounds per leg, if the variant has one
    """

    name: str
    display_name: str
    match_types: tuple[MatchType, ...]
    table: str
    rounds: int | None = None

    def __post_init__(self):
        """Validate configuration."""
        if not self.name:
            raise ValueError("Rule name is required")
        if not self.match_types:
            raise ValueError("Rule must handle at least one match type")
        if not self.table:
            raise ValueError("Rule table is required")
