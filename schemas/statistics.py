"""
Variant Statistics Schemas

One model per variant. Field names equal the columns of the matching
statistics table, so `column_values()` can be written as-is.
"""

from typing import Any, Optional

from pydantic import BaseModel


class VariantStatistics(BaseModel):
    """Fields shared by every statistics row."""

    player_id: int

    def column_values(self) -> dict[str, Any]:
        """Column -> value map, without the row key."""
        return self.model_dump(exclude={"player_id"})


# ------------------------------- X01 ------------------------------- #

class X01Statistics(VariantStatistics):
    ppd: float = 0.0
    ppd_score: int = 0
    first_nine_ppd: float = 0.0
    first_nine_ppd_score: int = 0
    three_dart_avg: float = 0.0
    first_nine_three_dart_avg: float = 0.0
    checkout: Optional[int] = None
    checkout_attempts: int = 0
    checkout_percentage: Optional[float] = None
    darts_thrown: int = 0
    score_60s_plus: int = 0
    score_100s_plus: int = 0
    score_140s_plus: int = 0
    score_180s: int = 0
    accuracy_20: Optional[float] = None
    accuracy_19: Optional[float] = None
    overall_accuracy: Optional[float] = None


class ShootoutStatistics(VariantStatistics):
    score: int = 0
    ppd: float = 0.0
    darts_thrown: int = 0
    score_60s_plus: int = 0
    score_100s_plus: int = 0
    score_140s_plus: int = 0
    score_180s: int = 0


# ------------------------------- Cricket ------------------------------- #

class CricketStatistics(VariantStatistics):
    total_marks: int = 0
    rounds: int = 0
    score: int = 0
    first_nine_marks: int = 0
    mpr: float = 0.0
    first_nine_mpr: float = 0.0
    marks5: int = 0
    marks6: int = 0
    marks7: int = 0
    marks8: int = 0
    marks9: int = 0


# ------------------------------- Practice games ------------------------------- #

class DartsAtXStatistics(VariantStatistics):
    score: int = 0
    singles: int = 0
    doubles: int = 0
    triples: int = 0
    hit_rate: float = 0.0
    hits5: int = 0
    hits6: int = 0
    hits7: int = 0
    hits8: int = 0
    hits9: int = 0


class AroundTheStatistics(VariantStatistics):
    """Shared by Around the Clock, Around the World and Shanghai."""

    darts_thrown: int = 0
    score: int = 0
    longest_streak: Optional[int] = None
    total_hit_rate: float = 0.0
    hit_rate_1: float = 0.0
    hit_rate_2: float = 0.0
    hit_rate_3: float = 0.0
    hit_rate_4: float = 0.0
    hit_rate_5: float = 0.0
    hit_rate_6: float = 0.0
    hit_rate_7: float = 0.0
    hit_rate_8: float = 0.0
    hit_rate_9: float = 0.0
    hit_rate_10: float = 0.0
    hit_rate_11: float = 0.0
    hit_rate_12: float = 0.0
    hit_rate_13: float = 0.0
    hit_rate_14: float = 0.0
    hit_rate_15: float = 0.0
    hit_rate_16: float = 0.0
    hit_rate_17: float = 0.0
    hit_rate_18: float = 0.0
    hit_rate_19: float = 0.0
    hit_rate_20: float = 0.0
    hit_rate_bull: float = 0.0
    mpr: Optional[float] = None
    shanghai: Optional[int] = None


class BermudaTriangleStatistics(VariantStatistics):
    darts_thrown: int = 0
    score: int = 0
    mpr: float = 0.0
    total_marks: int = 0
    highest_score_reached: int = 0
    total_hit_rate: float = 0.0
    hit_rate_1: float = 0.0
    hit_rate_2: float = 0.0
    hit_rate_3: float = 0.0
    hit_rate_4: float = 0.0
    hit_rate_5: float = 0.0
    hit_rate_6: float = 0.0
    hit_rate_7: float = 0.0
    hit_rate_8: float = 0.0
    hit_rate_9: float = 0.0
    hit_rate_10: float = 0.0
    hit_rate_11: float = 0.0
    hit_rate_12: float = 0.0
    hit_rate_13: float = 0.0
    hit_count: int = 0


class FourTwentyStatistics(VariantStatistics):
    darts_thrown: int = 0
    score: int = 0
    total_hit_rate: float = 0.0
    hit_rate_1: float = 0.0
    hit_rate_2: float = 0.0
    hit_rate_3: float = 0.0
    hit_rate_4: float = 0.0
    hit_rate_5: float = 0.0
    hit_rate_6: float = 0.0
    hit_rate_7: float = 0.0
    hit_rate_8: float = 0.0
    hit_rate_9: float = 0.0
    hit_rate_10: float = 0.0
    hit_rate_11: float = 0.0
    hit_rate_12: float = 0.0
    hit_rate_13: float = 0.0
    hit_rate_14: float = 0.0
    hit_rate_15: float = 0.0
    hit_rate_16: float = 0.0
    hit_rate_17: float = 0.0
    hit_rate_18: float = 0.0
    hit_rate_19: float = 0.0
    hit_rate_20: float = 0.0
    hit_rate_bull: float = 0.0


class JDCPracticeStatistics(VariantStatistics):
    darts_thrown: int = 0
    score: int = 0
    mpr: float = 0.0
    shanghai_count: int = 0
    doubles_hitrate: float = 0.0


class KillBullStatistics(VariantStatistics):
    darts_thrown: int = 0
    score: int = 0
    marks3: int = 0
    marks4: int = 0
    marks5: int = 0
    marks6: int = 0
    longest_streak: int = 0
    times_busted: int = 0
    total_hit_rate: float = 0.0


# ------------------------------- Party games ------------------------------- #

class GotchaStatistics(VariantStatistics):
    darts_thrown: int = 0
    highest_score: int = 0
    times_reset: int = 0
    others_reset: int = 0
    score: int = 0


class KnockoutStatistics(VariantStatistics):
    darts_thrown: int = 0
    avg_score: float = 0.0
    lives_lost: int = 0
    lives_taken: int = 0
    final_position: int = 0


class TicTacToeStatistics(VariantStatistics):
    darts_thrown: int = 0
    score: int = 0
    numbers_closed: int = 0
    highest_closed: int = 0


class ScamStatistics(VariantStatistics):
    darts_thrown_stopper: int = 0
    darts_thrown_scorer: int = 0
    mpr: float = 0.0
    ppd: float = 0.0
    three_dart_avg: float = 0.0
    score: int = 0
