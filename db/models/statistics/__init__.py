"""
Statistics Models

One table per variant, keyed by (leg_id, player_id). Around the Clock,
Around the World and Shanghai share `statistics_around_the`.
"""

from db.models.statistics.base import StatisticsModel
from db.models.statistics.x01 import StatisticsX01, StatisticsShootout
from db.models.statistics.cricket import StatisticsCricket
from db.models.statistics.practice import (
    StatisticsDartsAtX,
    StatisticsAroundThe,
    StatisticsBermudaTriangle,
    StatisticsFourTwenty,
    StatisticsJDCPractice,
    StatisticsKillBull,
)
from db.models.statistics.party import (
    StatisticsGotcha,
    StatisticsKnockout,
    StatisticsTicTacToe,
    StatisticsScam,
)

STATISTICS_MODELS: list[type[StatisticsModel]] = [
    StatisticsX01,
    StatisticsShootout,
    StatisticsCricket,
    StatisticsDartsAtX,
    StatisticsAroundThe,
    StatisticsBermudaTriangle,
    StatisticsFourTwenty,
    StatisticsJDCPractice,
    StatisticsKillBull,
    StatisticsGotcha,
    StatisticsKnockout,
    StatisticsTicTacToe,
    StatisticsScam,
]

# Lookup by table name, used when applying pending updates
STATISTICS_TABLES: dict[str, type[StatisticsModel]] = {
    model._meta.table_name: model for model in STATISTICS_MODELS
}

__all__ = [
    "StatisticsModel",
    "StatisticsX01",
    "StatisticsShootout",
    "StatisticsCricket",
    "StatisticsDartsAtX",
    "StatisticsAroundThe",
    "StatisticsBermudaTriangle",
    "StatisticsFourTwenty",
    "StatisticsJDCPractice",
    "StatisticsKillBull",
    "StatisticsGotcha",
    "StatisticsKnockout",
    "StatisticsTicTacToe",
    "StatisticsScam",
    "STATISTICS_MODELS",
    "STATISTICS_TABLES",
]
