"""
Practice Game Statistics

Tables for the single-player practice variants: Darts at X, the
Around-the family, Bermuda Triangle, 420, JDC Practice and Kill Bull.
"""

from peewee import FloatField, IntegerField

from db.models.statistics.base import StatisticsModel


class StatisticsDartsAtX(StatisticsModel):
    score = IntegerField(default=0)
    singles = IntegerField(default=0)
    doubles = IntegerField(default=0)
    triples = IntegerField(default=0)
    hit_rate = FloatField(default=0)
    hits5 = IntegerField(default=0)
    hits6 = IntegerField(default=0)
    hits7 = IntegerField(default=0)
    hits8 = IntegerField(default=0)
    hits9 = IntegerField(default=0)

    class Meta:
        table_name = "statistics_darts_at_x"


class StatisticsAroundThe(StatisticsModel):
    """Shared by Around the Clock, Around the World and Shanghai."""

    darts_thrown = IntegerField(default=0)
    score = IntegerField(default=0)
    longest_streak = IntegerField(null=True)
    total_hit_rate = FloatField(default=0)
    hit_rate_1 = FloatField(default=0)
    hit_rate_2 = FloatField(default=0)
    hit_rate_3 = FloatField(default=0)
    hit_rate_4 = FloatField(default=0)
    hit_rate_5 = FloatField(default=0)
    hit_rate_6 = FloatField(default=0)
    hit_rate_7 = FloatField(default=0)
    hit_rate_8 = FloatField(default=0)
    hit_rate_9 = FloatField(default=0)
    hit_rate_10 = FloatField(default=0)
    hit_rate_11 = FloatField(default=0)
    hit_rate_12 = FloatField(default=0)
    hit_rate_13 = FloatField(default=0)
    hit_rate_14 = FloatField(default=0)
    hit_rate_15 = FloatField(default=0)
    hit_rate_16 = FloatField(default=0)
    hit_rate_17 = FloatField(default=0)
    hit_rate_18 = FloatField(default=0)
    hit_rate_19 = FloatField(default=0)
    hit_rate_20 = FloatField(default=0)
    hit_rate_bull = FloatField(default=0)
    mpr = FloatField(null=True)
    shanghai = IntegerField(null=True)

    class Meta:
        table_name = "statistics_around_the"


class StatisticsBermudaTriangle(StatisticsModel):
    darts_thrown = IntegerField(default=0)
    score = IntegerField(default=0)
    mpr = FloatField(default=0)
    total_marks = IntegerField(default=0)
    highest_score_reached = IntegerField(default=0)
    total_hit_rate = FloatField(default=0)
    hit_rate_1 = FloatField(default=0)
    hit_rate_2 = FloatField(default=0)
    hit_rate_3 = FloatField(default=0)
    hit_rate_4 = FloatField(default=0)
    hit_rate_5 = FloatField(default=0)
    hit_rate_6 = FloatField(default=0)
    hit_rate_7 = FloatField(default=0)
    hit_rate_8 = FloatField(default=0)
    hit_rate_9 = FloatField(default=0)
    hit_rate_10 = FloatField(default=0)
    hit_rate_11 = FloatField(default=0)
    hit_rate_12 = FloatField(default=0)
    hit_rate_13 = FloatField(default=0)
    hit_count = IntegerField(default=0)

    class Meta:
        table_name = "statistics_bermuda_triangle"


class StatisticsFourTwenty(StatisticsModel):
    darts_thrown = IntegerField(default=0)
    score = IntegerField(default=0)
    total_hit_rate = FloatField(default=0)
    hit_rate_1 = FloatField(default=0)
    hit_rate_2 = FloatField(default=0)
    hit_rate_3 = FloatField(default=0)
    hit_rate_4 = FloatField(default=0)
    hit_rate_5 = FloatField(default=0)
    hit_rate_6 = FloatField(default=0)
    hit_rate_7 = FloatField(default=0)
    hit_rate_8 = FloatField(default=0)
    hit_rate_9 = FloatField(default=0)
    hit_rate_10 = FloatField(default=0)
    hit_rate_11 = FloatField(default=0)
    hit_rate_12 = FloatField(default=0)
    hit_rate_13 = FloatField(default=0)
    hit_rate_14 = FloatField(default=0)
    hit_rate_15 = FloatField(default=0)
    hit_rate_16 = FloatField(default=0)
    hit_rate_17 = FloatField(default=0)
    hit_rate_18 = FloatField(default=0)
    hit_rate_19 = FloatField(default=0)
    hit_rate_20 = FloatField(default=0)
    hit_rate_bull = FloatField(default=0)

    class Meta:
        table_name = "statistics_420"


class StatisticsJDCPractice(StatisticsModel):
    darts_thrown = IntegerField(default=0)
    score = IntegerField(default=0)
    mpr = FloatField(default=0)
    shanghai_count = IntegerField(default=0)
    doubles_hitrate = FloatField(default=0)

    class Meta:
        table_name = "statistics_jdc_practice"


class StatisticsKillBull(StatisticsModel):
    darts_thrown = IntegerField(default=0)
    score = IntegerField(default=0)
    marks3 = IntegerField(default=0)
    marks4 = IntegerField(default=0)
    marks5 = IntegerField(default=0)
    marks6 = IntegerField(default=0)
    longest_streak = IntegerField(default=0)
    times_busted = IntegerField(default=0)
    total_hit_rate = FloatField(default=0)

    class Meta:
        table_name = "statistics_kill_bull"
