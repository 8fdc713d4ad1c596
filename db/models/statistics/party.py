"""
Party Game Statistics

Tables for the multi-player elimination and race variants: Gotcha,
Knockout, Tic-Tac-Toe and Scam.
"""

from peewee import FloatField, IntegerField

from db.models.statistics.base import StatisticsModel


class StatisticsGotcha(StatisticsModel):
    darts_thrown = IntegerField(default=0)
    highest_score = IntegerField(default=0)
    times_reset = IntegerField(default=0)
    others_reset = IntegerField(default=0)
    score = IntegerField(default=0)

    class Meta:
        table_name = "statistics_gotcha"


class StatisticsKnockout(StatisticsModel):
    darts_thrown = IntegerField(default=0)
    avg_score = FloatField(default=0)
    lives_lost = IntegerField(default=0)
    lives_taken = IntegerField(default=0)
    final_position = IntegerField(default=0)

    class Meta:
        table_name = "statistics_knockout"


class StatisticsTicTacToe(StatisticsModel):
    darts_thrown = IntegerField(default=0)
    score = IntegerField(default=0)
    numbers_closed = IntegerField(default=0)
    highest_closed = IntegerField(default=0)

    class Meta:
        table_name = "statistics_tic_tac_toe"


class StatisticsScam(StatisticsModel):
    darts_thrown_stopper = IntegerField(default=0)
    darts_thrown_scorer = IntegerField(default=0)
    mpr = FloatField(default=0)
    ppd = FloatField(default=0)
    three_dart_avg = FloatField(default=0)
    score = IntegerField(default=0)

    class Meta:
        table_name = "statistics_scam"
