from peewee import FloatField, IntegerField

from db.models.statistics.base import StatisticsModel


class StatisticsX01(StatisticsModel):
    """X01 and X01 Handicap statistics."""

    ppd = FloatField(default=0)
    ppd_score = IntegerField(default=0)
    first_nine_ppd = FloatField(default=0)
    first_nine_ppd_score = IntegerField(default=0)
    three_dart_avg = FloatField(default=0)
    first_nine_three_dart_avg = FloatField(default=0)
    checkout = IntegerField(null=True)
    checkout_attempts = IntegerField(default=0)
    checkout_percentage = FloatField(null=True)
    darts_thrown = IntegerField(default=0)
    score_60s_plus = IntegerField(default=0, column_name="60s_plus")
    score_100s_plus = IntegerField(default=0, column_name="100s_plus")
    score_140s_plus = IntegerField(default=0, column_name="140s_plus")
    score_180s = IntegerField(default=0, column_name="180s")
    accuracy_20 = FloatField(null=True)
    accuracy_19 = FloatField(null=True)
    overall_accuracy = FloatField(null=True)

    class Meta:
        table_name = "statistics_x01"


class StatisticsShootout(StatisticsModel):
    """9 Dart Shootout statistics."""

    score = IntegerField(default=0)
    ppd = FloatField(default=0)
    darts_thrown = IntegerField(default=0)
    score_60s_plus = IntegerField(default=0, column_name="60s_plus")
    score_100s_plus = IntegerField(default=0, column_name="100s_plus")
    score_140s_plus = IntegerField(default=0, column_name="140s_plus")
    score_180s = IntegerField(default=0, column_name="180s")

    class Meta:
        table_name = "statistics_shootout"
