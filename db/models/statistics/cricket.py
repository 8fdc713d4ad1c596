from peewee import FloatField, IntegerField

from db.models.statistics.base import StatisticsModel


class StatisticsCricket(StatisticsModel):
    total_marks = IntegerField(default=0)
    rounds = IntegerField(default=0)
    score = IntegerField(default=0)
    first_nine_marks = IntegerField(default=0)
    mpr = FloatField(default=0)
    first_nine_mpr = FloatField(default=0)
    marks5 = IntegerField(default=0)
    marks6 = IntegerField(default=0)
    marks7 = IntegerField(default=0)
    marks8 = IntegerField(default=0)
    marks9 = IntegerField(default=0)

    class Meta:
        table_name = "statistics_cricket"
