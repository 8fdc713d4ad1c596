# Import all models to ensure they are registered with the database
from .players import Player
from .matches import OweType, Match
from .legs import Leg, LegParameters, Player2Leg
from .visits import Score
from .owes import Owe
from .recalculation_run import RecalculationRun

__all__ = [
    'Player', 'OweType', 'Match', 'Leg', 'LegParameters', 'Player2Leg',
    'Score', 'Owe', 'RecalculationRun',
]
