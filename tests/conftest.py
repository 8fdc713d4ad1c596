from __future__ import annotations

import pytest
from peewee import SqliteDatabase

from db.base import all_models, bind_database
from db.models import Match, OweType, Player
from db.repository import DartsRepository
from scoring.darts import Dart
from scoring.visit import Visit
from services.collaborators import BadgeCollaborator, EloCollaborator
from services.leg_service import LegService
from services.match_service import MatchService


class RecordingElo(EloCollaborator):
    def __init__(self) -> None:
        super().__init__()
        self.matches: list[int] = []

    def recalculate_elo_for_match(self, match_id: int) -> None:
        self.matches.append(match_id)


class RecordingBadges(BadgeCollaborator):
    def __init__(self, fail: bool = False) -> None:
        super().__init__()
        self.fail = fail
        self.checked: list[tuple[int, int]] = []

    def check_leg_for_badges(self, leg, visit) -> None:
        self.checked.append((leg.id, visit.id))
        if self.fail:
            raise RuntimeError("badge service unavailable")


@pytest.fixture
def database():
    database = SqliteDatabase(":memory:", pragmas={"foreign_keys": 1})
    bind_database(database)
    database.connect()
    database.create_tables(all_models())
    yield database
    database.drop_tables(all_models())
    database.close()


@pytest.fixture
def repository(database) -> DartsRepository:
    return DartsRepository()


@pytest.fixture
def elo() -> RecordingElo:
    return RecordingElo()


@pytest.fixture
def badges() -> RecordingBadges:
    return RecordingBadges()


@pytest.fixture
def match_service(repository, elo) -> MatchService:
    return MatchService(repository, elo=elo)


@pytest.fixture
def leg_service(repository, match_service, badges) -> LegService:
    return LegService(repository, match_service=match_service, badges=badges)


@pytest.fixture
def players(database) -> list[int]:
    return [Player.create(first_name=name).id for name in ("Anna", "Ben", "Cleo")]


@pytest.fixture
def make_match(database):
    def _make_match(match_type: int = 1, wins_required: int = 1, legs_required=None, owe_item=None) -> Match:
        owe_type = OweType.create(item=owe_item) if owe_item else None
        return Match.create(
            match_type=match_type,
            wins_required=wins_required,
            legs_required=legs_required,
            owe_type=owe_type,
        )

    return _make_match


def build_visit(leg_id: int, player_id: int, *darts: tuple[int, int] | int | None) -> Visit:
    """
    Build a visit from up to three darts.

    Each dart is a (value, multiplier) pair, a plain value thrown as a
    single, or None for a dart not thrown.
    """
    built = []
    for dart in darts:
        if dart is None:
            built.append(Dart())
        elif isinstance(dart, tuple):
            built.append(Dart(*dart))
        else:
            built.append(Dart(dart))
    built += [Dart() for _ in range(3 - len(built))]
    return Visit(leg_id=leg_id, player_id=player_id, first_dart=built[0], second_dart=built[1], third_dart=built[2])


@pytest.fixture
def make_visit():
    return build_visit
