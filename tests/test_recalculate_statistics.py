from __future__ import annotations

from datetime import datetime

import pytest
from peewee import IntegrityError

from core.exceptions import TransactionError, ValidationError
from core.logging import get_correlation_id
from db.models import Leg, Match, RecalculationRun
from db.models.statistics import StatisticsX01
from pipelines import get_pipeline, list_pipelines
from pipelines.recalculate_statistics import (
    EPOCH,
    RecalculateStatisticsPipeline,
    calculate_statistics,
    parse_since,
    recalculate_statistics,
)
from pipelines.updates import PendingUpdate
from schemas.common import ApiStatus
from scoring.darts import DOUBLE
from scoring.match_types import MatchType


@pytest.fixture
def finished_legs(leg_service, make_match, make_visit, players) -> list[int]:
    """Two finished heads-up X01 legs, each checked out from 40 in one visit."""
    a, b = players[:2]
    match = make_match(wins_required=2)
    first = leg_service.new_leg(match.id, starting_score=40, players=[a, b])
    leg_service.add_visit(make_visit(first.id, b, (20, DOUBLE)))
    second = leg_service.new_leg(match.id)
    leg_service.add_visit(make_visit(second.id, a, (20, DOUBLE)))
    return [first.id, second.id]


def corrupt(leg_id: int) -> None:
    StatisticsX01.update(ppd=0, darts_thrown=99).where(StatisticsX01.leg == leg_id).execute()


def test_parse_since() -> None:
    assert parse_since("(All Time)") == EPOCH
    assert parse_since(None) == datetime(1970, 1, 1)
    assert parse_since("2024-03-01") == datetime(2024, 3, 1)


def test_unknown_type_is_rejected(repository) -> None:
    with pytest.raises(ValidationError, match="cannot recalculate statistics for type 99"):
        recalculate_statistics(99, repository=repository)


def test_no_legs_returns_empty(repository) -> None:
    assert recalculate_statistics(MatchType.CRICKET, repository=repository) == []


def test_calculate_statistics_for_one_leg(repository, finished_legs, players) -> None:
    a, b = players[:2]

    stats = calculate_statistics(MatchType.X01, finished_legs[0], repository)

    assert [row.player_id for row in stats] == [b, a]
    assert stats[0].checkout == 40
    assert stats[0].darts_thrown == 1


def test_calculate_statistics_rejects_other_variant(repository, finished_legs) -> None:
    with pytest.raises(ValidationError, match="is not of type"):
        calculate_statistics(MatchType.CRICKET, finished_legs[0], repository)


def test_dry_run_writes_nothing_and_is_repeatable(repository, finished_legs) -> None:
    corrupt(finished_legs[0])

    first = recalculate_statistics(MatchType.X01, dry_run=True, repository=repository)
    second = recalculate_statistics(MatchType.X01, dry_run=True, repository=repository)

    assert len(first) == 4
    assert [update.leg_id for update in first] == [finished_legs[0]] * 2 + [finished_legs[1]] * 2
    assert [update.render(repository) for update in first] == [update.render(repository) for update in second]
    assert 'UPDATE "statistics_x01"' in first[0].render(repository)
    assert StatisticsX01.get(StatisticsX01.leg == finished_legs[0]).darts_thrown == 99


def test_apply_rewrites_rows(repository, finished_legs, players) -> None:
    corrupt(finished_legs[0])

    recalculate_statistics(MatchType.X01, dry_run=False, repository=repository)

    row = StatisticsX01.get((StatisticsX01.leg == finished_legs[0]) & (StatisticsX01.player == players[1]))
    assert row.darts_thrown == 1
    assert row.ppd == pytest.approx(40.0)


def test_apply_inserts_missing_rows(repository, finished_legs) -> None:
    repository.delete_statistics(finished_legs[1])

    recalculate_statistics(MatchType.X01, leg_id=finished_legs[1], dry_run=False, repository=repository)

    assert StatisticsX01.select().where(StatisticsX01.leg == finished_legs[1]).count() == 2


def test_apply_failure_rolls_back_batch(repository, finished_legs, monkeypatch) -> None:
    corrupt(finished_legs[0])
    calls = []
    original = repository.update_statistics

    def flaky(table, leg_id, player_id, values):
        calls.append(leg_id)
        if len(calls) == 3:
            raise IntegrityError("constraint failed")
        return original(table, leg_id, player_id, values)

    monkeypatch.setattr(repository, "update_statistics", flaky)

    with pytest.raises(TransactionError, match="recalculate statistics failed"):
        recalculate_statistics(MatchType.X01, dry_run=False, repository=repository)

    assert StatisticsX01.get(StatisticsX01.leg == finished_legs[0]).darts_thrown == 99


def test_selection_skips_unfinished_abandoned_and_old_legs(repository, finished_legs, make_match, players) -> None:
    abandoned = make_match()
    Match.update(is_abandoned=True).where(Match.id == abandoned.id).execute()
    Leg.create(match=abandoned.id, starting_score=301, is_finished=True)
    Leg.create(match=make_match().id, starting_score=301)
    Leg.update(created_at=datetime(2000, 1, 1)).where(Leg.id == finished_legs[0]).execute()

    updates = recalculate_statistics(MatchType.X01, since=datetime(2020, 1, 1), repository=repository)

    assert {update.leg_id for update in updates} == {finished_legs[1]}


def test_pending_update_apply(repository, finished_legs, players) -> None:
    update = PendingUpdate("statistics_x01", finished_legs[0], players[1], {"darts_thrown": 7})

    assert update.apply(repository) == 1
    assert StatisticsX01.get(
        (StatisticsX01.leg == finished_legs[0]) & (StatisticsX01.player == players[1])
    ).darts_thrown == 7


def test_pipeline_records_run(repository, finished_legs) -> None:
    result = RecalculateStatisticsPipeline(MatchType.X01, dry_run=True, repository=repository).run()

    assert result.status == ApiStatus.SUCCESS
    assert result.records_processed == 4
    assert result.legs_processed == 2
    assert len(result.statements) == 4
    run = RecalculationRun.get_latest("recalculate_statistics")
    assert run.status == "success"
    assert run.dry_run
    assert run.records_processed == 4
    assert get_correlation_id() == ""


def test_pipeline_failure_marks_run_failed(repository) -> None:
    result = get_pipeline("recalculate_statistics", match_type=99, repository=repository).run()

    assert result.status == ApiStatus.ERROR
    assert "cannot recalculate statistics" in result.error
    assert RecalculationRun.get_latest("recalculate_statistics").status == "failed"


def test_list_pipelines() -> None:
    assert [info["name"] for info in list_pipelines()] == ["recalculate_statistics"]
