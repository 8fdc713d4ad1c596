"""
Recalculate Statistics Pipeline

Replays finished legs of one variant and rewrites their statistics rows.
Runs dry by default: every pending update is logged as a parameterized
statement and nothing is written. Applied runs write the whole batch in
one transaction.
"""

from datetime import datetime
from typing import Iterable, Optional, Union

from peewee import PeeweeException

from core.exceptions import TransactionError, ValidationError
from core.logging import get_logger
from core.settings import settings
from db.repository import DartsRepository
from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.updates import PendingUpdate
from rules import get_rule
from rules.base import ScoringRule
from schemas.statistics import VariantStatistics

log = get_logger("recalculation")

ALL_TIME = "(All Time)"
EPOCH = datetime(1970, 1, 1)


def parse_since(value: Optional[str]) -> datetime:
    """
    Parse a --since value.

    Args:
        value: ISO date or datetime, or "(All Time)"

    Returns:
        The lower bound on leg creation time
    """
    if value is None or value == ALL_TIME:
        return EPOCH
    return datetime.fromisoformat(value)


def _rule_for(match_type: int) -> ScoringRule:
    try:
        return get_rule(match_type)
    except KeyError as e:
        raise ValidationError(f"cannot recalculate statistics for type {match_type}") from e


def calculate_statistics(
    match_type: int,
    leg_id: int,
    repository: Optional[DartsRepository] = None,
) -> list[VariantStatistics]:
    """
    Replay one leg and return its statistics, in player order.

    Raises:
        ValidationError: If the variant has no rule or the leg is of another variant
        NotFoundError: If the leg does not exist
    """
    repository = repository or DartsRepository()
    rule = _rule_for(match_type)
    record = repository.load_leg_record(leg_id)
    if type(get_rule(record.match_type)) is not type(rule):
        raise ValidationError(f"leg {leg_id} is not of type {match_type}")
    return rule.calculate(record)


def collect_updates(
    repository: DartsRepository,
    match_type: int,
    leg_ids: Iterable[int],
) -> list[PendingUpdate]:
    """Pending updates of every leg, in leg then player order."""
    rule = _rule_for(match_type)
    updates = []
    for leg_id in leg_ids:
        for statistics in calculate_statistics(match_type, leg_id, repository):
            updates.append(PendingUpdate.from_statistics(rule.config.table, leg_id, statistics))
    return updates


def select_legs(
    repository: DartsRepository,
    match_type: int,
    leg_id: Union[int, Iterable[int], None] = None,
    since: Optional[datetime] = None,
) -> list[int]:
    """Explicit leg ids, or every finished leg of the variant created since `since`."""
    if leg_id is not None:
        return [leg_id] if isinstance(leg_id, int) else list(leg_id)
    return [leg.id for leg in repository.legs_of_type(match_type, finished_only=True, since=since or EPOCH)]


def recalculate_statistics(
    match_type: int,
    leg_id: Union[int, Iterable[int], None] = None,
    since: Optional[datetime] = None,
    dry_run: bool = True,
    repository: Optional[DartsRepository] = None,
    logger=None,
) -> list[PendingUpdate]:
    """
    Recalculate statistics of one variant.

    Args:
        match_type: Variant id
        leg_id: One leg id or several; when omitted every finished leg is selected
        since: Only legs created at or after this time
        dry_run: Log the statements instead of writing them
        repository: Persistence port, a fresh DartsRepository when omitted
        logger: Bound logger to report with

    Returns:
        The pending updates, in leg then player order

    Raises:
        ValidationError: If the variant has no rule
        TransactionError: If applying the batch failed; nothing was written
    """
    repository = repository or DartsRepository()
    logger = (logger or log).bind(match_type=match_type, dry_run=dry_run)
    _rule_for(match_type)

    leg_ids = select_legs(repository, match_type, leg_id, since)
    if not leg_ids:
        logger.info("no_legs_to_recalculate", since=since.isoformat() if since else None)
        return []

    updates = collect_updates(repository, match_type, leg_ids)

    if dry_run:
        for update in updates:
            logger.info(
                "recalculation_update",
                leg_id=update.leg_id,
                player_id=update.player_id,
                statement=update.render(repository),
            )
        return updates

    try:
        with repository.atomic():
            for update in updates:
                update.apply(repository)
    except PeeweeException as e:
        logger.error("recalculation_rolled_back", legs=len(leg_ids), error=str(e))
        raise TransactionError("recalculate statistics", e) from e

    logger.info("recalculation_applied", legs=len(leg_ids), updates=len(updates))
    return updates


class RecalculateStatisticsPipeline(BasePipeline):
    """
    Audited recalculation of one variant.

    Every run is recorded as a RecalculationRun; failures mark the run
    failed and are returned as an error result.
    """

    config = PipelineConfig(
        name="recalculate_statistics",
        display_name="Recalculate Statistics",
        description="Replays finished legs of a variant and rewrites their statistics rows",
        target_table="statistics_*",
    )

    def __init__(
        self,
        match_type: int,
        leg_id: Union[int, Iterable[int], None] = None,
        since: Optional[datetime] = None,
        dry_run: Optional[bool] = None,
        repository: Optional[DartsRepository] = None,
    ):
        super().__init__()
        self.match_type = match_type
        self.leg_id = leg_id
        self.since = since
        self.dry_run = settings.recalculation_dry_run if dry_run is None else dry_run
        self.repository = repository or DartsRepository()

    def create_context(self) -> PipelineContext:
        return PipelineContext(self.config.name, match_type=self.match_type, dry_run=self.dry_run)

    def execute(self, ctx: PipelineContext) -> None:
        updates = recalculate_statistics(
            self.match_type,
            leg_id=self.leg_id,
            since=self.since,
            dry_run=self.dry_run,
            repository=self.repository,
            logger=ctx.log,
        )
        rendered = [update.render(self.repository) for update in updates] if self.dry_run else None
        ctx.record_updates(updates, rendered)
