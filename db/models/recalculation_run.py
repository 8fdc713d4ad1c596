"""
Recalculation Run Model

Audit trail for statistics recalculation. Every run of the
recalculation driver, dry or applied, records what it selected,
how many updates it produced and how it ended.
"""

import uuid
from datetime import datetime

from peewee import (
    BooleanField,
    CharField,
    DateTimeField,
    IntegerField,
    SmallIntegerField,
    TextField,
    UUIDField,
)

from db.base import BaseModel


class RecalculationRun(BaseModel):
    """
    Tracks individual recalculation runs.

    Attributes:
        id: Unique identifier for the run
        pipeline_name: Name of the pipeline (e.g., "recalculate_statistics")
        match_type: Variant id being recalculated
        dry_run: True when updates were only logged
        started_at: When the run started
        completed_at: When the run finished (null if still running)
        status: Current status (running, success, failed)
        records_processed: Number of pending updates produced
        error_message: Error details if failed
    """

    id = UUIDField(primary_key=True, default=uuid.uuid4)
    pipeline_name = CharField(max_length=50, index=True)
    match_type = SmallIntegerField(null=True)
    dry_run = BooleanField(default=True)
    started_at = DateTimeField()
    completed_at = DateTimeField(null=True)
    status = CharField(max_length=20, index=True)  # running, success, failed
    records_processed = IntegerField(default=0)
    error_message = TextField(null=True)

    class Meta:
        table_name = "recalculation_runs"

    def __repr__(self) -> str:
        return (
            f"<RecalculationRun("
            f"id={self.id}, "
            f"type={self.match_type}, "
            f"dry_run={self.dry_run}, "
            f"status={self.status})>"
        )

    @classmethod
    def start_run(cls, pipeline_name: str, match_type: int | None, dry_run: bool) -> "RecalculationRun":
        """
        Create a new run record with status 'running'.

        Args:
            pipeline_name: Name of the pipeline being run
            match_type: Variant id being recalculated
            dry_run: Whether updates are only logged

        Returns:
            The created RecalculationRun instance
        """
        return cls.create(
            id=uuid.uuid4(),
            pipeline_name=pipeline_name,
            match_type=match_type,
            dry_run=dry_run,
            started_at=datetime.utcnow(),
            status="running",
        )

    def mark_success(self, records_processed: int = 0) -> None:
        self.status = "success"
        self.completed_at = datetime.utcnow()
        self.records_processed = records_processed
        self.save()

    def mark_failed(self, error_message: str) -> None:
        self.status = "failed"
        self.completed_at = datetime.utcnow()
        self.error_message = error_message
        self.save()

    @property
    def duration_seconds(self) -> float | None:
        """Calculate the duration of the run in seconds."""
        if self.completed_at and self.started_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    @classmethod
    def get_latest(cls, pipeline_name: str) -> "RecalculationRun | None":
        """Most recent run of a pipeline, whatever its status."""
        return (
            cls.select()
            .where(cls.pipeline_name == pipeline_name)
            .order_by(cls.started_at.desc())
            .first()
        )
