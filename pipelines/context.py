"""
Pipeline Context

Manages pipeline execution context including run tracking, logging, and timing.
"""

from __future__ import annotations

import traceback
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

import pytz

from core.logging import get_logger, reset_correlation_id, set_correlation_id
from db.models.recalculation_run import RecalculationRun
from schemas.common import ApiStatus
from schemas.pipeline import RecalculationResult


@dataclass
class PipelineContext:
    """
    Manages pipeline execution context including:
    - Correlation ID for log tracing
    - RecalculationRun database record
    - Timing information
    - Records processed counter and the statements a run produced

    Usage:
        ctx = PipelineContext("recalculate_statistics", match_type=1)
        ctx.start_tracking()
        try:
            # Do work
            ctx.increment_records(10)
            return ctx.mark_success()
        except Exception as e:
            return ctx.mark_failed(e)
    """

    pipeline_name: str
    match_type: Optional[int] = None
    dry_run: bool = True
    run_id: uuid.UUID = field(default_factory=uuid.uuid4)
    started_at: datetime = field(default_factory=lambda: datetime.now(pytz.utc))
    records_processed: int = 0
    legs_processed: int = 0
    statements: list[str] = field(default_factory=list)

    _db_run: Optional[RecalculationRun] = field(default=None, repr=False)
    _log: Any = field(default=None, repr=False)
    _cid_token: Any = field(default=None, repr=False)

    def __post_init__(self):
        """Initialize the bound logger."""
        self._log = get_logger("pipeline").bind(
            pipeline=self.pipeline_name,
            run_id=str(self.run_id),
            match_type=self.match_type,
            dry_run=self.dry_run,
        )

    @property
    def log(self):
        """Get the bound logger for this context."""
        return self._log

    def start_tracking(self) -> None:
        """
        Create RecalculationRun record in database.

        This creates the audit trail record and updates the run_id
        to match the database record.
        """
        self._db_run = RecalculationRun.start_run(self.pipeline_name, self.match_type, self.dry_run)
        self.run_id = self._db_run.id
        self._cid_token = set_correlation_id(str(self.run_id))
        self._log = self._log.bind(run_id=str(self.run_id))
        self._log.info("pipeline_started")

    def increment_records(self, count: int = 1) -> None:
        """Increment the records processed counter."""
        self.records_processed += count

    def record_updates(self, updates, rendered: Optional[list[str]] = None) -> None:
        """Count a batch of pending updates; keep their statements on a dry run."""
        self.legs_processed += len({update.leg_id for update in updates})
        self.increment_records(len(updates))
        if rendered:
            self.statements.extend(rendered)

    def _end_correlation(self) -> None:
        if self._cid_token is not None:
            reset_correlation_id(self._cid_token)
            self._cid_token = None

    def _result(self, status: ApiStatus, message: str, error: Optional[str] = None) -> RecalculationResult:
        completed_at = datetime.now(pytz.utc)
        return RecalculationResult(
            status=status,
            message=message,
            started_at=self.started_at.isoformat(),
            completed_at=completed_at.isoformat(),
            duration_seconds=(completed_at - self.started_at).total_seconds(),
            records_processed=self.records_processed,
            error=error,
            match_type=self.match_type,
            dry_run=self.dry_run,
            legs_processed=self.legs_processed,
            statements=list(self.statements),
        )

    def mark_success(self, message: Optional[str] = None) -> RecalculationResult:
        """
        Mark pipeline as successful and return result.

        Args:
            message: Optional custom success message

        Returns:
            RecalculationResult with success status
        """
        if self._db_run:
            self._db_run.mark_success(records_processed=self.records_processed)

        result = self._result(
            ApiStatus.SUCCESS,
            message or f"{self.pipeline_name} completed successfully",
        )
        self._log.info(
            "pipeline_completed",
            records_processed=self.records_processed,
            legs_processed=self.legs_processed,
            duration_seconds=result.duration_seconds,
        )
        self._end_correlation()
        return result

    def mark_failed(self, error: Exception) -> RecalculationResult:
        """
        Mark pipeline as failed and return error result.

        Args:
            error: The exception that caused the failure

        Returns:
            RecalculationResult with error status
        """
        error_msg = f"{type(error).__name__}: {str(error)}"
        tb = traceback.format_exc()

        if self._db_run:
            self._db_run.mark_failed(error_msg)

        self._log.error(
            "pipeline_failed",
            error=error_msg,
            traceback=tb,
        )
        self._end_correlation()

        return self._result(
            ApiStatus.ERROR,
            f"{self.pipeline_name} failed",
            error=f"{error_msg}\n{tb}",
        )
