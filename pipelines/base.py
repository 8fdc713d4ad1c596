"""
Base Pipeline

Abstract base class for all batch pipelines.
"""

from abc import ABC, abstractmethod
from typing import ClassVar

from db.base import db
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from schemas.pipeline import PipelineResult


class BasePipeline(ABC):
    """
    Abstract base class for all batch pipelines.

    Provides:
    - Automatic run tracking via PipelineContext
    - Structured logging with correlation IDs
    - Standardized error handling
    - Template method pattern for run lifecycle

    Subclasses must implement:
    - config: PipelineConfig class attribute
    - execute(): The actual pipeline logic
    - create_context(): The context a run is tracked with

    Example:
        class RecalculateStatisticsPipeline(BasePipeline):
            config = PipelineConfig(
                name="recalculate_statistics",
                display_name="Recalculate Statistics",
                description="Replays finished legs and rewrites their statistics",
                target_table="statistics_*",
            )

            def execute(self, ctx: PipelineContext) -> None:
                updates = collect_updates(...)
                ctx.increment_records(len(updates))
    """

    # Class-level configuration - must be overridden by subclasses
    config: ClassVar[PipelineConfig]

    def __init__(self):
        """Initialize pipeline and validate configuration."""
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate that config is properly defined."""
        if not hasattr(self.__class__, "config") or self.__class__.config is None:
            raise ValueError(
                f"{self.__class__.__name__} must define a 'config' class attribute"
            )

    @abstractmethod
    def execute(self, ctx: PipelineContext) -> None:
        """
        Execute the pipeline logic.

        Args:
            ctx: Pipeline context with logging, tracking, and timing

        Raises:
            Any exception will be caught and converted to a failed result
        """
        pass

    def create_context(self) -> PipelineContext:
        return PipelineContext(self.config.name)

    def run(self) -> PipelineResult:
        """
        Run the pipeline with full lifecycle management.

        This is the public entry point. Failures are recorded on the run
        and returned as an error result rather than raised.

        Returns:
            PipelineResult with status, timing, and records processed
        """
        if db.is_closed():
            db.connect()

        ctx = self.create_context()
        ctx.start_tracking()

        try:
            self.before_execute(ctx)
            self.execute(ctx)
            self.after_execute(ctx)
            return ctx.mark_success()
        except Exception as e:
            return ctx.mark_failed(e)

    def before_execute(self, ctx: PipelineContext) -> None:
        """
        Hook called before execute().

        Override for validation or setup tasks.
        """
        pass

    def after_execute(self, ctx: PipelineContext) -> None:
        """
        Hook called after successful execute().

        Override for cleanup tasks.
        """
        pass

    @classmethod
    def get_name(cls) -> str:
        """Get the pipeline name from config."""
        return cls.config.name

    @classmethod
    def get_info(cls) -> dict:
        """Get pipeline information for listing."""
        return {
            "name": cls.config.name,
            "display_name": cls.config.display_name,
            "description": cls.config.description,
            "target_table": cls.config.target_table,
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.config.name})>"
