"""
Pipeline Configuration

Immutable configuration dataclass for pipeline metadata.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PipelineConfig:
    """
    Immutable configuration for a pipeline.

    Attributes:
        name: Internal name used for tracking (e.g., "recalculate_statistics")
        display_name: Human-readable name (e.g., "Recalculate Statistics")
        description: What this pipeline does
        target_table: Primary table this pipeline writes to
        allow_concurrent: Whether multiple instances can run simultaneously
    """

    name: str
    display_name: str
    description: str
    target_table: str

    # Execution constraints
    allow_concurrent: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if not self.name:
            raise ValueError("Pipeline name is required")
        if not self.target_table:
            raise ValueError("Pipeline target_table is required")
