"""
Pipeline Registry and Exports

Provides a registry of all available pipelines and helper functions
for running them by name.
"""

from typing import Type

from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.recalculate_statistics import (
    RecalculateStatisticsPipeline,
    calculate_statistics,
    recalculate_statistics,
)
from pipelines.updates import PendingUpdate
from schemas.pipeline import PipelineResult


# Registry of all available pipelines
PIPELINE_REGISTRY: dict[str, Type[BasePipeline]] = {
    "recalculate_statistics": RecalculateStatisticsPipeline,
}


def get_pipeline(name: str, **kwargs) -> BasePipeline:
    """
    Get a pipeline instance by name.

    Args:
        name: Pipeline name (e.g., "recalculate_statistics")
        **kwargs: Passed to the pipeline constructor

    Returns:
        Instantiated pipeline

    Raises:
        KeyError: If pipeline name not found
    """
    if name not in PIPELINE_REGISTRY:
        available = ", ".join(PIPELINE_REGISTRY.keys())
        raise KeyError(f"Unknown pipeline '{name}'. Available: {available}")

    return PIPELINE_REGISTRY[name](**kwargs)


def run_pipeline(name: str, **kwargs) -> PipelineResult:
    """
    Run a pipeline by name.

    Args:
        name: Pipeline name
        **kwargs: Passed to the pipeline constructor

    Returns:
        PipelineResult with status and details
    """
    pipeline = get_pipeline(name, **kwargs)
    return pipeline.run()


def list_pipelines() -> list[dict]:
    """
    List all available pipelines with their configurations.

    Returns:
        List of pipeline info dicts
    """
    return [cls.get_info() for cls in PIPELINE_REGISTRY.values()]


__all__ = [
    # Base classes
    "BasePipeline",
    "PipelineConfig",
    "PipelineContext",
    "PendingUpdate",
    # Recalculation
    "RecalculateStatisticsPipeline",
    "calculate_statistics",
    "recalculate_statistics",
    # Registry functions
    "PIPELINE_REGISTRY",
    "get_pipeline",
    "run_pipeline",
    "list_pipelines",
]
