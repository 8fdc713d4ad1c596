from pydantic import BaseModel
from typing import Optional

from .common import ApiStatus


class PipelineResult(BaseModel):
    """Result of a single pipeline execution"""

    status: ApiStatus
    message: str
    started_at: str
    completed_at: Optional[str] = None
    duration_seconds: Optional[float] = None
    records_processed: Optional[int] = None
    error: Optional[str] = None

    class Config:
        use_enum_values = True


class RecalculationResult(PipelineResult):
    """Result of a statistics recalculation run"""

    match_type: Optional[int] = None
    dry_run: bool = True
    legs_processed: int = 0
    statements: list[str] = []
