"""
Operation history API models.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class OperationRecordModel(BaseModel):
    """One processed request"""

    id: str
    timestamp: datetime
    operation: str
    status: str
    processing_time_ms: int
    source_size: Optional[Dict[str, int]] = None
    output_size: Optional[Dict[str, int]] = None
    message: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class HistoryResponse(BaseModel):
    """Recent operations with running statistics"""

    operations: List[OperationRecordModel]
    statistics: Dict[str, Any]
