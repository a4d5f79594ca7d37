"""
System API models.
"""

from typing import Dict

from pydantic import BaseModel


class SystemStatus(BaseModel):
    """System status information"""

    status: str
    uptime: float
    memory_usage: Dict[str, float]
    operations: Dict[str, int]


class DebugSettings(BaseModel):
    """Debug settings"""

    enabled: bool
    verbose_logging: bool


class PerformanceMetrics(BaseModel):
    """Performance metrics"""

    avg_processing_time: float
    total_operations: int
    success_rate: float
    operations_per_minute: float
