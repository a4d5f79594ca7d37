"""
System API Router - Status and performance monitoring
"""

import logging
import time
from datetime import datetime

import psutil
from fastapi import APIRouter, Depends, Request

from api.dependencies import get_operation_log
from api.exceptions import safe_endpoint
from schemas import DebugSettings, PerformanceMetrics, SystemStatus

logger = logging.getLogger(__name__)

router = APIRouter()

# Track start time
START_TIME = time.time()


@router.get("/status")
@safe_endpoint
async def get_status(operation_log=Depends(get_operation_log)) -> SystemStatus:
    """Get system status"""
    process = psutil.Process()
    memory_info = process.memory_info()
    virtual_memory = psutil.virtual_memory()

    return SystemStatus(
        status="healthy",
        uptime=time.time() - START_TIME,
        memory_usage={
            "process_mb": memory_info.rss / 1024 / 1024,
            "system_percent": virtual_memory.percent,
            "available_mb": virtual_memory.available / 1024 / 1024,
        },
        operations=operation_log.get_statistics()["by_operation"],
    )


@router.get("/performance")
@safe_endpoint
async def get_performance(operation_log=Depends(get_operation_log)) -> PerformanceMetrics:
    """Get performance metrics"""
    stats = operation_log.get_statistics()

    uptime_minutes = (time.time() - START_TIME) / 60
    ops_per_minute = stats["total"] / uptime_minutes if uptime_minutes > 0 else 0

    return PerformanceMetrics(
        avg_processing_time=stats["avg_time_ms"],
        total_operations=stats["total"],
        success_rate=stats["success_rate"],
        operations_per_minute=round(ops_per_minute, 2),
    )


@router.post("/debug/{enable}")
@safe_endpoint
async def set_debug_mode(enable: bool, request: Request) -> DebugSettings:
    """Enable or disable debug logging"""
    config = request.app.state.config
    if "system" in config:
        config["system"]["debug"] = enable

    logging.getLogger().setLevel(logging.DEBUG if enable else logging.INFO)
    logger.info(f"Debug mode {'enabled' if enable else 'disabled'}")

    return DebugSettings(enabled=enable, verbose_logging=enable)


@router.get("/config")
@safe_endpoint
async def get_config(request: Request) -> dict:
    """Get current configuration"""
    return request.app.state.config


@router.get("/health")
async def health_check() -> dict:
    """Simple health check"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}
