"""
History API Router - Recent operation history
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_operation_log
from api.exceptions import safe_endpoint
from schemas import HistoryResponse, OperationRecordModel

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/recent")
@safe_endpoint
async def get_recent_history(
    limit: int = Query(10, ge=1, le=100),
    operation: Optional[str] = Query(
        None, pattern="^(palette|upscale|beautify|poster|compress|rotate|convert)$"
    ),
    operation_log=Depends(get_operation_log),
) -> HistoryResponse:
    """Get recent operations, newest first"""
    records = operation_log.get_recent(limit, operation)

    return HistoryResponse(
        operations=[OperationRecordModel(**r.to_dict()) for r in records],
        statistics=operation_log.get_statistics(),
    )


@router.post("/clear")
@safe_endpoint
async def clear_history(operation_log=Depends(get_operation_log)) -> dict:
    """Clear all history"""
    operation_log.clear()

    return {"success": True, "message": "History cleared"}


@router.get("/statistics")
@safe_endpoint
async def get_statistics(operation_log=Depends(get_operation_log)) -> dict:
    """Get detailed statistics"""
    return operation_log.get_statistics()


@router.get("/{record_id}")
@safe_endpoint
async def get_operation(record_id: str, operation_log=Depends(get_operation_log)) -> OperationRecordModel:
    """Get a single operation record"""
    record = operation_log.get_record(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Operation not found")

    return OperationRecordModel(**record.to_dict())
