"""
Operation Log - Circular buffer of recent imaging operations
"""

import logging
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from threading import RLock
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class OperationStatus:
    OK = "OK"
    ERROR = "ERROR"


@dataclass
class OperationRecord:
    """Single processed request"""

    id: str
    timestamp: datetime
    operation: str
    status: str
    processing_time_ms: int
    source_size: Optional[Dict[str, int]] = None
    output_size: Optional[Dict[str, int]] = None
    message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "operation": self.operation,
            "status": self.status,
            "processing_time_ms": self.processing_time_ms,
            "source_size": self.source_size,
            "output_size": self.output_size,
            "message": self.message,
            "metadata": self.metadata,
        }


class OperationLog:
    """Bounded history of operations with running statistics"""

    def __init__(self, max_size: int = 100):
        """
        Initialize Operation Log

        Args:
            max_size: Maximum number of records to keep
        """
        self.max_size = max_size
        self.buffer: deque = deque(maxlen=max_size)

        # Statistics survive buffer eviction
        self.total_operations = 0
        self.error_count = 0
        self.total_processing_time = 0
        self.per_operation: Dict[str, int] = {}

        self.lock = RLock()

        logger.info(f"Operation log initialized with max size: {max_size}")

    def record(
        self,
        operation: str,
        processing_time_ms: int,
        status: str = OperationStatus.OK,
        source_size: Optional[Dict[str, int]] = None,
        output_size: Optional[Dict[str, int]] = None,
        message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Append an operation record

        Returns:
            Record ID
        """
        with self.lock:
            record_id = f"op_{uuid.uuid4().hex[:8]}"
            self.buffer.append(
                OperationRecord(
                    id=record_id,
                    timestamp=datetime.now(),
                    operation=operation,
                    status=status,
                    processing_time_ms=processing_time_ms,
                    source_size=source_size,
                    output_size=output_size,
                    message=message,
                    metadata=metadata or {},
                )
            )

            self.total_operations += 1
            self.total_processing_time += processing_time_ms
            self.per_operation[operation] = self.per_operation.get(operation, 0) + 1
            if status != OperationStatus.OK:
                self.error_count += 1

            logger.debug(f"Recorded {operation} ({status}) in {processing_time_ms} ms")
            return record_id

    def get_record(self, record_id: str) -> Optional[OperationRecord]:
        with self.lock:
            for record in self.buffer:
                if record.id == record_id:
                    return record
        return None

    def get_recent(self, limit: int = 10, operation: Optional[str] = None) -> List[OperationRecord]:
        """
        Get recent records, newest first

        Args:
            limit: Maximum number of records to return
            operation: Only return records of this operation
        """
        with self.lock:
            records = list(self.buffer)

        if operation:
            records = [r for r in records if r.operation == operation]
        records.reverse()
        return records[:limit]

    def get_statistics(self) -> Dict[str, Any]:
        """Totals, error rate and mean processing time"""
        with self.lock:
            if self.total_operations == 0:
                return {
                    "total": 0,
                    "errors": 0,
                    "success_rate": 0.0,
                    "avg_time_ms": 0,
                    "by_operation": {},
                    "buffer_usage": 0,
                    "buffer_max": self.max_size,
                }

            succeeded = self.total_operations - self.error_count
            return {
                "total": self.total_operations,
                "errors": self.error_count,
                "success_rate": round(succeeded / self.total_operations * 100, 2),
                "avg_time_ms": round(self.total_processing_time / self.total_operations, 2),
                "by_operation": dict(self.per_operation),
                "buffer_usage": len(self.buffer),
                "buffer_max": self.max_size,
            }

    def clear(self):
        """Clear all records and statistics"""
        with self.lock:
            self.buffer.clear()
            self.total_operations = 0
            self.error_count = 0
            self.total_processing_time = 0
            self.per_operation = {}

            logger.info("Operation log cleared")
