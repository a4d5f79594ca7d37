"""
Tests for OperationLog module
"""

import pytest

from core.operation_log import OperationLog, OperationStatus


class TestOperationLog:
    """Test OperationLog functionality"""

    @pytest.fixture
    def log(self):
        """Create a fresh operation log for each test"""
        return OperationLog(max_size=5)

    def test_initialization(self, log):
        """Test log initialization"""
        assert log.max_size == 5
        assert len(log.buffer) == 0
        assert log.total_operations == 0
        assert log.error_count == 0

    def test_record_ok(self, log):
        """Test recording a successful operation"""
        record_id = log.record(
            "upscale",
            processing_time_ms=12,
            source_size={"width": 10, "height": 10},
            output_size={"width": 20, "height": 20},
        )

        assert record_id.startswith("op_")
        record = log.get_record(record_id)
        assert record.operation == "upscale"
        assert record.status == OperationStatus.OK
        assert record.output_size == {"width": 20, "height": 20}

    def test_record_error(self, log):
        """Test errors are counted"""
        log.record("beautify", processing_time_ms=3, status=OperationStatus.ERROR, message="bad")

        assert log.error_count == 1
        assert log.get_statistics()["success_rate"] == 0.0

    def test_circular_buffer_overflow(self, log):
        """Test old records are evicted but statistics keep counting"""
        for i in range(8):
            log.record("palette", processing_time_ms=i + 1)

        assert len(log.buffer) == 5
        assert log.total_operations == 8
        assert log.get_statistics()["by_operation"] == {"palette": 8}

    def test_get_record_not_found(self, log):
        """Test unknown IDs return None"""
        assert log.get_record("op_missing") is None

    def test_get_recent_newest_first(self, log):
        """Test recent records are ordered newest first"""
        first = log.record("palette", processing_time_ms=1)
        second = log.record("poster", processing_time_ms=1)

        recent = log.get_recent(limit=10)
        assert [r.id for r in recent] == [second, first]

    def test_get_recent_with_filter_and_limit(self, log):
        """Test filtering by operation and limiting"""
        log.record("palette", processing_time_ms=1)
        log.record("rotate", processing_time_ms=1)
        log.record("palette", processing_time_ms=1)

        assert len(log.get_recent(operation="palette")) == 2
        assert len(log.get_recent(limit=1)) == 1

    def test_get_statistics_empty(self, log):
        """Test statistics of an empty log"""
        stats = log.get_statistics()
        assert stats["total"] == 0
        assert stats["avg_time_ms"] == 0
        assert stats["by_operation"] == {}

    def test_get_statistics_with_data(self, log):
        """Test averages and success rate"""
        log.record("palette", processing_time_ms=10)
        log.record("palette", processing_time_ms=30)
        log.record("upscale", processing_time_ms=20, status=OperationStatus.ERROR)
        log.record("upscale", processing_time_ms=40)

        stats = log.get_statistics()
        assert stats["total"] == 4
        assert stats["errors"] == 1
        assert stats["success_rate"] == 75.0
        assert stats["avg_time_ms"] == 25.0
        assert stats["by_operation"] == {"palette": 2, "upscale": 2}

    def test_to_dict(self, log):
        """Test records serialize with an ISO timestamp"""
        record = log.get_record(log.record("convert", processing_time_ms=2))
        data = record.to_dict()
        assert data["operation"] == "convert"
        assert isinstance(data["timestamp"], str)

    def test_clear(self, log):
        """Test clearing records and statistics"""
        log.record("palette", processing_time_ms=1)
        log.clear()

        assert len(log.buffer) == 0
        assert log.total_operations == 0
        assert log.get_statistics()["total"] == 0
