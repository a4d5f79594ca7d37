"""
API Integration Tests for System Endpoints
"""


class TestSystemAPI:
    """Integration tests for system API endpoints"""

    def test_root(self, client):
        """Test the service index"""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert data["endpoints"]["beautify"] == "/api/beautify"

    def test_health(self, client):
        """Test both health endpoints"""
        assert client.get("/health").json()["status"] == "healthy"

        response = client.get("/api/system/health")
        assert response.status_code == 200
        assert "timestamp" in response.json()

    def test_status(self, client, png_upload):
        """Test status reports memory and per-operation counts"""
        client.post("/api/palette/extract", files=png_upload)

        response = client.get("/api/system/status")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["uptime"] >= 0
        assert data["memory_usage"]["process_mb"] > 0
        assert data["operations"] == {"palette": 1}

    def test_performance(self, client, png_upload):
        """Test performance metrics after one operation"""
        client.post("/api/image/convert", files=png_upload, data={"format": "jpeg"})

        response = client.get("/api/system/performance")

        assert response.status_code == 200
        data = response.json()
        assert data["total_operations"] == 1
        assert data["success_rate"] == 100.0

    def test_config(self, client):
        """Test the configuration dump"""
        response = client.get("/api/system/config")

        assert response.status_code == 200
        data = response.json()
        assert data["imaging"]["max_dimension"] > 0
        assert data["history"]["buffer_size"] >= 1

    def test_debug_toggle(self, client):
        """Test toggling debug mode updates the config"""
        response = client.post("/api/system/debug/true")

        assert response.status_code == 200
        assert response.json() == {"enabled": True, "verbose_logging": True}
        assert client.get("/api/system/config").json()["system"]["debug"] is True

        response = client.post("/api/system/debug/false")
        assert response.json()["enabled"] is False
