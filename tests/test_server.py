"""Tests for FastAPI server module"""
from unittest.mock import patch
from fastapi.testclient import TestClient

from app.server import MetricsServer
from collectors.http import HttpRequestCollector
from collectors.system import SystemCollector
from config import Config


class StubExporter:
    def __init__(self):
        self.calls = []

    async def send(self, name, value, metric_type, unit):
        self.calls.append(name)
        return True


class TestMetricsServer:
    """Test service wiring and routes"""

    def setup_method(self):
        self.config = Config(service_name="pizza-service")
        self.exporter = StubExporter()
        self.server = MetricsServer(self.config, exporter=self.exporter)
        self.client = TestClient(self.server.get_app())

    def test_active_sources_in_fixed_order(self):
        sources = self.server.scheduler.sources

        assert [type(s) for s in sources] == [HttpRequestCollector, SystemCollector]
        assert sources[0] is self.server.http_metrics

    def test_extension_sources_are_inactive(self):
        status = self.server._source_status()

        assert status["http"]["active"] is True
        assert status["system"]["active"] is True
        assert status["users"]["active"] is False
        assert status["auth"]["active"] is False
        assert status["purchases"]["active"] is False

    def test_disabled_source_is_not_scheduled(self):
        server = MetricsServer(Config(enabled_sources_str="http"))

        assert server.scheduler.sources == [server.http_metrics]

    def test_requests_are_counted(self):
        self.client.get("/status")
        self.client.post("/collect")
        response = self.client.get("/status")

        assert response.status_code == 200
        assert response.json()["requests"] == {"total": 3, "GET": 2, "PUT": 0, "POST": 1, "DELETE": 0}

    def test_unknown_method_counts_total_only(self):
        response = self.client.request("PATCH", "/status")

        assert response.status_code == 405
        assert self.server.http_metrics.collect() == {"total": 1, "GET": 0, "PUT": 0, "POST": 0, "DELETE": 0}

    def test_tracking_failure_does_not_fail_request(self):
        with patch.object(self.server.http_metrics, "increment", side_effect=RuntimeError("boom")):
            response = self.client.get("/status")

        assert response.status_code == 200

    def test_health_unhealthy_before_first_tick(self):
        response = self.client.get("/health")

        assert response.status_code == 503
        assert response.json()["detail"]["status"] == "unhealthy"

    def test_health_healthy_after_tick(self):
        self.client.post("/collect")

        response = self.client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["total_ticks"] == 1
        assert data["tick_errors"] == 0

    @patch('psutil.getloadavg', return_value=(1.0, 1.0, 1.0))
    @patch('psutil.cpu_count', return_value=4)
    def test_manual_collect(self, mock_cpu_count, mock_loadavg):
        response = self.client.post("/collect")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["metrics_dispatched"] == 7
        assert data["total_ticks"] == 1

    def test_status_endpoint(self):
        with patch('os.uname') as mock_uname:
            mock_uname.return_value.nodename = "test-host"
            response = self.client.get("/status")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == {"name": "pizza-service", "hostname": "test-host"}
        assert data["scheduler"]["running"] is False
        assert data["exporter"]["endpoint"] == self.config.metrics_url
        assert "users" in data["sources"]

    def test_scheduler_follows_app_lifecycle(self):
        with TestClient(self.server.get_app()):
            assert self.server.scheduler.handle is not None
            assert self.server.scheduler.started_at > 0

        assert self.server.scheduler.tick_count == 0
