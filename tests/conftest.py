"""Shared fixtures"""
import pytest

from config import Config


TEST_METRICS_URL = "http://collector.test/otlp/v1/metrics"


@pytest.fixture(autouse=True)
def metrics_env(monkeypatch):
    """Every test gets a valid endpoint unless it removes it"""
    monkeypatch.setenv("METRICS_URL", TEST_METRICS_URL)
    for name in ("METRICS_API_KEY", "SERVICE_NAME", "EXPORT_PERIOD_MS", "ENABLED_SOURCES_STR", "LOG_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config():
    return Config(metrics_api_key="secret-token", service_name="test-service")


class RecordingExporter:
    """Exporter stand-in that records every send"""

    def __init__(self, result: bool = True):
        self.calls = []
        self.result = result

    async def send(self, name, value, metric_type, unit):
        self.calls.append((name, value, metric_type, unit))
        return self.result


@pytest.fixture
def recording_exporter():
    return RecordingExporter()
