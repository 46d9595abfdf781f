"""System CPU and memory gauges"""
from typing import Dict
import psutil
from .base import BaseCollector


class SystemCollector(BaseCollector):
    """Sample CPU load and memory utilization as percentages"""

    def __init__(self, config=None):
        super().__init__(config, "system", "Host CPU load and memory utilization")

    def collect(self) -> Dict[str, float]:
        """Collect system gauges, resampled on every call"""
        return {
            "cpuUsage": self.cpu_usage_percent(),
            "memoryUsage": self.memory_usage_percent(),
        }

    @staticmethod
    def cpu_usage_percent() -> float:
        """1-minute load average per logical core, as a 0-100 percentage"""
        load_1m = psutil.getloadavg()[0]
        cores = psutil.cpu_count() or 1
        usage = round(load_1m / cores * 100, 2)
        return min(max(usage, 0.0), 100.0)

    @staticmethod
    def memory_usage_percent() -> float:
        memory = psutil.virtual_memory()
        if not memory.total:
            return 0.0
        return round((memory.total - memory.free) / memory.total * 100, 2)
