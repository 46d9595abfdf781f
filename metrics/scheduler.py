"""Periodic collection-and-export loop"""
import asyncio
import time
from typing import List, Optional, Sequence, Set
from .registry import MetricRegistry
from logging_config import get_logger, log_export_cycle, log_error


logger = get_logger(__name__)


class SchedulerHandle:
    """Stops future ticks; exports already dispatched keep running"""

    def __init__(self, task: asyncio.Task):
        self._task = task

    def stop(self) -> None:
        self._task.cancel()

    @property
    def running(self) -> bool:
        return not self._task.done()


class MetricsScheduler:
    """Runs a fresh registry over the active sources on a fixed interval"""

    def __init__(self, exporter, sources: Sequence):
        self.exporter = exporter
        self.sources = list(sources)

        # Tick state
        self.tick_count = 0
        self.tick_errors = 0
        self.last_tick_time = 0.0
        self.started_at = 0.0
        self.handle: Optional[SchedulerHandle] = None
        self._in_flight: Set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def start(self, period_ms: int) -> SchedulerHandle:
        """Schedule a tick every ``period_ms``; the first tick fires after one period"""
        self.started_at = time.time()
        task = asyncio.get_running_loop().create_task(self._run(period_ms / 1000.0))
        self.handle = SchedulerHandle(task)
        logger.info(
            "Metrics scheduler started",
            period_ms=period_ms,
            sources=[type(source).__name__ for source in self.sources],
            event_type="scheduler_start"
        )
        return self.handle

    def stop(self) -> None:
        if self.handle:
            self.handle.stop()
            logger.info("Metrics scheduler stopped", event_type="scheduler_stop")

    async def _run(self, period: float) -> None:
        while True:
            await asyncio.sleep(period)
            self.tick()

    def tick(self) -> List[asyncio.Task]:
        """Collect from every source and dispatch exports; never raises"""
        start_time = time.time()
        self.tick_count += 1
        dispatched: List[asyncio.Task] = []

        def track(task: asyncio.Task) -> None:
            dispatched.append(task)
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)

        try:
            registry = MetricRegistry(self.exporter)
            for source in self.sources:
                registry.add(source)
            registry.export(track=track)

            self.last_tick_time = time.time()
            log_export_cycle(logger, len(dispatched), self.last_tick_time - start_time, errors=self.tick_errors)
        except Exception as e:
            self.tick_errors += 1
            log_error(logger, e, {"component": "scheduler_tick", "tick_count": self.tick_count})

        return dispatched

    async def drain(self) -> None:
        """Wait for exports that are still in flight"""
        if self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)
