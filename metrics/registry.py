"""Per-cycle metric registry: gathers source snapshots and dispatches exports"""
import asyncio
from collections.abc import Mapping
from typing import Callable, List, Optional
from .models import MetricBatch, MetricConfig, resolve_metric_config
from collectors.base import BaseCollector
from logging_config import get_logger


logger = get_logger(__name__)


class MetricRegistry:
    """Accumulates one export cycle's batch and sends every metric individually

    Instances are transient; the scheduler builds a fresh one per tick.
    """

    def __init__(self, exporter):
        self.exporter = exporter
        self.metrics: MetricBatch = []

    def __len__(self) -> int:
        return len(self.metrics)

    def add(self, source) -> "MetricRegistry":
        """Add a collector's snapshot or a plain mapping to the batch"""
        if source is None:
            return self

        if isinstance(source, BaseCollector):
            snapshot = source.collect()
            if isinstance(snapshot, Mapping):
                self.metrics.append(snapshot)
            elif snapshot is not None:
                logger.warning(
                    "Ignoring malformed collector output",
                    collector=source.name,
                    output_type=type(snapshot).__name__,
                    event_type="source_ignored"
                )
        elif isinstance(source, Mapping):
            self.metrics.append(source)
        else:
            logger.warning(
                "Ignoring unsupported metric source",
                source_type=type(source).__name__,
                event_type="source_ignored"
            )

        return self

    def resolve_config(self, key: str) -> MetricConfig:
        return resolve_metric_config(key)

    def export(self, track: Optional[Callable[[asyncio.Task], None]] = None) -> List[asyncio.Task]:
        """Dispatch one send per metric as background tasks on the running loop

        ``track`` is called with each task as soon as it is created, so a
        caller still holds every dispatched send if a later metric fails.
        """
        loop = asyncio.get_running_loop()
        tasks = []

        for metric_group in self.metrics:
            for key, value in metric_group.items():
                config = self.resolve_config(key)
                task = loop.create_task(
                    self.exporter.send(config.name, value, config.type, config.unit)
                )
                tasks.append(task)
                if track is not None:
                    track(task)

        logger.debug("Dispatched metric exports", metrics_count=len(tasks), event_type="export_dispatch")
        return tasks
