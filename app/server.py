"""FastAPI server setup, source wiring and routes"""
import os
import time
from typing import Dict, List
from fastapi import FastAPI, HTTPException
from config import Config
from collectors.base import BaseCollector
from collectors.http import HttpRequestCollector
from collectors.system import SystemCollector
from collectors.extensions import UserCollector, AuthCollector, PurchaseCollector
from metrics.exporter import OTLPHttpExporter
from metrics.scheduler import MetricsScheduler
from middleware.request_tracking import RequestTrackingMiddleware, RequestLoggingMiddleware
from logging_config import get_logger


logger = get_logger(__name__)


class MetricsServer:
    """Composition root: owns the sources, the exporter and the scheduler"""

    def __init__(self, config: Config, exporter: OTLPHttpExporter = None):
        self.config = config
        self.app = FastAPI(
            title="Metrics Service",
            version="1.0.0",
            docs_url=None,
            redoc_url=None,
            openapi_url=None
        )

        # Process-wide sources, created once
        self.http_metrics = HttpRequestCollector(config)
        self.system_metrics = SystemCollector(config)
        self.extension_sources: List[BaseCollector] = [
            UserCollector(config),
            PurchaseCollector(config),
            AuthCollector(config),
        ]

        self.exporter = exporter or OTLPHttpExporter(config)
        self.scheduler = MetricsScheduler(self.exporter, self._active_sources())

        self._setup_middleware()
        self._setup_routes()
        self._setup_events()

    def _active_sources(self) -> List[BaseCollector]:
        """Sources read on every tick, in a fixed order"""
        ordered = [self.http_metrics, self.system_metrics]
        return [source for source in ordered if source.is_enabled()]

    def _setup_middleware(self):
        # Last added runs first, so requests are counted before anything else
        if self.config.enable_request_logging:
            self.app.add_middleware(RequestLoggingMiddleware)
        self.app.add_middleware(RequestTrackingMiddleware, http_metrics=self.http_metrics)

    def _setup_routes(self):

        @self.app.get('/health')
        def health_check():
            """Health check endpoint"""
            now = time.time()
            window = self.config.export_period_seconds * 2
            reference = self.scheduler.last_tick_time or self.scheduler.started_at
            age = now - reference if reference > 0 else float('inf')
            is_healthy = age < window

            health_data = {
                "status": "healthy" if is_healthy else "unhealthy",
                "last_tick_seconds_ago": round(now - self.scheduler.last_tick_time, 1) if self.scheduler.last_tick_time else None,
                "export_period_ms": self.config.export_period_ms,
                "total_ticks": self.scheduler.tick_count,
                "tick_errors": self.scheduler.tick_errors,
            }

            if not is_healthy:
                raise HTTPException(status_code=503, detail=health_data)

            return health_data

        @self.app.get('/status')
        def get_status():
            """Detailed status information"""
            return {
                "service": {
                    "name": self.config.service_name,
                    "hostname": os.uname().nodename
                },
                "scheduler": {
                    "running": bool(self.scheduler.handle and self.scheduler.handle.running),
                    "export_period_ms": self.config.export_period_ms,
                    "total_ticks": self.scheduler.tick_count,
                    "tick_errors": self.scheduler.tick_errors,
                    "exports_in_flight": self.scheduler.in_flight,
                },
                "requests": self.http_metrics.collect(),
                "sources": self._source_status(),
                "exporter": {
                    "endpoint": self.config.metrics_url,
                },
            }

        @self.app.post('/collect')
        async def manual_collect():
            """Run one export cycle now"""
            tasks = self.scheduler.tick()
            return {
                "success": True,
                "metrics_dispatched": len(tasks),
                "total_ticks": self.scheduler.tick_count
            }

    def _source_status(self) -> Dict[str, Dict]:
        active = set(id(source) for source in self.scheduler.sources)
        status = {}
        for source in [self.http_metrics, self.system_metrics] + self.extension_sources:
            status[source.name] = {
                "active": id(source) in active,
                "class": source.__class__.__name__,
                "help": source.help_text
            }
        return status

    def _setup_events(self):

        @self.app.on_event("startup")
        async def startup_event():
            logger.info(
                "Application startup initiated",
                service_name=self.config.service_name,
                export_period_ms=self.config.export_period_ms,
                enabled_sources=self.config.enabled_sources,
                event_type="server_startup"
            )
            self.scheduler.start(self.config.export_period_ms)

        @self.app.on_event("shutdown")
        async def shutdown_event():
            logger.info("Shutting down metrics service", event_type="server_shutdown")
            self.scheduler.stop()

    def get_app(self) -> FastAPI:
        """Get the FastAPI application"""
        return self.app
