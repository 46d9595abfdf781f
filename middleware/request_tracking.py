"""Request tracking and logging middleware"""
import time
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from collectors.http import HttpRequestCollector
from logging_config import get_logger


logger = get_logger(__name__)


class RequestTrackingMiddleware(BaseHTTPMiddleware):
    """Count every inbound request by method before handing it on"""

    def __init__(self, app, http_metrics: HttpRequestCollector):
        super().__init__(app)
        self.http_metrics = http_metrics

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            self.http_metrics.increment(request.method)
        except Exception as e:
            logger.error(
                "Failed to count request",
                method=request.method,
                error=str(e),
                event_type="request_tracking_error"
            )
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log requests with timing"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "HTTP request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                process_time_seconds=round(time.time() - start_time, 3),
                event_type="http_request_error",
                exc_info=True
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            "HTTP request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_seconds=round(process_time, 3),
            client_ip=request.client.host if request.client else None,
            event_type="http_request_complete"
        )
        response.headers["X-Process-Time"] = str(round(process_time, 3))
        return response
