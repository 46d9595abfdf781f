"""OTLP/HTTP JSON exporter, one request per metric"""
import json
import time
from typing import Any, Dict, Optional
import httpx
from opentelemetry.proto.metrics.v1 import metrics_pb2
from .models import MetricType, Number
from config import Config
from logging_config import get_logger

logger = get_logger(__name__)

CUMULATIVE = metrics_pb2.AggregationTemporality.Name(
    metrics_pb2.AGGREGATION_TEMPORALITY_CUMULATIVE
)


class OTLPHttpExporter:
    """Push single metrics to an OTLP/HTTP collector as JSON

    Holds configuration only; every ``send`` opens its own client so calls
    stay independent of each other.
    """

    def __init__(self, config: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport

    def build_envelope(self, name: str, value: Number, metric_type: MetricType, unit: str,
                       timestamp_ns: Optional[int] = None) -> Dict[str, Any]:
        """Build the resourceMetrics envelope for a single data point"""
        if metric_type == MetricType.GAUGE:
            data_point = {"asDouble": float(value)}
        else:
            data_point = {"asInt": value}
        data_point["timeUnixNano"] = timestamp_ns if timestamp_ns is not None else time.time_ns()

        payload: Dict[str, Any] = {"dataPoints": [data_point]}
        if metric_type == MetricType.SUM:
            payload["aggregationTemporality"] = CUMULATIVE
            payload["isMonotonic"] = True

        attributes = [
            {"key": key, "value": {"stringValue": str(attr_value)}}
            for key, attr_value in self.config.get_otlp_resource_attributes().items()
        ]

        return {
            "resourceMetrics": [
                {
                    "resource": {"attributes": attributes},
                    "scopeMetrics": [
                        {
                            "metrics": [
                                {
                                    "name": name,
                                    "unit": unit,
                                    metric_type.value: payload,
                                }
                            ]
                        }
                    ],
                }
            ]
        }

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.metrics_api_key}",
            "Content-Type": "application/json",
        }

    async def send(self, name: str, value: Number, metric_type: MetricType, unit: str) -> bool:
        """POST one metric; failures are logged and reported as False, never raised"""
        body = None
        try:
            body = json.dumps(self.build_envelope(name, value, metric_type, unit))
            async with httpx.AsyncClient(transport=self._transport, timeout=self.config.export_timeout) as client:
                response = await client.post(self.config.metrics_url, content=body, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(
                "Error pushing metric",
                metric=name,
                error=str(e),
                error_type=type(e).__name__,
                endpoint=self.config.metrics_url,
                payload=body,
                event_type="otlp_transport_error"
            )
            return False
        except Exception as e:
            logger.error(
                "Failed to export metric",
                metric=name,
                error=str(e),
                error_type=type(e).__name__,
                payload=body,
                event_type="otlp_export_error",
                exc_info=True
            )
            return False

        if not response.is_success:
            logger.error(
                "Failed to push metrics data",
                metric=name,
                status_code=response.status_code,
                response_body=response.text,
                payload=body,
                event_type="otlp_http_error"
            )
            return False

        logger.debug("Pushed metric", metric=name, event_type="otlp_export")
        return True
