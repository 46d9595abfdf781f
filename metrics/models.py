"""Metric models for OTLP/HTTP export"""
from dataclasses import dataclass
from typing import Dict, List, Mapping, Union
from enum import Enum

# A single source reading; ints for counters, floats for gauges
Number = Union[int, float]
MetricBatch = List[Mapping[str, Number]]


class MetricType(Enum):
    """OTLP metric types; the value is the JSON field carrying the data points"""
    SUM = "sum"
    GAUGE = "gauge"


@dataclass(frozen=True)
class MetricConfig:
    """Wire name, type and unit for one metric key"""
    name: str
    type: MetricType
    unit: str


METRIC_CONFIGS: Dict[str, MetricConfig] = {
    # HTTP metrics
    "total": MetricConfig("http_requests_total", MetricType.SUM, "requests"),
    "GET": MetricConfig("http_requests_get", MetricType.SUM, "requests"),
    "PUT": MetricConfig("http_requests_put", MetricType.SUM, "requests"),
    "POST": MetricConfig("http_requests_post", MetricType.SUM, "requests"),
    "DELETE": MetricConfig("http_requests_delete", MetricType.SUM, "requests"),

    # System metrics
    "cpuUsage": MetricConfig("system_cpu_usage", MetricType.GAUGE, "percent"),
    "memoryUsage": MetricConfig("system_memory_usage", MetricType.GAUGE, "percent"),
}


def resolve_metric_config(key: str) -> MetricConfig:
    """Look up the config for a metric key, falling back to a plain gauge"""
    config = METRIC_CONFIGS.get(key)
    if config is None:
        return MetricConfig(name=key, type=MetricType.GAUGE, unit="value")
    return config
