"""Configuration for the request and system metrics pipeline"""
import logging
from pathlib import Path
from typing import List, Dict, Optional
from pydantic import Field, validator
from pydantic_settings import BaseSettings

class Config(BaseSettings):
    """Pipeline configuration - OTLP/HTTP push"""

    # Export settings
    metrics_url: str = Field(..., description="OTLP/HTTP metrics endpoint (required)")
    metrics_api_key: str = Field(default="", description="Bearer token for the metrics endpoint")
    service_name: str = Field(default="metrics-service", description="Service name resource attribute")
    export_period_ms: int = Field(default=10000, ge=1, description="Export period in milliseconds")
    export_timeout: float = Field(default=10.0, gt=0, description="Per-request export timeout in seconds")

    # Source settings
    enabled_sources_str: str = Field(
        default="http,system",
        description="Enabled sources (comma-separated)"
    )

    # Server settings
    metrics_port: int = Field(default=9100, ge=1, le=65535, description="Service port")
    metrics_host: str = Field(default="0.0.0.0", description="Service host")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file")

    enable_request_logging: bool = Field(default=True, description="Enable HTTP request logging")

    class Config:
        env_prefix = ""
        case_sensitive = False

    @validator('metrics_url')
    def validate_metrics_url(cls, v):
        if not v:
            raise ValueError("METRICS_URL is required")
        if not v.startswith(("http://", "https://")):
            raise ValueError("METRICS_URL must be an http(s) URL")
        return v

    @validator('log_level')
    def validate_log_level(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @validator('log_file')
    def ensure_log_directory(cls, v):
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v

    @property
    def enabled_sources(self) -> List[str]:
        """Get enabled sources as a list"""
        return [item.strip() for item in self.enabled_sources_str.split(',') if item.strip()]

    def is_source_enabled(self, name: str) -> bool:
        return name in self.enabled_sources

    @property
    def export_period_seconds(self) -> float:
        return self.export_period_ms / 1000.0

    def get_otlp_resource_attributes(self) -> Dict[str, str]:
        """Get OTLP resource attributes"""
        return {
            "service.name": self.service_name,
        }
