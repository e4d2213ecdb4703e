"""Service configuration built from environment variables."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_STORE_SETTINGS: dict[str, Any] = {
    "storeName": "Pizza Hut Style - Demo Branch",
    "storeTiming": "11:00 AM – 11:30 PM",
    "storePhone": "+91-98765-43210",
    "storeRadius": 6,
}


@dataclass
class ServiceConfig:
    """Runtime configuration passed to the service layer at startup.

    Attributes:
        data_dir: Directory holding menu.json, orders.json and settings.json
        public_dir: Directory holding the static frontend
        host: Interface the HTTP server binds to
        port: Port the HTTP server listens on
        log_level: Root logging level
        enable_telemetry: Whether to set up OpenTelemetry tracing and metrics
        environment: Deployment environment name; "test" keeps telemetry in-process
        service_name: Service name reported on spans and metrics
        otlp_endpoint: Base URL of the OTLP/HTTP collector
        default_settings: Settings record materialized on first read
    """

    data_dir: Path = Path("data")
    public_dir: Path = Path("public")
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    enable_telemetry: bool = False
    environment: str = "development"
    service_name: str = "order-svc"
    otlp_endpoint: str = "http://localhost:4318"
    default_settings: dict[str, Any] = field(
        default_factory=lambda: dict(DEFAULT_STORE_SETTINGS)
    )

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Build configuration from environment variables.

        Returns:
            ServiceConfig populated from the environment, with defaults for unset values

        Raises:
            ValueError: If PORT is not an integer
        """
        port_str = os.getenv("PORT", "3000")
        try:
            port = int(port_str)
        except ValueError as e:
            raise ValueError(f"PORT must be an integer, got {port_str!r}") from e

        return cls(
            data_dir=Path(os.getenv("DATA_DIR", "data")),
            public_dir=Path(os.getenv("PUBLIC_DIR", "public")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=port,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            enable_telemetry=os.getenv("ENABLE_TELEMETRY", "false").lower() == "true",
            environment=os.getenv("ENVIRONMENT", "development"),
            service_name=os.getenv("OTEL_SERVICE_NAME", "order-svc"),
            otlp_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318"),
        )
