"""Unit tests for logging configuration, OpenTelemetry setup and tracing."""

import logging
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest
from pythonjsonlogger import jsonlogger

from restaurant_order_service.config import ServiceConfig
from restaurant_order_service.observability import configure_logging, setup_observability, traced
from restaurant_order_service.observability.config import (
    build_meter_provider,
    build_resource,
    build_tracer_provider,
)

OBSERVABILITY_CONFIG = "restaurant_order_service.observability.config"


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def production_config(tmp_path: Path) -> ServiceConfig:
    """Config for a deployed branch with telemetry exported to a collector."""
    return ServiceConfig(
        data_dir=tmp_path / "data",
        enable_telemetry=True,
        environment="production",
        service_name="order-svc-branch-7",
        otlp_endpoint="http://collector:4318",
    )


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_installs_single_json_handler(self, restore_root_logger: None) -> None:
        """Test that the root logger gets one JSON-formatted handler."""
        configure_logging("WARNING")

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)

    def test_level_name_is_case_insensitive(self, restore_root_logger: None) -> None:
        """Test that a lowercase level name is accepted."""
        configure_logging("debug")

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, restore_root_logger: None) -> None:
        """Test that an unrecognized level name configures INFO."""
        configure_logging("CHATTY")

        assert logging.getLogger().level == logging.INFO


@pytest.mark.unit
class TestOpenTelemetrySetup:
    """Tests for resource, provider and app instrumentation setup."""

    def test_resource_uses_service_config(self, production_config: ServiceConfig) -> None:
        """Test that the resource carries the configured name and environment."""
        resource = build_resource(production_config)

        assert resource.attributes["service.name"] == "order-svc-branch-7"
        assert resource.attributes["deployment.environment"] == "production"
        assert resource.attributes["order_service.data_dir"] == str(production_config.data_dir)

    @patch(f"{OBSERVABILITY_CONFIG}.BatchSpanProcessor")
    @patch(f"{OBSERVABILITY_CONFIG}.OTLPSpanExporter")
    def test_tracer_exports_to_configured_endpoint(
        self,
        mock_exporter: Mock,
        mock_processor: Mock,
        production_config: ServiceConfig,
    ) -> None:
        """Test that spans are batched to the collector's traces path."""
        build_tracer_provider(production_config, build_resource(production_config))

        mock_exporter.assert_called_once_with(endpoint="http://collector:4318/v1/traces")
        mock_processor.assert_called_once_with(mock_exporter.return_value)

    @patch(f"{OBSERVABILITY_CONFIG}.OTLPSpanExporter")
    def test_tracer_skips_exporter_under_test(self, mock_exporter: Mock, tmp_path: Path) -> None:
        """Test that no span exporter is created in the test environment."""
        config = ServiceConfig(data_dir=tmp_path, environment="test")

        build_tracer_provider(config, build_resource(config))

        mock_exporter.assert_not_called()

    @patch(f"{OBSERVABILITY_CONFIG}.MeterProvider")
    @patch(f"{OBSERVABILITY_CONFIG}.PeriodicExportingMetricReader")
    @patch(f"{OBSERVABILITY_CONFIG}.OTLPMetricExporter")
    def test_meter_exports_to_configured_endpoint(
        self,
        mock_exporter: Mock,
        mock_reader: Mock,
        mock_meter_provider: Mock,
        production_config: ServiceConfig,
    ) -> None:
        """Test that metrics are read periodically and sent to the metrics path."""
        resource = build_resource(production_config)

        provider = build_meter_provider(production_config, resource)

        mock_exporter.assert_called_once_with(endpoint="http://collector:4318/v1/metrics")
        mock_reader.assert_called_once_with(
            mock_exporter.return_value, export_interval_millis=60000
        )
        mock_meter_provider.assert_called_once_with(
            resource=resource, metric_readers=[mock_reader.return_value]
        )
        assert provider is mock_meter_provider.return_value

    @patch(f"{OBSERVABILITY_CONFIG}.OTLPMetricExporter")
    def test_meter_skips_exporter_under_test(self, mock_exporter: Mock, tmp_path: Path) -> None:
        """Test that no metric exporter is created in the test environment."""
        config = ServiceConfig(data_dir=tmp_path, environment="test")

        build_meter_provider(config, build_resource(config))

        mock_exporter.assert_not_called()

    @patch(f"{OBSERVABILITY_CONFIG}.FastAPIInstrumentor")
    @patch(f"{OBSERVABILITY_CONFIG}.build_meter_provider")
    @patch(f"{OBSERVABILITY_CONFIG}.build_tracer_provider")
    @patch(f"{OBSERVABILITY_CONFIG}.metrics")
    @patch(f"{OBSERVABILITY_CONFIG}.trace")
    def test_setup_installs_providers_and_instruments_app(
        self,
        mock_trace: Mock,
        mock_metrics: Mock,
        mock_build_tracer: Mock,
        mock_build_meter: Mock,
        mock_instrumentor: Mock,
        production_config: ServiceConfig,
    ) -> None:
        """Test that both providers go global and the app is instrumented."""
        app = MagicMock()

        setup_observability(app, production_config)

        mock_trace.set_tracer_provider.assert_called_once_with(mock_build_tracer.return_value)
        mock_metrics.set_meter_provider.assert_called_once_with(mock_build_meter.return_value)
        mock_instrumentor.instrument_app.assert_called_once_with(app)
        assert mock_build_tracer.call_args.args[0] is production_config


@pytest.mark.unit
class TestTraced:
    """Tests for the traced decorator."""

    @pytest.mark.asyncio
    async def test_async_function_result_passes_through(self) -> None:
        """Test that decorated coroutines are awaited."""

        @traced()
        async def double(value: int) -> int:
            return value * 2

        assert await double(4) == 8
        assert double.__name__ == "double"

    @pytest.mark.asyncio
    async def test_exceptions_are_reraised(self) -> None:
        """Test that errors propagate through the span."""

        @traced("boom")
        async def boom() -> None:
            raise ValueError("bad")

        with pytest.raises(ValueError, match="bad"):
            await boom()

    @pytest.mark.asyncio
    async def test_failure_recorded_on_span(self) -> None:
        """Test that a failing call marks the span unsuccessful."""
        with patch("restaurant_order_service.observability.decorators.trace") as mock_trace:
            tracer = mock_trace.get_tracer.return_value
            span = tracer.start_as_current_span.return_value.__enter__.return_value

            @traced("delete_menu_item")
            async def delete_menu_item() -> None:
                raise LookupError("missing")

            with pytest.raises(LookupError):
                await delete_menu_item()

        tracer.start_as_current_span.assert_called_once_with("delete_menu_item")
        span.set_attribute.assert_any_call("success", False)
        span.set_attribute.assert_any_call("error.type", "LookupError")
        span.record_exception.assert_called_once()

    def test_rejects_plain_functions(self) -> None:
        """Test that decorating a non-coroutine function fails immediately."""
        with pytest.raises(TypeError, match="only supports async functions"):

            @traced("add")
            def add(a: int, b: int) -> int:
                return a + b
