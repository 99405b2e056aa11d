"""OpenTelemetry bootstrap utilities for the research suite API.

Exporters speak OTLP over the protocol named by
``TelemetryConfig.exporter_protocol``: ``http/protobuf`` (the default) or
``grpc``.  Any other value leaves telemetry off with a warning.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import importlib
import logging
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple

from .config import TelemetryConfig

LOGGER = logging.getLogger(__name__)

if TYPE_CHECKING:  # pragma: no cover - typing only
    from fastapi import FastAPI


EXPORTER_MODULES = {
    "http/protobuf": "opentelemetry.exporter.otlp.proto.http",
    "http": "opentelemetry.exporter.otlp.proto.http",
    "grpc": "opentelemetry.exporter.otlp.proto.grpc",
}


def exporter_module(protocol: str) -> Optional[str]:
    """Return the OTLP exporter package for ``protocol`` or ``None`` if unsupported."""

    return EXPORTER_MODULES.get(protocol.strip().lower())


def _load_exporters(package: str) -> Tuple[Any, Any]:
    spans = importlib.import_module(f"{package}.trace_exporter")
    metrics = importlib.import_module(f"{package}.metric_exporter")
    return spans.OTLPSpanExporter, metrics.OTLPMetricExporter


@dataclass
class TelemetryManager:
    """Wire OTLP traces and metrics for the API when configured to."""

    config: TelemetryConfig
    _shutdown_hooks: List[Callable[[], None]] = field(default_factory=list)
    _instrument_fastapi: Optional[Callable[["FastAPI"], None]] = None
    _enabled: bool = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def configure(self) -> None:
        config = self.config
        if not config.enabled:
            LOGGER.debug("Telemetry disabled by configuration")
            return
        if not config.capture_traces and not config.capture_metrics:
            LOGGER.debug("Telemetry enabled but no signals selected")
            return
        package = exporter_module(config.exporter_protocol)
        if package is None:
            LOGGER.warning("Unsupported OTLP protocol %r; telemetry disabled", config.exporter_protocol)
            return
        try:
            from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
            from opentelemetry.sdk.resources import Resource

            span_exporter_cls, metric_exporter_cls = _load_exporters(package)
        except ImportError:
            LOGGER.warning("OpenTelemetry SDK or %s exporter not available; telemetry disabled", config.exporter_protocol)
            return

        resource = Resource.create(
            {
                "service.name": config.service_name,
                "deployment.environment": config.environment,
                **config.resource_attributes,
            }
        )
        if config.capture_traces:
            self._configure_traces(resource, span_exporter_cls)
        if config.capture_metrics:
            self._configure_metrics(resource, metric_exporter_cls)

        # The app instance is supplied later through instrument_app().
        self._instrument_fastapi = FastAPIInstrumentor().instrument_app  # type: ignore[attr-defined]
        self._enabled = True

    def _configure_traces(self, resource: Any, exporter_cls: Any) -> None:
        from opentelemetry import trace
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
        from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

        sampler = TraceIdRatioBased(max(min(self.config.sampling_ratio, 1.0), 0.0))
        provider = TracerProvider(resource=resource, sampler=sampler)
        try:
            provider.add_span_processor(BatchSpanProcessor(exporter_cls(endpoint=self.config.exporter_endpoint)))
        except Exception as exc:  # pragma: no cover - exporter wiring
            LOGGER.warning("Failed to initialise OTLP span exporter: %s", exc)
            return
        trace.set_tracer_provider(provider)
        self._shutdown_hooks.append(provider.shutdown)
        LOGGER.info(
            "OpenTelemetry tracing configured (endpoint=%s, protocol=%s)",
            self.config.exporter_endpoint,
            self.config.exporter_protocol,
        )

    def _configure_metrics(self, resource: Any, exporter_cls: Any) -> None:
        from opentelemetry import metrics
        from opentelemetry.sdk.metrics import MeterProvider
        from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader

        try:
            reader = PeriodicExportingMetricReader(exporter_cls(endpoint=self.config.exporter_endpoint))
        except Exception as exc:  # pragma: no cover - exporter wiring
            LOGGER.warning("Failed to initialise OTLP metric exporter: %s", exc)
            return
        meter_provider = MeterProvider(resource=resource, metric_readers=[reader])
        metrics.set_meter_provider(meter_provider)
        self._shutdown_hooks.append(meter_provider.shutdown)  # type: ignore[arg-type]
        LOGGER.info("OpenTelemetry metrics configured (endpoint=%s)", self.config.exporter_endpoint)

    def instrument_app(self, app: "FastAPI") -> None:
        if self._instrument_fastapi is None:
            return
        try:
            self._instrument_fastapi(app)
        except Exception as exc:  # pragma: no cover - instrumentation failure
            LOGGER.warning("Failed to instrument FastAPI: %s", exc)

    def shutdown(self) -> None:
        while self._shutdown_hooks:
            hook = self._shutdown_hooks.pop()
            try:
                hook()
            except Exception as exc:  # pragma: no cover - best effort cleanup
                LOGGER.debug("Telemetry shutdown hook failed: %s", exc)


def configure_telemetry(config: TelemetryConfig) -> TelemetryManager:
    manager = TelemetryManager(config=config)
    manager.configure()
    return manager
