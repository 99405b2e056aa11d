from fastapi import FastAPI

from biomed_suite.config import TelemetryConfig
from biomed_suite.telemetry import TelemetryManager, configure_telemetry, exporter_module


def test_disabled_telemetry_is_a_no_op() -> None:
    manager = configure_telemetry(TelemetryConfig(enabled=False))

    assert not manager.enabled
    app = FastAPI()
    manager.instrument_app(app)
    manager.shutdown()


def test_no_signals_selected_leaves_telemetry_off() -> None:
    manager = TelemetryManager(config=TelemetryConfig(enabled=True, capture_metrics=False, capture_traces=False))
    manager.configure()

    assert not manager.enabled


def test_shutdown_runs_hooks_in_reverse_order() -> None:
    calls = []
    manager = TelemetryManager(config=TelemetryConfig())
    manager._shutdown_hooks.extend([lambda: calls.append("first"), lambda: calls.append("second")])

    manager.shutdown()

    assert calls == ["second", "first"]


def test_exporter_module_follows_protocol() -> None:
    assert exporter_module("http/protobuf") == "opentelemetry.exporter.otlp.proto.http"
    assert exporter_module(" GRPC ") == "opentelemetry.exporter.otlp.proto.grpc"
    assert exporter_module("http/json") is None


def test_unsupported_protocol_leaves_telemetry_off() -> None:
    manager = configure_telemetry(TelemetryConfig(enabled=True, exporter_protocol="http/json"))

    assert not manager.enabled
