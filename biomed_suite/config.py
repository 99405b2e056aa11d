"""Configuration helpers for the research suite service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple


PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _parse_positive_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    try:
        parsed = int(raw)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def _parse_positive_float(raw: str | None, default: float) -> float:
    if raw is None:
        return default
    try:
        parsed = float(raw)
    except (TypeError, ValueError):
        return default
    if parsed != parsed or parsed <= 0.0 or parsed == float("inf"):
        return default
    return parsed


def _parse_flag(raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    return str(raw).strip().lower() not in {"0", "false", "no", "off", ""}


@dataclass(slots=True)
class ServerConfig:
    """HTTP-facing settings: identity reported by the health check, binding and CORS."""

    title: str = "BioMed Research Suite"
    version: str = "3.0"
    platform: str = "Python"
    deployment: str = "Render"
    host: str = "0.0.0.0"
    port: int = 10000
    cors_origins: Tuple[str, ...] = ("*",)
    static_dir: Optional[str] = str(PROJECT_ROOT / "public")
    log_level: str = "INFO"

    @property
    def allows_any_origin(self) -> bool:
        return "*" in self.cors_origins

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        prefix: str = "BIOMED_",
    ) -> "ServerConfig":
        """Create a configuration object from environment variables.

        ``PORT`` is honoured when ``<prefix>PORT`` is unset so hosted
        platforms that inject a bare port variable keep working.
        ``<prefix>CORS_ORIGINS`` is a comma-separated list; ``*`` allows all.
        Setting ``<prefix>STATIC_DIR`` to an empty string disables static
        hosting.
        """

        env = os.environ if env is None else env

        origins_raw = env.get(f"{prefix}CORS_ORIGINS", "*")
        origins = tuple(origin.strip() for origin in origins_raw.split(",") if origin.strip()) or ("*",)

        static_dir: Optional[str] = str(PROJECT_ROOT / "public")
        if f"{prefix}STATIC_DIR" in env:
            static_dir = env[f"{prefix}STATIC_DIR"].strip() or None

        port = _parse_positive_int(env.get(f"{prefix}PORT") or env.get("PORT"), 10000)

        return cls(
            title=env.get(f"{prefix}TITLE", "BioMed Research Suite"),
            version=env.get(f"{prefix}VERSION", "3.0"),
            platform=env.get(f"{prefix}PLATFORM", "Python"),
            deployment=env.get(f"{prefix}DEPLOYMENT") or env.get("DEPLOYMENT_ENV", "Render"),
            host=env.get(f"{prefix}HOST", "0.0.0.0"),
            port=port,
            cors_origins=origins,
            static_dir=static_dir,
            log_level=env.get(f"{prefix}LOG_LEVEL", "INFO").upper(),
        )


@dataclass(slots=True)
class SimulationLimits:
    """Bounds applied by the engine before any computation runs."""

    max_docking_modes: int = 100
    max_growth_samples: int = 20000
    default_ic50: float = 10.0

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        prefix: str = "SIM_",
    ) -> "SimulationLimits":
        """Parse limits from environment variables, keeping defaults for bad values."""

        env = os.environ if env is None else env
        return cls(
            max_docking_modes=_parse_positive_int(env.get(f"{prefix}MAX_DOCKING_MODES"), 100),
            max_growth_samples=_parse_positive_int(env.get(f"{prefix}MAX_GROWTH_SAMPLES"), 20000),
            default_ic50=_parse_positive_float(env.get(f"{prefix}DEFAULT_IC50"), 10.0),
        )


@dataclass(slots=True)
class TelemetryConfig:
    """Runtime configuration for OpenTelemetry exporters."""

    enabled: bool = False
    service_name: str = "biomed-research-suite"
    environment: str = "development"
    exporter_endpoint: Optional[str] = None
    exporter_protocol: str = "http/protobuf"
    sampling_ratio: float = 0.1
    capture_metrics: bool = True
    capture_traces: bool = True
    resource_attributes: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        prefix: str = "OTEL_",
    ) -> "TelemetryConfig":
        """Construct a configuration object from environment variables."""

        env = os.environ if env is None else env
        enabled_raw = env.get(f"{prefix}ENABLED") or env.get("ENABLE_TELEMETRY")
        enabled = _parse_flag(enabled_raw, False)
        endpoint = env.get(f"{prefix}EXPORTER_OTLP_ENDPOINT") or env.get("OTEL_EXPORTER_OTLP_ENDPOINT")
        protocol = env.get(f"{prefix}EXPORTER_OTLP_PROTOCOL") or env.get("OTEL_EXPORTER_OTLP_PROTOCOL")
        service_name = env.get(f"{prefix}SERVICE_NAME") or env.get("SERVICE_NAME") or "biomed-research-suite"
        environment_name = env.get(f"{prefix}ENVIRONMENT") or env.get("DEPLOYMENT_ENV", "development")

        def _parse_ratio(raw: str | None, default: float) -> float:
            if raw is None:
                return default
            try:
                parsed = float(raw)
            except (TypeError, ValueError):
                return default
            if parsed <= 0.0:
                return 0.0
            if parsed >= 1.0:
                return 1.0
            return parsed

        sampling_ratio = _parse_ratio(
            env.get(f"{prefix}SAMPLING_RATIO") or env.get("OTEL_TRACES_SAMPLER_ARG"),
            0.1,
        )
        capture_metrics = _parse_flag(env.get(f"{prefix}CAPTURE_METRICS"), True)
        capture_traces = _parse_flag(env.get(f"{prefix}CAPTURE_TRACES"), True)

        attributes: dict[str, str] = {}
        for item in (env.get("OTEL_RESOURCE_ATTRIBUTES") or "").split(","):
            key, sep, value = item.partition("=")
            if sep and key.strip():
                attributes[key.strip()] = value.strip()

        return cls(
            enabled=enabled or bool(endpoint),
            service_name=service_name,
            environment=environment_name,
            exporter_endpoint=endpoint,
            exporter_protocol=protocol or "http/protobuf",
            sampling_ratio=sampling_ratio,
            capture_metrics=capture_metrics,
            capture_traces=capture_traces,
            resource_attributes=attributes,
        )


DEFAULT_SERVER_CONFIG = ServerConfig.from_env()
DEFAULT_SIMULATION_LIMITS = SimulationLimits.from_env()
DEFAULT_TELEMETRY_CONFIG = TelemetryConfig.from_env()
