"""OpenTelemetry tracing setup for the planning service.

Exporters: console (development), otlp (gRPC collector) or none.
"""

import logging
import threading

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

EXCLUDED_URLS = "/api/v1/health"


class TelemetryConfig:
    """Tracer provider plus FastAPI, SQLAlchemy and logging instrumentation."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None
        self._instrumented_engines: set[int] = set()

    @property
    def active(self) -> bool:
        return self.enabled and self.tracer_provider is not None

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Build the tracer provider and install it globally.

        Args:
            exporter_type: "console", "otlp" or "none".
            otlp_endpoint: OTLP gRPC endpoint (e.g. http://localhost:4317); required for "otlp".
            sample_rate: Fraction of traces kept, 0.0 to 1.0.

        Returns:
            The provider, or None when disabled or setup failed.
        """
        if not self.enabled:
            logger.info("Telemetry disabled")
            return None
        try:
            resource = Resource(
                attributes={
                    SERVICE_NAME: self.service_name,
                    SERVICE_VERSION: self.service_version,
                    "deployment.environment": self.environment,
                }
            )
            provider = TracerProvider(resource=resource, sampler=TraceIdRatioBased(sample_rate))

            if exporter_type == "none":
                logger.info("Telemetry enabled without an exporter")
            else:
                if exporter_type == "otlp" and otlp_endpoint:
                    exporter = OTLPSpanExporter(
                        endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
                    )
                    logger.info("Using OTLP span exporter: %s", otlp_endpoint)
                else:
                    if exporter_type != "console":
                        logger.warning(
                            "Exporter '%s' unusable (missing endpoint?), using console",
                            exporter_type,
                        )
                    exporter = ConsoleSpanExporter()
                provider.add_span_processor(BatchSpanProcessor(exporter))

            trace.set_tracer_provider(provider)
            self.tracer_provider = provider
            logger.info(
                "OpenTelemetry initialized: service=%s version=%s exporter=%s",
                self.service_name,
                self.service_version,
                exporter_type,
            )
            return provider
        except Exception as e:
            logger.exception("Failed to initialize telemetry: %s", e)
            return None

    def instrument_fastapi(self, app: FastAPI) -> None:
        if not self.active:
            return
        try:
            FastAPIInstrumentor.instrument_app(
                app, tracer_provider=self.tracer_provider, excluded_urls=EXCLUDED_URLS
            )
            logger.info("FastAPI instrumentation enabled")
        except Exception as e:
            logger.exception("Failed to instrument FastAPI: %s", e)

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        """Trace queries on engine. Each engine is instrumented once."""
        if not self.active or id(engine) in self._instrumented_engines:
            return
        try:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine,
                tracer_provider=self.tracer_provider,
                enable_commenter=True,
            )
            self._instrumented_engines.add(id(engine))
            logger.info("SQLAlchemy instrumentation enabled")
        except Exception as e:
            logger.exception("Failed to instrument SQLAlchemy: %s", e)

    def instrument_logging(self) -> None:
        """Inject otelTraceID/otelSpanID into log records."""
        if not self.active:
            return
        try:
            LoggingInstrumentor().instrument(tracer_provider=self.tracer_provider)
            logger.info("Logging instrumentation enabled")
        except Exception as e:
            logger.exception("Failed to instrument logging: %s", e)

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
            logger.info("Telemetry shutdown complete")
        except Exception as e:
            logger.exception("Error during telemetry shutdown: %s", e)


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the instance installed at startup, if any."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
