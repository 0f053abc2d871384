"""OpenTelemetry tracing for rustsyms.

Tracing only activates when:
- OTEL_EXPORTER_OTLP_ENDPOINT env var is set, OR
- telemetry.enabled=true in rustsyms config

Usage:
    from rustsyms.core.telemetry import init_telemetry, traced

    # Once, at process start
    init_telemetry(config.telemetry)

    @traced("extract_file")
    def extract_file(...):
        ...

    # At shutdown
    shutdown_telemetry()

Until a provider is installed, ``get_tracer()`` returns the OpenTelemetry API's
proxy tracer, whose spans are non-recording.
"""

from __future__ import annotations

import functools
import logging
import os
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

from opentelemetry import trace as otel_trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from rustsyms.config.models import TelemetryConfig

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

_TRACER_NAME = "rustsyms"

# Process-wide state. Installing a global tracer provider twice is not
# supported by OpenTelemetry, so initialization runs at most once.
_init_lock = threading.Lock()
_initialized: bool = False
_tracer_provider: TracerProvider | None = None


def _is_telemetry_enabled(config: TelemetryConfig | None) -> bool:
    """Telemetry is enabled by OTEL_EXPORTER_OTLP_ENDPOINT or config.enabled."""
    if os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT"):
        return True
    return bool(config is not None and config.enabled)


def _get_otlp_endpoint(config: TelemetryConfig | None) -> str | None:
    """Get OTLP endpoint from env var or config."""
    endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    if endpoint:
        return endpoint
    if config is not None and config.otlp_endpoint:
        return config.otlp_endpoint
    return None


def _get_service_name(config: TelemetryConfig | None) -> str:
    """Get service name from env var or config."""
    service_name = os.environ.get("OTEL_SERVICE_NAME")
    if service_name:
        return service_name
    if config is not None:
        return config.service_name
    return "rustsyms"


def _is_insecure_endpoint(endpoint: str) -> bool:
    return endpoint.startswith("http://")


def _get_version() -> str:
    try:
        from importlib.metadata import version

        return version("rustsyms")
    except Exception:
        return "unknown"


def init_telemetry(config: TelemetryConfig | None = None) -> bool:
    """Install the OTLP tracer provider.

    Safe to call from several entry points: only the first call does any
    work, later calls return whether that first call activated tracing.

    Returns:
        True if tracing is active, False if disabled or unavailable.
    """
    global _initialized, _tracer_provider

    with _init_lock:
        if _initialized:
            logger.debug("Telemetry already initialized")
            return _tracer_provider is not None

        _initialized = True

        if not _is_telemetry_enabled(config):
            logger.debug(
                "Telemetry not enabled (set OTEL_EXPORTER_OTLP_ENDPOINT or telemetry.enabled=true)"
            )
            return False

        endpoint = _get_otlp_endpoint(config)
        if not endpoint:
            logger.warning("Telemetry enabled but no OTLP endpoint configured - telemetry disabled")
            return False

        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
                OTLPSpanExporter,
            )
        except ImportError as e:
            logger.warning(
                f"Failed to import OTLP exporter (install opentelemetry-exporter-otlp-proto-grpc): {e}"
            )
            return False

        resource = Resource.create(
            {
                "service.name": _get_service_name(config),
                "service.version": _get_version(),
            }
        )
        provider = TracerProvider(resource=resource)
        provider.add_span_processor(
            BatchSpanProcessor(
                OTLPSpanExporter(endpoint=endpoint, insecure=_is_insecure_endpoint(endpoint))
            )
        )
        otel_trace.set_tracer_provider(provider)
        _tracer_provider = provider

        logger.info(f"Telemetry initialized: endpoint={endpoint}")
        return True


def shutdown_telemetry() -> None:
    """Flush and shut down the tracer provider.

    The init guard stays set: a shut-down process does not re-install a
    provider.
    """
    global _tracer_provider

    with _init_lock:
        if _tracer_provider is None:
            return
        try:
            _tracer_provider.shutdown()
            logger.debug("Tracer provider shut down")
        except Exception as e:
            logger.warning(f"Error shutting down tracer provider: {e}")
        _tracer_provider = None


def get_tracer() -> otel_trace.Tracer:
    """Get the rustsyms tracer (non-recording until a provider is installed)."""
    return otel_trace.get_tracer(_TRACER_NAME)


def traced(
    name: str | None = None,
    *,
    attributes: dict[str, Any] | None = None,
    record_exception: bool = True,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator to trace function execution.

    Args:
        name: Custom span name. Defaults to function's qualified name.
        attributes: Static attributes to add to every span.
        record_exception: Whether to record exceptions on the span.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        span_name = name or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with span_context(span_name, attributes, record_exception=record_exception):
                return func(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def span_context(
    name: str,
    attributes: dict[str, Any] | None = None,
    record_exception: bool = True,
) -> Iterator[otel_trace.Span]:
    """Context manager for creating a span.

    Example:
        with span_context("assemble", {"include_private": True}) as span:
            span.set_attribute("items", len(items))
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name, record_exception=False) as span:
        if attributes:
            span.set_attributes(attributes)
        try:
            yield span
        except Exception as e:
            if record_exception:
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR))
            raise
