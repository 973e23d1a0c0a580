"""Conversion tracing on top of the OpenTelemetry API.

Converters obtain a tracer once per module::

    _tracer = get_tracer(__name__)

and wrap each conversion in a ``prompt.convert`` span tagged with the
``ATTR_*`` keys below. Until :func:`configure_telemetry` installs an SDK
tracer provider, the API hands out no-op spans and tracing costs nothing.

Exporting spans needs the ``otel`` extra (``pip install promptconv[otel]``).
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

ATTR_PROVIDER = "promptconv.provider"
ATTR_MODEL = "promptconv.model"
ATTR_PROMPT = "promptconv.prompt"
ATTR_TEMPLATE_FORMAT = "promptconv.template_format"
ATTR_STAGE = "promptconv.stage"
ATTR_OUTCOME = "promptconv.outcome"
ATTR_TOOLS_TOTAL = "promptconv.tools.total"
ATTR_TOOLS_CONVERTED = "promptconv.tools.converted"

_INSTRUMENTATION_NAME = "promptconv"

_SDK_HINT = "Install it with: pip install promptconv[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Tracer for *name*; a no-op tracer while no SDK provider is installed."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "promptconv",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider that exports conversion spans.

    Console export writes span JSON to stderr so that stdout stays
    reserved for converted parameters. ``otlp_endpoint`` adds a batched
    OTLP/gRPC exporter.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, for OTLP export,
            ``opentelemetry-exporter-otlp``) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = f"opentelemetry-sdk is required to export conversion spans. {_SDK_HINT}"
        raise ImportError(msg) from exc

    processors: list[Any] = []
    if export_to_console:
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        processors.append(BatchSpanProcessor(_otlp_exporter(otlp_endpoint)))

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))  # pyright: ignore[reportUnknownVariableType,reportUnknownMemberType]
    for processor in processors:
        provider.add_span_processor(processor)  # pyright: ignore[reportUnknownMemberType]
    trace.set_tracer_provider(provider)  # pyright: ignore[reportUnknownArgumentType]


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
    except ImportError as exc:
        msg = f"opentelemetry-exporter-otlp is required for OTLP export. {_SDK_HINT}"
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)
