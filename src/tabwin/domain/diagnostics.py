from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from loguru import logger


class DiagnosticKind(str, Enum):
    INVARIANT_ANOMALY = "invariant_anomaly"
    INPUT_REJECTION = "input_rejection"

    @property
    def level(self) -> str:
        return "WARNING" if self is DiagnosticKind.INVARIANT_ANOMALY else "ERROR"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    message: str
    context: Mapping[str, Any] = field(default_factory=dict)


class DiagnosticsSink(Protocol):
    def report(self, diagnostic: Diagnostic) -> None: ...


class LoguruSink:
    """Forwards diagnostics to loguru without configuring any handler."""

    def report(self, diagnostic: Diagnostic) -> None:
        logger.bind(kind=diagnostic.kind.value, context=dict(diagnostic.context)).log(
            diagnostic.kind.level, "{}: {}", diagnostic.kind.value, diagnostic.message
        )


DEFAULT_SINK: DiagnosticsSink = LoguruSink()
