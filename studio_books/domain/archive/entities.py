"""Archive domain entities for storing generated reports."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Sequence


@dataclass(frozen=True)
class ReportArtifact:
    name: str
    content: bytes


@dataclass(frozen=True)
class ReportArchiveRequest:
    run_id: str
    firm_id: str
    report: str
    artifacts: Sequence[ReportArtifact]
    metadata: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ArchiveReceipt:
    run_id: str
    location: Path


def iter_artifacts(request: ReportArchiveRequest) -> Iterable[ReportArtifact]:
    yield from request.artifacts
