"""Filesystem archive for generated report artifacts."""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from studio_books.domain.archive.entities import (
    ArchiveReceipt,
    ReportArchiveRequest,
    ReportArtifact,
    iter_artifacts,
)

logger = logging.getLogger(__name__)


def normalize_run_id(run_id: str) -> str:
    if not run_id:
        return "run"
    digits = re.findall(r"\d", run_id)
    if len(digits) >= 14:
        normalized = f"{''.join(digits[:8])}_{''.join(digits[8:14])}"
        rest = "".join(digits[14:])
        if rest:
            normalized += rest
        return normalized
    sanitized = re.sub(r"[^0-9A-Za-z_-]+", "", run_id.strip())
    return sanitized or "run"


class FileSystemReportArchive:
    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    def save_run(self, request: ReportArchiveRequest) -> ArchiveReceipt:
        run_id = normalize_run_id(request.run_id)
        run_dir = self._root / run_id
        run_dir.mkdir(parents=True, exist_ok=True)

        for artifact in iter_artifacts(request):
            self._write_artifact(run_dir, artifact)

        manifest = {
            "run_id": run_id,
            "firm_id": request.firm_id,
            "report": request.report,
            "metadata": dict(request.metadata),
            "artifacts": [self._manifest_entry(artifact) for artifact in request.artifacts],
        }
        (run_dir / "manifest.json").write_text(json.dumps(manifest, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Archived %d artifact(s) for %s to %s", len(request.artifacts), request.report, run_dir)

        return ArchiveReceipt(run_id=run_id, location=run_dir)

    @staticmethod
    def _write_artifact(run_dir: Path, artifact: ReportArtifact) -> None:
        (run_dir / artifact.name).write_bytes(artifact.content)

    @staticmethod
    def _manifest_entry(artifact: ReportArtifact) -> dict[str, object]:
        return {"name": artifact.name, "bytes": len(artifact.content)}
