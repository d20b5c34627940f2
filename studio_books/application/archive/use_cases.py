"""Archive application use cases."""
from __future__ import annotations

from dataclasses import dataclass

from studio_books.domain.archive.entities import ArchiveReceipt, ReportArchiveRequest
from studio_books.infrastructure.archive.file_repository import FileSystemReportArchive


@dataclass(slots=True)
class ArchiveReportUseCase:
    repository: FileSystemReportArchive

    def execute(self, request: ReportArchiveRequest) -> ArchiveReceipt:
        return self.repository.save_run(request)
