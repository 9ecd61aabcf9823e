"""Walk a directory tree and convert every complete document found in it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import DocumentError
from .ingest.discovery import discover_documents, read_collections, validate_document
from .pipeline import ConversionPipeline

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """Totals for one run over a directory tree."""

    documents: int = 0
    skipped: int = 0
    accepted: int = 0


class ConversionRunner:
    """Feed each document under a directory to a :class:`ConversionPipeline`.

    ``filename_map`` is the read-only basename to document-id table; it is
    loaded once by the caller and shared by every document of the run.
    """

    def __init__(
        self,
        pipeline: ConversionPipeline,
        filename_map: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.pipeline = pipeline
        self.filename_map = filename_map

    def run(self, directory: Path) -> RunReport:
        report = RunReport()
        for files in discover_documents(Path(directory), self.filename_map):
            try:
                collections = read_collections(validate_document(files))
                accepted = self.pipeline.convert(files.document_id, collections)
            except DocumentError as exc:
                logger.warning("Skipping document %s", exc)
                report.skipped += 1
                continue
            report.documents += 1
            report.accepted += accepted
        logger.info(
            "Converted %d document(s), skipped %d, %d tuple(s) accepted",
            report.documents,
            report.skipped,
            report.accepted,
        )
        return report


__all__ = ["ConversionRunner", "RunReport"]
