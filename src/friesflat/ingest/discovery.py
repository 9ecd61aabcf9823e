"""Find and read the part files of FRIES documents on disk.

A document is written as three JSON part files sharing a basename, e.g.::

    PMC123.uaz.entities.json
    PMC123.uaz.events.json
    PMC123.uaz.sentences.json

The shorter ``PMC123.events.json`` form is also accepted.  The document id is
the basename up to the first ``.``, optionally rewritten through a filename
mapping table.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from ..errors import DocumentError
from ..frames import PART_KINDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentFiles:
    """Part files found for one document in one directory."""

    document_id: str
    directory: Path
    parts: Mapping[str, Path]

    @property
    def missing(self) -> Tuple[str, ...]:
        return tuple(kind for kind in PART_KINDS if kind not in self.parts)


def extract_part_kind(filename: str) -> Optional[str]:
    """Return the part kind named in ``filename`` or ``None``.

    ``id.tag.kind.json`` and ``id.kind.json`` are recognised.
    """

    pieces = filename.split(".")
    if len(pieces) < 3:
        return None
    kind = pieces[2] if len(pieces) > 3 else pieces[1]
    return kind if kind in PART_KINDS else None


def document_id_for(filename: str, filename_map: Optional[Mapping[str, str]] = None) -> str:
    base = filename.split(".", 1)[0]
    if filename_map:
        return filename_map.get(base, base)
    return base


def group_documents(
    directory: Path, filename_map: Optional[Mapping[str, str]] = None
) -> List[DocumentFiles]:
    """Group the JSON part files directly inside ``directory`` by document."""

    groups: Dict[str, Dict[str, Path]] = {}
    for path in sorted(directory.iterdir()):
        if not path.name.endswith(".json"):
            continue
        kind = extract_part_kind(path.name)
        if kind is None:
            continue
        document_id = document_id_for(path.name, filename_map)
        groups.setdefault(document_id, {})[kind] = path
    return [
        DocumentFiles(document_id=document_id, directory=directory, parts=parts)
        for document_id, parts in groups.items()
    ]


def iter_directories(top: Path) -> Iterator[Path]:
    """Yield ``top`` followed by every readable directory below it."""

    yield top
    for path in sorted(top.rglob("*")):
        if path.is_dir() and os.access(path, os.R_OK | os.X_OK):
            yield path


def discover_documents(
    top: Path, filename_map: Optional[Mapping[str, str]] = None
) -> Iterator[DocumentFiles]:
    for directory in iter_directories(top):
        yield from group_documents(directory, filename_map)


def validate_document(files: DocumentFiles) -> DocumentFiles:
    """Check that every part file exists and is readable.

    Raises :class:`DocumentError` naming the missing or unreadable parts.
    """

    readable: Dict[str, Path] = {}
    for kind, path in files.parts.items():
        if path.is_file() and os.access(path, os.R_OK):
            readable[kind] = path
        else:
            logger.warning("%s is not found, not a file, or not readable", path)
    checked = DocumentFiles(files.document_id, files.directory, readable)
    if checked.missing:
        raise DocumentError(
            files.document_id,
            f"expected {len(PART_KINDS)} part files, missing {', '.join(checked.missing)}",
        )
    return checked


def read_collections(files: DocumentFiles) -> Dict[str, Any]:
    """Parse the JSON of each part file, keyed by part kind."""

    collections: Dict[str, Any] = {}
    for kind, path in files.parts.items():
        try:
            with path.open("r", encoding="utf-8") as handle:
                collections[kind] = json.load(handle)
        except (OSError, ValueError) as exc:
            raise DocumentError(files.document_id, f"cannot read {path.name}: {exc}") from exc
    return collections


__all__ = [
    "DocumentFiles",
    "discover_documents",
    "document_id_for",
    "extract_part_kind",
    "group_documents",
    "iter_directories",
    "read_collections",
    "validate_document",
]
