"""Load the table mapping input file basenames to document ids."""

from __future__ import annotations

import gzip
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping

logger = logging.getLogger(__name__)


def load_filename_map(path: Path) -> Mapping[str, str]:
    """Read a ``basename<TAB>document-id`` table from ``path``.

    The file is decompressed when its name ends in ``.gz``.  Lines that do not
    hold exactly two fields are ignored.  The returned mapping is read-only.
    """

    path = Path(path)
    mapping: Dict[str, str] = {}
    if path.suffix == ".gz":
        handle = gzip.open(path, "rt", encoding="utf-8")
    else:
        handle = path.open("r", encoding="utf-8")
    with handle:
        for line in handle:
            fields = line.rstrip("\r\n").split("\t")
            if len(fields) == 2:
                mapping[fields[0]] = fields[1]
    logger.info("Read %d filename mapping(s) from %s", len(mapping), path)
    return MappingProxyType(mapping)


__all__ = ["load_filename_map"]
