"""Write gathered records into a directory, one file per record."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from cluster_gather.gather.models import Record

logger = logging.getLogger(__name__)


def write_records(records: Iterable[Record], output_dir: Path) -> list[Path]:
    """Write each record to ``output_dir/<record filename>``. Returns written paths."""
    root = Path(output_dir).resolve()
    written: list[Path] = []
    for record in records:
        path = (root / record.filename).resolve()
        if root not in path.parents:
            raise ValueError(f"Record name escapes output directory: {record.name}")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(record.marshal())
        written.append(path)
    logger.debug("Wrote %d records to %s", len(written), root)
    return written
