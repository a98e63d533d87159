from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Sequence
import csv
import json
import logging
import os
import shutil
import tempfile

from dwc.errors import WriteError
from dwc.schema import DwcRecord, TABLES

logger = logging.getLogger(__name__)


def sort_by_taxon_id(rows: Iterable[DwcRecord]) -> list:
    """Return ``rows`` stably sorted by ``taxonID``; missing ids sort first."""

    return sorted(rows, key=lambda row: row.taxonID or "")


def write_table_csv(csv_path: Path, table: type, rows: Iterable[DwcRecord]) -> int:
    """Write one Darwin Core table to ``csv_path`` and return the row count."""

    count = 0
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=table.TERMS, lineterminator="\n")
        writer.writeheader()
        for row in sort_by_taxon_id(rows):
            writer.writerow(row.to_dict())
            count += 1
    return count


def _swap_into_place(staging: Path, output_dir: Path, names: Sequence[str]) -> None:
    """Move ``names`` from ``staging`` into ``output_dir`` as one unit.

    Existing files are parked in ``staging/previous`` first; on failure the
    new files are removed and the parked ones put back.
    """
    previous = staging / "previous"
    previous.mkdir()
    parked: list = []
    placed: list = []
    try:
        for name in names:
            if (output_dir / name).exists():
                os.replace(output_dir / name, previous / name)
                parked.append(name)
        for name in names:
            os.replace(staging / name, output_dir / name)
            placed.append(name)
    except OSError as exc:
        for name in placed:
            (output_dir / name).unlink(missing_ok=True)
        for name in parked:
            os.replace(previous / name, output_dir / name)
        raise WriteError(f"cannot move tables into {output_dir}: {exc}") from exc


def write_dwc_tables(
    output_dir: Path, tables: Mapping[type, Sequence[DwcRecord]]
) -> Dict[str, int]:
    """Write every checklist table into ``output_dir``.

    Files are written to a scratch directory next to the destination first
    and only moved into place once all of them succeeded.  If moving any of
    them fails, the previous set of files is restored.  Returns the row
    count per file name.
    """

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=".staging-", dir=output_dir))
    except OSError as exc:
        raise WriteError(f"cannot prepare output directory {output_dir}: {exc}") from exc

    counts: Dict[str, int] = {}
    try:
        for table in TABLES:
            rows = tables.get(table, [])
            try:
                counts[table.FILENAME] = write_table_csv(staging / table.FILENAME, table, rows)
            except OSError as exc:
                raise WriteError(f"cannot write {table.FILENAME}: {exc}") from exc
        _swap_into_place(staging, output_dir, [table.FILENAME for table in TABLES])
    finally:
        shutil.rmtree(staging, ignore_errors=True)

    for name, count in counts.items():
        logger.info("Wrote %d rows to %s", count, output_dir / name)
    return counts


def write_manifest(output_dir: Path, meta: Dict[str, Any]) -> None:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        manifest_path = output_dir / "manifest.json"
        manifest_path.write_text(json.dumps(meta, indent=2, sort_keys=True))
    except OSError as exc:
        raise WriteError(f"cannot write manifest.json: {exc}") from exc
