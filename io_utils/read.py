from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
import hashlib
import logging
import re
import unicodedata

import pyexcel

from dwc.errors import LoadError
from dwc.schema import RawRecord

logger = logging.getLogger(__name__)

# Row 1 of the sheet is a document title, row 2 holds the column headers.
TITLE_ROWS = 1

# Formats pyexcel parses from text; their cells are read without type detection.
TEXT_FORMATS = {".csv", ".tsv"}

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def clean_header(name: Any) -> str:
    """Return ``name`` as a lowercase, underscore separated identifier."""

    text = "" if name is None else str(name)
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = _CAMEL_RE.sub("_", text).lower()
    text = _NON_ALNUM_RE.sub("_", text).strip("_")
    if not text:
        return "x"
    if text[0].isdigit():
        return f"x{text}"
    return text


def clean_headers(names: Iterable[Any]) -> List[str]:
    """Clean every header and suffix repeats with ``_2``, ``_3``, ... in order."""

    cleaned: List[str] = []
    counts: Dict[str, int] = {}
    for name in names:
        base = clean_header(name)
        counts[base] = counts.get(base, 0) + 1
        candidate = base if counts[base] == 1 else f"{base}_{counts[base]}"
        while candidate in cleaned:
            counts[base] += 1
            candidate = f"{base}_{counts[base]}"
        cleaned.append(candidate)
    return cleaned


def cell_to_str(value: Any) -> Optional[str]:
    """Convert a spreadsheet cell to a string, mapping empty cells to ``None``."""

    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _is_empty(row: List[Any]) -> bool:
    return all(cell is None or cell == "" for cell in row)


def load_spreadsheet(path: Path) -> List[RawRecord]:
    """Read the first sheet of ``path`` into :class:`RawRecord` objects.

    The title row is discarded, the next row supplies the column names and
    fully empty rows are dropped.  Source order is kept and every record
    remembers its sheet row in ``row_number``.
    """

    if not path.is_file():
        raise LoadError(f"input file not found: {path}")
    options = {}
    if path.suffix.lower() in TEXT_FORMATS:
        # Keep text cells verbatim; "1920.10" must not become 1920.1
        options = {
            "auto_detect_int": False,
            "auto_detect_float": False,
            "auto_detect_datetime": False,
        }
    try:
        sheet = pyexcel.get_array(file_name=str(path), **options)
    except Exception as exc:
        raise LoadError(f"cannot read {path}: {exc}") from exc

    if len(sheet) < TITLE_ROWS + 1:
        raise LoadError(f"{path} has {len(sheet)} rows; expected a title row and a header row")

    width = max(len(row) for row in sheet)
    header_row = list(sheet[TITLE_ROWS]) + [None] * (width - len(sheet[TITLE_ROWS]))
    headers = clean_headers(header_row)

    records: List[RawRecord] = []
    dropped = 0
    for offset, row in enumerate(sheet[TITLE_ROWS + 1 :], start=TITLE_ROWS + 2):
        row = list(row) + [None] * (width - len(row))
        if _is_empty(row):
            dropped += 1
            continue
        data = {header: cell_to_str(cell) for header, cell in zip(headers, row)}
        data.pop("row_number", None)
        data.pop("taxon_id", None)
        records.append(RawRecord(row_number=offset, **data))

    logger.info(
        "Loaded %d records from %s (%d empty rows dropped)", len(records), path.name, dropped
    )
    return records


def compute_sha256(path: Path) -> str:
    """Compute the SHA256 hash of a file.

    Args:
        path: Path to file

    Returns:
        Hex string of SHA256 hash
    """
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()
