"""Shared fixtures for the checklist pipeline tests."""

from pathlib import Path

import pyexcel
import pytest

from dwc import DatasetConfig, RawRecord, augment

HEADER = [
    "Accepted name",
    "Family",
    "Proposed status",
    "Continent of origin",
    "Life form",
    "Earliest record",
    "Latest record",
]

ROWS = [
    ["Acacia dealbata", "Fabaceae", "Naturalised", " Hybr ", "Tree", "1920", "1935"],
    ["Ageratum conyzoides", "Asteraceae", "Naturalised, invasive", "America", "Herb", "", "1990"],
    ["Cannabis sativa", "Cannabaceae", "casual", "Asia", "", "s.d.", "s.d."],
    ["", "", "", "", "", "", ""],
    ["Acacia dealbata", "Fabaceae", "Naturalised, cryptogenic", "Australia", "", "1937", "s.d."],
    ["Zea mays", "Poaceae", "Unknown status", "", "Herb", "", ""],
]


@pytest.fixture
def dataset():
    """Default dataset constants."""
    return DatasetConfig()


@pytest.fixture
def make_record():
    """Build a RawRecord with only the fields a test cares about."""

    def _make(row_number: int = 3, **fields) -> RawRecord:
        return RawRecord(row_number=row_number, **fields)

    return _make


@pytest.fixture
def records(dataset):
    """Augmented records mirroring ``ROWS`` without the empty line."""
    raw = []
    for offset, row in enumerate(ROWS, start=3):
        if not any(row):
            continue
        values = [cell or None for cell in row]
        raw.append(
            RawRecord(
                row_number=offset,
                accepted_name=values[0],
                family=values[1],
                proposed_status=values[2],
                continent_of_origin=values[3],
                life_form=values[4],
                earliest_record=values[5],
                latest_record=values[6],
            )
        )
    return augment(raw, dataset)


def write_checklist(path: Path, rows=None) -> Path:
    """Save a checklist sheet with a title row, headers and ``rows``."""
    sheet = [["Checklist of alien plants"], HEADER] + [list(r) for r in (rows or ROWS)]
    pyexcel.save_as(array=sheet, dest_file_name=str(path))
    return path


@pytest.fixture
def checklist_csv(tmp_path):
    return write_checklist(tmp_path / "checklist.csv")


@pytest.fixture
def checklist_xlsx(tmp_path):
    return write_checklist(tmp_path / "checklist.xlsx")
