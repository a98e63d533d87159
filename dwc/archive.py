"""Utilities for creating Darwin Core Archives.

This module builds a ``meta.xml`` descriptor for the checklist tables: the
taxon table is the archive core and the distribution, species profile and
description tables are extensions keyed on ``taxonID``.  The descriptor can
optionally be bundled with the CSV files into a ZIP to form a complete
Darwin Core Archive (DwC-A).
"""

from __future__ import annotations

from pathlib import Path
from xml.etree.ElementTree import Element, SubElement, tostring
from xml.dom import minidom
from zipfile import ZipFile, ZIP_DEFLATED
import logging

from .schema import ROW_TYPES, TABLES, term_uri

ARCHIVE_NAME = "dwca.zip"


def _table_element(root: Element, tag: str, table) -> None:
    el = SubElement(
        root,
        tag,
        {
            "encoding": "UTF-8",
            "linesTerminatedBy": "\n",
            "fieldsTerminatedBy": ",",
            "fieldsEnclosedBy": '"',
            "ignoreHeaderLines": "1",
            "rowType": ROW_TYPES[table.FILENAME],
        },
    )
    files_el = SubElement(el, "files")
    SubElement(files_el, "location").text = table.FILENAME
    SubElement(el, "id" if tag == "core" else "coreid", index="0")
    for idx, term in enumerate(table.TERMS):
        SubElement(el, "field", index=str(idx), term=term_uri(term))


def build_meta_xml(output_dir: Path) -> Path:
    """Create ``meta.xml`` for a Darwin Core Archive.

    Parameters
    ----------
    output_dir:
        Directory containing the checklist CSV files.

    Returns
    -------
    Path to the written ``meta.xml`` file.
    """

    output_dir.mkdir(parents=True, exist_ok=True)
    root = Element("archive", xmlns="http://rs.tdwg.org/dwc/text/")
    core, *extensions = TABLES
    _table_element(root, "core", core)
    for table in extensions:
        _table_element(root, "extension", table)

    xml_bytes = tostring(root, encoding="utf-8")
    pretty = minidom.parseString(xml_bytes).toprettyxml(indent="  ", encoding="UTF-8")
    meta_path = output_dir / "meta.xml"
    meta_path.write_bytes(pretty)
    return meta_path


def create_archive(output_dir: Path, *, compress: bool = False) -> Path:
    """Ensure ``meta.xml`` exists and optionally zip the archive.

    Returns
    -------
    Path to ``meta.xml`` if ``compress`` is ``False``; otherwise the path to the
    created ZIP file.
    """
    logger = logging.getLogger(__name__)

    meta_path = build_meta_xml(output_dir)
    if not compress:
        return meta_path

    files_to_include = [table.FILENAME for table in TABLES] + ["meta.xml", "manifest.json"]
    archive_path = output_dir / ARCHIVE_NAME
    logger.info("Creating archive: %s", archive_path.name)

    with ZipFile(archive_path, "w", ZIP_DEFLATED) as zf:
        files_added = []
        for name in files_to_include:
            file_path = output_dir / name
            if file_path.exists():
                zf.write(file_path, arcname=name)
                files_added.append(name)
            else:
                logger.warning("Requested file %s not found, skipping", name)

        logger.info("Archive created with %d files: %s", len(files_added), ", ".join(files_added))

    return archive_path
