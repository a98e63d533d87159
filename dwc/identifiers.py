"""Deterministic taxon identifiers.

A taxon identifier has the form ``<shortname>:taxon:<hash>`` where the hash
is the lowercase hex MD5 digest of the scientific name exactly as it appears
in the source.  Rows sharing an ``accepted_name`` always share an id, which
is what every output table joins on.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Iterable, List, Optional

from .schema import DatasetConfig, RawRecord

logger = logging.getLogger(__name__)

# Representation hashed for a missing name, matching how the source
# spreadsheet tooling prints null values.
NULL_NAME = "NA"


def taxon_hash(name: Optional[str]) -> str:
    """Return the MD5 hex digest of ``name``."""

    text = NULL_NAME if name is None else name
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def make_taxon_id(name: Optional[str], shortname: str) -> str:
    return f"{shortname}:taxon:{taxon_hash(name)}"


def augment(records: Iterable[RawRecord], config: DatasetConfig) -> List[RawRecord]:
    """Return copies of ``records`` with ``taxon_id`` filled in."""

    augmented: List[RawRecord] = []
    for record in records:
        if not record.accepted_name:
            logger.warning(
                "Row %d has no accepted_name; it shares the degenerate id for unnamed taxa",
                record.row_number,
            )
        taxon_id = make_taxon_id(record.accepted_name, config.shortname)
        augmented.append(record.model_copy(update={"taxon_id": taxon_id}))
    return augmented


__all__ = ["NULL_NAME", "taxon_hash", "make_taxon_id", "augment"]
