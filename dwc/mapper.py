from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set

from .errors import MappingError
from .normalize import lookup_vocab, normalize_vocab, recode, strip_or_none
from .schema import (
    DatasetConfig,
    DescriptionRecord,
    DistributionRecord,
    RawRecord,
    SpeciesProfileRecord,
    TaxonRecord,
)
from .validators import derive_event_date

logger = logging.getLogger(__name__)

NATIVE_RANGE = "native range"
LIFE_FORM = "life form"


def map_taxa(records: Iterable[RawRecord], config: DatasetConfig) -> List[TaxonRecord]:
    """Return one :class:`TaxonRecord` per distinct ``taxon_id``.

    The first record carrying an id wins; later duplicates are ignored.
    """

    seen: Set[Optional[str]] = set()
    taxa: List[TaxonRecord] = []
    for record in records:
        if record.taxon_id in seen:
            continue
        seen.add(record.taxon_id)
        taxa.append(
            TaxonRecord(
                language=config.language,
                license=config.license,
                rightsHolder=config.rights_holder,
                datasetID=config.dataset_id,
                datasetName=config.dataset_name,
                taxonID=record.taxon_id,
                scientificName=record.accepted_name,
                kingdom=config.kingdom,
                family=record.family,
                taxonRank=config.taxon_rank,
                nomenclaturalCode=config.nomenclatural_code,
            )
        )
    logger.info("Mapped %d taxa", len(taxa))
    return taxa


def _degree_of_establishment(record: RawRecord) -> Optional[str]:
    try:
        return normalize_vocab(record.proposed_status, "degreeOfEstablishment", row=record.row_number)
    except MappingError as exc:
        logger.warning("degreeOfEstablishment left empty: %s", exc)
        return None


def map_distributions(
    records: Iterable[RawRecord], config: DatasetConfig
) -> List[DistributionRecord]:
    """Return one :class:`DistributionRecord` per source record."""

    distributions = [
        DistributionRecord(
            taxonID=record.taxon_id,
            locality=config.locality,
            countryCode=config.country_code,
            establishmentMeans=lookup_vocab(
                record.proposed_status, "establishmentMeans", default="introduced"
            ),
            degreeOfEstablishment=_degree_of_establishment(record),
            eventDate=derive_event_date(record.earliest_record, record.latest_record),
        )
        for record in records
    ]
    logger.info("Mapped %d distributions", len(distributions))
    return distributions


def _native_range(record: RawRecord) -> Optional[str]:
    return recode(strip_or_none(record.continent_of_origin), "nativeRange")


def _life_form(record: RawRecord) -> Optional[str]:
    return record.life_form


DESCRIPTORS = [
    (NATIVE_RANGE, _native_range),
    (LIFE_FORM, _life_form),
]


def map_descriptions(
    records: Iterable[RawRecord], config: DatasetConfig
) -> List[DescriptionRecord]:
    """Return one :class:`DescriptionRecord` per populated descriptor.

    Each descriptor type yields its own sub-table; records with no value for
    that descriptor are dropped.  The result is the sub-tables concatenated
    in ``DESCRIPTORS`` order, without deduplication.  Life form is copied
    verbatim, so a whitespace-only value is kept as its own row.
    """

    records = list(records)
    descriptions: List[DescriptionRecord] = []
    for descriptor_type, extract in DESCRIPTORS:
        for record in records:
            value = extract(record)
            if not value:
                continue
            descriptions.append(
                DescriptionRecord(
                    taxonID=record.taxon_id,
                    description=value,
                    type=descriptor_type,
                    language=config.language,
                )
            )
    logger.info("Mapped %d descriptions", len(descriptions))
    return descriptions


def map_species_profiles(
    records: Iterable[RawRecord], config: DatasetConfig
) -> List[SpeciesProfileRecord]:
    """Species profiles have no source columns yet; the table stays empty."""

    return []
