from __future__ import annotations

from typing import ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

DEFAULT_SCHEMA_URI = "http://rs.tdwg.org/dwc/terms/"
DCTERMS_URI = "http://purl.org/dc/terms/"
GBIF_TERMS_URI = "http://rs.gbif.org/terms/1.0/"

# Terms that live outside the Darwin Core namespace.  Everything else resolves
# to ``DEFAULT_SCHEMA_URI``.
TERM_NAMESPACES: Dict[str, str] = {
    "language": DCTERMS_URI,
    "license": DCTERMS_URI,
    "rightsHolder": DCTERMS_URI,
    "description": DCTERMS_URI,
    "type": DCTERMS_URI,
    "isMarine": GBIF_TERMS_URI,
    "isFreshwater": GBIF_TERMS_URI,
    "isTerrestrial": GBIF_TERMS_URI,
    "isInvasive": GBIF_TERMS_URI,
}


def resolve_term(term: str) -> str:
    """Return the local Darwin Core term from a URI or prefixed name."""

    if term.startswith("http://") or term.startswith("https://"):
        term = term.rstrip("/").split("/")[-1]
    if ":" in term:
        term = term.split(":", 1)[1]
    return term


def term_uri(term: str) -> str:
    """Return the full URI for a local term name."""

    local = resolve_term(term)
    return TERM_NAMESPACES.get(local, DEFAULT_SCHEMA_URI) + local


class DatasetConfig(BaseModel):
    """Dataset-wide constants shared by the identifier generator and mappers.

    Built from the ``[dataset]`` section of the configuration.
    """

    model_config = ConfigDict(frozen=True)

    shortname: str = "alien-plants-drc"
    dataset_name: str = "Checklist of alien plants of the Democratic Republic of the Congo"
    dataset_id: str = ""
    license: str = "http://creativecommons.org/publicdomain/zero/1.0/"
    rights_holder: str = "Meise Botanic Garden"
    language: str = "en"
    kingdom: str = "Plantae"
    taxon_rank: str = "species"
    nomenclatural_code: str = "ICN"
    locality: str = "Democratic Republic of the Congo"
    country_code: str = "CD"


class RawRecord(BaseModel):
    """One cleaned row of the source spreadsheet.

    Only the columns used by the mappers are declared; any other source
    column is kept as an extra attribute.  ``taxon_id`` stays ``None`` until
    :func:`dwc.identifiers.augment` returns an updated copy.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    row_number: int = 0
    accepted_name: Optional[str] = None
    family: Optional[str] = None
    proposed_status: Optional[str] = None
    continent_of_origin: Optional[str] = None
    life_form: Optional[str] = None
    earliest_record: Optional[str] = None
    latest_record: Optional[str] = None
    taxon_id: Optional[str] = None


class DwcRecord(BaseModel):
    """Base model for a row of one Darwin Core output table.

    All fields are optional strings.  When serialised via :meth:`to_dict`
    missing values are converted to empty strings so that CSV output is
    consistent.
    """

    TERMS: ClassVar[List[str]] = []
    FILENAME: ClassVar[str] = ""

    taxonID: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Return a dictionary in the table's fixed column order."""

        return {term: getattr(self, term) or "" for term in self.TERMS}


class TaxonRecord(DwcRecord):
    """Canonical taxon entity, one per distinct scientific name."""

    TERMS: ClassVar[List[str]] = [
        "language",
        "license",
        "rightsHolder",
        "datasetID",
        "datasetName",
        "taxonID",
        "scientificName",
        "kingdom",
        "family",
        "taxonRank",
        "nomenclaturalCode",
    ]
    FILENAME: ClassVar[str] = "taxon.csv"

    language: Optional[str] = None
    license: Optional[str] = None
    rightsHolder: Optional[str] = None
    datasetID: Optional[str] = None
    datasetName: Optional[str] = None
    scientificName: Optional[str] = None
    kingdom: Optional[str] = None
    family: Optional[str] = None
    taxonRank: Optional[str] = None
    nomenclaturalCode: Optional[str] = None


class DistributionRecord(DwcRecord):
    TERMS: ClassVar[List[str]] = [
        "taxonID",
        "locality",
        "countryCode",
        "establishmentMeans",
        "degreeOfEstablishment",
        "eventDate",
    ]
    FILENAME: ClassVar[str] = "distribution.csv"

    locality: Optional[str] = None
    countryCode: Optional[str] = None
    establishmentMeans: Optional[str] = None
    degreeOfEstablishment: Optional[str] = None
    eventDate: Optional[str] = None


class SpeciesProfileRecord(DwcRecord):
    """Species profile extension row.  Declared for the header only."""

    TERMS: ClassVar[List[str]] = [
        "taxonID",
        "isMarine",
        "isFreshwater",
        "isTerrestrial",
        "isInvasive",
        "habitat",
    ]
    FILENAME: ClassVar[str] = "speciesprofile.csv"

    isMarine: Optional[str] = None
    isFreshwater: Optional[str] = None
    isTerrestrial: Optional[str] = None
    isInvasive: Optional[str] = None
    habitat: Optional[str] = None


class DescriptionRecord(DwcRecord):
    TERMS: ClassVar[List[str]] = ["taxonID", "description", "type", "language"]
    FILENAME: ClassVar[str] = "description.csv"

    description: Optional[str] = None
    type: Optional[str] = None
    language: Optional[str] = None


# Output tables in the order they are written and listed in ``meta.xml``.
# The first entry is the archive core; the rest are extensions.
TABLES: List[type[DwcRecord]] = [
    TaxonRecord,
    DistributionRecord,
    SpeciesProfileRecord,
    DescriptionRecord,
]

ROW_TYPES: Dict[str, str] = {
    TaxonRecord.FILENAME: DEFAULT_SCHEMA_URI + "Taxon",
    DistributionRecord.FILENAME: GBIF_TERMS_URI + "Distribution",
    SpeciesProfileRecord.FILENAME: GBIF_TERMS_URI + "SpeciesProfile",
    DescriptionRecord.FILENAME: GBIF_TERMS_URI + "Description",
}
