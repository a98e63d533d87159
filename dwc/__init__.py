from .schema import (
    DatasetConfig,
    RawRecord,
    DwcRecord,
    TaxonRecord,
    DistributionRecord,
    SpeciesProfileRecord,
    DescriptionRecord,
    TABLES,
    resolve_term,
    term_uri,
)
from .errors import PipelineError, LoadError, MappingError, WriteError
from .identifiers import augment, make_taxon_id, taxon_hash
from .mapper import (
    map_taxa,
    map_distributions,
    map_descriptions,
    map_species_profiles,
)
from .normalize import normalize_vocab, recode
from .validators import derive_event_date
from .archive import build_meta_xml, create_archive

__all__ = [
    "DatasetConfig",
    "RawRecord",
    "DwcRecord",
    "TaxonRecord",
    "DistributionRecord",
    "SpeciesProfileRecord",
    "DescriptionRecord",
    "TABLES",
    "resolve_term",
    "term_uri",
    "PipelineError",
    "LoadError",
    "MappingError",
    "WriteError",
    "augment",
    "make_taxon_id",
    "taxon_hash",
    "map_taxa",
    "map_distributions",
    "map_descriptions",
    "map_species_profiles",
    "normalize_vocab",
    "recode",
    "derive_event_date",
    "build_meta_xml",
    "create_archive",
]
