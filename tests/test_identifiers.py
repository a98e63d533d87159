"""Tests for deterministic taxon identifiers."""

import hashlib
import logging

from dwc import DatasetConfig, augment, make_taxon_id, taxon_hash
from dwc.identifiers import NULL_NAME


def test_taxon_hash_is_md5_hex():
    assert taxon_hash("Acacia dealbata") == hashlib.md5(b"Acacia dealbata").hexdigest()
    assert len(taxon_hash("Acacia dealbata")) == 32


def test_make_taxon_id_format():
    digest = hashlib.md5(b"Zea mays").hexdigest()
    assert make_taxon_id("Zea mays", "alien-plants-drc") == f"alien-plants-drc:taxon:{digest}"


def test_no_normalisation_applied():
    """Whitespace and case differences give different ids."""
    assert taxon_hash("Zea mays") != taxon_hash("Zea mays ")
    assert taxon_hash("Zea mays") != taxon_hash("zea mays")


def test_null_name_hashes_placeholder():
    assert taxon_hash(None) == hashlib.md5(NULL_NAME.encode()).hexdigest()


class TestAugment:
    """Tests for attaching taxon ids to records."""

    def test_same_name_same_id(self, records):
        acacia = [r for r in records if r.accepted_name == "Acacia dealbata"]
        assert len(acacia) == 2
        assert acacia[0].taxon_id == acacia[1].taxon_id

    def test_id_ignores_other_fields(self, make_record, dataset):
        first, second = augment(
            [
                make_record(accepted_name="Zea mays", family="Poaceae", life_form="Herb"),
                make_record(accepted_name="Zea mays", family="Other", proposed_status="casual"),
            ],
            dataset,
        )
        assert first.taxon_id == second.taxon_id

    def test_id_follows_name(self, make_record, dataset):
        first, second = augment(
            [make_record(accepted_name="Zea mays"), make_record(accepted_name="Zea luxurians")],
            dataset,
        )
        assert first.taxon_id != second.taxon_id

    def test_originals_untouched(self, make_record, dataset):
        original = make_record(accepted_name="Zea mays")
        (augmented,) = augment([original], dataset)
        assert original.taxon_id is None
        assert augmented.taxon_id.startswith("alien-plants-drc:taxon:")

    def test_shortname_from_config(self, make_record):
        (augmented,) = augment(
            [make_record(accepted_name="Zea mays")], DatasetConfig(shortname="other-list")
        )
        assert augmented.taxon_id.startswith("other-list:taxon:")

    def test_missing_name_warns(self, make_record, dataset, caplog):
        with caplog.at_level(logging.WARNING):
            first, second = augment(
                [make_record(row_number=7), make_record(row_number=9)], dataset
            )
        assert first.taxon_id == second.taxon_id
        assert "Row 7 has no accepted_name" in caplog.text
