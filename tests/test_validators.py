"""
Tests for eventDate derivation.

The rules are evaluated in order and the first match wins, including the
single-year patch for the 1937 record with an undated last sighting.
"""

import pytest

from dwc.validators import (
    EVENT_DATE_RULES,
    UNDATED,
    derive_event_date,
    undated_latest_single_year,
)


class TestDeriveEventDate:
    """Tests for the eventDate rule chain."""

    @pytest.mark.parametrize(
        "earliest, latest, expected",
        [
            (None, "1990", "1990"),
            ("s.d.", "s.d.", ""),
            ("1937", "s.d.", "1937"),
            ("1920", "1935", "1920 / 1935"),
            (None, None, None),
            ("1950", None, "1950"),
            ("1950", "s.d.", "1950 / s.d."),
            ("s.d.", "1990", "s.d. / 1990"),
            (None, "s.d.", "s.d."),
        ],
    )
    def test_rule_table(self, earliest, latest, expected):
        """Each input pair resolves to the first matching rule's value."""
        assert derive_event_date(earliest, latest) == expected

    def test_both_missing_serialises_empty(self):
        """Both years missing produce no value, written as an empty cell."""
        assert (derive_event_date(None, None) or "") == ""

    def test_single_year_patch_is_exact(self):
        """Only the 1937 record collapses; other years keep the interval."""
        assert undated_latest_single_year("1937", UNDATED) == (True, "1937")
        assert undated_latest_single_year("1938", UNDATED)[0] is False
        assert undated_latest_single_year("1937", "1940")[0] is False

    def test_rule_order(self):
        """The interval rule is the catch-all and comes last."""
        names = [rule.__name__ for rule in EVENT_DATE_RULES]
        assert names == [
            "no_earliest",
            "both_undated",
            "no_latest",
            "undated_latest_single_year",
            "neither",
            "interval",
        ]
