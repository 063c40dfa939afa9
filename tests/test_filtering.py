"""Tests for cross-catalog uniqueness filtering."""

import pytest

from productcover.core.candidates import generate_candidates
from productcover.core.filtering import (
    ForeignSubstringIndex,
    filter_cross_catalog,
    occurs_in_any,
)


def _universes(catalogs, min_len, max_len):
    return {name: generate_candidates(parts, min_len, max_len) for name, parts in catalogs.items()}


class TestFilterCrossCatalog:
    """Test that only catalog-exclusive candidates survive."""

    def test_disjoint_catalogs_keep_everything(self):
        """Test nothing is dropped when catalogs share no substrings."""
        catalogs = {"A": ["AAXX", "AAYY"], "B": ["BBZZ"]}
        universes = _universes(catalogs, 3, 4)

        filtered = filter_cross_catalog(universes, catalogs)

        assert filtered["A"].substrings() == universes["A"].substrings()
        assert filtered["B"].substrings() == universes["B"].substrings()

    def test_shared_substrings_removed(self):
        """Test substrings occurring in another catalog are dropped."""
        catalogs = {"A": ["ABC1"], "B": ["ZABC"]}
        filtered = filter_cross_catalog(_universes(catalogs, 2, 3), catalogs)

        assert filtered["A"].substrings() == ["BC1", "C1"]
        assert filtered["B"].substrings() == ["ZA", "ZAB"]

    def test_comparison_is_case_sensitive(self):
        """Test no case folding happens."""
        catalogs = {"A": ["abc"], "B": ["ABC"]}
        filtered = filter_cross_catalog(_universes(catalogs, 3, 3), catalogs)

        assert filtered["A"].substrings() == ["abc"]
        assert filtered["B"].substrings() == ["ABC"]

    def test_fully_colliding_catalog_becomes_empty(self):
        """Test a catalog contained in another ends with an empty universe."""
        catalogs = {"A": ["ABC"], "B": ["XABCX"]}
        filtered = filter_cross_catalog(_universes(catalogs, 2, 3), catalogs)

        assert len(filtered["A"]) == 0
        assert len(filtered["B"]) > 0

    def test_own_catalog_does_not_filter(self):
        """Test substrings shared between parts of the same catalog survive."""
        catalogs = {"A": ["AB12", "AB34"], "B": ["ZZZZ"]}
        filtered = filter_cross_catalog(_universes(catalogs, 2, 2), catalogs)

        assert "AB" in filtered["A"]

    def test_exclusivity_against_naive_scan(self):
        """Test survivors match a brute-force check of every other catalog."""
        catalogs = {
            "motors": ["MT-9000-X", "MT-5520-Y", "MTR-77"],
            "pumps": ["PX-4410-AB", "PX-5520-AB", "PXL-9000"],
            "valves": ["VL-4410-AB", "VL-2200-CD", "VLX-100"],
        }
        universes = _universes(catalogs, 2, 6)
        filtered = filter_cross_catalog(universes, catalogs)

        for name, universe in universes.items():
            others = [p for other, parts in catalogs.items() if other != name for p in parts]
            expected = [s for s in universe if not occurs_in_any(s, others)]
            assert filtered[name].substrings() == expected

    def test_input_universes_untouched(self):
        """Test filtering returns new universes."""
        catalogs = {"A": ["ABC1"], "B": ["ZABC"]}
        universes = _universes(catalogs, 2, 3)
        before = universes["A"].substrings()

        filter_cross_catalog(universes, catalogs)

        assert universes["A"].substrings() == before

    def test_missing_parts_raises(self):
        """Test every universe needs its catalog's parts."""
        universes = _universes({"A": ["ABC"]}, 2, 2)
        with pytest.raises(KeyError):
            filter_cross_catalog(universes, {"B": ["XYZ"]})

    def test_single_catalog(self):
        """Test a lone catalog keeps all candidates."""
        catalogs = {"A": ["ABC"]}
        filtered = filter_cross_catalog(_universes(catalogs, 1, 3), catalogs)
        assert len(filtered["A"]) == 6


class TestForeignSubstringIndex:
    """Test the substring set index."""

    def test_indexed_lengths(self):
        """Test membership for indexed lengths."""
        index = ForeignSubstringIndex(["HELLO", "WORLD"], [2, 3])

        assert "HE" in index
        assert "RLD" in index
        assert "LW" not in index
        assert "OW" not in index

    def test_fallback_for_other_lengths(self):
        """Test lengths outside the index fall back to scanning."""
        index = ForeignSubstringIndex(["HELLO"], [2])

        assert "HELL" in index
        assert "HEX" not in index

    def test_non_string(self):
        """Test non-string lookups are simply absent."""
        index = ForeignSubstringIndex(["ABC"], [1])
        assert 1 not in index

    def test_size(self):
        """Test the index stores distinct substrings only."""
        index = ForeignSubstringIndex(["AAAA"], [2])
        assert len(index) == 1
