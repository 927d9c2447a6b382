#!/usr/bin/env python3
"""Tests for scar/dependency_utils.py"""

import pytest

from scar.constants import EmptyGraphError
from scar.dependency_utils import (
    DependencyEntry,
    compute_ranking_statistics,
    filter_external,
    rank_by_direct_inclusion,
    rank_by_direct_inclusion_no_external,
    sort_entries,
    to_count_pairs,
)
from scar.graph_utils import InclusionGraph, build_inclusion_graph
from scar.source_unit import SourceUnit


class TestRankByDirectInclusion:
    """Tests for rank_by_direct_inclusion function."""

    def test_sample_counts(self, sample_graph: InclusionGraph) -> None:
        """Test the expected counts of the four-file sample."""
        counts = dict(to_count_pairs(rank_by_direct_inclusion(sample_graph)))
        assert counts == {"foobar.h": 2, "iostream": 1, "blablah.h": 1, "main.cpp": 0, "leviathan.h": 0}

    def test_sorted_with_name_tiebreak(self, sample_graph: InclusionGraph) -> None:
        """Test descending order with ties broken by name."""
        pairs = to_count_pairs(rank_by_direct_inclusion(sample_graph))
        assert pairs == [("foobar.h", 2), ("blablah.h", 1), ("iostream", 1), ("leviathan.h", 0), ("main.cpp", 0)]

    def test_entries_carry_including_paths(self, sample_graph: InclusionGraph) -> None:
        """Test that entries hold the including-set."""
        top = rank_by_direct_inclusion(sample_graph)[0]
        assert top.node == "foobar.h"
        assert top.paths == {"main.cpp", "leviathan.h"}

    def test_duplicate_listing_counted_once(self) -> None:
        """Test that a unit listing a reference twice counts once."""
        graph = build_inclusion_graph([SourceUnit("a.cpp", ("x.h", "x.h")), SourceUnit("b.cpp", ("x.h",)), SourceUnit("x.h")])
        assert dict(to_count_pairs(rank_by_direct_inclusion(graph)))["x.h"] == 2

    def test_candidates(self, sample_graph: InclusionGraph) -> None:
        """Test ranking a subset of nodes."""
        pairs = to_count_pairs(rank_by_direct_inclusion(sample_graph, ["main.cpp", "foobar.h"]))
        assert pairs == [("foobar.h", 2), ("main.cpp", 0)]

    def test_repeated_candidates_ranked_once(self, sample_graph: InclusionGraph) -> None:
        """Test that a candidate listed twice yields a single entry."""
        pairs = to_count_pairs(rank_by_direct_inclusion(sample_graph, ["foobar.h", "main.cpp", "foobar.h"]))
        assert pairs == [("foobar.h", 2), ("main.cpp", 0)]

    def test_empty_candidates_is_empty_result(self, sample_graph: InclusionGraph) -> None:
        """Test that nothing to rank yields an empty list, not an error."""
        assert rank_by_direct_inclusion(sample_graph, []) == []

    def test_empty_graph_raises(self) -> None:
        """Test that an empty graph is signaled as an error."""
        with pytest.raises(EmptyGraphError):
            rank_by_direct_inclusion(InclusionGraph())


class TestFilterExternal:
    """Tests for filter_external function."""

    def test_drops_unscanned(self, sample_graph: InclusionGraph) -> None:
        """Test that system headers are removed."""
        kept = filter_external(sample_graph.nodes(), sample_graph.scanned_paths)
        assert kept == {"main.cpp", "foobar.h", "leviathan.h", "blablah.h"}

    def test_matches_canonical_identity(self) -> None:
        """Test that full scan paths match by canonical name."""
        kept = filter_external(["foo.h", "bar.h", "src"], ["src/foo.h", "lib/baz.h"])
        assert kept == {"foo.h"}

    def test_no_external_ranking(self, sample_graph: InclusionGraph) -> None:
        """Test that no-external rankings only contain scanned files."""
        ranking = rank_by_direct_inclusion_no_external(sample_graph)
        names = [entry.node for entry in ranking]
        assert "iostream" not in names
        assert to_count_pairs(ranking) == [("foobar.h", 2), ("blablah.h", 1), ("leviathan.h", 0), ("main.cpp", 0)]

    def test_no_external_empty_graph_raises(self) -> None:
        """Test that the filtered variant also rejects an empty graph."""
        with pytest.raises(EmptyGraphError):
            rank_by_direct_inclusion_no_external(InclusionGraph())


class TestHelpers:
    """Tests for sorting, truncation and entries."""

    def test_to_count_pairs_limit(self, sample_graph: InclusionGraph) -> None:
        """Test truncation to the first N entries."""
        ranking = rank_by_direct_inclusion(sample_graph)
        assert to_count_pairs(ranking, 2) == [("foobar.h", 2), ("blablah.h", 1)]
        assert len(to_count_pairs(ranking, 100)) == 5

    def test_sort_entries(self) -> None:
        """Test sort order of hand-made entries."""
        entries = [DependencyEntry("b", frozenset()), DependencyEntry("c", frozenset({"x"})), DependencyEntry("a", frozenset())]
        assert [e.node for e in sort_entries(entries)] == ["c", "a", "b"]

    def test_entry_is_immutable(self) -> None:
        """Test that entries cannot be modified."""
        entry = DependencyEntry("a.h", frozenset({"b.cpp"}))
        assert entry.count == 1
        with pytest.raises(AttributeError):
            entry.node = "other.h"  # type: ignore[misc]


class TestRankingStatistics:
    """Tests for compute_ranking_statistics function."""

    def test_sample_statistics(self, sample_graph: InclusionGraph) -> None:
        """Test statistics over counts 2, 1, 1, 0, 0."""
        stats = compute_ranking_statistics(rank_by_direct_inclusion(sample_graph))
        assert stats.total == 5
        assert stats.mean == pytest.approx(0.8)
        assert stats.median == pytest.approx(1.0)
        assert stats.percentile == pytest.approx(1.8)
        assert stats.maximum == 2

    def test_empty(self) -> None:
        """Test statistics of an empty ranking."""
        stats = compute_ranking_statistics([])
        assert stats.total == 0
        assert stats.maximum == 0

    def test_format_concise(self, sample_graph: InclusionGraph) -> None:
        """Test the summary line."""
        line = compute_ranking_statistics(rank_by_direct_inclusion(sample_graph)).format_concise()
        assert line.startswith("5 files")
        assert "max 2" in line
