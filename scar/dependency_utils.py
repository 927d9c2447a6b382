#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""Direct-inclusion ranking, external-node filtering and ranking statistics."""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set, Tuple, AbstractSet

import numpy as np

from scar.constants import STATISTICS_PERCENTILE
from scar.graph_utils import InclusionGraph
from scar.source_unit import canonical_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyEntry:
    """One ranked node.

    Attributes:
        node: Canonical node name (e.g., "foobar.h")
        paths: Direct including paths (inclusion ranking) or transitively
               impacted paths without the node itself (impact ranking)
    """

    node: str
    paths: AbstractSet[str]

    @property
    def count(self) -> int:
        """Number of paths associated with the node."""
        return len(self.paths)


@dataclass
class RankingStatistics:
    """Summary of the counts in a ranking.

    Attributes:
        total: Number of ranked entries
        mean: Mean count
        median: Median count
        percentile: Count at STATISTICS_PERCENTILE
        maximum: Highest count
    """

    total: int
    mean: float
    median: float
    percentile: float
    maximum: int

    def format_concise(self) -> str:
        """Format as a single summary line."""
        return (
            f"{self.total} files | mean {self.mean:.2f} | median {self.median:.1f} | "
            f"p{STATISTICS_PERCENTILE} {self.percentile:.1f} | max {self.maximum}"
        )


def sort_entries(entries: Iterable[DependencyEntry]) -> List[DependencyEntry]:
    """Sort entries by count descending, ties broken by node name ascending."""
    return sorted(entries, key=lambda entry: (-entry.count, entry.node))


def filter_external(nodes: Iterable[str], scanned_identities: Iterable[str]) -> Set[str]:
    """Keep only nodes that correspond to a scanned file.

    Nodes referenced but never scanned themselves (e.g., system headers) are
    dropped.

    Args:
        nodes: Candidate node names
        scanned_identities: Identities of the scanned source units

    Returns:
        Set of node names matching a scanned unit's canonical name
    """
    scanned_names = {canonical_name(identity) for identity in scanned_identities}
    candidates = set(nodes)
    kept = candidates & scanned_names
    logger.debug("External filter kept %s of %s nodes", len(kept), len(candidates))
    return kept


def rank_by_direct_inclusion(graph: InclusionGraph, candidates: Optional[Iterable[str]] = None) -> List[DependencyEntry]:
    """Rank nodes by the number of files directly including them.

    Args:
        graph: Inclusion graph
        candidates: Nodes to rank (default: every graph node). Nodes missing
                    from the graph rank with an empty including-set; repeated
                    candidates are ranked once.

    Returns:
        Entries sorted by count descending, then by node name

    Raises:
        EmptyGraphError: If the graph has no node
    """
    graph.require_nodes()
    nodes = set(graph.nodes() if candidates is None else candidates)
    return sort_entries(DependencyEntry(node, frozenset(graph.including(node))) for node in nodes)


def rank_by_direct_inclusion_no_external(graph: InclusionGraph) -> List[DependencyEntry]:
    """Direct-inclusion ranking restricted to scanned files."""
    graph.require_nodes()
    return rank_by_direct_inclusion(graph, filter_external(graph.nodes(), graph.scanned_paths))


def to_count_pairs(entries: Sequence[DependencyEntry], limit: Optional[int] = None) -> List[Tuple[str, int]]:
    """Convert ranked entries to ordered (name, count) pairs.

    Args:
        entries: Ranked entries
        limit: Keep only the first N entries (default: all)

    Returns:
        List of (node name, count) tuples in ranking order
    """
    if limit is not None:
        entries = entries[:limit]
    return [(entry.node, entry.count) for entry in entries]


def compute_ranking_statistics(entries: Sequence[DependencyEntry]) -> RankingStatistics:
    """Compute summary statistics over the counts of a ranking.

    Args:
        entries: Ranked entries

    Returns:
        RankingStatistics (all zero for an empty ranking)
    """
    if not entries:
        return RankingStatistics(total=0, mean=0.0, median=0.0, percentile=0.0, maximum=0)

    counts = np.array([entry.count for entry in entries])
    return RankingStatistics(
        total=len(entries),
        mean=float(np.mean(counts)),
        median=float(np.median(counts)),
        percentile=float(np.percentile(counts, STATISTICS_PERCENTILE)),
        maximum=int(np.max(counts)),
    )
