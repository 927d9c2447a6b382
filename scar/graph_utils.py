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
"""Inclusion graph construction using plain mappings and NetworkX."""

import sys
import logging
from collections import defaultdict
from typing import DefaultDict, Dict, FrozenSet, Iterable, ItemsView, KeysView, Optional, Set, Any

import networkx as nx

from scar.constants import EmptyGraphError, GraphBuildError
from scar.source_unit import SourceUnit, canonical_name

logger = logging.getLogger(__name__)


class InclusionGraph:
    """Mapping from canonical node name to the full paths that directly include it.

    Every scanned unit's canonical name is a key, even when nothing includes it.
    Keys that do not correspond to a scanned unit are external nodes
    (e.g., "iostream"). The graph is built once and only read afterwards.

    Attributes:
        _inclusion: Internal mapping of node name to including paths
        _scanned_paths: Identities of all scanned units
    """

    def __init__(self, inclusion: Optional[Dict[str, Set[str]]] = None, scanned_paths: Iterable[str] = ()):
        """Initialize the graph.

        Args:
            inclusion: Optional initial mapping of node names to including paths
            scanned_paths: Identities of the scanned source units
        """
        self._inclusion: Dict[str, Set[str]] = inclusion or {}
        self._scanned_paths: FrozenSet[str] = frozenset(scanned_paths)

    @property
    def scanned_paths(self) -> FrozenSet[str]:
        """Identities of all scanned units."""
        return self._scanned_paths

    def nodes(self) -> KeysView[str]:
        """All node names."""
        return self._inclusion.keys()

    def including(self, node: str) -> Set[str]:
        """Paths directly including a node, or an empty set for unknown nodes."""
        return self._inclusion.get(node, set())

    def items(self) -> ItemsView[str, Set[str]]:
        """Iterate over (node, including paths) pairs."""
        return self._inclusion.items()

    def edge_count(self) -> int:
        """Total number of node -> including path edges."""
        return sum(len(paths) for paths in self._inclusion.values())

    def require_nodes(self) -> None:
        """Raise EmptyGraphError if the graph has no node at all."""
        if not self._inclusion:
            raise EmptyGraphError("Inclusion graph is empty: no files to rank")

    def __len__(self) -> int:
        return len(self._inclusion)

    def __contains__(self, node: object) -> bool:
        return node in self._inclusion

    def __getitem__(self, node: str) -> Set[str]:
        return self._inclusion[node]

    def __repr__(self) -> str:
        return f"InclusionGraph(nodes={len(self._inclusion)}, edges={self.edge_count()}, scanned={len(self._scanned_paths)})"


def build_inclusion_graph(units: Iterable[SourceUnit]) -> InclusionGraph:
    """Build the inclusion graph from scanned source units.

    Each unit registers its own canonical name, then adds its identity to the
    including-set of every deduplicated, canonicalized reference. Identity
    strings are interned so every including-set shares one string object per
    path.

    Args:
        units: Scanned source units

    Returns:
        InclusionGraph over all units and the nodes they reference

    Raises:
        GraphBuildError: If two units share the same identity
    """
    inclusion: DefaultDict[str, Set[str]] = defaultdict(set)
    scanned: Set[str] = set()

    for unit in units:
        path = sys.intern(unit.identity)
        if path in scanned:
            raise GraphBuildError(f"Duplicate source unit identity: {path}")
        scanned.add(path)

        # Register the unit itself so unreferenced files are still rankable
        inclusion.setdefault(canonical_name(path), set())

        for dependency in unit.unique_references():
            inclusion[dependency].add(path)

    graph = InclusionGraph(dict(inclusion), scanned)
    logger.debug("Built inclusion graph with %s nodes and %s edges", len(graph), graph.edge_count())
    return graph


def build_traversal_graph(graph: InclusionGraph) -> "nx.DiGraph[Any]":
    """Build the directed graph walked by impact traversals.

    An edge node -> canonical_name(path) exists for every path including node,
    so following successors means following "is included by" one level up.

    Args:
        graph: Inclusion graph

    Returns:
        NetworkX DiGraph over canonical node names
    """
    G: nx.DiGraph[str] = nx.DiGraph()
    G.add_nodes_from(graph.nodes())

    edges = [(node, canonical_name(path)) for node, paths in graph.items() for path in paths]
    G.add_edges_from(edges)

    logger.debug("Built traversal graph with %s nodes and %s edges", G.number_of_nodes(), G.number_of_edges())
    return G
