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
"""Transitive impact analysis over the inclusion graph.

The impact of a node is the set of scanned files that would be affected if it
changed: every file including it, every file including those, and so on.

Traversal follows "is included by" edges depth-first from the start node.
Each node is entered at most once per traversal, so reference cycles are
tolerated silently and the impact count is the size of the first-discovery
reachable set, not a path count. The walk uses NetworkX's iterative DFS, so
long include chains cannot exhaust the Python call stack.
"""

import logging
from typing import Any, FrozenSet, Iterable, List, Optional, Set, TextIO

import networkx as nx

from scar.color_utils import colored, level_color
from scar.constants import NodeNotFoundError, TREE_INDENT
from scar.dependency_utils import DependencyEntry, filter_external, sort_entries
from scar.graph_utils import InclusionGraph, build_traversal_graph
from scar.source_unit import canonical_name

logger = logging.getLogger(__name__)


def print_dfs_tree(tree: Any, root: str, stream: TextIO) -> None:
    """Print a DFS tree indented by depth, one color per level.

    Args:
        tree: NetworkX DiGraph holding the DFS tree edges
        root: Start node of the traversal
        stream: Output stream for the tree
    """
    stack = [(root, 0)]
    while stack:
        node, level = stack.pop()
        print(colored(f"{TREE_INDENT * level}{node}", level_color(level)), file=stream)
        # Reverse so children print in discovery order
        children = list(tree.successors(node))
        stack.extend((child, level + 1) for child in reversed(children))


def compute_impact_set(
    graph: InclusionGraph, node: str, traversal: Optional[Any] = None, tree_stream: Optional[TextIO] = None
) -> FrozenSet[str]:
    """Compute the scanned files transitively impacted by a node.

    Args:
        graph: Inclusion graph
        node: Canonical start node
        traversal: Precomputed traversal graph (built on demand when None)
        tree_stream: If given, the DFS tree is printed to this stream

    Returns:
        Identities of impacted scanned files, excluding the node itself

    Raises:
        NodeNotFoundError: If the node is not in the graph
    """
    if node not in graph:
        raise NodeNotFoundError(node)

    if traversal is None:
        traversal = build_traversal_graph(graph)

    visit_order: List[str] = list(nx.dfs_preorder_nodes(traversal, source=node))

    if tree_stream is not None:
        print_dfs_tree(nx.dfs_tree(traversal, source=node), node, tree_stream)

    reached: Set[str] = set()
    for visited in visit_order:
        reached.update(graph.including(visited))

    scanned = graph.scanned_paths
    return frozenset(path for path in reached if path in scanned and canonical_name(path) != node)


def rank_by_transitive_impact(
    graph: InclusionGraph, candidates: Optional[Iterable[str]] = None, tree_stream: Optional[TextIO] = None
) -> List[DependencyEntry]:
    """Rank nodes by the number of scanned files they transitively impact.

    A candidate missing from the graph is logged and left out; the remaining
    candidates are still ranked.

    Args:
        graph: Inclusion graph
        candidates: Nodes to rank (default: every graph node), each ranked once
        tree_stream: If given, every DFS tree is printed to this stream

    Returns:
        Entries sorted by impacted count descending, then by node name

    Raises:
        EmptyGraphError: If the graph has no node
    """
    graph.require_nodes()
    traversal = build_traversal_graph(graph)
    nodes = set(graph.nodes() if candidates is None else candidates)

    entries: List[DependencyEntry] = []
    for node in sorted(nodes):
        try:
            impacted = compute_impact_set(graph, node, traversal, tree_stream)
        except NodeNotFoundError as e:
            logger.warning("Error while computing sorted impact: %s", e)
            continue
        entries.append(DependencyEntry(node, impacted))

    logger.debug("Computed impact for %s of %s nodes", len(entries), len(graph))
    return sort_entries(entries)


def rank_by_transitive_impact_no_external(graph: InclusionGraph, tree_stream: Optional[TextIO] = None) -> List[DependencyEntry]:
    """Transitive-impact ranking restricted to scanned files."""
    graph.require_nodes()
    return rank_by_transitive_impact(graph, filter_external(graph.nodes(), graph.scanned_paths), tree_stream)
