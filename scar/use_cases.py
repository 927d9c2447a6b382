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
"""TopN use cases: scan a project and report its most included or most impacting files."""

import sys
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, TypeVar

from scar.color_utils import Colors, print_info
from scar.constants import DEFAULT_BLACK_LIST, DEFAULT_OUTPUT_SIZE, DEFAULT_WHITE_LIST, SOURCE_EXTENSIONS
from scar.dependency_utils import (
    DependencyEntry,
    compute_ranking_statistics,
    rank_by_direct_inclusion,
    rank_by_direct_inclusion_no_external,
    to_count_pairs,
)
from scar.file_utils import scan_project
from scar.graph_utils import InclusionGraph, build_inclusion_graph
from scar.impact_analysis import rank_by_transitive_impact, rank_by_transitive_impact_no_external

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class TopNConfig:
    """Configuration of one TopN run.

    Attributes:
        path: Project directory to analyze
        output_size: Maximum number of entries to report
        debug: Print the DFS tree of every impact traversal
        no_external: Rank only files found in the scan
        exclude_patterns: Glob patterns of project-relative paths to skip
        extensions: Accepted source file extensions
        black_list: Path substrings that exclude a file
        white_list: Path substrings of which a file must contain one
        skip_system_headers: Ignore #include <...> references
    """

    path: str
    output_size: int = DEFAULT_OUTPUT_SIZE
    debug: bool = False
    no_external: bool = False
    exclude_patterns: List[str] = field(default_factory=list)
    extensions: Sequence[str] = SOURCE_EXTENSIONS
    black_list: List[str] = field(default_factory=lambda: list(DEFAULT_BLACK_LIST))
    white_list: List[str] = field(default_factory=lambda: list(DEFAULT_WHITE_LIST))
    skip_system_headers: bool = False


def get_slice_up_to(items: Sequence[T], num: int) -> Sequence[T]:
    """Return at most the first num items."""
    return items[:num]


def load_graph(config: TopNConfig) -> InclusionGraph:
    """Scan the configured project and build its inclusion graph."""
    units = scan_project(
        config.path,
        black_list=config.black_list,
        white_list=config.white_list,
        exclude_patterns=config.exclude_patterns,
        extensions=config.extensions,
        skip_system_headers=config.skip_system_headers,
    )
    return build_inclusion_graph(units)


def report_entries(entries: Sequence[DependencyEntry], all_entries: Sequence[DependencyEntry], label: str) -> None:
    """Print ranked entries followed by statistics over the full ranking."""
    for entry in entries:
        print(f"Source found: {Colors.MAGENTA}{entry.node}{Colors.RESET}, {label}: {Colors.BRIGHT}{entry.count}{Colors.RESET}")

    stats = compute_ranking_statistics(all_entries)
    print(f"{Colors.DIM}{stats.format_concise()}{Colors.RESET}")


def run_topn_inclusions(config: TopNConfig, graph: Optional[InclusionGraph] = None) -> List[Tuple[str, int]]:
    """Report the top-N files by direct inclusion.

    Args:
        config: Run configuration
        graph: Prebuilt inclusion graph (scanned from config.path when None)

    Returns:
        Ordered (file name, number of direct inclusions) pairs
    """
    if graph is None:
        graph = load_graph(config)

    print_info("Sorting ...")
    if config.no_external:
        ranking = rank_by_direct_inclusion_no_external(graph)
    else:
        ranking = rank_by_direct_inclusion(graph)
    print_info("Sorted!")

    top = get_slice_up_to(ranking, config.output_size)
    report_entries(top, ranking, "num inclusions")
    return to_count_pairs(top)


def run_topn_impact(config: TopNConfig, graph: Optional[InclusionGraph] = None) -> List[Tuple[str, int]]:
    """Report the top-N files by transitive impact.

    Args:
        config: Run configuration
        graph: Prebuilt inclusion graph (scanned from config.path when None)

    Returns:
        Ordered (file name, number of impacted files) pairs
    """
    if graph is None:
        graph = load_graph(config)

    tree_stream = sys.stdout if config.debug else None

    print_info("Sorting impact ...")
    if config.no_external:
        ranking = rank_by_transitive_impact_no_external(graph, tree_stream)
    else:
        ranking = rank_by_transitive_impact(graph, tree_stream=tree_stream)
    print_info("Sorted!")

    top = get_slice_up_to(ranking, config.output_size)
    report_entries(top, ranking, "num impacted files")
    return to_count_pairs(top)
