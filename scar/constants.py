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
"""Shared constants for the scar tools.

This module provides centralized constants used across the scar library and
command line so defaults, filters and exit codes stay consistent.
"""

from typing import List, Tuple

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_INVALID_ARGS = 1
EXIT_RUNTIME_ERROR = 2
EXIT_KEYBOARD_INTERRUPT = 130

# =============================================================================
# Ranking Defaults
# =============================================================================

DEFAULT_OUTPUT_SIZE = 42  # Default number of entries reported by the TopN use cases
STATISTICS_PERCENTILE = 95  # Percentile reported in ranking statistics

# =============================================================================
# Scanner Configuration
# =============================================================================

SOURCE_EXTENSIONS: Tuple[str, ...] = (".cpp", ".h")

# A path containing any of these substrings is skipped
DEFAULT_BLACK_LIST: List[str] = [
    "Intermediate",
    "Plugins",
    "TestAutomationCore",
    "Binaries",
    "TestData",
    "generated.h",
]

# When non-empty, a file path must contain one of these substrings
DEFAULT_WHITE_LIST: List[str] = []

SCAN_PROGRESS_INTERVAL = 1000  # Log progress every N processed files

# =============================================================================
# Debug Tree Output
# =============================================================================

TREE_INDENT = "    "
# Depth colors cycle through these Colors attribute names
TREE_LEVEL_COLORS = ["RED", "YELLOW", "GREEN", "BLUE", "MAGENTA"]

# =============================================================================
# Export
# =============================================================================

SUPPORTED_EXPORT_FORMATS = [".csv", ".json"]

# =============================================================================
# Exception Classes
# =============================================================================


class ScarError(Exception):
    """Base exception for all scar errors.

    All scar exceptions carry an exit_code attribute that indicates what exit
    code the program should use when this error is caught at the main entry
    point.
    """

    def __init__(self, message: str, exit_code: int = EXIT_RUNTIME_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


# Validation errors (EXIT_INVALID_ARGS)
class ValidationError(ScarError):
    """Raised when input validation fails (arguments, paths, etc)."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_INVALID_ARGS)


class ProjectPathError(ValidationError):
    """Raised when the project directory is missing or not a directory."""


class ArgumentError(ValidationError):
    """Raised when command-line arguments are invalid."""


# Analysis/processing errors (EXIT_RUNTIME_ERROR)
class AnalysisError(ScarError):
    """Raised when analysis or processing operations fail."""


class GraphBuildError(AnalysisError):
    """Raised when inclusion graph construction fails."""


class EmptyGraphError(AnalysisError):
    """Raised when a ranking is requested over a graph without any node.

    Distinct from an empty ranking: an empty result means there was nothing
    to rank, this error means ranking was impossible.
    """


class NodeNotFoundError(AnalysisError):
    """Raised when an impact traversal starts from a node absent from the graph."""

    def __init__(self, node: str):
        super().__init__(f"Starting node {node} not found.")
        self.node = node
