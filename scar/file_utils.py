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
"""Project scanning and path filtering for C/C++ source trees."""

import os
import fnmatch
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from scar.color_utils import print_warning
from scar.constants import DEFAULT_BLACK_LIST, DEFAULT_WHITE_LIST, SCAN_PROGRESS_INTERVAL, SOURCE_EXTENSIONS, ProjectPathError
from scar.include_parser import make_source_unit
from scar.source_unit import SourceUnit

logger = logging.getLogger(__name__)


def is_valid_file_name(file_name: str, extensions: Sequence[str] = SOURCE_EXTENSIONS) -> bool:
    """Check whether a file name is a visible source file with an accepted extension.

    Args:
        file_name: Bare file name (e.g., "main.cpp")
        extensions: Accepted file extensions

    Returns:
        True if the file should be scanned
    """
    return not file_name.startswith(".") and file_name.endswith(tuple(extensions))


def is_blacklisted(path: str, black_list: Iterable[str] = DEFAULT_BLACK_LIST) -> bool:
    """True if any black list entry occurs anywhere in the path."""
    return any(entry in path for entry in black_list)


def is_whitelisted(path: str, white_list: Iterable[str] = DEFAULT_WHITE_LIST) -> bool:
    """True if the white list is empty or one of its entries occurs in the path."""
    entries = list(white_list)
    return not entries or any(entry in path for entry in entries)


def matches_exclude_pattern(rel_path: str, exclude_patterns: Iterable[str]) -> bool:
    """True if the project-relative path matches any glob pattern (e.g., "*/test/*")."""
    return any(fnmatch.fnmatch(rel_path, pattern) for pattern in exclude_patterns)


def read_source_file(path: str) -> Optional[str]:
    """Read a source file as UTF-8 text.

    Undecodable bytes (e.g., a Latin-1 character in a comment) are dropped so
    the file's includes are still counted.

    Args:
        path: File path

    Returns:
        File content, or None if the file cannot be read
    """
    try:
        with open(path, "r", encoding="utf-8", errors="ignore") as f:
            return f.read()
    except OSError as e:
        logger.warning("Error while reading %s: %s. Skipping it.", path, e)
        return None


def scan_project(
    base_path: str,
    black_list: Iterable[str] = DEFAULT_BLACK_LIST,
    white_list: Iterable[str] = DEFAULT_WHITE_LIST,
    exclude_patterns: Iterable[str] = (),
    extensions: Sequence[str] = SOURCE_EXTENSIONS,
    skip_system_headers: bool = False,
) -> List[SourceUnit]:
    """Recursively scan a project directory into SourceUnits.

    Hidden and black-listed directories are not descended into. List and
    pattern filters apply to paths relative to base_path; identities are
    POSIX-style paths as walked from base_path.

    Args:
        base_path: Project root directory
        black_list: Substrings that exclude a path
        white_list: Substrings of which a path must contain one (empty: no restriction)
        exclude_patterns: Glob patterns matched against project-relative paths
        extensions: Accepted file extensions
        skip_system_headers: Ignore #include <...> references

    Returns:
        SourceUnits sorted by identity

    Raises:
        ProjectPathError: If base_path is not an existing directory
    """
    if not os.path.isdir(base_path):
        raise ProjectPathError(f"Project path does not exist or is not a directory: '{base_path}'")

    black_list = list(black_list)
    white_list = list(white_list)
    exclude_patterns = list(exclude_patterns)

    units: List[SourceUnit] = []
    skipped = 0

    for dir_path, dir_names, file_names in os.walk(base_path):
        dir_names[:] = sorted(d for d in dir_names if not d.startswith(".") and not is_blacklisted(os.path.relpath(os.path.join(dir_path, d), base_path), black_list))

        for file_name in sorted(file_names):
            if not is_valid_file_name(file_name, extensions):
                continue

            full_path = os.path.join(dir_path, file_name)
            rel_path = Path(os.path.relpath(full_path, base_path)).as_posix()
            if is_blacklisted(rel_path, black_list) or not is_whitelisted(rel_path, white_list):
                continue

            if matches_exclude_pattern(rel_path, exclude_patterns):
                logger.debug("Excluded by pattern: %s", rel_path)
                continue

            content = read_source_file(full_path)
            if content is None:
                skipped += 1
                continue

            units.append(make_source_unit(Path(full_path).as_posix(), content, skip_system_headers))

            if len(units) % SCAN_PROGRESS_INTERVAL == 0:
                logger.info("Processed num. files: %s", len(units))

    if skipped:
        print_warning(f"Skipped {skipped} unreadable file(s)")

    logger.info("Scanned %s source files under %s", len(units), base_path)
    return sorted(units, key=lambda unit: unit.identity)
