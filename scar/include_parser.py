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
"""Extraction of #include references from C/C++ file content."""

import re
from typing import List

from scar.source_unit import SourceUnit

# #include "file.h" or #include <file.h>; anything after the closing delimiter is ignored
INCLUDE_PATTERN = re.compile(r'^\s*#\s*include\s*([<"])(.*?)[>"]')


def is_commented_out(line: str) -> bool:
    """True if the line starts with a // or /* comment."""
    stripped = line.lstrip()
    return stripped.startswith("//") or stripped.startswith("/*")


def parse_includes_from_content(content: str, skip_system_headers: bool = False) -> List[str]:
    """Parse #include directives from file content.

    Lines that start with a comment are ignored. Both quoted and angled
    includes are returned unless skip_system_headers is set.

    Args:
        content: File content to parse
        skip_system_headers: If True, skip #include <...> directives

    Returns:
        List of raw include references in file order (not canonicalized)

    Example:
        >>> content = '''
        ... #include <iostream>
        ... #include "foobar.h"
        ... //#include "commented_out.h"
        ... '''
        >>> parse_includes_from_content(content)
        ['iostream', 'foobar.h']
        >>> parse_includes_from_content(content, skip_system_headers=True)
        ['foobar.h']
    """
    includes = []

    for line in content.splitlines():
        if is_commented_out(line):
            continue

        match = INCLUDE_PATTERN.match(line)
        if not match:
            continue

        if skip_system_headers and match.group(1) == "<":
            continue

        includes.append(match.group(2))

    return includes


def make_source_unit(identity: str, content: str, skip_system_headers: bool = False) -> SourceUnit:
    """Build a SourceUnit from a file's identity and content."""
    return SourceUnit(identity, tuple(parse_includes_from_content(content, skip_system_headers)))
