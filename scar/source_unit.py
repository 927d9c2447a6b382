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
"""Scanned source file records and name canonicalization."""

from dataclasses import dataclass
from typing import List, Tuple

PATH_SEPARATOR = "/"


def canonical_name(path: str) -> str:
    """Reduce a path-like string to its last forward-slash delimited segment.

    Only '/' separates path components. A backslash is not a separator, so
    'include\\foobar.h' is returned whole.

    Args:
        path: File path or include reference (e.g., "include/foobar.h")

    Returns:
        Canonical node name (e.g., "foobar.h")

    Example:
        >>> canonical_name("src/foo.h")
        'foo.h'
        >>> canonical_name("foo.h")
        'foo.h'
    """
    return path.rsplit(PATH_SEPARATOR, 1)[-1]


@dataclass(frozen=True)
class SourceUnit:
    """One scanned file and the modules it references.

    Attributes:
        identity: Full scan path, unique per unit and stored in graph edges
        references: Raw include references in file order (may repeat)
    """

    identity: str
    references: Tuple[str, ...] = ()

    @property
    def name(self) -> str:
        """Canonical name of this unit."""
        return canonical_name(self.identity)

    def unique_references(self) -> List[str]:
        """Canonicalized references without duplicates, first occurrence first."""
        return list(dict.fromkeys(canonical_name(ref) for ref in self.references))

