#!/usr/bin/env python3
#****************************************************************************************************************************************************
#* BSD 3-Clause License
#*
#* Copyright (c) 2025, Mana Battery
#* All rights reserved.
#*
#* Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
#*
#* 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
#* 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
#*    documentation and/or other materials provided with the distribution.
#* 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
#*    software without specific prior written permission.
#*
#* THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
#* THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
#* CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
#* PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
#* LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
#* EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""Pytest configuration and shared fixtures for scar tests.

Fixture sizes:
- sample: the four-file main.cpp / foobar.h / leviathan.h / blablah.h tree
- cyclic: two headers including each other
- project dirs: small trees written under a temporary directory
"""

import sys
import tempfile
import shutil
from pathlib import Path
from typing import Dict, Generator, List

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from scar.graph_utils import InclusionGraph, build_inclusion_graph
from scar.include_parser import make_source_unit
from scar.source_unit import SourceUnit

MAIN_CPP = """\
#include <iostream>
#include "foobar.h"
//#include "commented_out.h"
/*#include "another_commented_out.h"

int main(void) {
    printf("Hello world");
    return 0;
};
"""

FOOBAR_H = """\
#include "blablah.h"

class Point {
    explicit Point() = default;
    virtual ~Point() = default;
};
"""

LEVIATHAN_H = """\
#include "foobar.h"

namespace Leviathan {

void DoSomeStuff(uint8_t value) {}

}
"""

BLABLAH_H = """\
namespace BlaBlah {

}
"""

SAMPLE_CONTENTS: Dict[str, str] = {
    "main.cpp": MAIN_CPP,
    "foobar.h": FOOBAR_H,
    "leviathan.h": LEVIATHAN_H,
    "blablah.h": BLABLAH_H,
}


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for tests.

    Scope: function (default)
    Use for: File I/O operations that need isolation
    """
    tmpdir = tempfile.mkdtemp(prefix="scar_test_")
    yield tmpdir
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_units() -> List[SourceUnit]:
    """The four sample files parsed from their content."""
    return [make_source_unit(name, content) for name, content in SAMPLE_CONTENTS.items()]


@pytest.fixture
def sample_graph(sample_units: List[SourceUnit]) -> InclusionGraph:
    """Inclusion graph of the four sample files."""
    return build_inclusion_graph(sample_units)


@pytest.fixture
def cyclic_graph() -> InclusionGraph:
    """a.h and b.h include each other, c.cpp includes a.h."""
    return build_inclusion_graph(
        [
            SourceUnit("src/a.h", ("b.h",)),
            SourceUnit("src/b.h", ("a.h",)),
            SourceUnit("src/c.cpp", ("a.h",)),
        ]
    )


@pytest.fixture
def sample_project(temp_dir: str) -> str:
    """Write the four sample files into a nested project tree.

    Layout:
        src/main.cpp
        include/foobar.h
        include/leviathan.h
        include/detail/blablah.h
    """
    root = Path(temp_dir) / "project"
    layout = {
        "main.cpp": root / "src",
        "foobar.h": root / "include",
        "leviathan.h": root / "include",
        "blablah.h": root / "include" / "detail",
    }
    for name, directory in layout.items():
        directory.mkdir(parents=True, exist_ok=True)
        (directory / name).write_text(SAMPLE_CONTENTS[name], encoding="utf-8")
    return str(root)


@pytest.fixture
def simple_project(temp_dir: str) -> str:
    """Four-file project: test001.cpp and test002.h include test001.h, test002.cpp includes test002.h."""
    root = Path(temp_dir) / "simple"
    root.mkdir()
    (root / "test001.h").write_text("#pragma once\n", encoding="utf-8")
    (root / "test002.h").write_text('#pragma once\n#include "test001.h"\n', encoding="utf-8")
    (root / "test001.cpp").write_text('#include "test001.h"\n\nint f() { return 1; }\n', encoding="utf-8")
    (root / "test002.cpp").write_text('#include "test002.h"\n\nint g() { return 2; }\n', encoding="utf-8")
    return str(root)
