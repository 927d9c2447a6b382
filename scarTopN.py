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
"""Rank source files by how often they are included and how many files they impact.

PURPOSE:
    Scans a C/C++ source tree, builds the include graph from #include
    directives and reports the files that are most included or whose change
    would affect the most other files.

WHAT IT DOES:
    - Recursively scans .cpp/.h files (hidden and black-listed paths skipped)
    - Extracts #include references, matching them by bare file name
    - --topn: ranks files by number of direct includers
    - --topnimpact: ranks files by number of scanned files transitively including them
    - Reference cycles are tolerated: each file is visited once per traversal

METHOD:
    References are matched by file name only (the part after the last '/');
    no include search path resolution is performed. Files referenced but not
    found in the scan (e.g., <iostream>) are external and can be hidden with
    --no-external.

OUTPUT:
    - Top-N list of files with their inclusion or impact counts
    - Summary statistics (mean, median, p95, max) over the whole ranking
    - Optional: DFS tree of every impact traversal (--debug)
    - Optional: CSV/JSON export (--export)

REQUIREMENTS:
    - Python 3.8+
    - networkx, numpy, colorama

EXAMPLES:
    # Top 42 most included files
    ./scarTopN.py ../my_project --topn

    # Top 10 most impacting project files, ignoring system headers
    ./scarTopN.py ../my_project --topnimpact -n 10 --no-external

    # Both rankings, exported to CSV
    ./scarTopN.py ../my_project -t -i --export ranking.csv
"""
import os
import sys
import argparse
import logging
from typing import List, Optional

from scar.color_utils import Colors, print_error, print_warning, print_highlight, should_use_color
from scar.constants import (
    DEFAULT_BLACK_LIST,
    DEFAULT_OUTPUT_SIZE,
    EXIT_KEYBOARD_INTERRUPT,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    SOURCE_EXTENSIONS,
    SUPPORTED_EXPORT_FORMATS,
    ArgumentError,
    ScarError,
)
from scar.export_utils import export_ranking
from scar.use_cases import TopNConfig, load_graph, run_topn_impact, run_topn_inclusions


def export_filename(filename: str, metric: str, multiple: bool) -> str:
    """Output filename for one ranking, suffixed with the metric when several are exported."""
    if not multiple:
        return filename
    stem, ext = os.path.splitext(filename)
    return f"{stem}_{metric}{ext}"


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse and validate command-line arguments.

    Raises:
        ArgumentError: If no ranking is requested, --num is not positive or
                       the export format is unsupported
    """
    parser = argparse.ArgumentParser(
        description="Source code analyzer: rank files by direct inclusion and transitive impact.",
        epilog="""
Direct inclusion counts the files that #include a file.
Transitive impact counts every scanned file that would be affected by a change to it.
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("project_path", metavar="PROJECT_PATH", help="Path to the source tree to analyze")

    parser.add_argument("-t", "--topn", action="store_true", help="Rank files by number of direct inclusions")

    parser.add_argument("-i", "--topnimpact", action="store_true", help="Rank files by transitive impact")

    parser.add_argument("-n", "--num", type=int, default=DEFAULT_OUTPUT_SIZE, help=f"Maximum number of files to report (default: {DEFAULT_OUTPUT_SIZE})")

    parser.add_argument("-d", "--debug", action="store_true", help="Print the DFS tree of every impact traversal")

    parser.add_argument("--no-external", action="store_true", help="Rank only files found in the scan (hide e.g. system headers)")

    parser.add_argument(
        "--exclude", action="append", default=[], metavar="PATTERN", help="Glob pattern of project-relative paths to skip (can be repeated)"
    )

    parser.add_argument(
        "--extensions", nargs="+", default=list(SOURCE_EXTENSIONS), metavar="EXT", help=f"Source file extensions (default: {' '.join(SOURCE_EXTENSIONS)})"
    )

    parser.add_argument(
        "--black-list", nargs="*", default=list(DEFAULT_BLACK_LIST), metavar="SUBSTRING", help="Path substrings to skip (default: %(default)s)"
    )

    parser.add_argument("--white-list", nargs="*", default=[], metavar="SUBSTRING", help="Only scan paths containing one of these substrings")

    parser.add_argument("--skip-system-headers", action="store_true", help="Ignore #include <...> references")

    parser.add_argument("--export", metavar="FILE", help="Export rankings to .csv or .json")

    parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging output")

    args = parser.parse_args(argv)

    if not args.topn and not args.topnimpact:
        raise ArgumentError("Nothing to do: specify --topn and/or --topnimpact")
    if args.num <= 0:
        raise ArgumentError(f"--num must be positive, got {args.num}")
    if args.export and os.path.splitext(args.export)[1].lower() not in SUPPORTED_EXPORT_FORMATS:
        raise ArgumentError(f"Unsupported export format: '{args.export}' (use .csv or .json)")

    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the TopN analysis tool.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parse_arguments(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    if not should_use_color(args.no_color):
        Colors.disable()

    print_highlight("--- Source Code Analyzer ---")

    config = TopNConfig(
        path=args.project_path,
        output_size=args.num,
        debug=args.debug,
        no_external=args.no_external,
        exclude_patterns=args.exclude,
        extensions=args.extensions,
        black_list=args.black_list,
        white_list=args.white_list,
        skip_system_headers=args.skip_system_headers,
    )

    graph = load_graph(config)

    print(f"{Colors.CYAN}Analyzing {len(graph.scanned_paths)} files, {len(graph)} include nodes...{Colors.RESET}")

    multiple = args.topn and args.topnimpact

    if args.topn:
        print(f"\n{Colors.BRIGHT}Most Included Files:{Colors.RESET}")
        inclusions = run_topn_inclusions(config, graph)
        if args.export:
            export_ranking(export_filename(args.export, "inclusions", multiple), inclusions, "inclusions")

    if args.topnimpact:
        print(f"\n{Colors.BRIGHT}Most Impacting Files:{Colors.RESET}")
        impacts = run_topn_impact(config, graph)
        if args.export:
            export_ranking(export_filename(args.export, "impact", multiple), impacts, "impact")

    return EXIT_SUCCESS


if __name__ == "__main__":
    try:
        exit_code = main()
        sys.exit(exit_code)
    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user", prefix=False)
        sys.exit(EXIT_KEYBOARD_INTERRUPT)
    except ScarError as e:
        print_error(str(e))
        sys.exit(e.exit_code)
    except Exception as e:
        logging.error("Unexpected error: %s", e)
        if logging.getLogger().level == logging.DEBUG:
            import traceback

            traceback.print_exc()
        sys.exit(EXIT_RUNTIME_ERROR)
