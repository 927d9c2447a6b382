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
"""Export utilities for writing rankings to CSV or JSON files."""

import os
import csv
import json
import logging
from typing import List, Tuple

from scar.color_utils import print_error, print_success
from scar.constants import SUPPORTED_EXPORT_FORMATS, ArgumentError

logger = logging.getLogger(__name__)


def export_ranking(filename: str, pairs: List[Tuple[str, int]], metric: str) -> None:
    """Export an ordered ranking to a file.

    Supports: CSV (.csv) with columns File and metric, JSON (.json) as a list
    of {"file": ..., metric: ...} objects. Write failures are reported, not
    raised.

    Args:
        filename: Output filename (extension determines format)
        pairs: Ordered (file name, count) pairs
        metric: Name of the count column (e.g., "inclusions")

    Raises:
        ArgumentError: If the extension is not a supported format
    """
    ext = os.path.splitext(filename)[1].lower()
    if ext not in SUPPORTED_EXPORT_FORMATS:
        raise ArgumentError(f"Unsupported export format '{ext}'. Use one of: {', '.join(SUPPORTED_EXPORT_FORMATS)}")

    try:
        if ext == ".csv":
            with open(filename, "w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                writer.writerow(["File", metric])
                writer.writerows(pairs)
        else:
            data = [{"file": name, metric: count} for name, count in pairs]
            with open(filename, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)

        logger.info("Exported %s entries to %s", len(pairs), filename)
        print_success(f"Exported {metric} ranking to {filename}")

    except IOError as e:
        logger.error("Failed to export ranking: %s", e)
        print_error(f"Failed to export ranking: {e}")
