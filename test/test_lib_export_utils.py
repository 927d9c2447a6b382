#!/usr/bin/env python3
"""Tests for scar/export_utils.py"""

import csv
import json
from pathlib import Path
from typing import Any

import pytest

from scar.constants import ArgumentError
from scar.export_utils import export_ranking

PAIRS = [("foobar.h", 2), ("blablah.h", 1), ("main.cpp", 0)]


class TestExportRanking:
    """Tests for export_ranking function."""

    def test_csv(self, temp_dir: str) -> None:
        """Test CSV export with header row."""
        filename = str(Path(temp_dir) / "ranking.csv")
        export_ranking(filename, PAIRS, "inclusions")

        with open(filename, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))

        assert rows[0] == ["File", "inclusions"]
        assert rows[1:] == [["foobar.h", "2"], ["blablah.h", "1"], ["main.cpp", "0"]]

    def test_json(self, temp_dir: str) -> None:
        """Test JSON export keeps ranking order."""
        filename = str(Path(temp_dir) / "ranking.json")
        export_ranking(filename, PAIRS, "impact")

        with open(filename, encoding="utf-8") as f:
            data = json.load(f)

        assert data[0] == {"file": "foobar.h", "impact": 2}
        assert [item["file"] for item in data] == ["foobar.h", "blablah.h", "main.cpp"]

    def test_unsupported_format(self, temp_dir: str) -> None:
        """Test that unknown extensions are rejected."""
        with pytest.raises(ArgumentError):
            export_ranking(str(Path(temp_dir) / "ranking.xml"), PAIRS, "impact")

    def test_write_failure_reported(self, temp_dir: str, capsys: Any) -> None:
        """Test that I/O failures are reported instead of raised."""
        filename = str(Path(temp_dir) / "missing_dir" / "ranking.csv")
        export_ranking(filename, PAIRS, "inclusions")
        assert "Failed to export ranking" in capsys.readouterr().err
