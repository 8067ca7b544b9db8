"""
Tests for terminal rendering helpers.
"""

from rich.console import Console

from popindex_app.formatting import (
    HIGHLIGHT_STYLE, format_size, highlight_match, render_results, render_summary,
)
from popindex_core.domain.models import SearchSummary


class TestFormatSize:

    def test_units(self):
        assert format_size(0) == "0 B"
        assert format_size(1023) == "1023 B"
        assert format_size(1536) == "1.50 KB"
        assert format_size(2 * 1024 ** 2) == "2.00 MB"
        assert format_size(3 * 1024 ** 3) == "3.00 GB"


class TestHighlight:

    def test_marks_first_match_case_insensitively(self):
        text = highlight_match("Annual_Report.pdf", "report")
        spans = [(s.start, s.end) for s in text.spans if s.style == HIGHLIGHT_STYLE]
        assert spans == [(7, 13)]

    def test_no_needle(self):
        assert highlight_match("a.txt", None).spans == []


class TestRender:

    def test_results_and_summary(self, make_record):
        console = Console(record=True, width=200)
        records = [
            make_record("/r/docs", is_dir=True),
            make_record("/r/docs/a.txt", size=2048),
        ]
        render_results(console, records, needle="a")
        render_summary(console, SearchSummary(total=2, files=1, dirs=1, total_size=2048), 0.25)

        out = console.export_text()
        assert " DIR " in out and " FILE " in out
        assert "└─ /r/docs/a.txt" in out
        assert "Found 2 results in 0.250s" in out
        assert "Files: 1 | Dirs: 1 | Total Size: 2.00 KB" in out
