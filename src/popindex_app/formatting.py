"""
Terminal rendering for search results.

Presentation only: everything here works on the FileRecord list the core
returns.
"""

from datetime import datetime
from typing import Iterable, Optional

from rich.console import Console
from rich.text import Text

from popindex_core.domain.models import FileRecord, SearchSummary

HIGHLIGHT_STYLE = "black on yellow"
RULE = "─" * 80


def format_size(num_bytes: int) -> str:
    """Human-readable size, 1024-based (e.g. '2.00 MB')."""
    if num_bytes >= 1024 ** 3:
        return f"{num_bytes / 1024 ** 3:.2f} GB"
    if num_bytes >= 1024 ** 2:
        return f"{num_bytes / 1024 ** 2:.2f} MB"
    if num_bytes >= 1024:
        return f"{num_bytes / 1024:.2f} KB"
    return f"{num_bytes} B"


def format_date(timestamp: int) -> str:
    """Local 'YYYY-MM-DD HH:MM' for an epoch timestamp."""
    try:
        dt = datetime.fromtimestamp(timestamp)
    except (OverflowError, OSError, ValueError):
        dt = datetime.fromtimestamp(0)
    return dt.strftime("%Y-%m-%d %H:%M")


def highlight_match(name: str, needle: Optional[str], style: str = "bold") -> Text:
    """Name as rich Text with the first case-insensitive match of needle highlighted."""
    text = Text(name, style=style)
    if not needle:
        return text
    lowered = name.lower()
    # Offsets only line up when lowercasing keeps the length
    if len(lowered) != len(name):
        return text
    idx = lowered.find(needle.lower())
    if idx >= 0:
        text.stylize(HIGHLIGHT_STYLE, idx, idx + len(needle))
    return text


def render_results(console: Console, results: Iterable[FileRecord], needle: Optional[str] = None):
    """Print a header, then two lines per result (tag/size/date/name, then path)."""
    header = Text(f"{'SIZE':<12} {'MODIFIED':<20} {'NAME':<30}", style="bold")
    console.print(header, soft_wrap=True)
    console.print(RULE, style="dim", soft_wrap=True)

    for record in results:
        line = Text()
        if record.is_dir:
            line.append(" DIR  ", style="white on blue")
        else:
            line.append(" FILE ", style="black on green")
        line.append(" ")
        line.append(f"{format_size(record.size):<10}", style="cyan")
        line.append(f" {format_date(record.last_modified):<20} ")
        line.append(highlight_match(record.name, needle, "bold blue" if record.is_dir else "bold"))
        console.print(line, soft_wrap=True)
        console.print(Text(f"   └─ {record.path}", style="dim"), soft_wrap=True)


def render_summary(console: Console, summary: SearchSummary, elapsed_seconds: float):
    console.print(RULE, style="dim", soft_wrap=True)
    console.print(
        Text(f"Found {summary.total} results in {elapsed_seconds:.3f}s", style="bold cyan"),
        soft_wrap=True,
    )
    line = Text()
    line.append(f"Files: {summary.files}", style="green")
    line.append(" | ")
    line.append(f"Dirs: {summary.dirs}", style="blue")
    line.append(" | ")
    line.append(f"Total Size: {format_size(summary.total_size)}", style="yellow")
    console.print(line, soft_wrap=True)
