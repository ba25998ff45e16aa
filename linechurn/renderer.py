"""
HTML rendering for per-file heat maps and the overview index.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from linechurn.models import FileReport, LineEditRecord, OverviewEntry, SourceFile, display_path
from linechurn.normalizer import IntensityMap

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)


@dataclass(frozen=True)
class ReportRow:
    """One rendered line of a file report."""

    line_number: int
    commit_count: int
    content: str
    alpha: str


def format_alpha(intensity: float) -> str:
    """Format an intensity as the alpha channel of an rgba() color."""
    return f"{intensity:.3f}"


def build_rows(
    lines: Sequence[str],
    records: Sequence[LineEditRecord],
    intensity_map: IntensityMap,
) -> list[ReportRow]:
    """
    Pair every source line with its record and heat-map alpha.

    Args:
        lines: Source lines in order
        records: One LineEditRecord per line, in the same order
        intensity_map: Normalization for this file's counts

    Returns:
        Rows in line order

    Raises:
        ValueError: If lines and records do not correspond one to one
    """
    if len(lines) != len(records):
        raise ValueError(
            f"Got {len(records)} edit records for {len(lines)} lines"
        )

    rows = []
    for position, (content, record) in enumerate(zip(lines, records), start=1):
        if record.line_number != position:
            raise ValueError(
                f"Edit record for line {record.line_number} found at line {position}"
            )
        rows.append(
            ReportRow(
                line_number=position,
                commit_count=record.commit_count,
                content=content,
                alpha=format_alpha(intensity_map.intensity(record.commit_count)),
            )
        )
    return rows


def render_file_report(
    source_file: SourceFile,
    records: Sequence[LineEditRecord],
    intensity_map: IntensityMap,
) -> FileReport:
    """
    Render the heat-mapped HTML page for one file.

    Args:
        source_file: The analyzed file
        records: Its per-line edit records
        intensity_map: Normalization derived from those records

    Returns:
        FileReport with the HTML document and the file's total edit count
    """
    rows = build_rows(source_file.lines, records, intensity_map)
    total_edits = sum(record.commit_count for record in records)

    html = templates.get_template("report.html").render(
        relative_path=display_path(source_file.relative_path),
        rows=rows,
        line_count=source_file.line_count,
        total_edits=total_edits,
        min_edits=intensity_map.min,
        max_edits=intensity_map.max,
    )

    return FileReport(
        relative_path=display_path(source_file.relative_path),
        html=html,
        total_edits=total_edits,
        line_count=source_file.line_count,
    )


def render_overview(entries: Sequence[OverviewEntry], title: str = "linechurn overview") -> str:
    """Render the ranked overview index. Entries are shown in the given order."""
    return templates.get_template("overview.html").render(
        title=title,
        entries=entries,
        total_edits=sum(entry.total_edits for entry in entries),
    )
