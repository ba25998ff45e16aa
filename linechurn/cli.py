"""
CLI display functions for linechurn.
"""

from linechurn.models import OverviewEntry, RunSummary


def format_entry(rank: int, entry: OverviewEntry) -> str:
    """
    Format one overview entry for display.

    Args:
        rank: 1-based position in the ranking
        entry: The overview entry

    Returns:
        Formatted string for display
    """
    path = entry.relative_path
    if len(path) > 50:
        path = "..." + path[-47:]

    plural = "edit" if entry.total_edits == 1 else "edits"
    return f"  {rank:>4}. {entry.total_edits:>7} {plural:<6} {entry.line_count:>6} lines  {path}"


def display_summary(summary: RunSummary, top: int = 10) -> None:
    """
    Print the outcome of a run to the console.

    Args:
        summary: RunSummary returned by the pipeline
        top: Number of most edited files to list
    """
    processed = len(summary.processed)
    file_word = "file" if processed == 1 else "files"

    print(f"Processed {processed} {file_word}, {summary.total_edits} edits in total")

    if summary.skipped_existing:
        print(f"   Skipped (report exists): {len(summary.skipped_existing)}")
    if summary.skipped_too_long:
        print(f"   Skipped (too long):      {len(summary.skipped_too_long)}")
    if summary.skipped_unreadable:
        print(f"   Skipped (unreadable):    {len(summary.skipped_unreadable)}")
    print()

    if summary.processed and top > 0:
        print("Most edited files:")
        for rank, entry in enumerate(summary.processed[:top], start=1):
            print(format_entry(rank, entry))
        print()

    if summary.overview_path is not None:
        print(f"Overview: {summary.overview_path}")
