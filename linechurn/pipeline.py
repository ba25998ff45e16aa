"""
End-to-end analysis run.

Ties discovery, extraction, normalization, rendering and output together for
one repository.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from linechurn.config import DEFAULT_PROGRESS_EVERY, RunConfig
from linechurn.discovery import discover_files
from linechurn.extractor import extract_edit_counts
from linechurn.history_client import GitHistoryClient, HistoryQuery
from linechurn.models import (
    OverviewEntry,
    RunSummary,
    count_lines,
    display_path,
    read_source_file,
)
from linechurn.normalizer import normalize
from linechurn.output_manager import OutputManager
from linechurn.overview import OverviewAggregator
from linechurn.renderer import render_file_report

logger = logging.getLogger(__name__)


def process_file(
    path: Path,
    repo_root: Path,
    client: HistoryQuery,
    output: OutputManager,
    aggregator: OverviewAggregator,
    summary: RunSummary,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    workers: int = 1,
) -> OverviewEntry | None:
    """
    Analyze one file and write its report.

    Args:
        path: Absolute path of the source file
        repo_root: Repository root
        client: History query for per-line counts
        output: Output manager (skip rules and writes)
        aggregator: Receives the entry once the report is written
        summary: Collects skipped paths
        progress_every: Progress logging cadence in lines
        workers: Concurrent history queries

    Returns:
        The recorded OverviewEntry, or None if the file was skipped

    Raises:
        ReportWriteError: If the report could not be written
    """
    # Raw path for git and the file system, shown path for logs and HTML
    relative_path = path.relative_to(repo_root).as_posix()
    shown = display_path(relative_path)

    if output.is_existing(relative_path):
        logger.debug("Skip %s: report already exists", shown)
        summary.skipped_existing.append(shown)
        return None

    try:
        line_count = count_lines(path)
        if output.exceeds_max_lines(line_count):
            logger.warning("Skip %s because it is too long: %d lines", shown, line_count)
            summary.skipped_too_long.append(shown)
            return None

        source_file = read_source_file(path, repo_root)
    except OSError as e:
        logger.warning("Skip %s because it cannot be read: %s", shown, e.strerror or e)
        summary.skipped_unreadable.append(shown)
        return None

    records = extract_edit_counts(
        source_file, client, progress_every=progress_every, workers=workers
    )
    intensity_map = normalize(record.commit_count for record in records)
    report = render_file_report(source_file, records, intensity_map)

    output.write_report(relative_path, report.html)

    entry = OverviewEntry(
        relative_path=shown,
        link=output.report_link(relative_path),
        total_edits=report.total_edits,
        line_count=report.line_count,
    )
    aggregator.record(entry)
    summary.processed.append(entry)
    return entry


def run(
    config: RunConfig,
    client: HistoryQuery | None = None,
    files: Iterable[Path] | None = None,
) -> RunSummary:
    """
    Analyze every candidate file of a repository and write all reports.

    Args:
        config: Validated run configuration
        client: History query to use. Defaults to a GitHistoryClient on config.repo.
        files: Candidate files. Defaults to discovering them under config.repo.

    Returns:
        RunSummary of processed and skipped files

    Raises:
        HistoryClientError: If the default git client cannot be created
        ReportWriteError: If any report could not be written
    """
    repo_root = config.repo.resolve()

    if client is None:
        client = GitHistoryClient(repo_root, timeout=config.git_timeout)

    output = OutputManager(
        config.outdir,
        skip_existing=config.skip_existing,
        max_lines=config.max_lines,
    )
    output.prepare()

    if files is None:
        files = discover_files(repo_root, exclude=[config.outdir])

    aggregator = OverviewAggregator()
    summary = RunSummary()

    for path in files:
        process_file(
            Path(path).resolve(),
            repo_root,
            client,
            output,
            aggregator,
            summary,
            progress_every=config.progress_every,
            workers=config.workers,
        )

    if len(aggregator) == 0 and output.overview_path.exists():
        # Nothing new: an empty index would only hide the previous ranking
        logger.info("No files processed, keeping existing overview")
        summary.overview_path = output.overview_path
    else:
        summary.overview_path = aggregator.write(output)

    summary.processed = aggregator.entries()
    return summary
