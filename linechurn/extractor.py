"""
Per-line edit frequency extraction.

Drives a history query over every line of a file and collects the commit
counts in line order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from linechurn.config import DEFAULT_PROGRESS_EVERY
from linechurn.history_client import HistoryQuery
from linechurn.models import LineEditRecord, SourceFile, display_path

logger = logging.getLogger(__name__)


def extract_edit_counts(
    source_file: SourceFile,
    client: HistoryQuery,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    workers: int = 1,
) -> list[LineEditRecord]:
    """
    Query the commit count of every line of a file.

    Lines are queried independently for 1..N in increasing order. With more
    than one worker the queries overlap, but the returned records are still
    in line order.

    Args:
        source_file: The file to analyze
        client: History query used for each line
        progress_every: Log a progress message every this many lines
        workers: Number of concurrent queries (1 = strictly sequential)

    Returns:
        One LineEditRecord per line, in line order

    Raises:
        ValueError: If workers or progress_every is less than 1
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    if progress_every < 1:
        raise ValueError(f"progress_every must be at least 1, got {progress_every}")

    relative_path = source_file.relative_path
    shown = display_path(relative_path)
    total = source_file.line_count
    logger.info("%s: %d lines", shown, total)

    def query(line: int) -> LineEditRecord:
        if line % progress_every == 0:
            logger.info("%s: %d of %d", shown, line, total)
        return LineEditRecord(line, client.count_commits(relative_path, line))

    line_numbers = range(1, total + 1)

    if workers == 1:
        return [query(line) for line in line_numbers]

    # Executor.map yields results in submission order
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(query, line_numbers))
