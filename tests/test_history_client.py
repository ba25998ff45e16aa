"""
Tests for the git history client.
"""

import shutil
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from linechurn.history_client import (
    GitHistoryClient,
    HistoryClientError,
    parse_commit_count,
)


@pytest.fixture
def client(tmp_path):
    """A client whose git lookup always succeeds."""
    with patch("linechurn.history_client.shutil.which", return_value="/usr/bin/git"):
        return GitHistoryClient(tmp_path)


def _completed(stdout="", returncode=0, stderr=""):
    result = MagicMock()
    result.stdout = stdout
    result.stderr = stderr
    result.returncode = returncode
    return result


class TestParseCommitCount:
    """Tests for counting commit records in git output."""

    def test_counts_records(self):
        assert parse_commit_count("abc\ndef\n123") == 3

    def test_single_record_without_newline(self):
        """A lone record without trailing newline still counts as one."""
        assert parse_commit_count("abc") == 1

    def test_trailing_newline_not_counted(self):
        assert parse_commit_count("abc\ndef\n") == 2

    def test_blank_lines_ignored(self):
        assert parse_commit_count("abc\n\n\ndef\n") == 2

    def test_duplicate_records_counted_once(self):
        assert parse_commit_count("abc\nabc\n") == 1

    def test_empty_output(self):
        assert parse_commit_count("") == 0

    def test_none_output(self):
        assert parse_commit_count(None) == 0


class TestGitHistoryClient:
    """Tests for the git-backed client."""

    def test_missing_git_raises(self, tmp_path):
        """Client creation fails when git is not installed."""
        with patch("linechurn.history_client.shutil.which", return_value=None):
            with pytest.raises(HistoryClientError, match="not found"):
                GitHistoryClient(tmp_path)

    def test_build_command(self, client):
        """The query is scoped to a single line of a single file."""
        cmd = client.build_command("src/app.py", 12)

        assert cmd == [
            "/usr/bin/git",
            "log",
            "-L12,12:src/app.py",
            "--no-patch",
            "--pretty=format:%H",
        ]

    @patch("linechurn.history_client.subprocess.run")
    def test_count_commits_success(self, mock_run, client, tmp_path):
        """Counts the hashes git prints."""
        mock_run.return_value = _completed("a1\nb2\nc3")

        assert client.count_commits("src/app.py", 3) == 3

        call_args = mock_run.call_args
        assert call_args[0][0][2] == "-L3,3:src/app.py"
        assert call_args[1]["cwd"] == tmp_path

    @patch("linechurn.history_client.subprocess.run")
    def test_nonzero_exit_returns_zero(self, mock_run, client):
        """A failing git command degrades to 0."""
        mock_run.return_value = _completed("", returncode=128, stderr="fatal: bad file")

        assert client.count_commits("missing.py", 1) == 0

    @patch("linechurn.history_client.subprocess.run")
    def test_oserror_returns_zero(self, mock_run, client):
        """A git binary that fails to start degrades to 0."""
        mock_run.side_effect = FileNotFoundError("git")

        assert client.count_commits("src/app.py", 1) == 0

    @patch("linechurn.history_client.subprocess.run")
    def test_timeout_returns_zero(self, mock_run, client):
        """A query that times out degrades to 0."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="git", timeout=1)

        assert client.count_commits("src/app.py", 1) == 0

    @patch("linechurn.history_client.subprocess.run")
    def test_timeout_is_passed_through(self, mock_run, tmp_path):
        mock_run.return_value = _completed("")
        with patch("linechurn.history_client.shutil.which", return_value="/usr/bin/git"):
            client = GitHistoryClient(tmp_path, timeout=2.5)

        client.count_commits("a.txt", 1)

        assert mock_run.call_args[1]["timeout"] == 2.5


def _git(repo, *args):
    subprocess.run(
        [
            "git",
            "-c", "user.name=Test",
            "-c", "user.email=test@example.com",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=repo,
        check=True,
        capture_output=True,
    )


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestGitHistoryClientRealRepo:
    """Runs the client against a throwaway git repository."""

    @pytest.fixture
    def repo(self, tmp_path):
        root = tmp_path / "repo"
        root.mkdir()
        _git(root, "init", "-q")

        path = root / "a.txt"
        path.write_text("one\ntwo\n")
        _git(root, "add", "a.txt")
        _git(root, "commit", "-q", "-m", "add a.txt")

        path.write_text("one, edited\ntwo\n")
        _git(root, "commit", "-q", "-am", "edit line 1")

        path.write_text("one, edited again\ntwo\n")
        _git(root, "commit", "-q", "-am", "edit line 1 again")
        return root

    def test_counts_every_commit_touching_the_line(self, repo):
        client = GitHistoryClient(repo)

        assert client.count_commits("a.txt", 1) == 3

    def test_untouched_line_counts_its_creation(self, repo):
        client = GitHistoryClient(repo)

        assert client.count_commits("a.txt", 2) == 1

    def test_line_past_end_of_file_is_zero(self, repo):
        client = GitHistoryClient(repo)

        assert client.count_commits("a.txt", 50) == 0

    def test_untracked_file_is_zero(self, repo):
        (repo / "new.txt").write_text("fresh\n")
        client = GitHistoryClient(repo)

        assert client.count_commits("new.txt", 1) == 0
