"""
Configuration management for linechurn.

Loads run defaults from environment variables (optionally via a .env file)
and validates the repository and output locations before a run starts.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

# Load .env file from the current working directory
load_dotenv()

REPORT_SUFFIX = ".html"
OVERVIEW_FILENAME = "linechurn_overview.html"
DEFAULT_PROGRESS_EVERY = 100

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigError(ValueError):
    """Raised when the run configuration is missing or invalid."""

    pass


class RunConfig(BaseModel):
    """Settings for a single analysis run."""

    repo: Path = Field(..., description="Root of the git working tree to analyze")
    outdir: Path = Field(..., description="Directory the reports are written to")
    skip_existing: bool = Field(True, description="Skip files whose report already exists")
    max_lines: int = Field(0, ge=0, description="Skip files longer than this (0 = no limit)")
    debug: bool = False
    workers: int = Field(1, ge=1, le=64, description="Concurrent history queries per file")
    progress_every: int = Field(DEFAULT_PROGRESS_EVERY, ge=1)
    git_timeout: float | None = Field(None, gt=0, description="Seconds before a git query is abandoned")


def _env_bool(name: str) -> bool | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip().lower() in _TRUE_VALUES


def _env_value(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def _settings_from_env() -> dict:
    """Collect the LINECHURN_* environment variables that are set."""
    settings = {
        "repo": _env_value("LINECHURN_REPO"),
        "outdir": _env_value("LINECHURN_OUTDIR"),
        "max_lines": _env_value("LINECHURN_MAX_LINES"),
        "workers": _env_value("LINECHURN_WORKERS"),
        "git_timeout": _env_value("LINECHURN_GIT_TIMEOUT"),
        "skip_existing": _env_bool("LINECHURN_SKIP_EXISTING"),
        "debug": _env_bool("LINECHURN_DEBUG"),
    }
    return {key: value for key, value in settings.items() if value is not None}


def load_config(**overrides) -> RunConfig:
    """
    Build a RunConfig from the environment, with explicit overrides on top.

    Args:
        **overrides: Settings taken from the command line. None values are ignored.

    Returns:
        A validated RunConfig with absolute repo and outdir paths

    Raises:
        ConfigError: If a required setting is missing or a value is out of range
    """
    settings = _settings_from_env()
    settings.update({key: value for key, value in overrides.items() if value is not None})

    missing = [name for name in ("repo", "outdir") if not settings.get(name)]
    if missing:
        flags = ", ".join(f"--{name}" for name in missing)
        raise ConfigError(
            f"Missing required configuration: {flags}\n"
            "Pass them on the command line or set LINECHURN_REPO / LINECHURN_OUTDIR."
        )

    try:
        config = RunConfig(**settings)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from e

    return config.model_copy(
        update={
            "repo": config.repo.expanduser().resolve(),
            "outdir": config.outdir.expanduser().resolve(),
        }
    )


def validate_config(config: RunConfig) -> None:
    """Validate that the repository root exists and is a git working tree."""
    repo = config.repo

    if not repo.exists():
        raise ConfigError(f"{repo} does not exist")

    if not repo.is_dir():
        raise ConfigError(f"{repo} is not a directory")

    # .git is a file for worktrees and submodules
    if not (repo / ".git").exists():
        raise ConfigError(f"{repo} is not a git repo (does not contain .git directory)")

    if config.outdir == repo:
        raise ConfigError("Output directory must not be the repository root")

    if config.outdir.exists() and not config.outdir.is_dir():
        raise ConfigError(f"Output path {config.outdir} exists and is not a directory")
