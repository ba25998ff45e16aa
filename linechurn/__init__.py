"""linechurn: per-line edit frequency heat maps for git repositories."""

__version__ = "0.1.0"
