"""Logging setup for the linechurn command line."""

import logging

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_HANDLER_ATTACHED = False


def configure_logging(debug: bool = False) -> logging.Logger:
    """Attach a single stream handler to the package logger and set its level."""
    global _HANDLER_ATTACHED

    level = logging.DEBUG if debug else logging.INFO
    logger = logging.getLogger("linechurn")

    if not _HANDLER_ATTACHED:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        _HANDLER_ATTACHED = True

    logger.setLevel(level)
    return logger
