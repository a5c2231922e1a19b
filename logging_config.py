"""
Logging setup shared by the app and the CLI.

Under uvicorn, reuse its error handlers so our logs land in the same place;
standalone, make sure the root logger has a stdout StreamHandler.
"""
from __future__ import annotations
import logging
import sys
from typing import Optional

from config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_MARKER = "_trivia_time_handler"


def configure_logging(level_name: Optional[str] = None) -> int:
    """Configure root logging once; returns the effective level."""
    level = getattr(logging, (level_name or settings.log_level).upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    uvicorn_logger = logging.getLogger("uvicorn")
    if uvicorn_logger.handlers:
        for h in uvicorn_logger.handlers:
            h.setLevel(level)
            if h not in root.handlers:
                root.addHandler(h)
        return level

    # prefer an existing StreamHandler to stdout/stderr (or one we added earlier)
    for h in root.handlers:
        if getattr(h, _MARKER, False) or (
            isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) in (sys.stdout, sys.stderr)
        ):
            h.setLevel(level)
            return level

    sh = logging.StreamHandler(sys.stdout)
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(sh, _MARKER, True)
    root.addHandler(sh)
    return level
