from __future__ import annotations

import logging
import sys
from typing import Union


_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Per-request chatter from the HTTP stack
_NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Install a single stderr handler on the root logger.

    Call once, early. Re-running replaces the previous handlers instead of
    stacking duplicates.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging"]
