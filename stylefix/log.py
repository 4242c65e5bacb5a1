from __future__ import annotations

import logging
import os

_LOG = logging.getLogger("stylefix")


def setup_logging_once() -> None:
    """
    Attach a stream handler to the package logger, once.
    DEBUG when STYLEFIX_DEBUG is set, WARNING otherwise.
    """
    if getattr(setup_logging_once, "_inited", False):
        return
    setup_logging_once._inited = True  # type: ignore[attr-defined]
    level = logging.DEBUG if os.environ.get("STYLEFIX_DEBUG") else logging.WARNING
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        h.setFormatter(fmt)
        _LOG.addHandler(h)


__all__ = ["setup_logging_once"]
