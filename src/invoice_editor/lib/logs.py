"""
Logging utilities for the Invoice Editor.

Every module logs through a child of the ``invoice_editor`` logger, so a
single handler on the package logger formats all output. The level comes
from LOG_LEVEL (default INFO).
"""

import logging
import os
from pathlib import Path

ROOT_NAME = "invoice_editor"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def _root() -> logging.Logger:
    """Return the package logger, attaching its handler on first use."""
    root = logging.getLogger(ROOT_NAME)
    if not root.handlers:
        root.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
    return root


def logger(name: str) -> logging.Logger:
    """
    Return a package logger for the given name.

    File paths (e.g., __file__) are reduced to their module stem, so
    ``logger(__file__)`` in state.py yields ``invoice_editor.state``.

    Args:
        name: Logger name or __file__ path.

    Returns:
        logging.Logger under the invoice_editor hierarchy.
    """
    if "/" in name or "\\" in name:
        name = Path(name).stem
    root = _root()
    if name == ROOT_NAME or name.startswith(ROOT_NAME + "."):
        return logging.getLogger(name)
    return root.getChild(name)
