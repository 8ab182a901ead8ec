"""Logging helpers for zhlint.

Every module logs through a child of the ``zhlint`` logger, so applications
can tune the whole library with one call:

    >>> import logging
    >>> logging.getLogger("zhlint").setLevel(logging.DEBUG)

The library itself installs only a NullHandler. Rejected configuration
entries are logged at WARNING; stage-level progress is logged at DEBUG.
"""

from __future__ import annotations

import logging

_ROOT = "zhlint"

logging.getLogger(_ROOT).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``zhlint`` namespace.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("masking").name
        'zhlint.masking'
        >>> get_logger("zhlint.config").name
        'zhlint.config'
    """
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
