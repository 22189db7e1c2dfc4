"""Logger lookup for docmark modules.

docmark never configures handlers itself. Everything it reports, the
substitution-cap warnings and the parser's DEBUG summaries, goes through
loggers under the ``docmark`` namespace so an application can silence
or route them with a single ``logging.getLogger("docmark")`` call.

Example:
    >>> from docmark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsed %d parts", 3)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("substitution").name
        'docmark.substitution'
    """
    if not (name == "docmark" or name.startswith("docmark.")):
        name = f"docmark.{name}"
    return logging.getLogger(name)
