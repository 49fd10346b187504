"""Package-wide logging entry point.

Every equelle_mode module obtains its logger with ``get_logger(__name__)``,
so all loggers live under the ``equelle_mode`` namespace. A host editor
configures that one logger to see lexical recovery, block underflow and
incremental re-tokenization messages. Nothing here installs handlers.

Example:
    >>> logger = get_logger(__name__)
    >>> logger.debug("Re-tokenized %d lines", 3)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "equelle_mode." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'equelle_mode.mymodule'
    """
    if not (name == "equelle_mode" or name.startswith("equelle_mode.")):
        name = f"equelle_mode.{name}"
    return logging.getLogger(name)
