"""Logger namespace for mdmath.

Every module logs under ``mdmath`` so a host can turn on scanner detail
without bridge noise, e.g. ``logging.getLogger("mdmath.scanner")``. The
package root carries a NullHandler: nothing is emitted unless the host
application configures logging.

Example:
    >>> from mdmath.utils.logger import get_logger
    >>> get_logger("lexer").name
    'mdmath.lexer'
"""

from __future__ import annotations

import logging

ROOT_LOGGER = "mdmath"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Logger nested under ``mdmath``.

    Module ``__name__`` values from inside the package already carry the
    prefix and pass through unchanged.
    """
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
