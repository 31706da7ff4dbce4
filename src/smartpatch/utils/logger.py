"""Logger namespacing for smartpatch.

Every module logs under the ``smartpatch`` hierarchy so one handler on the
root ``smartpatch`` logger sees the whole pipeline: matcher search stats and
special-case shapes, engine splice summaries, tree-sitter recovery notices
(all DEBUG) and editor command failures (WARNING). The library installs no
handlers; ``smartpatch -v`` calls ``logging.basicConfig`` at DEBUG, and
without it only warnings reach stderr.

Example:
    >>> import logging
    >>> logging.getLogger("smartpatch").setLevel(logging.DEBUG)
    >>> get_logger(__name__).debug("Matched in %d steps", 42)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``smartpatch`` hierarchy.

    Module names (``smartpatch.matcher``) are used as-is; bare names are
    prefixed, so ``get_logger("matcher")`` and ``get_logger(__name__)``
    inside ``smartpatch/matcher.py`` return the same logger.
    """
    if not (name == "smartpatch" or name.startswith("smartpatch.")):
        name = f"smartpatch.{name}"
    return logging.getLogger(name)
