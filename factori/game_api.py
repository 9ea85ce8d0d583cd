"""Functions exposed to game scripts under the ``game`` module name."""

from __future__ import annotations

import logging
import operator

_log = logging.getLogger(__name__)

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def example(value) -> int:
    """Log the given integer and return 1."""
    number = operator.index(value)
    if not _INT_MIN <= number <= _INT_MAX:
        raise OverflowError("signed integer is out of range for a 32-bit int")
    _log.debug("This is an example of using the game API. This value: %d", number)
    return 1