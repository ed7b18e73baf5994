"""The stack the application is built on."""

from __future__ import annotations

import os

from libbuildpack.logger import Logger

__all__ = ["default_stack"]


def default_stack(logger: Logger) -> str:
    """Return the stack id from ``CNB_STACK_ID``; raise LookupError if it is not set."""
    try:
        stack = os.environ["CNB_STACK_ID"]
    except KeyError:
        raise LookupError("CNB_STACK_ID not set") from None
    logger.debug("Stack: %s", stack)
    return stack