"""Progress reporting hooks.

The core calls report(step, weight) at each phase and never reads anything
back, so callers may pass NullProgress or any object with a report method.
"""

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    """Receives progress notifications from the core."""

    def report(self, step: str, weight: int) -> None:
        ...


class NullProgress:
    """Progress reporter that ignores every notification."""

    def report(self, step: str, weight: int) -> None:
        pass


class LoggingProgress:
    """Progress reporter that logs each step with its running total."""

    def __init__(self) -> None:
        self.completed = 0

    def report(self, step: str, weight: int) -> None:
        self.completed += weight
        logger.info("[%3d] %s", self.completed, step)
