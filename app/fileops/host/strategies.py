"""Move strategies selected once per host.

The mutator asks its strategy for an atomic move first and falls back to
copy followed by delete whenever the strategy cannot move the tree.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path

from fileops.host.base import HostFileSystem

logger = logging.getLogger(__name__)


class MoveOutcome(str, Enum):
    """Outcome of a single atomic move attempt.

    Attributes:
        MOVED: The tree now lives at the destination.
        FAILED: The host rejected the move (e.g. cross-volume).
        UNSUPPORTED: The host has no atomic move primitive.
    """

    MOVED = "moved"
    FAILED = "failed"
    UNSUPPORTED = "unsupported"


class MoveStrategy(ABC):
    """Abstract base class for atomic move attempts."""

    def __init__(self, fs: HostFileSystem) -> None:
        self._fs = fs

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used in logs."""

    @abstractmethod
    def attempt(self, src: Path, dst: Path) -> MoveOutcome:
        """Try to move src to dst without copying data.

        Args:
            src: Existing source path.
            dst: Destination path that does not exist yet.

        Returns:
            MoveOutcome describing what happened.
        """


class RenameMoveStrategy(MoveStrategy):
    """Move through the host's atomic rename primitive."""

    @property
    def name(self) -> str:
        return "rename"

    def attempt(self, src: Path, dst: Path) -> MoveOutcome:
        try:
            self._fs.rename(src, dst)
        except OSError as e:
            logger.debug("Atomic rename %s -> %s failed: %s", src, dst, e)
            return MoveOutcome.FAILED
        return MoveOutcome.MOVED


class CopyDeleteMoveStrategy(MoveStrategy):
    """Placeholder for hosts without rename; always defers to copy+delete."""

    @property
    def name(self) -> str:
        return "copy-delete"

    def attempt(self, src: Path, dst: Path) -> MoveOutcome:
        return MoveOutcome.UNSUPPORTED


def select_move_strategy(fs: HostFileSystem) -> MoveStrategy:
    """Probe the host once and pick the most capable move strategy.

    Args:
        fs: Host filesystem to probe.

    Returns:
        RenameMoveStrategy if the host can rename, else CopyDeleteMoveStrategy.
    """
    strategy: MoveStrategy
    if fs.supports_rename():
        strategy = RenameMoveStrategy(fs)
    else:
        strategy = CopyDeleteMoveStrategy(fs)
    logger.debug("Selected move strategy: %s", strategy.name)
    return strategy
