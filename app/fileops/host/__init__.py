"""Host filesystem capability.

This module provides the HostFileSystem interface, its local operating
system implementation, and the move strategies chosen by probing it.
"""

from fileops.host.base import HostFileSystem
from fileops.host.local import LocalFileSystem
from fileops.host.strategies import (
    CopyDeleteMoveStrategy,
    MoveOutcome,
    MoveStrategy,
    RenameMoveStrategy,
    select_move_strategy,
)

__all__ = [
    "CopyDeleteMoveStrategy",
    "HostFileSystem",
    "LocalFileSystem",
    "MoveOutcome",
    "MoveStrategy",
    "RenameMoveStrategy",
    "select_move_strategy",
]
