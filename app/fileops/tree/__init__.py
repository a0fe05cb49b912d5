"""Recursive tree mutation.

This module provides copy, move and delete over files and directory
trees, with tagged results and a boolean boundary.
"""

from fileops.tree.models import OutcomeStatus, TreeResult
from fileops.tree.mutator import TreeMutator

__all__ = [
    "OutcomeStatus",
    "TreeMutator",
    "TreeResult",
]
