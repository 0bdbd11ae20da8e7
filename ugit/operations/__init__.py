"""Operations module for high-level ugit operations.

This module contains the engines built on top of ugit.core:
- Snapshotting the working directory into trees (write-tree)
- Commit creation and history traversal (commit, log)
- Checkout, branch and tag management
"""

from ugit.operations.snapshot import TreeBuilder
from ugit.operations.history import CommitGraph
from ugit.operations.checkout import CheckoutEngine

__all__ = [
    'TreeBuilder',
    'CommitGraph',
    'CheckoutEngine',
]
