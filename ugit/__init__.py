"""ugit - a minimal content-addressed version control engine."""

__version__ = '0.1.0'

from ugit.core.repository import Repository
from ugit.core.objects import UgitObject, Blob, Tree, TreeEntry, Commit

__all__ = [
    'Repository',
    'UgitObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
]
