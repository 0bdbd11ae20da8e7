"""Core functionality for ugit.

This module contains the core data structures:
- ugit objects (Blob, Tree, Commit)
- Object storage
- Repository management
- Reference management
- Configuration management
- Hashing utilities
- Error types

For snapshot, history and checkout engines, see ugit.operations
"""

from ugit.core.errors import (UgitError, ObjectNotFound, WrongObjectKind, CorruptObject,
                              InvalidTree, NameNotFound, AmbiguousIdentifier,
                              RefAlreadyExists, InvalidRefName, UnsupportedEntry,
                              RepositoryNotFound, RepositoryExists)
from ugit.core.objects import UgitObject, Blob, Tree, TreeEntry, Commit
from ugit.core.store import ObjectStore
from ugit.core.repository import Repository
from ugit.core.hash import hash_object
from ugit.core.refs import RefManager, RefValue, Resolution
from ugit.core.config import Config, get_config

__all__ = [
    'UgitObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'ObjectStore',
    'Repository',
    'RefManager',
    'RefValue',
    'Resolution',
    'Config',
    'get_config',
    'hash_object',
    'UgitError',
    'ObjectNotFound',
    'WrongObjectKind',
    'CorruptObject',
    'InvalidTree',
    'NameNotFound',
    'AmbiguousIdentifier',
    'RefAlreadyExists',
    'InvalidRefName',
    'UnsupportedEntry',
    'RepositoryNotFound',
    'RepositoryExists',
]
