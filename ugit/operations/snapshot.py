"""Snapshot the working directory into tree objects."""

import logging
from pathlib import Path
from typing import Optional

from ugit.core.errors import UnsupportedEntry
from ugit.core.objects import Blob, Tree, UGIT_DIR

logger = logging.getLogger(__name__)


def _encodable(name: str) -> bool:
    """False for names the OS decoded with surrogate escapes (undecodable bytes)."""
    try:
        name.encode()
    except UnicodeEncodeError:
        return False
    return True


class TreeBuilder:
    """
    Builds tree objects from the working directory (write-tree).

    Regular files become blobs and directories become trees. The .ugit
    directory is never included. Symbolic links and special files are never
    followed, and names that are not valid UTF-8 cannot be stored; depending on
    core.symlinks such entries are skipped with a warning or rejected with
    UnsupportedEntry.
    """

    def __init__(self, repo):
        """
        Initialize tree builder.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def write_tree(self, path: Optional[Path] = None) -> str:
        """
        Snapshot a directory and return the OID of its tree.

        The result only depends on directory contents: entries are sorted by
        the object model, not by filesystem enumeration order.

        Args:
            path: Directory to snapshot (defaults to the work tree root)

        Returns:
            str: Tree OID
        """
        directory = Path(path) if path is not None else self.repo.work_tree
        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")

        policy = self.repo.config.symlink_policy
        return self._write_directory(directory, policy)

    def _write_directory(self, directory: Path, policy: str) -> str:
        entries = []

        for item in directory.iterdir():
            if item.name == UGIT_DIR:
                continue

            if not _encodable(item.name):
                self._unsupported(item, policy, 'non-UTF-8 file name')
                continue

            if item.is_symlink():
                self._unsupported(item, policy, 'symbolic link')
                continue

            if not (item.is_file() or item.is_dir()):
                self._unsupported(item, policy, 'special file')
                continue

            if item.is_file():
                obj_hash = self.repo.write_object(Blob.from_file(item))
                entries.append(('blob', obj_hash, item.name))
            else:
                obj_hash = self._write_directory(item, policy)
                entries.append(('tree', obj_hash, item.name))

        return self.repo.write_object(Tree(entries))

    def _unsupported(self, item: Path, policy: str, kind: str) -> None:
        if policy == 'error':
            raise UnsupportedEntry(f"Cannot snapshot {kind}: {item}")
        logger.warning("skipping %s %s", kind, item)

    def hash_file(self, path) -> str:
        """
        Store a file's content as a blob (hash-object).

        Args:
            path: File to store

        Returns:
            str: Blob OID
        """
        return self.repo.write_blob(Path(path).read_bytes())
