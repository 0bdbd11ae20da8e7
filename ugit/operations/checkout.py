"""Working-directory reconciliation: read-tree, checkout, branch and tag.

read_tree is destructive by contract. It deletes everything in the work tree
except .ugit and then writes the stored snapshot. Uncommitted modifications,
tracked or not, are discarded without warning. The clear and the rebuild are
two separate phases: an interruption between them leaves a partially
populated work tree, and nothing tries to repair it.
"""

import logging
import shutil
from typing import Dict, List, Tuple

from ugit.core.errors import WrongObjectKind
from ugit.core.objects import UGIT_DIR
from ugit.core.refs import HEAD, HEADS_PREFIX, RefValue, Resolution

logger = logging.getLogger(__name__)


class CheckoutEngine:
    """
    Replaces working-directory state with stored snapshots and moves HEAD.
    """

    def __init__(self, repo):
        """
        Initialize checkout engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def collect_tree(self, tree_oid: str, prefix: str = '') -> Tuple[List[str], Dict[str, str]]:
        """
        Flatten a tree graph into directories and files.

        Every subtree is decoded and every blob's header checked, so a broken
        snapshot is reported here rather than halfway through a rebuild.

        Args:
            tree_oid: Root tree OID
            prefix: Path prefix for the entries of this tree

        Returns:
            Tuple of (directory paths, {file path: blob OID}), paths relative
            to the work tree with '/' separators
        """
        directories: List[str] = []
        files: Dict[str, str] = {}

        for entry in self.repo.read_tree(tree_oid):
            path = f"{prefix}{entry.name}"
            if entry.type == 'tree':
                directories.append(path)
                subdirs, subfiles = self.collect_tree(entry.hash, f"{path}/")
                directories.extend(subdirs)
                files.update(subfiles)
            else:
                kind, _ = self.repo.objects.read_header(entry.hash)
                if kind != 'blob':
                    raise WrongObjectKind(entry.hash, 'blob', kind)
                files[path] = entry.hash

        return directories, files

    def clear_work_tree(self) -> None:
        """Delete everything in the work tree except the .ugit directory."""
        for item in self.repo.work_tree.iterdir():
            if item.name == UGIT_DIR:
                continue
            if item.is_dir() and not item.is_symlink():
                shutil.rmtree(item)
            else:
                item.unlink()

    def read_tree(self, tree_oid: str) -> int:
        """
        Make the work tree an exact copy of a stored tree.

        Args:
            tree_oid: Tree to materialize

        Returns:
            int: Number of files written

        Raises:
            ObjectNotFound, WrongObjectKind, CorruptObject: Before anything
                is deleted, if the tree graph is incomplete or malformed
        """
        directories, files = self.collect_tree(tree_oid)
        work_tree = self.repo.work_tree

        logger.debug("clearing work tree %s", work_tree)
        self.clear_work_tree()

        logger.debug("writing %d directories and %d files from %s", len(directories), len(files), tree_oid)
        for directory in directories:
            (work_tree / directory).mkdir(parents=True, exist_ok=True)

        for path, blob_hash in files.items():
            full_path = work_tree / path
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(self.repo.read_blob(blob_hash))

        return len(files)

    def checkout(self, identifier: str) -> Resolution:
        """
        Check out a commit and move HEAD.

        HEAD becomes a symbolic ref when the identifier resolved through the
        branch namespace, stays as it is when the identifier is HEAD itself,
        and is detached at the commit otherwise (hash, prefix or tag).

        Args:
            identifier: Branch, tag, HEAD, OID or OID prefix

        Returns:
            Resolution of the identifier

        Raises:
            NameNotFound, AmbiguousIdentifier: If the identifier does not resolve
            ObjectNotFound, WrongObjectKind: If it does not name a readable commit
        """
        resolution = self.repo.refs.resolve(identifier)
        commit = self.repo.read_commit(resolution.oid)

        count = self.read_tree(commit.tree)

        if resolution.ref and resolution.ref.startswith(HEADS_PREFIX):
            self.repo.refs.update_ref(HEAD, RefValue(symbolic=True, value=resolution.ref), deref=False)
        elif resolution.ref != HEAD:
            self.repo.refs.update_ref(HEAD, RefValue(symbolic=False, value=resolution.oid), deref=False)

        logger.info("checked out %s (%s), %d files", identifier, resolution.oid, count)
        return resolution

    def branch(self, name: str, start: str = HEAD) -> str:
        """
        Create a branch at a commit.

        Args:
            name: Branch name
            start: Name or OID the branch starts at (defaults to HEAD)

        Returns:
            str: Commit OID the branch points at

        Raises:
            RefAlreadyExists: If the branch exists
        """
        oid = self.repo.refs.get_oid(start)
        self.repo.refs.create_branch(name, oid)
        logger.info("created branch %s at %s", name, oid)
        return oid

    def tag(self, name: str, start: str = HEAD) -> str:
        """
        Create a tag at a commit.

        Args:
            name: Tag name
            start: Name or OID the tag points at (defaults to HEAD)

        Returns:
            str: Commit OID the tag points at

        Raises:
            RefAlreadyExists: If the tag exists
        """
        oid = self.repo.refs.get_oid(start)
        self.repo.refs.create_tag(name, oid)
        logger.info("created tag %s at %s", name, oid)
        return oid
