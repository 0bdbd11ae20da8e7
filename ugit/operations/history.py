"""Commit creation and history traversal."""

import logging
import time
from collections import defaultdict, deque
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ugit.core.objects import Commit
from ugit.core.refs import HEAD, RefValue

logger = logging.getLogger(__name__)


def local_timezone() -> str:
    """Current UTC offset formatted as +HHMM."""
    return time.strftime('%z') or '+0000'


class CommitGraph:
    """
    Builds commits on top of working-directory snapshots and walks the
    parent-linked commit graph.
    """

    def __init__(self, repo):
        """
        Initialize commit graph engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def create_commit(self, message: str, timestamp: Optional[int] = None) -> str:
        """
        Snapshot the working directory and commit it.

        The parent is the commit HEAD resolves to; on an unborn branch the
        new commit is a root commit with no parents. Afterwards the current
        branch (or HEAD itself when detached) points at the new commit.

        Args:
            message: Commit message
            timestamp: Unix timestamp (defaults to current time)

        Returns:
            str: New commit OID
        """
        tree_hash = self.repo.snapshot.write_tree()

        parent = self.repo.refs.resolve_head()
        parents = [parent] if parent else []

        commit = Commit.create(
            tree_hash=tree_hash,
            parent_hashes=parents,
            message=message,
            timestamp=timestamp,
            timezone=local_timezone()
        )
        oid = self.repo.write_object(commit)

        self.repo.refs.update_ref(HEAD, RefValue(symbolic=False, value=oid), deref=True)
        logger.info("committed %s (tree %s, parents %s)", oid, tree_hash, parents or 'none')
        return oid

    def iter_commits(self, oids: Iterable[str]) -> Iterator[Tuple[str, Commit]]:
        """
        Walk every commit reachable from the given OIDs.

        Each commit is yielded at most once, so shared ancestry (several
        starting points, or diamond shapes) terminates without duplicates.
        A commit's first parent is visited next; further parents are queued
        behind what is already waiting.

        Args:
            oids: Starting commit OIDs

        Yields:
            (oid, Commit) tuples
        """
        queue = deque(oids)
        visited = set()

        while queue:
            oid = queue.popleft()
            if not oid or oid in visited:
                continue
            visited.add(oid)

            commit = self.repo.read_commit(oid)
            yield oid, commit

            if commit.parents:
                queue.appendleft(commit.parents[0])
                queue.extend(commit.parents[1:])

    def log(self, start: Optional[str] = None) -> Iterator[Tuple[str, Commit]]:
        """
        History starting from a name or OID (defaults to HEAD).

        Raises:
            NameNotFound: If start cannot be resolved (including an unborn HEAD)
        """
        oid = self.repo.refs.get_oid(start or HEAD)
        return self.iter_commits([oid])

    def decorations(self) -> Dict[str, List[str]]:
        """
        Map commit OIDs to the refs pointing at them.

        Returns:
            Dict of OID -> list of ref names (HEAD first)
        """
        refs = defaultdict(list)
        for name, value in self.repo.refs.iter_refs():
            refs[value.value].append(name)
        return dict(refs)
