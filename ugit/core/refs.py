"""Reference management for ugit."""

import logging
import shutil
from typing import Iterator, List, NamedTuple, Optional, Tuple, Union

from .errors import (AmbiguousIdentifier, InvalidRefName, NameNotFound,
                     RefAlreadyExists, UgitError)
from .hash import is_hex

logger = logging.getLogger(__name__)

HEAD = 'HEAD'
HEADS_PREFIX = 'refs/heads/'
TAGS_PREFIX = 'refs/tags/'
SYMBOLIC_PREFIX = 'ref: '

INVALID_REF_CHARS = ' \t~^:?*[\\'


class RefValue(NamedTuple):
    """Content of a ref slot: an OID, or the name of another ref when symbolic."""
    symbolic: bool
    value: Optional[str]


class Resolution(NamedTuple):
    """Result of resolving a user-supplied name.

    ``ref`` is the fully qualified ref the OID came from ('HEAD',
    'refs/heads/x', 'refs/tags/x'), or None when it was matched as a hash.
    """
    oid: str
    ref: Optional[str]


def validate_ref_name(name: str) -> None:
    """
    Check a branch or tag name.

    Raises:
        InvalidRefName: If the name cannot be used as a ref
    """
    if not name or name.startswith('-') or name.startswith('/') or name.endswith('/'):
        raise InvalidRefName(f"Invalid ref name: {name!r}")
    if '//' in name or '..' in name or name.endswith('.lock') or name.endswith('.'):
        raise InvalidRefName(f"Invalid ref name: {name!r}")
    if name == HEAD or name == '@':
        raise InvalidRefName(f"'{name}' is reserved")
    for char in INVALID_REF_CHARS:
        if char in name:
            raise InvalidRefName(f"Ref name {name!r} contains {char!r}")
    if any(ord(c) < 32 for c in name):
        raise InvalidRefName(f"Ref name {name!r} contains control characters")


class RefManager:
    """
    Manages references (branches, tags, HEAD).

    Handles:
    - Symbolic references (HEAD pointing to branch)
    - Direct references (detached HEAD, branches, tags)
    - Name resolution: HEAD, ref names, then full or abbreviated hashes

    Symbolic indirection is a single hop: only HEAD may be symbolic, and it
    always names a branch.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.ugit_dir = repo.ugit_dir
        self.refs_dir = repo.refs_dir
        self.heads_dir = repo.heads_dir
        self.tags_dir = repo.tags_dir
        self.head_file = repo.head_file

    def _ref_path(self, name: str):
        if name != HEAD and not name.startswith('refs/'):
            raise ValueError(f"Not a qualified ref name: {name!r}")
        if any(part in ('', '.', '..') for part in name.split('/')):
            raise ValueError(f"Ref name escapes the refs directory: {name!r}")
        return self.ugit_dir / name

    def _read_slot(self, name: str) -> RefValue:
        path = self._ref_path(name)
        if not path.is_file():
            return RefValue(symbolic=False, value=None)

        content = path.read_text().strip()
        if content.startswith(SYMBOLIC_PREFIX):
            return RefValue(symbolic=True, value=content[len(SYMBOLIC_PREFIX):].strip())
        return RefValue(symbolic=False, value=content or None)

    def _get_ref_internal(self, name: str, deref: bool) -> Tuple[str, RefValue]:
        """Return the slot name that holds the value together with the value."""
        value = self._read_slot(name)
        if value.symbolic and deref:
            target = value.value
            # One hop only: the target is read as a plain slot
            target_value = self._read_slot(target)
            if target_value.symbolic:
                raise UgitError(f"Symbolic ref chain {name} -> {target} is not supported")
            return target, target_value
        return name, value

    def get_ref(self, name: str, deref: bool = True) -> RefValue:
        """
        Read a reference.

        Args:
            name: Qualified ref name ('HEAD', 'refs/heads/main', ...)
            deref: Follow HEAD's symbolic link to the branch it names

        Returns:
            RefValue; value is None when the ref (or the branch HEAD names) does not exist
        """
        return self._get_ref_internal(name, deref)[1]

    def update_ref(self, name: str, value: Union[RefValue, str], deref: bool = True) -> None:
        """
        Point a reference at an OID or, for HEAD, at a branch.

        With deref=True and a symbolic HEAD, the branch HEAD names is written
        instead of HEAD itself. deref=False overwrites the slot directly, which
        is how HEAD gets detached.

        Args:
            name: Qualified ref name
            value: RefValue or a bare OID
            deref: Follow symbolic refs before writing
        """
        if isinstance(value, str):
            value = RefValue(symbolic=False, value=value)
        if not value.value:
            raise ValueError(f"Cannot set {name} to an empty value")

        target = self._get_ref_internal(name, deref)[0]

        if value.symbolic:
            if target != HEAD:
                raise ValueError(f"Only HEAD may be a symbolic ref, not {target}")
            if not value.value.startswith(HEADS_PREFIX):
                raise ValueError(f"HEAD may only point at a branch, not {value.value}")
            content = f'{SYMBOLIC_PREFIX}{value.value}\n'
        else:
            content = f'{value.value}\n'

        path = self._ref_path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        logger.debug("updated %s -> %s", target, content.strip())

    def delete_ref(self, name: str, deref: bool = True) -> None:
        """
        Delete a reference.

        Raises:
            NameNotFound: If the ref does not exist
        """
        target = self._get_ref_internal(name, deref)[0]
        path = self._ref_path(target)
        if not path.is_file():
            raise NameNotFound(target)
        path.unlink()
        self._prune_empty_parents(path)
        logger.debug("deleted %s", target)

    def iter_refs(self, prefix: str = '', deref: bool = True) -> Iterator[Tuple[str, RefValue]]:
        """
        Lazily list references.

        Yields HEAD first, then everything under refs/ in sorted order. Refs
        without a value (an unborn HEAD) are skipped.

        Args:
            prefix: Only yield names starting with this prefix
            deref: Resolve HEAD through its symbolic link

        Yields:
            (name, RefValue) tuples
        """
        names = [HEAD]
        if self.refs_dir.exists():
            names.extend(sorted(
                path.relative_to(self.ugit_dir).as_posix()
                for path in self.refs_dir.rglob('*') if path.is_file()
            ))

        for name in names:
            if not name.startswith(prefix):
                continue
            value = self.get_ref(name, deref=deref)
            if value.value:
                yield name, value

    def resolve_head(self) -> Optional[str]:
        """
        Resolve HEAD to a commit hash.

        Returns:
            Commit hash or None if HEAD points at an unborn branch
        """
        return self.get_ref(HEAD).value

    def head_branch(self) -> Optional[str]:
        """
        Get the current branch name.

        Returns:
            Branch name or None if in detached HEAD state
        """
        head = self.get_ref(HEAD, deref=False)
        if head.symbolic and head.value.startswith(HEADS_PREFIX):
            return head.value[len(HEADS_PREFIX):]
        return None

    def is_detached(self) -> bool:
        head = self.get_ref(HEAD, deref=False)
        return head.value is not None and not head.symbolic

    def is_branch(self, name: str) -> bool:
        try:
            return self.get_ref(HEADS_PREFIX + name, deref=False).value is not None
        except ValueError:
            return False

    def resolve(self, name: str) -> Resolution:
        """
        Resolve any name (HEAD, tag, branch, hash or hash prefix) to an OID.

        Order:
        1. '', 'HEAD' or '@' -> HEAD (through its symbolic link)
        2. A qualified 'refs/...' name, then refs/tags/<name>, then refs/heads/<name>
        3. Full hash or unique hash prefix

        A ref name that looks like a hash prefix wins over the hash.

        Raises:
            NameNotFound: If nothing matches
            AmbiguousIdentifier: If a prefix matches several objects
        """
        if name in ('', HEAD, '@'):
            oid = self.resolve_head()
            if not oid:
                raise NameNotFound(HEAD)
            return Resolution(oid=oid, ref=HEAD)

        candidates = [TAGS_PREFIX + name, HEADS_PREFIX + name]
        if name.startswith('refs/'):
            candidates.insert(0, name)

        for ref in candidates:
            try:
                value = self.get_ref(ref, deref=False)
            except ValueError:
                continue
            if value.value and not value.symbolic:
                return Resolution(oid=value.value, ref=ref)

        if is_hex(name):
            matches = self.repo.objects.find_prefix(name.lower())
            if len(matches) == 1:
                return Resolution(oid=matches[0], ref=None)
            if len(matches) > 1:
                raise AmbiguousIdentifier(name, matches)

        raise NameNotFound(name)

    def get_oid(self, name: str) -> str:
        return self.resolve(name).oid

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_hash) tuples
        """
        return [
            (name[len(HEADS_PREFIX):], value.value)
            for name, value in self.iter_refs(HEADS_PREFIX)
        ]

    def list_tags(self) -> List[Tuple[str, str]]:
        """
        List all tags.

        Returns:
            List of (tag_name, commit_hash) tuples
        """
        return [
            (name[len(TAGS_PREFIX):], value.value)
            for name, value in self.iter_refs(TAGS_PREFIX)
        ]

    def _check_namespace(self, ref: str) -> None:
        """
        Make sure ref can become a file: neither it, nor any ref above it, nor
        any ref below it may exist. Leftover empty directories are removed.

        Raises:
            RefAlreadyExists: Naming the ref that occupies the slot
        """
        path = self._ref_path(ref)
        if path.is_file():
            raise RefAlreadyExists(ref)

        parts = ref.split('/')
        # parts[:2] is the namespace itself (refs/heads, refs/tags)
        for i in range(3, len(parts)):
            ancestor = '/'.join(parts[:i])
            if self._ref_path(ancestor).is_file():
                raise RefAlreadyExists(ref, conflict=ancestor)

        if path.is_dir():
            descendants = sorted(p for p in path.rglob('*') if p.is_file())
            if descendants:
                conflict = descendants[0].relative_to(self.ugit_dir).as_posix()
                raise RefAlreadyExists(ref, conflict=conflict)
            shutil.rmtree(path)

    def _prune_empty_parents(self, path) -> None:
        stop = {self.refs_dir, self.heads_dir, self.tags_dir}
        parent = path.parent
        while parent not in stop and self.refs_dir in parent.parents and not any(parent.iterdir()):
            parent.rmdir()
            parent = parent.parent

    def _create(self, ref: str, short_name: str, commit_hash: str) -> None:
        validate_ref_name(short_name)
        self._check_namespace(ref)
        self.repo.read_commit(commit_hash)
        self.update_ref(ref, RefValue(symbolic=False, value=commit_hash), deref=False)

    def create_branch(self, branch_name: str, commit_hash: str) -> None:
        """
        Create a new branch.

        Raises:
            RefAlreadyExists: If the branch exists
            InvalidRefName: If the name is not a legal ref name
        """
        self._create(HEADS_PREFIX + branch_name, branch_name, commit_hash)

    def create_tag(self, tag_name: str, commit_hash: str) -> None:
        """
        Create a new tag. Tags are never moved once created.

        Raises:
            RefAlreadyExists: If the tag exists
            InvalidRefName: If the name is not a legal ref name
        """
        self._create(TAGS_PREFIX + tag_name, tag_name, commit_hash)

    def delete_branch(self, branch_name: str) -> None:
        """
        Delete a branch.

        Raises:
            UgitError: If the branch is checked out
            NameNotFound: If the branch does not exist
        """
        if self.head_branch() == branch_name:
            raise UgitError(f"Cannot delete branch '{branch_name}': it is checked out")
        self.delete_ref(HEADS_PREFIX + branch_name, deref=False)

    def delete_tag(self, tag_name: str) -> None:
        self.delete_ref(TAGS_PREFIX + tag_name, deref=False)
