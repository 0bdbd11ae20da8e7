"""Object model for ugit."""

import time
from bisect import insort
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .errors import CorruptObject, InvalidTree
from .hash import frame, hash_object, is_hex, OID_LENGTH

ENTRY_KINDS = ('blob', 'tree')
UGIT_DIR = '.ugit'


class UgitObject(ABC):
    """Base class for all ugit objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to bytes.

        Returns:
            bytes: Serialized object data
        """

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object from bytes.

        Args:
            data: Serialized object data
        """

    @property
    def type(self) -> str:
        """Object type name (blob, tree, commit)."""
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        Objects are hashed with a header containing the type and size.
        Format: <type> <size>\\0<content>

        Returns:
            str: 64-character SHA-256 hash
        """
        if self._hash is None:
            self._hash = hash_object(frame(self.type, self.serialize()))
        return self._hash

    @property
    def hash(self) -> str:
        return self.compute_hash()


class Blob(UgitObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    @classmethod
    def from_file(cls, filepath) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


def validate_entry_name(name: str) -> None:
    """
    Check that a name can live inside a tree.

    Raises:
        InvalidTree: If the name is empty, '.', '..', '.ugit', contains '/', NUL or
            newline, or cannot be encoded as UTF-8
    """
    if not name or name in ('.', '..', UGIT_DIR):
        raise InvalidTree(f"Invalid tree entry name: {name!r}")
    for char in ('/', '\0', '\n'):
        if char in name:
            raise InvalidTree(f"Tree entry name {name!r} contains {char!r}")
    try:
        name.encode()
    except UnicodeEncodeError:
        raise InvalidTree(f"Tree entry name {name!r} is not valid UTF-8")


def _check_entry(obj_type: str, name: str) -> None:
    if obj_type not in ENTRY_KINDS:
        raise InvalidTree(f"Unknown tree entry kind {obj_type!r} for {name!r}")
    validate_entry_name(name)


class TreeEntry:
    """
    Represents a single entry in a tree.

    Each entry contains:
    - type: Object type ('blob' or 'tree')
    - hash: OID of the object
    - name: Filename or directory name
    """

    __slots__ = ('type', 'hash', 'name')

    def __init__(self, obj_type: str, obj_hash: str, name: str):
        self.type = obj_type
        self.hash = obj_hash
        self.name = name

    def as_tuple(self) -> Tuple[str, str, str]:
        return (self.type, self.hash, self.name)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __lt__(self, other: 'TreeEntry') -> bool:
        """Sort entries by name for consistent ordering."""
        return self.name < other.name

    def __repr__(self) -> str:
        return f"TreeEntry({self.type} {self.hash[:7]} {self.name})"


EntryLike = Union[TreeEntry, Tuple[str, str, str]]


class Tree(UgitObject):
    """
    Represents directory structure.

    A tree contains entries pointing to blobs (files) and other trees
    (subdirectories). Entries are kept sorted by name and names are unique,
    so two trees with the same entry set always hash identically.
    """

    def __init__(self, entries: Optional[Iterable[EntryLike]] = None):
        super().__init__()
        by_name: Dict[str, TreeEntry] = {}
        for entry in entries or ():
            if not isinstance(entry, TreeEntry):
                entry = TreeEntry(*entry)
            _check_entry(entry.type, entry.name)
            if entry.name in by_name:
                raise InvalidTree(f"Duplicate tree entry name: {entry.name!r}")
            by_name[entry.name] = entry

        self.entries: List[TreeEntry] = sorted(by_name.values())
        self._names = set(by_name)

    def add_entry(self, obj_type: str, obj_hash: str, name: str) -> None:
        """
        Add entry to tree.

        Args:
            obj_type: Object type ('blob' or 'tree')
            obj_hash: Object hash
            name: Entry name

        Raises:
            InvalidTree: On an unknown kind, a bad name, or a duplicate name
        """
        _check_entry(obj_type, name)
        if name in self._names:
            raise InvalidTree(f"Duplicate tree entry name: {name!r}")

        insort(self.entries, TreeEntry(obj_type, obj_hash, name))
        self._names.add(name)
        self._hash = None

    def serialize(self) -> bytes:
        """
        Serialize tree to ugit format.

        Format: one '<type> <hash> <name>\\n' line per entry, sorted by name.
        """
        return ''.join(
            f"{entry.type} {entry.hash} {entry.name}\n" for entry in self.entries
        ).encode()

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize tree from ugit format.

        Raises:
            CorruptObject: If a line cannot be parsed or entries are not canonical
        """
        entries: List[TreeEntry] = []
        try:
            text = data.decode()
        except UnicodeDecodeError:
            raise CorruptObject("Tree data is not valid UTF-8")

        if text and not text.endswith('\n'):
            raise CorruptObject("Tree data is truncated")

        previous = None
        for line in text.split('\n')[:-1]:
            parts = line.split(' ', 2)
            if len(parts) != 3:
                raise CorruptObject(f"Malformed tree entry: {line!r}")
            obj_type, obj_hash, name = parts
            if len(obj_hash) != OID_LENGTH or not is_hex(obj_hash):
                raise CorruptObject(f"Malformed hash in tree entry: {line!r}")
            # Strictly increasing names also rule out duplicates
            if previous is not None and name <= previous:
                raise CorruptObject(f"Tree entries out of order at {name!r}")
            try:
                _check_entry(obj_type, name)
            except InvalidTree as e:
                raise CorruptObject(str(e))
            entries.append(TreeEntry(obj_type, obj_hash, name))
            previous = name

        self.entries = entries
        self._names = {entry.name for entry in entries}
        self._hash = None

    def get(self, name: str) -> Optional[TreeEntry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"


class Commit(UgitObject):
    """
    Represents a commit.

    A commit captures:
    - Snapshot of project (tree hash)
    - Parent commit(s) for history
    - Timestamp
    - Commit message
    """

    def __init__(self):
        super().__init__()
        self.tree: str = ''
        self.parents: List[str] = []
        self.timestamp: int = 0
        self.timezone: str = '+0000'
        self.message: str = ''

    def serialize(self) -> bytes:
        """
        Serialize commit to ugit format.

        Format:
        tree <tree-hash>
        parent <parent-hash>  (zero or more)
        timestamp <seconds> <timezone>

        <commit message>
        """
        lines = [f'tree {self.tree}']
        for parent in self.parents:
            lines.append(f'parent {parent}')
        lines.append(f'timestamp {self.timestamp} {self.timezone}')
        lines.append('')
        lines.append(self.message)
        return '\n'.join(lines).encode()

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize commit from ugit format.

        Raises:
            CorruptObject: On unknown header fields or a missing tree
        """
        try:
            content = data.decode()
        except UnicodeDecodeError:
            raise CorruptObject("Commit data is not valid UTF-8")

        header, sep, message = content.partition('\n\n')
        if not sep:
            raise CorruptObject("Commit has no message separator")

        tree = None
        parents = []
        timestamp = 0
        timezone = '+0000'
        for line in header.split('\n'):
            key, _, value = line.partition(' ')
            if key == 'tree':
                tree = value
            elif key == 'parent':
                parents.append(value)
            elif key == 'timestamp':
                try:
                    seconds, timezone = value.split(' ', 1)
                    timestamp = int(seconds)
                except ValueError:
                    raise CorruptObject(f"Malformed commit timestamp: {value!r}")
            else:
                raise CorruptObject(f"Unknown commit field: {key!r}")

        if not tree:
            raise CorruptObject("Commit has no tree")

        self.tree = tree
        self.parents = parents
        self.timestamp = timestamp
        self.timezone = timezone
        self.message = message
        self._hash = None

    @classmethod
    def create(
        cls,
        tree_hash: str,
        parent_hashes: List[str],
        message: str,
        timestamp: Optional[int] = None,
        timezone: str = '+0000'
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            tree_hash: Hash of tree object
            parent_hashes: List of parent commit hashes
            message: Commit message
            timestamp: Unix timestamp (defaults to current time)
            timezone: Timezone offset (e.g., "+0000", "-0500")

        Returns:
            Commit: New commit object
        """
        commit = cls()
        commit.tree = tree_hash
        commit.parents = list(parent_hashes)
        commit.message = message
        commit.timestamp = int(time.time()) if timestamp is None else timestamp
        commit.timezone = timezone
        return commit

    @property
    def summary(self) -> str:
        """First line of the message."""
        return self.message.split('\n')[0]

    def __repr__(self) -> str:
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{self.summary[:50]}')"


OBJECT_TYPES = {
    'blob': Blob,
    'tree': Tree,
    'commit': Commit,
}
