"""Repository management for ugit."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .errors import RepositoryExists, RepositoryNotFound, WrongObjectKind
from .objects import Blob, Commit, EntryLike, OBJECT_TYPES, Tree, TreeEntry, UgitObject, UGIT_DIR
from .store import ObjectStore

logger = logging.getLogger(__name__)


class Repository:
    """
    Represents a ugit repository.

    A repository manages the .ugit directory structure and is the handle every
    component is built from. It provides methods for reading and writing
    objects; refs, configuration and the higher level engines hang off it as
    lazily created properties.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.ugit_dir = self.work_tree / UGIT_DIR
        self.objects_dir = self.ugit_dir / 'objects'
        self.refs_dir = self.ugit_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.tags_dir = self.refs_dir / 'tags'
        self.head_file = self.ugit_dir / 'HEAD'
        self.config_file = self.ugit_dir / 'config'

        # Lazy loading to avoid circular imports
        self._objects = None
        self._ref_manager = None
        self._config = None
        self._history = None
        self._snapshot = None
        self._checkout = None

    @property
    def objects(self) -> ObjectStore:
        """Get ObjectStore instance."""
        if self._objects is None:
            self._objects = ObjectStore(self.objects_dir)
        return self._objects

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def config(self):
        """Get Config instance."""
        if self._config is None:
            from .config import get_config
            self._config = get_config(self)
        return self._config

    @property
    def history(self):
        """Get CommitGraph instance."""
        if self._history is None:
            from ugit.operations.history import CommitGraph
            self._history = CommitGraph(self)
        return self._history

    @property
    def snapshot(self):
        """Get TreeBuilder instance."""
        if self._snapshot is None:
            from ugit.operations.snapshot import TreeBuilder
            self._snapshot = TreeBuilder(self)
        return self._snapshot

    @property
    def checkout(self):
        """Get CheckoutEngine instance."""
        if self._checkout is None:
            from ugit.operations.checkout import CheckoutEngine
            self._checkout = CheckoutEngine(self)
        return self._checkout

    def init(self, default_branch: Optional[str] = None) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .ugit directory structure:
        .ugit/
        ├── objects/       # Object database
        ├── refs/
        │   ├── heads/     # Branch references
        │   └── tags/      # Tag references
        ├── HEAD           # Current branch/commit
        └── config         # Repository configuration

        Args:
            default_branch: Branch HEAD points to; defaults to core.defaultbranch

        Returns:
            Repository: self for method chaining

        Raises:
            RepositoryExists: If repository already exists
        """
        if self.ugit_dir.exists():
            raise RepositoryExists(f"Repository already exists at {self.ugit_dir}")

        if default_branch is None:
            from .config import get_config
            default_branch = get_config().default_branch

        from .refs import validate_ref_name
        validate_ref_name(default_branch)

        self.work_tree.mkdir(parents=True, exist_ok=True)
        self.ugit_dir.mkdir()
        self.objects_dir.mkdir()
        self.refs_dir.mkdir()
        self.heads_dir.mkdir()
        self.tags_dir.mkdir()

        # HEAD starts symbolic at an unborn branch
        self.head_file.write_text(f'ref: refs/heads/{default_branch}\n')

        self.config_file.write_text('[core]\nrepositoryformatversion = 0\n')

        logger.debug("initialized repository at %s on branch %s", self.ugit_dir, default_branch)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a .ugit directory
        or reaches the filesystem root.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / UGIT_DIR).is_dir():
                return cls(str(current))

            if current == current.parent:
                return None

            current = current.parent

    @classmethod
    def discover(cls, path: str = '.') -> 'Repository':
        """Like find_repository, but raises RepositoryNotFound instead of returning None."""
        repo = cls.find_repository(path)
        if repo is None:
            raise RepositoryNotFound(f"Not a ugit repository (or any parent up to /): {Path(path).resolve()}")
        return repo

    def write_object(self, obj: UgitObject) -> str:
        """
        Write object to repository.

        Args:
            obj: ugit object to write

        Returns:
            str: OID of the object
        """
        return self.objects.put(obj.type, obj.serialize())

    def read_object(self, oid: str, expected: Optional[str] = None) -> UgitObject:
        """
        Read object from repository.

        Args:
            oid: Full OID
            expected: Required kind ('blob', 'tree', 'commit'), or None for any

        Returns:
            UgitObject: Deserialized object (Blob, Tree, or Commit)

        Raises:
            ObjectNotFound: If the object is absent
            WrongObjectKind: If the object is not of the expected kind
            CorruptObject: If the content cannot be decoded
        """
        kind, data = self.objects.get(oid)

        if expected is not None and kind != expected:
            raise WrongObjectKind(oid, expected, kind)

        obj = OBJECT_TYPES[kind]()
        obj.deserialize(data)
        return obj

    def object_exists(self, oid: str) -> bool:
        return self.objects.contains(oid)

    def write_blob(self, data: bytes) -> str:
        return self.write_object(Blob(data))

    def write_tree(self, entries: Iterable[EntryLike]) -> str:
        """
        Write a tree from entries given in any order.

        Args:
            entries: TreeEntry objects or (kind, oid, name) tuples

        Returns:
            str: OID of the tree

        Raises:
            InvalidTree: On duplicate or illegal names
        """
        return self.write_object(Tree(entries))

    def write_commit(
        self,
        tree: str,
        parents: Sequence[str],
        message: str,
        timestamp: Optional[int] = None,
        timezone: str = '+0000'
    ) -> str:
        commit = Commit.create(tree, list(parents), message, timestamp=timestamp, timezone=timezone)
        return self.write_object(commit)

    def read_blob(self, oid: str) -> bytes:
        return self.read_object(oid, expected='blob').data

    def read_tree(self, oid: str) -> List[TreeEntry]:
        """Read a tree's entries, sorted by name."""
        return list(self.read_object(oid, expected='tree').entries)

    def read_commit(self, oid: str) -> Commit:
        return self.read_object(oid, expected='commit')

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
