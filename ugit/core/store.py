"""Content-addressed object storage for ugit."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterator, List, Tuple

from .errors import CorruptObject, ObjectNotFound
from .hash import frame, hash_object

logger = logging.getLogger(__name__)

OBJECT_KINDS = ('blob', 'tree', 'commit')


class ObjectStore:
    """
    Append-only store of framed objects keyed by their hash.

    Objects are stored in subdirectories named by the first 2 characters
    of the OID, with the remaining characters as the filename.
    Example: ab/cdef0123... for OID abcdef0123...

    There is no update or delete: once an OID is present its bytes never change.
    """

    def __init__(self, objects_dir: Path):
        """
        Initialize object store.

        Args:
            objects_dir: Directory holding the object fan-out
        """
        self.objects_dir = Path(objects_dir)

    def object_path(self, oid: str) -> Path:
        """Get filesystem path for an object."""
        return self.objects_dir / oid[:2] / oid[2:]

    def put(self, kind: str, data: bytes) -> str:
        """
        Store an object and return its OID.

        The OID is computed over '<kind> <size>\\0<data>'. Writing content that
        is already present is a no-op.

        Args:
            kind: Object kind ('blob', 'tree' or 'commit')
            data: Serialized object content

        Returns:
            str: 64-character OID
        """
        if kind not in OBJECT_KINDS:
            raise ValueError(f"Unknown object kind: {kind}")

        content = frame(kind, data)
        oid = hash_object(content)
        path = self.object_path(oid)

        if path.exists():
            return oid

        path.parent.mkdir(parents=True, exist_ok=True)
        # Write beside the target then rename, so readers never see a partial object
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix='.tmp-')
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug("wrote %s %s (%d bytes)", kind, oid, len(data))
        return oid

    def get(self, oid: str) -> Tuple[str, bytes]:
        """
        Read an object.

        Args:
            oid: Full OID

        Returns:
            Tuple of (kind, content)

        Raises:
            ObjectNotFound: If the OID is unknown
            CorruptObject: If the stored frame is malformed
        """
        content = self._existing_path(oid).read_bytes()
        kind, size, offset = self._parse_header(oid, content)
        data = content[offset:]

        if len(data) != size:
            raise CorruptObject(f"Object {oid} size mismatch: expected {size}, got {len(data)}")

        return kind, data

    def read_header(self, oid: str) -> Tuple[str, int]:
        """
        Read only an object's kind and size, without loading its content.

        Returns:
            Tuple of (kind, size)
        """
        with open(self._existing_path(oid), 'rb') as f:
            head = f.read(64)
        kind, size, _ = self._parse_header(oid, head)
        return kind, size

    def _existing_path(self, oid: str) -> Path:
        if len(oid) < 3:
            raise ObjectNotFound(oid)
        path = self.object_path(oid)
        if not path.is_file():
            raise ObjectNotFound(oid)
        return path

    @staticmethod
    def _parse_header(oid: str, content: bytes) -> Tuple[str, int, int]:
        null_idx = content.find(b'\0')
        if null_idx < 0:
            raise CorruptObject(f"Object {oid} has no header")

        header = content[:null_idx]
        try:
            kind, size_str = header.decode('ascii').split(' ', 1)
            size = int(size_str)
        except (UnicodeDecodeError, ValueError):
            raise CorruptObject(f"Invalid object header in {oid}: {header!r}")

        if kind not in OBJECT_KINDS:
            raise CorruptObject(f"Unknown object type in {oid}: {kind}")

        return kind, size, null_idx + 1

    def contains(self, oid: str) -> bool:
        """Check if object exists in store."""
        return len(oid) > 2 and self.object_path(oid).is_file()

    def iter_oids(self) -> Iterator[str]:
        """Yield every stored OID."""
        if not self.objects_dir.exists():
            return
        for subdir in self.objects_dir.iterdir():
            if not (subdir.is_dir() and len(subdir.name) == 2):
                continue
            for obj_file in subdir.iterdir():
                if obj_file.name.startswith('.tmp-'):
                    continue
                yield subdir.name + obj_file.name

    def find_prefix(self, prefix: str) -> List[str]:
        """
        Find all stored OIDs starting with a prefix.

        Args:
            prefix: Lowercase hex prefix

        Returns:
            Sorted list of matching OIDs
        """
        if len(prefix) >= 2:
            subdir = self.objects_dir / prefix[:2]
            if not subdir.is_dir():
                return []
            candidates = (prefix[:2] + f.name for f in subdir.iterdir()
                          if not f.name.startswith('.tmp-'))
        else:
            candidates = self.iter_oids()
        return sorted(oid for oid in candidates if oid.startswith(prefix))
