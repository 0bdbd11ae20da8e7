"""Blob storage tests."""

import pytest
import tempfile
from pathlib import Path
from ugit.core.hash import frame, hash_object
from ugit.core.objects import Blob


def test_blob_creation():
    """Test blob creation with data."""
    blob = Blob(b'hello world')
    assert blob.data == b'hello world'
    assert blob.type == 'blob'


def test_blob_serialize():
    """Test blob serialization."""
    blob = Blob(b'test data')
    assert blob.serialize() == b'test data'


def test_blob_roundtrip():
    """Test blob serialize/deserialize cycle."""
    blob1 = Blob(b'test content')
    blob2 = Blob()
    blob2.deserialize(blob1.serialize())
    assert blob2.data == b'test content'


def test_blob_hash_covers_kind():
    """Test blob hash is taken over the framed content, not the raw bytes."""
    blob = Blob(b'hello')
    assert blob.hash == hash_object(frame('blob', b'hello'))
    assert blob.hash != hash_object(b'hello')


def test_blob_hash_deterministic():
    """Test blob hash determinism."""
    assert Blob(b'same data').hash == Blob(b'same data').hash


def test_empty_blob():
    """Test blob with no content."""
    blob = Blob()
    assert blob.data == b''
    assert len(blob.hash) == 64


def test_blob_from_file():
    """Test blob creation from file."""
    with tempfile.NamedTemporaryFile(mode='wb', delete=False) as f:
        f.write(b'file content\x00\xff')
        temp_path = f.name

    try:
        blob = Blob.from_file(temp_path)
        assert blob.data == b'file content\x00\xff'
    finally:
        Path(temp_path).unlink()
