"""Unit tests for the content-addressed object store."""

import pytest
from ugit.core.errors import CorruptObject, ObjectNotFound, WrongObjectKind
from ugit.core.hash import frame, hash_object
from ugit.core.store import ObjectStore


def test_put_returns_framed_hash(repo):
    """Test OID is computed over kind, size and content."""
    oid = repo.objects.put('blob', b'hello')
    assert oid == hash_object(b'blob 5\0hello')


def test_put_layout(repo):
    """Test objects fan out by the first two OID characters."""
    oid = repo.objects.put('blob', b'layout')
    path = repo.objects_dir / oid[:2] / oid[2:]
    assert path.is_file()
    assert path.read_bytes() == frame('blob', b'layout')


def test_put_idempotent(repo):
    """Test storing the same content twice yields one object."""
    first = repo.objects.put('blob', b'again')
    second = repo.objects.put('blob', b'again')
    assert first == second
    assert list(repo.objects.iter_oids()).count(first) == 1


def test_same_bytes_different_kind(repo):
    """Test kind is part of the identity."""
    assert repo.objects.put('blob', b'') != repo.objects.put('tree', b'')


def test_put_unknown_kind(repo):
    """Test unknown kinds are refused."""
    with pytest.raises(ValueError):
        repo.objects.put('tag', b'x')


def test_put_leaves_no_temp_files(repo):
    """Test atomic writes clean up after themselves."""
    oid = repo.objects.put('blob', b'tidy')
    names = [p.name for p in (repo.objects_dir / oid[:2]).iterdir()]
    assert names == [oid[2:]]


def test_get_roundtrip(repo):
    """Test get returns kind and exact content."""
    oid = repo.objects.put('commit', b'payload\x00\xff')
    assert repo.objects.get(oid) == ('commit', b'payload\x00\xff')


def test_get_missing(repo):
    """Test reading an unknown OID."""
    missing = 'f' * 64
    with pytest.raises(ObjectNotFound) as exc_info:
        repo.objects.get(missing)
    assert exc_info.value.oid == missing


def _plant(repo, oid, content):
    path = repo.objects.object_path(oid)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


def test_get_size_mismatch(repo):
    """Test a frame whose size disagrees with its content."""
    oid = 'a' * 64
    _plant(repo, oid, b'blob 10\0short')
    with pytest.raises(CorruptObject, match="size mismatch"):
        repo.objects.get(oid)


def test_get_no_header(repo):
    """Test a file without a NUL-terminated header."""
    oid = 'b' * 64
    _plant(repo, oid, b'garbage')
    with pytest.raises(CorruptObject):
        repo.objects.get(oid)


def test_get_unknown_kind(repo):
    """Test a frame with an unknown kind."""
    oid = 'c' * 64
    _plant(repo, oid, b'tag 1\0x')
    with pytest.raises(CorruptObject, match="Unknown object type"):
        repo.objects.get(oid)


def test_read_header(repo):
    """Test header reading reports kind and size."""
    oid = repo.objects.put('blob', b'x' * 1000)
    assert repo.objects.read_header(oid) == ('blob', 1000)


def test_contains(repo):
    """Test membership checks."""
    oid = repo.objects.put('blob', b'present')
    assert repo.objects.contains(oid)
    assert not repo.objects.contains('0' * 64)
    assert repo.object_exists(oid)


def test_find_prefix(repo):
    """Test prefix lookup of stored OIDs."""
    oid = repo.objects.put('blob', b'prefix me')
    assert repo.objects.find_prefix(oid[:8]) == [oid]
    assert repo.objects.find_prefix(oid[:1]) == sorted(
        o for o in repo.objects.iter_oids() if o.startswith(oid[:1])
    )
    assert repo.objects.find_prefix('zz') == []


def test_find_prefix_collision(repo, colliding_blobs):
    """Test every OID sharing a prefix is returned, sorted."""
    prefix, oids = colliding_blobs
    assert repo.objects.find_prefix(prefix) == oids


def test_store_on_empty_directory(tmp_path):
    """Test a store over a directory that does not exist yet."""
    store = ObjectStore(tmp_path / 'objects')
    assert list(store.iter_oids()) == []
    oid = store.put('blob', b'fresh')
    assert store.get(oid) == ('blob', b'fresh')


def test_read_object_expected_kind(repo):
    """Test typed reads reject other kinds."""
    oid = repo.write_blob(b'not a tree')
    with pytest.raises(WrongObjectKind) as exc_info:
        repo.read_tree(oid)
    assert exc_info.value.expected == 'tree'
    assert exc_info.value.actual == 'blob'
