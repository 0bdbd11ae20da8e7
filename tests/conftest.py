"""Shared pytest fixtures for ugit tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from ugit.core.repository import Repository
from ugit.core.objects import Blob, Tree, Commit


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path_factory):
    """Keep ~/.ugitconfig and UGIT_* variables from leaking into tests."""
    from ugit.core.config import Config
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.ugitconfig')
    for key in ('UGIT_CORE_DEFAULTBRANCH', 'UGIT_CORE_SYMLINKS'):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")


@pytest.fixture
def sample_tree(repo, sample_blob):
    """Create a sample tree with one blob."""
    blob_hash = repo.write_object(sample_blob)
    tree = Tree()
    tree.add_entry('blob', blob_hash, 'test.txt')
    return tree


@pytest.fixture
def sample_commit(sample_tree, repo):
    """Sample commit object."""
    tree_hash = repo.write_object(sample_tree)
    return Commit.create(
        tree_hash=tree_hash,
        parent_hashes=[],
        message="Test commit",
        timestamp=1698660000
    )


@pytest.fixture
def working_files(repo):
    """Create sample file structure in repository."""
    file1 = repo.work_tree / "test1.txt"
    file2 = repo.work_tree / "test2.txt"

    (repo.work_tree / "subdir").mkdir()
    file3 = repo.work_tree / "subdir" / "test3.txt"

    file1.write_text("Content 1")
    file2.write_text("Content 2")
    file3.write_text("Content 3")

    return {
        'file1': file1,
        'file2': file2,
        'file3': file3
    }


@pytest.fixture
def repo_with_commits(repo, working_files):
    """
    Repository on master with two commits.

    The first commit holds working_files; the second adds file4.txt.
    Returns (repo, [first_hash, second_hash]).
    """
    first = repo.history.create_commit("First commit", timestamp=1698660000)

    (repo.work_tree / "file4.txt").write_text("Content 4")
    second = repo.history.create_commit("Second commit", timestamp=1698660100)

    return repo, [first, second]


@pytest.fixture
def files_in():
    """Return a function mapping every file outside .ugit to its bytes."""
    def _files_in(work_tree: Path) -> dict:
        return {
            path.relative_to(work_tree).as_posix(): path.read_bytes()
            for path in work_tree.rglob('*')
            if path.is_file() and '.ugit' not in path.relative_to(work_tree).parts
        }
    return _files_in


@pytest.fixture
def colliding_blobs(repo):
    """
    Write blobs into a fresh repository until two OIDs share a 2-character prefix.

    Returns:
        (shared_prefix, [oid_a, oid_b]); no other object has that prefix
    """
    seen = {}
    for i in range(5000):
        oid = repo.write_blob(f"collision candidate {i}".encode())
        prefix = oid[:2]
        if prefix in seen and seen[prefix] != oid:
            return prefix, sorted([seen[prefix], oid])
        seen[prefix] = oid
    raise AssertionError("no prefix collision found")
