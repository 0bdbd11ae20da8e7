"""Integration tests for checkout and read-tree."""

import pytest
from click.testing import CliRunner
from ugit.cli.main import cli


def test_checkout_discards_uncommitted_changes(repo_with_commits, files_in):
    """Test checkout replaces the work tree without asking."""
    repo, (first, _) = repo_with_commits
    (repo.work_tree / 'test1.txt').write_text("edited")
    (repo.work_tree / 'scratch.txt').write_text("untracked")

    repo.checkout.checkout('master')

    files = files_in(repo.work_tree)
    assert files['test1.txt'] == b'Content 1'
    assert 'scratch.txt' not in files


def test_checkout_round_trip(repo_with_commits, files_in):
    """Test moving between commits reproduces each snapshot exactly."""
    repo, (first, second) = repo_with_commits
    at_second = files_in(repo.work_tree)

    repo.checkout.checkout(first)
    at_first = files_in(repo.work_tree)
    repo.checkout.checkout(second)

    assert 'file4.txt' not in at_first
    assert files_in(repo.work_tree) == at_second


class TestCheckoutCommand:
    """Tests for ugit checkout command."""

    def test_checkout_branch(self, repo_with_commits, monkeypatch):
        """Test switching to a branch."""
        repo, (first, _) = repo_with_commits
        repo.refs.create_branch('feature', first)
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['checkout', 'feature'])

        assert result.exit_code == 0
        assert "Switched to branch 'feature'" in result.output
        assert repo.refs.head_branch() == 'feature'

    def test_checkout_commit(self, repo_with_commits, monkeypatch):
        """Test detaching HEAD at a commit prefix."""
        repo, (first, _) = repo_with_commits
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['checkout', first[:10]])

        assert result.exit_code == 0
        assert f'HEAD is now at {first[:10]} (detached HEAD)' in result.output
        assert repo.refs.is_detached()

    def test_checkout_head(self, repo_with_commits, monkeypatch):
        """Test checking out HEAD restores files and keeps the branch."""
        repo, (_, second) = repo_with_commits
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['checkout', 'HEAD'])

        assert result.exit_code == 0
        assert f'Restored working directory to {second[:10]}' in result.output
        assert repo.refs.head_branch() == 'master'

    def test_checkout_unknown(self, repo_with_commits, monkeypatch):
        """Test an unknown target fails and leaves files alone."""
        repo, _ = repo_with_commits
        (repo.work_tree / 'keep.txt').write_text("keep")
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['checkout', 'nowhere'])

        assert result.exit_code != 0
        assert 'Checkout failed' in result.output
        assert (repo.work_tree / 'keep.txt').exists()

    def test_checkout_ambiguous(self, repo, colliding_blobs, monkeypatch):
        """Test an ambiguous prefix lists the candidates."""
        prefix, oids = colliding_blobs
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['checkout', prefix])

        assert result.exit_code != 0
        assert 'ambiguous' in result.output
        for oid in oids:
            assert oid in result.output


class TestReadTreeCommand:
    """Tests for ugit read-tree command."""

    def test_read_tree_from_commit(self, repo_with_commits, files_in, monkeypatch):
        """Test read-tree accepts a commit and uses its tree."""
        repo, (first, _) = repo_with_commits
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['read-tree', first])

        assert result.exit_code == 0
        assert 'Wrote 3 file(s)' in result.output
        assert 'file4.txt' not in files_in(repo.work_tree)
        assert repo.refs.head_branch() == 'master'

    def test_read_tree_from_tree(self, repo_with_commits, files_in, monkeypatch):
        """Test read-tree with a tree OID."""
        repo, (first, _) = repo_with_commits
        tree = repo.read_commit(first).tree
        (repo.work_tree / 'extra.txt').write_text("x")
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['read-tree', tree])

        assert result.exit_code == 0
        assert f'Read tree {tree[:10]}' in result.output
        assert 'extra.txt' not in files_in(repo.work_tree)
