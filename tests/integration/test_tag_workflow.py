"""Integration tests for tag workflow."""

import pytest
from click.testing import CliRunner
from ugit.cli.main import cli


def test_tag_survives_branch_movement(repo_with_commits):
    """Test a tag keeps pointing at its commit while the branch advances."""
    repo, (first, second) = repo_with_commits
    repo.checkout.tag('v1', second)

    (repo.work_tree / 'later.txt').write_text("later")
    third = repo.history.create_commit("Third commit", timestamp=1698660200)

    assert repo.refs.resolve('master').oid == third
    assert repo.refs.resolve('v1').oid == second


class TestTagCommand:
    """Tests for ugit tag command."""

    def test_create_tag_at_head(self, repo_with_commits, monkeypatch):
        """Test tagging HEAD."""
        repo, (_, second) = repo_with_commits
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['tag', 'v1.0'])

        assert result.exit_code == 0
        assert "Created tag 'v1.0'" in result.output
        assert (repo.tags_dir / 'v1.0').read_text() == second + '\n'

    def test_create_tag_at_commit(self, repo_with_commits, monkeypatch):
        """Test tagging a specific commit."""
        repo, (first, _) = repo_with_commits
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['tag', 'v0.9', first[:10]])

        assert result.exit_code == 0
        assert repo.refs.resolve('v0.9').oid == first

    def test_list_tags(self, repo_with_commits, monkeypatch):
        """Test listing tags with their commit summaries."""
        repo, (first, second) = repo_with_commits
        repo.refs.create_tag('v1', first)
        repo.refs.create_tag('v2', second)
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['tag'])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0].split() == ['v1', first[:10], 'First', 'commit']
        assert lines[1].split() == ['v2', second[:10], 'Second', 'commit']

    def test_list_no_tags(self, repo_with_commits, monkeypatch):
        """Test listing when there are no tags."""
        repo, _ = repo_with_commits
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['tag'])

        assert 'No tags found' in result.output

    def test_duplicate_tag(self, repo_with_commits, monkeypatch):
        """Test a tag cannot be moved."""
        repo, (first, _) = repo_with_commits
        repo.refs.create_tag('v1', first)
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['tag', 'v1'])

        assert result.exit_code != 0
        assert "Ref 'refs/tags/v1' already exists" in result.output
        assert repo.refs.resolve('v1').oid == first

    def test_delete_tag(self, repo_with_commits, monkeypatch):
        """Test deleting a tag."""
        repo, (first, _) = repo_with_commits
        repo.refs.create_tag('v1', first)
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['tag', '-d', 'v1'])

        assert result.exit_code == 0
        assert repo.refs.list_tags() == []

    def test_tag_unborn_head(self, repo, monkeypatch):
        """Test tagging before the first commit."""
        monkeypatch.chdir(repo.work_tree)
        result = CliRunner().invoke(cli, ['tag', 'v1'])

        assert result.exit_code != 0
        assert 'Unknown revision' in result.output
