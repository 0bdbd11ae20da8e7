"""Integration tests for config command."""

import pytest
from click.testing import CliRunner
from ugit.cli.main import cli
from ugit.core.config import Config


class TestConfigCommand:
    """Tests for ugit config command."""

    def test_config_set_local(self, repo, monkeypatch):
        """Test setting a local config value."""
        monkeypatch.chdir(repo.work_tree)
        runner = CliRunner()

        result = runner.invoke(cli, ['config', 'set', 'user.name', 'Test User'])
        assert result.exit_code == 0
        assert 'Set user.name = Test User' in result.output

        result = runner.invoke(cli, ['config', 'get', 'user.name'])
        assert result.output.strip() == 'Test User'
        assert 'Test User' in repo.config_file.read_text()

    def test_config_set_global(self, tmp_path, monkeypatch):
        """Test --global works outside a repository."""
        monkeypatch.chdir(tmp_path)

        result = CliRunner().invoke(cli, ['config', 'set', '--global', 'core.defaultbranch', 'main'])

        assert result.exit_code == 0
        assert 'defaultbranch = main' in Config.GLOBAL_CONFIG_PATH.read_text()

    def test_config_set_outside_repository(self, tmp_path, monkeypatch):
        """Test local writes need a repository."""
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ['config', 'set', 'user.name', 'x'])

        assert result.exit_code != 0
        assert 'Not a ugit repository' in result.output

    def test_config_get_nonexistent(self, repo, monkeypatch):
        """Test getting a missing value exits non-zero without output."""
        monkeypatch.chdir(repo.work_tree)
        result = CliRunner().invoke(cli, ['config', 'get', 'nonexistent.key'])

        assert result.exit_code == 1
        assert result.output == ''

    def test_config_get_from_environment(self, repo, monkeypatch):
        """Test environment variables win."""
        monkeypatch.chdir(repo.work_tree)
        monkeypatch.setenv('UGIT_CORE_SYMLINKS', 'error')

        result = CliRunner().invoke(cli, ['config', 'get', 'core.symlinks'])

        assert result.output.strip() == 'error'

    def test_config_invalid_key(self, repo, monkeypatch):
        """Test keys need a section."""
        monkeypatch.chdir(repo.work_tree)
        result = CliRunner().invoke(cli, ['config', 'get', 'nosection'])

        assert result.exit_code != 0
        assert 'expected section.key' in result.output

    def test_config_list(self, repo, monkeypatch):
        """Test listing merged values."""
        monkeypatch.chdir(repo.work_tree)
        runner = CliRunner()
        runner.invoke(cli, ['config', 'set', 'user.name', 'Lister'])

        result = runner.invoke(cli, ['config', 'list'])

        assert 'core.repositoryformatversion=0' in result.output
        assert 'user.name=Lister' in result.output

    def test_default_branch_used_by_init(self, tmp_path, monkeypatch):
        """Test init honours a globally configured default branch."""
        runner = CliRunner()
        runner.invoke(cli, ['config', 'set', '--global', 'core.defaultbranch', 'trunk'])

        result = runner.invoke(cli, ['init', str(tmp_path / 'proj')])

        assert result.exit_code == 0
        assert 'On branch trunk' in result.output

    def test_symlink_policy_error(self, repo, working_files, monkeypatch):
        """Test write-tree fails on symlinks when configured to."""
        (repo.work_tree / 'link').symlink_to(working_files['file1'])
        monkeypatch.chdir(repo.work_tree)
        runner = CliRunner()
        runner.invoke(cli, ['config', 'set', 'core.symlinks', 'error'])

        result = runner.invoke(cli, ['write-tree'])

        assert result.exit_code != 0
        assert 'symbolic link' in result.output
