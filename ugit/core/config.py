"""Layered INI configuration for ugit.

Lookups consult, in order: UGIT_<SECTION>_<KEY> environment variables, the
repository's .ugit/config, then ~/.ugitconfig.
"""

import os
import configparser
from pathlib import Path
from typing import Dict, List, Optional, Tuple

DEFAULT_BRANCH = 'master'
SYMLINK_POLICIES = ('skip', 'error')


def _load(path: Optional[Path]) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    if path is not None and path.exists():
        parser.read(path)
    return parser


class Config:
    """
    Reads and writes ugit settings.

    Files are parsed lazily and cached per instance; create a new Config (or
    use get_config) to observe writes made elsewhere.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.ugitconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Args:
            repo_config_path: The repository's config file, or None outside a repository
        """
        self.repo_config_path = repo_config_path
        self._parsers: Dict[str, configparser.ConfigParser] = {}

    @property
    def global_config(self) -> configparser.ConfigParser:
        if 'global' not in self._parsers:
            self._parsers['global'] = _load(self.GLOBAL_CONFIG_PATH)
        return self._parsers['global']

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        if self.repo_config_path is None:
            return None
        if 'repo' not in self._parsers:
            self._parsers['repo'] = _load(self.repo_config_path)
        return self._parsers['repo']

    def _file_sources(self) -> List[configparser.ConfigParser]:
        """Parsed files, highest precedence first."""
        sources = [self.global_config]
        if self.repo_config is not None:
            sources.insert(0, self.repo_config)
        return sources

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Look up section.key.

        Args:
            section: Config section (e.g. 'core')
            key: Key within the section (e.g. 'defaultbranch')
            fallback: Returned when no layer defines the key

        Returns:
            The value from the highest-precedence layer, or fallback
        """
        env_value = os.environ.get(f"UGIT_{section.upper()}_{key.upper()}")
        if env_value is not None:
            return env_value

        for source in self._file_sources():
            if source.has_option(section, key):
                return source.get(section, key)
        return fallback

    def _target(self, global_config: bool) -> Tuple[configparser.ConfigParser, Path]:
        if global_config:
            return self.global_config, self.GLOBAL_CONFIG_PATH
        if self.repo_config is None:
            raise ValueError("No repository config path available")
        return self.repo_config, self.repo_config_path

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Write section.key to the repository file, or the global one.

        Raises:
            ValueError: If writing locally without a repository
        """
        parser, path = self._target(global_config)
        if not parser.has_section(section):
            parser.add_section(section)
        parser.set(section, key, value)

        with open(path, 'w') as f:
            parser.write(f)

    def list_all(self) -> Dict[str, Dict[str, str]]:
        """Every file-backed setting as {section: {key: value}}, repository values winning."""
        result: Dict[str, Dict[str, str]] = {}
        for source in reversed(self._file_sources()):
            for section in source.sections():
                result.setdefault(section, {}).update(source.items(section))
        return result

    @property
    def default_branch(self) -> str:
        """Branch HEAD points to in a fresh repository."""
        return self.get('core', 'defaultbranch', DEFAULT_BRANCH)

    @property
    def symlink_policy(self) -> str:
        """How the tree builder treats symbolic links: 'skip' or 'error'."""
        policy = self.get('core', 'symlinks', 'skip').strip().lower()
        if policy not in SYMLINK_POLICIES:
            raise ValueError(f"core.symlinks must be one of {', '.join(SYMLINK_POLICIES)}, got {policy!r}")
        return policy


def get_config(repo=None) -> Config:
    """
    Config bound to a repository's file, or global-only when repo is None.
    """
    if repo:
        return Config(repo.config_file)
    return Config()
