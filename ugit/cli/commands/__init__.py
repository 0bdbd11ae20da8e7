"""CLI commands for ugit."""

from ugit.cli.commands.init import init_cmd
from ugit.cli.commands.plumbing import (hash_object_cmd, cat_file_cmd, write_tree_cmd,
                                        read_tree_cmd, rev_parse_cmd)
from ugit.cli.commands.commit import commit_cmd
from ugit.cli.commands.log import log_cmd
from ugit.cli.commands.checkout import checkout_cmd
from ugit.cli.commands.branch import branch_cmd
from ugit.cli.commands.tag import tag_cmd
from ugit.cli.commands.refs import show_ref_cmd
from ugit.cli.commands.config import config_cmd

__all__ = ['init_cmd', 'hash_object_cmd', 'cat_file_cmd', 'write_tree_cmd', 'read_tree_cmd',
           'rev_parse_cmd', 'commit_cmd', 'log_cmd', 'checkout_cmd', 'branch_cmd', 'tag_cmd',
           'show_ref_cmd', 'config_cmd']
