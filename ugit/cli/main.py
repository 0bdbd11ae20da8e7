"""Main CLI entry point for ugit."""

import logging

import click
from colorama import init

from ugit import __version__
from ugit.cli.output import BANNER
from ugit.cli.commands import (init_cmd, hash_object_cmd, cat_file_cmd, write_tree_cmd,
                               read_tree_cmd, rev_parse_cmd, commit_cmd, log_cmd,
                               checkout_cmd, branch_cmd, tag_cmd, show_ref_cmd, config_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'


class UgitGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=UgitGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log object writes, ref updates and checkout phases')
def cli(verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


# Register commands
cli.add_command(init_cmd)
cli.add_command(hash_object_cmd)
cli.add_command(cat_file_cmd)
cli.add_command(write_tree_cmd)
cli.add_command(read_tree_cmd)
cli.add_command(rev_parse_cmd)
cli.add_command(commit_cmd)
cli.add_command(log_cmd)
cli.add_command(checkout_cmd)
cli.add_command(branch_cmd)
cli.add_command(tag_cmd)
cli.add_command(show_ref_cmd)
cli.add_command(config_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
