"""Show references."""

import click
from ugit.core.repository import Repository
from ugit.cli.output import error, info
from colorama import Fore, Style


@click.command('show-ref')
@click.option('--head', 'show_head', is_flag=True, help='Include HEAD in the output')
@click.option('--symbolic', is_flag=True, help="Show HEAD's symbolic target instead of its commit")
@click.argument('prefix', required=False, default='refs/')
def show_ref_cmd(show_head, symbolic, prefix):
    """
    List references and the OIDs they point to.

    Examples:
        ugit show-ref                  # All branches and tags
        ugit show-ref refs/tags/       # Only tags
        ugit show-ref --head           # Include HEAD
        ugit show-ref --head --symbolic
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a ugit repository"))
        raise click.Abort()

    refs_mgr = repo.refs
    found = False

    if show_head:
        head = refs_mgr.get_ref('HEAD', deref=not symbolic)
        if head.value:
            target = f"ref: {head.value}" if head.symbolic else head.value
            click.echo(f"{Fore.YELLOW}{target}{Style.RESET_ALL} HEAD")
            found = True

    for name, value in refs_mgr.iter_refs(prefix):
        if name == 'HEAD':
            continue
        click.echo(f"{Fore.YELLOW}{value.value}{Style.RESET_ALL} {name}")
        found = True

    if not found:
        click.echo(info("No refs found"))
