"""Checkout command - replace the working directory with a commit's snapshot."""

import click
from ugit.core.repository import Repository
from ugit.core.errors import UgitError
from ugit.core.refs import HEADS_PREFIX
from ugit.cli.output import success, error, info, warning


@click.command('checkout')
@click.argument('target')
def checkout_cmd(target):
    """
    Switch to a branch or commit.

    TARGET may be a branch, tag, HEAD, full OID or unique OID prefix.
    Checking out a branch makes HEAD follow it; anything else detaches HEAD
    at the commit.

    WARNING: the working directory is cleared and rebuilt from the commit.
    Uncommitted changes are discarded without prompting.

    Examples:
        ugit checkout master       # Switch to 'master' branch
        ugit checkout v1.0         # Detached HEAD at a tag
        ugit checkout 3fa9c2       # Detached HEAD at a commit
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a ugit repository"))
        raise click.Abort()

    try:
        resolution = repo.checkout.checkout(target)
    except UgitError as e:
        click.echo(error(f"Checkout failed: {e}"))
        raise click.Abort()

    if resolution.ref and resolution.ref.startswith(HEADS_PREFIX):
        click.echo(success(f"Switched to branch '{resolution.ref[len(HEADS_PREFIX):]}'"))
    elif repo.refs.is_detached():
        click.echo(warning(f"HEAD is now at {resolution.oid[:10]} (detached HEAD)"))
    else:
        click.echo(success(f"Restored working directory to {resolution.oid[:10]}"))
    click.echo(info(f"Commit {resolution.oid}"))
