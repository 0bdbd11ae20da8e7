"""Commit command - snapshot the working directory."""

import click
from ugit.core.repository import Repository
from ugit.core.errors import UgitError
from ugit.cli.output import success, error, info


@click.command('commit')
@click.option('-m', '--message', required=True, help='Commit message')
def commit_cmd(message):
    """
    Record a snapshot of the working directory.

    The whole work tree (except .ugit) is stored. The new commit's parent is
    the current HEAD commit, and the current branch moves to the new commit
    (or HEAD itself, when detached).

    Examples:
        ugit commit -m "Initial commit"
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a ugit repository"))
        raise click.Abort()

    try:
        oid = repo.history.create_commit(message)
    except (UgitError, ValueError) as e:
        click.echo(error(f"Commit failed: {e}"))
        raise click.Abort()

    branch = repo.refs.head_branch()
    where = branch if branch else 'detached HEAD'
    click.echo(success(f"[{where} {oid[:10]}] {message.splitlines()[0] if message else ''}"))
    click.echo(info(oid))
