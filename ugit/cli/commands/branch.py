"""Branch command - list, create, or delete branches."""

import click
from ugit.core.repository import Repository
from ugit.core.errors import UgitError
from ugit.cli.output import success, error, info
from colorama import Fore, Style


@click.command('branch')
@click.argument('name', required=False)
@click.argument('start_point', required=False, default='HEAD')
@click.option('-d', '--delete', is_flag=True, help='Delete a branch')
def branch_cmd(name, start_point, delete):
    """
    List, create, or delete branches.

    Creating a branch does not switch to it; use 'ugit checkout NAME'.

    Examples:
        ugit branch                 # List branches, '*' marks the current one
        ugit branch feature         # Create 'feature' at HEAD
        ugit branch fix v1.0        # Create 'fix' at tag v1.0
        ugit branch -d feature      # Delete 'feature'
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a ugit repository"))
        raise click.Abort()

    refs_mgr = repo.refs

    try:
        if delete:
            if not name:
                click.echo(error("Branch name required for deletion"))
                raise click.Abort()
            refs_mgr.delete_branch(name)
            click.echo(success(f"Deleted branch '{name}'"))
            return

        if name is None:
            current = refs_mgr.head_branch()
            branches = refs_mgr.list_branches()
            if not branches:
                click.echo(info("No branches yet"))
                return
            for branch_name, commit_hash in branches:
                if branch_name == current:
                    click.echo(f"* {Fore.GREEN}{branch_name}{Style.RESET_ALL} {commit_hash[:10]}")
                else:
                    click.echo(f"  {branch_name} {commit_hash[:10]}")
            return

        oid = repo.checkout.branch(name, start_point)
    except UgitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(f"Created branch '{name}'"))
    click.echo(info(f"Points to: {oid[:10]}"))
