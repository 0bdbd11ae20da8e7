"""Initialize a new ugit repository."""

import click
from pathlib import Path
from ugit.core.repository import Repository
from ugit.core.errors import UgitError
from ugit.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
@click.option('-b', '--initial-branch', default=None, help='Branch HEAD points to (default: core.defaultbranch or master)')
def init_cmd(path, initial_branch):
    """
    Initialize a new ugit repository.

    Creates a .ugit directory holding the object store, refs and HEAD.
    HEAD starts out pointing at a branch that has no commits yet.

    Examples:
        ugit init                    # Initialize in current directory
        ugit init my-project         # Initialize in my-project directory
        ugit init -b main            # Start on 'main' instead of 'master'
    """
    repo_path = Path(path).resolve()

    try:
        repo = Repository(str(repo_path))
        repo.init(default_branch=initial_branch)
    except UgitError as e:
        click.echo(error(str(e)))
        raise click.Abort()
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()

    click.echo(success(f"Initialized empty ugit repository in {repo.ugit_dir}"))
    click.echo(info(f"On branch {repo.refs.head_branch()} (no commits yet)"))
