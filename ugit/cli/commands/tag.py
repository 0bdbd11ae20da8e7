"""Tag command - list, create, or delete tags."""

import click
from ugit.core.repository import Repository
from ugit.core.errors import UgitError
from ugit.cli.output import success, error, info


@click.command('tag')
@click.argument('name', required=False)
@click.argument('commit', required=False, default='HEAD')
@click.option('-d', '--delete', is_flag=True, help='Delete a tag')
def tag_cmd(name, commit, delete):
    """
    Create, list, or delete tags.

    Tags are immutable named pointers to commits. Creating a tag that
    already exists fails.

    Examples:
        ugit tag                     # List all tags
        ugit tag v1.0                # Tag HEAD
        ugit tag v0.9 3fa9c2         # Tag a specific commit
        ugit tag -d v1.0             # Delete a tag
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a ugit repository"))
        raise click.Abort()

    refs_mgr = repo.refs

    try:
        if delete:
            if not name:
                click.echo(error("Tag name required for deletion"))
                raise click.Abort()
            refs_mgr.delete_tag(name)
            click.echo(success(f"Deleted tag '{name}'"))
            return

        if name is None:
            tags = refs_mgr.list_tags()
            if not tags:
                click.echo(info("No tags found"))
                return
            for tag_name, commit_hash in tags:
                summary = repo.read_commit(commit_hash).summary[:50]
                click.echo(f"{tag_name:20} {commit_hash[:10]} {summary}")
            return

        oid = repo.checkout.tag(name, commit)
    except UgitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(f"Created tag '{name}'"))
    click.echo(info(f"Points to: {oid[:10]}"))
