"""Low-level object commands: hash-object, cat-file, write-tree, read-tree, rev-parse."""

import click
from pathlib import Path
from ugit.core.errors import UgitError
from ugit.core.objects import Blob, Commit, Tree
from ugit.core.repository import Repository
from ugit.cli.output import success, error, info
from colorama import Fore, Style


def _find_repository():
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a ugit repository"))
        raise click.Abort()
    return repo


@click.command('hash-object')
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def hash_object_cmd(file):
    """
    Store a file's content as a blob and print its OID.

    Examples:
        ugit hash-object README.md
    """
    repo = _find_repository()
    click.echo(repo.snapshot.hash_file(Path(file)))


@click.command('cat-file')
@click.option('-t', '--type', 'show_type', is_flag=True, help='Show object type')
@click.option('-s', '--size', 'show_size', is_flag=True, help='Show object size')
@click.option('-p', '--pretty', is_flag=True, help='Pretty-print object content')
@click.argument('object_name')
def cat_file_cmd(show_type, show_size, pretty, object_name):
    """
    Show object content, type, or size.

    OBJECT_NAME may be a full OID, an OID prefix, or any ref name.
    Without options the raw stored content is written to stdout.

    Examples:
        ugit cat-file -t abc123     # Show object type
        ugit cat-file -s abc123     # Show object size
        ugit cat-file -p HEAD       # Pretty-print the HEAD commit
        ugit cat-file abc123        # Raw content
    """
    repo = _find_repository()

    try:
        oid = repo.refs.get_oid(object_name)
        kind, data = repo.objects.get(oid)

        if show_type:
            click.echo(kind)
            return

        if show_size:
            click.echo(len(data))
            return

        if not pretty:
            click.echo(data, nl=False)
            return

        obj = repo.read_object(oid)
        if isinstance(obj, Commit):
            click.echo(f"{Fore.YELLOW}tree {obj.tree}{Style.RESET_ALL}")
            for parent in obj.parents:
                click.echo(f"{Fore.YELLOW}parent {parent}{Style.RESET_ALL}")
            click.echo(f"timestamp {obj.timestamp} {obj.timezone}")
            click.echo()
            click.echo(obj.message)
        elif isinstance(obj, Tree):
            for entry in obj.entries:
                click.echo(f"{entry.type} {Fore.YELLOW}{entry.hash}{Style.RESET_ALL}    {entry.name}")
        elif isinstance(obj, Blob):
            try:
                click.echo(obj.data.decode('utf-8'), nl=False)
            except UnicodeDecodeError:
                click.echo(f"<binary data: {len(obj.data)} bytes>")

    except UgitError as e:
        click.echo(error(str(e)))
        raise click.Abort()


@click.command('write-tree')
def write_tree_cmd():
    """
    Snapshot the working directory into tree objects and print the root tree OID.

    The .ugit directory is skipped. Symbolic links are skipped with a warning,
    or rejected when core.symlinks is set to 'error'.
    """
    repo = _find_repository()

    try:
        click.echo(repo.snapshot.write_tree())
    except (UgitError, ValueError) as e:
        click.echo(error(str(e)))
        raise click.Abort()


@click.command('read-tree')
@click.argument('tree')
def read_tree_cmd(tree):
    """
    Replace the working directory with the content of a tree.

    TREE may name a tree directly or a commit, whose tree is used.

    WARNING: every file outside .ugit is deleted first. Uncommitted
    changes are lost.
    """
    repo = _find_repository()

    try:
        oid = repo.refs.get_oid(tree)
        kind, _ = repo.objects.read_header(oid)
        if kind == 'commit':
            oid = repo.read_commit(oid).tree

        count = repo.checkout.read_tree(oid)
    except UgitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(f"Read tree {oid[:10]}"))
    click.echo(info(f"Wrote {count} file(s)"))


@click.command('rev-parse')
@click.argument('name', default='HEAD')
def rev_parse_cmd(name):
    """
    Resolve a name to a full OID.

    Names are tried as HEAD, tag, branch, then as a hash or unique hash prefix.

    Examples:
        ugit rev-parse              # OID of HEAD
        ugit rev-parse v1.0         # OID a tag points to
        ugit rev-parse 3fa9         # Expand an abbreviated hash
    """
    repo = _find_repository()

    try:
        click.echo(repo.refs.get_oid(name))
    except UgitError as e:
        click.echo(error(str(e)))
        raise click.Abort()
