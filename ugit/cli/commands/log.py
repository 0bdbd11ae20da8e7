"""Log command - show commit history."""

import click
from datetime import datetime, timedelta, timezone
from itertools import islice
from ugit.core.repository import Repository
from ugit.core.errors import UgitError
from ugit.core.refs import HEAD, HEADS_PREFIX, TAGS_PREFIX
from ugit.cli.output import error, warning
from colorama import Fore, Style


def format_timestamp(timestamp, tz='+0000'):
    """Format Unix timestamp in the commit's own timezone."""
    try:
        sign = -1 if tz.startswith('-') else 1
        offset = timedelta(hours=int(tz[1:3]), minutes=int(tz[3:5])) * sign
        dt = datetime.fromtimestamp(int(timestamp), timezone(offset))
    except (ValueError, OverflowError, OSError):
        return "Unknown date"
    return dt.strftime("%a %b %d %H:%M:%S %Y ") + tz


def format_decorations(refs, head_branch):
    """Render the '(HEAD -> main, tag: v1)' suffix for a commit."""
    parts = []
    for ref in refs:
        if ref == HEAD:
            if head_branch:
                parts.append(f"{Fore.CYAN}{Style.BRIGHT}HEAD -> {Fore.GREEN}{head_branch}{Style.RESET_ALL}")
            else:
                parts.append(f"{Fore.CYAN}{Style.BRIGHT}HEAD{Style.RESET_ALL}")
        elif ref.startswith(HEADS_PREFIX):
            name = ref[len(HEADS_PREFIX):]
            if name != head_branch or HEAD not in refs:
                parts.append(f"{Fore.GREEN}{name}{Style.RESET_ALL}")
        elif ref.startswith(TAGS_PREFIX):
            parts.append(f"{Fore.YELLOW}tag: {ref[len(TAGS_PREFIX):]}{Style.RESET_ALL}")
        else:
            parts.append(ref)

    if not parts:
        return ""
    return f" {Fore.YELLOW}({Style.RESET_ALL}{', '.join(parts)}{Fore.YELLOW}){Style.RESET_ALL}"


def display_commit_oneline(oid, commit, decorations):
    click.echo(f"{Fore.YELLOW}{oid[:10]}{Style.RESET_ALL}{decorations} {commit.summary}")


def display_commit_full(oid, commit, decorations):
    click.echo(f"{Fore.YELLOW}commit {oid}{Style.RESET_ALL}{decorations}")
    if commit.parents:
        click.echo(f"Parent: {' '.join(commit.parents)}")
    click.echo(f"Date:   {format_timestamp(commit.timestamp, commit.timezone)}")
    click.echo()
    for line in commit.message.split('\n'):
        click.echo(f"    {line}")
    click.echo()


@click.command('log')
@click.option('-n', '--max-count', type=click.IntRange(min=0), help='Limit number of commits to show')
@click.option('--oneline', is_flag=True, help='Show commits in one-line format')
@click.argument('revisions', nargs=-1)
def log_cmd(max_count, oneline, revisions):
    """
    Show commit logs.

    Walks history from HEAD, or from every given revision. Commits shared by
    several starting points are shown once.

    Examples:
        ugit log                   # History of HEAD
        ugit log -n 5              # Last 5 commits
        ugit log --oneline         # Compact format
        ugit log main feature      # Union of two branches' histories
        ugit log 3fa9c2            # History from a specific commit
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a ugit repository"))
        raise click.Abort()

    refs_mgr = repo.refs

    if not revisions and refs_mgr.resolve_head() is None:
        click.echo(warning("No commits yet"))
        return

    try:
        start_oids = [refs_mgr.get_oid(name) for name in revisions or (HEAD,)]
        history = repo.history.iter_commits(start_oids)
        if max_count is not None:
            history = islice(history, max_count)

        refs_map = repo.history.decorations()
        head_branch = refs_mgr.head_branch()

        for oid, commit in history:
            decorations = format_decorations(refs_map.get(oid, []), head_branch)
            if oneline:
                display_commit_oneline(oid, commit, decorations)
            else:
                display_commit_full(oid, commit, decorations)
    except UgitError as e:
        click.echo(error(str(e)))
        raise click.Abort()
