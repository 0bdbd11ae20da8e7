"""Config command - read and write configuration."""

import click
from ugit.core.repository import Repository
from ugit.core.config import get_config
from ugit.cli.output import success, error, info
from colorama import Fore, Style


def parse_key(key: str):
    """Split 'section.key' into its two parts."""
    if '.' not in key:
        click.echo(error(f"Invalid key '{key}': expected section.key (e.g. core.defaultbranch)"))
        raise click.Abort()
    section, name = key.split('.', 1)
    return section, name


@click.group('config')
def config_cmd():
    """
    Read and write configuration.

    Values are looked up in UGIT_<SECTION>_<KEY> environment variables,
    then .ugit/config, then ~/.ugitconfig.

    Examples:
        ugit config get core.defaultbranch
        ugit config set core.symlinks error
        ugit config set --global core.defaultbranch main
        ugit config list
    """


@config_cmd.command('get')
@click.argument('key')
def config_get(key):
    """Print a configuration value."""
    section, name = parse_key(key)
    value = get_config(Repository.find_repository()).get(section, name)
    if value is None:
        raise click.exceptions.Exit(1)
    click.echo(value)


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'global_config', is_flag=True, help='Write ~/.ugitconfig')
def config_set(key, value, global_config):
    """Set a configuration value."""
    section, name = parse_key(key)
    repo = Repository.find_repository()
    if not repo and not global_config:
        click.echo(error("Not a ugit repository (use --global)"))
        raise click.Abort()

    get_config(repo).set(section, name, value, global_config=global_config)
    click.echo(success(f"Set {key} = {value}"))


@config_cmd.command('list')
def config_list():
    """List all configuration values."""
    values = get_config(Repository.find_repository()).list_all()
    if not values:
        click.echo(info("No configuration set"))
        return
    for section, items in sorted(values.items()):
        for name, value in sorted(items.items()):
            click.echo(f"{Fore.CYAN}{section}.{name}{Style.RESET_ALL}={value}")
