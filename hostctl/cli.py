"""
hostctl 命令行入口
"""

import functools

import click

from hostctl import __version__
from hostctl.app import HostCtl
from hostctl.config import AddOptions, Config, EditOptions, ListOptions, RemoveOptions
from hostctl.errors import HostctlError

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "token_normalize_func": lambda token: token.lower(),
}


class CommandError(click.ClickException):
    """以单行 "✖ 消息" 输出到 stderr 的失败"""

    exit_code = 1

    def show(self, file=None) -> None:
        click.echo(f"✖ {self.format_message()}", err=True)


class HostctlGroup(click.Group):
    """所有用法错误（未知命令、未知选项）的退出码统一为 1"""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def resolve_command(self, ctx, args):
        cmd_name = args[0]
        normalized = ctx.token_normalize_func(cmd_name) if ctx.token_normalize_func else cmd_name
        if self.get_command(ctx, normalized) is None and not ctx.resilient_parsing:
            click.echo(f"未知命令: {cmd_name}", err=True)
            click.echo(err=True)
            click.echo(ctx.get_help(), err=True)
            ctx.exit(1)
        return super().resolve_command(ctx, args)


def pass_app(func):
    """注入 HostCtl 实例，并把业务错误转换为 CommandError"""

    @click.pass_context
    @functools.wraps(func)
    def wrapper(ctx, *args, **kwargs):
        try:
            obj = ctx.find_root().obj
            app = obj if isinstance(obj, HostCtl) else HostCtl(obj or Config.from_env())
            return func(app, *args, **kwargs)
        except (HostctlError, OSError, ValueError) as e:
            raise CommandError(str(e)) from e

    return wrapper


@click.group(
    cls=HostctlGroup,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    no_args_is_help=False
)
@click.version_option(__version__, "-V", "-v", "--version", message="%(version)s")
@click.pass_context
def cli(ctx):
    """hostctl - hosts file manager with tags"""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


@cli.command("list")
@click.option("--tag", default=None, help="Only show hosts carrying this tag")
@click.option("--all", "show_all", is_flag=True, help="Include commented lines")
@click.option("--sort", default=None, help="Sort by ip, name or tag")
@click.option("--desc", is_flag=True, help="Reverse the final order")
@pass_app
def list_command(app, tag, show_all, sort, desc):
    """List hosts entries with their tags"""
    options = ListOptions.from_raw(tag=tag, show_all=show_all, sort=sort, desc=desc)
    for line in app.list_entries(options):
        click.echo(line)


@cli.command()
@click.option("--ip", default=None, help="IP address")
@click.option("--host", default=None, help="Hostname, comma separated for several")
@click.option("--tag", default=None, help="Tags, comma separated")
@click.option("--comment", default=None, help="Trailing comment")
@pass_app
def add(app, ip, host, tag, comment):
    """Add one line per hostname"""
    options = AddOptions.from_raw(ip=ip, host=host, tag=tag, comment=comment)
    click.echo(app.add(options))


@cli.command()
@click.option("--host", default=None, help="Existing hostname")
@click.option("--ip", default=None, help="New IP address")
@click.option("--rename", default=None, help="New hostname")
@click.option("--tag", default=None, help='Tag operations, e.g. "+web,-old"')
@pass_app
def edit(app, host, ip, rename, tag):
    """Edit the first line matching a hostname"""
    options = EditOptions.from_raw(host=host, ip=ip, rename=rename, tag=tag)
    click.echo(app.edit(options))


@cli.command()
@click.option("--host", default=None, help="Hostname to remove")
@pass_app
def remove(app, host):
    """Remove the first line matching a hostname"""
    options = RemoveOptions.from_raw(host=host)
    click.echo(app.remove(options))


@cli.command()
@pass_app
def tags(app):
    """Show all tagged hostnames"""
    for line in app.tags():
        click.echo(line)


@cli.command()
@pass_app
def backup(app):
    """Create a timestamped copy of the hosts file"""
    click.echo(app.backup())


@cli.command("help")
@click.pass_context
def help_command(ctx):
    """Show usage"""
    click.echo(ctx.parent.get_help())
    config = Config.from_env()
    click.echo()
    click.echo("Notes:")
    click.echo("  • Commands that modify the hosts file require administrator privileges.")
    click.echo(f"  • Tags metadata: {config.tags_file_path}")
    click.echo(f"  • Hosts file    : {config.hosts_file_path}")


@cli.command("version")
def version_command():
    """Show version"""
    click.echo(__version__)


def main() -> None:
    """命令行入口点"""
    cli(prog_name="hostctl")
