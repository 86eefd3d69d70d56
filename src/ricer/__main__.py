"""CLI entry point: repository/hook config editing and hook runs."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import (
    Bootstrap,
    CommandHook,
    ConfigManager,
    Hook,
    HookCodec,
    OsType,
    Repository,
    RepositoryCodec,
)
from .core.config import Settings, load_settings
from .core.errors import EntryNotFound, RicerError, SectionNotFound
from .core.locator import Locator
from .core.logging import setup_logging
from .core.utils import short_path
from .hooks import (
    CommandHookRunner,
    HookOutcome,
    HookPhase,
    PhaseResult,
    RichPager,
    SubprocessRunner,
    TrustPolicy,
)

console = Console()


class RicerGroup(click.Group):
    """Click group that reports ricer errors as a one-line CLI error."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except RicerError as err:
            raise click.ClickException(str(err)) from err


# ── Hook plumbing ───────────────────────────────────────────────────


def _hook_runner(settings: Settings, target_repo: str | None = None) -> CommandHookRunner:
    return CommandHookRunner.load(
        Locator.from_settings(settings),
        settings.run_hook,
        pager=RichPager(console, use_pager=settings.use_pager),
        runner=SubprocessRunner(timeout=settings.hook_timeout),
        target_repo=target_repo,
    )


def _print_phase(result: PhaseResult) -> None:
    for report in result.reports:
        if report.outcome is HookOutcome.SUCCESS and report.stdout.strip():
            console.print(f"  [dim]hook: {escape(report.stdout.strip())}[/dim]")
        elif report.outcome is HookOutcome.FAILURE:
            name = escape(report.script or "")
            console.print(
                f"  [yellow]{result.phase.value} hook '{name}' failed[/yellow]"
                f" [dim]{escape(report.stderr.strip())}[/dim]"
            )


@contextmanager
def _hooked(settings: Settings, command: str) -> Iterator[None]:
    """Run *command*'s pre hooks, the body, then its post hooks.

    Post hooks get a fresh runner so they see the registry the body saved.
    """
    _print_phase(_hook_runner(settings).run_hooks(command, HookPhase.PRE))
    yield
    _print_phase(_hook_runner(settings).run_hooks(command, HookPhase.POST))


def _repos(settings: Settings) -> ConfigManager[Repository]:
    return ConfigManager.load(RepositoryCodec(), Locator.from_settings(settings))


def _hooks(settings: Settings) -> ConfigManager[CommandHook]:
    return ConfigManager.load(HookCodec(), Locator.from_settings(settings))


# ── Root ────────────────────────────────────────────────────────────


@click.group(cls=RicerGroup)
@click.option(
    "--run-hook",
    type=click.Choice([p.value for p in TrustPolicy]),
    default=None,
    help="Hook trust policy (default: prompt)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx: click.Context, run_hook: str | None, verbose: bool):
    """ricer - manage dotfile repositories and command hooks."""
    setup_logging(verbose)
    ctx.obj = load_settings(run_hook=run_hook, verbose=verbose)


@cli.command("run")
@click.argument("command")
@click.option("--repo", default=None, help="Target repository for hook working directories")
@click.option(
    "--phase", type=click.Choice(["pre", "post", "both"]), default="both", show_default=True
)
@click.pass_obj
def run_cmd(settings: Settings, command: str, repo: str | None, phase: str):
    """Run the hooks bound to COMMAND."""
    runner = _hook_runner(settings, repo)
    phases = [HookPhase.PRE, HookPhase.POST] if phase == "both" else [HookPhase(phase)]
    for hook_phase in phases:
        result = runner.run_hooks(command, hook_phase)
        _print_phase(result)
        console.print(f"{hook_phase.value}: {result.outcome.value}")


# ── Repositories ────────────────────────────────────────────────────


@cli.group()
def repo():
    """Manage tracked repositories."""


@repo.command("list")
@click.pass_obj
def repo_list(settings: Settings):
    mgr = _repos(settings)
    locator = mgr.locator
    table = Table("name", "branch", "remote", "worktree")
    for name in mgr.keys():
        entry = mgr.get(name)
        worktree = locator.home_dir if entry.workdir_home else locator.repo_path(name)
        table.add_row(name, entry.branch, entry.remote, short_path(worktree, locator.home_dir))
    console.print(table)


@repo.command("show")
@click.argument("name")
@click.pass_obj
def repo_show(settings: Settings, name: str):
    entry = _repos(settings).get(name)
    console.print(f"[bold]{entry.name}[/bold]")
    console.print(f"  branch: {entry.branch}")
    console.print(f"  remote: {entry.remote}")
    console.print(f"  workdir_home: {str(entry.workdir_home).lower()}")
    if entry.bootstrap is not None:
        b = entry.bootstrap
        fields = (("clone", b.clone), ("os", b.os), ("users", b.users), ("hosts", b.hosts))
        for label, value in fields:
            if value is not None:
                shown = ", ".join(value) if isinstance(value, list) else str(value)
                console.print(f"  bootstrap.{label}: {shown}")


@repo.command("add")
@click.argument("name")
@click.option("--branch", "-b", default="main", show_default=True)
@click.option("--remote", "-r", default="origin", show_default=True)
@click.option("--workdir-home", "-w", is_flag=True, help="Use $HOME as working tree")
@click.option("--clone", default=None, help="Bootstrap clone URL")
@click.option("--os", "os_name", type=click.Choice([o.value for o in OsType]), default=None)
@click.option("--user", "users", multiple=True, help="Bootstrap only for user (repeatable)")
@click.option("--host", "hosts", multiple=True, help="Bootstrap only on host (repeatable)")
@click.pass_obj
def repo_add(settings, name, branch, remote, workdir_home, clone, os_name, users, hosts):
    """Add or replace repository NAME."""
    bootstrap = Bootstrap(
        clone=clone,
        os=OsType(os_name) if os_name else None,
        users=list(users) or None,
        hosts=list(hosts) or None,
    )
    entry = Repository(
        name, branch, remote, workdir_home, None if bootstrap.is_empty() else bootstrap
    )
    with _hooked(settings, "repo-add"):
        mgr = _repos(settings)
        previous = mgr.add(entry)
        mgr.save()
    console.print(f"{'updated' if previous else 'added'} repository '{name}'")


@repo.command("rm")
@click.argument("name")
@click.pass_obj
def repo_rm(settings: Settings, name: str):
    """Remove repository NAME."""
    with _hooked(settings, "repo-rm"):
        mgr = _repos(settings)
        mgr.remove(name)
        mgr.save()
    console.print(f"removed repository '{name}'")


@repo.command("mv")
@click.argument("old")
@click.argument("new")
@click.pass_obj
def repo_mv(settings: Settings, old: str, new: str):
    """Rename repository OLD to NEW."""
    with _hooked(settings, "repo-mv"):
        mgr = _repos(settings)
        mgr.rename(old, new)
        mgr.save()
    console.print(f"renamed repository '{old}' to '{new}'")


# ── Hook definitions ────────────────────────────────────────────────


@cli.group()
def hook():
    """Manage command hook definitions."""


@hook.command("list")
@click.pass_obj
def hook_list(settings: Settings):
    mgr = _hooks(settings)
    for cmd in mgr.keys():
        console.print(f"  [bold]{cmd:<12}[/bold] [dim]{len(mgr.get(cmd).hooks)} hook(s)[/dim]")


@hook.command("show")
@click.argument("command")
@click.pass_obj
def hook_show(settings: Settings, command: str):
    entry = _hooks(settings).get(command)
    for i, h in enumerate(entry.hooks, 1):
        fields = ", ".join(f"{k}={getattr(h, k)}" for k in HookCodec.FIELDS if getattr(h, k))
        console.print(f"  [cyan]{i}.[/cyan] {fields}")


@hook.command("add")
@click.argument("command")
@click.option("--pre", default=None, help="Script to run before COMMAND")
@click.option("--post", default=None, help="Script to run after COMMAND")
@click.option("--workdir", default=None, help="Working directory for the scripts")
@click.option("--repo", default=None, help="Run in this repository's working tree")
@click.pass_obj
def hook_add(settings, command, pre, post, workdir, repo):
    """Append a hook definition to COMMAND."""
    if not (pre or post):
        raise click.UsageError("give at least one of --pre or --post")
    mgr = _hooks(settings)
    try:
        entry = mgr.get(command)
    except (SectionNotFound, EntryNotFound):
        entry = CommandHook(command)
    entry.add_hook(Hook(pre=pre, post=post, workdir=workdir, repo=repo))
    mgr.add(entry)
    mgr.save()
    console.print(f"'{command}' now has {len(entry.hooks)} hook(s)")


@hook.command("rm")
@click.argument("command")
@click.pass_obj
def hook_rm(settings: Settings, command: str):
    """Remove every hook definition of COMMAND."""
    mgr = _hooks(settings)
    mgr.remove(command)
    mgr.save()
    console.print(f"removed hooks for '{command}'")


def main():
    cli()


if __name__ == "__main__":
    main()
