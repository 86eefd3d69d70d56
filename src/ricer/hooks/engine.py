"""Hook execution engine: CommandHookRunner, SubprocessRunner."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from ricer.config import CommandHook, ConfigManager, Hook, HookCodec, Repository, RepositoryCodec
from ricer.core.errors import (
    ConfigIOError,
    EntryNotFound,
    HookExecutionError,
    HookScriptError,
    IOOperation,
    SectionNotFound,
    StructureError,
)
from ricer.core.utils import expand_path, truncate

from .models import (
    HookOutcome,
    HookPhase,
    HookReport,
    Pager,
    PhaseResult,
    ProcessRunner,
    TrustPolicy,
)
from .pager import RichPager

if TYPE_CHECKING:
    from ricer.core.locator import Locator


class SubprocessRunner:
    """Run a hook script file. Executable files run directly, others through ``sh``."""

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout

    def run(self, script_path: Path, args: list[str], cwd: Path | None) -> tuple[int, str, str]:
        """Execute a hook script. Returns (exit_code, stdout, stderr)."""
        if os.access(script_path, os.X_OK):
            cmd = [str(script_path), *args]
        else:
            cmd = ["sh", str(script_path), *args]
        try:
            result = subprocess.run(
                cmd, cwd=cwd, timeout=self.timeout, capture_output=True, text=True
            )
            return result.returncode, result.stdout, result.stderr
        except subprocess.TimeoutExpired:
            return -1, "", f"hook timed out after {self.timeout}s"
        except OSError as e:
            return -1, "", str(e)


class CommandHookRunner:
    """Run the pre/post hooks a user bound to a command.

    Hooks come from the ``hooks`` table of the hook config file. Each
    definition names scripts by bare filename inside the hooks directory. The
    trust policy decides whether scripts run unasked, after paging and
    confirmation, or not at all. A failing hook is logged and reported but
    never stops the remaining hooks or the command itself.
    """

    def __init__(
        self,
        hooks: ConfigManager[CommandHook],
        locator: Locator,
        policy: TrustPolicy = TrustPolicy.PROMPT,
        pager: Pager | None = None,
        runner: ProcessRunner | None = None,
        repos: ConfigManager[Repository] | None = None,
        target_repo: str | None = None,
    ):
        self.hooks = hooks
        self.locator = locator
        self.policy = TrustPolicy(policy)
        self.runner = runner or SubprocessRunner()
        self.target_repo = target_repo
        self.pager = pager or RichPager()
        self._repos = repos

    @classmethod
    def load(
        cls, locator: Locator, policy: TrustPolicy = TrustPolicy.PROMPT, **kwargs
    ) -> CommandHookRunner:
        return cls(ConfigManager.load(HookCodec(), locator), locator, policy, **kwargs)

    @property
    def repos(self) -> ConfigManager[Repository]:
        if self._repos is None:
            self._repos = ConfigManager.load(RepositoryCodec(), self.locator)
        return self._repos

    def run_hooks(self, command: str, phase: HookPhase) -> PhaseResult:
        """Run every *phase* hook of *command* in document order."""
        phase = HookPhase(phase)
        result = PhaseResult(command, phase)
        try:
            cmd_hook = self.hooks.get(command)
        except (SectionNotFound, EntryNotFound):
            logger.debug("No hooks defined for '{}'", command)
            return result

        if self.policy is TrustPolicy.NEVER:
            logger.debug("Hooks for '{}' disabled by trust policy", command)
            result.reports = [
                HookReport(h.script(phase), HookOutcome.NO_HOOK) for h in cmd_hook.hooks
            ]
            return result

        for hook in cmd_hook.hooks:
            result.reports.append(self._run_hook(command, phase, hook))
        return result

    def _run_hook(self, command: str, phase: HookPhase, hook: Hook) -> HookReport:
        ref = hook.script(phase)
        if not ref or not ref.split():
            return HookReport(None, HookOutcome.NO_HOOK)

        name, *args = ref.split()
        path = self._script_path(name)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as err:
            raise ConfigIOError(path, IOOperation.READ) from err

        if self.policy is TrustPolicy.PROMPT:
            title = f"{phase.value} hook '{name}' for '{command}'"
            if not self.pager.preview_and_confirm(title, text):
                logger.info("Hook '{}' declined", name)
                return HookReport(name, HookOutcome.NO_HOOK)

        try:
            workdir = self._resolve_workdir(hook)
        except StructureError as err:
            logger.warning("Hook '{}' has no working directory: {}", name, err)
            return HookReport(name, HookOutcome.FAILURE, stderr=str(err))

        try:
            code, out, err_out = self._execute(path, args, workdir)
        except HookExecutionError as err:
            logger.warning("{}", err)
            return HookReport(
                name, HookOutcome.FAILURE, err.exit_code, stderr=err.stderr, workdir=workdir
            )
        return HookReport(name, HookOutcome.SUCCESS, code, out, err_out, workdir)

    def _execute(self, path: Path, args: list[str], workdir: Path | None) -> tuple[int, str, str]:
        code, out, err = self.runner.run(path, args, workdir)
        logger.info(
            "({}) {}\nstdout: {}\nstderr: {}", code, path, truncate(out), truncate(err)
        )
        if err:
            raise HookExecutionError(path.name, code, err)
        return code, out, err

    def _script_path(self, name: str) -> Path:
        # bare filenames only, nothing outside the hooks directory runs
        if name in (".", "..") or Path(name).name != name:
            raise HookScriptError(name, self.locator.hooks_dir)
        return self.locator.hooks_dir / name

    def _resolve_workdir(self, hook: Hook) -> Path | None:
        if hook.repo:
            return self._repo_workdir(hook.repo)
        if hook.workdir:
            return expand_path(hook.workdir)
        if self.target_repo:
            return self._repo_workdir(self.target_repo)
        return None

    def _repo_workdir(self, name: str) -> Path:
        repo = self.repos.get(name)
        return self.locator.home_dir if repo.workdir_home else self.locator.repo_path(name)
