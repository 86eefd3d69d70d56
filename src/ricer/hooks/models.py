"""Hook data models: TrustPolicy, HookPhase, HookOutcome, HookReport, PhaseResult."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol


class TrustPolicy(str, Enum):
    """How much consent the user gives to run hook scripts."""

    ALWAYS = "always"  # run without asking
    PROMPT = "prompt"  # page the script and ask before each run
    NEVER = "never"  # skip every hook


class HookPhase(str, Enum):
    PRE = "pre"
    POST = "post"


class HookOutcome(str, Enum):
    NO_HOOK = "no_hook"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class HookReport:
    """What happened to one hook definition during a phase."""

    script: str | None
    outcome: HookOutcome
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    workdir: Path | None = None


@dataclass
class PhaseResult:
    """Per-hook reports for one (command, phase) run, in document order."""

    command: str
    phase: HookPhase
    reports: list[HookReport] = field(default_factory=list)

    @property
    def outcome(self) -> HookOutcome:
        outcomes = {r.outcome for r in self.reports}
        if HookOutcome.FAILURE in outcomes:
            return HookOutcome.FAILURE
        if HookOutcome.SUCCESS in outcomes:
            return HookOutcome.SUCCESS
        return HookOutcome.NO_HOOK

    @property
    def failures(self) -> list[HookReport]:
        return [r for r in self.reports if r.outcome is HookOutcome.FAILURE]


class Pager(Protocol):
    def preview_and_confirm(self, title: str, text: str) -> bool: ...


class ProcessRunner(Protocol):
    def run(self, script_path: Path, args: list[str], cwd: Path | None) -> tuple[int, str, str]: ...
