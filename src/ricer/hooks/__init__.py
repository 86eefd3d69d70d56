"""Hooks: trust-gated pre/post command hook scripts."""

from .engine import CommandHookRunner, SubprocessRunner
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

__all__ = [
    "CommandHookRunner",
    "HookOutcome",
    "HookPhase",
    "HookReport",
    "Pager",
    "PhaseResult",
    "ProcessRunner",
    "RichPager",
    "SubprocessRunner",
    "TrustPolicy",
]
