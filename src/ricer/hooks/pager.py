"""RichPager: page a hook script and ask the user before running it."""

from __future__ import annotations

from prompt_toolkit import prompt as pt_prompt
from rich.console import Console
from rich.syntax import Syntax


class RichPager:
    """Show a script with line numbers, then ask ``Run this hook? [y/N]``."""

    def __init__(self, console: Console | None = None, use_pager: bool = True):
        self.console = console or Console()
        self.use_pager = use_pager

    def preview_and_confirm(self, title: str, text: str) -> bool:
        syntax = Syntax(text, "bash", line_numbers=True, word_wrap=True)
        self.console.print(f"\n[bold yellow]Hook:[/bold yellow] {title}")
        if self.use_pager:
            with self.console.pager(styles=True):
                self.console.print(syntax)
        else:
            self.console.print(syntax)

        try:
            answer = pt_prompt("Run this hook? [y/N] ").strip().lower()
        except EOFError:
            return False
        return answer in ("y", "yes")
