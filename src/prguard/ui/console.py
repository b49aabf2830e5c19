"""Rich-powered console output for PR Size Guard.

Inside GitHub Actions the same calls emit workflow commands
(`::notice::`, `::warning::`, `::error::`) so messages show up as
annotations on the run.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console as RichConsole
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table

from prguard.models import EvaluationResult


def _escape_command(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class Console:
    """Terminal output for PR Size Guard using Rich."""

    def __init__(self, actions: bool | None = None, stderr: bool = False) -> None:
        self.console = RichConsole(stderr=stderr, soft_wrap=True)
        self._actions = actions

    @property
    def actions(self) -> bool:
        if self._actions is not None:
            return self._actions
        return os.environ.get("GITHUB_ACTIONS") == "true"

    def _command(self, name: str, message: str) -> None:
        self.console.print(
            f"::{name}::{_escape_command(message)}", markup=False, highlight=False, soft_wrap=True
        )

    def success(self, message: str) -> None:
        if self.actions:
            self._command("notice", message)
        else:
            self.console.print(f"[green]✓[/green] {escape(message)}")

    def notice(self, message: str) -> None:
        if self.actions:
            self._command("notice", message)
        else:
            self.console.print(f"[blue]i[/blue] {escape(message)}")

    def warning(self, message: str) -> None:
        if self.actions:
            self._command("warning", message)
        else:
            self.console.print(f"[yellow]![/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        if self.actions:
            self._command("error", message)
        else:
            self.console.print(f"[red]✗[/red] {escape(message)}")

    def debug(self, message: str) -> None:
        if self.actions:
            self._command("debug", message)
        else:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def markdown(self, text: str) -> None:
        """Render markdown text."""
        self.console.print(Markdown(text))

    def show_result(self, result: EvaluationResult) -> None:
        """Display evaluation totals and violations in a table."""
        table = Table(title="PR Size Guard", border_style="cyan")
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right", style="cyan")

        table.add_row("Files considered", str(result.total_files))
        table.add_row("Changed lines", str(result.total_changes))
        table.add_row("Tests touched", "yes" if result.tests_touched else "no")

        if result.violations:
            table.add_section()
            for v in result.violations:
                style = "yellow" if v.is_advisory else "red"
                table.add_row(f"[{style}]{v.rule}[/{style}]", escape(v.message))

        self.console.print(table)


class ConsoleLogHandler(logging.Handler):
    """Route log records to the console so warnings become annotations."""

    def __init__(self, console: Console, level: int = logging.WARNING) -> None:
        super().__init__(level)
        self.console = console

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
        except Exception:
            self.handleError(record)
            return
        if record.levelno >= logging.ERROR:
            self.console.error(message)
        elif record.levelno >= logging.WARNING:
            self.console.warning(message)
        elif record.levelno >= logging.INFO:
            self.console.notice(message)
        else:
            self.console.debug(message)
