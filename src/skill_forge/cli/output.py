"""Terminal output for the skillforge CLI."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from skill_forge.documents import PromptDocument
from skill_forge.lint import LintIssue, LintReport, Severity
from skill_forge.tasks import TaskList

SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


class Output:
    """Writes CLI results to stdout and diagnostics to stderr.

    Document bodies, rendered prompts and JSON are written without
    markup processing so their text reaches the terminal unchanged.
    """

    def __init__(self, color: bool = True) -> None:
        self.console = Console(no_color=not color, highlight=False, emoji=False, soft_wrap=True)
        self.err_console = Console(
            stderr=True, no_color=not color, highlight=False, emoji=False, soft_wrap=True
        )

    def raw(self, text: str) -> None:
        self.console.print(text, markup=False, end="" if text.endswith("\n") else "\n")

    def json(self, data: Any) -> None:
        self.raw(json.dumps(data, indent=2, default=str))

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def success(self, message: str) -> None:
        self.console.print(f"[green]{escape(message)}[/green]")

    def warning(self, message: str) -> None:
        self.err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def documents(self, documents: list[PromptDocument]) -> None:
        """Print a table of catalog documents."""
        if not documents:
            self.info("No documents found.")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Name")
        table.add_column("Kind")
        table.add_column("Scope")
        table.add_column("Description")
        for doc in documents:
            prefix = "/" if doc.kind.value == "command" else ""
            table.add_row(
                escape(f"{prefix}{doc.qualified_name}"),
                doc.kind.value,
                doc.scope or "-",
                escape(doc.description),
            )
        self.console.print(table)

    def issue(self, issue: LintIssue) -> None:
        style = SEVERITY_STYLES[issue.severity]
        self.console.print(
            f"{escape(issue.location)}: [{style}]{issue.code}[/{style}] "
            f"{issue.severity.value}: {escape(issue.message)}"
        )

    def report(self, report: LintReport) -> None:
        """Print lint issues followed by the summary line."""
        for issue in report.issues:
            self.issue(issue)
        style = "green" if report.ok else "bold red"
        self.console.print(f"[{style}]{escape(report.summary())}[/{style}]")

    def tasks(self, task_list: TaskList) -> None:
        """Print checklist items with progress counts."""
        for task in task_list.tasks:
            mark = "[green]x[/green]" if task.done else " "
            self.console.print(f"\\[{mark}] {escape(task.text)}")
        counts = task_list.counts()
        self.console.print(
            f"{counts['completed']}/{counts['total']} complete, "
            f"{counts['remaining']} remaining"
        )
