"""
Markdown task checklists.

A breakdown file lists implementation tasks as markdown checkboxes::

    - [ ] Add login endpoint
    - [x] Create user model

Lines that are not checkbox items are preserved untouched.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from skill_forge.core.constants import MAX_SLUG_LENGTH
from skill_forge.core.errors import TaskListError

logger = logging.getLogger(__name__)

TASK_PATTERN = re.compile(
    r"^(?P<prefix>\s*[-*+]\s+\[)(?P<mark>[ xX])(?P<suffix>\]\s+)(?P<text>.*?)\s*$"
)


@dataclass
class Task:
    """A checklist item.

    Attributes:
        text: Task description.
        done: Whether the box is checked.
        line: 1-based line number in the file.
    """

    text: str
    done: bool
    line: int

    def short(self, width: int = 50) -> str:
        """Task text cut to ``width`` characters."""
        return self.text[:width]


def slugify(text: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Make a branch/file friendly slug.

    Lower-cases, collapses runs of non-alphanumerics into ``-`` and
    trims dashes from both ends.
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug[:max_length].rstrip("-")


class TaskList:
    """An editable markdown checklist."""

    def __init__(self, lines: list[str], path: Path | None = None) -> None:
        self.path = path
        self._lines = lines

    @classmethod
    def parse(cls, text: str, path: Path | None = None) -> TaskList:
        return cls(text.split("\n"), path)

    @classmethod
    def load(cls, path: Path) -> TaskList:
        """Read a checklist file.

        Raises:
            TaskListError: If the file cannot be read.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise TaskListError(f"Cannot read task list {path}: {e}") from e
        return cls.parse(text, path)

    @property
    def tasks(self) -> list[Task]:
        """All checklist items in file order."""
        found: list[Task] = []
        for number, line in enumerate(self._lines, start=1):
            match = TASK_PATTERN.match(line)
            if match:
                found.append(
                    Task(
                        text=match.group("text"),
                        done=match.group("mark") != " ",
                        line=number,
                    )
                )
        return found

    def pending(self) -> list[Task]:
        return [t for t in self.tasks if not t.done]

    def completed(self) -> list[Task]:
        return [t for t in self.tasks if t.done]

    def next_task(self) -> Task | None:
        """First unchecked task, None when everything is done."""
        pending = self.pending()
        return pending[0] if pending else None

    def counts(self) -> dict[str, int]:
        """Completed, remaining and total task counts."""
        tasks = self.tasks
        completed = sum(1 for t in tasks if t.done)
        return {
            "completed": completed,
            "remaining": len(tasks) - completed,
            "total": len(tasks),
        }

    @property
    def is_complete(self) -> bool:
        return self.next_task() is None

    def mark_complete(self, text: str) -> Task:
        """Check the first pending task matching ``text``.

        An exact match is preferred; otherwise the first pending task
        starting with ``text`` is used.

        Raises:
            TaskListError: If no pending task matches.
        """
        wanted = text.strip()
        if not wanted:
            raise TaskListError("Task text cannot be empty")

        pending = self.pending()
        task = next((t for t in pending if t.text == wanted), None)
        if task is None:
            task = next((t for t in pending if t.text.startswith(wanted)), None)
        if task is None:
            raise TaskListError(f"No pending task matches: {wanted}")

        index = task.line - 1
        match = TASK_PATTERN.match(self._lines[index])
        if match is None:
            raise TaskListError(f"Line {task.line} is no longer a task")
        self._lines[index] = (
            self._lines[index][: match.start("mark")]
            + "x"
            + self._lines[index][match.end("mark"):]
        )
        task.done = True
        logger.debug("Marked task complete: %s", task.text)
        return task

    def to_text(self) -> str:
        return "\n".join(self._lines)

    def save(self, path: Path | None = None) -> Path:
        """Write the checklist back.

        Raises:
            TaskListError: If there is no target path or the write fails.
        """
        target = path or self.path
        if target is None:
            raise TaskListError("Task list has no path to save to")
        try:
            target.write_text(self.to_text(), encoding="utf-8")
        except OSError as e:
            raise TaskListError(f"Cannot write task list {target}: {e}") from e
        return target
