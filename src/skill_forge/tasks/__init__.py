"""Markdown task checklists and the implementation loop prompt."""

from .checklist import Task, TaskList, slugify
from .prompt import COMPLETE_MARKER, build_loop_prompt

__all__ = [
    "COMPLETE_MARKER",
    "Task",
    "TaskList",
    "build_loop_prompt",
    "slugify",
]
