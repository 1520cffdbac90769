"""Slash command invocation parsing."""

from __future__ import annotations

import re
import shlex
from dataclasses import dataclass, field


@dataclass
class Invocation:
    """A parsed slash command invocation.

    Attributes:
        name: Command name, lower-cased, namespace included (``git:commit``).
        args: Positional arguments after shell-style splitting.
        arguments_text: Argument text exactly as typed after the name.
        raw: Original input text.
    """

    name: str
    args: list[str] = field(default_factory=list)
    arguments_text: str = ""
    raw: str = ""

    @property
    def has_args(self) -> bool:
        return len(self.args) > 0

    def get_arg(self, index: int, default: str | None = None) -> str | None:
        """Get positional argument by 0-based index."""
        if 0 <= index < len(self.args):
            return self.args[index]
        return default


class InvocationParser:
    """Parses ``/name arg1 "arg two"`` input.

    Attributes:
        COMMAND_PREFIX: The prefix that identifies commands (/).
    """

    COMMAND_PREFIX = "/"
    NAME_PATTERN = re.compile(r"^[A-Za-z][\w:.-]*$")

    def is_invocation(self, text: str) -> bool:
        """Check if text is a slash command invocation.

        A valid invocation starts with / followed by a letter.
        """
        stripped = text.strip()
        if not stripped.startswith(self.COMMAND_PREFIX):
            return False
        if len(stripped) <= len(self.COMMAND_PREFIX):
            return False
        return stripped[len(self.COMMAND_PREFIX)].isalpha()

    def parse(self, text: str) -> Invocation:
        """Parse invocation text.

        Raises:
            ValueError: If text is not an invocation, the name is invalid
                or quotes are unbalanced.
        """
        stripped = text.strip()

        if not self.is_invocation(stripped):
            raise ValueError(f"Not a valid command: {text}")

        content = stripped[len(self.COMMAND_PREFIX):]
        parts = content.split(None, 1)
        name = parts[0]
        arguments_text = parts[1].strip() if len(parts) > 1 else ""

        if not self.NAME_PATTERN.match(name):
            raise ValueError(f"Invalid command name: {name}")

        try:
            args = shlex.split(arguments_text)
        except ValueError as e:
            raise ValueError(
                f"Unbalanced quotes in command: {text}\n"
                f"Hint: Ensure all quotes are properly closed, "
                f'e.g., /review "src/app.py"'
            ) from e

        return Invocation(
            name=name.lower(),
            args=args,
            arguments_text=arguments_text,
            raw=text,
        )
