"""Argument substitution for command templates."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from .placeholders import PLACEHOLDER_PATTERN


@dataclass
class RenderResult:
    """Result of rendering a template.

    Attributes:
        text: Rendered text.
        unresolved: Placeholder tokens left literal, in order of appearance.
        substitutions: Number of placeholders replaced.
    """

    text: str
    unresolved: list[str] = field(default_factory=list)
    substitutions: int = 0

    @property
    def complete(self) -> bool:
        """True when every placeholder was resolved."""
        return not self.unresolved


def render(template: str, args: Sequence[str] = ()) -> RenderResult:
    """Substitute invocation arguments into a template.

    Substitution is a single pass: inserted values are never scanned
    again. ``$ARGUMENTS`` becomes the values joined with single spaces,
    and is replaced only when at least one argument is given. A
    placeholder without a value is left as literal text, and an escaped
    ``\\$1`` is emitted as ``$1``.

    Args:
        template: Template text.
        args: Positional argument values.

    Returns:
        RenderResult with the rendered text.
    """
    values = [str(a) for a in args]
    joined = " ".join(values)
    unresolved: list[str] = []
    count = 0

    def replace(match: re.Match[str]) -> str:
        nonlocal count
        token = f"${match.group(2)}"
        if match.group(1):
            return token

        key = match.group(2)
        if key == "ARGUMENTS":
            if values:
                count += 1
                return joined
        else:
            index = int(key)
            if index <= len(values):
                count += 1
                return values[index - 1]

        unresolved.append(token)
        return token

    text = PLACEHOLDER_PATTERN.sub(replace, template)
    return RenderResult(text=text, unresolved=unresolved, substitutions=count)


__all__ = [
    "RenderResult",
    "render",
]
