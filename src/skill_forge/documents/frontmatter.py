"""YAML frontmatter handling.

A prompt document may start with a block delimited by ``---`` lines
holding a flat YAML mapping. Keys are strings; values are strings or
string lists, except for a few structured keys such as ``hooks``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import yaml

from skill_forge.core.errors import FrontmatterError

DELIMITER = "---"
BOM = "\ufeff"

# Unindented "key: value" line with a non-empty value
TOP_LEVEL_LINE = re.compile(r"^([A-Za-z_][\w-]*):[ \t]+(\S.*)$")


@dataclass
class SplitDocument:
    """A document split into frontmatter text and body.

    Attributes:
        frontmatter_text: Raw YAML between the delimiters, None if absent.
        body: Everything after the closing delimiter.
        body_line: 1-based line number of the first body line.
    """

    frontmatter_text: str | None
    body: str
    body_line: int = 1

    @property
    def has_frontmatter(self) -> bool:
        return self.frontmatter_text is not None

    @property
    def body_offset(self) -> int:
        return self.body_line


def normalize_newlines(text: str) -> str:
    """Strip a leading BOM and convert CRLF/CR line endings to LF."""
    if text.startswith(BOM):
        text = text[len(BOM):]
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_frontmatter(text: str) -> SplitDocument:
    """Split document text into frontmatter and body.

    Raises:
        FrontmatterError: If the opening delimiter has no closing one.
    """
    text = normalize_newlines(text)
    lines = text.split("\n")

    if not lines or lines[0].rstrip() != DELIMITER:
        return SplitDocument(frontmatter_text=None, body=text, body_line=1)

    for i in range(1, len(lines)):
        if lines[i].rstrip() == DELIMITER:
            return SplitDocument(
                frontmatter_text="\n".join(lines[1:i]),
                body="\n".join(lines[i + 1:]),
                body_line=i + 2,
            )

    raise FrontmatterError("Unterminated frontmatter block", line=1)


def split_tool_list(value: str) -> list[str]:
    """Split a comma separated tool list, respecting parentheses.

    ``"Read, Bash(git add:*, git commit:*)"`` yields
    ``["Read", "Bash(git add:*, git commit:*)"]``.
    """
    items: list[str] = []
    depth = 0
    current: list[str] = []

    for char in value:
        if char == "(":
            depth += 1
        elif char == ")" and depth > 0:
            depth -= 1
        if char == "," and depth == 0:
            items.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    items.append("".join(current).strip())

    return [item for item in items if item]


def _scalar_to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Frontmatter:
    """Flat key-value record parsed from a frontmatter block.

    Attributes:
        repaired_keys: Keys whose lines were not valid YAML and were
            read as plain strings instead.
    """

    def __init__(
        self,
        data: dict[str, Any] | None = None,
        repaired_keys: list[str] | None = None,
    ) -> None:
        self._data: dict[str, Any] = dict(data or {})
        self.repaired_keys: list[str] = list(repaired_keys or [])

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Frontmatter):
            return self._data == other._data
        return NotImplemented

    def __repr__(self) -> str:
        return f"Frontmatter({self._data!r})"

    def keys(self) -> list[str]:
        return list(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def get_str(self, key: str, default: str = "") -> str:
        """Get a value as a string.

        Lists are joined with ", ". Missing or null values yield ``default``.
        """
        value = self._data.get(key)
        if value is None:
            return default
        if isinstance(value, list):
            return ", ".join(_scalar_to_str(v) for v in value)
        return _scalar_to_str(value).strip()

    def get_list(self, key: str) -> list[str]:
        """Get a value as a list of strings.

        A plain string is treated as a comma separated list.
        """
        value = self._data.get(key)
        if value is None:
            return []
        if isinstance(value, list):
            return [_scalar_to_str(v).strip() for v in value if v is not None]
        return split_tool_list(_scalar_to_str(value))

    def is_plain(self, key: str) -> bool:
        """Check that a value is a string or a list of strings."""
        value = self._data.get(key)
        if value is None or isinstance(value, str):
            return True
        if isinstance(value, list):
            return all(isinstance(v, str) for v in value)
        return False

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


def _quote_invalid_lines(yaml_text: str) -> tuple[str, list[str]]:
    """Single-quote the values of top-level lines that fail to parse alone.

    Returns:
        Repaired text and the keys whose values were quoted.
    """
    lines: list[str] = []
    repaired: list[str] = []

    for line in yaml_text.split("\n"):
        match = TOP_LEVEL_LINE.match(line)
        if match:
            try:
                yaml.safe_load(line)
            except yaml.YAMLError:
                key, value = match.group(1), match.group(2).strip()
                escaped = value.replace("'", "''")
                line = f"{key}: '{escaped}'"
                repaired.append(key)
        lines.append(line)

    return "\n".join(lines), repaired


def load_frontmatter(
    yaml_text: str, first_line: int = 2, lenient: bool = True
) -> Frontmatter:
    """Parse the YAML of a frontmatter block.

    Args:
        yaml_text: Text between the delimiters.
        first_line: Document line number of the first YAML line, used
            to report error locations.
        lenient: On a YAML error, retry with every top-level line that
            is not valid YAML on its own read as a plain string, the way
            the host reads ``argument-hint: [a] [b]``.

    Raises:
        FrontmatterError: On invalid YAML, a non-mapping root or a
            non-string key.
    """
    repaired_keys: list[str] = []
    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        data = None
        if lenient:
            repaired_text, repaired_keys = _quote_invalid_lines(yaml_text)
            if repaired_keys:
                try:
                    data = yaml.safe_load(repaired_text)
                except yaml.YAMLError:
                    repaired_keys = []
        if not repaired_keys:
            line = None
            mark = getattr(e, "problem_mark", None)
            if mark is not None:
                line = first_line + mark.line
            raise FrontmatterError(f"YAML parse error: {e}", line=line) from e

    if data is None:
        return Frontmatter()
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"Frontmatter must be a YAML mapping, got {type(data).__name__}",
            line=first_line,
        )
    for key in data:
        if not isinstance(key, str):
            raise FrontmatterError(
                f"Frontmatter keys must be strings, got {key!r}", line=first_line
            )
    return Frontmatter(data, repaired_keys)


def parse_frontmatter(text: str) -> tuple[Frontmatter, str]:
    """Parse a document into its frontmatter record and body.

    A document without a frontmatter block yields an empty record and
    the whole text as body.
    """
    split = split_frontmatter(text)
    if split.frontmatter_text is None:
        return Frontmatter(), split.body
    return load_frontmatter(split.frontmatter_text), split.body


def dump_frontmatter(frontmatter: Frontmatter | dict[str, Any], body: str) -> str:
    """Serialize frontmatter and body back into document text."""
    data = frontmatter.to_dict() if isinstance(frontmatter, Frontmatter) else frontmatter
    if not data:
        return body
    yaml_text = yaml.safe_dump(
        data, sort_keys=False, allow_unicode=True, default_flow_style=False
    )
    return f"{DELIMITER}\n{yaml_text}{DELIMITER}\n{body}"


__all__ = [
    "Frontmatter",
    "SplitDocument",
    "dump_frontmatter",
    "load_frontmatter",
    "normalize_newlines",
    "parse_frontmatter",
    "split_frontmatter",
    "split_tool_list",
]
