"""Shared test fixtures for Skill-Forge tests.

Fixtures:
- isolated_env: HOME and working directory in a temp dir, FORGE_* cleared
- host_root: a populated ``.claude`` directory with commands, agents, skills
- write_doc: helper for writing a document below a directory
- reset_catalog / reset_logging: keep singletons and handlers from leaking
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from skill_forge.catalog import Catalog
from skill_forge.core.logging import LOGGER_NAME, PACKAGE_LOGGER_NAME

REVIEW_COMMAND = """---
description: Review a file for problems
argument-hint: "[file] [focus]"
allowed-tools: Read, Bash(git diff:*)
---
Review $1 with a focus on $2.

!`git diff $1`
"""

COMMIT_COMMAND = """---
description: Create a git commit
argument-hint: "[message]"
allowed-tools: Bash(git add:*), Bash(git commit:*)
---
Create a commit with message: $ARGUMENTS
"""

REVIEWER_AGENT = """---
name: code-reviewer
description: Reviews code for quality and security
tools: Read, Grep, Glob
model: sonnet
---
You are a senior code reviewer.
"""

TESTING_SKILL = """---
name: testing
description: Guidance for writing tests
---
# Testing

Write small focused tests.
"""


@pytest.fixture
def write_doc() -> Callable[[Path, str], Path]:
    """Return a helper that writes text to a path, creating parents."""

    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def host_root(tmp_path: Path, write_doc: Callable[[Path, str], Path]) -> Path:
    """Create a host directory holding one document of every kind."""
    root = tmp_path / "host" / ".claude"
    write_doc(root / "commands" / "review.md", REVIEW_COMMAND)
    write_doc(root / "commands" / "git" / "commit.md", COMMIT_COMMAND)
    write_doc(root / "agents" / "code-reviewer.md", REVIEWER_AGENT)
    write_doc(root / "skills" / "testing" / "SKILL.md", TESTING_SKILL)
    return root


@pytest.fixture
def isolated_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Run with HOME and the working directory inside a temp directory."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    for key in list(os.environ):
        if key.startswith("FORGE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    yield work


@pytest.fixture(autouse=True)
def reset_catalog() -> Generator[None, None, None]:
    """Reset the catalog singleton around every test."""
    Catalog.reset_instance()
    yield
    Catalog.reset_instance()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Remove handlers installed by setup_logging."""
    yield
    for name in (LOGGER_NAME, PACKAGE_LOGGER_NAME):
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
