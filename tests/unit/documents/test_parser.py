"""Tests for the document parser."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from skill_forge.core import DocumentError
from skill_forge.documents import (
    DocumentKind,
    DocumentParser,
    Frontmatter,
    PromptDocument,
    derive_name,
    find_name_root,
    infer_kind,
    read_document,
)


@pytest.fixture
def parser() -> DocumentParser:
    """Create parser instance."""
    return DocumentParser()


class TestDeriveName:
    """Tests for derive_name."""

    def test_top_level_command(self, tmp_path: Path) -> None:
        """Test top level command."""
        root = tmp_path / "commands"
        assert derive_name(root / "review.md", DocumentKind.COMMAND, root) == ("review", "")

    def test_namespaced_command(self, tmp_path: Path) -> None:
        """Sub-directories become colon separated namespaces."""
        root = tmp_path / "commands"
        path = root / "frontend" / "react" / "component.md"
        assert derive_name(path, DocumentKind.COMMAND, root) == (
            "component",
            "frontend:react",
        )

    def test_skill_directory(self, tmp_path: Path) -> None:
        """Test skill directory."""
        path = tmp_path / "skills" / "testing" / "SKILL.md"
        assert derive_name(path, DocumentKind.SKILL) == ("testing", "")

    def test_loose_skill(self, tmp_path: Path) -> None:
        """Test loose skill."""
        path = tmp_path / "skills" / "testing.md"
        assert derive_name(path, DocumentKind.SKILL) == ("testing", "")

    def test_agent(self, tmp_path: Path) -> None:
        """Test agent."""
        path = tmp_path / "agents" / "reviewer.md"
        assert derive_name(path, DocumentKind.AGENT) == ("reviewer", "")


class TestInferKind:
    """Tests for infer_kind and find_name_root."""

    @pytest.mark.parametrize(
        ("relative", "kind"),
        [
            ("commands/review.md", DocumentKind.COMMAND),
            ("commands/git/commit.md", DocumentKind.COMMAND),
            ("agents/reviewer.md", DocumentKind.AGENT),
            ("skills/testing/SKILL.md", DocumentKind.SKILL),
            ("skills/testing.md", DocumentKind.SKILL),
            ("elsewhere/notes.md", DocumentKind.COMMAND),
        ],
    )
    def test_infer_kind(self, tmp_path: Path, relative: str, kind: DocumentKind) -> None:
        """Test infer kind."""
        assert infer_kind(tmp_path / relative) == kind

    def test_nearest_directory_wins(self, tmp_path: Path) -> None:
        """A commands directory inside agents/ still means command."""
        path = tmp_path / "agents" / "commands" / "x.md"
        assert infer_kind(path) == DocumentKind.COMMAND

    def test_find_name_root(self, tmp_path: Path) -> None:
        """Test find name root."""
        path = tmp_path / ".claude" / "commands" / "git" / "commit.md"
        assert find_name_root(path, DocumentKind.COMMAND) == tmp_path / ".claude" / "commands"
        assert find_name_root(tmp_path / "x.md", DocumentKind.COMMAND) is None


class TestDocumentParserParse:
    """Tests for DocumentParser.parse."""

    def test_command(self, parser: DocumentParser) -> None:
        """Test command."""
        result = parser.parse(
            "---\ndescription: Review\nargument-hint: \"[file]\"\n---\nReview $1\n",
            DocumentKind.COMMAND,
            name="review",
        )
        assert result.ok
        doc = result.document
        assert doc is not None
        assert doc.name == "review"
        assert doc.description == "Review"
        assert doc.argument_hint == "[file]"
        assert doc.body == "Review $1\n"
        assert doc.body_line == 5
        assert doc.has_frontmatter

    def test_command_ignores_frontmatter_name(self, parser: DocumentParser) -> None:
        """Commands are always named by location."""
        result = parser.parse(
            "---\nname: other\ndescription: x\n---\nBody", DocumentKind.COMMAND, name="real"
        )
        assert result.document is not None
        assert result.document.name == "real"

    def test_agent_frontmatter_name_wins(self, parser: DocumentParser) -> None:
        """Test agent frontmatter name wins."""
        result = parser.parse(
            "---\nname: code-reviewer\ndescription: x\n---\nBody",
            DocumentKind.AGENT,
            name="reviewer",
        )
        assert result.document is not None
        assert result.document.name == "code-reviewer"
        assert any("differs" in w for w in result.warnings)

    def test_no_frontmatter(self, parser: DocumentParser) -> None:
        """Test no frontmatter."""
        result = parser.parse("Just do it", DocumentKind.COMMAND, name="plain")
        assert result.ok
        assert result.document is not None
        assert not result.document.has_frontmatter
        assert result.document.body == "Just do it"

    def test_yaml_error(self, parser: DocumentParser) -> None:
        """YAML errors are reported, not raised."""
        result = parser.parse(
            "---\nname: test\n  invalid: indentation\n---\nBody", DocumentKind.COMMAND, name="x"
        )
        assert not result.ok
        assert result.document is None
        assert "YAML" in result.errors[0]
        assert result.error_line == 3

    def test_unterminated(self, parser: DocumentParser) -> None:
        """Test unterminated."""
        result = parser.parse("---\ndescription: x\n", DocumentKind.COMMAND, name="x")
        assert result.errors == ["Unterminated frontmatter block"]
        assert result.error_line == 1

    def test_missing_name(self, parser: DocumentParser) -> None:
        """Test missing name."""
        result = parser.parse("---\ndescription: x\n---\nBody", DocumentKind.AGENT)
        assert result.errors == ["Document has no name"]


class TestDocumentParserParseFile:
    """Tests for DocumentParser.parse_file."""

    def test_namespaced_command(
        self,
        parser: DocumentParser,
        host_root: Path,
    ) -> None:
        """Test namespaced command."""
        root = host_root / "commands"
        result = parser.parse_file(root / "git" / "commit.md", DocumentKind.COMMAND, root, "user")
        doc = result.document
        assert doc is not None
        assert doc.qualified_name == "git:commit"
        assert doc.path == root / "git" / "commit.md"
        assert doc.scope == "user"
        assert result.path == root / "git" / "commit.md"

    def test_skill(self, parser: DocumentParser, host_root: Path) -> None:
        """Test skill."""
        path = host_root / "skills" / "testing" / "SKILL.md"
        result = parser.parse_file(path, DocumentKind.SKILL)
        assert result.document is not None
        assert result.document.name == "testing"

    def test_missing_file(self, parser: DocumentParser, tmp_path: Path) -> None:
        """Test missing file."""
        result = parser.parse_file(tmp_path / "nope.md", DocumentKind.COMMAND)
        assert not result.ok
        assert result.errors[0].startswith("Failed to read file")

    def test_invalid_utf8(self, parser: DocumentParser, tmp_path: Path) -> None:
        """Test invalid utf8."""
        path = tmp_path / "bad.md"
        path.write_bytes(b"\xff\xfe\x00bad")
        result = parser.parse_file(path, DocumentKind.COMMAND)
        assert not result.ok


class TestReadDocument:
    """Tests for read_document."""

    def test_reads_and_infers(self, host_root: Path) -> None:
        """Test reads and infers."""
        doc = read_document(host_root / "agents" / "code-reviewer.md")
        assert doc.kind == DocumentKind.AGENT
        assert doc.name == "code-reviewer"

    def test_failure_raises(
        self, tmp_path: Path, write_doc: Callable[[Path, str], Path]
    ) -> None:
        """Test failure raises."""
        path = write_doc(tmp_path / "commands" / "bad.md", "---\nunterminated\n")
        with pytest.raises(DocumentError, match="Unterminated"):
            read_document(path)


class TestPromptDocument:
    """Tests for PromptDocument properties."""

    def make(self, data: dict, kind: DocumentKind = DocumentKind.COMMAND) -> PromptDocument:
        return PromptDocument(kind=kind, name="deploy", body="Deploy $1", frontmatter=Frontmatter(data))

    def test_qualified_name(self) -> None:
        """Test qualified name."""
        doc = self.make({})
        assert doc.qualified_name == "deploy"
        doc.namespace = "ops:cloud"
        assert doc.qualified_name == "ops:cloud:deploy"

    def test_properties(self) -> None:
        """Test properties."""
        doc = self.make(
            {
                "description": "Deploy",
                "allowed-tools": "Read, Bash(kubectl:*)",
                "model": "haiku",
                "permissionMode": "plan",
            }
        )
        assert doc.description == "Deploy"
        assert doc.allowed_tools == ["Read", "Bash(kubectl:*)"]
        assert doc.model == "haiku"
        assert doc.permission_mode == "plan"

    def test_matches_query(self) -> None:
        """Test matches query."""
        doc = self.make({"description": "Ship to production"})
        assert doc.matches_query("DEPLOY")
        assert doc.matches_query("production")
        assert not doc.matches_query("review")

    def test_to_dict(self) -> None:
        """Test serialization to a dictionary."""
        doc = self.make({"description": "Deploy"})
        data = doc.to_dict()
        assert data["kind"] == "command"
        assert data["qualified_name"] == "deploy"
        assert data["frontmatter"] == {"description": "Deploy"}

    def test_get_help(self) -> None:
        """Test get help."""
        doc = self.make({"description": "Deploy", "argument-hint": "[env]"})
        help_text = doc.get_help()
        assert help_text.startswith("/deploy - Deploy")
        assert "Usage: /deploy [env]" in help_text
