"""Slash command invocation against the catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from skill_forge.catalog import Catalog
from skill_forge.documents import DocumentKind, PromptDocument
from skill_forge.templating import (
    FileReference,
    RenderResult,
    ShellLine,
    find_file_references,
    find_shell_lines,
    render,
)

from .parser import Invocation, InvocationParser

logger = logging.getLogger(__name__)


@dataclass
class InvocationResult:
    """Result of invoking a command.

    Attributes:
        success: Whether the command was found and rendered.
        output: Rendered prompt text.
        error: Error message if failed.
        document: Resolved command document.
        render: Render details (unresolved placeholders).
        warnings: Non-fatal observations.
        shell_lines: Shell directives the host would run.
        file_references: Files the host would inline.
    """

    success: bool
    output: str = ""
    error: str | None = None
    document: PromptDocument | None = None
    render: RenderResult | None = None
    warnings: list[str] = field(default_factory=list)
    shell_lines: list[ShellLine] = field(default_factory=list)
    file_references: list[FileReference] = field(default_factory=list)

    @classmethod
    def fail(cls, error: str) -> InvocationResult:
        return cls(success=False, error=error)


class Invoker:
    """Resolves invocations and renders command templates.

    The rendered text is what the host would send as the prompt; shell
    lines and file references are reported but not executed or inlined.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        parser: InvocationParser | None = None,
    ) -> None:
        """Initialize invoker.

        Args:
            catalog: Document catalog. Uses singleton if None.
            parser: Invocation parser. Creates default if None.
        """
        self.catalog = catalog if catalog is not None else Catalog.get_instance()
        self.parser = parser if parser is not None else InvocationParser()

    def invoke(self, invocation: str | Invocation) -> InvocationResult:
        """Render the command named by an invocation.

        Args:
            invocation: Raw ``/name args`` text or a parsed Invocation.

        Returns:
            InvocationResult with the rendered prompt or an error.
        """
        if isinstance(invocation, str):
            try:
                invocation = self.parser.parse(invocation)
            except ValueError as e:
                return InvocationResult.fail(str(e))

        document = self.catalog.get(invocation.name, DocumentKind.COMMAND)
        if document is None:
            error = f"Unknown command: /{invocation.name}"
            suggestion = self.catalog.suggest(invocation.name)
            if suggestion:
                error += f". Did you mean /{suggestion}?"
            return InvocationResult.fail(error)

        return self.render_document(document, invocation)

    def render_document(
        self, document: PromptDocument, invocation: Invocation
    ) -> InvocationResult:
        """Render a document body with the invocation's arguments."""
        rendered = render(document.body, invocation.args)

        warnings: list[str] = []
        if rendered.unresolved:
            unique = list(dict.fromkeys(rendered.unresolved))
            warnings.append(f"Unprocessed placeholders: {', '.join(unique)}")
            if document.argument_hint:
                warnings.append(
                    f"Usage: /{document.qualified_name} {document.argument_hint}"
                )

        logger.debug(
            "Rendered /%s with %d substitutions",
            document.qualified_name,
            rendered.substitutions,
        )

        return InvocationResult(
            success=True,
            output=rendered.text,
            document=document,
            render=rendered,
            warnings=warnings,
            shell_lines=find_shell_lines(document.body, document.body_line),
            file_references=find_file_references(document.body, document.body_line),
        )

    def can_invoke(self, name: str) -> bool:
        """Check if a command exists."""
        return self.catalog.get(name, DocumentKind.COMMAND) is not None
