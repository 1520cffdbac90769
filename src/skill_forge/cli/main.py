"""CLI entry point for Skill-Forge."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from skill_forge import __version__, scaffold
from skill_forge.catalog import (
    EXTRA_SCOPE,
    Catalog,
    CatalogLoader,
    SearchRoot,
    get_default_search_roots,
    normalize_name,
)
from skill_forge.commands import Invocation, Invoker
from skill_forge.config import ConfigLoader, SkillForgeConfig
from skill_forge.core import SkillForgeError, get_logger, setup_logging
from skill_forge.core.constants import AGENTS_DIR, COMMANDS_DIR, SKILLS_DIR
from skill_forge.documents import DocumentKind, read_document
from skill_forge.lint import Linter
from skill_forge.tasks import TaskList, build_loop_prompt

from .output import Output

logger = get_logger("cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

KIND_DIRS = {
    DocumentKind.COMMAND: COMMANDS_DIR,
    DocumentKind.AGENT: AGENTS_DIR,
    DocumentKind.SKILL: SKILLS_DIR,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all sub-commands.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="skillforge",
        description="Skill-Forge - catalog, lint and render prompt documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  skillforge list --kind command
  skillforge show git:commit
  skillforge lint .claude --strict
  skillforge render review src/app.py
  skillforge new positional deploy --dir .claude/commands
  skillforge tasks plans/breakdown.md next
""",
    )
    parser.add_argument(
        "--version", action="version", version=f"skillforge {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug logging"
    )
    parser.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )
    parser.add_argument(
        "--root",
        action="append",
        type=Path,
        default=[],
        metavar="DIR",
        help="Additional host directory to search (repeatable)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        help="Also write logs to ~/.skillforge/logs/skillforge.log",
    )
    parser.add_argument(
        "--log-file", type=Path, default=None, help="Also write logs to this file"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list", help="List discovered documents")
    list_parser.add_argument(
        "--kind",
        choices=[k.value for k in DocumentKind],
        default=None,
        help="Only list documents of this kind",
    )
    list_parser.add_argument("--namespace", default=None, help="Only this namespace")
    list_parser.add_argument("--search", default=None, help="Filter by name or description")
    list_parser.add_argument("--json", action="store_true", help="Output JSON")

    show_parser = subparsers.add_parser("show", help="Show a document")
    show_parser.add_argument("name", help="Document name (e.g. git:commit) or file path")
    show_parser.add_argument("--json", action="store_true", help="Output JSON")

    lint_parser = subparsers.add_parser("lint", help="Lint prompt documents")
    lint_parser.add_argument(
        "paths", nargs="*", type=Path, help="Files or directories (default: search roots)"
    )
    lint_parser.add_argument("--strict", action="store_true", help="Fail on warnings")
    lint_parser.add_argument("--json", action="store_true", help="Output JSON")

    render_parser = subparsers.add_parser("render", help="Render a command with arguments")
    render_parser.add_argument("name", help="Command name")
    render_parser.add_argument("args", nargs="*", help="Command arguments")

    new_parser = subparsers.add_parser("new", help="Scaffold a new document")
    new_parser.add_argument(
        "pattern", help=f"Pattern ({', '.join(scaffold.PATTERNS)})"
    )
    new_parser.add_argument(
        "name", nargs="?", default=None, help="Document name (omit to print to stdout)"
    )
    new_parser.add_argument(
        "--dir", type=Path, default=None, help="Target directory (default: project root)"
    )
    new_parser.add_argument("--force", action="store_true", help="Overwrite existing file")

    tasks_parser = subparsers.add_parser("tasks", help="Work with a task breakdown")
    tasks_parser.add_argument("file", type=Path, help="Breakdown markdown file")
    tasks_parser.add_argument(
        "action",
        nargs="?",
        choices=["list", "next", "done", "prompt"],
        default="list",
        help="Action (default: list)",
    )
    tasks_parser.add_argument("task", nargs="*", help="Task text for 'done'")
    tasks_parser.add_argument("--skip-tests", action="store_true", help="Prompt without test steps")
    tasks_parser.add_argument("--skip-lint", action="store_true", help="Prompt without lint step")
    tasks_parser.add_argument("--json", action="store_true", help="Output JSON")

    return parser


def build_loader(config: SkillForgeConfig, extra_roots: list[Path]) -> CatalogLoader:
    roots = get_default_search_roots(config)
    roots.extend(SearchRoot(p.expanduser().resolve(), EXTRA_SCOPE) for p in extra_roots)
    return CatalogLoader(roots, max_file_bytes=config.lint.max_file_bytes)


def load_catalog(
    config: SkillForgeConfig, extra_roots: list[Path], out: Output
) -> Catalog:
    """Build a catalog from the configured search roots."""
    catalog = Catalog()
    failures = catalog.load(build_loader(config, extra_roots))
    if failures:
        out.warning(
            f"{len(failures)} document(s) could not be loaded (run 'skillforge lint' for details)"
        )
    return catalog


def cmd_list(args: argparse.Namespace, config: SkillForgeConfig, out: Output) -> int:
    catalog = load_catalog(config, args.root, out)
    kind = DocumentKind(args.kind) if args.kind else None
    documents = catalog.list_documents(kind, args.namespace)
    if args.search:
        documents = [d for d in documents if d.matches_query(args.search)]

    if args.json or config.display.json_output:
        out.json([d.to_dict() for d in documents])
    else:
        out.documents(documents)
    return EXIT_OK


def cmd_show(args: argparse.Namespace, config: SkillForgeConfig, out: Output) -> int:
    if Path(args.name).is_file():
        document = read_document(Path(args.name))
    else:
        catalog = load_catalog(config, args.root, out)
        name = normalize_name(args.name)
        document = catalog.get(name)
        if document is None:
            message = f"Unknown document: {args.name}"
            suggestion = catalog.suggest(name, kind=None)
            if suggestion:
                message += f". Did you mean {suggestion}?"
            out.error(message)
            return EXIT_FAILURE

    if args.json or config.display.json_output:
        data = document.to_dict()
        data["body"] = document.body
        out.json(data)
    else:
        out.raw(document.get_help())
        out.raw(document.body)
    return EXIT_OK


def cmd_lint(args: argparse.Namespace, config: SkillForgeConfig, out: Output) -> int:
    lint_config = config.lint
    if args.strict:
        lint_config = lint_config.model_copy(update={"strict": True})
    linter = Linter(lint_config)

    if args.paths:
        report = linter.lint_paths(args.paths)
    else:
        report = linter.lint_catalog(build_loader(config, args.root))

    if args.json or config.display.json_output:
        out.json(report.to_dict())
    else:
        out.report(report)
    return EXIT_OK if report.ok else EXIT_FAILURE


def cmd_render(args: argparse.Namespace, config: SkillForgeConfig, out: Output) -> int:
    catalog = load_catalog(config, args.root, out)
    invocation = Invocation(
        name=normalize_name(args.name),
        args=list(args.args),
        arguments_text=" ".join(args.args),
        raw=" ".join([f"/{args.name}", *args.args]),
    )
    result = Invoker(catalog).invoke(invocation)
    if not result.success:
        out.error(result.error or "Render failed")
        return EXIT_FAILURE

    out.raw(result.output)
    for warning in result.warnings:
        out.warning(warning)
    for shell_line in result.shell_lines:
        logger.info("Shell line (not executed) at line %d: %s", shell_line.line, shell_line.command)
    return EXIT_OK


def cmd_new(args: argparse.Namespace, config: SkillForgeConfig, out: Output) -> int:
    if args.name is None:
        out.raw(scaffold.generate(args.pattern))
        return EXIT_OK

    directory = args.dir
    if directory is None:
        kind = scaffold.get_pattern(args.pattern).kind
        directory = config.paths.project_root / KIND_DIRS[kind]

    path = scaffold.write(args.pattern, args.name, directory, force=args.force)
    out.success(f"Created {path}")
    return EXIT_OK


def cmd_tasks(args: argparse.Namespace, config: SkillForgeConfig, out: Output) -> int:
    if args.action == "prompt":
        out.raw(
            build_loop_prompt(
                args.file.parent, skip_tests=args.skip_tests, skip_lint=args.skip_lint
            )
        )
        return EXIT_OK

    task_list = TaskList.load(args.file)

    if args.action == "next":
        task = task_list.next_task()
        if task is None:
            out.success("All tasks complete")
        else:
            out.info(task.text)
        return EXIT_OK

    if args.action == "done":
        if not args.task:
            out.error("Task text is required for 'done'")
            return EXIT_USAGE
        task = task_list.mark_complete(" ".join(args.task))
        task_list.save()
        out.success(f"Completed: {task.text}")
        return EXIT_OK

    if args.json or config.display.json_output:
        out.json(
            {
                "tasks": [{"text": t.text, "done": t.done, "line": t.line} for t in task_list.tasks],
                **task_list.counts(),
            }
        )
    else:
        out.tasks(task_list)
    return EXIT_OK


HANDLERS = {
    "list": cmd_list,
    "show": cmd_show,
    "lint": cmd_lint,
    "render": cmd_render,
    "new": cmd_new,
    "tasks": cmd_tasks,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the skillforge CLI.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:].

    Returns:
        Exit code (0 success, 1 failure, 2 usage error).
    """
    parser = create_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits for --help, --version and usage errors
        return e.code if isinstance(e.code, int) else EXIT_OK

    if args.command is None:
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    setup_logging(
        level=logging.DEBUG if args.verbose else None,
        log_file=args.log_file,
        file_logging=args.log or args.log_file is not None,
    )

    try:
        config = ConfigLoader().load_all()
    except SkillForgeError as e:
        Output().error(str(e))
        print(
            "Hint: Check your config files at ~/.skillforge/settings.json or "
            ".skillforge/settings.json",
            file=sys.stderr,
        )
        return EXIT_FAILURE

    out = Output(color=config.display.color and not args.no_color)

    try:
        return HANDLERS[args.command](args, config, out)
    except SkillForgeError as e:
        logger.debug("Command failed: %s", e)
        out.error(str(e))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        out.error("Interrupted")
        return 130
    except Exception as e:
        logger.exception("Unexpected error")
        out.error(f"Unexpected error: {e}")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
