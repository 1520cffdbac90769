"""Prompt for one iteration of the implementation loop."""

from __future__ import annotations

from pathlib import Path

BREAKDOWN_FILE = "breakdown.md"
PROGRESS_FILE = "progress.txt"
DESIGN_FILE = "design.md"

COMPLETE_MARKER = "<promise>COMPLETE</promise>"


def build_loop_prompt(
    plans_dir: Path,
    skip_tests: bool = False,
    skip_lint: bool = False,
) -> str:
    """Build the instruction prompt for a single loop iteration.

    The prompt references the breakdown and progress files (and the
    design file when it exists) and numbers its steps according to
    which checks are skipped.

    Args:
        plans_dir: Directory holding the plan files.
        skip_tests: Omit the test writing and running steps.
        skip_lint: Omit the linting step.
    """
    refs = [f"@{plans_dir / BREAKDOWN_FILE}", f"@{plans_dir / PROGRESS_FILE}"]
    if (plans_dir / DESIGN_FILE).is_file():
        refs.append(f"@{plans_dir / DESIGN_FILE}")

    lines = [" ".join(refs), "", "1. Find the highest-priority incomplete task and implement it."]
    step = 2

    if not skip_tests:
        lines.append(f"{step}. Write tests for the feature.")
        lines.append(f"{step + 1}. Run tests and ensure they pass before proceeding.")
        step += 2

    if not skip_lint:
        lines.append(f"{step}. Run linting and ensure it passes before proceeding.")
        step += 1

    lines.append(
        f"{step}. Update the breakdown to mark the task as complete "
        "(change '- [ ]' to '- [x]')."
    )
    step += 1

    lines.append(f"{step}. Append your progress to {PROGRESS_FILE}.")
    lines.append(f"{step + 1}. Commit your changes with a descriptive message.")

    final = "ONLY WORK ON A SINGLE TASK."
    if not skip_tests:
        final += " Do not proceed if tests fail."
    if not skip_lint:
        final += " Do not proceed if linting fails."
    lines.append(final)
    lines.append(f"If ALL tasks in the breakdown are complete, output {COMPLETE_MARKER}.")

    return "\n".join(lines)
