"""Command-line entry point.

Usage::

    tsinit --scope acme --name widget --mode multi
    python -m tsinit            # asks for every answer interactively
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.prompt import Confirm, Prompt

from tsinit.config import Config
from tsinit.scaffolder import LayoutMode, ProjectInitializer, ProjectOptions, ScaffoldError
from tsinit.utils import console


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsinit",
        description="tsinit -- scaffold a TypeScript project (single package or workspace)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  tsinit --name my-lib --no-tests --yes\n"
            "  tsinit --scope acme --name widget --mode multi -o ./projects\n"
        ),
    )
    parser.add_argument("--scope", default=None, help="Package scope, e.g. 'acme' for @acme/...")
    parser.add_argument("--name", default=None, help="Project name (also the folder name)")
    parser.add_argument("--author", default=None, help="package.json author")
    parser.add_argument("--description", default=None, help="package.json description")
    parser.add_argument(
        "--tests",
        dest="include_tests",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate a test folder (default: yes)",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in LayoutMode],
        default=None,
        help="Code organization: single package or multi-package workspace",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory of the new project (default: current directory)",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Do not prompt; use defaults for anything not given",
    )
    return parser


def collect_answers(args: argparse.Namespace) -> tuple[ProjectOptions, LayoutMode]:
    """Fill in every answer not given on the command line.

    Raises:
        ValueError: If no project name was provided.
    """
    interactive = not args.yes

    scope = args.scope
    if scope is None and interactive:
        scope = Prompt.ask("Project scope", default="", show_default=False)

    name = args.name
    if name is None and interactive:
        name = Prompt.ask("Project name", default="", show_default=False)
    if not name or not name.strip():
        raise ValueError("a project name is required")

    author = args.author
    if author is None:
        author = Prompt.ask("Project author", default="", show_default=False) if interactive else ""

    description = args.description
    if description is None:
        description = (
            Prompt.ask("Project description", default="", show_default=False)
            if interactive
            else ""
        )

    include_tests = args.include_tests
    if include_tests is None:
        include_tests = Confirm.ask("Generate a test folder?", default=True) if interactive else True

    mode_value = args.mode
    if mode_value is None:
        mode_value = (
            Prompt.ask(
                "Code organization",
                choices=[m.value for m in LayoutMode],
                default=LayoutMode.SINGLE.value,
            )
            if interactive
            else LayoutMode.SINGLE.value
        )

    options = ProjectOptions(
        scope=scope or None,
        name=name,
        author=author,
        description=description,
        include_tests=include_tests,
    )
    return options, LayoutMode(mode_value)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``tsinit`` / ``python -m tsinit``."""
    args = build_parser().parse_args(argv)
    config = Config.from_env()
    if args.output:
        config.output_dir = Path(args.output)

    try:
        options, mode = collect_answers(args)
    except ValueError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(2)

    root = config.output_dir / options.name
    initializer = ProjectInitializer(config)
    try:
        initializer.init(root, options, mode)
    except (ScaffoldError, OSError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
