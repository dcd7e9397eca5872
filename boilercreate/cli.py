"""Command-line interface: ``boilercreate create``.

Collects a ``Selection`` from flags (and, unless ``--yes`` is given, from
interactive prompts), plans the project, then materializes it.  This is the
only place scaffold errors are caught and turned into an exit code.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path
from typing import Iterable, Optional

from rich.prompt import Confirm, Prompt

from boilercreate import __version__
from boilercreate.catalog import Category, Framework, PackageManager, label_for
from boilercreate.config import ScaffoldConfig
from boilercreate.errors import ScaffoldError
from boilercreate.registry import load_default_registry
from boilercreate.scaffolder import ProjectGenerator, ScaffoldPlan
from boilercreate.scaffolder.manifest import run_script_command
from boilercreate.selection import PROJECT_NAME_PATTERN, Selection
from boilercreate.utils import (
    console,
    create_progress,
    format_duration,
    print_error,
    print_panel,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
)

_CATEGORY_TITLES: dict[Category, str] = {
    Category.LIBRARY: "Libraries",
    Category.MIDDLEWARE: "Middleware",
    Category.SERVICE: "Services",
}

# (Selection field, question); the argparse dest matches the field name
_TOGGLE_PROMPTS: tuple[tuple[str, str], ...] = (
    ("use_typescript", "Use TypeScript?"),
    ("use_docker", "Add Docker configuration?"),
    ("use_cicd", "Add a GitHub Actions workflow?"),
    ("use_eslint", "Set up ESLint?"),
    ("use_prettier", "Set up Prettier?"),
    ("use_git", "Initialize a git repository?"),
)

_CATEGORY_DESTS: dict[Category, str] = {
    Category.LIBRARY: "libraries",
    Category.MIDDLEWARE: "middleware",
    Category.SERVICE: "services",
}


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boilercreate",
        description="Boilercreate -- generate a ready-to-run backend project skeleton",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  boilercreate create\n"
            "  boilercreate create my-api -m cors -m helmet -y\n"
            "  boilercreate create my-api -l mongoose -s redis --docker -p pnpm -y\n"
            "  boilercreate create --list\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create a new backend project")
    create.add_argument("name", nargs="?", default=None, help="Project name")
    create.add_argument(
        "--output", "-o",
        default=None,
        help="Directory the project is created in (default: current directory)",
    )
    create.add_argument(
        "--framework",
        default=None,
        choices=[framework.value for framework in Framework],
        help="Backend framework (default: express)",
    )
    create.add_argument(
        "--library", "-l",
        dest="libraries", action="append", default=None,
        help="Library to include; repeat or comma-separate for several",
    )
    create.add_argument(
        "--middleware", "-m",
        dest="middleware", action="append", default=None,
        help="Middleware to include; repeat or comma-separate for several",
    )
    create.add_argument(
        "--service", "-s",
        dest="services", action="append", default=None,
        help="Service to include; repeat or comma-separate for several",
    )
    create.add_argument("--typescript", dest="use_typescript", action="store_true", default=None)
    create.add_argument("--docker", dest="use_docker", action="store_true", default=None)
    create.add_argument("--cicd", dest="use_cicd", action="store_true", default=None)
    create.add_argument("--no-eslint", dest="use_eslint", action="store_false", default=None)
    create.add_argument("--no-prettier", dest="use_prettier", action="store_false", default=None)
    create.add_argument("--no-git", dest="use_git", action="store_false", default=None)
    create.add_argument(
        "--package-manager", "-p",
        default=None,
        help="npm, yarn or pnpm (default: npm)",
    )
    create.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Do not prompt; use the given flags and defaults",
    )
    create.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the files that would be generated and write nothing",
    )
    create.add_argument(
        "--install",
        action="store_true",
        help="Run the install commands (and git init) in the new project",
    )
    create.add_argument(
        "--list",
        action="store_true",
        help="List the available libraries, middleware and services and exit",
    )
    return parser


def split_identifiers(values: Optional[Iterable[str]]) -> Optional[list[str]]:
    """Flatten repeated and comma-separated flag values, keeping their order.

    Returns ``None`` when the flag was not given at all.
    """
    if values is None:
        return None
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


# ---------------------------------------------------------------------------
# Selection collection
# ---------------------------------------------------------------------------


def collect_selection(args: argparse.Namespace, interactive: bool) -> Selection:
    """Build the ``Selection`` from *args*, prompting for what is missing.

    In non-interactive mode every unanswered field keeps its model default.
    """
    answers: dict[str, object] = {}

    name = args.name
    if name is None and interactive:
        name = _ask_project_name()
    if name is not None:
        answers["project_name"] = name

    framework = args.framework
    if framework is None and interactive:
        framework = Prompt.ask(
            "Framework",
            choices=[item.value for item in Framework],
            default=Framework.EXPRESS.value,
        )
    if framework is not None:
        answers["framework"] = framework

    for category, dest in _CATEGORY_DESTS.items():
        identifiers = split_identifiers(getattr(args, dest))
        if identifiers is None and interactive:
            identifiers = _ask_components(category)
        if identifiers is not None:
            answers[dest] = identifiers

    for field, question in _TOGGLE_PROMPTS:
        value = getattr(args, field)
        if value is None and interactive:
            value = Confirm.ask(question, default=Selection.model_fields[field].default)
        if value is not None:
            answers[field] = value

    package_manager = args.package_manager
    if package_manager is None and interactive:
        package_manager = Prompt.ask(
            "Package manager",
            choices=[item.value for item in PackageManager],
            default=PackageManager.NPM.value,
        )
    if package_manager is not None:
        answers["package_manager"] = package_manager

    return Selection(**answers)


def _ask_project_name() -> str:
    default = Selection.model_fields["project_name"].default
    while True:
        name = Prompt.ask("Project name", default=default).strip()
        if PROJECT_NAME_PATTERN.fullmatch(name):
            return name
        print_warning("Use only letters, digits, '-' and '_'.")


def _ask_components(category: Category) -> list[str]:
    """Prompt for a comma-separated list of *category* identifiers."""
    available = load_default_registry().identifiers(category)
    console.print(f"[dim]{_CATEGORY_TITLES[category]}: {', '.join(available)}[/dim]")
    while True:
        answer = Prompt.ask(
            f"{_CATEGORY_TITLES[category]} (comma-separated, blank for none)",
            default="",
            show_default=False,
        )
        identifiers = split_identifiers([answer]) or []
        unknown = [item for item in identifiers if category.resolve(item) is None]
        if not unknown:
            return identifiers
        print_warning(f"Unknown {category.value}: {', '.join(unknown)}")


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def print_catalogue() -> None:
    """Print every selectable component with its label."""
    registry = load_default_registry()
    for category in Category:
        print_summary_table(
            {identifier: label_for(identifier) for identifier in registry.identifiers(category)},
            title=_CATEGORY_TITLES[category],
        )


def print_plan_summary(plan: ScaffoldPlan, root: Path, elapsed: Optional[float] = None) -> None:
    selection = plan.selection
    data = {
        "Project": selection.project_name,
        "Location": str(root),
        "Framework": selection.framework.label,
        "Language": "TypeScript" if selection.use_typescript else "JavaScript",
        "Package manager": selection.package_manager,
    }
    for category in Category:
        data[_CATEGORY_TITLES[category]] = ", ".join(selection.identifiers(category)) or "-"
    data["Folders"] = str(len(plan.folders))
    # package.json is written on top of the planned files
    data["Files"] = str(len(plan.files) + 1)
    if elapsed is not None:
        data["Duration"] = format_duration(elapsed)
    print_summary_table(data, title="Boilercreate")


def print_next_steps(plan: ScaffoldPlan, root: Path, installed: bool) -> None:
    lines = [f"cd {root}"]
    if not installed:
        lines.extend(plan.install_commands)
    lines.append(run_script_command(plan.selection.package_manager, "dev"))
    print_panel(lines, title="Next steps")


# ---------------------------------------------------------------------------
# Post-generation commands
# ---------------------------------------------------------------------------


async def run_setup_commands(plan: ScaffoldPlan, root: Path) -> bool:
    """Run the install commands, then ``git init`` when git is enabled.

    Stops at the first failing command.
    """
    commands = list(plan.install_commands)
    if plan.selection.use_git:
        commands.append("git init")

    for command in commands:
        console.print(f"[cyan]$ {command}[/cyan]")
        returncode, _, stderr = await run_command(command, cwd=root)
        if returncode != 0:
            print_error(f"Command failed ({returncode}): {command}")
            if stderr:
                console.print(stderr, markup=False)
            return False
    return True


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def create(args: argparse.Namespace) -> int:
    """Run the ``create`` subcommand and return the process exit code."""
    if args.list:
        print_catalogue()
        return 0

    config = ScaffoldConfig.from_env(output_dir=args.output)
    selection = collect_selection(args, interactive=not args.yes)
    generator = ProjectGenerator(selection, config)

    started = time.monotonic()
    try:
        plan = generator.plan()
        if args.dry_run:
            print_plan_summary(plan, generator.project_root)
            print_panel(
                [f"{folder}/" for folder in plan.folders] + plan.file_paths() + ["package.json"],
                title="Dry run: nothing written",
            )
            return 0

        with create_progress() as progress:
            progress.add_task("Generating project files...", total=None)
            root = asyncio.run(generator.generate(plan))
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        return 1

    print_plan_summary(plan, root, time.monotonic() - started)
    print_success(f"Created {selection.project_name} in {root}")

    installed = False
    if args.install:
        if not asyncio.run(run_setup_commands(plan, root)):
            return 1
        installed = True

    print_next_steps(plan, root, installed)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point for ``boilercreate`` and ``python -m boilercreate``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "create":
        return create(args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
