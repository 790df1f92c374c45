"""Command line interface for the inert build tool."""
from __future__ import annotations

from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Iterable
import sys

from .build import BuildOptions, BuildOrchestrator, build
from .config_loader import InvalidStage, load_project
from .console import Console
from .errors import InvalidProject, MissingSourceDirectory
from .scaffold import init_project


def _parse_arguments(argv: Iterable[str]) -> Namespace:
    parser = ArgumentParser(prog="inert", description="Pipeline-driven static site builder")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser("build", help="Build the project")
    build_parser.add_argument("--project-dir", type=Path, default=None, help="Project directory (default: cwd)")
    build_parser.add_argument("--quiet", action="store_true", help="Disable all diagnostic output")
    build_parser.add_argument("--no-verbose", action="store_true", help="Hide detailed diagnostic output")
    build_parser.add_argument("--fail-fast", action="store_true", default=None, help="Stop at the first failing file")

    validate_parser = subparsers.add_parser("validate", help="Validate the project configuration")
    validate_parser.add_argument("--project-dir", type=Path, default=None, help="Project directory (default: cwd)")

    init_parser = subparsers.add_parser("init", help="Create a new project")
    init_parser.add_argument("directory", type=Path, help="Directory to create the project in")
    init_parser.add_argument("--force", action="store_true", help="Overwrite existing files")

    return parser.parse_args(list(argv))


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_arguments(sys.argv[1:] if argv is None else argv)
    workspace = Path.cwd()

    if args.command == "build":
        return _handle_build(args, workspace)
    if args.command == "validate":
        return _handle_validate(args, workspace)
    if args.command == "init":
        return _handle_init(args)
    raise ValueError(f"Unknown command: {args.command}")


def _handle_build(args: Namespace, workspace: Path) -> int:
    options = BuildOptions(
        project_dir=args.project_dir or workspace,
        logging=not args.quiet,
        verbose=False if args.no_verbose else None,
        fail_fast=args.fail_fast,
    )
    return 0 if build(options) else 1


def _handle_validate(args: Namespace, workspace: Path) -> int:
    console = Console("info")
    project_dir = args.project_dir or workspace
    try:
        project = load_project(project_dir)
        BuildOrchestrator(project, console=console).check_source_dirs()
    except (InvalidProject, MissingSourceDirectory) as exc:
        console.error(str(exc))
        return 1

    for folder in project.folders:
        for entry in folder.pipeline:
            if isinstance(entry, InvalidStage):
                console.warn(f"Folder '{folder.folder}': pipeline entry #{entry.position} is invalid: {entry.reason}")
    print("Validation successful")
    return 0


def _handle_init(args: Namespace) -> int:
    try:
        created = init_project(args.directory, force=args.force)
    except FileExistsError as exc:
        Console("error").error(str(exc))
        return 1
    for path in created:
        print(f"Created {path}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
