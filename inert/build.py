"""Core build orchestration: source checks, output setup and folder builds."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence

from .config_loader import FolderSpec, ProjectConfig, load_project
from .console import Console, Spinner
from .dirs import ensure_directory, resolve_out_dir, resolve_output_root, resolve_source_dir
from .errors import ConfigurationError, InvalidProject, MissingSourceDirectory, StageExecutionFailure
from .files import FileInfo, discover_files, get_file_info
from .pipeline import run_pipeline


Discover = Callable[..., Sequence[Path]]
RootBuild = Callable[[ProjectConfig], Any]


@dataclass(slots=True)
class BuildOptions:
    project_dir: Path = field(default_factory=Path.cwd)
    logging: bool = True
    verbose: bool | None = None
    spinner: Spinner | None = None
    fail_fast: bool | None = None


@dataclass(slots=True)
class FileResult:
    file: FileInfo
    result: Any = None
    error: StageExecutionFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class BuildReport:
    files: List[FileResult] = field(default_factory=list)
    aborted: bool = False

    @property
    def failures(self) -> List[FileResult]:
        return [entry for entry in self.files if not entry.ok]

    @property
    def succeeded(self) -> bool:
        return not self.aborted and not self.failures


class BuildOrchestrator:
    def __init__(
        self,
        project: ProjectConfig,
        *,
        console: Console,
        discover: Discover = discover_files,
        fail_fast: bool | None = None,
    ) -> None:
        self._project = project
        self._console = console
        self._discover = discover
        self._fail_fast = project.settings.fail_fast if fail_fast is None else fail_fast
        self.report = BuildReport()

    def run(self) -> bool:
        self.report = BuildReport()
        try:
            self.check_source_dirs()
        except MissingSourceDirectory as exc:
            self._console.error(str(exc))
            self.report.aborted = True
            return False

        try:
            self.prepare_output()
        except OSError as exc:
            self._console.error(f"Failed to create output directories: {exc}")
            self.report.aborted = True
            return False

        for folder in self._project.folders:
            if not self._build_folder(folder):
                self.report.aborted = True
                break
        return self.report.succeeded

    def check_source_dirs(self) -> None:
        missing: Dict[str, Path] = {}
        for name in self._project.source_dirs:
            path = resolve_source_dir(self._project, name)
            if not path.is_dir():
                missing[name] = path
        if missing:
            raise MissingSourceDirectory(missing)

    def prepare_output(self) -> None:
        out_dir = resolve_output_root(self._project)
        if ensure_directory(out_dir, recursive=False):
            self._console.debug(f"Creating output directory: {out_dir}")
        else:
            self._console.debug("Output directory already exists")
        for name in self._project.out_dirs:
            ensure_directory(resolve_out_dir(self._project, name), recursive=True)

    def _build_folder(self, folder: FolderSpec) -> bool:
        path = resolve_source_dir(self._project, folder.folder)
        self._console.debug(f"Building {path}")
        try:
            file_paths = self._discover(path, recursive=folder.recursive)
        except OSError as exc:
            self._console.error(f"Failed to list files in {path}: {exc}")
            return False
        for file_path in file_paths:
            info = get_file_info(file_path, root=path, folder=folder.folder)
            entry = FileResult(file=info)
            try:
                entry.result = run_pipeline(self._project, folder.pipeline, info, console=self._console)
            except StageExecutionFailure as exc:
                self._console.error(str(exc))
                entry.error = exc
            self.report.files.append(entry)
            if entry.error is not None and self._fail_fast:
                return False
        return True


def build(options: BuildOptions, *, root_build: RootBuild | None = None) -> bool:
    """Build the project in ``options.project_dir``.

    Folder groups are built first so that ``root_build`` sees every artifact
    they produce; it is only called when the folder builds succeeded.
    """

    verbose = True if options.verbose is None else options.verbose
    console = Console.from_flags(logging=options.logging, verbose=verbose, spinner=options.spinner)
    project_dir = Path(options.project_dir).resolve()

    try:
        project = load_project(project_dir)
    except ConfigurationError as exc:
        console.error(str(exc))
        return False
    except InvalidProject as exc:
        console.error(str(exc))
        console.error("You can create a new project using the following command:")
        console.error(f"$ inert init {project_dir}")
        return False

    if options.logging and options.verbose is None and project.settings.log_level:
        console = Console(project.settings.log_level, options.spinner)

    if options.spinner is not None:
        project.custom.setdefault("spinner", options.spinner)

    orchestrator = BuildOrchestrator(project, console=console, fail_fast=options.fail_fast)
    if not orchestrator.run():
        return False
    if root_build is not None:
        root_build(project)
    return True
