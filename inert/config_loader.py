"""Project configuration loading and validation logic."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable, Dict, Mapping, MutableMapping, Sequence, Tuple
import inspect
import runpy

from .console import Console
from .dirs import expand_out_dirs
from .errors import ConfigurationError, InvalidProject
from .template import TemplateError


CONFIG_FILENAME = "inert.config.py"

StageFunction = Callable[[Any, Any, Any], Any]


class TraverseMode(str, Enum):
    FLAT = "flat"
    RECURSIVE = "recursive"


@dataclass(frozen=True, slots=True)
class Stage:
    func: StageFunction
    name: str

    def __call__(self, project: "ProjectConfig", file: Any, previous: Any) -> Any:
        return self.func(project, file, previous)


@dataclass(frozen=True, slots=True)
class InvalidStage:
    value: Any
    position: int
    reason: str


PipelineEntry = Stage | InvalidStage


@dataclass(frozen=True, slots=True)
class FolderSpec:
    folder: str
    traverse: TraverseMode
    pipeline: Tuple[PipelineEntry, ...]

    @property
    def recursive(self) -> bool:
        return self.traverse is TraverseMode.RECURSIVE


@dataclass(slots=True)
class Settings:
    log_level: str | None = None
    fail_fast: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "Settings":
        section = data if isinstance(data, Mapping) else {}
        log_level = section.get("log_level")
        return cls(
            log_level=str(log_level).lower() if log_level else None,
            fail_fast=bool(section.get("fail_fast", False)),
        )


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    root: Path
    config_path: Path
    output_dir: str
    source_dirs: Mapping[str, str]
    out_dirs: Mapping[str, str]
    folders: Tuple[FolderSpec, ...]
    settings: Settings = field(default_factory=Settings)
    custom: MutableMapping[str, Any] = field(default_factory=dict)


def _first(section: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in section:
            return section[key]
    return default


def _string_mapping(project_dir: Path, value: Any, *, field_name: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(project_dir, f"{field_name} must be a mapping of names to paths")
    result: Dict[str, str] = {}
    for key, path in value.items():
        name = str(key).strip()
        if not name or "." in name:
            raise ConfigurationError(project_dir, f"{field_name} has an invalid entry name: {key!r}")
        if not isinstance(path, (str, Path)) or not str(path).strip():
            raise ConfigurationError(project_dir, f"{field_name}.{name} must be a non-empty path")
        result[name] = str(path)
    return result


def _stage_name(value: Any) -> str:
    return getattr(value, "__qualname__", None) or getattr(value, "__name__", None) or type(value).__name__


def validate_stage(value: Any, position: int) -> PipelineEntry:
    """Classify a pipeline entry as an invocable :class:`Stage` or an :class:`InvalidStage`."""

    if isinstance(value, (Stage, InvalidStage)):
        return value
    if not callable(value):
        return InvalidStage(value=value, position=position, reason="not callable")
    try:
        signature = inspect.signature(value)
    except (TypeError, ValueError):
        return Stage(func=value, name=_stage_name(value))
    try:
        signature.bind(None, None, None)
    except TypeError:
        return InvalidStage(
            value=value,
            position=position,
            reason="must accept (project, file, previous) positional arguments",
        )
    return Stage(func=value, name=_stage_name(value))


def _folder_from_mapping(project_dir: Path, data: Any, index: int, source_dirs: Mapping[str, str]) -> FolderSpec:
    if not isinstance(data, Mapping):
        raise ConfigurationError(project_dir, f"build.folders[{index}] must be a mapping")
    folder = data.get("folder")
    if not folder or not str(folder).strip():
        raise ConfigurationError(project_dir, f"build.folders[{index}].folder is required")
    folder = str(folder).strip()
    if folder not in source_dirs:
        available = ", ".join(sorted(source_dirs)) or "<none>"
        raise ConfigurationError(
            project_dir,
            f"build.folders[{index}] references unknown source directory '{folder}'. Available: {available}",
        )

    # Accept both the flat layout and the nested ``build`` table.
    nested = data.get("build")
    options: Mapping[str, Any] = nested if isinstance(nested, Mapping) else data

    raw_mode = _first(options, "traverse", "traverse_level", "traverseLevel", default=TraverseMode.FLAT.value)
    try:
        traverse = TraverseMode(str(getattr(raw_mode, "value", raw_mode)).lower())
    except ValueError as exc:
        raise ConfigurationError(
            project_dir,
            f"build.folders[{index}] has unsupported traverse mode '{raw_mode}'. Expected 'flat' or 'recursive'",
        ) from exc

    raw_pipeline = _first(options, "pipeline", "file_pipeline", "filePipeline", default=())
    if isinstance(raw_pipeline, (str, bytes)) or not isinstance(raw_pipeline, Sequence):
        raise ConfigurationError(project_dir, f"build.folders[{index}].pipeline must be a list of stages")
    pipeline = tuple(validate_stage(entry, position) for position, entry in enumerate(raw_pipeline, start=1))
    return FolderSpec(folder=folder, traverse=traverse, pipeline=pipeline)


def project_from_namespace(project_dir: Path, config_path: Path, namespace: Mapping[str, Any]) -> ProjectConfig:
    build_section = namespace.get("build")
    if not isinstance(build_section, Mapping):
        raise ConfigurationError(project_dir, f"{config_path.name} must define a 'build' mapping")

    output_dir = str(_first(build_section, "output_dir", "outDir", default="dist")).strip() or "dist"
    source_dirs = _string_mapping(
        project_dir, _first(build_section, "source_dirs", "sourceDirs"), field_name="build.source_dirs"
    )
    raw_out_dirs = _string_mapping(project_dir, _first(build_section, "out_dirs", "outDirs"), field_name="build.out_dirs")
    try:
        out_dirs = expand_out_dirs(output_dir, raw_out_dirs)
    except TemplateError as exc:
        raise ConfigurationError(project_dir, f"build.out_dirs: {exc}") from exc

    folders_section = build_section.get("folders", [])
    if isinstance(folders_section, (str, bytes)) or not isinstance(folders_section, Sequence):
        raise ConfigurationError(project_dir, "build.folders must be a list")
    folders = tuple(
        _folder_from_mapping(project_dir, entry, index, source_dirs) for index, entry in enumerate(folders_section)
    )

    custom = namespace.get("custom")
    if custom is not None and not isinstance(custom, MutableMapping):
        raise ConfigurationError(project_dir, "'custom' must be a mapping")

    settings = Settings.from_mapping(namespace.get("settings"))
    if settings.log_level is not None and settings.log_level not in Console.LEVELS:
        raise ConfigurationError(
            project_dir,
            f"settings.log_level must be one of: {', '.join(Console.LEVELS)} (got '{settings.log_level}')",
        )

    return ProjectConfig(
        root=project_dir,
        config_path=config_path,
        output_dir=output_dir,
        source_dirs=source_dirs,
        out_dirs=out_dirs,
        folders=folders,
        settings=settings,
        custom=custom if custom is not None else {},
    )


def load_project(project_dir: Path, *, library: SimpleNamespace | None = None) -> ProjectConfig:
    """Execute ``inert.config.py`` with the stage library bound to the name ``inert``."""

    project_dir = Path(project_dir).resolve()
    config_path = project_dir / CONFIG_FILENAME
    if not config_path.is_file():
        raise InvalidProject(project_dir)

    if library is None:
        from .stages import stage_library

        library = stage_library()

    try:
        namespace = runpy.run_path(str(config_path), init_globals={"inert": library})
    except InvalidProject:
        raise
    except Exception as exc:
        raise ConfigurationError(project_dir, f"Failed to load {config_path}: {exc}") from exc
    return project_from_namespace(project_dir, config_path, namespace)
