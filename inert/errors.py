"""Exception hierarchy shared by the build tool."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping


class InertError(RuntimeError):
    """Base class for all errors raised by inert."""


class InvalidProject(InertError):
    """Raised when a directory does not contain an inert project."""

    def __init__(self, project_dir: Path, message: str | None = None):
        super().__init__(
            message or f"The directory '{project_dir}' does not appear to be a valid inert project."
        )
        self.project_dir = project_dir


class ConfigurationError(InvalidProject):
    """Raised when the project configuration exists but cannot be used."""

    def __init__(self, project_dir: Path, message: str):
        super().__init__(project_dir, message)


class MissingSourceDirectory(InertError):
    """Raised when directories declared in ``source_dirs`` are absent."""

    def __init__(self, missing: Mapping[str, Path]):
        listing = ", ".join(f"{name} ({path})" for name, path in missing.items())
        super().__init__(
            "Missing some source directories. Make sure every directory defined in "
            f"'build.source_dirs' exists: {listing}"
        )
        self.missing = dict(missing)


class MalformedPipelineStage(InertError):
    """Describes a pipeline entry that cannot be invoked."""

    def __init__(self, value: Any, position: int, reason: str):
        super().__init__(f"Pipeline entry #{position} ({value!r}) is not a valid stage: {reason}")
        self.value = value
        self.position = position
        self.reason = reason


class StageExecutionFailure(InertError):
    """Raised when a stage fails while processing a file."""

    def __init__(self, file_path: Path, stage_name: str, position: int, cause: BaseException):
        super().__init__(f"Stage #{position} '{stage_name}' failed for {file_path}: {cause}")
        self.file_path = file_path
        self.stage_name = stage_name
        self.position = position
        self.cause = cause
