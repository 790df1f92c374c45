"""Per-file execution of a folder's stage pipeline."""
from __future__ import annotations

from typing import Any, Iterable

from .config_loader import InvalidStage, ProjectConfig, Stage, validate_stage
from .console import Console
from .errors import MalformedPipelineStage, StageExecutionFailure
from .files import FileInfo


SKIP_WARNING = (
    "Pipeline component is not a function. Skipping. "
    "Please make sure all elements in the pipeline are functions."
)


def run_pipeline(
    project: ProjectConfig,
    pipeline: Iterable[Any],
    file: FileInfo,
    *,
    console: Console,
) -> Any:
    """Run ``pipeline`` over ``file`` and return the last stage's result.

    Each stage receives the previous stage's return value (``None`` for the
    first one). ``pipeline`` may hold entries already classified by the
    configuration loader or raw values, which are classified here. Entries
    that cannot be invoked are skipped with a warning and leave the
    accumulated value untouched. A stage that raises is reported as
    :class:`StageExecutionFailure` and ends the pipeline for this file.
    """

    previous: Any = None
    for position, entry in enumerate(pipeline, start=1):
        stage = entry if isinstance(entry, (Stage, InvalidStage)) else validate_stage(entry, position)
        if isinstance(stage, InvalidStage):
            console.warn(SKIP_WARNING)
            console.debug(str(MalformedPipelineStage(stage.value, stage.position, stage.reason)))
            continue
        previous = _invoke(stage, project, file, previous, position)
    return previous


def _invoke(stage: Stage, project: ProjectConfig, file: FileInfo, previous: Any, position: int) -> Any:
    try:
        return stage(project, file, previous)
    except Exception as exc:
        raise StageExecutionFailure(file.path, stage.name, position, exc) from exc
