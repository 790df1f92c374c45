"""Source/output directory resolution and creation."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Dict, Mapping

from .template import TemplateResolver

if TYPE_CHECKING:  # pragma: no cover
    from .config_loader import ProjectConfig


def expand_out_dirs(output_dir: str, out_dirs: Mapping[str, str]) -> Dict[str, str]:
    """Substitute ``{{output}}`` and ``{{out_dirs.<name>}}`` placeholders."""

    resolver = TemplateResolver({"output": output_dir, "out_dirs": dict(out_dirs)})
    return {name: str(resolver.resolve(f"{{{{out_dirs.{name}}}}}")) for name in out_dirs}


def resolve_source_dir(project: "ProjectConfig", name: str) -> Path:
    if name not in project.source_dirs:
        available = ", ".join(sorted(project.source_dirs)) or "<none>"
        raise KeyError(f"Source directory '{name}' not found. Available source directories: {available}")
    return (project.root / project.source_dirs[name]).resolve()


def resolve_out_dir(project: "ProjectConfig", name: str) -> Path:
    if name not in project.out_dirs:
        available = ", ".join(sorted(project.out_dirs)) or "<none>"
        raise KeyError(f"Output directory '{name}' not found. Available output directories: {available}")
    return (project.root / project.out_dirs[name]).resolve()


def resolve_output_root(project: "ProjectConfig") -> Path:
    return (project.root / project.output_dir).resolve()


def ensure_directory(path: Path, *, recursive: bool) -> bool:
    """Create ``path`` if needed; return ``True`` when it was created."""

    if path.is_dir():
        return False
    path.mkdir(parents=recursive, exist_ok=True)
    return True
