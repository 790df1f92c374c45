"""File discovery and per-file descriptors handed to pipeline stages."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Set


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Static metadata about a discovered source file."""

    path: Path
    name: str
    basename: str
    extension: str
    dirname: Path
    relative_path: str
    folder: str | None = None

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "path": str(self.path),
            "name": self.name,
            "basename": self.basename,
            "extension": self.extension,
            "dirname": str(self.dirname),
            "relative_path": self.relative_path,
            "folder": self.folder,
        }


def get_file_info(path: Path | str, *, root: Path | None = None, folder: str | None = None) -> FileInfo:
    """Describe ``path``; ``relative_path`` is computed against ``root`` when given."""

    file_path = Path(path).absolute()
    if root is not None:
        relative = file_path.relative_to(Path(root).absolute()).as_posix()
    else:
        relative = file_path.name
    return FileInfo(
        path=file_path,
        name=file_path.name,
        basename=file_path.stem,
        extension=file_path.suffix,
        dirname=file_path.parent,
        relative_path=relative,
        folder=folder,
    )


def discover_files(root: Path | str, *, recursive: bool = False) -> List[Path]:
    """Return absolute paths of the files below ``root``.

    Entries are sorted by name. Only the immediate children are listed unless
    ``recursive`` is set, in which case each directory's files come before the
    contents of its subdirectories. Symlinked directories are followed, but a
    directory already visited (by resolved path) is never listed twice.
    """

    directory = Path(root).resolve()
    return _walk(directory, recursive=recursive, visited={directory})


def _walk(directory: Path, *, recursive: bool, visited: Set[Path]) -> List[Path]:
    files: List[Path] = []
    subdirectories: List[Path] = []
    for entry in sorted(directory.iterdir(), key=lambda item: item.name):
        if entry.is_dir():
            subdirectories.append(entry)
        elif entry.is_file():
            files.append(entry)
    if recursive:
        for subdirectory in subdirectories:
            target = subdirectory.resolve()
            if target in visited:
                continue
            visited.add(target)
            files.extend(_walk(subdirectory, recursive=True, visited=visited))
    return files
