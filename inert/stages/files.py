"""Stages that read source files and write results into output directories."""
from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any, Mapping
import shutil

from ..data_loader import load_data_file
from ..dirs import resolve_out_dir
from ..template import TemplateResolver


def read_text(encoding: str = "utf-8"):
    """Return a stage that yields the file's text content."""

    def read_source(project, file, previous):
        return file.path.read_text(encoding=encoding)

    return read_source


def data():
    """Return a stage that decodes a TOML, JSON or YAML data file."""

    def load_data(project, file, previous):
        return load_data_file(file.path)

    return load_data


def _target_path(project, file, out_dir: str, name: str | None, extension: str | None) -> Path:
    root = resolve_out_dir(project, out_dir)
    if name is not None:
        relative = str(TemplateResolver({"file": file, "custom": project.custom}).resolve(name))
    else:
        relative = file.relative_path
        if extension is not None:
            relative = str(PurePosixPath(relative).with_suffix(extension))
    target = (root / relative).resolve()
    if not target.is_relative_to(root):
        raise ValueError(f"Output path '{relative}' escapes output directory '{root}'")
    return target


def _render(value: Any) -> str | bytes:
    if isinstance(value, (str, bytes)):
        return value
    if isinstance(value, Mapping) and isinstance(value.get("body"), (str, bytes)):
        return value["body"]
    raise TypeError(f"Cannot write value of type {type(value).__name__}; expected text, bytes or a mapping with 'body'")


def write_output(out_dir: str, name: str | None = None, *, extension: str | None = None, encoding: str = "utf-8"):
    """Return a stage that writes the previous result below ``out_dir``.

    ``name`` is a template such as ``"{{file.basename}}.html"``; without it the
    file keeps its path relative to the folder root, with the suffix replaced by
    ``extension`` when given. The previous result is passed on unchanged.
    """

    def write_result(project, file, previous):
        target = _target_path(project, file, out_dir, name, extension)
        target.parent.mkdir(parents=True, exist_ok=True)
        content = _render(previous)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding=encoding)
        return previous

    return write_result


def copy_file(out_dir: str, name: str | None = None):
    """Return a stage that copies the source file below ``out_dir`` as-is."""

    def copy_source(project, file, previous):
        target = _target_path(project, file, out_dir, name, None)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(file.path, target)
        return previous

    return copy_source
