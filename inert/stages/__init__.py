"""Stage constructors made available to configuration files as ``inert``."""
from __future__ import annotations

from types import SimpleNamespace

from .files import copy_file, data, read_text, write_output
from .markdown import markdown


def stage_library() -> SimpleNamespace:
    return SimpleNamespace(
        markdown=markdown,
        read_text=read_text,
        data=data,
        write_output=write_output,
        copy_file=copy_file,
    )


__all__ = ["copy_file", "data", "markdown", "read_text", "stage_library", "write_output"]
