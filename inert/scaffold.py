"""Creation of new project skeletons for ``inert init``."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List
import textwrap

from .config_loader import CONFIG_FILENAME


_CONFIG_TEMPLATE = textwrap.dedent(
    '''\
    # Configuration for the inert build tool.
    # Stage constructors are available through the ``inert`` name.

    build = {
        "output_dir": "dist",
        "source_dirs": {
            "posts": "content/posts",
            "assets": "assets",
        },
        "out_dirs": {
            "posts": "{{output}}/posts",
            "assets": "{{output}}/assets",
        },
        "folders": [
            {
                "folder": "assets",
                "traverse": "recursive",
                "pipeline": [inert.copy_file("assets")],
            },
            {
                "folder": "posts",
                "traverse": "flat",
                "pipeline": [
                    inert.markdown(),
                    inert.write_output("posts", "{{file.basename}}.html"),
                ],
            },
        ],
    }

    settings = {
        "fail_fast": False,
    }
    '''
)

_SAMPLE_POST = textwrap.dedent(
    """\
    ---
    title: Hello, world
    ---

    # Hello, world

    This post was generated by `inert init`.
    """
)

_SKELETON: Dict[str, str] = {
    CONFIG_FILENAME: _CONFIG_TEMPLATE,
    "content/posts/hello-world.md": _SAMPLE_POST,
    "assets/.gitkeep": "",
}


def init_project(target: Path, *, force: bool = False) -> List[Path]:
    """Write a starter project into ``target`` and return the created files."""

    target = Path(target).resolve()
    if (target / CONFIG_FILENAME).exists() and not force:
        raise FileExistsError(f"{target / CONFIG_FILENAME} already exists (use --force to overwrite)")

    created: List[Path] = []
    for relative, content in _SKELETON.items():
        path = target / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.exists() and not force:
            continue
        path.write_text(content, encoding="utf-8")
        created.append(path)
    return created
