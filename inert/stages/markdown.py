"""Markdown to HTML stage with front matter and syntax highlighting."""
from __future__ import annotations

from typing import Any, Dict, Mapping

import frontmatter
from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from ..data_loader import merge_mappings


def highlight_code(code: str, lang: str, _attrs: str = "") -> str:
    """Render a fenced code block, highlighted when Pygments knows ``lang``."""

    if lang:
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            lexer = None
        if lexer is not None:
            body = pygments_highlight(code, lexer, HtmlFormatter(nowrap=True))
            return f'<pre class="lang-{escapeHtml(lang)}"><code>{body}</code></pre>'
    return f'<pre class="lang-{escapeHtml(lang)}"><code>{escapeHtml(code)}</code></pre>'


def markdown(preset: str = "commonmark", options: Mapping[str, Any] | None = None):
    """Return a stage that renders the current file's markdown.

    The stage reads the source file itself and returns a mapping with the
    parsed front matter under ``attributes`` and the rendered HTML under
    ``body``.
    """

    merged: Dict[str, Any] = merge_mappings({"highlight": highlight_code}, options or {})
    compiler = MarkdownIt(preset, merged)

    def render_markdown(project, file, previous):
        spinner = project.custom.get("spinner")
        label = getattr(spinner, "text", None) if spinner is not None else None
        if spinner is not None:
            spinner.text = f"Building markdown: {file.basename}"
        try:
            post = frontmatter.loads(file.path.read_text(encoding="utf-8"))
            return {
                "attributes": dict(post.metadata),
                "body": compiler.render(post.content),
            }
        finally:
            if spinner is not None:
                spinner.text = label

    return render_markdown
