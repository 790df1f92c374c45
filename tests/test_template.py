from __future__ import annotations

import unittest

from inert.dirs import expand_out_dirs
from inert.files import get_file_info
from inert.template import TemplateError, TemplateResolver


class TemplateResolverTests(unittest.TestCase):
    def test_resolve_placeholder(self) -> None:
        resolver = TemplateResolver({"output": "dist", "site": {"name": "demo"}})
        self.assertEqual(resolver.resolve("{{output}}/{{site.name}}"), "dist/demo")

    def test_single_placeholder_keeps_type(self) -> None:
        resolver = TemplateResolver({"values": {"count": 3, "items": ["a", "b"]}})
        self.assertEqual(resolver.resolve("{{values.count}}"), 3)
        self.assertEqual(resolver.resolve("{{values.items.1}}"), "b")

    def test_attribute_lookup_on_objects(self) -> None:
        info = get_file_info("/site/posts/first.md")
        resolver = TemplateResolver({"file": info})
        self.assertEqual(resolver.resolve("{{file.basename}}.html"), "first.html")

    def test_private_attributes_are_not_exposed(self) -> None:
        info = get_file_info("/site/posts/first.md")
        resolver = TemplateResolver({"file": info})
        with self.assertRaises(TemplateError):
            resolver.resolve("{{file.__class__}}")

    def test_nested_variable_resolution(self) -> None:
        resolver = TemplateResolver(
            {"out_dirs": {"html": "{{output}}/html", "img": "{{out_dirs.html}}/img"}, "output": "public"}
        )
        self.assertEqual(resolver.resolve("{{out_dirs.img}}"), "public/html/img")

    def test_unknown_path(self) -> None:
        with self.assertRaisesRegex(TemplateError, "Cannot resolve path 'missing.key'"):
            TemplateResolver({}).resolve("{{missing.key}}")

    def test_cycle_detection(self) -> None:
        resolver = TemplateResolver({"variables": {"alpha": "{{variables.beta}}", "beta": "{{variables.alpha}}"}})
        with self.assertRaises(TemplateError):
            resolver.resolve("{{variables.alpha}}")


class ExpandOutDirsTests(unittest.TestCase):
    def test_expands_output_and_sibling_references(self) -> None:
        expanded = expand_out_dirs("dist", {"html": "{{output}}/html", "css": "{{out_dirs.html}}/css", "raw": "static"})
        self.assertEqual(expanded, {"html": "dist/html", "css": "dist/html/css", "raw": "static"})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
