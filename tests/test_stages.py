from __future__ import annotations

from pathlib import Path
import json
import tempfile
import textwrap
import unittest

from inert.config_loader import CONFIG_FILENAME, project_from_namespace
from inert.files import get_file_info
from inert.stages import copy_file, data, markdown, read_text, write_output
from inert.stages.markdown import highlight_code


class LabelSpinner:
    def __init__(self, text: str) -> None:
        self.text = text

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass


class StageTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name).resolve()
        self.source = self.root / "content"
        self.source.mkdir()
        self.project = project_from_namespace(
            self.root,
            self.root / CONFIG_FILENAME,
            {"build": {"out_dirs": {"html": "dist/html"}}, "custom": {}},
        )

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def _file(self, relative: str, content: str):
        path = self.source / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return get_file_info(path, root=self.source, folder="content")


class MarkdownStageTests(StageTestCase):
    def test_renders_front_matter_and_body(self) -> None:
        file = self._file(
            "post.md",
            textwrap.dedent(
                """\
                ---
                title: First post
                tags: [a, b]
                ---
                # Heading

                Some *text*.
                """
            ),
        )
        result = markdown()(self.project, file, None)

        self.assertEqual(result["attributes"], {"title": "First post", "tags": ["a", "b"]})
        self.assertIn("<h1>Heading</h1>", result["body"])
        self.assertIn("<em>text</em>", result["body"])

    def test_highlights_known_languages(self) -> None:
        file = self._file("code.md", "```python\nprint('hi')\n```\n")
        body = markdown()(self.project, file, None)["body"]
        self.assertIn('<pre class="lang-python"><code>', body)
        self.assertIn("<span", body)

    def test_unknown_language_is_escaped(self) -> None:
        html = highlight_code("<b>", "no-such-language")
        self.assertEqual(html, '<pre class="lang-no-such-language"><code>&lt;b&gt;</code></pre>')

    def test_spinner_label_restored(self) -> None:
        spinner = LabelSpinner("building")
        self.project.custom["spinner"] = spinner
        file = self._file("post.md", "text")
        markdown()(self.project, file, None)
        self.assertEqual(spinner.text, "building")

    def test_options_are_forwarded(self) -> None:
        file = self._file("raw.md", "<div>raw</div>\n")
        escaped = markdown(options={"html": False})(self.project, file, None)["body"]
        self.assertNotIn("<div>", escaped)


class FileStageTests(StageTestCase):
    def test_read_text(self) -> None:
        file = self._file("note.txt", "hello")
        self.assertEqual(read_text()(self.project, file, None), "hello")

    def test_data_loads_json_yaml_and_toml(self) -> None:
        json_file = self._file("site.json", json.dumps({"name": "demo"}))
        yaml_file = self._file("nav.yaml", "- home\n- about\n")
        toml_file = self._file("meta.toml", 'title = "Demo"\n')
        self.assertEqual(data()(self.project, json_file, None), {"name": "demo"})
        self.assertEqual(data()(self.project, yaml_file, None), ["home", "about"])
        self.assertEqual(data()(self.project, toml_file, None), {"title": "Demo"})

    def test_write_output_uses_name_template(self) -> None:
        file = self._file("post.md", "ignored")
        previous = {"attributes": {}, "body": "<p>hi</p>"}
        returned = write_output("html", "{{file.basename}}.html")(self.project, file, previous)

        self.assertIs(returned, previous)
        self.assertEqual((self.root / "dist" / "html" / "post.html").read_text(), "<p>hi</p>")

    def test_write_output_keeps_relative_layout(self) -> None:
        file = self._file("2024/post.md", "ignored")
        write_output("html", extension=".html")(self.project, file, "body")
        self.assertEqual((self.root / "dist" / "html" / "2024" / "post.html").read_text(), "body")

    def test_write_output_rejects_escaping_paths(self) -> None:
        file = self._file("post.md", "ignored")
        with self.assertRaises(ValueError):
            write_output("html", "../../{{file.name}}")(self.project, file, "body")

    def test_write_output_rejects_unknown_values(self) -> None:
        file = self._file("post.md", "ignored")
        with self.assertRaises(TypeError):
            write_output("html")(self.project, file, 42)

    def test_write_output_unknown_out_dir(self) -> None:
        file = self._file("post.md", "ignored")
        with self.assertRaisesRegex(KeyError, "Available output directories: html"):
            write_output("css")(self.project, file, "body")

    def test_copy_file(self) -> None:
        file = self._file("img/logo.svg", "<svg/>")
        returned = copy_file("html")(self.project, file, "prev")
        self.assertEqual(returned, "prev")
        self.assertEqual((self.root / "dist" / "html" / "img" / "logo.svg").read_text(), "<svg/>")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
