"""Unit tests for the ``bbtree`` command-line entry point."""

import io
import json
import logging
import sys

import pytest

from bbtree.ast import Document, Element, Text
from bbtree.cli import build_options, create_parser, main, render_document
from bbtree.constants import EXIT_ERROR, EXIT_FILE_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from bbtree.exceptions import ValidationError
from bbtree.options.bbcode import BBCodeParserOptions


@pytest.fixture(autouse=True)
def restore_logging():
    """``main`` reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("bbtree.parsers").setLevel(logging.NOTSET)


@pytest.fixture
def post_file(tmp_path):
    path = tmp_path / "post.bbcode"
    path.write_text("[b]hi[/b] there", encoding="utf-8")
    return path


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Tests for ``main``."""

    def test_json_output(self, post_file, capsys) -> None:
        """The default output is the JSON tree."""
        assert main(["--no-config", str(post_file)]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["schema_version"] == 1
        assert data["node_type"] == "Document"
        assert data["children"][0]["attributes"] == {"class": "bbcode-b"}
        assert data["metadata"]["source"] == str(post_file)

    def test_jsonml_output(self, post_file, capsys) -> None:
        """``--format jsonml`` prints the JsonML list."""
        assert main(["--no-config", str(post_file), "--format", "jsonml", "--indent", "0"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out) == [["span", {"class": "bbcode-b"}, "hi"], " there"]

    def test_tree_output(self, post_file, capsys) -> None:
        """``--format tree`` prints an outline of the tree."""
        assert main(["--no-config", str(post_file), "-f", "tree"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "document" in out
        assert "span" in out
        assert "'hi'" in out

    def test_stdin(self, monkeypatch, capsys) -> None:
        """No input argument reads standard input."""
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"[i]x[/i]"), encoding="utf-8"))
        assert main(["--no-config", "-f", "jsonml"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out) == [["span", {"class": "bbcode-i"}, "x"]]

    def test_stdin_without_buffer(self, monkeypatch, capsys) -> None:
        """A text-only stdin is read as text."""
        monkeypatch.setattr(sys, "stdin", io.StringIO("[u]x[/u]"))
        assert main(["--no-config", "-", "-f", "jsonml"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out) == [["span", {"class": "bbcode-u"}, "x"]]

    def test_out_file(self, post_file, tmp_path, capsys) -> None:
        """``--out`` writes to a file instead of stdout."""
        target = tmp_path / "out.json"
        assert main(["--no-config", str(post_file), "-f", "jsonml", "-o", str(target)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == ""
        assert json.loads(target.read_text(encoding="utf-8"))[1] == " there"

    def test_out_file_unwritable(self, post_file, tmp_path, capsys) -> None:
        """A failed write is a file error."""
        target = tmp_path / "missing-dir" / "out.json"
        assert main(["--no-config", str(post_file), "-o", str(target)]) == EXIT_FILE_ERROR
        assert "could not write" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys) -> None:
        """A missing input file is a file error."""
        assert main(["--no-config", str(tmp_path / "absent.bbcode")]) == EXIT_FILE_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_invalid_depth(self, post_file, capsys) -> None:
        """An out-of-range option is a validation error."""
        assert main(["--no-config", str(post_file), "--max-nesting-depth", "0"]) == EXIT_VALIDATION_ERROR
        assert "max_nesting_depth" in capsys.readouterr().err

    def test_bad_config_file(self, post_file, tmp_path, capsys) -> None:
        """An unreadable config file is a validation error."""
        config = tmp_path / ".bbtree.json"
        config.write_text("{broken", encoding="utf-8")
        assert main(["--config", str(config), str(post_file)]) == EXIT_VALIDATION_ERROR

    def test_config_sets_format(self, post_file, tmp_path, capsys) -> None:
        """CLI settings can come from the config file."""
        config = tmp_path / ".bbtree.toml"
        config.write_text('format = "jsonml"\nindent = 0\n\n[bbcode]\ncase-insensitive = false\n', encoding="utf-8")
        post_file.write_text("[B]x[/b]", encoding="utf-8")
        assert main(["--config", str(config), str(post_file)]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out) == ["[B]x[/b]"]

    def test_env_var_config(self, post_file, tmp_path, monkeypatch, capsys) -> None:
        """``BBTREE_CONFIG`` points at a config file."""
        config = tmp_path / "env.yaml"
        config.write_text("format: jsonml\n", encoding="utf-8")
        monkeypatch.setenv("BBTREE_CONFIG", str(config))
        assert main([str(post_file)]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)[0][0] == "span"

    def test_unknown_format_in_config(self, post_file, tmp_path, capsys) -> None:
        """A format the CLI cannot write is rejected."""
        config = tmp_path / ".bbtree.json"
        config.write_text('{"format": "html"}', encoding="utf-8")
        assert main(["--config", str(config), str(post_file)]) == EXIT_VALIDATION_ERROR
        assert "html" in capsys.readouterr().err

    def test_unexpected_library_error(self, post_file, monkeypatch, capsys) -> None:
        """Other library errors map to the generic exit code."""
        from bbtree.exceptions import BBTreeError
        from bbtree.parsers.bbcode import BBCodeParser

        def boom(self, input_data):
            raise BBTreeError("boom")

        monkeypatch.setattr(BBCodeParser, "parse", boom)
        assert main(["--no-config", str(post_file)]) == EXIT_ERROR
        assert "boom" in capsys.readouterr().err

    def test_version(self, capsys) -> None:
        """``--version`` prints the program name and exits."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("bbtree ")


@pytest.mark.unit
@pytest.mark.cli
class TestBuildOptions:
    """Tests for merging config values with flags."""

    def test_flags_override_config(self) -> None:
        """Command-line flags win over config values."""
        args = create_parser().parse_args(["--max-nesting-depth", "5", "--case-sensitive", "-f", "tree"])
        options, settings = build_options(args, {"max-nesting-depth": 9, "format": "jsonml", "indent": 4})
        assert options == BBCodeParserOptions(max_nesting_depth=5, case_insensitive=False)
        assert settings == {"format": "tree", "indent": 4}

    def test_bbcode_table(self) -> None:
        """Parser options may be grouped under a ``bbcode`` table."""
        args = create_parser().parse_args([])
        options, settings = build_options(args, {"bbcode": {"max_nesting_depth": 3}})
        assert options.max_nesting_depth == 3
        assert settings == {"format": "json", "indent": 2}

    def test_bad_option_value(self) -> None:
        """Invalid option values become ValidationError."""
        args = create_parser().parse_args([])
        with pytest.raises(ValidationError):
            build_options(args, {"max-nesting-depth": "deep"})


@pytest.mark.unit
@pytest.mark.cli
class TestRenderDocument:
    """Tests for ``render_document``."""

    def test_jsonml_keeps_unicode(self) -> None:
        """Non-ASCII text is written as-is."""
        doc = Document(children=[Element("b", {}, [Text("café")])])
        assert render_document(doc, "jsonml", None) == '[["b", "café"]]'

    def test_tree(self) -> None:
        """The tree format has one line per node."""
        doc = Document(children=[Element("b", {}, [Text("x")]), Text("y")])
        lines = render_document(doc, "tree", None).splitlines()
        assert len(lines) == 4
