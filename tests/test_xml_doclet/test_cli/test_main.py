"""Tests for the xml-doclet command-line interface."""

import json
import logging
from unittest.mock import patch

import pytest
from lxml import etree

from xml_doclet import __version__
from xml_doclet.cli.main import build_config, create_argument_parser, main


class TestArgumentParser:
    """Tests for option parsing."""

    def test_doclet_style_options(self, model_file):
        """Test the single-dash option spellings."""
        args = create_argument_parser().parse_args(
            [str(model_file), "-d", "out", "-Xfilename", "api.xml", "-Xescape", "false"]
        )

        assert args.destination == "out"
        assert args.filename == "api.xml"
        assert args.escape == "false"

    def test_escape_before_model_path(self, model_file):
        """Test that -Xescape takes exactly one value ahead of the model path."""
        args = create_argument_parser().parse_args(["-Xescape", "false", str(model_file)])

        assert args.model == model_file
        assert build_config(args).escape_characters is False

    def test_escape_requires_value(self, capsys):
        """Test that a bare -Xescape is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            create_argument_parser().parse_args(["model.json", "-Xescape"])

        assert exc_info.value.code == 2
        assert "-Xescape" in capsys.readouterr().err

    @pytest.mark.parametrize("value, expected", [
        ("true", True), ("TRUE", True), ("false", False), ("no", False),
    ])
    def test_escape_values(self, model_file, value, expected):
        """Test that only "true" enables escape preservation."""
        args = create_argument_parser().parse_args([str(model_file), "-Xescape", value])

        assert build_config(args).escape_characters is expected

    def test_unset_options_keep_defaults(self, model_file):
        """Test the configuration built from no options."""
        config = build_config(create_argument_parser().parse_args([str(model_file)]))

        assert config.output_dir == "."
        assert config.filename == "javadoc.xml"
        assert config.escape_characters is True
        assert config.remove_partial_output is True

    def test_command_line_overrides_config_file(self, tmp_path, model_file):
        """Test precedence of command-line options over the config file."""
        config_path = tmp_path / "doclet.json"
        config_path.write_text(json.dumps({"filename": "file.xml", "sort_elements": True}))

        args = create_argument_parser().parse_args(
            [str(model_file), "-c", str(config_path), "-Xfilename", "cli.xml", "--keep-partial"]
        )
        config = build_config(args)

        assert config.filename == "cli.xml"
        assert config.sort_elements is True
        assert config.remove_partial_output is False


class TestMain:
    """Tests for the main entry point."""

    def test_generates_file(self, tmp_path, model_file, capsys):
        """Test a successful run."""
        exit_code = main([str(model_file), "-d", str(tmp_path), "-Xfilename", "api.xml"])

        assert exit_code == 0
        root = etree.parse(str(tmp_path / "api.xml")).getroot()
        assert [c.get("name") for c in root.find("package")] == ["Greeter", "Speaker"]
        assert "Generated" in capsys.readouterr().out

    def test_escape_false_decodes_comments(self, tmp_path, model_file):
        """Test that -Xescape false decodes unicode escapes."""
        assert main([str(model_file), "-d", str(tmp_path), "-Xescape", "false"]) == 0

        root = etree.parse(str(tmp_path / "javadoc.xml")).getroot()
        assert root.find("package/class/comment").text == "Says 안녕."

    def test_missing_destination(self, tmp_path, model_file, capsys):
        """Test that a missing directory is rejected before writing."""
        missing = tmp_path / "missing"

        assert main([str(model_file), "-d", str(missing)]) == 1
        assert "Invalid output directory" in capsys.readouterr().err
        assert not missing.exists()

    def test_bad_model_file(self, tmp_path, capsys):
        """Test that an unreadable model is reported."""
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")

        assert main([str(bad), "-d", str(tmp_path)]) == 1
        assert "invalid JSON" in capsys.readouterr().err

    def test_bad_config_file(self, tmp_path, model_file, capsys):
        """Test that configuration errors are reported."""
        config_path = tmp_path / "doclet.json"
        config_path.write_text(json.dumps({"filname": "x.xml"}))

        assert main([str(model_file), "-c", str(config_path)]) == 1
        assert "Unknown configuration field" in capsys.readouterr().err

    def test_ignored_options(self, tmp_path, model_file, caplog):
        """Test that standard doclet options are accepted and ignored."""
        with caplog.at_level(logging.INFO):
            exit_code = main([
                str(model_file), "-d", str(tmp_path),
                "-doctitle", "My API", "-windowtitle", "API", "-notimestamp",
            ])

        assert exit_code == 0
        messages = [r.getMessage() for r in caplog.records]
        assert "Option -doctitle is ignored" in messages
        assert "Option -windowtitle is ignored" in messages
        assert "Option -notimestamp is ignored" in messages

    def test_json_summary(self, tmp_path, model_file, capsys):
        """Test machine-readable output."""
        assert main([str(model_file), "-d", str(tmp_path), "--format", "json"]) == 0

        summary = json.loads(capsys.readouterr().out)
        assert summary["success"] is True
        assert summary["packages"] == 1
        assert summary["types"] == 2
        assert summary["fields"] == 2

    def test_quiet(self, tmp_path, model_file, capsys):
        """Test that --quiet suppresses the summary."""
        assert main([str(model_file), "-d", str(tmp_path), "--quiet"]) == 0

        assert capsys.readouterr().out == ""

    def test_version(self, capsys):
        """Test --version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_keyboard_interrupt(self, tmp_path, model_file, capsys):
        """Test the SIGINT exit code."""
        with patch("xml_doclet.cli.main.DocumentDriver.generate", side_effect=KeyboardInterrupt):
            exit_code = main([str(model_file), "-d", str(tmp_path)])

        assert exit_code == 130
        assert "interrupted" in capsys.readouterr().err
