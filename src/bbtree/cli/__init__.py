"""Command-line interface for the bbtree BBCode converter.

Reads BBCode from files or standard input and writes the resulting markup
tree as JSON, JsonML, or a rich-rendered outline.

Examples
--------
Convert a file::

    $ bbtree post.bbcode

Read from stdin and write JsonML::

    $ echo "[b]hi[/b]" | bbtree - --format jsonml

Show the tree in the terminal::

    $ bbtree post.bbcode --format tree

Use a config file::

    $ bbtree post.bbcode --config .bbtree.toml

"""

import argparse
import json
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Optional

from bbtree.ast import Document, ast_to_json, ast_to_jsonml
from bbtree.cli.config import load_config_with_priority
from bbtree.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_JSON_INDENT,
    DEFAULT_OUTPUT_FORMAT,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from bbtree.exceptions import BBTreeError, FileError, ValidationError
from bbtree.logging_utils import configure_logging
from bbtree.options.bbcode import BBCodeParserOptions
from bbtree.parsers.bbcode import BBCodeParser

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("json", "jsonml", "tree")
CLI_SETTINGS = ("format", "indent")


def get_version() -> str:
    """Get the installed version of bbtree."""
    try:
        from importlib.metadata import version

        return version("bbtree")
    except Exception:
        return "unknown"


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``bbtree`` command."""
    parser = argparse.ArgumentParser(
        prog="bbtree",
        description="Convert BBCode markup into a structured markup tree.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="*", help="Input files; '-' or nothing reads standard input")
    parser.add_argument("--out", "-o", metavar="FILE", help="Write output to FILE instead of standard output")
    parser.add_argument(
        "--format",
        "-f",
        choices=OUTPUT_FORMATS,
        default=None,
        help=f"Output format (default: {DEFAULT_OUTPUT_FORMAT})",
    )
    parser.add_argument("--indent", type=int, default=None, help=f"JSON indentation (default: {DEFAULT_JSON_INDENT})")

    options_help = {f.name: f.metadata.get("help") for f in fields(BBCodeParserOptions)}
    parser.add_argument("--max-nesting-depth", type=int, default=None, help=options_help["max_nesting_depth"])
    parser.add_argument(
        "--case-sensitive",
        action="store_true",
        help="Only match all-lowercase or all-uppercase tag spellings",
    )
    parser.add_argument("--config", metavar="PATH", help=f"Configuration file (default: ${CONFIG_ENV_VAR} or discovery)")
    parser.add_argument("--no-config", action="store_true", help="Ignore configuration files")

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", type=str, metavar="PATH", help="Also write log messages to PATH")
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Very verbose logging, including every declined or unterminated tag",
    )
    parser.add_argument("--version", "-V", action="version", version=f"bbtree {get_version()}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _split_config(config: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Separate parser options from CLI settings.

    Parser options may sit at the top level or under a ``bbcode`` table.
    """
    settings: dict[str, Any] = {}
    option_values: dict[str, Any] = {}
    for key, value in config.items():
        if key == "bbcode" and isinstance(value, dict):
            option_values.update(value)
        elif key in CLI_SETTINGS:
            settings[key] = value
        else:
            option_values[key] = value
    return settings, option_values


def build_options(parsed_args: argparse.Namespace, config: dict[str, Any]) -> tuple[BBCodeParserOptions, dict[str, Any]]:
    """Combine config file values and command-line flags.

    Command-line flags win over the config file.

    Returns
    -------
    tuple of (BBCodeParserOptions, dict)
        Parser options and the resolved CLI settings (``format``, ``indent``)

    Raises
    ------
    ValidationError
        If an option value is out of range

    """
    settings, option_values = _split_config(config)
    if parsed_args.max_nesting_depth is not None:
        option_values["max_nesting_depth"] = parsed_args.max_nesting_depth
    if parsed_args.case_sensitive:
        option_values["case_insensitive"] = False

    try:
        options = BBCodeParserOptions.from_dict(option_values)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid option: {e}", original_error=e) from e

    output_format = parsed_args.format or settings.get("format", DEFAULT_OUTPUT_FORMAT)
    if output_format not in OUTPUT_FORMATS:
        raise ValidationError(
            f"Unknown output format '{output_format}'; choose one of {', '.join(OUTPUT_FORMATS)}",
            parameter_name="format",
            parameter_value=output_format,
        )
    indent = parsed_args.indent if parsed_args.indent is not None else settings.get("indent", DEFAULT_JSON_INDENT)
    return options, {"format": output_format, "indent": indent}


def render_document(doc: Document, output_format: str, indent: Optional[int]) -> str:
    """Serialize ``doc`` in the requested output format."""
    if output_format == "jsonml":
        return json.dumps(ast_to_jsonml(doc), indent=indent, ensure_ascii=False)
    if output_format == "tree":
        from bbtree.cli.display import render_tree_text

        return render_tree_text(doc)
    return ast_to_json(doc, indent=indent)


def _read_inputs(parser: BBCodeParser, inputs: list[str]) -> list[Document]:
    documents = []
    for item in inputs or ["-"]:
        if item == "-":
            # Binary stdin when available so chardet sees the raw bytes
            documents.append(parser.parse(getattr(sys.stdin, "buffer", sys.stdin)))
        else:
            documents.append(parser.parse(Path(item)))
    return documents


def main(args: list[str] | None = None) -> int:
    """Execute the bbtree command-line interface."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        config: dict[str, Any] = {}
        if not parsed_args.no_config:
            config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
        options, settings = build_options(parsed_args, config)
    except (argparse.ArgumentTypeError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    bbcode_parser = BBCodeParser(options)
    try:
        documents = _read_inputs(bbcode_parser, parsed_args.input)
    except FileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except BBTreeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    rendered = "\n".join(render_document(doc, settings["format"], settings["indent"]) for doc in documents)

    if parsed_args.out:
        try:
            Path(parsed_args.out).write_text(rendered + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error: could not write {parsed_args.out}: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
        logger.info(f"Wrote {len(documents)} document(s) to {parsed_args.out}")
    else:
        print(rendered)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
