#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/cli.py
"""Command-line interface for md2dita.

Converts a Markdown file, URL or standard input to a DITA topic.

Examples
--------
Convert a file and print the topic:
    $ md2dita notes.md

Write to a file, taking the topic id from front matter:
    $ md2dita notes.md -o notes.dita --id-from-metadata

Read Latin-1 input from a pipe:
    $ cat legacy.md | md2dita - --encoding latin-1

Compact output without a DOCTYPE:
    $ md2dita notes.md --no-doctype --no-pretty
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from md2dita import __version__
from md2dita.api import to_dita
from md2dita.constants import (
    DITA_TOPIC_DOCTYPE,
    EXIT_ACQUISITION_ERROR,
    EXIT_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from md2dita.exceptions import (
    AcquisitionError,
    DependencyError,
    Md2DitaError,
    RenderingError,
    ValidationError,
)
from md2dita.logging_utils import configure_logging
from md2dita.options import DitaRendererOptions, MarkdownParserOptions
from md2dita.utils.inputs import InputSource, InputType

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the md2dita command."""
    parser = argparse.ArgumentParser(
        prog="md2dita",
        description="Convert Markdown documents to DITA topics.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Use '-' as INPUT to read Markdown from standard input.",
    )

    parser.add_argument("input", metavar="INPUT", help="Markdown file, file:// or http(s):// URL, or '-' for stdin")
    parser.add_argument("-o", "--out", dest="out", metavar="OUTPUT", help="Output file (default: standard output)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    input_group = parser.add_argument_group("input options")
    input_group.add_argument("--encoding", help="Character encoding of the input (default: UTF-8)")
    input_group.add_argument(
        "--no-parse-frontmatter",
        dest="parse_frontmatter",
        action="store_false",
        help="Treat a leading '---' block as ordinary Markdown",
    )

    output_group = parser.add_argument_group("output options")
    output_group.add_argument(
        "--id-from-metadata",
        action="store_true",
        help="Use the front-matter 'id' value as the root topic id",
    )
    output_group.add_argument("--no-doctype", action="store_true", help="Omit the DOCTYPE declaration")
    output_group.add_argument("--no-pretty", action="store_true", help="Do not indent the XML output")

    logging_group = parser.add_argument_group("logging options")
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log output to this file")
    logging_group.add_argument(
        "--trace", action="store_true", help="Debug logging with timestamps and logger names"
    )

    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging from command-line arguments; --trace wins over --log-level."""
    if parsed_args.trace:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level)

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _resolve_input(parsed_args: argparse.Namespace) -> InputType:
    """Turn the INPUT argument into something the parser can read.

    Arguments are never taken as Markdown text: anything that is not stdin
    or a URL is a filesystem path.
    """
    if parsed_args.input == STDIN_MARKER:
        return InputSource(byte_stream=sys.stdin.buffer, encoding=parsed_args.encoding)
    if "://" in parsed_args.input:
        return InputSource(location=parsed_args.input, encoding=parsed_args.encoding)
    return InputSource(location=str(Path(parsed_args.input)), encoding=parsed_args.encoding)


def _build_options(parsed_args: argparse.Namespace) -> tuple[MarkdownParserOptions, DitaRendererOptions]:
    parser_options = MarkdownParserOptions(
        encoding=parsed_args.encoding,
        parse_frontmatter=parsed_args.parse_frontmatter,
    )
    renderer_options = DitaRendererOptions(
        identifier_from_metadata=parsed_args.id_from_metadata,
        doctype=None if parsed_args.no_doctype else DITA_TOPIC_DOCTYPE,
        pretty_print=not parsed_args.no_pretty,
    )
    return parser_options, renderer_options


def main(args: Optional[list[str]] = None) -> int:
    """Run the md2dita command.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments; ``sys.argv[1:]`` when None

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    source = _resolve_input(parsed_args)
    parser_options, renderer_options = _build_options(parsed_args)

    try:
        if parsed_args.out:
            to_dita(
                source,
                Path(parsed_args.out),
                parser_options=parser_options,
                renderer_options=renderer_options,
            )
            logger.info(f"Wrote {parsed_args.out}")
        else:
            xml = to_dita(source, parser_options=parser_options, renderer_options=renderer_options)
            sys.stdout.write(xml or "")
            sys.stdout.flush()
    except (DependencyError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except AcquisitionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ACQUISITION_ERROR
    except RenderingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RENDERING_ERROR
    except Md2DitaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"Unexpected error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
