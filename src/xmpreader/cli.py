# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Click-based CLI for xmpreader.

Reads an XMP packet from a file, optionally followed by Extended XMP
packets, and prints the extracted metadata as JSON.
"""

# Standard Library
import json
import logging
import sys
from pathlib import Path

# Third Party
import click
from colorama import Fore, Style, init

# Local
from . import __version__
from .reader import Reader
from .utils import setup_logging

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_FILE_NOT_FOUND = 2
EXIT_PARSE_FAILED = 3
EXIT_EXTENDED_REJECTED = 4

logger = logging.getLogger(__name__)


def print_error(msg: str) -> None:
    """Prints an error message in red.

    Args:
        msg: The message to output.
    """
    click.echo(f"{Fore.RED}\u2717 Error:{Style.RESET_ALL} {msg}", err=True)


def print_warning(msg: str) -> None:
    """Prints a warning message in yellow.

    Stdout carries the JSON output, so warnings go to stderr.

    Args:
        msg: The message to output.
    """
    click.echo(f"{Fore.YELLOW}\u26a0{Style.RESET_ALL} {msg}", err=True)


def _parse_file(reader: Reader, data: bytes, chunk_size: int) -> bool:
    """Feeds a whole document to the reader, in chunks if requested."""
    if chunk_size <= 0 or chunk_size >= len(data):
        return reader.parse(data)

    for start in range(0, len(data), chunk_size):
        is_final = start + chunk_size >= len(data)
        if not reader.parse(data[start : start + chunk_size], is_final=is_final):
            return False
    return True


@click.command()
@click.argument("input_path", required=False, type=click.Path())
@click.option(
    "-e",
    "--extended",
    "extended_paths",
    multiple=True,
    type=click.Path(),
    help="Extended XMP packet (GUID, length and offset header included). "
    "May be given several times, in fragment order.",
)
@click.option(
    "-c",
    "--chunk-size",
    type=click.IntRange(min=0),
    default=0,
    help="Feed the file in chunks of this many bytes (default: all at once)",
)
@click.option(
    "--raw",
    is_flag=True,
    help="Print the raw result store, including the internal special group",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Only output errors",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Detailed output",
)
@click.version_option(version=__version__)
def main(
    input_path: str | None,
    extended_paths: tuple[str, ...],
    chunk_size: int,
    raw: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """Prints the metadata in an XMP packet as JSON.

    INPUT is the path to a file holding the XMP packet.
    """
    # Initialize colorama for Windows compatibility
    init()

    if input_path is None:
        click.echo(click.get_current_context().get_help())
        sys.exit(EXIT_GENERAL_ERROR)

    setup_logging(verbose=verbose, quiet=quiet)

    if not Reader.is_supported():
        print_error("The installed lxml/libxml2 cannot be used to read XMP")
        sys.exit(EXIT_GENERAL_ERROR)

    exit_code = EXIT_SUCCESS
    reader = Reader()
    try:
        data = Path(input_path).read_bytes()
        if not _parse_file(reader, data, chunk_size):
            print_error(f"Could not read XMP from {input_path}")
            exit_code = EXIT_PARSE_FAILED

        for extended_path in extended_paths:
            packet = Path(extended_path).read_bytes()
            if not reader.parse_extended(packet):
                print_warning(f"Extended XMP packet {extended_path} was rejected")
                if exit_code == EXIT_SUCCESS:
                    exit_code = EXIT_EXTENDED_REJECTED

        results = reader.results.as_dict() if raw else reader.get_results()
        click.echo(json.dumps(results, indent=2, ensure_ascii=False, sort_keys=True))

    except FileNotFoundError as e:
        print_error(str(e))
        exit_code = EXIT_FILE_NOT_FOUND
    except IsADirectoryError as e:
        print_error(str(e))
        exit_code = EXIT_GENERAL_ERROR
    except PermissionError as e:
        print_error(f"Access denied: {e}")
        exit_code = EXIT_GENERAL_ERROR
    except Exception as e:
        logger.exception("Unexpected error")
        print_error(f"Unexpected error: {e}")
        exit_code = EXIT_GENERAL_ERROR

    sys.exit(exit_code)
