"""
CLI module for iso-chooser-menu.
"""

import logging
import logging.handlers
import os
import sys
from typing import List, Optional, Sequence, Tuple

from .choices import read_choices
from .config import ChooserConfig, get_config
from .constants import PROGRAM_NAME, __version__
from .emitter import emit
from .errors import ISOChooserError, UsageError
from .menu import SelectionSession
from .system import resolve_architecture
from .terminal import TerminalSession

# Set up logging
logger = logging.getLogger(__name__)

SYSLOG_SOCKET = "/dev/log"
USAGE = f"usage: {PROGRAM_NAME} <output path> <input json> [<input json> ...]"


def setup_logging(debug: bool = False, use_syslog: bool = True) -> None:
    """Setup logging configuration.

    Diagnostics go to stderr and, when the socket exists, to syslog, since
    at boot time stderr may not be looked at by anyone.
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    root = logging.getLogger()
    already = any(isinstance(h, logging.handlers.SysLogHandler) for h in root.handlers)
    if use_syslog and not already and os.path.exists(SYSLOG_SOCKET):
        handler = logging.handlers.SysLogHandler(address=SYSLOG_SOCKET)
        handler.setFormatter(
            logging.Formatter(f"{PROGRAM_NAME}: %(levelname)s %(message)s")
        )
        root.addHandler(handler)


def print_usage(file=None) -> None:
    print(USAGE, file=file or sys.stdout)


def parse_arguments(args: Sequence[str]) -> Tuple[str, List[str]]:
    """Split the command line into the output path and the feed paths."""
    if len(args) < 2:
        raise UsageError("an output path and at least one input feed are required")
    for arg in args:
        if arg.startswith("-") and arg != "-":
            raise UsageError(f"unknown option: {arg}")
    return args[0], list(args[1:])


def run(outfile: str, infiles: Sequence[str], config: ChooserConfig) -> int:
    """Read the feeds, let the operator choose, and write the result."""
    settings = config.settings
    architecture = resolve_architecture(settings.architecture)
    logger.debug(f"Reading {len(infiles)} feed(s) for architecture {architecture}")

    # Any feed problem stops us here, before the screen is touched
    choices = read_choices(infiles, architecture, settings.mirror_url)

    with TerminalSession(settings.color_mode) as terminal:
        record = SelectionSession(terminal, choices, settings.caption).run()
        style = terminal.style

    if style is not None:
        logger.debug(f"Menu drawn with {style.mode} colours")
    emit(outfile, record)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the CLI.
    """
    args = list(sys.argv[1:] if argv is None else argv)

    # Handle --version/-V and --help/-h flags
    if len(args) == 1:
        if args[0] in ("--version", "-V"):
            print(f"{PROGRAM_NAME} v{__version__}")
            return 0
        if args[0] in ("--help", "-h"):
            print(f"{PROGRAM_NAME} v{__version__}")
            print_usage()
            print("\nOptions:")
            print("  --version, -V  Show version information")
            print("  --help, -h     Show this help message")
            return 0

    # Setup logging based on config
    config = get_config()
    setup_logging(
        debug=config.settings.debug_mode, use_syslog=config.settings.syslog
    )

    try:
        outfile, infiles = parse_arguments(args)
    except UsageError as e:
        logger.debug(f"Usage error: {e}")
        print_usage(file=sys.stderr)
        return 1

    try:
        return run(outfile, infiles, config)
    except ISOChooserError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted, no selection written")
        return 130


if __name__ == "__main__":
    sys.exit(main())
