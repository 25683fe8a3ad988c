# Copyright 2025 Ralph Lemke
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""RobotScript command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from .config import load_config
from .emitter import JSONEmitter
from .loader import ASTFormatError, ProgramLoader
from .validator import validate

# Known subcommands for routing
_SUBCOMMANDS = {"check", "emit"}

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_INTERNAL = 2


def _build_check_parser(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared by check and emit."""
    parser.add_argument(
        "input",
        nargs="?",
        help="Program AST as JSON (reads from stdin if not provided)",
    )


def _build_emit_parser(parser: argparse.ArgumentParser) -> None:
    """Add emit-specific arguments to *parser*."""
    _build_check_parser(parser)

    parser.add_argument(
        "-o",
        "--output",
        help="Output file (writes to stdout if not provided)",
    )

    parser.add_argument(
        "--compact",
        action="store_true",
        help="Output compact JSON (no indentation)",
    )

    parser.add_argument(
        "--envelope",
        action="store_true",
        help='Wrap the program in {"type": "PROGRAM", "value": ...}',
    )

    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip semantic validation",
    )


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared by all subcommands."""
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Path to RobotScript config file (JSON). "
        "Defaults to robotscript.config.json in cwd, ~/.robotscript/, or /etc/robotscript/",
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )

    parser.add_argument(
        "--log-file",
        default=None,
        metavar="FILE",
        help="Log to file instead of stderr",
    )


def _configure_logging(parsed: argparse.Namespace) -> None:
    """Set up logging from parsed CLI args."""
    log_handlers: list[logging.Handler] = []
    if parsed.log_file:
        log_handlers.append(logging.FileHandler(parsed.log_file))
    else:
        log_handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=getattr(logging, parsed.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=log_handlers,
    )


def _load_program(parsed: argparse.Namespace):
    """Load the program named on the command line, or None after reporting why not."""
    try:
        if parsed.input:
            return ProgramLoader.load_file(parsed.input)
        return ProgramLoader.load_text(sys.stdin.read())
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.input}", file=sys.stderr)
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
    except UnicodeDecodeError as e:
        # stdin is decoded by the interpreter before the loader sees it
        print(f"Error: Malformed program AST: Invalid UTF-8: {e.reason}", file=sys.stderr)
    except ASTFormatError as e:
        print(f"Error: Malformed program AST: {e}", file=sys.stderr)
    return None


def _validate(program, config) -> int:
    """Validate *program* and report the verdict. Returns an exit code."""
    result = validate(program, config)
    if result.is_internal:
        print(f"Error: {result.error}", file=sys.stderr)
        return EXIT_INTERNAL
    if not result.is_valid:
        for error in result.errors:
            print(f"Error: {error}", file=sys.stderr)
        return EXIT_INVALID
    return EXIT_OK


# =========================================================================
# Subcommand handlers
# =========================================================================


def _handle_check(parsed: argparse.Namespace) -> int:
    """Execute the check subcommand."""
    config = load_config(parsed.config)

    program = _load_program(parsed)
    if program is None:
        return EXIT_INVALID

    status = _validate(program, config)
    if status == EXIT_OK:
        print(f"OK: program '{program.name}' is valid", file=sys.stderr)
    return status


def _handle_emit(parsed: argparse.Namespace) -> int:
    """Execute the emit subcommand."""
    config = load_config(parsed.config)

    program = _load_program(parsed)
    if program is None:
        return EXIT_INVALID

    if not parsed.no_validate:
        status = _validate(program, config)
        if status != EXIT_OK:
            return status

    emitter = JSONEmitter(indent=None if parsed.compact else 2, envelope=parsed.envelope)
    output = emitter.emit(program)

    try:
        if parsed.output:
            Path(parsed.output).write_text(output + "\n", encoding="utf-8")
        else:
            print(output)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return EXIT_INVALID

    return EXIT_OK


# =========================================================================
# Main entry point
# =========================================================================


def main(args: list[str] | None = None) -> int:
    """Main entry point for the RobotScript CLI.

    Supports subcommands ``check`` (default) and ``emit``. If the first
    argument is not a known subcommand, ``check`` is assumed.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 valid, 1 invalid program or input, 2 internal error)
    """
    argv = args if args is not None else sys.argv[1:]

    subcommand = "check"
    remaining = list(argv)
    if remaining and remaining[0] in _SUBCOMMANDS:
        subcommand = remaining[0]
        remaining = remaining[1:]

    if subcommand == "check":
        parser = argparse.ArgumentParser(
            prog="robotscript check",
            description="Validate a RobotScript program AST",
        )
        _build_check_parser(parser)
        _add_common_args(parser)
        parsed = parser.parse_args(remaining)
        _configure_logging(parsed)
        return _handle_check(parsed)

    parser = argparse.ArgumentParser(
        prog="robotscript emit",
        description="Validate a RobotScript program AST and write it as normalized JSON",
    )
    _build_emit_parser(parser)
    _add_common_args(parser)
    parsed = parser.parse_args(remaining)
    _configure_logging(parsed)
    return _handle_emit(parsed)


if __name__ == "__main__":
    sys.exit(main())
