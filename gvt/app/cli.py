"""gvt command line interface.

Usage: gvt [--debug] <command> [args]

Every command yields an exit code and a message. Code 0 is success; each
failure class has its own nonzero code.
"""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .. import __version__
from ..core.controller import GvtController
from ..core.history import render_history
from ..core.tracking import TrackResult
from ..errors import AlreadyInitialized, FileMissing, InvalidVersion, StorageFailure
from ..utils.env import get_project_root
from ..utils.log import log_debug, log_exception


EXIT_OK = 0
EXIT_USAGE = 1
EXIT_BAD_ARGUMENT = 2
EXIT_NOT_INITIALIZED = -2
EXIT_SYSTEM_PROBLEM = -3
EXIT_ALREADY_INITIALIZED = 10
EXIT_INVALID_VERSION = 60


class Command(str, Enum):
    """The closed set of gvt commands."""
    INIT = "init"
    ADD = "add"
    DETACH = "detach"
    CHECKOUT = "checkout"
    COMMIT = "commit"
    HISTORY = "history"
    VERSION = "version"

    @classmethod
    def parse(cls, name: str) -> Command | None:
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class CommandResult:
    code: int
    message: str

    @property
    def success(self) -> bool:
        return self.code == EXIT_OK


@dataclass(frozen=True, slots=True)
class FileCommandCodes:
    verb: str
    missing_argument: int
    storage_failure: int
    missing_file: int | None = None


FILE_COMMAND_CODES = {
    Command.ADD: FileCommandCodes(verb="add", missing_argument=20, missing_file=21, storage_failure=22),
    Command.DETACH: FileCommandCodes(verb="detach", missing_argument=30, storage_failure=31),
    Command.COMMIT: FileCommandCodes(verb="commit", missing_argument=50, missing_file=51, storage_failure=52),
}

PAST_TENSE = {"add": "added", "detach": "detached", "commit": "committed"}


class UsageError(Exception):
    """Raised by CommandParser instead of exiting the process."""


class CommandParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad arguments as UsageError."""

    def error(self, message: str):
        raise UsageError(f"{self.prog}: {message}")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gvt",
        description="gvt - minimal local version tracking",
        usage="%(prog)s [--debug] <command> [args]",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    return parser


def create_command_parser(command: Command) -> CommandParser:
    parser = CommandParser(prog=f"gvt {command.value}", add_help=False)

    if command in FILE_COMMAND_CODES:
        parser.add_argument("file", nargs="?", help="File path relative to the working directory")
        parser.add_argument("-m", dest="message", default=None, help="Version message")
    elif command in (Command.CHECKOUT, Command.VERSION):
        parser.add_argument("version", nargs="?", default=None, help="Version number")
    elif command == Command.HISTORY:
        parser.add_argument(
            "-last",
            dest="last",
            type=int,
            default=None,
            help="Show only the newest N versions",
        )

    return parser


def main(args: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if args is None else args)

    split = _first_positional(argv)
    parsed = create_parser().parse_args(argv[:split])

    if parsed.debug:
        os.environ["GVT_DEBUG"] = "1"

    controller = GvtController(project_root=get_project_root())
    result = run(argv[split:], controller)
    _print_result(result)
    return result.code


def run(argv: list[str], controller: GvtController) -> CommandResult:
    """Validate the command name, repository state and arguments, then dispatch.

    Bad command arguments yield EXIT_BAD_ARGUMENT rather than exiting.
    """
    if not argv:
        return CommandResult(EXIT_USAGE, "Please specify command.")

    command = Command.parse(argv[0])
    if command is None:
        return CommandResult(EXIT_USAGE, f"Unknown command {argv[0]}.")

    try:
        if command != Command.INIT and not controller.is_initialized():
            return CommandResult(
                EXIT_NOT_INITIALIZED,
                "Current directory is not initialized. Please use init command to initialize.",
            )

        parsed = create_command_parser(command).parse_args(argv[1:])
        log_debug(f"Dispatching {command.value}")
        return dispatch(command, parsed, controller)
    except UsageError as e:
        return CommandResult(EXIT_BAD_ARGUMENT, str(e))
    except Exception as e:
        log_exception(e)
        return CommandResult(EXIT_SYSTEM_PROBLEM, "Underlying system problem. See ERR for details.")


def dispatch(command: Command, args: argparse.Namespace, controller: GvtController) -> CommandResult:
    if command == Command.INIT:
        return cmd_init(controller)
    if command == Command.ADD:
        return cmd_file(command, args, controller.add)
    if command == Command.DETACH:
        return cmd_file(command, args, controller.detach)
    if command == Command.COMMIT:
        return cmd_file(command, args, controller.commit)
    if command == Command.CHECKOUT:
        return cmd_checkout(args, controller)
    if command == Command.HISTORY:
        return cmd_history(args, controller)
    if command == Command.VERSION:
        return cmd_version(args, controller)

    raise ValueError(f"Unhandled command: {command}")


def cmd_init(controller: GvtController) -> CommandResult:
    try:
        controller.init()
    except AlreadyInitialized:
        return CommandResult(EXIT_ALREADY_INITIALIZED, "Current directory is already initialized.")
    return CommandResult(EXIT_OK, "Current directory initialized successfully.")


def cmd_file(
    command: Command,
    args: argparse.Namespace,
    operation: Callable[[str, str | None], TrackResult],
) -> CommandResult:
    codes = FILE_COMMAND_CODES[command]
    file_name = args.file
    if not file_name:
        return CommandResult(codes.missing_argument, f"Please specify file to {codes.verb}.")

    try:
        result = operation(file_name, args.message)
    except FileMissing:
        if codes.missing_file is None:
            raise
        return CommandResult(codes.missing_file, f"File not found. File: {file_name}")
    except StorageFailure as e:
        log_exception(e)
        past = PAST_TENSE[codes.verb]
        return CommandResult(
            codes.storage_failure,
            f"File cannot be {past}. See ERR for details. File: {file_name}.",
        )

    if result.changed:
        log_debug(f"Version {result.version} created")
    return CommandResult(EXIT_OK, result.detail)


def cmd_checkout(args: argparse.Namespace, controller: GvtController) -> CommandResult:
    try:
        version_id = controller.checkout(args.version)
    except InvalidVersion as e:
        return CommandResult(EXIT_INVALID_VERSION, f"Invalid version number: {e.raw}")
    return CommandResult(EXIT_OK, f"Checkout successful for version: {version_id}")


def cmd_history(args: argparse.Namespace, controller: GvtController) -> CommandResult:
    if args.last is not None and args.last < 0:
        return CommandResult(EXIT_BAD_ARGUMENT, f"Invalid history limit: {args.last}")

    entries = controller.history(args.last)
    return CommandResult(EXIT_OK, render_history(entries))


def cmd_version(args: argparse.Namespace, controller: GvtController) -> CommandResult:
    try:
        info = controller.version(args.version)
    except InvalidVersion as e:
        return CommandResult(EXIT_INVALID_VERSION, f"Invalid version number: {e.raw}")
    return CommandResult(EXIT_OK, info.render())


def _first_positional(argv: list[str]) -> int:
    """Index of the command name; everything before it is a global option."""
    for idx, arg in enumerate(argv):
        if not arg.startswith("-"):
            return idx
    return len(argv)


def _print_result(result: CommandResult) -> None:
    stream = sys.stdout if result.success else sys.stderr
    end = "" if result.message.endswith("\n") else "\n"
    print(result.message, end=end, file=stream)


if __name__ == "__main__":
    sys.exit(main())
