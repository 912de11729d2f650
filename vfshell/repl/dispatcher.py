"""Command dispatcher: maps a command line to a FileSystem operation."""

import inspect
import logging
from typing import Any, Callable, Dict, List

from vfshell.vfs import FileSystem

logger = logging.getLogger(__name__)

COMMANDS = [
    "cd",
    "mkdir",
    "createFile",
    "ls",
    "cat",
    "mv",
    "cp",
    "pwdPath",
    "rm",
]

NOT_FOUND = "Command not found"


def format_result(result: Any) -> str:
    """Render an operation result as text.

    Sequences are comma-joined, booleans become "true"/"false" and a
    missing result (None) becomes "not found".
    """
    if result is None:
        return "not found"
    if isinstance(result, bool):
        return "true" if result else "false"
    if isinstance(result, (list, tuple)):
        return ", ".join(str(item) for item in result)
    return str(result)


class CommandDispatcher:
    """Execute single-line commands against a FileSystem.

    A line is split on whitespace; the first token names the command
    and the rest are passed positionally. There is no quoting, so an
    argument can never contain spaces.

    Example:
        >>> dispatcher = CommandDispatcher(FileSystem())
        >>> dispatcher.execute("mkdir docs")
        'true'
        >>> dispatcher.execute("ls")
        'docs'
        >>> dispatcher.execute("cat")
        'cat requires 1 arguments'
    """

    def __init__(self, fs: FileSystem):
        """Initialize the dispatcher.

        Args:
            fs: File system the commands operate on
        """
        self.fs = fs
        self.commands: Dict[str, Callable[..., Any]] = {
            name: getattr(fs, name) for name in COMMANDS
        }

    def available_commands(self) -> List[str]:
        return list(self.commands)

    def arity(self, name: str) -> int:
        """Number of arguments a command takes."""
        return len(inspect.signature(self.commands[name]).parameters)

    def execute(self, line: str) -> str:
        """Parse and execute a command line.

        Args:
            line: Command line, e.g. "mv notes.txt /archive"

        Returns:
            Result rendered as text
        """
        parts = line.split()
        if not parts or parts[0] not in self.commands:
            return NOT_FOUND

        name, args = parts[0], parts[1:]
        expected = self.arity(name)
        if len(args) != expected:
            return f"{name} requires {expected} arguments"

        logger.debug("Executing %s %s", name, args)
        return format_result(self.commands[name](*args))
