"""REPL shell for interactive file system navigation.

This module provides the command dispatcher and an interactive shell
for driving the virtual file system with single-line commands.
"""

from vfshell.repl.dispatcher import CommandDispatcher, format_result
from vfshell.repl.shell import FileSystemShell

__all__ = ["CommandDispatcher", "FileSystemShell", "format_result"]
