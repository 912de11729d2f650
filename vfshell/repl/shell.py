"""Interactive REPL shell for the virtual file system."""

import logging
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vfshell.config import ShellConfig
from vfshell.repl.dispatcher import CommandDispatcher
from vfshell.vfs import FileSystem

logger = logging.getLogger(__name__)

USAGE = {
    "cd": ("cd <path>", "Change directory"),
    "mkdir": ("mkdir <path>", "Create folders, including missing parents"),
    "createFile": ("createFile <path> <contents>", "Create a file in an existing folder"),
    "ls": ("ls", "List the current folder"),
    "cat": ("cat <path>", "Read file content"),
    "mv": ("mv <source> <dest>", "Move (or rename) a file or folder"),
    "cp": ("cp <source> <dest>", "Copy a file or folder recursively"),
    "pwdPath": ("pwdPath", "Print working directory"),
    "rm": ("rm <path>", "Remove a file or folder with its contents"),
}


class PathCompleter(Completer):
    """Tab completion for VFS paths."""

    def __init__(self, fs: FileSystem, commands: List[str]):
        self.fs = fs
        self.commands = commands

    def get_completions(self, document, complete_event):
        """Get command or path completion candidates."""
        text = document.text_before_cursor
        words = text.split()

        # First word: complete command names
        if len(words) == 0 or (len(words) == 1 and not text.endswith(" ")):
            partial = words[0] if words else ""
            for name in self.commands:
                if name.startswith(partial):
                    yield Completion(name, start_position=-len(partial))
            return

        partial = "" if text.endswith(" ") else words[-1]
        for candidate in self.fs.complete(partial):
            yield Completion(candidate, start_position=-len(partial))


class FileSystemShell:
    """Interactive shell over an in-memory file system.

    Every line goes to the CommandDispatcher unless it is a shell
    built-in. Each executed line is kept in a scrollback as
    "<line> : <result>".

    Built-ins:
    - help, ?: List available commands
    - history: Show the scrollback
    - clear: Empty the scrollback
    - ll: Long listing of the current folder
    - exit, quit: Exit the shell
    """

    def __init__(
        self,
        fs: Optional[FileSystem] = None,
        config: Optional[ShellConfig] = None,
        console: Optional[Console] = None,
    ):
        """Initialize the REPL shell.

        Args:
            fs: File system to operate on (a new empty one by default)
            config: Shell settings
            console: Rich console for output
        """
        self.fs = fs or FileSystem()
        self.config = config or ShellConfig()
        self.console = console or Console()
        self.dispatcher = CommandDispatcher(self.fs)
        self.scrollback: Deque[str] = deque(maxlen=max(self.config.scrollback, 1))
        self.running = True
        self.session: Optional[PromptSession] = None

        self.builtins = {
            "help": self.cmd_help,
            "?": self.cmd_help,
            "history": self.cmd_history,
            "clear": self.cmd_clear,
            "ll": self.cmd_ll,
            "exit": self.cmd_exit,
            "quit": self.cmd_exit,
        }

    def get_prompt(self) -> str:
        """Generate prompt showing current path.

        Returns:
            Prompt string like "vfs:/docs $ "
        """
        try:
            return self.config.prompt.format(cwd=self.fs.pwd_path())
        except (KeyError, IndexError, ValueError):
            # Unknown placeholders: show the template verbatim
            return self.config.prompt

    def _create_session(self) -> PromptSession:
        if self.config.history:
            history = FileHistory(str(self.config.get_history_path()))
        else:
            history = InMemoryHistory()

        return PromptSession(
            history=history,
            completer=PathCompleter(
                self.fs, self.dispatcher.available_commands() + list(self.builtins)
            ),
            style=Style.from_dict(
                {
                    "prompt": "ansicyan bold",
                }
            ),
        )

    def run(self):
        """Run the shell main loop."""
        if self.session is None:
            self.session = self._create_session()

        self.console.print(
            "[bold cyan]vfshell[/bold cyan] - In-memory virtual file system", style="bold"
        )
        self.console.print("Type 'help' for available commands, 'exit' to quit.\n")

        while self.running:
            try:
                line = self.session.prompt(self.get_prompt()).strip()
                if not line:
                    continue

                self.execute(line)

            except KeyboardInterrupt:
                self.console.print("\nUse 'exit' or 'quit' to exit the shell.")
                continue
            except EOFError:
                break
            except Exception as e:
                logger.debug("Command failed", exc_info=True)
                self.console.print(f"[red]Error:[/red] {escape(str(e))}", style="bold")

    def execute(self, line: str, silent: bool = False) -> Optional[str]:
        """Parse and execute a command line.

        Args:
            line: Command line to execute
            silent: If True, suppress console output

        Returns:
            Result text for dispatched commands, None for built-ins
        """
        parts = line.split()
        if parts and parts[0] in self.builtins:
            self.builtins[parts[0]](parts[1:])
            return None

        result = self.dispatcher.execute(line)
        entry = f"{line} : {result}"
        self.scrollback.append(entry)

        if not silent:
            self.console.print(escape(entry))
        return result

    # Built-in commands

    def cmd_help(self, args: List[str]) -> None:
        """Show help information.

        Usage: help [command]
        """
        if args:
            cmd = args[0]
            if cmd in USAGE:
                usage, description = USAGE[cmd]
                self.console.print(f"[bold]{escape(usage)}[/bold]")
                self.console.print(description)
                self.console.print(
                    f"Takes exactly {self.dispatcher.arity(cmd)} argument(s); "
                    "arguments cannot contain spaces."
                )
            else:
                self.console.print(f"[red]Unknown command:[/red] {escape(cmd)}")
            return

        self.console.print("[bold cyan]Available Commands:[/bold cyan]\n")

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Command", style="cyan")
        table.add_column("Description", style="white")

        for name in self.dispatcher.available_commands():
            usage, description = USAGE[name]
            table.add_row(escape(usage), description)
        table.add_row("history", "Show executed commands and results")
        table.add_row("clear", "Clear the command history")
        table.add_row("ll", "List the current folder with details")
        table.add_row("help [cmd]", "Show help")
        table.add_row("exit, quit", "Exit the shell")

        self.console.print(table)

        self.console.print("\n[bold cyan]Paths:[/bold cyan]")
        self.console.print("  Absolute paths start at the root: /docs/notes.txt")
        self.console.print("  Relative paths start at the current folder; '..' goes up")
        self.console.print("  mkdir, mv and cp create missing parent folders")

    def cmd_history(self, args: List[str]) -> None:
        """Show the scrollback, newest first.

        Usage: history
        """
        for entry in reversed(self.scrollback):
            self.console.print(escape(entry))

    def cmd_clear(self, args: List[str]) -> None:
        """Clear the scrollback.

        Usage: clear
        """
        self.scrollback.clear()

    def cmd_exit(self, args: List[str]) -> None:
        """Exit the shell.

        Usage: exit
        """
        self.running = False
        self.console.print("[cyan]Goodbye![/cyan]")

    def cmd_ll(self, args: List[str]) -> None:
        """Long listing of the current folder.

        Usage: ll
        """
        nodes = self.fs.pwd.list_children()
        if not nodes:
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Type", style="cyan")
        table.add_column("Name", style="white")
        table.add_column("Info", style="dim")

        for node in nodes:
            info = node.get_info()
            table.add_row(info["type"], escape(node.name), self._format_node_info(info))

        self.console.print(table)

    @staticmethod
    def _format_node_info(info: Dict[str, Any]) -> str:
        if info["type"] == "folder":
            return f"{info['children_count']} items"
        parts = [f"{info['size']} bytes"]
        if info["permissions"]:
            parts.append(f"perms {info['permissions']}")
        return escape(", ".join(parts))
