import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.traceback import install

from .config import load_config, update_config, get_config_path
from .decorators import handle_cli_errors

# Initialize Rich Traceback for better error messages
install()

# Initialize Rich Console
console = Console()

# Configure logging to use Rich's RichHandler
logging.basicConfig(
    level=logging.INFO,  # Set to INFO by default, DEBUG if verbose
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger(__name__)

# Main app
app = typer.Typer()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode"),
):
    """
    vfshell - an in-memory virtual file system driven by shell-style commands.

    Create folders and files, move and copy them around, and search the
    tree, all without touching the disk.
    """
    if verbose or load_config().cli.verbose:
        logging.getLogger("vfshell").setLevel(logging.DEBUG)
        if verbose:
            console.print("[bold green]Verbose mode enabled.[/bold green]")


@app.command()
def about():
    """Display information about vfshell."""
    from .repl.dispatcher import COMMANDS

    console.print("[bold cyan]vfshell - In-memory virtual file system[/bold cyan]")
    console.print("")
    console.print("Everything lives in memory and is gone when the process exits.")
    console.print("")
    console.print("[bold]Commands understood by the file system:[/bold]")
    console.print("  " + ", ".join(COMMANDS))
    console.print("")
    console.print("[bold]Getting Started:[/bold]")
    console.print("  vfshell shell                    Interactive shell")
    console.print("  vfshell exec 'mkdir a' 'ls'      Run commands from arguments")
    console.print("  vfshell run script.vfs           Run commands from a file")


def _new_shell():
    from .repl.shell import FileSystemShell

    config = load_config()
    console.no_color = not config.cli.color
    return FileSystemShell(config=config.shell, console=console)


# ============================================================================
# Shell Commands
# ============================================================================

@app.command()
@handle_cli_errors
def shell(
    prompt: Optional[str] = typer.Option(None, "--prompt", help="Prompt template, {cwd} is the current path"),
):
    """
    Launch interactive shell on a fresh, empty file system.

    Commands:
        cd, pwdPath, ls    - Navigate
        mkdir, createFile  - Create folders and files
        cat                - Read file content
        mv, cp, rm         - Move, copy and remove
        help               - Show help

    Example:
        vfshell shell
    """
    repl = _new_shell()
    if prompt is not None:
        repl.config.prompt = prompt
    repl.run()


@app.command()
@handle_cli_errors
def run(
    script: Path = typer.Argument(..., help="File with one command per line"),
):
    """
    Run commands from a script file.

    Blank lines and lines starting with '#' are skipped. Each command is
    printed with its result as "<command> : <result>".

    Example:
        vfshell run setup.vfs
    """
    lines = Path(script).read_text().splitlines()
    repl = _new_shell()

    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        repl.execute(line)
        if not repl.running:
            break


@app.command(name="exec")
@handle_cli_errors
def exec_commands(
    commands: List[str] = typer.Argument(..., help="Command lines, e.g. 'mkdir docs' 'ls'"),
):
    """
    Run command lines given as arguments against one file system.

    Example:
        vfshell exec "mkdir docs" "createFile docs/a.txt hi" "cat docs/a.txt"
    """
    repl = _new_shell()
    for line in commands:
        repl.execute(line)
        if not repl.running:
            break


@app.command(name="config")
@handle_cli_errors
def config_cmd(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    prompt: Optional[str] = typer.Option(None, "--prompt", help="Prompt template, {cwd} is the current path"),
    history: Optional[bool] = typer.Option(None, "--history/--no-history", help="Keep prompt history on disk"),
    history_file: Optional[str] = typer.Option(None, "--history-file", help="Prompt history file"),
    scrollback: Optional[int] = typer.Option(None, "--scrollback", help="Number of results kept by 'history'"),
    verbose: Optional[bool] = typer.Option(None, "--verbose/--quiet", help="Default log verbosity"),
    color: Optional[bool] = typer.Option(None, "--color/--no-color", help="Colored output"),
):
    """
    View or update configuration.

    Examples:
        vfshell config --show
        vfshell config --prompt "fs:{cwd}> "
        vfshell config --no-history
    """
    if scrollback is not None and scrollback < 1:
        raise ValueError("scrollback must be at least 1")

    changes = [prompt, history, history_file, scrollback, verbose, color]
    if any(value is not None for value in changes):
        update_config(
            shell_prompt=prompt,
            shell_history=history,
            shell_history_file=history_file,
            shell_scrollback=scrollback,
            cli_verbose=verbose,
            cli_color=color,
        )
        console.print(f"[green]✓ Configuration saved to {get_config_path()}[/green]")
        if not show:
            return

    config = load_config()
    console.print(f"[bold]Configuration file:[/bold] {get_config_path()}")
    console.print(escape(json.dumps(config.to_dict(), indent=2)))


if __name__ == "__main__":
    app()
