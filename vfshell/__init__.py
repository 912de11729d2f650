"""
vfshell - An in-memory virtual file system driven by shell-style commands.

Main API:
    from vfshell import FileSystem, CommandDispatcher

    fs = FileSystem()

    # Build a tree
    fs.mkdir("docs/archive")
    fs.create_file("docs/notes.txt", "hello")

    # Navigate and read
    fs.cd("docs")
    fs.ls()                  # ['archive', 'notes.txt']
    fs.cat("notes.txt")      # 'hello'

    # Move, copy, search
    fs.mv("notes.txt", "archive")
    fs.cp("archive", "/backup")
    fs.cd("/")
    fs.find("notes.txt")     # [File(...), File(...)]

    # Or drive it with command lines
    dispatcher = CommandDispatcher(fs)
    dispatcher.execute("pwdPath")   # '/'
"""

from .vfs import FileSystem, Folder, File, Node, PathResolver
from .repl.dispatcher import CommandDispatcher

__version__ = "0.1.0"
__all__ = [
    "FileSystem",
    "Folder",
    "File",
    "Node",
    "PathResolver",
    "CommandDispatcher",
]
