"""In-memory Virtual File System.

The VFS is a tree of folders and files held entirely in memory and
navigated with familiar shell commands.

Architecture:

    ```
    /                           # Root (Folder named "")
    ├── docs/                   # Folder
    │   ├── notes.txt           # File
    │   └── archive/            # Folder
    └── todo                    # File
    ```

Node Types:

    - Node: Base class for all VFS entries
    - Folder: Can contain children (cd into them)
    - File: Leaf nodes with content (cat them)

Path Resolution:

    The PathResolver handles navigation:
    - Absolute paths: /docs/notes.txt
    - Relative paths: ../other, docs/archive
    - Parent segments: .. (fails above the root)
    - Optional auto-creation of missing folders (mkdir, mv, cp)

Usage Example:

    ```python
    from vfshell.vfs import FileSystem

    fs = FileSystem()
    fs.mkdir("docs/archive")
    fs.create_file("/docs/notes.txt", "hello")
    fs.cd("docs")
    fs.ls()                 # ['archive', 'notes.txt']
    fs.mv("notes.txt", "archive")
    fs.cat("archive/notes.txt")  # 'hello'
    ```
"""

from vfshell.vfs.base import Node, Folder, File, NodeType
from vfshell.vfs.resolver import PathResolver, split_path
from vfshell.vfs.filesystem import FileSystem

__all__ = [
    # Main entry point
    "FileSystem",
    # Core classes
    "Node",
    "Folder",
    "File",
    "NodeType",
    # Path resolution
    "PathResolver",
    "split_path",
]
