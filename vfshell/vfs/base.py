"""Base classes for the Virtual File System.

The VFS is an in-memory tree of named nodes that can be navigated
with shell commands (cd, ls, cat, etc.).

Architecture:
    - Node: Base class for all VFS nodes
    - Folder: Nodes that can contain children (cd into them)
    - File: Leaf nodes with content (cat them)
"""

import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Pattern, Union


class NodeType(Enum):
    """Type of VFS node."""
    FOLDER = "folder"
    FILE = "file"


class Node(ABC):
    """Base class for all VFS nodes.

    A Node represents an entry in the virtual filesystem. Every node
    has a name; what characters the name may contain depends on the
    kind of node (see ``validate``).

    Attributes:
        name: The name of this node (e.g., "notes.txt", "docs")
        node_type: Type of node (folder or file)
    """

    def __init__(self, name: str, node_type: NodeType = NodeType.FILE):
        """Initialize a VFS node.

        Args:
            name: Name of this node
            node_type: Type of node
        """
        self.name = name
        self.node_type = node_type

    def validate(self) -> bool:
        """Check that the name is legal for this kind of node.

        Returns:
            True if the name contains no path separator
        """
        return "/" not in self.name

    @abstractmethod
    def clone(self) -> "Node":
        """Create a deep, detached copy of this node.

        Returns:
            New node with no back-reference to any folder
        """
        pass

    @abstractmethod
    def get_info(self) -> Dict[str, Any]:
        """Get metadata about this node for display.

        Returns:
            Dict with keys like: type, name, path
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', path='{self}')"


class File(Node):
    """A file node with readable content.

    Files hold an opaque text blob and a permissions tag. The tag is
    stored and copied but never checked.

    Attributes:
        contents: File content
        permissions: Free-form permissions tag
        folder: Folder holding this file (None until inserted)
    """

    def __init__(self, name: str, contents: str = "", permissions: str = ""):
        """Initialize a file node.

        Args:
            name: Name of this file
            contents: Content of the file
            permissions: Permissions tag
        """
        super().__init__(name, NodeType.FILE)
        self.contents = contents
        self.permissions = permissions
        self.folder: Optional["Folder"] = None

    def clone(self) -> "File":
        return File(self.name, self.contents, self.permissions)

    def set_permissions(self, permissions: str) -> None:
        self.permissions = permissions

    def get_info(self) -> Dict[str, Any]:
        """Get file metadata.

        Returns:
            Dict with file information
        """
        return {
            "type": "file",
            "name": self.name,
            "size": len(self.contents),
            "permissions": self.permissions,
            "path": str(self),
        }

    def __str__(self) -> str:
        if self.folder is not None:
            return f"{self.folder}/{self.name}"
        return self.name


class Folder(Node):
    """A folder node that can contain children.

    Folders can be navigated into with `cd` and their children can be
    listed with `ls`. Children keep their insertion order, and names
    are unique among siblings regardless of node type.

    Attributes:
        parent: Parent folder (None for root and for detached folders)
    """

    def __init__(self, name: str, parent: Optional["Folder"] = None):
        """Initialize a folder node.

        Args:
            name: Name of this folder
            parent: Parent folder
        """
        super().__init__(name, NodeType.FOLDER)
        self.parent = parent
        self.children: List[Node] = []

    def validate(self) -> bool:
        """Folder names additionally may not contain a dot."""
        return super().validate() and "." not in self.name

    def clone(self) -> "Folder":
        """Deep-copy this folder and everything below it.

        The copy's own parent is left unset; the folder that receives
        the copy sets it on ``add``.
        """
        copy = Folder(self.name)
        pending = [(self, copy)]
        while pending:
            source, target = pending.pop()
            for child in source.children:
                if isinstance(child, Folder):
                    sub = Folder(child.name)
                    target.add(sub)
                    pending.append((child, sub))
                else:
                    target.add(child.clone())
        return copy

    def list_children(self) -> List[Node]:
        """List all children of this folder in insertion order."""
        return list(self.children)

    def add(self, node: Node) -> bool:
        """Insert a child node.

        Args:
            node: Node to insert

        Returns:
            True if inserted, False if a sibling already has that name
        """
        if self.has(node.name):
            return False

        if isinstance(node, File):
            node.folder = self
        elif isinstance(node, Folder):
            node.parent = self

        self.children.append(node)
        return True

    def remove(self, name: str) -> bool:
        """Remove the child with the given name.

        Returns:
            True if a child was removed
        """
        remaining = [child for child in self.children if child.name != name]
        removed = len(remaining) != len(self.children)
        self.children = remaining
        return removed

    def get(self, name: str) -> Optional[Node]:
        """Get a child node of any type by name."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def get_file(self, name: str) -> Optional[File]:
        for child in self.children:
            if child.name == name and isinstance(child, File):
                return child
        return None

    def get_folder(self, name: str) -> Optional["Folder"]:
        for child in self.children:
            if child.name == name and isinstance(child, Folder):
                return child
        return None

    def has(self, name: str) -> bool:
        return any(child.name == name for child in self.children)

    def find(self, name: str) -> List[Node]:
        """Find nodes by name at or below this folder.

        The direct child with that name (if any) comes first, then each
        child folder is searched in order. This folder itself is never
        part of the result.

        Args:
            name: Exact name to look for

        Returns:
            Matching nodes in depth-first pre-order
        """
        results: List[Node] = []
        stack: List[Folder] = [self]
        while stack:
            folder = stack.pop()
            match = folder.get(name)
            if match is not None:
                results.append(match)
            stack.extend(
                child for child in reversed(folder.children) if isinstance(child, Folder)
            )
        return results

    def get_files_matching(self, pattern: Union[str, Pattern[str]]) -> List[File]:
        """Direct child files whose name contains a match for pattern."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return [
            child for child in self.children
            if isinstance(child, File) and regex.search(child.name)
        ]

    def get_info(self) -> Dict[str, Any]:
        """Get folder metadata.

        Returns:
            Dict with folder information
        """
        return {
            "type": "folder",
            "name": self.name,
            "children_count": len(self.children),
            "path": str(self) or "/",
        }

    def __str__(self) -> str:
        # The root renders as "", so children come out as "/a/b".
        names = []
        node = self
        while node.parent is not None:
            names.append(node.name)
            node = node.parent
        if not names:
            return ""
        return "/" + "/".join(reversed(names))
