"""Path resolution for the Virtual File System.

Handles path parsing and navigation (cd, mkdir, ls semantics).
"""

import logging
from typing import Callable, List, Optional, Tuple

from vfshell.vfs.base import Folder

logger = logging.getLogger(__name__)

# Called with (segment name, folder being traversed); returns the folder
# to continue from.
MissingHandler = Callable[[str, Folder], Folder]
AtPathHandler = Callable[[Folder], None]


def split_path(path: str) -> Tuple[str, str]:
    """Split a path into its parent path and final name.

    Trailing slashes are ignored, so "a/b/" splits like "a/b".

    Args:
        path: Path to split

    Returns:
        (parent_path, name). name is "" when the path has no final
        segment (e.g. "/" or ""). An absolute path with a single
        segment gets "/" as its parent.

    Examples:
        >>> split_path("docs/notes.txt")
        ('docs', 'notes.txt')
        >>> split_path("/notes.txt")
        ('/', 'notes.txt')
        >>> split_path("notes.txt")
        ('', 'notes.txt')
    """
    stripped = path.rstrip("/")
    if not stripped:
        return ("/" if path.startswith("/") else "", "")

    if "/" not in stripped:
        return "", stripped

    parent, name = stripped.rsplit("/", 1)
    if not parent and path.startswith("/"):
        parent = "/"
    return parent, name


class PathResolver:
    """Resolves paths in the VFS and handles navigation.

    Every operation on the filesystem walks paths through ``resolve``.
    It handles:
    - Absolute paths: /docs/notes
    - Relative paths: ../other, docs/archive
    - Parent segments: .. (fails above the root)
    - Auto-creation of missing folders through a handler
    """

    def __init__(self, root: Folder):
        """Initialize path resolver.

        Args:
            root: Root folder of the VFS
        """
        self.root = root

    def resolve(
        self,
        current: Folder,
        path: str,
        missing: Optional[MissingHandler] = None,
        at_path: Optional[AtPathHandler] = None,
    ) -> bool:
        """Walk a path one folder at a time.

        Without ``missing`` the walk is strict: any segment that does not
        name an existing child folder fails the whole call. With it, the
        handler is asked for a folder to continue from. The handler may
        return a folder that it did not insert into the tree; the walk
        carries on from it regardless.

        Args:
            current: Folder that relative paths start from
            path: Path to resolve (absolute or relative)
            missing: Handler for segments with no matching folder
            at_path: Called with the destination folder on success

        Returns:
            True if every segment was resolved
        """
        node = self.root if path.startswith("/") else current

        for part in self._parse_path(path):
            if part == "..":
                if node.parent is None:
                    logger.debug("Cannot resolve %r: '..' above %r", path, str(node) or "/")
                    return False
                node = node.parent
                continue

            child = node.get_folder(part)
            if child is not None:
                node = child
            elif missing is not None:
                node = missing(part, node)
            else:
                logger.debug("Cannot resolve %r: no folder named %r", path, part)
                return False

        if at_path is not None:
            at_path(node)
        return True

    def resolve_folder(self, current: Folder, path: str) -> Optional[Folder]:
        """Resolve a path strictly to a folder.

        Args:
            current: Folder that relative paths start from
            path: Path to resolve

        Returns:
            Destination folder or None if the path doesn't resolve
        """
        found: List[Folder] = []
        if not self.resolve(current, path, at_path=found.append):
            return None
        return found[0]

    def complete_path(self, partial: str, current: Folder) -> List[str]:
        """Get completion candidates for a partial path.

        Used for tab completion.

        Args:
            partial: Partial path to complete
            current: Current working directory

        Returns:
            List of completion candidates
        """
        # Split into directory part and filename part
        if "/" in partial:
            dir_part, file_part = partial.rsplit("/", 1)
            if partial.startswith("/") and not dir_part:
                dir_part = "/"
        else:
            dir_part = ""
            file_part = partial

        if dir_part:
            dir_node = self.resolve_folder(current, dir_part)
        else:
            dir_node = current

        if dir_node is None:
            return []

        candidates = []
        for child in dir_node.list_children():
            if not child.name.startswith(file_part):
                continue

            if dir_part == "/":
                candidate = f"/{child.name}"
            elif dir_part:
                candidate = f"{dir_part}/{child.name}"
            else:
                candidate = child.name

            # Add trailing slash for directories
            if isinstance(child, Folder):
                candidate += "/"
            candidates.append(candidate)

        return candidates

    def _parse_path(self, path: str) -> List[str]:
        """Parse a path into parts, dropping empty segments.

        Args:
            path: Path to parse

        Returns:
            List of path components
        """
        return [part for part in path.split("/") if part]
