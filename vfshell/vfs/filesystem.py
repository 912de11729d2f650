"""Main FileSystem class - entry point for VFS access."""

import logging
import re
from typing import Callable, List, Optional, Pattern, Union

from vfshell.vfs.base import File, Folder, Node
from vfshell.vfs.resolver import PathResolver, split_path

logger = logging.getLogger(__name__)


class FileSystem:
    """In-memory virtual file system.

    This is the main entry point for the VFS. It owns the root folder,
    tracks the current working folder and provides the shell-style
    operations on top of a PathResolver.

    Every operation reports its outcome through the return value:
    False, None, an empty list or an empty string. Nothing raises on
    bad input.

    Usage:
        >>> fs = FileSystem()
        >>> fs.mkdir("docs/archive")
        True
        >>> fs.create_file("docs/notes.txt", "hello")
        True
        >>> fs.cd("docs")
        True
        >>> fs.ls()
        ['archive', 'notes.txt']
        >>> fs.cat("notes.txt")
        'hello'
        >>> fs.pwd_path()
        '/docs'
    """

    def __init__(self):
        self.root = Folder("")
        self.pwd = self.root  # Current working folder
        self.resolver = PathResolver(self.root)

    # Navigation

    def cd(self, path: str) -> bool:
        """Change current folder.

        Resolving to the folder we are already in (e.g. an empty path)
        counts as failure.

        Args:
            path: Path to navigate to

        Returns:
            True if the current folder changed
        """
        target = self.resolver.resolve_folder(self.pwd, path)
        if target is None:
            return False

        if target is self.pwd:
            logger.debug("cd %r: already in %s", path, self.pwd_path())
            return False

        self.pwd = target
        return True

    def pwd_path(self) -> str:
        """Get current working folder path.

        Returns:
            "/" at the root, otherwise a path like /docs/archive
        """
        if self.pwd is self.root:
            return "/"
        return str(self.pwd)

    def ls(self) -> List[str]:
        """Names of the current folder's children, in insertion order."""
        return [node.name for node in self.pwd.list_children()]

    def cat(self, path: str) -> Optional[str]:
        """Read content of a file.

        Args:
            path: Path to file

        Returns:
            File content, or None if the path doesn't name a file
        """
        parent_path, name = split_path(path)
        parent = self.resolver.resolve_folder(self.pwd, parent_path)
        if parent is None or not name:
            return None

        node = parent.get_file(name)
        if node is None:
            return None
        return node.contents

    # Mutation

    def mkdir(self, path: str) -> bool:
        """Create a folder, including any missing parents.

        Each missing segment becomes a new folder that is inserted only if
        its name is valid. A rejected folder is still walked into, so
        the rest of the path is built inside a detached folder and lost
        with it. Partial creation counts as success.

        Args:
            path: Folder path to create

        Returns:
            True if at least one folder was inserted
        """
        created: List[Folder] = []

        def make_folder(name: str, parent: Folder) -> Folder:
            folder = Folder(name, parent)
            if folder.validate() and parent.add(folder):
                created.append(folder)
            else:
                logger.debug("mkdir %r: rejected folder name %r", path, name)
            return folder

        self.resolver.resolve(self.pwd, path, missing=make_folder)

        if created:
            logger.debug("mkdir %r: created %d folder(s)", path, len(created))
        return bool(created)

    def create_file(self, path: str, contents: str) -> bool:
        """Create a file in an existing folder.

        Parent folders are never created.

        Args:
            path: Path of the new file
            contents: File content

        Returns:
            True if the file was inserted
        """
        parent_path, name = split_path(path)
        parent = self.resolver.resolve_folder(self.pwd, parent_path)
        if parent is None or not name:
            return False

        node = File(name, contents)
        if not node.validate() or not parent.add(node):
            logger.debug("createFile %r: name %r rejected", path, name)
            return False
        return True

    def rm(self, path: str) -> bool:
        """Remove a file or a folder with everything below it.

        Args:
            path: Path of the node to remove

        Returns:
            True if something was removed
        """
        parent_path, name = split_path(path)
        parent = self.resolver.resolve_folder(self.pwd, parent_path)
        if parent is None or not name:
            return False

        removed = parent.remove(name)
        if removed:
            logger.debug("rm %r", path)
        return removed

    def chmod(self, name: str, permissions: str) -> None:
        """Set the permissions tag of a file in the current folder.

        No path traversal; unknown names are ignored.
        """
        node = self.pwd.get_file(name)
        if node is not None:
            node.set_permissions(permissions)

    def mv(self, old_path: str, new_path: str) -> bool:
        """Move a file or folder (Unix mv semantics)."""
        return self._move(old_path, new_path, is_move=True)

    def cp(self, old_path: str, new_path: str) -> bool:
        """Copy a file or folder recursively (Unix cp -r semantics)."""
        return self._move(old_path, new_path, is_move=False)

    # Search

    def find(self, name: str) -> List[Node]:
        """Find nodes named ``name`` below the current folder, pre-order."""
        return self.pwd.find(name)

    def find_by_regex(self, pattern: Union[str, Pattern[str]]) -> str:
        """Find files whose names match a regular expression.

        Folders below the current one are visited depth-first. The first
        folder holding any matching file provides the whole result and
        the search stops there. Files directly in the current folder
        are not considered.

        Args:
            pattern: Regex (string or compiled), matched anywhere in the name

        Returns:
            Absolute paths of the matches joined with ", ", or ""
        """
        try:
            regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        except re.error as e:
            logger.debug("findByRegex: invalid pattern %r: %s", pattern, e)
            return ""

        found: List[File] = []

        def visit(folder: Folder) -> bool:
            if found:
                return False
            found.extend(folder.get_files_matching(regex))
            return not found

        self._walk(self.pwd, visit)
        return ", ".join(str(node) for node in found)

    def walk(self, path: str, callback: Callable[[Folder], bool]) -> None:
        """Visit the folders below ``path`` depth-first.

        A folder's subtree is entered only when ``callback`` returns True
        for it.
        """
        self.resolver.resolve(
            self.pwd, path, at_path=lambda folder: self._walk(folder, callback)
        )

    def complete(self, partial: str) -> List[str]:
        """Get tab completion candidates.

        Args:
            partial: Partial path

        Returns:
            List of completion candidates
        """
        return self.resolver.complete_path(partial, self.pwd)

    # Command-name aliases used by the command dispatcher.
    createFile = create_file
    pwdPath = pwd_path
    findByRegex = find_by_regex

    # Internals

    def _get_node(self, path: str) -> Optional[Node]:
        """Resolve a path to the file or folder it names."""
        parent_path, name = split_path(path)
        if not name:
            return None

        parent = self.resolver.resolve_folder(self.pwd, parent_path)
        if parent is None:
            return None
        return parent.get(name)

    def _move(self, old_path: str, new_path: str, is_move: bool) -> bool:
        """Copy a node to a new location, then remove the original if moving.

        If ``new_path`` is an existing folder the node goes inside it under
        its own name. Otherwise the last segment of ``new_path`` is the new
        name and the folders leading to it are created as needed. The
        destination gets a deep clone; a name clash there fails the call
        and leaves the source alone. Folders created for a failed call are
        removed again.
        """
        source = self._get_node(old_path)
        if source is None:
            logger.debug("%s %r: no such file or folder", self._verb(is_move), old_path)
            return False

        created: List[Folder] = []
        if not self._place(source, old_path, new_path, is_move, created):
            self._discard(created)
            return False
        return True

    def _place(
        self,
        source: Node,
        old_path: str,
        new_path: str,
        is_move: bool,
        created: List[Folder],
    ) -> bool:
        dest = self.resolver.resolve_folder(self.pwd, new_path)
        name = source.name
        if dest is None:
            dest_path, name = split_path(new_path)
            if not name:
                return False
            dest = self._make_folders(dest_path, created)
            if dest is None:
                logger.debug("%s: cannot create destination %r", self._verb(is_move), dest_path)
                return False

        if is_move and isinstance(source, Folder) and self._is_within(dest, source):
            logger.debug("mv %r: cannot move a folder into itself", old_path)
            return False

        clone = source.clone()
        clone.name = name
        if not clone.validate() or not dest.add(clone):
            logger.debug("%s %r -> %r: name %r rejected", self._verb(is_move), old_path, new_path, name)
            return False

        if is_move:
            relative = self._relative_names(source, self.pwd)
            self.rm(old_path)
            if relative is not None:
                # The working folder moved with the source; follow it.
                self.pwd = self._descend(clone, relative)

        self.repair_parents()
        logger.debug("%s %r -> %s", self._verb(is_move), old_path, clone)
        return True

    def _make_folders(self, path: str, created: List[Folder]) -> Optional[Folder]:
        """Resolve ``path``, creating missing folders like mkdir.

        Every folder inserted on the way is appended to ``created``.

        Returns:
            Destination folder, or None if it can't be reached or isn't
            attached to the tree
        """
        found: List[Folder] = []

        def make_folder(name: str, parent: Folder) -> Folder:
            folder = Folder(name, parent)
            if folder.validate() and parent.add(folder):
                created.append(folder)
            return folder

        if not self.resolver.resolve(self.pwd, path, missing=make_folder, at_path=found.append):
            return None

        dest = found[0]
        if not self._is_attached(dest):
            return None
        return dest

    @staticmethod
    def _discard(created: List[Folder]) -> None:
        """Unlink folders created for a move that did not happen."""
        for folder in reversed(created):
            if folder.parent is not None:
                folder.parent.children = [
                    child for child in folder.parent.children if child is not folder
                ]

    def _is_attached(self, folder: Folder) -> bool:
        """True if ``folder`` is reachable from the root.

        Folders rejected during auto-creation keep a parent pointer but
        are not among that parent's children.
        """
        node = folder
        while node.parent is not None:
            if not any(child is node for child in node.parent.children):
                return False
            node = node.parent
        return node is self.root

    def repair_parents(self, folder: Optional[Folder] = None) -> None:
        """Rewrite back-references below ``folder`` (default: root).

        Every folder's parent and every file's folder is set to the folder
        that actually holds it.
        """
        stack = [folder if folder is not None else self.root]
        while stack:
            current = stack.pop()
            for child in current.children:
                if isinstance(child, Folder):
                    child.parent = current
                    stack.append(child)
                elif isinstance(child, File):
                    child.folder = current

    def _walk(self, folder: Folder, callback: Callable[[Folder], bool]) -> None:
        stack = self._child_folders(folder)
        while stack:
            current = stack.pop()
            if callback(current):
                stack.extend(self._child_folders(current))

    @staticmethod
    def _child_folders(folder: Folder) -> List[Folder]:
        # Reversed so that popping visits children in insertion order.
        return [child for child in reversed(folder.children) if isinstance(child, Folder)]

    @staticmethod
    def _is_within(folder: Folder, ancestor: Folder) -> bool:
        """True if ``folder`` is ``ancestor`` or lies below it."""
        node: Optional[Folder] = folder
        while node is not None:
            if node is ancestor:
                return True
            node = node.parent
        return False

    @staticmethod
    def _relative_names(ancestor: Node, folder: Folder) -> Optional[List[str]]:
        """Names leading from ``ancestor`` down to ``folder``, or None."""
        names: List[str] = []
        node: Optional[Folder] = folder
        while node is not None:
            if node is ancestor:
                return list(reversed(names))
            names.append(node.name)
            node = node.parent
        return None

    @staticmethod
    def _descend(folder: Folder, names: List[str]) -> Folder:
        for name in names:
            folder = folder.get_folder(name)
        return folder

    @staticmethod
    def _verb(is_move: bool) -> str:
        return "mv" if is_move else "cp"
