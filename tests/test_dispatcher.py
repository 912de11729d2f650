"""Tests for the command dispatcher."""

import pytest

from vfshell.repl.dispatcher import COMMANDS, CommandDispatcher, format_result
from vfshell.vfs import FileSystem


@pytest.fixture
def dispatcher():
    return CommandDispatcher(FileSystem())


class TestFormatResult:
    """Rendering operation results as text."""

    def test_booleans(self):
        assert format_result(True) == "true"
        assert format_result(False) == "false"

    def test_none(self):
        assert format_result(None) == "not found"

    def test_sequences_comma_joined(self):
        assert format_result(["a", "b", "c"]) == "a, b, c"
        assert format_result([]) == ""

    def test_strings_unchanged(self):
        assert format_result("/a/b") == "/a/b"


class TestDispatch:
    """Command lookup, arity and execution."""

    def test_available_commands(self, dispatcher):
        assert dispatcher.available_commands() == COMMANDS
        assert dispatcher.available_commands() == [
            "cd", "mkdir", "createFile", "ls", "cat", "mv", "cp", "pwdPath", "rm",
        ]

    @pytest.mark.parametrize("name, expected", [
        ("cd", 1), ("mkdir", 1), ("createFile", 2), ("ls", 0), ("cat", 1),
        ("mv", 2), ("cp", 2), ("pwdPath", 0), ("rm", 1),
    ])
    def test_arity(self, dispatcher, name, expected):
        assert dispatcher.arity(name) == expected

    def test_unknown_command(self, dispatcher):
        assert dispatcher.execute("format c:") == "Command not found"
        assert dispatcher.execute("chmod f rwx") == "Command not found"
        assert dispatcher.execute("find x") == "Command not found"

    def test_empty_line(self, dispatcher):
        assert dispatcher.execute("") == "Command not found"
        assert dispatcher.execute("   ") == "Command not found"

    def test_wrong_arity(self, dispatcher):
        assert dispatcher.execute("mkdir") == "mkdir requires 1 arguments"
        assert dispatcher.execute("ls extra") == "ls requires 0 arguments"
        assert dispatcher.execute("createFile only") == "createFile requires 2 arguments"

    def test_no_quoting(self, dispatcher):
        """Contents with spaces are separate tokens."""
        assert dispatcher.execute('createFile f "hello world"') == "createFile requires 2 arguments"

    def test_session(self, dispatcher):
        assert dispatcher.execute("mkdir folder") == "true"
        assert dispatcher.execute("cd folder") == "true"
        assert dispatcher.execute("pwdPath") == "/folder"
        assert dispatcher.execute("createFile text.txt TEXT") == "true"
        assert dispatcher.execute("cat text.txt") == "TEXT"
        assert dispatcher.execute("mv text.txt /") == "true"
        assert dispatcher.execute("cat text.txt") == "not found"
        assert dispatcher.execute("cd /") == "true"
        assert dispatcher.execute("ls") == "folder, text.txt"

    def test_failures_render_false(self, dispatcher):
        assert dispatcher.execute("cd nowhere") == "false"
        assert dispatcher.execute("rm ghost") == "false"
        assert dispatcher.execute("cp a b") == "false"

    def test_extra_whitespace(self, dispatcher):
        assert dispatcher.execute("  mkdir   spaced  ") == "true"
        assert dispatcher.execute("ls") == "spaced"

    def test_empty_ls(self, dispatcher):
        assert dispatcher.execute("ls") == ""
