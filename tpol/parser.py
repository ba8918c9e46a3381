from dataclasses import dataclass, field
from enum import Enum

from tpol.config import ESCAPE_CHARACTER, EXIT_COMMAND


class LineKind(Enum):
    SHELL_ESCAPE = "shell_escape"
    EXIT = "exit"
    EMPTY = "empty"
    SUBCOMMAND = "subcommand"


@dataclass(frozen=True)
class ChildInvocation:
    """Executable plus the arguments handed to it"""
    executable: str
    args: tuple = field(default_factory=tuple)

    @property
    def argv(self):
        return [self.executable, *self.args]

    def __str__(self):
        return " ".join(self.argv)


@dataclass(frozen=True)
class ParsedLine:
    kind: LineKind
    line: str
    invocation: ChildInvocation = None

    @property
    def records_history(self):
        return self.kind is LineKind.SUBCOMMAND


def tokenize(line):
    """
    Split on whitespace.
    No quoting: "a 'b c'" -> ['a', "'b", "c'"]
    """
    return line.split()


def classify(line, command):
    """
    Decide what an input line means for the wrapped command.
    Returns: ParsedLine
    """
    if line.startswith(ESCAPE_CHARACTER):
        fields = tokenize(line[len(ESCAPE_CHARACTER):])
        if not fields:
            # "!" on its own runs nothing
            return ParsedLine(LineKind.EMPTY, line)
        return ParsedLine(
            LineKind.SHELL_ESCAPE,
            line,
            ChildInvocation(fields[0], tuple(fields[1:])),
        )

    stripped = line.strip()
    if stripped == EXIT_COMMAND:
        return ParsedLine(LineKind.EXIT, line)
    if not stripped:
        return ParsedLine(LineKind.EMPTY, line)

    args = tokenize(line)
    # "git status" typed inside the git shell
    if args and args[0] == command:
        args = args[1:]
    return ParsedLine(LineKind.SUBCOMMAND, line, ChildInvocation(command, tuple(args)))
