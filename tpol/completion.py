import os
import subprocess
from dataclasses import dataclass
from typing import Callable

from loguru import logger

from tpol.config import ESCAPE_CHARACTER

COMPLETION_TIMEOUT = 2.0

BASH_COMPLETION_SCRIPTS = (
    "/usr/share/bash-completion/bash_completion",
    "/usr/local/share/bash-completion/bash_completion",
    "/etc/bash_completion",
)

# Runs inside `bash -c`; the words being completed are the positional args
# and COMP_LINE comes from the environment. Prints one completion per line.
_BASH_SCRIPT = r"""
words=("$@")
cword=$(( ${#words[@]} - 1 ))
cur=${words[cword]}
if (( cword == 0 )); then
    compgen -c -- "$cur" | sort -u
    exit 0
fi
for f in $TPOL_BASH_COMPLETION; do
    if [ -r "$f" ]; then
        . "$f" >/dev/null 2>&1
        break
    fi
done
cmd=${words[0]}
spec=$(complete -p "$cmd" 2>/dev/null)
if [ -z "$spec" ] && declare -F _completion_loader >/dev/null; then
    _completion_loader "$cmd" >/dev/null 2>&1
    spec=$(complete -p "$cmd" 2>/dev/null)
fi
if [[ $spec =~ -F\ +([^ ]+) ]]; then
    COMP_WORDS=("${words[@]}")
    COMP_CWORD=$cword
    COMP_POINT=${#COMP_LINE}
    COMP_TYPE=9
    COMP_KEY=9
    "${BASH_REMATCH[1]}" "$cmd" "$cur" "${words[cword-1]}" >/dev/null 2>&1
    printf '%s\n' "${COMPREPLY[@]}"
else
    compgen -f -- "$cur"
fi
"""


@dataclass(frozen=True)
class CommandFilter:
    """
    Rewrites the edited line before completion (forward) and each
    candidate afterwards (inverse).
    """
    forward: Callable[[str], str]
    inverse: Callable[[str], str]


def command_filter(line, command):
    """
    Filter for the current line.

    "!ec"    -> completes "ec" as a plain shell command, candidates get "!" back
    "sta"    -> completes "git sta", candidates lose the "git " prefix
    """
    if len(line) >= 2 and line.startswith(ESCAPE_CHARACTER):
        return CommandFilter(
            forward=lambda s: s[len(ESCAPE_CHARACTER):],
            inverse=lambda s: ESCAPE_CHARACTER + s,
        )

    prefix = f"{command} "
    return CommandFilter(
        forward=lambda s: prefix + s,
        inverse=lambda s: s[len(prefix):],
    )


def complete_line(line, command, engine, log=logger):
    """
    Completion candidates for the whole line, as full replacement lines.
    Never raises: engine failures give an empty list.
    """
    cmd_filter = command_filter(line, command)
    try:
        candidates = engine(cmd_filter.forward(line))
    except Exception as e:
        log.debug("completion failed for {!r}: {}", line, e)
        return []
    if not candidates:
        return []
    return [cmd_filter.inverse(c) for c in candidates]


def split_words(line):
    """Whitespace words of a line; a trailing space starts a new empty word"""
    words = line.split()
    if not words or line[-1].isspace():
        words.append("")
    return words


class BashCompletionEngine:
    """
    Ask bash's programmable completion what could follow a command line.

    Returns full lines: the input with its last word replaced by each
    completion bash offers.
    """

    def __init__(self, bash="bash", timeout=COMPLETION_TIMEOUT, scripts=BASH_COMPLETION_SCRIPTS):
        self.bash = bash
        self.timeout = timeout
        self.scripts = scripts

    def query(self, line):
        """Raw completions for the last word of line"""
        words = split_words(line)
        env = dict(os.environ)
        env["COMP_LINE"] = line
        env["TPOL_BASH_COMPLETION"] = " ".join(self.scripts)
        result = subprocess.run(
            [self.bash, "--norc", "--noprofile", "-c", _BASH_SCRIPT, "tpol-complete", *words],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            env=env,
            timeout=self.timeout,
            check=False,
        )
        replies = result.stdout.decode(errors="replace").splitlines()
        return list(dict.fromkeys(r for r in replies if r))

    def __call__(self, line):
        current = split_words(line)[-1]
        base = line[:len(line) - len(current)]
        return [base + reply for reply in self.query(line)]


class ReadlineCompleter:
    """
    readline completer(text, state) backed by complete_line.

    Expects completer delimiters to be empty so text is the whole line.
    """

    def __init__(self, command, engine=None, log=logger):
        self.command = command
        self.engine = engine or BashCompletionEngine()
        self.log = log
        self._matches = []

    def __call__(self, text, state):
        if state == 0:
            self._matches = complete_line(text, self.command, self.engine, self.log)
        if state < len(self._matches):
            return self._matches[state]
        return None
