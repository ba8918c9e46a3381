import os
import subprocess

from loguru import logger

from tpol.config import DEFAULT_PROMPT_TIMEOUT

DEFAULT_SHELL = "/bin/bash"


def login_shell():
    return os.getenv("SHELL") or DEFAULT_SHELL


class PromptResolver:
    """
    Turn a command name into prompt text.

    The mapping holds opaque invocation strings (usually a shell function
    such as __git_ps1); each is run in a login shell and its stdout,
    trimmed, becomes the prompt. Commands without an entry get "" and
    nothing is spawned.
    """

    def __init__(self, mapping, shell=None, timeout=DEFAULT_PROMPT_TIMEOUT, log=None):
        self.mapping = dict(mapping)
        self.shell = shell or login_shell()
        self.timeout = timeout
        self.log = log or logger

    def invocation_for(self, command):
        return self.mapping.get(command)

    def resolve(self, command):
        invocation = self.invocation_for(command)
        if invocation is None:
            return ""

        try:
            result = subprocess.run(
                [self.shell, "-l", "-c", invocation],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            self.log.warning("prompt generator timed out after {}s: {}", self.timeout, invocation)
            return ""
        except (OSError, subprocess.SubprocessError) as e:
            self.log.error("prompt generator failed: {} {}", e, invocation)
            return ""

        return result.stdout.decode(errors="replace").strip()

    def render(self, command):
        """Full prompt line shown to the user, e.g. '(main)>git '"""
        return f"{self.resolve(command)}>{command} "
