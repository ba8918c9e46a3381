import shutil

from tpol.completion import ReadlineCompleter
from tpol.config import load_prompt_mapping, prompt_timeout
from tpol.executor import run_invocation
from tpol.history import HistoryStore, init_readline
from tpol.logs import SessionLog
from tpol.parser import LineKind, classify
from tpol.prompt import PromptResolver


class CommandNotFound(Exception):
    """The command to wrap is not on PATH"""

    def __init__(self, command):
        super().__init__(f"tpol: command not found: {command}")
        self.command = command


def resolve_command(command):
    path = shutil.which(command)
    if path is None:
        raise CommandNotFound(command)
    return path


class Session:
    """One run of the sub-shell for a wrapped command"""

    def __init__(
        self,
        command,
        command_path=None,
        history=None,
        prompts=None,
        log=None,
        read_line=input,
        runner=run_invocation,
    ):
        self.command = command
        self.command_path = command_path or resolve_command(command)
        self.session_log = None
        if log is None:
            self.session_log = SessionLog(command)
            log = self.session_log.logger
        self.log = log
        self.history = history or HistoryStore(command)
        self.prompts = prompts or PromptResolver(
            load_prompt_mapping(), timeout=prompt_timeout(), log=log
        )
        self.read_line = read_line
        self.runner = runner
        self._closed = False

    def setup_readline(self, engine=None):
        """Install tab completion for the wrapped command"""
        return init_readline(ReadlineCompleter(self.command, engine, log=self.log))

    def start(self):
        print("shell for", self.command_path)
        self.history.load()

    def prompt(self):
        return self.prompts.render(self.command)

    def step(self):
        """
        Read and handle one line.
        Returns: False once the session should end
        """
        try:
            line = self.read_line(self.prompt())
        except KeyboardInterrupt:
            print()
            return True
        except (EOFError, OSError) as e:
            self.log.info("{} {}", type(e).__name__, e)
            print()
            return False

        parsed = classify(line, self.command)
        if parsed.kind is LineKind.EXIT:
            return False
        if parsed.kind is LineKind.EMPTY:
            return True

        if parsed.records_history:
            self.history.append(line)
        try:
            self.runner(parsed.invocation, self.log)
        except KeyboardInterrupt:
            # Ctrl+C outside the child's wait
            print()
        return True

    def run(self):
        """Main shell loop"""
        try:
            while self.step():
                pass
        finally:
            self.close()

    def close(self):
        if self._closed:
            return
        self._closed = True
        try:
            self.history.save()
        finally:
            if self.session_log is not None:
                self.session_log.close()
