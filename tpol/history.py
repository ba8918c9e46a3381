import os
import readline
import sys

from tpol.config import MAX_HISTORY, history_path


def init_readline(completer=None, backend=None):
    """Configure readline to behave like a Linux terminal"""
    backend = backend or readline
    try:
        if not sys.stdin.isatty():
            print("Warning: Not running in a real terminal. History navigation may not work properly.")

        backend.parse_and_bind("tab: complete")

        # Up/down arrows walk the history
        backend.parse_and_bind("\\e[A: previous-history")
        backend.parse_and_bind("\\e[B: next-history")

        # Ctrl+Left/Right jump between words
        backend.parse_and_bind("\\e[1;5D: backward-word")
        backend.parse_and_bind("\\e[1;5C: forward-word")

        backend.parse_and_bind("set editing-mode emacs")
        backend.parse_and_bind("set show-all-if-ambiguous on")

        if completer is not None:
            # Complete the whole line, not the word under the cursor
            backend.set_completer_delims("")
            backend.set_completer(completer)
        return True
    except Exception as e:
        print(f"Warning: Could not configure readline: {e}", file=sys.stderr)
        return False


class HistoryStore:
    """History của một lệnh: ~/.tpol/history/<command>"""

    def __init__(self, command, path=None, backend=None, max_length=MAX_HISTORY):
        self.command = command
        self.path = path or history_path(command)
        self.backend = backend or readline
        self.max_length = max_length

    def load(self):
        """Load history từ file"""
        try:
            os.makedirs(os.path.dirname(self.path), mode=0o744, exist_ok=True)
        except OSError as e:
            print(e)

        try:
            self.backend.read_history_file(self.path)
            self.backend.set_history_length(self.max_length)
        except OSError:
            print(f"No history file found: new history file created at {self.path}")
            return False

        print(f"Using history file at: {self.path}")
        return True

    def append(self, line):
        """Thêm command vào history"""
        self.backend.add_history(line)

    def entries(self):
        n = self.backend.get_current_history_length()
        return [self.backend.get_history_item(i) for i in range(1, n + 1)]

    def save(self):
        """Lưu history ra file"""
        try:
            self.backend.set_history_length(self.max_length)
            self.backend.write_history_file(self.path)
            return True
        except OSError as e:
            print(f"Warning: Could not save history: {e}", file=sys.stderr)
            return False
