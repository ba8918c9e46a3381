import pytest


class FakeReadline:
    """Stand-in for the readline module's history functions"""

    def __init__(self, files=None):
        self.files = files if files is not None else {}
        self.items = []
        self.length = -1

    def read_history_file(self, path):
        if path not in self.files:
            raise FileNotFoundError(2, "No such file or directory", path)
        self.items.extend(self.files[path])

    def write_history_file(self, path):
        items = self.items if self.length < 0 else self.items[-self.length:]
        self.files[path] = list(items)

    def add_history(self, line):
        self.items.append(line)

    def set_history_length(self, length):
        self.length = length

    def get_current_history_length(self):
        return len(self.items)

    def get_history_item(self, index):
        return self.items[index - 1]


class RecordingLog:
    """Collects loguru-style calls: log.error("{} {}", a, b)"""

    def __init__(self):
        self.records = []

    def _record(self, level, message, *args):
        self.records.append((level, message.format(*args)))

    def debug(self, message, *args):
        self._record("DEBUG", message, *args)

    def info(self, message, *args):
        self._record("INFO", message, *args)

    def warning(self, message, *args):
        self._record("WARNING", message, *args)

    def error(self, message, *args):
        self._record("ERROR", message, *args)

    def messages(self, level=None):
        return [m for lvl, m in self.records if level is None or lvl == level]


@pytest.fixture
def fake_readline():
    return FakeReadline()


@pytest.fixture
def log():
    return RecordingLog()


@pytest.fixture(autouse=True)
def tpol_home(tmp_path, monkeypatch):
    home = tmp_path / "tpol-home"
    monkeypatch.setenv("TPOL_HOME", str(home))
    monkeypatch.delenv("TPOL_PROMPT_TIMEOUT", raising=False)
    return home
