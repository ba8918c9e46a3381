import os
import sys
import uuid
from datetime import datetime

from loguru import logger

from tpol.config import logs_dir

LOG_FORMAT = "{time:YYYY/MM/DD HH:mm:ss} {message}"


def log_filename(command, started=None):
    """<command>-<start timestamp>.log"""
    started = started or datetime.now().astimezone()
    return f"{command}-{started.isoformat(timespec='seconds')}.log"


class SessionLog:
    """
    Logger owned by one session.

    Adds a loguru sink that only sees records bound to this session and
    removes it again on close(). If the log file cannot be created the
    sink falls back to stderr.
    """

    def __init__(self, command, directory=None, started=None):
        self.command = command
        self.session_id = uuid.uuid4().hex
        self.logger = logger.bind(session=self.session_id, command=command)
        self.path = None
        self._handler_id = None
        self._open(directory or logs_dir(), started)

    def _accepts(self, record):
        return record["extra"].get("session") == self.session_id

    def _open(self, directory, started):
        try:
            os.makedirs(directory, mode=0o744, exist_ok=True)
            path = os.path.join(directory, log_filename(self.command, started))
            self._handler_id = logger.add(
                path, format=LOG_FORMAT, filter=self._accepts, encoding="utf-8"
            )
            self.path = path
        except (OSError, ValueError) as e:
            print(f"Unable to create log file: {e}", file=sys.stderr)
            self._handler_id = logger.add(sys.stderr, format=LOG_FORMAT, filter=self._accepts)

    def close(self):
        if self._handler_id is None:
            return
        logger.remove(self._handler_id)
        self._handler_id = None

    def __enter__(self):
        return self.logger

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
