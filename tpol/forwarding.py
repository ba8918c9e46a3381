import queue
import signal
import threading

import psutil

_CANCELLED = object()


class SignalForwarder:
    """
    Pass a signal received by the shell on to a running child.

    While active, the shell's own handler for the signal is replaced so
    Ctrl+C reaches the child instead of raising KeyboardInterrupt in the
    loop. A background thread waits for either the first signal or
    cancellation, whichever comes first:

        forwarder = SignalForwarder(proc.pid, signal.SIGINT)
        forwarder.start()
        try:
            proc.wait()
        finally:
            forwarder.stop()

    Must be started and stopped from the main thread (Python only runs
    signal handlers there).
    """

    def __init__(self, process, signum=signal.SIGINT):
        if not isinstance(process, psutil.Process):
            process = psutil.Process(process)
        self.process = process
        self.signum = signum
        self.forwarded = []
        self.errors = []
        self._events = queue.Queue()
        self._thread = None
        self._previous_handler = None
        self._started = False
        self._stopped = False

    @property
    def active(self):
        return self._started and not self._stopped

    def _on_signal(self, signum, frame):
        self._events.put(signum)

    def start(self):
        """Install the handler and start waiting"""
        if self._started:
            return self
        self._started = True
        self._previous_handler = signal.signal(self.signum, self._on_signal)
        self._thread = threading.Thread(
            target=self._run, name=f"forward-{self.process.pid}", daemon=True
        )
        self._thread.start()
        return self

    def _run(self):
        event = self._events.get()
        if event is _CANCELLED:
            return
        try:
            self.process.send_signal(event)
            self.forwarded.append(event)
        except psutil.NoSuchProcess:
            # Child already gone
            pass
        except psutil.Error as e:
            self.errors.append(e)

    def stop(self):
        """Cancel forwarding. Safe to call more than once."""
        if not self._started or self._stopped:
            return
        self._stopped = True
        self._events.put(_CANCELLED)
        self._thread.join()
        previous = self._previous_handler
        signal.signal(self.signum, signal.SIG_DFL if previous is None else previous)

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
