import signal
import subprocess

import psutil

from tpol.forwarding import SignalForwarder

FORWARDED_SIGNALS = (signal.SIGINT,)


def spawn(invocation):
    """Chạy lệnh ngoài, stdin/stdout/stderr dùng chung với terminal"""
    return psutil.Popen(invocation.argv)


def run_invocation(invocation, log, signals=FORWARDED_SIGNALS):
    """
    Run one command to completion while forwarding interrupts to it.
    Returns: exit code, or None if the command could not be started
    """
    try:
        proc = spawn(invocation)
    except (OSError, subprocess.SubprocessError) as e:
        log.error("{} {}", e, invocation)
        return None

    forwarders = [SignalForwarder(proc, signum) for signum in signals]
    for forwarder in forwarders:
        forwarder.start()
    try:
        exit_code = proc.wait()
    finally:
        for forwarder in forwarders:
            forwarder.stop()

    for forwarder in forwarders:
        for e in forwarder.errors:
            log.error("could not forward signal: {} {}", e, invocation)

    if exit_code != 0:
        log.error("{} {}", describe_exit(exit_code), invocation)
    return exit_code


def describe_exit(exit_code):
    """Text like 'exit status 1' or 'signal: SIGINT'"""
    if exit_code < 0:
        try:
            name = signal.Signals(-exit_code).name
        except ValueError:
            name = str(-exit_code)
        return f"signal: {name}"
    return f"exit status {exit_code}"
