import argparse
import sys

from loguru import logger

from tpol import __version__
from tpol.shell import CommandNotFound, Session


def build_parser():
    parser = argparse.ArgumentParser(
        prog="tpol",
        description="Interactive shell for a single command",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tpol git          then type: status, log --oneline, !ls
  tpol docker       then type: ps, images, exit

  !cmd args         run cmd directly instead of the wrapped command
  exit              leave the shell (Ctrl+D works too)
        """,
    )
    parser.add_argument("command", nargs="?", help="Command to wrap, looked up on PATH")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_usage()
        return 0

    # Each session adds its own log sink
    logger.remove()

    try:
        session = Session(args.command)
    except CommandNotFound as e:
        print(e)
        return 0

    session.setup_readline()
    session.start()
    session.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
