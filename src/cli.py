"""
command line entry point of the 2048 player

options are read from the last one to the first, so the leftmost of
--up/--score/--lr wins when several are given
"""
import logging
import os
import sys

from config import GameConfig
from remote_board import CommunicationError
from player import run_session

PROG = "play-2048"
USAGE = (
    f"usage: {PROG} [--average] [--highscore] [--games N] [--lr|--score|--up] "
    "[--seed N] [--server <host:port>] [--timeout SECONDS] [-v]"
)

_STRATEGY_FLAGS = {"--up": "up", "--score": "score", "--lr": "lr"}
_VALUE_FLAGS = ("--server", "--games", "--seed", "--timeout")


class ConfigurationError(Exception):
    """bad command line, exit_code is the status to leave the process with"""

    def __init__(self, message, exit_code):
        super().__init__(message)
        self.exit_code = exit_code


def parse_args(args):
    """turn the argument list (without the program name) into a GameConfig"""
    args = list(args)
    options = {}
    while args:
        arg = args[-1]
        flag = args[-2] if len(args) > 1 else None
        if flag in _VALUE_FLAGS:
            options[flag] = arg
            del args[-2:]
        elif arg == "-v":
            args.pop()
            options["verbose"] = True
        elif arg == "--average":
            args.pop()
            options["average"] = True
        elif arg == "--highscore":
            args.pop()
            options["highscore"] = True
        elif arg in _STRATEGY_FLAGS:
            args.pop()
            options["strategy"] = _STRATEGY_FLAGS[arg]
        elif arg == "-h":
            args.pop()
            raise ConfigurationError("", len(args))
        else:
            raise ConfigurationError(f"{PROG}: unknown option {arg}", len(args))

    games = 1
    if "--games" in options:
        games = _int_option("--games", options["--games"])
    if options.get("highscore"):
        games = None
    seed = None
    if "--seed" in options:
        seed = _int_option("--seed", options["--seed"])
    timeout = None
    if "--timeout" in options:
        timeout = _float_option("--timeout", options["--timeout"])

    try:
        return GameConfig(
            strategy=options.get("strategy", "up"),
            games=games,
            verbose=options.get("verbose", False),
            average=options.get("average", False),
            server=options.get("--server"),
            seed=seed,
            timeout=timeout,
        )
    except ValueError as e:
        raise ConfigurationError(f"{PROG}: {e}", 1) from e


def _int_option(flag, value):
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{PROG}: {flag} expects a number, got {value}", 1) from None


def _float_option(flag, value):
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{PROG}: {flag} expects seconds, got {value}", 1) from None


def main(argv=None):
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "WARNING"),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    argv = sys.argv[1:] if argv is None else argv

    try:
        config = parse_args(argv)
    except ConfigurationError as e:
        if str(e):
            print(e)
        print(USAGE)
        return e.exit_code

    try:
        run_session(config)
    except CommunicationError as e:
        print(f"{PROG}: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
