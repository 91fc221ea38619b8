from __future__ import annotations

import argparse
import logging
import os

from commit_reveal import verify_hmac
from game_session import GameSession
from protocol import ConfigurationError, MoveSet

LOG_LEVEL_ENV = "RPS_LOG_LEVEL"

logger = logging.getLogger("rps.cli")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="rps")
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        help=f"Logging level for diagnostics on stderr (default: ${LOG_LEVEL_ENV} or WARNING)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", help="Play one round against the computer")
    play.add_argument("moves", nargs="*", metavar="MOVE", help="Odd number (>= 3) of distinct moves, e.g. rock paper scissors")

    verify = sub.add_parser("verify", help="Check a revealed HMAC key against the HMAC shown before your move")
    verify.add_argument("--key", required=True, help="HMAC key printed after the round")
    verify.add_argument("--move", required=True, help="Computer move printed after the round")
    verify.add_argument("--hmac", required=True, help="HMAC printed at the start of the round")

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    if args.cmd == "verify":
        if verify_hmac(expected_hmac=args.hmac, key=args.key, move=args.move):
            print("HMAC matches")
            return 0
        print("HMAC mismatch")
        return 1

    if args.cmd == "play":
        try:
            move_set = MoveSet.from_args(args.moves)
        except ConfigurationError as exc:
            raise SystemExit(f"Error: {exc}") from None
        logger.debug("starting session with %d moves", len(move_set))
        GameSession(move_set).play()
        return 0

    raise SystemExit("unhandled command")


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise SystemExit(f"--log-level: unknown level {level_name!r}")
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


if __name__ == "__main__":
    raise SystemExit(main())
