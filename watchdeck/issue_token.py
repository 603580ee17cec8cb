"""Issue a bearer token for an existing user.

Usage:
    watchdeck-token 1
    watchdeck-token 1 --minutes 480
"""

import argparse
import sys

from .config import get_config
from .utils.security import create_access_token


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Issue a watchdeck API token")
    parser.add_argument("userid", type=int, help="ID of the user the token identifies")
    parser.add_argument("--minutes", type=int, default=60, help="Token lifetime in minutes")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.userid <= 0 or args.minutes <= 0:
        print("userid and --minutes must be positive", file=sys.stderr)
        return 2

    config = get_config()
    token = create_access_token(
        {"sub": str(args.userid)},
        config.secret_key,
        config.jwt_algorithm,
        expires_minutes=args.minutes,
    )
    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
