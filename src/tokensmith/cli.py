"""CLI entry point: issue and check tokens from the command line."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from dotenv import load_dotenv

from tokensmith.codec import TokenCodec
from tokensmith.config import TokenConfig, load_config, load_config_file
from tokensmith.errors import ConfigError, TokenError
from tokensmith.models import ExpirationKind

logger = logging.getLogger(__name__)


def _parse_claim(raw: str) -> tuple[str, Any]:
    """Parse KEY=VALUE; VALUE is read as JSON when it parses, else as text."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"claim must look like KEY=VALUE, got {raw!r}")
    try:
        return key, json.loads(value)
    except ValueError:
        return key, value


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive number of seconds, got {value}")
    return value


def _load(args: argparse.Namespace) -> TokenConfig:
    """Resolve configuration from --config or the environment."""
    try:
        if args.config:
            return load_config_file(args.config)
        return load_config()
    except ConfigError as exc:
        print(f"Error: {exc}")
        sys.exit(1)


def run_generate(codec: TokenCodec, args: argparse.Namespace) -> None:
    claims: dict[str, Any] = dict(args.claims or [])
    if args.sub:
        claims["sub"] = args.sub
    if args.exp is not None:
        claims["exp"] = args.exp
    try:
        token = codec.generate(claims)
    except TokenError as exc:
        print(f"Error: {exc}")
        sys.exit(1)
    print(token)


def run_verify(codec: TokenCodec, args: argparse.Namespace) -> None:
    result = codec.inspect(args.token)
    if not result.valid:
        print(f"invalid: {result.outcome.value}")
        sys.exit(1)
    print("valid")


def run_ttl(codec: TokenCodec, args: argparse.Namespace) -> None:
    status = codec.expiration_status(args.token)
    if status.kind is ExpirationKind.INVALID:
        print("invalid")
        sys.exit(1)
    if status.kind is ExpirationKind.NO_EXPIRATION:
        print("no expiration")
    else:
        print(status.seconds)


def run_inspect(codec: TokenCodec, args: argparse.Namespace) -> None:
    result = codec.inspect(args.token)
    print(f"Outcome: {result.outcome.value}")
    if result.reason:
        print(f"Reason: {result.reason}")
    if result.claims is not None:
        print(json.dumps(result.claims, indent=2, ensure_ascii=False))
    if not result.valid:
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="tokensmith",
        description="Issue and verify compact HS256 tokens",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--config", help="YAML config file with a 'token' section (default: environment)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser("generate", help="Issue a signed token")
    generate_parser.add_argument(
        "--claim", dest="claims", action="append", type=_parse_claim, metavar="KEY=VALUE",
        help="Claim to include (repeatable); VALUE is parsed as JSON when possible",
    )
    generate_parser.add_argument("--sub", help="Subject claim")
    generate_parser.add_argument(
        "--exp", type=int, help="Explicit expiration as Unix seconds"
    )
    generate_parser.add_argument(
        "--ttl", type=_positive_int,
        help="Lifetime in seconds when --exp is not given (default: config)",
    )

    for name, help_text in (
        ("verify", "Check a token's signature and expiry"),
        ("ttl", "Seconds until a token expires"),
        ("inspect", "Show the verification outcome and decoded claims"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("token", help="Token text")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    config = _load(args)
    if args.command == "generate" and args.ttl:
        config = config.model_copy(update={"default_ttl_seconds": args.ttl})
    codec = TokenCodec(config)

    handlers = {
        "generate": run_generate,
        "verify": run_verify,
        "ttl": run_ttl,
        "inspect": run_inspect,
    }
    logger.debug("Running %s", args.command)
    handlers[args.command](codec, args)


if __name__ == "__main__":
    main()
