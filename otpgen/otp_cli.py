#!/usr/bin/env python3
"""
otp_cli.py - CLI wrapper around otp_core.py

Subcommands:
- hotp : HOTP code for a given counter
- totp : TOTP code for now (or for --time)

The secret is taken from --secret or the OTPGEN_SECRET environment variable.

eg..:
    otpgen hotp --secret GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ --counter 1
    OTPGEN_SECRET=GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ otpgen totp --digits 8 --algorithm SHA1
"""

import argparse
import logging
import os
import sys
import time
from typing import List, Optional

from . import otp_core
from .errors import OTPError

logger = logging.getLogger(__name__)

SECRET_ENV = "OTPGEN_SECRET"


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


# --- CLI command handlers ---
def cmd_help(args, parser: argparse.ArgumentParser, clock: otp_core.Clock) -> int:
    parser.print_help()
    return 0


def cmd_hotp(args, parser: argparse.ArgumentParser, clock: otp_core.Clock) -> int:
    code = otp_core.generate_hotp(args.secret, args.counter, args.digits)
    print(f"HOTP(counter={args.counter}): {code}")
    return 0


def cmd_totp(args, parser: argparse.ArgumentParser, clock: otp_core.Clock) -> int:
    now = args.time or int(clock())
    code = otp_core.generate_totp(
        args.secret,
        unix_time=now,
        digits=args.digits,
        period=args.period,
        algorithm=args.algorithm,
    )
    remaining = otp_core.seconds_remaining(now, args.period or otp_core.DEFAULT_TIME_STEP)
    print(f"TOTP: {code}  (valid ~{remaining:2d}s)")
    return 0


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="otpgen", description="HOTP/TOTP code generator (RFC 4226 / RFC 6238)")
    p.set_defaults(func=cmd_help)
    sub = p.add_subparsers(dest="cmd")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--secret",
        default=os.environ.get(SECRET_ENV, ""),
        help=f"Base32 secret (default: ${SECRET_ENV})",
    )
    common.add_argument("--digits", type=int, default=otp_core.DEFAULT_DIGITS, help="Number of OTP digits")
    common.add_argument("--verbose", action="store_true", help="Verbose output")

    # hotp
    ph = sub.add_parser("hotp", parents=[common], help="Generate HOTP code for a specific counter")
    ph.add_argument("--counter", type=int, required=True, help="HOTP counter value")
    ph.set_defaults(func=cmd_hotp)

    # totp
    pt = sub.add_parser("totp", parents=[common], help="Generate TOTP code")
    pt.add_argument("--time", type=int, help="Unix timestamp to use instead of the current time")
    pt.add_argument("--period", type=int, default=otp_core.DEFAULT_TIME_STEP, help="TOTP time step (seconds)")
    pt.add_argument(
        "--algorithm",
        default=otp_core.DEFAULT_TOTP_ALGORITHM.value,
        help="HMAC algorithm: SHA1, SHA256 or SHA512",
    )
    pt.set_defaults(func=cmd_totp)

    return p


def main(argv: Optional[List[str]] = None, clock: otp_core.Clock = time.time) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(getattr(args, "verbose", False))
    try:
        return args.func(args, parser, clock)
    except OTPError as e:
        logger.debug("%s failed: %r", args.cmd, e)
        print(f"[!] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
