"""
Command line entry point.

Examples:
    ceprace 01310-100
    python -m ceprace --overall-timeout 3 01310100
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

from ceprace.core.config import Settings, get_settings
from ceprace.core.exceptions import AddressLookupError
from ceprace.core.logging import configure_logging
from ceprace.presentation import render_result
from ceprace.schemas.address import Address
from ceprace.services.lookup import lookup_postal_code


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than zero: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ceprace",
        description="Look up a CEP on BrasilAPI and ViaCEP, keeping the fastest.",
    )
    parser.add_argument(
        "postal_code", nargs="?", help="CEP to look up (prompted if omitted)"
    )
    parser.add_argument(
        "--per-call-timeout",
        type=_positive_float,
        help="Seconds allowed per provider",
    )
    parser.add_argument(
        "--overall-timeout",
        type=_positive_float,
        help="Seconds allowed for the whole lookup",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose console logging")
    return parser


def _prompt_postal_code() -> str:
    try:
        return input("Enter the postal code: ")
    except EOFError:
        return ""


async def _resolve(
    postal_code: str, settings: Settings
) -> Address | AddressLookupError:
    try:
        return await lookup_postal_code(postal_code, settings=settings)
    except AddressLookupError as exc:
        return exc


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    overrides = {
        "per_call_timeout": args.per_call_timeout,
        "overall_timeout": args.overall_timeout,
    }
    if args.debug:
        overrides["debug"] = True
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        settings = Settings.model_validate({**settings.model_dump(), **overrides})

    configure_logging(settings.debug, settings.log_level)

    postal_code = args.postal_code
    if postal_code is None:
        postal_code = _prompt_postal_code()
    postal_code = postal_code.strip()

    result = asyncio.run(_resolve(postal_code, settings))
    print(render_result(result))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
