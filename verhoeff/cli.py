"""Command-line front end: generate, validate or append Verhoeff check digits."""

import argparse
import logging
import sys
from typing import List, Optional

from .exceptions import VerhoeffError
from .operations import append, generate, suggest_correction, validate, validate_aadhaar

logger = logging.getLogger(__name__)


def run_generate(number: str) -> int:
    checksum = generate(number)
    print(f"Checksum for {number}: {checksum}")
    return 0


def run_validate(number: str) -> int:
    if validate(number):
        print(f"{number} is valid")
        return 0

    print(f"{number} is NOT valid")
    corrected = suggest_correction(number)
    if corrected is not None:
        print(f"The correct checksum for {number[:-1]} would be {corrected[-1]} (you provided {number[-1]})")
        print(f"Correct number would be: {corrected}")
    return 0


def run_validate_aadhaar(number: str) -> int:
    if validate_aadhaar(number):
        print(f"Aadhaar number {number} is valid")
    else:
        print(f"Aadhaar number {number} is NOT valid")
    return 0


def run_append(number: str) -> int:
    result = append(number)
    print(f"{number} with checksum: {result}")
    if not validate(result):
        logger.warning("The generated number failed validation")
    return 0


COMMANDS = {
    "generate": run_generate,
    "validate": run_validate,
    "validate-aadhaar": run_validate_aadhaar,
    "append": run_append,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="verhoeff",
        description="Generate and validate Verhoeff check digits.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("generate", help="Generate a checksum for NUMBER.").add_argument("number")
    subparsers.add_parser(
        "validate", help="Validate NUMBER (with checksum as the last digit)."
    ).add_argument("number")
    subparsers.add_parser(
        "validate-aadhaar", aliases=["validateaadhaar"], help="Validate a 12-digit Aadhaar number."
    ).add_argument("number")
    subparsers.add_parser("append", help="Append a checksum to NUMBER.").add_argument("number")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    command = "validate-aadhaar" if args.command == "validateaadhaar" else args.command
    try:
        return COMMANDS[command](args.number)
    except VerhoeffError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
