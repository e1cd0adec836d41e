#!/usr/bin/env python3
"""
cbasm - Command Line Interface

Usage:
    python3 -m cbasm input.asm -o output.hex
    python3 -m cbasm input.asm -f bin
    python3 -m cbasm input.asm --listing -v
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .assembler import Assembler, OUTPUT_FORMATS
from .errors import AssemblerError, AssemblyErrors


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="cbasm",
        description="Assembler for the 32-bit custom RISC instruction set",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s programs/loop.asm -o programs/loop.hex
  %(prog)s programs/loop.asm -f bin
  %(prog)s programs/loop.asm --listing
        """,
    )

    parser.add_argument(
        "input",
        type=str,
        help="Input assembly file",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file. If not specified, prints to stdout.",
    )

    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default="hex",
        help="Output format (default: hex)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "-l",
        "--listing",
        action="store_true",
        help="Print assembly listing",
    )

    parser.add_argument(
        "--skip-unsupported",
        action="store_true",
        help="Leave out instructions with no encoding (li, cin, cout) instead of failing",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    # Validate input file
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    try:
        asm = Assembler(verbose=args.verbose, skip_unsupported=args.skip_unsupported)
        asm.assemble_file(str(input_path), args.output, fmt=args.format)

        if args.listing:
            print(asm.get_listing())

        # If no output file, print words to stdout
        if not args.output and not args.listing:
            print(asm.render(args.format))

        if args.verbose or args.output:
            print(f"Assembly successful: {len(asm.instructions)} instructions", file=sys.stderr)

    except AssemblyErrors as e:
        for err in e.errors:
            print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)
    except AssemblerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
