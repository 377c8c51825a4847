#!/usr/bin/env python3
"""
iadown - Inverse Assembler Download

Transfers a compiled inverse assembler relocatable (.R) file, as produced by
the ASM program of the HP 10391B Inverse Assembler Development Package, to
an HP 1660/1670 series logic analyzer through its control port. The analyzer
links the file itself when it receives it with :MMEMory:DOWNload.

Usage:
    python main_client.py -a IP_ADDRESS -n NAME [-d "Description"] [-f] [--verbose] IA_FILE.R
"""

import sys
import os
import argparse
import asyncio

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from client.files.upload_client import upload_file
from client.utils.config import ClientConfig
from client.utils.logger import logger
from common.constants import (
    CONTROL_PORT, DEFAULT_DESCRIPTION, DEFAULT_INVASM_OPTION, MAX_DESCRIPTION_LENGTH,
    EXIT_SUCCESS, EXIT_FAILURE
)
from common.errors import UploadError, ValidationError
from common.protocol_definitions import TransferRequest, INVASM_OPTIONS


EPILOG = f"""\
e.g.: iadown -a 192.168.1.16 -n I6809 -d "MC6809 Inverse Assembler" I6809.R

The file name (-n) can be up to 11 characters for LIF (NNNNNNNNNNN)
or 12 for DOS (NNNNNNNN.NNN).
The maximum length of the description (-d) string is {MAX_DESCRIPTION_LENGTH} characters.

"Invasm" field options (-i):
 A = No "Invasm" field
 B = "Invasm" field with no pop-up (default)
 C = "Invasm" field with pop-up, 2 choices
 D = "Invasm" field with pop-up, 8 choices
"""


class UsageArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports errors with the full usage text."""

    def error(self, message):
        self.fail(message)

    def fail(self, message):
        """Print a targeted message and the usage text, then exit with failure."""
        sys.stderr.write(f"error: {message}\n\n")
        self.print_help(sys.stderr)
        self.exit(EXIT_FAILURE)


def build_parser() -> UsageArgumentParser:
    """Create the command line parser."""
    parser = UsageArgumentParser(
        prog='iadown',
        description='Transfer an inverse assembler relocatable file to an HP logic analyzer',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('-a', '--address', type=str, default=None,
                        help='IP address of HP logic analyzer')
    parser.add_argument('-n', '--name', type=str, default=None,
                        help='File name on logic analyzer')
    parser.add_argument('-d', '--description', type=str, default=DEFAULT_DESCRIPTION,
                        help=f'Descriptive string for the inverse assembler (default: "{DEFAULT_DESCRIPTION}")')
    parser.add_argument('-f', '--floppy', action='store_true',
                        help='Create the file on the floppy drive')
    parser.add_argument('-p', '--port', type=int, default=CONTROL_PORT,
                        help=f'Control port of the logic analyzer (default: {CONTROL_PORT})')
    parser.add_argument('-i', '--invasm', type=str.upper, default=DEFAULT_INVASM_OPTION,
                        choices=sorted(INVASM_OPTIONS),
                        help=f'"Invasm" field option (default: {DEFAULT_INVASM_OPTION})')
    parser.add_argument('--verbose', action='store_true',
                        help='Show debugging information')
    parser.add_argument('files', nargs='*', metavar='IA_FILE.R',
                        help='Relocatable inverse assembler file to transfer')
    return parser


def parse_request(parser: UsageArgumentParser, argv=None):
    """Parse the command line into a validated TransferRequest and ClientConfig."""
    args = parser.parse_intermixed_args(argv)

    if len(args.files) == 0:
        raise ValidationError("missing file")
    if len(args.files) > 1:
        raise ValidationError("too many arguments")
    if not args.address:
        raise ValidationError("missing -a IP address argument")
    if not args.name:
        raise ValidationError("missing -n file name argument")
    if not 0 < args.port < 65536:
        raise ValidationError(f"-p port out of range: {args.port}")

    request = TransferRequest(
        address=args.address,
        remote_name=args.name,
        source_path=args.files[0],
        description=args.description,
        use_floppy=args.floppy,
        invasm=args.invasm
    )
    config = ClientConfig(host=args.address, port=args.port, verbose=args.verbose)
    return request, config


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()

    try:
        request, config = parse_request(parser, argv)
    except ValidationError as e:
        parser.fail(str(e))

    logger.set_verbose(config.verbose)

    try:
        asyncio.run(upload_file(request, config))
    except UploadError as e:
        logger.error(str(e))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return EXIT_FAILURE

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
