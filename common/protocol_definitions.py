"""
Protocol definitions for the HP logic analyzer download command.

This module defines the transfer request structure, the field constraints
the instrument imposes on it, and the builders for the text commands sent
over the control port.
"""

from dataclasses import dataclass
from typing import Dict

from common.constants import (
    IDENTIFICATION_QUERY, DOWNLOAD_COMMAND, DOWNLOAD_FILE_TYPE, BLOCK_LENGTH_DIGITS,
    HEADER_BUFSIZE, MEDIUM_INTERNAL, MEDIUM_FLOPPY, MAX_DESCRIPTION_LENGTH,
    MAX_NAME_STEM_LENGTH, MAX_LIF_NAME_LENGTH, MAX_NAME_LENGTH, NAME_SEPARATOR,
    DEFAULT_DESCRIPTION, DEFAULT_INVASM_OPTION
)
from common.errors import ValidationError, HeaderOverflowError


# "Invasm" field options, as offered by the IALDOWN program.
# The selected byte immediately follows the block length header.
INVASM_OPTIONS: Dict[str, bytes] = {
    'A': b'\xff',  # No "Invasm" field
    'B': b'\x00',  # "Invasm" field with no pop-up
    'C': b'\x01',  # "Invasm" field with pop-up, 2 choices
    'D': b'\x02',  # "Invasm" field with pop-up, 8 choices
}

MAX_BLOCK_LENGTH = 10 ** BLOCK_LENGTH_DIGITS - 1


@dataclass(frozen=True)
class TransferRequest:
    """Everything needed to upload one file, validated on construction."""
    address: str
    remote_name: str
    source_path: str
    description: str = DEFAULT_DESCRIPTION
    use_floppy: bool = False
    invasm: str = DEFAULT_INVASM_OPTION

    def __post_init__(self):
        if not self.address:
            raise ValidationError("missing -a IP address argument")
        validate_remote_name(self.remote_name)
        validate_description(self.description)
        invasm_byte(self.invasm)
        if not self.source_path:
            raise ValidationError("missing file")

    @property
    def medium(self) -> int:
        """Storage medium selector digit."""
        return MEDIUM_FLOPPY if self.use_floppy else MEDIUM_INTERNAL

    @property
    def medium_name(self) -> str:
        return 'floppy' if self.use_floppy else 'hard'


def _check_field_text(value: str, option: str):
    """Reject text that cannot be carried inside a quoted ASCII field."""
    if "'" in value:
        raise ValidationError(f"{option} argument must not contain a single quote")
    try:
        value.encode('ascii')
    except UnicodeEncodeError:
        raise ValidationError(f"{option} argument must be ASCII text")


def validate_remote_name(name: str) -> str:
    """Check a file name against the LIF (11 chars) and DOS (8.3) limits."""
    if not name:
        raise ValidationError("missing -n file name argument")

    dot_position = name.find(NAME_SEPARATOR)
    if ((dot_position != -1 and dot_position > MAX_NAME_STEM_LENGTH)
            or (dot_position == -1 and len(name) > MAX_LIF_NAME_LENGTH)
            or len(name) > MAX_NAME_LENGTH):
        raise ValidationError(f"-n bad filename argument: '{name}'")

    _check_field_text(name, '-n')
    return name


def validate_description(description: str) -> str:
    """Check the description fits the instrument's 32 character field."""
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"-d argument too long ({len(description)} > {MAX_DESCRIPTION_LENGTH} characters)"
        )
    _check_field_text(description, '-d')
    return description


def invasm_byte(option: str) -> bytes:
    """Return the byte for an "Invasm" field option letter."""
    try:
        return INVASM_OPTIONS[option.upper()]
    except (KeyError, AttributeError):
        raise ValidationError(f"unknown Invasm field option '{option}' (A, B, C or D)")


def block_length(file_size: int) -> int:
    """Length of the binary block: the file plus its leading Invasm byte."""
    length = file_size + 1
    if length > MAX_BLOCK_LENGTH:
        raise HeaderOverflowError(
            f"file of {file_size} bytes is too large for a #{BLOCK_LENGTH_DIGITS} block header"
        )
    return length


def create_identification_query() -> bytes:
    """Create the identification query."""
    return IDENTIFICATION_QUERY


def create_download_header(request: TransferRequest, file_size: int) -> bytes:
    """
    Create the :MMEMory:DOWNload header for a file of file_size bytes.

    The returned bytes end with the Invasm option byte (a null by default),
    which is part of the header but counted in the block length.
    """
    command = DOWNLOAD_COMMAND.format(
        name=request.remote_name,
        medium=request.medium,
        description=request.description,
        file_type=DOWNLOAD_FILE_TYPE,
        size=block_length(file_size)
    )
    header = command.encode('ascii') + invasm_byte(request.invasm)

    if len(header) > HEADER_BUFSIZE:
        raise HeaderOverflowError(
            f"download header is {len(header)} bytes (max: {HEADER_BUFSIZE} bytes)"
        )
    return header
