"""
Shared constants for the iadown inverse assembler uploader.

This module contains all constants used by the command builder and the
transfer client.
"""

# Network Configuration
CONTROL_PORT = 5025  # "telnet" control port of the HP 1660/1670 series

# Timeouts
SOCKET_TIMEOUT = 10  # seconds, applied to connect, send and receive

# Buffer Sizes
CHUNK_SIZE = 10000
IDENTIFICATION_BUFSIZE = 100
HEADER_BUFSIZE = 100
PROGRESS_LOG_INTERVAL = 100 * 1000  # Log progress every 100kB

# Protocol
IDENTIFICATION_QUERY = b'*IDN?\r\n'
DOWNLOAD_COMMAND = ":mmemory:download '{name}',internal{medium},'{description}',{file_type},#8{size:08d}"
DOWNLOAD_FILE_TYPE = -15614  # inverse assembler file type
BLOCK_LENGTH_DIGITS = 8
PAYLOAD_TRAILER = b'\n'

# Storage medium selector
MEDIUM_INTERNAL = 0
MEDIUM_FLOPPY = 1

# Field widths
MAX_DESCRIPTION_LENGTH = 32
MAX_NAME_STEM_LENGTH = 8  # DOS name before the dot
MAX_LIF_NAME_LENGTH = 11  # flat LIF name, no dot
MAX_NAME_LENGTH = 12  # DOS NNNNNNNN.NNN
NAME_SEPARATOR = '.'

# Defaults
DEFAULT_DESCRIPTION = 'Inverse Assembler'
DEFAULT_INVASM_OPTION = 'B'

# Exit status
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
