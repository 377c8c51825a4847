"""
Client logging module.

This module handles client-side diagnostic output. Everything goes to
stderr so that stdout only carries the instrument's identification string.
"""

import logging
import sys


class ClientLogger:
    """Client logging class."""

    def __init__(self, log_level: int = logging.INFO):
        self.logger = logging.getLogger('iadown')
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create console handler
        self.console_handler = logging.StreamHandler(sys.stderr)
        self.console_handler.setLevel(log_level)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.console_handler.setFormatter(formatter)

        # Add handler to logger
        self.logger.addHandler(self.console_handler)

    def set_verbose(self, verbose: bool):
        """Switch between normal and debugging output."""
        level = logging.DEBUG if verbose else logging.INFO
        self.logger.setLevel(level)
        self.console_handler.setLevel(level)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_connection(self, host: str, port: int, success: bool):
        """Log connection attempt."""
        status = "Connected" if success else "Failed to connect"
        self.info(f"{status} to {host}:{port}")

    def log_configuration(self, request, port: int):
        """Echo the resolved transfer configuration."""
        self.debug(f" IP address: {request.address} port {port}")
        self.debug(f" Local file: {request.source_path}")
        self.debug(f"Remote file: {request.remote_name} (on {request.medium_name} disk)")
        self.debug(f"Description: {request.description}")

    def log_header(self, header: bytes):
        """Log the download header, showing the trailing field byte escaped."""
        self.debug(f"header: \"{header.decode('latin-1').encode('unicode_escape').decode('ascii')}\"")

    def log_progress(self, sent: int, size: int):
        """Log payload progress."""
        progress = (sent / size) * 100 if size else 100.0
        self.debug(f"[UPLOAD] Progress: {sent}/{size} bytes ({progress:.1f}%)")

    def log_file_upload(self, remote_name: str, size: int, medium: str):
        """Log completed upload."""
        self.info(f"Uploaded {size} bytes as '{remote_name}' ({medium} disk)")


# Global logger instance
logger = ClientLogger()
