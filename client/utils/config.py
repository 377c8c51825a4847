"""
Client configuration module.

This module handles client-side configuration settings.
"""

from dataclasses import dataclass

from common.constants import CONTROL_PORT, SOCKET_TIMEOUT, CHUNK_SIZE, PROGRESS_LOG_INTERVAL


@dataclass(frozen=True)
class ClientConfig:
    """Client configuration class, built once from the command line."""
    host: str
    port: int = CONTROL_PORT
    verbose: bool = False

    # Connection settings
    connect_timeout: float = SOCKET_TIMEOUT
    send_timeout: float = SOCKET_TIMEOUT
    receive_timeout: float = SOCKET_TIMEOUT

    # File transfer settings
    chunk_size: int = CHUNK_SIZE
    progress_log_interval: int = PROGRESS_LOG_INTERVAL

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port
        }
