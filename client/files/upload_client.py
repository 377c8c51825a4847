"""
Upload client module.

This module sends a relocatable inverse assembler file to an HP logic
analyzer over its control port: one *IDN? exchange, the :MMEMory:DOWNload
header, the raw file bytes and a closing line feed.
"""

import asyncio
from pathlib import Path
from typing import Optional

from client.utils.config import ClientConfig
from client.utils.logger import logger
from common.constants import IDENTIFICATION_BUFSIZE, PAYLOAD_TRAILER
from common.errors import SourceFileError, InstrumentConnectionError, ShortReadError
from common.protocol_definitions import (
    TransferRequest, create_identification_query, create_download_header
)


def get_source_size(source_path: str) -> int:
    """Return the size of the source file from its metadata."""
    path = Path(source_path)
    try:
        if not path.is_file():
            raise SourceFileError(f"Cannot find / open file: {source_path}")
        return path.stat().st_size
    except OSError as e:
        raise SourceFileError(f"Cannot find / open file: {source_path}: {e.strerror or e}")


class InstrumentUploader:
    """
    One connection to the logic analyzer's control port.

    Use as an async context manager; the connection is closed exactly once
    when the block exits, whether the upload succeeded or not.
    """

    def __init__(self, config: ClientConfig):
        self.config = config
        self.reader: Optional[asyncio.StreamReader] = None
        self.writer: Optional[asyncio.StreamWriter] = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def connect(self):
        """Open the control connection, bounded by the connect timeout."""
        host, port = self.config.host, self.config.port
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(host, port),
                timeout=self.config.connect_timeout
            )
        except asyncio.TimeoutError:
            logger.log_connection(host, port, False)
            raise InstrumentConnectionError(
                f"Connection error to {host}: timed out after {self.config.connect_timeout}s"
            )
        except OSError as e:
            logger.log_connection(host, port, False)
            raise InstrumentConnectionError(f"Connection error to {host}: {e.strerror or e}")
        logger.log_connection(host, port, True)

    async def close(self):
        """Close the connection if it is open."""
        if self.writer is None:
            return
        writer, self.writer, self.reader = self.writer, None, None
        writer.close()
        try:
            await asyncio.wait_for(writer.wait_closed(), timeout=self.config.send_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"Connection did not close within {self.config.send_timeout}s; "
                "buffered data may not have reached the instrument"
            )
        except OSError as e:
            logger.warning(f"Error while closing connection: {e.strerror or e}")

    async def _send(self, data: bytes, what: str):
        """Write data and wait for it to drain, bounded by the send timeout."""
        if self.writer is None:
            raise InstrumentConnectionError(f"Error sending {what}: not connected")
        try:
            self.writer.write(data)
            await asyncio.wait_for(self.writer.drain(), timeout=self.config.send_timeout)
        except asyncio.TimeoutError:
            raise InstrumentConnectionError(
                f"Error sending {what}: timed out after {self.config.send_timeout}s"
            )
        except OSError as e:
            raise InstrumentConnectionError(f"Error sending {what}: {e.strerror or e}")

    async def identify(self) -> str:
        """Send *IDN? and return the raw reply; the reply only proves liveness."""
        query = create_identification_query()
        logger.debug(f"-> {query!r}")
        try:
            await self._send(query, "*IDN? query")
            reply = await asyncio.wait_for(
                self.reader.read(IDENTIFICATION_BUFSIZE),
                timeout=self.config.receive_timeout
            )
        except InstrumentConnectionError as e:
            raise InstrumentConnectionError(f"Error checking *IDN? from logic analyzer: {e}")
        except asyncio.TimeoutError:
            raise InstrumentConnectionError(
                "Error checking *IDN? from logic analyzer: "
                f"timed out after {self.config.receive_timeout}s"
            )
        except OSError as e:
            raise InstrumentConnectionError(
                f"Error checking *IDN? from logic analyzer: {e.strerror or e}"
            )

        if not reply:
            raise InstrumentConnectionError(
                "Error checking *IDN? from logic analyzer: connection closed"
            )
        logger.debug(f"<- {reply!r}")
        return reply.decode('ascii', errors='replace').rstrip('\r\n\x00')

    async def send_header(self, header: bytes):
        """Send the download header, including its trailing field byte."""
        logger.log_header(header)
        await self._send(header, "data")

    async def send_payload(self, source_path: str, expected_size: int) -> int:
        """Stream the source file in fixed size chunks; return bytes sent."""
        chunk_size = self.config.chunk_size
        bytes_sent = 0

        try:
            source = open(source_path, 'rb')
        except OSError as e:
            raise SourceFileError(f"error: {e.strerror or e}")

        with source:
            while True:
                try:
                    data = source.read(chunk_size)
                except OSError as e:
                    raise SourceFileError(f"error reading {source_path}: {e.strerror or e}")

                if data:
                    await self._send(data, "file data")
                    bytes_sent += len(data)

                    if bytes_sent % self.config.progress_log_interval < chunk_size or bytes_sent == expected_size:
                        logger.log_progress(bytes_sent, expected_size)

                if len(data) < chunk_size:
                    break

        return bytes_sent

    async def send_trailer(self):
        """Send the line feed that ends the transmission."""
        await self._send(PAYLOAD_TRAILER, "trailing LF")


async def upload_file(request: TransferRequest, config: ClientConfig) -> int:
    """
    Upload request.source_path to the instrument described by config.

    Returns the number of payload bytes sent. Raises an UploadError subclass
    on any failure; the connection and the file are released either way.
    """
    logger.log_configuration(request, config.port)

    file_size = get_source_size(request.source_path)
    logger.debug(f"Input file {request.source_path} is {file_size} bytes in size")

    # Header errors must surface before connecting
    header = create_download_header(request, file_size)

    async with InstrumentUploader(config) as uploader:
        identification = await uploader.identify()
        print(identification)

        await uploader.send_header(header)
        bytes_sent = await uploader.send_payload(request.source_path, file_size)
        await uploader.send_trailer()

        if bytes_sent != file_size:
            raise ShortReadError(bytes_sent, file_size)

    logger.log_file_upload(request.remote_name, bytes_sent, request.medium_name)
    return bytes_sent
