"""
Error types raised while preparing and performing an upload.

Every failure terminates the upload; nothing here is retried.
"""


class UploadError(Exception):
    """Base class for all upload failures."""


class ValidationError(UploadError):
    """A command line value violates an instrument field constraint."""


class HeaderOverflowError(ValidationError):
    """The download header does not fit the instrument's header buffer."""


class SourceFileError(UploadError):
    """The local source file is missing or unreadable."""


class InstrumentConnectionError(UploadError):
    """Connecting to, or talking with, the instrument failed."""


class ShortReadError(UploadError):
    """Fewer (or more) payload bytes were sent than the file size promised."""

    def __init__(self, sent: int, expected: int):
        super().__init__(f"Short file read: {sent} of {expected} bytes")
        self.sent = sent
        self.expected = expected
