"""
Client package for the iadown inverse assembler uploader.

This package contains all instrument-side functionality including:
- Control port connection and *IDN? exchange
- Download header and payload transfer
- Configuration and utilities
"""
