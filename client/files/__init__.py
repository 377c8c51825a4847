"""
File transfer module for client-side upload operations.

Handles:
- Source file size lookup
- Download header transmission
- Chunked payload streaming and byte count verification
"""
