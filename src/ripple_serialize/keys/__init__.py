"""
Key management for ripple-serialize.

Provides the seed-derived signing key and its key file storage.
"""

from .keyfile import KeyFileRecord, read_key_file, write_key_file
from .ripple_key import RippleKey, verify_signature

__all__ = [
    "KeyFileRecord",
    "read_key_file",
    "write_key_file",
    "RippleKey",
    "verify_signature",
]
