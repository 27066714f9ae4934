"""Runtime helpers for ripple-serialize"""

from .errors import (
    ErrorCode,
    RippleSerializeError,
    ParseError,
    FieldError,
    SeedParseError,
    InvalidKeyTypeError,
    KeyFileError,
)

__all__ = [
    "ErrorCode",
    "RippleSerializeError",
    "ParseError",
    "FieldError",
    "SeedParseError",
    "InvalidKeyTypeError",
    "KeyFileError",
]
