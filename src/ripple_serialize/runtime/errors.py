"""
ripple-serialize Error Model

This module provides the error hierarchy shared by the codec, the key manager,
the signer and the command line tool. Every error carries an ErrorCode so that
callers can branch on the kind of failure instead of the message text.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes grouped by the component that raises them."""

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    USAGE = 3
    OVERWRITE_REFUSED = 4

    # Encoding errors (100-199)
    PARSE_ERROR = 100
    INVALID_JSON = 101
    INVALID_BINARY = 102
    MALFORMED_FIELD = 103

    # Field errors (200-299)
    FIELD_ERROR = 200
    MISSING_FIELD = 201
    UNKNOWN_FIELD = 202
    FIELD_TYPE_MISMATCH = 203

    # Key errors (300-399)
    SEED_PARSE_ERROR = 300
    INVALID_KEY_TYPE = 301
    INVALID_KEY = 302

    # Key file errors (400-499)
    FILE_OPEN_ERROR = 400
    DIRECTORY_CREATE_ERROR = 401

    # Signing errors (500-599)
    SIGNING_ERROR = 500
    INVALID_SIGNATURE = 501


class RippleSerializeError(Exception):
    """
    Base class for all ripple-serialize errors.

    The string form of an error is its message, so the command line tool can
    print it verbatim.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}([{self.code.name}] {self.message!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ParseError(RippleSerializeError):
    """Malformed binary or JSON input."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.PARSE_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class MalformedFieldError(ParseError):
    """A binary field header or payload could not be decoded."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MALFORMED_FIELD, details, cause)


class JsonParseError(ParseError):
    """Text that should hold a JSON document does not."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_JSON, details, cause)


class FieldError(RippleSerializeError):
    """Unknown, missing or mistyped field."""

    def __init__(self, message: str, field: Optional[str] = None,
                 code: ErrorCode = ErrorCode.FIELD_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)
        self.field = field


class MissingFieldError(FieldError):
    """A required field is absent."""

    def __init__(self, message: str, field: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, field, ErrorCode.MISSING_FIELD, details, cause)


class SeedParseError(RippleSerializeError):
    """Text could not be turned into a seed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.SEED_PARSE_ERROR, details, cause)


class InvalidKeyTypeError(RippleSerializeError):
    """Unrecognized key type token."""

    def __init__(self, message: str, key_type: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY_TYPE, details, cause)
        self.key_type = key_type


class KeyFileError(RippleSerializeError):
    """Key file input/output errors."""

    def __init__(self, message: str, path: Optional[str] = None,
                 code: ErrorCode = ErrorCode.FILE_OPEN_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)
        self.path = path


class FileOpenError(KeyFileError):
    """The key file could not be opened for reading or writing."""

    def __init__(self, message: str, path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, path, ErrorCode.FILE_OPEN_ERROR, details, cause)


class DirectoryCreateError(KeyFileError):
    """The key file's parent directory could not be created."""

    def __init__(self, message: str, path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, path, ErrorCode.DIRECTORY_CREATE_ERROR, details, cause)


class OverwriteRefusedError(RippleSerializeError):
    """The command line tool refused to replace an existing key file."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.OVERWRITE_REFUSED, details, cause)


class UsageError(RippleSerializeError):
    """Unknown command or wrong number of arguments."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.USAGE, details, cause)


class SigningError(RippleSerializeError):
    """Signing could not be completed."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.SIGNING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


__all__ = [
    "ErrorCode",
    "RippleSerializeError",
    "ParseError",
    "MalformedFieldError",
    "JsonParseError",
    "FieldError",
    "MissingFieldError",
    "SeedParseError",
    "InvalidKeyTypeError",
    "KeyFileError",
    "FileOpenError",
    "DirectoryCreateError",
    "OverwriteRefusedError",
    "UsageError",
    "SigningError",
]
