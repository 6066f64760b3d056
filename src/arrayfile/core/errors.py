"""Common arrayfile exceptions."""

from __future__ import annotations

import json


class ArrayFileError(Exception):
    """Base class for every error raised by arrayfile."""


class InvalidArgumentError(ArrayFileError, ValueError):
    """Raised when a required argument (path or record) is missing."""


class InvalidFormatError(ArrayFileError, ValueError):
    """Raised when an existing file does not hold a top-level JSON array."""


class JSONSyntaxError(ArrayFileError, json.JSONDecodeError):
    """Raised when file content is not syntactically valid JSON.

    Carries the decoder's ``msg``, ``doc``, ``pos``, ``lineno`` and ``colno``
    unchanged so the message text matches what :mod:`json` reports.
    """

    @classmethod
    def from_decode_error(cls, exc: json.JSONDecodeError) -> "JSONSyntaxError":
        return cls(exc.msg, exc.doc, exc.pos)


class StorageError(ArrayFileError, OSError):
    """Raised when creating, reading, writing or removing a file fails."""

    @classmethod
    def from_os_error(cls, exc: OSError, action: str) -> "StorageError":
        strerror = f"{action} failed: {exc.strerror or exc}"
        if exc.errno is None:
            return cls(strerror)
        return cls(exc.errno, strerror, exc.filename)


__all__ = [
    "ArrayFileError",
    "InvalidArgumentError",
    "InvalidFormatError",
    "JSONSyntaxError",
    "StorageError",
]
