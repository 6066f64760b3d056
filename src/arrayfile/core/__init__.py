"""Core types shared across arrayfile modules."""

from .errors import (
    ArrayFileError,
    InvalidArgumentError,
    InvalidFormatError,
    JSONSyntaxError,
    StorageError,
)
from .options import AppendOptions

__all__ = [
    "AppendOptions",
    "ArrayFileError",
    "InvalidArgumentError",
    "InvalidFormatError",
    "JSONSyntaxError",
    "StorageError",
]
