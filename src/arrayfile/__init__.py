"""Append records to a JSON file whose top-level value is an array."""

import logging

from .codec import OMIT, parse, stringify
from .core import (
    AppendOptions,
    ArrayFileError,
    InvalidArgumentError,
    InvalidFormatError,
    JSONSyntaxError,
    StorageError,
)
from .store import append_json, write_json

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "OMIT",
    "AppendOptions",
    "ArrayFileError",
    "InvalidArgumentError",
    "InvalidFormatError",
    "JSONSyntaxError",
    "StorageError",
    "append_json",
    "parse",
    "stringify",
    "write_json",
]
