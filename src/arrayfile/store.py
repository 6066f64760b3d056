"""Utilities for appending records to a JSON array file."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from arrayfile.codec import parse, stringify
from arrayfile.core.errors import (
    InvalidArgumentError,
    InvalidFormatError,
    JSONSyntaxError,
    StorageError,
)
from arrayfile.core.options import DEFAULT_SPACE, AppendOptions, Replacer, Space

logger = logging.getLogger(__name__)


@contextmanager
def _storage(action: str) -> Iterator[None]:
    try:
        yield
    except StorageError:
        raise
    except OSError as exc:
        raise StorageError.from_os_error(exc, action) from exc


def _remove(path: Path) -> None:
    """Delete whatever sits at ``path`` (file or directory tree); missing is fine."""
    with _storage("remove"):
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)


def write_json(
    path: str | os.PathLike[str],
    record: Any,
    replacer: Replacer = None,
    space: Space = DEFAULT_SPACE,
) -> None:
    """Write ``[record]`` to ``path``, creating parent directories as needed.

    Any existing content is overwritten. The record is not validated here;
    :func:`append_json` does that before delegating.

    Raises
    ------
    StorageError
        If the directory chain cannot be created or the file cannot be written.
    """
    path = Path(path)
    with _storage("stat"):
        parent_exists = path.parent.exists()
    if not parent_exists:
        with _storage("create directory"):
            path.parent.mkdir(parents=True, exist_ok=True)
    text = stringify([record], replacer, space)
    with _storage("write"):
        path.write_text(text, encoding="utf-8")
    logger.debug("Created JSON array file %s", path)


def _require(path: Any, record: Any) -> Path:
    if path is None or not os.fspath(path):
        raise InvalidArgumentError("Path is required")
    if record is None:
        raise InvalidArgumentError("Data is required")
    return Path(path)


def append_json(
    path: str | os.PathLike[str],
    record: Any,
    options: AppendOptions | Mapping[str, Any] | None = None,
) -> None:
    """Append ``record`` to the JSON array stored at ``path``.

    A missing or zero-length file is (re)created as ``[record]``. An existing
    file is parsed, extended and rewritten in full using ``options.space`` and
    ``options.replacer``.

    Parameters
    ----------
    path:
        Target file. Parent directories are created when the file is new.
    record:
        JSON-serialisable value to append. ``None`` is rejected.
    options:
        :class:`~arrayfile.core.options.AppendOptions` or a mapping with the
        same keys (``force``, ``space``, ``replacer``, ``revive``).

    Raises
    ------
    InvalidArgumentError
        If ``path`` is empty or ``record`` is ``None``.
    InvalidFormatError
        If the file holds valid JSON whose top-level value is not an array.
        Never recovered, even with ``force``.
    JSONSyntaxError
        If the file holds malformed JSON and ``force`` is false.
    StorageError
        On any filesystem failure.

    Notes
    -----
    The read-modify-write cycle is not locked; concurrent appends to the same
    path can lose records.
    Bytes that are not valid UTF-8 are read as U+FFFD, so binary garbage is
    reported as malformed JSON.
    """
    path = _require(path, record)
    opts = AppendOptions.coerce(options)

    with _storage("stat"):
        exists = path.exists()
    if not exists:
        write_json(path, record, opts.replacer, opts.space)
        return

    with _storage("read"):
        content = path.read_text(encoding="utf-8", errors="replace")

    if not content:
        logger.debug("Replacing empty file %s", path)
        _remove(path)
        write_json(path, record, opts.replacer, opts.space)
        return

    try:
        records = parse(content, opts.reviver)
    except JSONSyntaxError as exc:
        if not opts.force:
            raise
        logger.warning("Discarding malformed JSON in %s (%s)", path, exc.msg)
        _remove(path)
        write_json(path, record, opts.replacer, opts.space)
        return

    if not isinstance(records, list):
        raise InvalidFormatError("File is not an array")

    records.append(record)
    text = stringify(records, opts.replacer, opts.space)
    with _storage("write"):
        path.write_text(text, encoding="utf-8")
    logger.debug("Appended record to %s (%d total)", path, len(records))


__all__ = ["append_json", "write_json"]
