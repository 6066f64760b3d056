"""JSON text codec matching ``JSON.stringify`` / ``JSON.parse`` conventions.

The storage format is the output of ``JSON.stringify(array, replacer, space)``:
non-ASCII text is kept verbatim, non-finite numbers become ``null`` and
indentation follows the ``space`` rules (integers capped at 10, strings cut to
10 characters, anything below one column meaning compact output).

A *replacer* is either a callable ``(key, value) -> value`` or an allow-list
of object keys. Callables may return :data:`OMIT` to drop a member.
"""

from __future__ import annotations

import json
import math
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from arrayfile.core.errors import JSONSyntaxError
from arrayfile.core.options import DEFAULT_SPACE, Replacer, Space

__all__ = ["OMIT", "parse", "stringify"]

_MAX_GAP = 10


class _Omit:
    """Sentinel returned by a replacer or reviver to drop a value."""

    def __repr__(self) -> str:
        return "OMIT"


OMIT = _Omit()


def _gap(space: Space | None) -> str | None:
    if space is None:
        return None
    if isinstance(space, bool):
        raise TypeError("space must be an int or a str")
    if isinstance(space, int):
        width = min(_MAX_GAP, space)
        return " " * width if width >= 1 else None
    if isinstance(space, str):
        return space[:_MAX_GAP] or None
    raise TypeError(f"space must be an int or a str (got {type(space).__name__})")


def _allow_list(keys: Sequence[str | int]) -> list[str]:
    seen: dict[str, None] = {}
    for key in keys:
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            continue
        seen.setdefault(key if isinstance(key, str) else str(key), None)
    return list(seen)


def _key(name: Any) -> str:
    """Convert an object key the way :mod:`json` does."""
    if isinstance(name, str):
        return name
    if name is True:
        return "true"
    if name is False:
        return "false"
    if name is None:
        return "null"
    if isinstance(name, int):
        return int.__repr__(name)
    if isinstance(name, float):
        if not math.isfinite(name):
            raise ValueError(f"Out of range float values are not JSON compliant: {name!r}")
        return float.__repr__(name)
    raise TypeError(f"keys must be str, int, float, bool or None, not {type(name).__name__}")


def _members(value: Mapping) -> dict[str, Any]:
    members: dict[str, Any] = {}
    for name, item in value.items():
        text = _key(name)
        if text in members:
            raise ValueError(f"duplicate key {text!r} after conversion to JSON")
        members[text] = item
    return members


def _prepare(
    key: str,
    value: Any,
    transform: Callable[[str, Any], Any] | None,
    allowed: list[str] | None,
    active: set[int],
) -> Any:
    if transform is not None:
        value = transform(key, value)
    if value is OMIT:
        return OMIT
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if not isinstance(value, (Mapping, list, tuple)):
        return value

    marker = id(value)
    if marker in active:
        raise ValueError("Circular reference detected")
    active.add(marker)
    try:
        if isinstance(value, Mapping):
            members = _members(value)
            if allowed is None:
                names = list(members)
            else:
                names = [name for name in allowed if name in members]
            result: dict[str, Any] = {}
            for name in names:
                item = _prepare(name, members[name], transform, allowed, active)
                if item is not OMIT:
                    result[name] = item
            return result
        items = []
        for index, element in enumerate(value):
            item = _prepare(str(index), element, transform, allowed, active)
            items.append(None if item is OMIT else item)
        return items
    finally:
        active.discard(marker)


def stringify(value: Any, replacer: Replacer = None, space: Space | None = DEFAULT_SPACE) -> str:
    """Serialise ``value`` the way ``JSON.stringify(value, replacer, space)`` does.

    Raises ``TypeError`` if the replacer drops the top-level value or if a
    value is not JSON serialisable.
    """
    if replacer is None:
        transform, allowed = None, None
    elif callable(replacer):
        transform, allowed = replacer, None
    else:
        transform, allowed = None, _allow_list(replacer)

    prepared = _prepare("", value, transform, allowed, set())
    if prepared is OMIT:
        raise TypeError("replacer removed the top-level value; nothing to serialise")

    gap = _gap(space)
    if gap is None:
        return json.dumps(prepared, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    return json.dumps(
        prepared, ensure_ascii=False, allow_nan=False, indent=gap, separators=(",", ": ")
    )


def _revive(key: str, value: Any, reviver: Callable[[str, Any], Any]) -> Any:
    if isinstance(value, dict):
        for name in list(value):
            item = _revive(name, value[name], reviver)
            if item is OMIT:
                del value[name]
            else:
                value[name] = item
    elif isinstance(value, list):
        for index, element in enumerate(value):
            item = _revive(str(index), element, reviver)
            value[index] = None if item is OMIT else item
    return reviver(key, value)


def parse(text: str, reviver: Callable[[str, Any], Any] | None = None) -> Any:
    """Parse JSON ``text``, optionally passing every value through ``reviver``.

    Malformed input raises :class:`~arrayfile.core.errors.JSONSyntaxError`
    carrying the decoder's own message.
    """
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise JSONSyntaxError.from_decode_error(exc) from exc
    if reviver is None:
        return value
    return _revive("", value, reviver)
