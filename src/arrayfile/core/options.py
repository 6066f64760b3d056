"""Append options (indentation, value transform, recovery policy)."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, field_validator

__all__ = ["AppendOptions", "Replacer", "Space", "DEFAULT_SPACE"]

Replacer = Union[Callable[[str, Any], Any], list[Union[str, int]], None]
Space = Union[int, str]

DEFAULT_SPACE = 4


class AppendOptions(BaseModel):
    """Configuration bundle accepted by :func:`arrayfile.append_json`.

    Parameters
    ----------
    force:
        Discard a file holding malformed JSON and start a new array instead of raising.
    space:
        Indentation passed to :func:`arrayfile.codec.stringify` (width or literal string).
    replacer:
        Per-key transform ``(key, value) -> value`` or an allow-list of object keys.
    revive:
        Also apply a callable ``replacer`` while parsing the existing file.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    force: bool = False
    space: Space = DEFAULT_SPACE
    replacer: Replacer = None
    revive: bool = False

    @field_validator("space", mode="before")
    @classmethod
    def _space_not_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("space must be an int or a str, not a bool")
        return value

    @field_validator("replacer", mode="before")
    @classmethod
    def _replacer_shape(cls, value: Any) -> Any:
        if value is None or callable(value):
            return value
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            raise ValueError("replacer must be callable or a list of key names")
        return list(value)

    @property
    def reviver(self) -> Callable[[str, Any], Any] | None:
        """Return the parse-time transform, if one applies."""
        if self.revive and callable(self.replacer):
            return self.replacer
        return None

    @classmethod
    def coerce(cls, options: "AppendOptions | Mapping[str, Any] | None") -> "AppendOptions":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(dict(options))
