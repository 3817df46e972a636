"""
Parameter map access.

Pure-Python helpers for reading user-submitted search parameters.  The
parameter map is never mutated.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

_MISSING = object()
_BRACKET_RE = re.compile(r"\[([^\]]*)\]")
_SCALARS = (str, bytes, int, float, complex)

# ---------------------------------------------------------------------------
# Path lookup
# ---------------------------------------------------------------------------


def split_path(path: str) -> list[str]:
    """
    Split a parameter path into segments.

    ``"a.b"``, ``"a[b]"`` and ``"a[b].c[0]"`` are all accepted; bracket
    segments are treated like dotted ones.
    """
    normalised = _BRACKET_RE.sub(r".\1", path)
    return [segment for segment in normalised.split(".") if segment != ""]


def _step(target: Any, segment: str) -> Any:
    if target is None or isinstance(target, _SCALARS):
        return _MISSING
    if isinstance(target, Mapping):
        return target.get(segment, _MISSING)
    if isinstance(target, Sequence):
        try:
            return target[int(segment)]
        except (ValueError, IndexError):
            return _MISSING
    return getattr(target, segment, _MISSING)


def data_get(params: Any, path: str | None, default: Any = None) -> Any:
    """
    Resolve ``path`` inside ``params``.

    An exact top-level key always wins over dotted traversal, so
    ``{"a.b": 1}`` resolves ``"a.b"`` to ``1``.  A stored ``None`` is
    returned as-is; only missing segments yield ``default``.  Paths never
    step into strings or numbers.
    """
    if params is None:
        return default
    if path is None:
        return params
    if isinstance(params, Mapping) and path in params:
        return params[path]

    target = params
    for segment in split_path(path):
        target = _step(target, segment)
        if target is _MISSING:
            return default
    return target


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def is_present(value: Any) -> bool:
    """
    Return True if a parameter value should produce a predicate.

    Truthy values are present.  Integer ``0`` and the string ``"0"`` are
    present too; ``False``, ``0.0``, ``""``, ``None`` and empty collections
    are not.
    """
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, int) and value == 0:
        return True
    if isinstance(value, str) and value == "0":
        return True
    return bool(value)


def any_present(params: Any, paths: Iterable[str]) -> bool:
    """Return True if at least one of ``paths`` resolves to a present value."""
    return any(is_present(data_get(params, path)) for path in paths)


# ---------------------------------------------------------------------------
# Value shapes
# ---------------------------------------------------------------------------


def is_array(value: Any) -> bool:
    """True for list-like values (not strings)."""
    return isinstance(value, list | tuple | set | frozenset | Mapping)


def as_list(value: Any) -> list[Any]:
    """Return list-like ``value`` as a list (mapping values for mappings)."""
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, set | frozenset):
        return sorted(value, key=str)
    return list(value)
