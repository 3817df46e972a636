from __future__ import annotations

from enum import Enum
from typing import Any


class SearchMethod(str, Enum):
    """Search methods a relation filter can dispatch on."""

    COMMA = "COMMA"
    FUZZY = "FUZZY"
    FUZZY_LEFT = "FUZZY_LEFT"
    IN = "IN"
    BETWEEN = "BETWEEN"
    EQUALS = "EQUALS"

    @classmethod
    def from_tag(cls, tag: Any) -> SearchMethod:
        """Map a method tag to a member; unknown tags fall back to ``EQUALS``."""
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            try:
                return cls(tag.strip().upper())
            except ValueError:
                pass
        return cls.EQUALS
