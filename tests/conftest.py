"""Shared fixtures for query-helper tests."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def compile_stmt():
    """Compile a statement/expression to (whitespace-normalised SQL, params)."""

    def _compile(stmt: Any) -> tuple[str, dict[str, Any]]:
        compiled = stmt.compile()
        return " ".join(str(compiled).split()), dict(compiled.params)

    return _compile
