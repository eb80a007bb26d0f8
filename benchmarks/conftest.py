"""Benchmark fixtures and configuration."""

from __future__ import annotations

import json

import pytest


@pytest.fixture
def large_json() -> str:
    """Generate a pretty-printed JSON document (~100KB) with non-ASCII text."""
    records = [
        {
            "id": i,
            "name": f"record {i}",
            "tags": ["alpha", "beta", "été", "\U0001f64c"],
            "nested": {"value": i * 3.5, "ok": i % 2 == 0, "note": None},
        }
        for i in range(600)
    ]
    return json.dumps(records, indent=2, ensure_ascii=False)


@pytest.fixture
def small_inputs() -> list[str]:
    """Short inputs of the kind parsed one per configuration value."""
    return [
        '{"hello": "world \U0001f64c"}',
        "key = value\nother = 12\n",
        "SELECT *\n  FROM users\n WHERE id = 1;",
        "",
    ]
