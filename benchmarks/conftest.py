"""Benchmark fixtures and configuration."""

from __future__ import annotations

import json

import pytest


@pytest.fixture
def large_document() -> str:
    """Generate a large pretty-printed JSON document (~1MB)."""
    records = [
        {
            "id": i,
            "name": f"record {i}",
            "active": i % 3 == 0,
            "tags": [f"t{i % 7}", f"t{i % 11}"],
            "meta": {"created": f"2024-01-{i % 28 + 1:02d}", "score": i * 0.5},
        }
        for i in range(5000)
    ]
    return json.dumps({"version": 1, "records": records}, indent=2)
