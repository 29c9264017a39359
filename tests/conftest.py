"""Shared test fixtures for objectdb tests."""

from __future__ import annotations

import json

import pytest

from objectdb.domain.entities import IndexEntry


@pytest.fixture
def sample_entries() -> list[IndexEntry]:
    return [
        IndexEntry(
            name="Q3 Revenue",
            keywords=("revenue", "quarterly"),
            categories=("/reports/finance/q3",),
            description="Revenue figures for the third quarter",
        ),
        IndexEntry(
            name="Q3 Expenses",
            keywords=("expenses", "quarterly"),
            categories=("/reports/finance/q3",),
            description="Expenses for the third quarter",
        ),
        IndexEntry(
            name="Headcount",
            keywords=("headcount", "staff"),
            categories=("/reports/hr",),
            description="Staff numbers per department",
        ),
        IndexEntry(
            name="Retention Policy",
            keywords=("retention", "policy"),
            categories=("/policies", "/reports/hr"),
        ),
    ]


@pytest.fixture
def entries_file(tmp_path, sample_entries):
    data = {
        "entries": [
            {
                "name": e.name,
                "keywords": list(e.keywords),
                "categories": list(e.categories),
                "description": e.description,
            }
            for e in sample_entries
        ]
    }
    path = tmp_path / "index.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
