"""Pytest bootstrap configuration.

Environment overrides must be set before `core.config.settings` is imported
by any test module.
"""
import json
import os

import pytest

# Keep the structured log quiet; demo output is asserted on stdout
os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture
def feature_db(tmp_path):
    """Write a small feature database and return its path."""

    def _write(records) -> str:
        path = tmp_path / "route_guide_db.json"
        path.write_text(json.dumps(records), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def sample_records():
    return [
        {
            "location": {"latitude": 407838351, "longitude": -746143763},
            "name": "Patriots Path, Mendham, NJ 07945, USA",
        },
        {
            "location": {"latitude": 408122808, "longitude": -743999179},
            "name": "101 New Jersey 10, Whippany, NJ 07981, USA",
        },
        {
            "location": {"latitude": 413628156, "longitude": -749015468},
            "name": "",
        },
    ]
