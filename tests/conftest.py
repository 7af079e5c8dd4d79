"""Shared fixtures for LockShield tests."""

import json

import pytest


@pytest.fixture
def write_lock(tmp_path):
    """Return a helper that writes a package-lock.json with the given packages."""

    def _write(packages, name="package-lock.json", **top_level):
        lock_file = tmp_path / name
        document = {"name": "test-project", "lockfileVersion": 3, **top_level, "packages": packages}
        lock_file.write_text(json.dumps(document), encoding="utf-8")
        return lock_file

    return _write
