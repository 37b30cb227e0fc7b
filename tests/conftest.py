import json

import pytest


@pytest.fixture
def write_json():
    """Write obj (or raw text) to directory/filename and return the path."""

    def _write(directory, filename, obj):
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        text = obj if isinstance(obj, str) else json.dumps(obj, ensure_ascii=False)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def read_json():
    """Parse a written index file."""

    def _read(path):
        return json.loads(path.read_text(encoding="utf-8"))

    return _read
