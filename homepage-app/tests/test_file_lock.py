import json

import pytest

from homepage.utils.file_lock import locked_json_write, read_json


def test_read_json_defaults_for_missing_file(tmp_path):
    assert read_json(tmp_path / "none.json") == []
    assert read_json(tmp_path / "none.json", default=dict) == {}


def test_read_json_empty_file_uses_default(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("  ")
    assert read_json(path, default=dict) == {}


def test_locked_write_creates_missing_file(tmp_path):
    path = tmp_path / "sub" / "data.json"
    with locked_json_write(path, default=dict) as data:
        data["a"] = [1, 2]
    assert read_json(path, default=dict) == {"a": [1, 2]}


def test_locked_write_persists_changes(tmp_path):
    path = tmp_path / "items.json"
    with locked_json_write(path) as items:
        items.append("one")
    with locked_json_write(path) as items:
        items.append("two")
    assert json.loads(path.read_text()) == ["one", "two"]


def test_locked_write_discards_changes_on_error(tmp_path):
    path = tmp_path / "items.json"
    path.write_text(json.dumps(["keep"]))
    with pytest.raises(RuntimeError):
        with locked_json_write(path) as items:
            items.append("lost")
            raise RuntimeError("abort")
    assert read_json(path) == ["keep"]
