import pytest

from indexer import main as driver
from indexer.config import load_config


@pytest.fixture
def content_root(tmp_path, write_json):
    write_json(tmp_path / "aartis", "a1.json", {"id": "a1", "title": "T", "artist": "A", "category": "C"})
    write_json(tmp_path / "varta" / "84", "v84_1_p1.json", {"title": "P", "vaishnavName": "N"})
    write_json(tmp_path / "varta" / "252", "v252_1_p1.json", {"title": "Q"})
    return tmp_path


def test_run_writes_all_three_indexes(content_root, capsys, read_json):
    driver.run(load_config(content_root))

    assert [entry["id"] for entry in read_json(content_root / "index.json")] == ["a1"]
    assert read_json(content_root / "index_84.json")[0]["prasangs"][0]["file"] == "84/v84_1_p1.json"
    assert read_json(content_root / "index_252.json")[0]["name"] == "Vaishnav 1"
    assert "All indexes updated successfully!" in capsys.readouterr().out


def test_missing_collection_does_not_stop_the_run(tmp_path, write_json):
    write_json(tmp_path / "varta" / "252", "v252_1_p1.json", {"title": "Q"})

    driver.run(load_config(tmp_path))

    assert not (tmp_path / "index.json").exists()
    assert not (tmp_path / "index_84.json").exists()
    assert (tmp_path / "index_252.json").exists()


def test_main_uses_index_root(content_root, monkeypatch):
    monkeypatch.setenv("INDEX_ROOT", str(content_root))

    driver.main()

    assert (content_root / "index_252.json").exists()


def test_write_failure_exits_non_zero(content_root, monkeypatch, capsys):
    # A directory where the flat index should go makes the write fail.
    (content_root / "index.json").mkdir()
    monkeypatch.setattr(driver, "load_config", lambda: load_config(content_root))

    with pytest.raises(SystemExit) as excinfo:
        driver.main()

    assert excinfo.value.code == 1
    assert "[FATAL]" in capsys.readouterr().out
    assert not (content_root / "index_84.json").exists()
