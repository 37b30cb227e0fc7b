from pathlib import Path

from indexer.config import load_config


def test_default_layout(tmp_path, monkeypatch):
    monkeypatch.delenv("INDEX_PROGRESS", raising=False)

    config = load_config(tmp_path)

    assert config.flat.source_dir == tmp_path / "aartis"
    assert config.flat.output_file == tmp_path / "index.json"
    assert [(c.source_dir, c.output_file, c.label) for c in config.grouped] == [
        (tmp_path / "varta" / "84", tmp_path / "index_84.json", "84"),
        (tmp_path / "varta" / "252", tmp_path / "index_252.json", "252"),
    ]
    assert config.progress is False


def test_root_and_progress_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("INDEX_ROOT", str(tmp_path))
    monkeypatch.setenv("INDEX_PROGRESS", "yes")

    config = load_config()

    assert config.flat.source_dir == tmp_path / "aartis"
    assert config.progress is True


def test_defaults_to_current_directory(monkeypatch):
    monkeypatch.delenv("INDEX_ROOT", raising=False)

    assert load_config().flat.output_file == Path(".") / "index.json"
