import zipfile
from pathlib import Path

import pytest
from fastmatch import Definition, Entry, build_matcher, load_shard_archive
from fastmatch.loader import ShardFormatError


def _zip(tmp: Path, members: dict) -> Path:
    path = tmp / "shards.zip"
    with zipfile.ZipFile(path, "w") as zf:
        for name, text in members.items():
            zf.writestr(name, text)
    return path


@pytest.mark.e2e
def test_archive_reads_nested_shards_in_name_order(tmp_path: Path):
    path = _zip(tmp_path, {
        "data/b.json": '[{"term": "bee", "definitions": [{"pos": "n", "def": "an insect"}]}]',
        "data/a.json": '[{"term": "ant", "definitions": []}, {"term": "apple", "definitions": []}]',
        "data/": "",
        "data/.hidden.json": "not json at all",
        "README.txt": "ignored",
    })
    entries = load_shard_archive(path)
    assert [e.term for e in entries] == ["ant", "apple", "bee"]
    assert entries[2].definitions == (Definition("n", "an insect"),)


@pytest.mark.e2e
def test_archive_members_are_never_written_to_disk(tmp_path: Path):
    path = _zip(tmp_path, {"../../escape.json": '[{"term": "zed", "definitions": []}]'})
    assert [e.term for e in load_shard_archive(path)] == ["zed"]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["shards.zip"]
    assert not (tmp_path.parent / "escape.json").exists()


@pytest.mark.e2e
def test_archive_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_shard_archive(tmp_path / "missing.zip")

    not_zip = tmp_path / "plain.zip"
    not_zip.write_text("hello", encoding="utf-8")
    with pytest.raises(zipfile.BadZipFile):
        load_shard_archive(not_zip)

    with pytest.raises(ShardFormatError):
        load_shard_archive(_zip(tmp_path, {"a.json": '{"term": "a"}'}))


@pytest.mark.e2e
def test_archive_entries_feed_the_demo_matcher(tmp_path: Path):
    path = _zip(tmp_path, {"k.json": '[{"term": "Knight", "definitions": []}, {"term": "knot", "definitions": []}]'})
    m = build_matcher(load_shard_archive(path))
    assert m.get_matches("KNI") == [Entry("Knight")]
