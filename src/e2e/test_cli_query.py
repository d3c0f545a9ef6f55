import json
from pathlib import Path

import pytest
from fastmatch.__main__ import main


def _seed(tmp: Path) -> Path:
    path = tmp / "words.tsv"
    path.write_text(
        "night\tn\tthe time after sunset\n"
        "nightly\tadj\thappening every night\n"
        "knight\tn\ta mounted soldier\n"
        "of the night\tphr\tnocturnal\n",
        encoding="utf-8",
    )
    return path


@pytest.mark.e2e
def test_cli_single_query_json(tmp_path: Path, capsys):
    rc = main(["--wordlist", str(_seed(tmp_path)), "--q", "NIGHT", "--json"])
    assert rc == 0
    rows = json.loads(capsys.readouterr().out)
    assert [r["term"] for r in rows] == ["night", "nightly"]


@pytest.mark.e2e
def test_cli_any_word_table(tmp_path: Path, capsys):
    rc = main(["--wordlist", str(_seed(tmp_path)), "--any-word", "--q", "night"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "of the night" in out and "nightly" in out and "knight" not in out


@pytest.mark.e2e
def test_cli_writes_shards_then_reads_them(tmp_path: Path, capsys):
    data = tmp_path / "data"
    assert main(["--wordlist", str(_seed(tmp_path)), "--write-shards", str(data)]) == 0
    assert (data / "n.json").exists() and (data / "k.json").exists()
    capsys.readouterr()

    assert main(["--data", str(data), "--q", "kn", "--json"]) == 0
    assert [r["term"] for r in json.loads(capsys.readouterr().out)] == ["knight"]


@pytest.mark.e2e
def test_cli_requires_a_source():
    with pytest.raises(SystemExit) as exc:
        main(["--q", "a"])
    assert exc.value.code == 2


@pytest.mark.e2e
def test_cli_verbose_turns_on_shard_progress(tmp_path: Path, capsys, monkeypatch):
    monkeypatch.setenv("FASTMATCH_VERBOSE", "0")
    data = tmp_path / "data"
    assert main(["--wordlist", str(_seed(tmp_path)), "--write-shards", str(data), "--verbose"]) == 0
    out = capsys.readouterr().out
    assert "[shard] k.json: 1 entries" in out
    assert "[shard] n.json: 2 entries" in out

    assert main(["--data", str(data), "--verbose"]) == 0
    assert "[loaded] k.json" in capsys.readouterr().out


@pytest.mark.e2e
def test_cli_without_verbose_prints_no_progress(tmp_path: Path, capsys, monkeypatch):
    monkeypatch.setenv("FASTMATCH_VERBOSE", "0")
    assert main(["--wordlist", str(_seed(tmp_path)), "--write-shards", str(tmp_path / "data")]) == 0
    assert "[shard]" not in capsys.readouterr().out


@pytest.mark.e2e
def test_cli_reads_a_shard_zip(tmp_path: Path, capsys):
    import zipfile

    archive = tmp_path / "shards.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("data/k.json", '[{"term": "knight", "definitions": [{"pos": "n", "def": "a mounted soldier"}]}]')
    assert main(["--data", str(archive), "--q", "kn", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)[0]["definitions"] == [{"pos": "n", "def": "a mounted soldier"}]
