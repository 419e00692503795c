import json
from pathlib import Path

import pytest

from playrank.cli import main


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "plays.csv"
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("PLAYRANK_TOP_K", "PLAYRANK_LOG_LEVEL", "PLAYRANK_OUTPUT_FORMAT"):
        monkeypatch.delenv(name, raising=False)


def test_main_prints_leaderboard(tmp_path: Path, capsys):
    path = _write(
        tmp_path,
        "create_timestamp,player_id,score\n"
        "2021/01/01 12:00,player0001,12345\n"
        "2021/01/02 13:00,player0002,10000\n"
        "2021/01/02 14:00,player0002,1800\n",
    )

    assert main([str(path)]) == 0

    out = capsys.readouterr().out
    assert out == "rank,player_id,mean_score\n1,player0001,12345\n2,player0002,5900\n"


def test_main_top_option_keeps_ties(tmp_path: Path, capsys):
    path = _write(
        tmp_path,
        "create_timestamp,player_id,score\n"
        "2021/01/01,a,1000\n"
        "2021/01/01,b,1000\n"
        "2021/01/01,c,500\n",
    )

    assert main([str(path), "--top", "1"]) == 0

    assert capsys.readouterr().out == "rank,player_id,mean_score\n1,a,1000\n1,b,1000\n"


def test_main_skips_bad_rows_and_writes_report(tmp_path: Path, capsys):
    path = _write(
        tmp_path,
        "create_timestamp,player_id,score\n"
        "2021/01/01,a,10\n"
        "garbage,b,20\n",
    )
    report_path = tmp_path / "report.json"

    assert main([str(path), "--report", str(report_path)]) == 0

    assert capsys.readouterr().out == "rank,player_id,mean_score\n1,a,10\n"
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["total_rows"] == 2
    assert report["skipped_rows"] == 1
    assert report["errors"][0]["index"] == 1


def test_main_json_format(tmp_path: Path, capsys):
    path = _write(tmp_path, "create_timestamp,player_id,score\n2021/01/01 08,a,2.5\n")

    assert main([str(path), "--format", "json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload == [
        {
            "rank": 1,
            "player_id": "a",
            "mean_score": 3,
            "raw_mean_score": 2.5,
            "created_at": "2021/01/01 08:00:00",
        }
    ]


def test_main_missing_file_fails_without_output(tmp_path: Path, capsys):
    assert main([str(tmp_path / "missing.csv")]) == 1

    assert capsys.readouterr().out == ""


def test_main_bad_header_fails_without_output(tmp_path: Path, capsys):
    path = _write(tmp_path, "when,who\n2021/01/01,a\n")

    assert main([str(path)]) == 1

    assert capsys.readouterr().out == ""


def test_main_requires_path():
    with pytest.raises(SystemExit) as excinfo:
        main([])

    assert excinfo.value.code == 2


def test_main_rejects_negative_top(tmp_path: Path):
    path = _write(tmp_path, "create_timestamp,player_id,score\n")

    with pytest.raises(SystemExit) as excinfo:
        main([str(path), "--top", "-1"])

    assert excinfo.value.code == 2


def test_main_top_default_from_environment(tmp_path: Path, capsys, monkeypatch):
    monkeypatch.setenv("PLAYRANK_TOP_K", "1")
    path = _write(
        tmp_path,
        "create_timestamp,player_id,score\n"
        "2021/01/01,a,3\n"
        "2021/01/01,b,2\n",
    )

    assert main([str(path)]) == 0

    assert capsys.readouterr().out == "rank,player_id,mean_score\n1,a,3\n"


def test_main_invalid_utf8_fails_without_output(tmp_path: Path, capsys):
    path = tmp_path / "plays.csv"
    path.write_bytes(b"create_timestamp,player_id,score\n2021/01/01,a\xff\xfe,10\n")

    assert main([str(path)]) == 1

    assert capsys.readouterr().out == ""


def test_main_large_score_ranks(tmp_path: Path, capsys):
    path = _write(
        tmp_path,
        "create_timestamp,player_id,score\n"
        "2021/01/01,big,1e30\n"
        "2021/01/01,small,1\n",
    )

    assert main([str(path), "--top", "1"]) == 0

    assert capsys.readouterr().out == f"rank,player_id,mean_score\n1,big,{int(1e30)}\n"


def test_main_unwritable_report_fails_without_output(tmp_path: Path, capsys):
    path = _write(tmp_path, "create_timestamp,player_id,score\n2021/01/01,a,10\n")

    assert main([str(path), "--report", str(tmp_path / "missing" / "report.json")]) == 1

    assert capsys.readouterr().out == ""
