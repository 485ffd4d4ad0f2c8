import json

import pytest

from receipt_extract import run


@pytest.fixture
def env(tmp_path, monkeypatch):
    for name in ["MAX_WIDTH", "MIN_WIDTH", "TOTAL_STRATEGY", "DATE_DAYFIRST", "LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("OUTPUT_PATH", str(tmp_path / "out" / "receipts.jsonl"))
    monkeypatch.setenv("DEBUG_DIR", str(tmp_path / "debug"))
    monkeypatch.setenv("SAVE_DEBUG", "1")
    return tmp_path


def _read_jsonl(path):
    return [json.loads(ln) for ln in path.read_text(encoding="utf-8").splitlines()]


def test_main_on_text_files(env):
    a = env / "acme.txt"
    a.write_text("Acme Store\nTOTAL: $45.99\nDate: 03/14/2024\n", encoding="utf-8")
    b = env / "blank.txt"
    b.write_text("", encoding="utf-8")

    run.main([str(a), str(b), str(env / "missing.txt")])

    rows = _read_jsonl(env / "out" / "receipts.jsonl")
    assert [r["receipt_id"] for r in rows] == ["acme", "blank", "missing"]

    assert rows[0]["merchant"] == "Acme Store"
    assert rows[0]["total"] == 45.99
    assert rows[0]["date"] == "03/14/2024"
    assert rows[0]["date_iso"] == "2024-03-14"

    assert rows[1]["merchant"] == "Unknown Merchant"
    assert rows[1]["total_resolved"] is False
    assert rows[1]["date_iso"] is None

    assert "error" in rows[2]
    assert "merchant" not in rows[2]

    assert (env / "debug" / "acme_ocr.txt").read_text(encoding="utf-8").startswith("Acme Store")


def test_main_with_labels(env, monkeypatch):
    monkeypatch.setenv("TOTAL_STRATEGY", "largest")
    r = env / "diner.txt"
    r.write_text("Joe's Diner\nSUBTOTAL 10.00\nTOTAL 12.50\n", encoding="utf-8")
    labels = env / "labels.json"
    labels.write_text(json.dumps({"diner": {"merchant": "Joe's Diner", "total": "12.50", "date": "01/01/2024"}}), encoding="utf-8")

    run.main(["--labels", str(labels), str(r)])

    out = _read_jsonl(env / "out" / "receipts.jsonl")
    assert out[0]["total"] == 12.50
    evals = {e["field"]: e for e in _read_jsonl(env / "out" / "eval_rows.jsonl")}
    assert evals["merchant"]["ok"] is True
    assert evals["total"]["ok"] is True
    assert evals["date"]["ok"] is False


def test_usage_without_paths(env):
    with pytest.raises(SystemExit) as exc:
        run.main([])
    assert exc.value.code == 2


def test_help_exits_cleanly(env, capsys):
    with pytest.raises(SystemExit) as exc:
        run.main(["--help"])
    assert exc.value.code == 0
    assert "--labels" in capsys.readouterr().out


def test_unknown_flag_is_rejected(env, capsys):
    r = env / "acme.txt"
    r.write_text("Acme Store\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        run.main(["--strict", str(r)])
    assert exc.value.code == 2
    assert "--strict" in capsys.readouterr().err
    assert not (env / "out" / "receipts.jsonl").exists()


def test_arg_parser():
    args = run.build_arg_parser().parse_args(["-l", "labels.json", "a.png", "b.txt"])
    assert args.paths == ["a.png", "b.txt"]
    assert args.labels == "labels.json"
