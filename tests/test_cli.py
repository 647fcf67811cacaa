import json

import pytest

from municipal_assessments.__main__ import main

from conftest import FakeResponse, FakeSession


def _json_lines(out):
    return [json.loads(line) for line in out.splitlines() if line.startswith(("{", "["))]


def test_cli_key_lookup(sample_csv, capsys):
    assert main(["--csv", str(sample_csv), "--account", "1179381"]) == 0
    lines = _json_lines(capsys.readouterr().out)
    assert lines[0]["account_number"] == 1179381
    assert lines[-1] == {"source": "file", "results": 1, "displayed": 1, "cached": 5}


def test_cli_multi_filter_with_stats(sample_csv, capsys):
    main(
        [
            "--csv",
            str(sample_csv),
            "--neighbourhood",
            "granville",
            "--stats",
        ]
    )
    lines = _json_lines(capsys.readouterr().out)
    rows = [line for line in lines if "account_number" in line]
    assert [r["account_number"] for r in rows] == [1179381, 9990001]
    stats = next(line["stats"] for line in lines if "stats" in line)
    assert stats["n"] == 2
    assert stats["min"] == "$100,000"
    assert stats["max"] == "$200,000"


def test_cli_no_results_has_null_stats(sample_csv, capsys):
    main(["--csv", str(sample_csv), "--neighbourhood", "nowhere", "--stats"])
    lines = _json_lines(capsys.readouterr().out)
    assert {"stats": None} in lines
    assert lines[-1]["results"] == 0


def test_cli_requires_a_filter(sample_csv):
    with pytest.raises(SystemExit):
        main(["--csv", str(sample_csv)])


def test_cli_bad_account_is_usage_error(sample_csv):
    with pytest.raises(SystemExit):
        main(["--csv", str(sample_csv), "--account", "abc"])


def test_cli_limit_and_csv_output(sample_csv, tmp_path, capsys):
    out = tmp_path / "out" / "rows.csv"
    main(["--csv", str(sample_csv), "--all", "--limit", "2", "--format", "csv", "--output", str(out)])
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("account_number,suite,house_number")
    assert len(lines) == 3
    summary = _json_lines(capsys.readouterr().out)[-1]
    assert summary["results"] == 5
    assert summary["displayed"] == 2


def test_cli_missing_file_is_not_fatal(tmp_path, capsys):
    assert main(["--csv", str(tmp_path / "nope.csv"), "--all"]) == 0
    captured = capsys.readouterr()
    assert _json_lines(captured.out)[-1]["cached"] == 0
    assert "cannot open" in captured.err


def test_cli_remote_source_closes_its_session(monkeypatch, api_page, capsys):
    session = FakeSession([FakeResponse(api_page)])
    monkeypatch.setattr("municipal_assessments.ingest.socrata.requests.Session", lambda: session)

    assert main(["--source", "remote", "--api-url", "https://example.invalid/r.json", "--address", "104streetnw"]) == 0
    lines = _json_lines(capsys.readouterr().out)
    assert lines[0]["account_number"] == 1179381
    assert lines[-1]["source"] == "remote"
    assert session.calls[0]["url"].startswith("https://example.invalid/r.json?")
    assert session.closed


def test_cli_closes_session_on_usage_error(monkeypatch):
    session = FakeSession()
    monkeypatch.setattr("municipal_assessments.ingest.socrata.requests.Session", lambda: session)

    with pytest.raises(SystemExit):
        main(["--source", "remote", "--account", "12ab"])
    assert session.closed
    assert session.calls == []
