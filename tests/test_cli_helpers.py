from __future__ import annotations

import json
from pathlib import Path

import idna
import pytest

from glyphsquat.cli import _effective_settings, _load_domains_from_file, _normalize_domain_input, build_parser, main


def _data_dir(tmp_path: Path) -> Path:
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "homoglyphs.json").write_text(json.dumps({"a": ["а"]}, ensure_ascii=False), encoding="utf-8")
    (data_dir / "homoglyphs.txt").write_text("# groups\noо\n", encoding="utf-8")
    return data_dir


def test_load_domains_from_file_strips_empty_lines(tmp_path: Path):
    source = tmp_path / "domains.txt"
    source.write_text("\nexample.com\n\nwww.test.org\n", encoding="utf-8")
    assert _load_domains_from_file(str(source)) == ["example.com", "www.test.org"]


def test_normalize_domain_input_accepts_url_and_plain_domain():
    assert _normalize_domain_input("https://www.Apple.com/path?q=1") == "www.apple.com"
    assert _normalize_domain_input(" Sub.Example.com. ") == "sub.example.com"
    assert _normalize_domain_input("аpple.com") == "аpple.com"
    assert _normalize_domain_input("not a domain") is None
    assert _normalize_domain_input("") is None


def test_cli_flags_override_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("GLYPHSQUAT_MAX_DEPTH", "3")
    monkeypatch.setenv("GLYPHSQUAT_WORKERS", "5")
    args = build_parser().parse_args(["mutate", "apple.com", "--depth", "1", "--limit", "10", "--data-dir", str(tmp_path)])
    settings = _effective_settings(args)
    assert settings.max_depth == 1
    assert settings.max_candidates == 10
    assert settings.workers == 5
    assert settings.data_dir == tmp_path


def test_decode_json_output(monkeypatch, tmp_path: Path, capsys):
    monkeypatch.setenv("GLYPHSQUAT_DATA_DIR", str(_data_dir(tmp_path)))
    main(["decode", "аpple.com", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["domain"] == "аpple.com"
    assert payload["candidates"][0] == "аpple.com"
    assert "apple.com" in payload["candidates"]


def test_mutate_json_output(monkeypatch, tmp_path: Path, capsys):
    monkeypatch.setenv("GLYPHSQUAT_DATA_DIR", str(_data_dir(tmp_path)))
    main(["mutate", "https://apple.com/", "--depth", "1", "--limit", "0", "--unicode", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["domain"] == "apple.com"
    assert payload["depth"] == 1
    assert payload["truncated"] is False
    ace = idna.encode("аpple.com").decode("ascii")
    assert {"ace": ace, "unicode": "аpple.com"} in payload["mutations"]


def test_tables_command_reports_summary(tmp_path: Path, capsys):
    data_dir = _data_dir(tmp_path)
    main(["tables", "--data-dir", str(data_dir), "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["data_dir"] == str(data_dir)
    assert payload["forward_keys"] > 0
    assert payload["reverse_keys"] > 0


def test_table_errors_exit_with_status_one(tmp_path: Path):
    with pytest.raises(SystemExit) as exc:
        main(["tables", "--data-dir", str(tmp_path)])
    assert exc.value.code == 1


def test_label_command_writes_json_lines(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("GLYPHSQUAT_DATA_DIR", str(_data_dir(tmp_path)))
    ace = idna.encode("аpple.com").decode("ascii")
    names = tmp_path / "names.txt"
    names.write_text(f"example.org\napple.com\n{ace}\n", encoding="utf-8")
    protected = tmp_path / "protected.txt"
    protected.write_text("Apple.com\n", encoding="utf-8")
    out = tmp_path / "out.jsonl"

    main(["label", "-f", str(names), "--domains", str(protected), "-o", str(out), "--workers", "2", "--json"])

    records = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert records == [{"domain": ace, "labels": ["homograph.decode", "homograph.mutation"]}]


def test_missing_command_prints_help_and_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2
    assert "glyphsquat" in capsys.readouterr().err
