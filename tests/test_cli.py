import json
from pathlib import Path

import pytest
from openpyxl import load_workbook
from typer.testing import CliRunner

from sheetflow.sdk import config as sdk_config
from sheetflow.sdk import options
from sheetflow.sdk.cli import main

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(options.Path, "home", classmethod(lambda cls: home))
    monkeypatch.setattr(sdk_config, "DEFAULT_CONFIG_PATH", home / ".sheetflow" / "config.toml")
    monkeypatch.setattr(main, "DEFAULT_CONFIG_PATH", home / ".sheetflow" / "config.toml")
    for name in ["SHEETFLOW_OUTPUT_FORMAT", "SHEETFLOW_OUTPUT_DIR", "SHEETFLOW_OPTIONS_FILE"]:
        monkeypatch.delenv(name, raising=False)
    return home


def test_convert_print(tmp_path: Path):
    src = tmp_path / "people.txt"
    src.write_text("Name: Alice\nAge: 30\n\nName: Bob\nAge: 25", encoding="utf-8")
    result = runner.invoke(main.app, ["convert", str(src)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [{"name": "Alice", "age": "30"}, {"name": "Bob", "age": "25"}]


def test_convert_json_file(tmp_path: Path):
    src = tmp_path / "data.json"
    src.write_text('[{"id": 1, "meta": {"ok": true}}, {"id": 2}]', encoding="utf-8")
    out = tmp_path / "out.json"
    result = runner.invoke(main.app, ["convert", str(src), "--output-format", "json", "--output-path", str(out)])
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8")) == [
        {"id": "1", "meta_ok": "true"},
        {"id": "2", "meta_ok": ""},
    ]


def test_convert_excel(tmp_path: Path):
    src = tmp_path / "rows.json"
    src.write_text('[["Name", "Age"], ["Alice", "30"]]', encoding="utf-8")
    out = tmp_path / "rows.xlsx"
    result = runner.invoke(
        main.app,
        ["convert", str(src), "--output-format", "excel", "--output-path", str(out), "--sheet-name", "People"],
    )
    assert result.exit_code == 0, result.output
    ws = load_workbook(out)["People"]
    assert list(ws.iter_rows(values_only=True)) == [("name", "age"), ("Alice", "30")]


def test_convert_excel_multiple_inputs_get_suffixes(tmp_path: Path):
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_text("k: 1", encoding="utf-8")
    second.write_text("k: 2", encoding="utf-8")
    out = tmp_path / "book.xlsx"
    result = runner.invoke(
        main.app,
        ["convert", str(first), str(second), "--output-format", "excel", "--output-path", str(out)],
    )
    assert result.exit_code == 0, result.output
    assert (tmp_path / "book_1.xlsx").exists()
    assert (tmp_path / "book_2.xlsx").exists()


def test_convert_without_structure_fails(tmp_path: Path):
    src = tmp_path / "prose.txt"
    src.write_text("Nothing structured lives here.", encoding="utf-8")
    result = runner.invoke(main.app, ["convert", str(src)])
    assert result.exit_code == 1
    assert "Could not parse the document" in result.output


def test_convert_invalid_format(tmp_path: Path):
    src = tmp_path / "k.txt"
    src.write_text("k: v", encoding="utf-8")
    result = runner.invoke(main.app, ["convert", str(src), "--output-format", "pdf"])
    assert result.exit_code == 1
    assert "Invalid output format" in result.output


def test_init_writes_config(isolated):
    result = runner.invoke(main.app, ["init", "--default-output-format", "excel", "--sheet-name", "Rows"])
    assert result.exit_code == 0, result.output
    cfg = sdk_config.load_config(isolated / ".sheetflow" / "config.toml")
    assert cfg.default_output_format == "excel"
    assert cfg.sheet_name == "Rows"


def test_init_escapes_quotes_and_backslashes(isolated, tmp_path: Path):
    out_dir = tmp_path / 'we"ird\\dir'
    result = runner.invoke(
        main.app,
        ["init", "--default-output-dir", str(out_dir), "--sheet-name", 'My "Rows"'],
    )
    assert result.exit_code == 0, result.output
    cfg = sdk_config.load_config(isolated / ".sheetflow" / "config.toml")
    assert cfg.default_output_dir == out_dir
    assert cfg.sheet_name == 'My "Rows"'


def test_convert_print_keeps_inputs_with_same_name(tmp_path: Path):
    (tmp_path / "x").mkdir()
    (tmp_path / "y").mkdir()
    first = tmp_path / "x" / "data.json"
    second = tmp_path / "y" / "data.json"
    first.write_text('{"k": "1"}', encoding="utf-8")
    second.write_text('{"k": "2"}', encoding="utf-8")
    result = runner.invoke(main.app, ["convert", str(first), str(second)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {str(first): [{"k": "1"}], str(second): [{"k": "2"}]}


def test_convert_excel_same_stem_gets_suffixes(tmp_path: Path):
    first = tmp_path / "data.json"
    second = tmp_path / "data.txt"
    first.write_text('{"k": "1"}', encoding="utf-8")
    second.write_text("k: 2", encoding="utf-8")
    out_dir = tmp_path / "books"
    result = runner.invoke(
        main.app,
        ["convert", str(first), str(second), "--output-format", "excel", "--output-path", str(out_dir)],
    )
    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out_dir.iterdir()) == ["data_1.xlsx", "data_2.xlsx"]
    assert list(load_workbook(out_dir / "data_2.xlsx").active.values) == [("k",), ("2",)]


def test_convert_excel_strips_control_characters(tmp_path: Path):
    src = tmp_path / "in.json"
    src.write_text('{"a": "bell\\u0007"}', encoding="utf-8")
    out = tmp_path / "in.xlsx"
    result = runner.invoke(main.app, ["convert", str(src), "--output-format", "excel", "--output-path", str(out)])
    assert result.exit_code == 0, result.output
    assert list(load_workbook(out).active.values) == [("a",), ("bell",)]
