# tests/test_cli.py
import sys

import pytest

from sunday_prep import cli
from sunday_prep.shortcuts import ShortcutOptions


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    # keep a developer's .env out of the tests
    monkeypatch.setattr(cli, "load_dotenv", lambda *a, **kw: False)
    for var in ("SUNDAY_TEMPLATE_FILE", "SUNDAY_TEMPLATE_DIR", "SUNDAY_OUTPUT_DIR", "SUNDAY_EXT", "SUNDAY_LEAD_DAYS"):
        monkeypatch.delenv(var, raising=False)


def test_missing_template_exits_1(tmp_path):
    code = cli.main(["prep", "--month", "3", "--year", "2024", "--template-dir", str(tmp_path), "--write"])
    assert code == 1


def test_prep_writes_copies(template_dir, capsys):
    code = cli.main(["prep", "--month", "3", "--year", "2024", "--template-dir", str(template_dir), "--write"])
    assert code == 0
    assert len(list(template_dir.glob("* TODO.pptx"))) == 5
    out = capsys.readouterr().out
    assert "March 2024" in out
    assert "Write mode is enabled" in out


def test_prep_without_write_is_a_dry_run(template_dir, capsys):
    code = cli.main(["prep", "--month", "3", "--year", "2024", "--template-dir", str(template_dir)])
    assert code == 0
    assert list(template_dir.glob("* TODO.pptx")) == []
    assert "use --write to write files" in capsys.readouterr().out


def test_env_overrides_defaults(template_dir, monkeypatch):
    monkeypatch.setenv("SUNDAY_TEMPLATE_DIR", str(template_dir))
    code = cli.main(["prep", "--month", "1", "--year", "2023", "--write"])
    assert code == 0
    assert len(list(template_dir.glob("2023-01-* TODO.pptx"))) == 5


def test_default_month_is_next_weeks(monkeypatch):
    monkeypatch.setattr(cli, "upcoming_month", lambda lead_days=7: (4, 2031))
    args = cli.build_parser().parse_args(["prep"])
    assert (args.month, args.year) == (4, 2031)


def test_invalid_month_exits_2(template_dir):
    code = cli.main(["prep", "--month", "13", "--year", "2024", "--template-dir", str(template_dir)])
    assert code == 2


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 2


def test_shortcut_mode_with_injected_store(template_dir, tmp_path, store):
    out = tmp_path / "Services"
    code = cli.main(
        ["prep", "--month", "3", "--year", "2024", "--template-dir", str(template_dir),
         "--output-dir", str(out), "--mode", "shortcut", "--write"],
        store=store,
    )
    assert code == 0
    assert len(list(template_dir.glob("* TODO.lnk"))) == 5


def test_fix_shortcuts_command(tmp_path, store, read_shortcut):
    store.create(tmp_path / "a.lnk", ShortcutOptions(target="C:\\Users\\alice\\OneDrive\\x.pptx"))
    assert cli.main(["fix-shortcuts", str(tmp_path)], store=store) == 0
    assert read_shortcut(tmp_path / "a.lnk")["target"] == "%OneDriveConsumer%\\x.pptx"


def test_fix_shortcuts_missing_directory(tmp_path, store):
    assert cli.main(["fix-shortcuts", str(tmp_path / "nope")], store=store) == 1


def test_bad_lead_days_exits_2(monkeypatch, capsys):
    monkeypatch.setenv("SUNDAY_LEAD_DAYS", "a week")
    assert cli.main(["prep"]) == 2
    assert "SUNDAY_LEAD_DAYS" in capsys.readouterr().out


def test_lead_days_from_env(monkeypatch):
    monkeypatch.setenv("SUNDAY_LEAD_DAYS", "14")
    assert cli.lead_days() == 14


@pytest.mark.skipif(sys.platform == "win32", reason="shortcuts are available on Windows")
def test_shortcut_write_off_windows_exits_1(template_dir, tmp_path):
    out = tmp_path / "Services"
    code = cli.main(["prep", "--month", "3", "--year", "2024", "--template-dir", str(template_dir),
                     "--output-dir", str(out), "--mode", "shortcut", "--write"])
    assert code == 1
    assert list(template_dir.glob("*.lnk")) == []
    assert not out.exists()
