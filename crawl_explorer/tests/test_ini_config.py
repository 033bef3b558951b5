from __future__ import annotations

from pathlib import Path

import pytest

from crawl_explorer.config.ini_config import IniConfig


def _write_ini(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


def test_load_settings_with_defaults(tmp_path: Path):
    ini = _write_ini(tmp_path / "app.ini", "[paths]\nreport_json = reports/results.json\n")

    settings = IniConfig(ini).load_settings()

    # relative to the INI file, not the cwd
    assert settings.report_json == (tmp_path / "reports" / "results.json").resolve()
    assert settings.title_suffix == "Crawl Explorer"
    assert settings.flask_host == "127.0.0.1"
    assert settings.flask_port == 5000
    assert settings.flask_debug is False
    assert settings.log_level == "INFO"


def test_load_settings_reads_all_sections(tmp_path: Path):
    report = tmp_path / "r.json"
    ini = _write_ini(
        tmp_path / "app.ini",
        f"[path]\nreport_json = {report}\n"
        "[ui]\ntitle_suffix = Site Tests\n"
        "[flask]\nhost = 0.0.0.0\nport = 8080\ndebug = true\n"
        "[logging]\nlevel = debug\n",
    )

    settings = IniConfig(ini).load_settings()

    assert settings.report_json == report.resolve()
    assert settings.title_suffix == "Site Tests"
    assert settings.flask_host == "0.0.0.0"
    assert settings.flask_port == 8080
    assert settings.flask_debug is True
    assert settings.log_level == "DEBUG"


def test_missing_ini_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        IniConfig(tmp_path / "missing.ini")


def test_missing_report_path_raises(tmp_path: Path):
    ini = _write_ini(tmp_path / "app.ini", "[ui]\ntitle_suffix = x\n")
    with pytest.raises(FileNotFoundError):
        IniConfig(ini).load_settings()


def test_from_env_uses_app_ini(tmp_path: Path, monkeypatch):
    ini = _write_ini(tmp_path / "custom.ini", "[paths]\nreport_json = r.json\n")
    monkeypatch.setenv("APP_INI", str(ini))

    cfg = IniConfig.from_env_or_default()

    assert cfg.ini_path == ini
    assert cfg.load_settings().report_json == (tmp_path / "r.json").resolve()
