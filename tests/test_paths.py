"""
Tests for OneDrive root detection.
"""
from pathlib import Path
from keepone.utils.paths import detect_onedrive_root, ONEDRIVE_ENV_VARS


def clear_env(monkeypatch):
    for var in ONEDRIVE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def test_environment_variable_wins(tmp_path, monkeypatch):
    clear_env(monkeypatch)
    onedrive = tmp_path / "OneDrive - Contoso"
    onedrive.mkdir()
    monkeypatch.setenv("OneDriveCommercial", str(onedrive))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path / "nohome"))

    assert detect_onedrive_root() == str(onedrive.resolve())


def test_missing_env_directory_falls_back_to_home(tmp_path, monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setenv("OneDrive", str(tmp_path / "gone"))
    (tmp_path / "OneDrive").mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

    assert detect_onedrive_root() == str((tmp_path / "OneDrive").resolve())


def test_nothing_found(tmp_path, monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

    assert detect_onedrive_root() is None
