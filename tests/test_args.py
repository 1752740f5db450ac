"""
Tests for argument parsing in args.py
"""
from pathlib import Path
from unittest.mock import patch

import pytest

from mediasort.args import get_config, get_default_info, get_default_value
from mediasort.models import AppConfig, RunConfig


def test_get_default_value():
    """Test extraction of default values from the config dataclasses."""
    assert get_default_value("include_subfolders") is True
    assert get_default_value("copy_errors") is False
    assert get_default_value("delete_source") is False
    assert get_default_value("directory_template") == "YYYY-MM-DD"
    assert get_default_value("indent", AppConfig) == "    "


def test_get_default_info():
    """Test generation of default info strings for help messages."""
    result = get_default_info("test_value")
    assert "default:" in result
    assert "test_value" in result


def test_get_config_defaults(tmp_path):
    """Only source and destination given: everything else is default."""
    with patch("sys.argv", ["mediasort", str(tmp_path / "in"), str(tmp_path / "out")]):
        cfg = get_config()

    assert isinstance(cfg, AppConfig)
    assert isinstance(cfg.run, RunConfig)
    assert cfg.run.source_dir == (tmp_path / "in").resolve()
    assert cfg.run.dest_dir == (tmp_path / "out").resolve()
    assert cfg.run.error_dir is None
    assert cfg.run.include_subfolders is True
    assert cfg.run.copy_errors is False
    assert cfg.run.delete_source is False
    assert cfg.run.directory_template == "YYYY-MM-DD"
    assert cfg.verbose is False
    assert cfg.quiet is False
    assert cfg.yes is False


def test_get_config_all_options(tmp_path):
    argv = [
        "mediasort",
        "-c",
        "-e", str(tmp_path / "err"),
        "-N",
        "-x",
        "-d", "YYYY/MM",
        "-y",
        "-V",
        "-E",
        "-S",
        str(tmp_path / "in"),
        str(tmp_path / "out"),
    ]
    with patch("sys.argv", argv):
        cfg = get_config()

    assert cfg.run.copy_errors is True
    assert cfg.run.error_dir == (tmp_path / "err").resolve()
    assert cfg.run.include_subfolders is False
    assert cfg.run.delete_source is True
    assert cfg.run.directory_template == "YYYY/MM"
    assert cfg.yes is True
    assert cfg.verbose is True
    assert cfg.show_errors is True
    assert cfg.show_settings is True


@patch("sys.argv", ["mediasort", "-d", "DD-MM-YYYY", "in", "out"])
def test_get_config_rejects_unknown_template():
    with pytest.raises(SystemExit) as exc_info:
        get_config()
    assert exc_info.value.code == 2


@patch("sys.argv", ["mediasort", "only-source"])
def test_get_config_requires_destination():
    with pytest.raises(SystemExit) as exc_info:
        get_config()
    assert exc_info.value.code == 2


@patch("sys.argv", ["mediasort", "-v"])
def test_get_config_version_without_directories(tmp_path):
    """--version works without source and destination."""
    with patch("mediasort.args.os.getcwd", return_value=str(tmp_path)):
        cfg = get_config()

    assert cfg.show_version is True
    assert cfg.run.source_dir == Path(tmp_path).resolve()


@patch("sys.argv", ["mediasort", "-q", "in", "out"])
def test_get_config_quiet_mode():
    cfg = get_config()
    assert cfg.quiet is True
