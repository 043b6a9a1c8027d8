from __future__ import annotations

import logging

import pytest

from conftest import tar_member
from toolfetch import __version__
from toolfetch.cli import main as cli_main
from toolfetch.common.config import ToolfetchSettings
from toolfetch.common.constants import DEFAULT_CHUNK_SIZE, DEFAULT_TOOLCHAIN_DIR, ExitCodes
from toolfetch.common.logging_config import configure_logging


def _sample_archive(write_archive):
    return write_archive([
        tar_member("bin/", typeflag=b"5", mode=0o755),
        tar_member("bin/tool", b"#!/bin/sh\n", mode=0o755),
        tar_member("tool", typeflag=b"2", linkname="bin/tool"),
    ])


def test_no_arguments_prints_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli_main([])
    assert excinfo.value.code == ExitCodes.OK
    assert "toolfetch" in capsys.readouterr().out


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli_main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_extract_command(write_archive, tmp_path, capsys):
    archive = _sample_archive(write_archive)
    dest = tmp_path / "toolchain"

    cli_main(["extract", str(archive), str(dest)])

    assert (dest / "bin" / "tool").read_bytes() == b"#!/bin/sh\n"
    out = capsys.readouterr().out
    assert "Extracted 3 entries" in out
    assert "1 directories, 1 files, 1 symlinks" in out


def test_extract_defaults_to_toolchain_dir(write_archive, tmp_path, monkeypatch):
    archive = _sample_archive(write_archive)
    toolchain = tmp_path / "embedded"
    monkeypatch.setenv("TOOLFETCH_TOOLCHAIN_DIR", str(toolchain))

    cli_main(["extract", str(archive)])

    assert (toolchain / "tool").is_symlink()


def test_extract_reports_skipped_entries(write_archive, tmp_path, capsys):
    archive = write_archive([
        tar_member("dev/fifo", typeflag=b"6"),
        tar_member("ok.txt", b"ok"),
    ])

    cli_main(["extract", str(archive), str(tmp_path / "dest")])

    assert "skipped dev/fifo (type '6')" in capsys.readouterr().out


def test_extract_corrupt_archive_exit_code(tmp_path, capsys):
    archive = tmp_path / "broken.tar.gz"
    archive.write_bytes(b"garbage")

    with pytest.raises(SystemExit) as excinfo:
        cli_main(["extract", str(archive), str(tmp_path / "dest")])

    assert excinfo.value.code == ExitCodes.CORRUPT_STREAM
    assert "Error: Archive is not a valid gzip stream" in capsys.readouterr().err


def test_extract_unsafe_path_exit_code(write_archive, tmp_path, capsys):
    archive = write_archive([tar_member("../escape.txt", b"x")])

    with pytest.raises(SystemExit) as excinfo:
        cli_main(["extract", str(archive), str(tmp_path / "dest")])

    assert excinfo.value.code == ExitCodes.UNSAFE_ENTRY_PATH
    assert not (tmp_path / "escape.txt").exists()


def test_extract_missing_archive_exit_code(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli_main(["extract", str(tmp_path / "nope.tar.gz"), str(tmp_path / "dest")])
    assert excinfo.value.code == ExitCodes.FILESYSTEM_ERROR


def test_list_command(write_archive, capsys):
    archive = _sample_archive(write_archive)

    cli_main(["list", str(archive)])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("d 0755")
    assert lines[1].startswith("- 0755")
    assert lines[1].endswith("bin/tool")
    assert lines[2].endswith("tool -> bin/tool")


def test_settings_defaults():
    settings = ToolfetchSettings.from_env({})
    assert settings.toolchain_dir == DEFAULT_TOOLCHAIN_DIR
    assert settings.chunk_size == DEFAULT_CHUNK_SIZE


def test_settings_from_environment():
    settings = ToolfetchSettings.from_env({
        "TOOLFETCH_TOOLCHAIN_DIR": "/srv/tools",
        "TOOLFETCH_CHUNK_SIZE": "4096",
    })
    assert settings.toolchain_dir == "/srv/tools"
    assert settings.chunk_size == 4096


@pytest.mark.parametrize("raw", ["lots", "0", "-5"])
def test_settings_invalid_chunk_size_falls_back(raw):
    settings = ToolfetchSettings.from_env({"TOOLFETCH_CHUNK_SIZE": raw})
    assert settings.chunk_size == DEFAULT_CHUNK_SIZE


def test_configure_logging_invalid_level_warns(monkeypatch, caplog):
    monkeypatch.setenv("TOOLFETCH_LOG_LEVEL", "VERBOSE")
    caplog.set_level(logging.WARNING, logger="toolfetch")

    configure_logging()

    assert "Invalid log level 'VERBOSE'" in caplog.text
