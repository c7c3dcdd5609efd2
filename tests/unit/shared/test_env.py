from __future__ import annotations

import logging
import os

import pytest

from src.shared.env import load_secret_file_variables


def _unset(monkeypatch: pytest.MonkeyPatch, key: str) -> None:
    monkeypatch.delenv(key, raising=False)


def test_load_secret_file_variables_reads_content(tmp_path, monkeypatch):
    secret_file = tmp_path / "token.txt"
    secret_file.write_text("s3cr3t\n", encoding="utf-8")

    monkeypatch.setenv("CONSUL_HTTP_TOKEN_FILE", str(secret_file))
    _unset(monkeypatch, "CONSUL_HTTP_TOKEN")

    load_secret_file_variables()

    assert os.environ["CONSUL_HTTP_TOKEN"] == "s3cr3t"


def test_load_secret_file_variables_ignores_other_prefixes(tmp_path, monkeypatch):
    secret_file = tmp_path / "secret.txt"
    secret_file.write_text("value", encoding="utf-8")

    monkeypatch.setenv("OTHER_SECRET_FILE", str(secret_file))
    _unset(monkeypatch, "OTHER_SECRET")

    load_secret_file_variables()

    assert "OTHER_SECRET" not in os.environ


def test_load_secret_file_variables_accepts_custom_prefixes(tmp_path, monkeypatch):
    secret_file = tmp_path / "secret.txt"
    secret_file.write_text("value", encoding="utf-8")

    monkeypatch.setenv("APP_SECRET_FILE", str(secret_file))
    _unset(monkeypatch, "APP_SECRET")

    load_secret_file_variables(prefixes=("APP_",))

    assert os.environ["APP_SECRET"] == "value"


def test_load_secret_file_variables_logs_missing_file(monkeypatch, caplog):
    monkeypatch.setenv("CONSUL_MISSING_FILE", "/tmp/does-not-exist-consul-token")
    _unset(monkeypatch, "CONSUL_MISSING")

    with caplog.at_level(logging.WARNING):
        load_secret_file_variables()

    assert "CONSUL_MISSING" not in os.environ
    assert any(
        record.message == "env.secret_file.load_failed" for record in caplog.records
    )


def test_load_secret_file_variables_handles_decode_error(tmp_path, monkeypatch, caplog):
    binary_file = tmp_path / "binary.bin"
    binary_file.write_bytes(b"\xff\xfe\xfd")

    monkeypatch.setenv("CONSUL_BINARY_FILE", str(binary_file))
    _unset(monkeypatch, "CONSUL_BINARY")

    with caplog.at_level(logging.WARNING):
        load_secret_file_variables()

    assert "CONSUL_BINARY" not in os.environ
    assert any(
        record.message == "env.secret_file.load_failed" for record in caplog.records
    )


def test_load_secret_file_variables_skips_existing_target(monkeypatch):
    monkeypatch.setenv("CONSUL_EXISTING", "present")
    monkeypatch.setenv("CONSUL_EXISTING_FILE", "/tmp/ignored")

    load_secret_file_variables()

    assert os.environ["CONSUL_EXISTING"] == "present"


def test_load_secret_file_variables_skips_empty_path(monkeypatch):
    _unset(monkeypatch, "CONSUL_EMPTY")
    monkeypatch.setenv("CONSUL_EMPTY_FILE", "")

    load_secret_file_variables()

    assert "CONSUL_EMPTY" not in os.environ
