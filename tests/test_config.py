"""Tests for environment settings."""

from __future__ import annotations

import logging

from linkedin_import.config import env_float


def test_env_float_reads_numbers(monkeypatch) -> None:
    monkeypatch.setenv("LINKEDIN_IMPORT_TIMEOUT", "2.5")
    assert env_float("LINKEDIN_IMPORT_TIMEOUT", 10.0) == 2.5


def test_env_float_falls_back_on_bad_values(monkeypatch, caplog) -> None:
    caplog.set_level(logging.WARNING, logger="linkedin_import.config")
    monkeypatch.setenv("LINKEDIN_IMPORT_TIMEOUT", "soon")
    assert env_float("LINKEDIN_IMPORT_TIMEOUT", 10.0) == 10.0
    assert "LINKEDIN_IMPORT_TIMEOUT" in caplog.text

    monkeypatch.setenv("LINKEDIN_IMPORT_TIMEOUT", "  ")
    assert env_float("LINKEDIN_IMPORT_TIMEOUT", 10.0) == 10.0
