"""
Global pytest configuration and fixtures.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch, tmp_path):
    """Keep tests away from the developer's real ~/.oidcrp/config.yml.

    HOME points at an empty temp directory and OIDCRP_CONFIG / OIDCRP_DEBUG are
    unset for every test.
    """
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("OIDCRP_CONFIG", raising=False)
    monkeypatch.delenv("OIDCRP_DEBUG", raising=False)
    yield


@pytest.fixture(autouse=True)
def restore_root_logger():
    """CLI commands reconfigure the root logger; undo that after each test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
