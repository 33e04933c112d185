"""Tests for the logging setup."""

import logging

import pytest

from cpaas_admin_api.app.core.logging_config import _file_handler, setup_logging


@pytest.fixture
def root_level():
    root = logging.getLogger()
    previous = root.level
    yield root
    root.setLevel(previous)


def test_repeated_setup_only_changes_the_level(root_level):
    setup_logging("INFO")
    handlers = list(root_level.handlers)

    setup_logging("debug")

    assert root_level.level == logging.DEBUG
    assert root_level.handlers == handlers


def test_unknown_level_falls_back_to_info(root_level):
    setup_logging("chatty")

    assert root_level.level == logging.INFO


def test_log_file_directories_are_created(tmp_path):
    target = tmp_path / "var" / "log" / "admin.log"
    handler = _file_handler(str(target))
    try:
        assert target.parent.is_dir()
    finally:
        handler.close()
