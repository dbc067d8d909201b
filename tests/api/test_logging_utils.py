"""Tests for logging setup."""

import logging
from unittest.mock import patch

from api.logging_utils import setup_logging


def test_setup_logging_uses_level():
    with patch("logging.basicConfig") as basic_config:
        setup_logging("debug")

    kwargs = basic_config.call_args.kwargs
    assert kwargs["level"] == logging.DEBUG
    assert "%(name)s" in kwargs["format"]


def test_unknown_level_falls_back_to_info():
    with patch("logging.basicConfig") as basic_config:
        setup_logging("chatty")

    assert basic_config.call_args.kwargs["level"] == logging.INFO
