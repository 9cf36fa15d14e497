import logging
import sys

from vhisp.logging_config import setup_logging


def test_setup_logging_targets_stderr(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    setup_logging("debug")
    assert calls[0]["level"] == logging.DEBUG
    assert calls[0]["stream"] is sys.stderr


def test_unknown_level_falls_back_to_warning(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    setup_logging("chatty")
    assert calls[0]["level"] == logging.WARNING
