"""Unit tests for session logger setup."""

import sys

import pytest
from loguru import logger

import lumina
from lumina.contexts.assistant.logger import setup_chat_logger
from lumina.utils.logger import setup_logger


@pytest.fixture(autouse=True)
def restore_default_sink():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_file_gets_everything_console_gets_level(tmp_path, capsys):
    log_file = setup_logger("chat", tmp_path / "session", {"LLM": "scripted/test"}, console_level="WARNING")
    logger.info("[chat] Document updated")
    logger.warning("[chat] Document kept unchanged")
    logger.remove()

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Document kept unchanged" in captured.err
    assert "Document updated" not in captured.err
    assert "Lumina" not in captured.err

    content = log_file.read_text(encoding="utf-8")
    assert log_file == tmp_path / "session" / "chat.log"
    assert f"Lumina {lumina.__version__} session log" in content
    assert "LLM: scripted/test" in content
    assert "Document updated" in content
    assert "Document kept unchanged" in content


@pytest.mark.unit
def test_chat_logger_keeps_stdout_clean(tmp_path, capsys):
    setup_chat_logger(tmp_path, "scripted/test")
    logger.info("[chat] Instruction received")
    logger.remove()

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Instruction received" in captured.err
