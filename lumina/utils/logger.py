"""
Logger setup for Lumina entry points.

Only scripts configure sinks; library modules log through the prefixed
wrappers in contexts/{context}/logger.py and never add or remove handlers.
"""

import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

import lumina

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[dict] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Send everything to a per-session log file and console_level and above to stderr.

    The console sink uses stderr so log lines stay out of the way of anything a
    script prints to stdout (REPL replies, written paths).

    Args:
        context_name: Log file stem (e.g., "chat")
        log_dir: Directory for this logging session
        extra_provenance: Extra key-value pairs for the provenance header
        console_level: Minimum level shown on the terminal. Interactive
            scripts pass "WARNING" to keep the prompt readable

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="chat",
            log_dir=Path("outs/logs/chat_20260101_120000"),
            extra_provenance={"LLM": "openai/gpt-4o-mini"},
            console_level="WARNING",
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(log_file, extra_provenance)

    return log_file


def log_provenance(log_file: Path, extra_context: Optional[dict] = None) -> None:
    """Write the session header: Lumina version, command line and runtime."""
    logger.debug("=" * 80)
    logger.info(f"Lumina {lumina.__version__} session log: {log_file}")
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)
