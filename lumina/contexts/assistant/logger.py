"""
Assistant context logger.

Provides logging interface for the chat pipeline with automatic [chat] prefix.
All assistant modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from lumina.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[chat]"


def setup_chat_logger(log_dir: Path, provider_name: str, console_level: str = "INFO") -> Path:
    """
    Setup logger for a chat session.

    Args:
        log_dir: Directory for this chat session
        provider_name: Provider/model used by the session, recorded in provenance
        console_level: Minimum level echoed to the terminal

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="chat",
        log_dir=log_dir,
        extra_provenance={"LLM": provider_name},
        console_level=console_level,
    )


# Wrapper functions with automatic [chat] prefix


def _log_info(message: str) -> None:
    """Log info message with [chat] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [chat] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [chat] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [chat] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [chat] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level chat-specific logging helpers


def log_submission_start(instruction: str, history_length: int) -> None:
    """Log an accepted instruction."""
    _log_info(f"Instruction received ({len(instruction)} chars, history: {history_length})")
    _log_debug(f"  Instruction: {instruction}")


def log_submission_rejected(reason: str) -> None:
    _log_debug(f"Instruction ignored: {reason}")


def log_model_call(provider_name: str, response, elapsed_time: float) -> None:
    """Log a completed model round-trip (response is an LLMResponse)."""
    _log_info(
        f"{provider_name} replied in {elapsed_time:.2f}s "
        f"({response.input_tokens} in / {response.output_tokens} out tokens)"
    )


def log_merge_outcome(outcome, elapsed_time: float) -> None:
    """
    Log how a reply was resolved.

    Args:
        outcome: MergeOutcome from ReplyMerger
        elapsed_time: Time from submission to outcome
    """
    if outcome.committed:
        _log_success(f"Document updated ({elapsed_time:.2f}s)")
    else:
        _log_warning(f"Document kept unchanged ({elapsed_time:.2f}s)")

    if outcome.error:
        _log_error(f"  {type(outcome.error).__name__}: {outcome.error.message}")
        if outcome.error.detail:
            logger.opt(raw=True).debug(f"{outcome.error.detail}\n")
