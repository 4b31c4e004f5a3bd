"""
Assistant Context

Responsibilities:
- Sends the current document and a natural-language instruction to a language model
- Validates the model reply and decides the next document (full replacement or fallback)
- Runs the conversation: message history, one request in flight, document publication

Owns: Chat mutation pipeline, message history
Never: Patches documents field by field or lets pipeline errors reach the caller
"""

from lumina.contexts.assistant.exceptions import (
    ChatPipelineError,
    MalformedReplyError,
    ModelInvocationError,
    ValidationRejected,
)
from lumina.contexts.assistant.interpreter import InstructionInterpreter
from lumina.contexts.assistant.merger import MergeOutcome, ReplyMerger
from lumina.contexts.assistant.session import ChatSession, SessionState, build_session

__all__ = [
    # Pipeline stages
    "InstructionInterpreter",
    "ReplyMerger",
    "MergeOutcome",
    # Session
    "ChatSession",
    "SessionState",
    "build_session",
    # Errors
    "ChatPipelineError",
    "ModelInvocationError",
    "MalformedReplyError",
    "ValidationRejected",
]
