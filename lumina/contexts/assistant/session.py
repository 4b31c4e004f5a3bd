"""
Conversation session.

Owns the message history and drives one instruction at a time through
interpreter -> merger -> document store.

States:
    IDLE -> SENDING -> IDLE, on success and on failure alike.

Each accepted submission appends exactly one user message and one assistant
message, and publishes exactly one Document replacement (the previous Document
when the reply was unusable). Pipeline errors become the assistant message;
they never propagate to the caller.
"""

import time
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from lumina.contexts.assistant.exceptions import ModelInvocationError
from lumina.contexts.assistant.interpreter import InstructionInterpreter
from lumina.contexts.assistant.logger import (
    _log_debug,
    _log_info,
    log_merge_outcome,
    log_submission_rejected,
    log_submission_start,
)
from lumina.contexts.assistant.merger import ReplyMerger
from lumina.contexts.document.editing import attach_photo, encode_photo, photo_from_file
from lumina.contexts.document.ids import IdGenerator
from lumina.contexts.document.model import Document, Message
from lumina.contexts.document.store import DocumentStore
from lumina.utils.llm import LLMProvider, get_provider


class SessionState(Enum):
    IDLE = "idle"
    SENDING = "sending"


class ChatSession:
    """
    Stateful chat loop over a DocumentStore.

    At most one request is in flight: submit() while SENDING is ignored, not
    queued. History is append-only and in submission order.

    Example:
        session = ChatSession(InstructionInterpreter(provider), ReplyMerger(), store)
        reply = await session.submit("Change la couleur en bleu nuit")
        print(reply.content, store.current.theme.primary_color)
    """

    def __init__(
        self,
        interpreter: InstructionInterpreter,
        merger: ReplyMerger,
        store: DocumentStore,
        ids: Optional[IdGenerator] = None,
        greeting: Optional[str] = None,
    ):
        self.interpreter = interpreter
        self.merger = merger
        self.store = store
        self.ids = ids or IdGenerator()
        self._state = SessionState.IDLE
        self._messages: List[Message] = []

        if greeting:
            self._append("assistant", greeting)

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_sending(self) -> bool:
        return self._state is SessionState.SENDING

    @property
    def messages(self) -> Tuple[Message, ...]:
        """Snapshot of the history, oldest first."""
        return tuple(self._messages)

    def _append(self, role: str, content: str) -> Message:
        message = Message(id=self.ids.new_id(), role=role, content=content)
        self._messages.append(message)
        return message

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    async def submit(self, instruction: str) -> Optional[Message]:
        """
        Apply a natural-language instruction to the current Document.

        Args:
            instruction: User command

        Returns:
            The assistant message, or None if the instruction was ignored
            (blank, or a request is already in flight)
        """
        if not isinstance(instruction, str) or not instruction.strip():
            log_submission_rejected("empty instruction")
            return None
        if self.is_sending:
            log_submission_rejected("a request is already in flight")
            return None

        log_submission_start(instruction, len(self._messages))
        self._append("user", instruction)
        self._state = SessionState.SENDING

        previous = self.store.current
        start_time = time.time()
        try:
            try:
                raw_reply = await self.interpreter.interpret(instruction, previous)
            except ModelInvocationError as e:
                outcome = self.merger.recover(previous, e)
            else:
                outcome = self.merger.merge(raw_reply, previous)

            log_merge_outcome(outcome, time.time() - start_time)

            reply = self._append("assistant", outcome.confirmation)
            self.store.replace(outcome.document, source="chat")
        finally:
            self._state = SessionState.IDLE

        return reply

    def attach_photo(self, data: bytes, mime_type: str) -> Document:
        """
        Set the profile photo from raw image bytes.

        Synchronous and local: no model call, no message.

        Raises:
            ValueError: If data is empty or not an image type
        """
        document = attach_photo(self.store.current, encode_photo(data, mime_type))
        self.store.replace(document, source="photo")
        _log_debug(f"Photo attached ({len(data)} bytes, {mime_type})")
        return document

    def attach_photo_file(self, path: Path) -> Document:
        """Set the profile photo from an image file."""
        document = attach_photo(self.store.current, photo_from_file(path))
        self.store.replace(document, source="photo")
        _log_debug(f"Photo attached from {path}")
        return document


def build_session(
    settings: Dict[str, Any],
    store: DocumentStore,
    provider: Optional[LLMProvider] = None,
    ids: Optional[IdGenerator] = None,
) -> ChatSession:
    """
    Wire a ChatSession from settings (see lumina.utils.config.load_settings).

    Args:
        settings: Loaded settings dict
        store: Document store the session publishes to
        provider: Provider to use; built from settings["llm"] when omitted
        ids: Shared id generator (e.g. also used by the form editor)
    """
    if provider is None:
        llm = settings["llm"]
        provider = get_provider(
            provider_name=llm["provider"],
            model=llm.get("model"),
            temperature=llm.get("temperature", 0.2),
            max_tokens=llm.get("max_tokens", 4096),
        )

    assistant = settings["assistant"]
    _log_info(f"Chat session using {provider.name}")

    return ChatSession(
        interpreter=InstructionInterpreter(provider),
        merger=ReplyMerger(
            fallback_confirmation=assistant["fallback_confirmation"],
            failure_message=assistant["failure_message"],
        ),
        store=store,
        ids=ids,
        greeting=assistant.get("greeting"),
    )
