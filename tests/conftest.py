"""Shared fixtures: sample document, scripted LLM provider, reply builders."""

import json
import threading
from typing import Callable, List, Optional, Union

import pytest

from lumina.contexts.assistant import ChatSession, InstructionInterpreter, ReplyMerger
from lumina.contexts.document import Document, DocumentStore, load_document
from lumina.utils.config import SAMPLE_DOCUMENT_PATH
from lumina.utils.llm import LLMProvider, LLMResponse

GREETING = "Bonjour ! Que voulez-vous changer ?"
FALLBACK_CONFIRMATION = "J'ai mis à jour votre CV."
FAILURE_MESSAGE = "Désolé, j'ai rencontré une erreur lors de la mise à jour de votre CV."


class _NeverRaised(Exception):
    pass


Reply = Union[str, Callable[[str], str]]


class ScriptedProvider(LLMProvider):
    """
    LLMProvider that returns scripted replies instead of calling a network API.

    Args:
        replies: Reply texts (or callables taking the user prompt) returned in order
        error: Exception raised by every call instead of replying
        gate: Event each call waits on before replying, to hold a request in flight
    """

    _provider_prefix = "scripted"
    _retryable_exception = _NeverRaised
    _retry_message = "never"

    def __init__(
        self,
        replies: Optional[List[Reply]] = None,
        error: Optional[Exception] = None,
        gate: Optional[threading.Event] = None,
    ):
        self.replies = list(replies or [])
        self.error = error
        self.gate = gate
        self.calls = []
        self.update_model("test")

    def _call_api(self, system_prompt: str, user_prompt: str, json_mode: bool) -> LLMResponse:
        self.calls.append({"system": system_prompt, "user": user_prompt, "json_mode": json_mode})
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        reply = self.replies.pop(0) if self.replies else ""
        if callable(reply):
            reply = reply(user_prompt)
        return LLMResponse(content=reply, model=self.model, input_tokens=10, output_tokens=20)


def build_reply(updated_data, assistant_response: Optional[str] = "OK") -> str:
    """Serialize a reply envelope; pass assistant_response=None to omit the key."""
    reply = {"updatedData": updated_data}
    if assistant_response is not None:
        reply["assistantResponse"] = assistant_response
    return json.dumps(reply, ensure_ascii=False)


@pytest.fixture
def sample_document() -> Document:
    return load_document(SAMPLE_DOCUMENT_PATH)


@pytest.fixture
def sample_data(sample_document) -> dict:
    """camelCase dict of the sample document (fresh copy per test)."""
    return sample_document.to_dict()


@pytest.fixture
def make_session(sample_document):
    """
    Factory building a ChatSession over a fresh store holding the sample document.

    Returns (session, provider, store).
    """

    def _make(replies=None, error=None, gate=None, greeting=GREETING):
        provider = ScriptedProvider(replies=replies, error=error, gate=gate)
        store = DocumentStore(sample_document)
        session = ChatSession(
            interpreter=InstructionInterpreter(provider),
            merger=ReplyMerger(
                fallback_confirmation=FALLBACK_CONFIRMATION,
                failure_message=FAILURE_MESSAGE,
            ),
            store=store,
            greeting=greeting,
        )
        return session, provider, store

    return _make
