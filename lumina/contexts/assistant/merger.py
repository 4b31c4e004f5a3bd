"""
Reply validation and merge.

Converts the raw model reply into (next Document, confirmation text). The
reply is treated as untrusted input: it must be a JSON object with exactly
`updatedData` and `assistantResponse`, and `updatedData` must be a complete,
valid Document. Anything else falls back to the previous Document.

Merge is full replacement: a valid `updatedData` becomes the new Document as
is. There is no field-level patching, so an omitted field can never be
silently merged away or half-applied.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import ValidationError

from lumina.contexts.assistant.exceptions import (
    ChatPipelineError,
    MalformedReplyError,
    ValidationRejected,
)
from lumina.contexts.assistant.logger import _log_debug
from lumina.contexts.document.model import Document

DATA_KEY = "updatedData"
RESPONSE_KEY = "assistantResponse"
REPLY_KEYS = {DATA_KEY, RESPONSE_KEY}

DEFAULT_CONFIRMATION = "J'ai mis à jour votre CV."
DEFAULT_FAILURE_MESSAGE = "Désolé, j'ai rencontré une erreur lors de la mise à jour de votre CV."

_CODE_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_CODE_FENCE_END = re.compile(r"\s*```$")


@dataclass(frozen=True)
class MergeOutcome:
    """
    Result of resolving one model reply.

    Attributes:
        document: Document to publish (the validated reply, or the previous one)
        confirmation: Text for the assistant message
        committed: True if document comes from the reply
        error: Pipeline error that forced the fallback, if any
    """

    document: Document
    confirmation: str
    committed: bool
    error: Optional[ChatPipelineError] = None


class ReplyMerger:
    """
    Validates model replies and decides the next Document.

    Never raises from merge() or recover(): every failure path returns the
    previous Document with the failure message.
    """

    def __init__(
        self,
        fallback_confirmation: str = DEFAULT_CONFIRMATION,
        failure_message: str = DEFAULT_FAILURE_MESSAGE,
    ):
        self.fallback_confirmation = fallback_confirmation
        self.failure_message = failure_message

    def merge(self, raw_reply: Optional[str], previous: Document) -> MergeOutcome:
        """
        Resolve a raw reply against the Document that was sent.

        Args:
            raw_reply: Reply text from InstructionInterpreter
            previous: Document the instruction was applied to (fallback)

        Returns:
            MergeOutcome with the next Document and confirmation text
        """
        try:
            reply = parse_reply(raw_reply)
            document = validate_updated_data(reply[DATA_KEY])
        except ChatPipelineError as e:
            return self.recover(previous, e)

        confirmation = reply.get(RESPONSE_KEY)
        if not isinstance(confirmation, str) or not confirmation.strip():
            _log_debug(f"Reply has no usable {RESPONSE_KEY}; using generic confirmation")
            confirmation = self.fallback_confirmation

        return MergeOutcome(document=document, confirmation=confirmation.strip(), committed=True)

    def recover(self, previous: Document, error: ChatPipelineError) -> MergeOutcome:
        """Outcome for a failed call or rejected reply: previous Document, failure message."""
        return MergeOutcome(
            document=previous,
            confirmation=self.failure_message,
            committed=False,
            error=error,
        )


# =============================================================================
# PARSING & VALIDATION
# =============================================================================


def parse_reply(raw_reply: Optional[str]) -> Dict[str, Any]:
    """
    Parse the reply envelope.

    A single surrounding markdown code fence is tolerated; the content inside
    must be strict JSON.

    Raises:
        MalformedReplyError: If the text is not a JSON object with updatedData
            and no keys outside the contract
    """
    if not isinstance(raw_reply, str) or not raw_reply.strip():
        raise MalformedReplyError("Model reply is empty")

    text = raw_reply.strip()
    if text.startswith("```"):
        text = _CODE_FENCE_END.sub("", _CODE_FENCE_START.sub("", text))

    try:
        reply = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedReplyError(f"Model reply is not valid JSON ({e.msg})", raw_reply=raw_reply)

    if not isinstance(reply, dict):
        raise MalformedReplyError(
            f"Model reply must be a JSON object, got {type(reply).__name__}", raw_reply=raw_reply
        )

    if DATA_KEY not in reply:
        raise MalformedReplyError(f"Model reply has no {DATA_KEY}", raw_reply=raw_reply)

    unexpected = sorted(set(reply) - REPLY_KEYS)
    if unexpected:
        raise MalformedReplyError(
            f"Model reply has unexpected keys: {', '.join(unexpected)}", raw_reply=raw_reply
        )

    return reply


def validate_updated_data(data: Any) -> Document:
    """
    Turn updatedData into a Document, rejecting rather than coercing.

    Raises:
        ValidationRejected: If data is not an object, is incomplete, or fails
            the Document schema
    """
    if not isinstance(data, dict):
        raise ValidationRejected(f"{DATA_KEY} must be an object, got {type(data).__name__}")

    try:
        return Document.from_reply(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        ]
        raise ValidationRejected(f"{DATA_KEY} is not a valid document", errors=errors)
    except ValueError as e:
        raise ValidationRejected(f"{DATA_KEY} is not a valid document", errors=[str(e)])
