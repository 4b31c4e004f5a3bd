"""Exceptions raised inside the chat mutation pipeline."""

from typing import List, Optional

SNIPPET_LENGTH = 200


class ChatPipelineError(Exception):
    """
    Base class for failures between an instruction and a committed Document.

    None of these escape ChatSession.submit; they are converted into an
    assistant message and an unchanged Document.

    Attributes:
        message: Error description
        detail: Optional extra context appended to the rendered message
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail

        parts = [message]
        if detail:
            parts.append(detail)
        super().__init__("\n".join(parts))


class ModelInvocationError(ChatPipelineError):
    """
    Raised when the call to the language model cannot complete
    (network, authentication, quota, SDK errors).

    Attributes:
        provider_name: Provider/model that was called (e.g. "openai/gpt-4o-mini")
        original_error: The underlying exception
    """

    def __init__(self, provider_name: str, original_error: Exception):
        self.provider_name = provider_name
        self.original_error = original_error
        super().__init__(
            f"Model call to {provider_name} failed",
            detail=f"Original error: {type(original_error).__name__}: {original_error}",
        )


class MalformedReplyError(ChatPipelineError):
    """
    Raised when the model reply is not a JSON object or lacks updatedData.

    Attributes:
        raw_reply: The reply text as received
    """

    def __init__(self, message: str, raw_reply: Optional[str] = None):
        self.raw_reply = raw_reply

        detail = None
        if raw_reply is not None:
            snippet = raw_reply[:SNIPPET_LENGTH] + "..." if len(raw_reply) > SNIPPET_LENGTH else raw_reply
            detail = f"Reply:\n{snippet}"

        super().__init__(message, detail=detail)


class ValidationRejected(ChatPipelineError):
    """
    Raised when updatedData parses but is not a structurally valid Document.

    Attributes:
        errors: Individual validation problems
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = errors or []
        detail = "\n".join(f"  - {err}" for err in self.errors) if self.errors else None
        super().__init__(message, detail=detail)
