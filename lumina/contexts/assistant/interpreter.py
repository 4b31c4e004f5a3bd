"""
Instruction interpreter.

Sends the current Document and a natural-language instruction to a language
model and returns the raw reply text. The reply is untrusted: parsing and
validation happen in ReplyMerger.
"""

import asyncio
import time
from functools import partial

from lumina.contexts.assistant.exceptions import ModelInvocationError
from lumina.contexts.assistant.logger import _log_debug, log_model_call
from lumina.contexts.document.model import Document
from lumina.utils.llm import LLMProvider

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

SYSTEM_PROMPT = """\
You are an expert recruiter and CV designer. The user edits their CV by giving
natural-language commands. You receive the current CV as JSON and one command.

Apply the command as follows:
1. Color change requests: update theme.primaryColor with a hex color (e.g. "#0a1a3f").
2. Requests to rewrite or rephrase the summary or an experience description:
   rewrite only that field, in a more professional and impactful way.
3. New information (name, title, email, phone, location, ...): overwrite the
   corresponding field.
4. Anything else: do your best to interpret it. If nothing applies, return the
   CV unchanged.

Rules:
- Always return the COMPLETE CV, every section and every field, modified or not.
- Keep every existing "id" value unchanged. New experience or education entries
  get a new id that is not already used in that list.
- Keep the exact same keys and JSON types as the input (all values are strings,
  skills is a list of strings).

Respond ONLY with a single JSON object with exactly these two keys:
- "updatedData": the complete updated CV object
- "assistantResponse": a short message confirming what you did, written in the
  language of the user's command"""

_USER_PROMPT_TEMPLATE = """\
CURRENT CV DATA:
{document_json}

USER COMMAND:
"{instruction}\""""


def build_user_prompt(instruction: str, document: Document) -> str:
    """
    Build the request-specific part of the prompt.

    Args:
        instruction: The user's command, already stripped
        document: Complete current Document

    Returns:
        User prompt embedding the serialized Document and the instruction
    """
    return _USER_PROMPT_TEMPLATE.format(
        document_json=document.to_json(indent=2),
        instruction=instruction,
    )


# =============================================================================
# INTERPRETER
# =============================================================================


class InstructionInterpreter:
    """
    Turns (instruction, document) into a raw model reply.

    The provider call is blocking, so it runs in the default executor; the
    event loop stays free while the request is in flight.
    """

    def __init__(self, provider: LLMProvider):
        self.provider = provider

    async def interpret(self, instruction: str, document: Document) -> str:
        """
        Ask the model to apply instruction to document.

        Args:
            instruction: Non-empty natural-language command
            document: Complete current Document

        Returns:
            Raw reply text (expected, not guaranteed, to be the JSON contract)

        Raises:
            ValueError: If instruction is blank
            ModelInvocationError: If the provider call fails for any reason
        """
        if not instruction or not instruction.strip():
            raise ValueError("Instruction must not be empty")

        user_prompt = build_user_prompt(instruction.strip(), document)
        _log_debug(f"Prompt size: {len(SYSTEM_PROMPT) + len(user_prompt)} chars")

        loop = asyncio.get_running_loop()
        start_time = time.time()
        try:
            response = await loop.run_in_executor(
                None,
                partial(self.provider.generate, SYSTEM_PROMPT, user_prompt, json_mode=True),
            )
        except Exception as e:
            raise ModelInvocationError(self.provider.name, e) from e

        log_model_call(self.provider.name, response, time.time() - start_time)
        return response.content
