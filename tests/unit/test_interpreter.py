"""Unit tests for the instruction interpreter and its prompt."""

import json

import pytest
from conftest import ScriptedProvider, build_reply

from lumina.contexts.assistant.exceptions import ModelInvocationError
from lumina.contexts.assistant.interpreter import (
    SYSTEM_PROMPT,
    InstructionInterpreter,
    build_user_prompt,
)


@pytest.mark.unit
def test_system_prompt_states_contract():
    assert '"updatedData"' in SYSTEM_PROMPT
    assert '"assistantResponse"' in SYSTEM_PROMPT
    assert "theme.primaryColor" in SYSTEM_PROMPT
    assert "COMPLETE CV" in SYSTEM_PROMPT


@pytest.mark.unit
def test_user_prompt_embeds_document_and_instruction(sample_document):
    prompt = build_user_prompt("Change la couleur en bleu nuit", sample_document)

    assert '"Change la couleur en bleu nuit"' in prompt
    assert '"primaryColor": "#4f46e5"' in prompt
    # Non-ASCII text is kept readable for the model
    assert "École de Design Nantes Atlantique" in prompt

    json_start = prompt.index("{")
    json_end = prompt.rindex("}") + 1
    assert json.loads(prompt[json_start:json_end]) == sample_document.to_dict()


@pytest.mark.unit
def test_user_prompt_keeps_braces_in_instruction(sample_document):
    prompt = build_user_prompt("Ajoute {Python} aux compétences", sample_document)
    assert "Ajoute {Python} aux compétences" in prompt


@pytest.mark.unit
@pytest.mark.asyncio
async def test_interpret_returns_raw_text(sample_document, sample_data):
    raw = build_reply(sample_data, "Rien à changer.")
    provider = ScriptedProvider(replies=[raw])

    result = await InstructionInterpreter(provider).interpret("Bonjour", sample_document)

    assert result == raw
    assert len(provider.calls) == 1
    assert provider.calls[0]["system"] == SYSTEM_PROMPT
    assert provider.calls[0]["json_mode"] is True


@pytest.mark.unit
@pytest.mark.asyncio
async def test_interpret_does_not_validate(sample_document):
    provider = ScriptedProvider(replies=["definitely not json"])

    result = await InstructionInterpreter(provider).interpret("Bonjour", sample_document)

    assert result == "definitely not json"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_provider_failure_wrapped(sample_document):
    cause = ConnectionError("network unreachable")
    provider = ScriptedProvider(error=cause)

    with pytest.raises(ModelInvocationError) as excinfo:
        await InstructionInterpreter(provider).interpret("Bonjour", sample_document)

    assert excinfo.value.original_error is cause
    assert excinfo.value.provider_name == "scripted/test"
    assert excinfo.value.__cause__ is cause
    assert "network unreachable" in str(excinfo.value)


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("instruction", ["", "   \n"])
async def test_blank_instruction_rejected(sample_document, instruction):
    provider = ScriptedProvider()

    with pytest.raises(ValueError, match="must not be empty"):
        await InstructionInterpreter(provider).interpret(instruction, sample_document)

    assert provider.calls == []
