"""
Shared utilities for Lumina.

Common functionality used across contexts:
- LLM provider access
- Logger configuration
- Settings loading
"""

from lumina.utils.config import load_settings
from lumina.utils.llm import LLMProvider, LLMResponse, get_provider

__all__ = ["load_settings", "LLMProvider", "LLMResponse", "get_provider"]
