"""
Lumina CV - chat-driven résumé builder

Maintains a structured CV document and lets the user edit it either through
form-style field updates or through natural-language instructions that a
generative model turns into a validated replacement document.

Architecture:
- Document Context: CV schema, invariants, id generation, form edits, scoring
- Assistant Context: instruction interpreter, reply validator/merger, chat session
- Rendering Context: HTML preview of a complete document
"""

__version__ = "0.1.0"
