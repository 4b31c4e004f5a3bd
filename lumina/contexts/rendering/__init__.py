"""
Rendering Context

Responsibilities:
- Renders a complete document to an HTML preview page
- Names exported files after the CV owner

Owns: Page templates
Never: Modifies the document
"""

from lumina.contexts.rendering.renderer import HtmlRenderer

__all__ = ["HtmlRenderer"]
