"""
Renderer — HTML email (tables, styles inline) + texte brut.
"""
from .html import RenderedEmail, RenderContext, render, render_block, render_placeholder
from .text import render_plain_text, PLAIN_TEXT_PLACEHOLDER
from .assets import resolve_assets, resolve_image_url
from .styles import effective_style

__all__ = [
    "RenderedEmail", "RenderContext", "render", "render_block", "render_placeholder",
    "render_plain_text", "PLAIN_TEXT_PLACEHOLDER",
    "resolve_assets", "resolve_image_url",
    "effective_style",
]
