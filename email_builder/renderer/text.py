"""
Rendu texte brut — champ texte principal de chaque bloc, dans l'ordre du document.
"""
import html
import re
from typing import Iterable

from ..blocks import BaseBlock, PRIMARY_TEXT_FIELDS

PLAIN_TEXT_PLACEHOLDER = "Cet email contient du contenu visuel. Ouvrez-le dans un client compatible HTML pour le voir."

_TAG_RE = re.compile(r"<[^>]+>")


def strip_tags(value: str) -> str:
    return html.unescape(_TAG_RE.sub("", value)).strip()


def render_plain_text(blocks: Iterable[BaseBlock]) -> str:
    parts = []
    for block in blocks:
        field = PRIMARY_TEXT_FIELDS.get(block.type)
        if field is None:
            continue
        text = strip_tags(getattr(block.content, field, "") or "")
        if text:
            parts.append(text)
    return "\n\n".join(parts) if parts else PLAIN_TEXT_PLACEHOLDER
