"""
Merge tags — remplacement des jetons {{clé}} par les valeurs du contexte d'envoi.
Les jetons sans correspondance sont laissés intacts (résolus plus tard par l'ESP).
"""
import re
from typing import Mapping, Optional

_TAG_RE = re.compile(r"\{\{\s*([A-Za-z0-9_.-]+)\s*\}\}")


def resolve_merge_tags(text: str, tags: Optional[Mapping[str, str]] = None) -> str:
    if not tags or not text:
        return text

    def replace(match: re.Match) -> str:
        key = match.group(1)
        return str(tags[key]) if key in tags else match.group(0)

    return _TAG_RE.sub(replace, text)
