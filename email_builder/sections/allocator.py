"""
Allocation des identifiants et des positions.

`renumber` est le seul endroit du package qui écrit le champ `position`.
"""
import re
import uuid
from typing import Iterable, List, Sequence

from ..blocks import BaseBlock

ID_SUFFIX_LENGTH = 12


def _slug(type_hint: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", (type_hint or "").lower()).strip("-")


def generate_id(type_hint: str = "block", taken: Iterable[str] = ()) -> str:
    """
    Nouvel identifiant "<type>-<12 hex>", absent de `taken`.

    Le suffixe vient d'uuid4 : pas d'état partagé, pas de collision entre sessions.
    """
    taken = set(taken)
    prefix = _slug(type_hint) or "block"
    while True:
        candidate = f"{prefix}-{uuid.uuid4().hex[:ID_SUFFIX_LENGTH]}"
        if candidate not in taken:
            return candidate


def renumber(blocks: Sequence[BaseBlock]) -> List[BaseBlock]:
    """Nouvelle liste où chaque bloc a position == index (les blocs déjà corrects sont réutilisés)."""
    return [
        block if block.position == index else block.model_copy(update={"position": index})
        for index, block in enumerate(blocks)
    ]


def block_ids(blocks: Sequence[BaseBlock]) -> set:
    return {block.id for block in blocks}


def index_of(blocks: Sequence[BaseBlock], block_id: str) -> int:
    """Index d'un bloc par id, -1 s'il est absent."""
    for index, block in enumerate(blocks):
        if block.id == block_id:
            return index
    return -1
