"""
Insertion de sections — clone un template (nouveaux ids) et l'insère dans la liste.

Toutes les opérations sont pures : la liste d'entrée n'est jamais modifiée, et
aucune erreur structurelle n'est levée vers l'appelant : elles deviennent un
InsertResult(success=False, error_code=...). Seul un mode inconnu lève ValueError.
"""
import logging
from typing import Iterable, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field

from ..blocks import Block, BaseBlock, WRAPPER_TYPES
from ..core.schemas import SectionTemplate
from ..errors import BlockNotFoundError, PositionOutOfRangeError, StructuralError
from .allocator import block_ids, generate_id, index_of, renumber
from .registry import get_section

log = logging.getLogger(__name__)

TemplateRef = Union[SectionTemplate, str]


class InsertResult(BaseModel):
    success: bool
    blocks: List[Block] = Field(default_factory=list)
    inserted_ids: List[str] = Field(default_factory=list)
    error: Optional[str] = None
    error_code: Optional[Literal["out_of_range", "not_found"]] = None

    @classmethod
    def ok(cls, blocks: Sequence[BaseBlock], inserted_ids: Iterable[str] = ()) -> "InsertResult":
        return cls(success=True, blocks=list(blocks), inserted_ids=list(inserted_ids))

    @classmethod
    def failure(cls, exc: StructuralError, blocks: Sequence[BaseBlock] = ()) -> "InsertResult":
        log.debug("Opération structurelle refusée : %s", exc)
        return cls(success=False, blocks=list(blocks), error=str(exc), error_code=exc.code)


def _resolve_template(template: TemplateRef) -> SectionTemplate:
    if isinstance(template, SectionTemplate):
        return template
    return get_section(template)


def clone_template_blocks(template: SectionTemplate, taken: Iterable[str] = ()) -> List[BaseBlock]:
    """Copies profondes des blocs du template, chacune avec un nouvel id."""
    taken = set(taken)
    clones = []
    for block in template.blocks:
        new_id = generate_id(block.type, taken)
        taken.add(new_id)
        clones.append(block.model_copy(deep=True, update={"id": new_id}))
    return clones


def _splice(blocks: Sequence[BaseBlock], index: int, clones: List[BaseBlock],
            remove: int = 0) -> List[BaseBlock]:
    result = list(blocks[:index]) + clones + list(blocks[index + remove:])
    return renumber(result)


def _insert(template: TemplateRef, blocks: Sequence[BaseBlock], index: int) -> InsertResult:
    if isinstance(index, bool) or not 0 <= index <= len(blocks):
        raise PositionOutOfRangeError(index, len(blocks))
    tpl = _resolve_template(template)
    clones = clone_template_blocks(tpl, block_ids(blocks))
    return InsertResult.ok(_splice(blocks, index, clones), (c.id for c in clones))


# ── Opérations publiques ─────────────────────────────────────────────────────

def insert_at(template: TemplateRef, blocks: Sequence[BaseBlock], index: int) -> InsertResult:
    """Insère la section à l'index donné (0..len inclus)."""
    try:
        return _insert(template, blocks, index)
    except StructuralError as exc:
        return InsertResult.failure(exc, blocks)


def insert_relative(template: TemplateRef, blocks: Sequence[BaseBlock], target_id: str,
                    placement: Literal["before", "after"] = "after") -> InsertResult:
    """Insère la section avant ou après le bloc cible."""
    try:
        target = index_of(blocks, target_id)
        if target < 0:
            raise BlockNotFoundError(target_id)
        return _insert(template, blocks, target if placement == "before" else target + 1)
    except StructuralError as exc:
        return InsertResult.failure(exc, blocks)


def replace(template: TemplateRef, blocks: Sequence[BaseBlock], target_id: str) -> InsertResult:
    """Remplace le bloc cible par les blocs de la section, au même endroit."""
    try:
        target = index_of(blocks, target_id)
        if target < 0:
            raise BlockNotFoundError(target_id)
        tpl = _resolve_template(template)
        remaining = [b for b in blocks if b.id != target_id]
        clones = clone_template_blocks(tpl, block_ids(remaining))
        return InsertResult.ok(_splice(blocks, target, clones, remove=1), (c.id for c in clones))
    except StructuralError as exc:
        return InsertResult.failure(exc, blocks)


def append(template: TemplateRef, blocks: Sequence[BaseBlock]) -> InsertResult:
    """Ajoute la section en fin de document, avant le footer s'il existe."""
    index = len(blocks)
    footer = next((i for i, b in enumerate(blocks) if b.type == "footer"), -1)
    if footer >= 0:
        index = footer
    return insert_at(template, blocks, index)


def prepend(template: TemplateRef, blocks: Sequence[BaseBlock]) -> InsertResult:
    """
    Ajoute la section en tête de contenu, après la suite de blocs d'habillage
    (logo, spacer) qui ouvre le document. Si le document n'est fait que
    d'habillage, la section se place à la fin de cette suite.
    """
    index = 0
    while index < len(blocks) and blocks[index].type in WRAPPER_TYPES:
        index += 1
    return insert_at(template, blocks, index)


InsertMode = Literal["append", "prepend", "at", "before", "after", "replace"]


def insert_section(template: TemplateRef, blocks: Sequence[BaseBlock], mode: InsertMode = "append", *,
                   index: Optional[int] = None, target_id: Optional[str] = None) -> InsertResult:
    """
    Point d'entrée unique par mode d'insertion.

    `index` sert au mode "at" (fin de document si None), `target_id` aux modes
    "before", "after" et "replace". ValueError si le mode est inconnu.
    """
    if mode == "append":
        return append(template, blocks)
    if mode == "prepend":
        return prepend(template, blocks)
    if mode == "at":
        return insert_at(template, blocks, len(blocks) if index is None else index)
    if mode == "replace":
        return replace(template, blocks, target_id or "")
    if mode in ("before", "after"):
        return insert_relative(template, blocks, target_id or "", mode)
    raise ValueError(f"Mode d'insertion inconnu : {mode!r}")
