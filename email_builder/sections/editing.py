"""
Édition bloc par bloc — création, ajout, suppression, déplacement, mise à jour partielle.

Même contrat que l'insertion de sections : fonctions pures, erreurs structurelles
renvoyées dans un InsertResult. Une mise à jour de forme invalide lève
pydantic.ValidationError (le bloc d'origine reste intact).
"""
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from ..blocks import BaseBlock, default_content, get_block_class
from ..errors import BlockNotFoundError, PositionOutOfRangeError, StructuralError
from .allocator import block_ids, generate_id, index_of, renumber
from .inserter import InsertResult


def _deep_merge(base: dict, override: Mapping[str, Any]) -> dict:
    """Fusion récursive : les sous-dicts sont fusionnés, le reste est remplacé."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def create_block(block_type: str, taken: Iterable[str] = (), *,
                 content: Optional[Mapping[str, Any]] = None,
                 settings: Optional[Mapping[str, Any]] = None) -> BaseBlock:
    """Nouveau bloc du type donné, contenu par défaut du registry + surcharges éventuelles."""
    cls = get_block_class(block_type)
    data = _deep_merge(default_content(block_type) or {}, content or {})
    return cls(
        id=generate_id(block_type, taken),
        content=data,
        settings=dict(settings or {}),
    )


def add_block(blocks: Sequence[BaseBlock], block: Union[BaseBlock, str],
              index: Optional[int] = None) -> InsertResult:
    """Ajoute un bloc (instance ou type) à l'index donné, en fin de liste par défaut."""
    if index is None:
        index = len(blocks)
    try:
        if isinstance(index, bool) or not 0 <= index <= len(blocks):
            raise PositionOutOfRangeError(index, len(blocks))
        taken = block_ids(blocks)
        if isinstance(block, str):
            new_block = create_block(block, taken)
        elif block.id in taken:
            new_block = block.model_copy(update={"id": generate_id(block.type, taken)})
        else:
            new_block = block
        result = list(blocks[:index]) + [new_block] + list(blocks[index:])
        return InsertResult.ok(renumber(result), [new_block.id])
    except StructuralError as exc:
        return InsertResult.failure(exc, blocks)


def remove_block(blocks: Sequence[BaseBlock], block_id: str) -> InsertResult:
    if index_of(blocks, block_id) < 0:
        return InsertResult.failure(BlockNotFoundError(block_id), blocks)
    return InsertResult.ok(renumber([b for b in blocks if b.id != block_id]))


def move_block(blocks: Sequence[BaseBlock], block_id: str, new_index: int) -> InsertResult:
    """Déplace un bloc ; new_index est l'index final du bloc dans la liste résultante."""
    current = index_of(blocks, block_id)
    if current < 0:
        return InsertResult.failure(BlockNotFoundError(block_id), blocks)
    if isinstance(new_index, bool) or not 0 <= new_index < len(blocks):
        return InsertResult.failure(PositionOutOfRangeError(new_index, len(blocks) - 1), blocks)
    remaining = [b for b in blocks if b.id != block_id]
    remaining.insert(new_index, blocks[current])
    return InsertResult.ok(renumber(remaining), [block_id])


def update_block(blocks: Sequence[BaseBlock], block_id: str, *,
                 content: Optional[Mapping[str, Any]] = None,
                 settings: Optional[Mapping[str, Any]] = None) -> InsertResult:
    """
    Fusionne `content` / `settings` partiels dans un bloc et le re-valide.

    Un settings à None efface la valeur (retour à l'héritage).
    """
    index = index_of(blocks, block_id)
    if index < 0:
        return InsertResult.failure(BlockNotFoundError(block_id), blocks)
    block = blocks[index]
    data: Dict[str, Any] = block.model_dump()
    if content:
        data["content"] = _deep_merge(data["content"], content)
    if settings:
        data["settings"] = _deep_merge(data["settings"], settings)
    updated = type(block).model_validate(data)
    result = list(blocks)
    result[index] = updated
    return InsertResult.ok(result, [block_id])
