"""
Registry des sections — enregistrement, lecture, filtrage par catégorie, recherche.
"""
import logging
from typing import Dict, List, Optional

from ..core.schemas import SectionTemplate
from ..errors import UnknownSectionError
from .templates import BUILTIN_SECTIONS

log = logging.getLogger(__name__)

_SECTION_REGISTRY: Dict[str, SectionTemplate] = {}


def register_section(template: SectionTemplate, *, replace: bool = False) -> SectionTemplate:
    """Ajoute une section au registry. ValueError si l'id existe déjà (sauf replace=True)."""
    if template.id in _SECTION_REGISTRY and not replace:
        raise ValueError(f"Section déjà enregistrée : {template.id!r}")
    _SECTION_REGISTRY[template.id] = template
    log.debug("Section enregistrée : %s", template.id)
    return template


def unregister_section(section_id: str) -> None:
    if _SECTION_REGISTRY.pop(section_id, None) is None:
        raise UnknownSectionError(section_id)


def get_section(section_id: str) -> SectionTemplate:
    try:
        return _SECTION_REGISTRY[section_id]
    except KeyError:
        raise UnknownSectionError(section_id) from None


def list_sections(category: Optional[str] = None) -> List[SectionTemplate]:
    """Sections enregistrées (ordre d'enregistrement), filtrées par catégorie si demandé."""
    return [t for t in _SECTION_REGISTRY.values() if category is None or t.category == category]


def list_categories() -> List[str]:
    return sorted({t.category for t in _SECTION_REGISTRY.values()})


def search_sections(query: str) -> List[SectionTemplate]:
    """Recherche insensible à la casse dans le nom, la description et les tags."""
    needle = query.strip().lower()
    if not needle:
        return list_sections()
    return [
        t for t in _SECTION_REGISTRY.values()
        if needle in t.name.lower()
        or needle in t.description.lower()
        or any(needle in tag.lower() for tag in t.tags)
    ]


for _template in BUILTIN_SECTIONS:
    register_section(_template)
