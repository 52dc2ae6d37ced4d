"""
Résolution des images — références absolues conservées, références d'assets
résolues via une table explicite passée au renderer.
"""
import logging
from typing import Callable, Dict, Iterable, Mapping, Optional

from .. import config
from ..blocks import BaseBlock

log = logging.getLogger(__name__)

_ABSOLUTE_PREFIXES = ("http://", "https://", "data:")

AssetResolver = Callable[[str], Optional[str]]


def is_absolute(ref: Optional[str]) -> bool:
    return bool(ref) and ref.startswith(_ABSOLUTE_PREFIXES)


def image_refs(block: BaseBlock) -> list[str]:
    """Références d'images portées par un bloc (URLs absolues comprises)."""
    content = getattr(block, "content", None)
    if content is None:
        return []
    refs = [getattr(content, name, None) for name in ("image_url", "avatar_url")]
    return [ref for ref in refs if ref]


def resolve_image_url(ref: Optional[str], assets: Optional[Mapping[str, str]] = None) -> str:
    """URL finale d'une image : absolue telle quelle, sinon table d'assets, sinon placeholder."""
    if is_absolute(ref):
        return ref
    if ref and assets:
        resolved = assets.get(ref)
        if is_absolute(resolved):
            return resolved
    return config.PLACEHOLDER_IMAGE_URL


def resolve_assets(blocks: Iterable[BaseBlock], resolver: AssetResolver) -> Dict[str, str]:
    """
    Construit la table d'assets avant le rendu en interrogeant le collaborateur
    pour chaque référence non absolue. Les références non résolues sont omises
    (elles seront rendues avec le placeholder).
    """
    assets: Dict[str, str] = {}
    for block in blocks:
        for ref in image_refs(block):
            if is_absolute(ref) or ref in assets:
                continue
            url = resolver(ref)
            if is_absolute(url):
                assets[ref] = url
            else:
                log.warning("Asset non résolu : %s (bloc %s)", ref, block.id)
    return assets
