"""
Chargement / export des documents persistés, avec migration des anciennes versions.
"""
import logging
import re
from typing import Any, Callable, Dict, Mapping

from .. import config
from ..core.schemas import SCHEMA_VERSION, EmailDocument
from ..errors import SchemaVersionError
from .schema import LEGACY_BLOCK_TYPES, LEGACY_GRADIENT_KEYS, LEGACY_SCHEMA_VERSION, SUPPORTED_VERSIONS

log = logging.getLogger(__name__)

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")
_PX_RE = re.compile(r"^(\d+(?:\.\d+)?)px$")


def camel_to_snake(key: str) -> str:
    return _CAMEL_RE.sub(r"_\1", key).lower()


def _snake_keys(obj: Any) -> Any:
    """Renomme récursivement les clés de dicts (jamais les valeurs)."""
    if isinstance(obj, dict):
        return {camel_to_snake(k): _snake_keys(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_snake_keys(v) for v in obj]
    return obj


def _px_to_int(value: Any) -> Any:
    if isinstance(value, str):
        match = _PX_RE.match(value.strip())
        if match:
            return round(float(match.group(1)))
    return value


def _padding_from_css(value: str) -> Dict[str, int]:
    """Raccourci CSS : "8px 16px" → {"top": 8, "right": 16, "bottom": 8, "left": 16}."""
    parts = [_px_to_int(p) for p in value.split()]
    parts = [p if isinstance(p, int) else 0 for p in parts] or [0]
    while len(parts) < 4:
        parts.append(parts[{1: 0, 2: 0, 3: 1}[len(parts)]])
    top, right, bottom, left = parts[:4]
    return {"top": top, "right": right, "bottom": bottom, "left": left}


def _migrate_settings(block_type: str, settings: Dict[str, Any]) -> Dict[str, Any]:
    migrated: Dict[str, Any] = {}
    for key, value in settings.items():
        if value is None:
            continue
        if key == "width" and isinstance(value, str) and value.endswith("%"):
            # les dividers gardent un pourcentage, les images repassent en pleine largeur
            if block_type == "divider":
                migrated[key] = round(float(value[:-1]))
            continue
        if key.endswith("padding") and isinstance(value, str):
            value = _padding_from_css(value)
        if key == "background_gradient" and isinstance(value, dict):
            value = {LEGACY_GRADIENT_KEYS.get(k, k): v for k, v in value.items()}
        migrated[key] = _px_to_int(value)
    return migrated


def _migrate_v1(payload: Dict[str, Any]) -> Dict[str, Any]:
    data = _snake_keys(payload)
    blocks = []
    indexed = list(enumerate(data.get("blocks") or []))
    # ordre v1 = position déclarée, puis ordre d'apparition
    indexed.sort(key=lambda item: (item[1].get("position", item[0]), item[0]))
    for index, (_, block) in enumerate(indexed):
        block = dict(block)
        block["type"] = LEGACY_BLOCK_TYPES.get(block.get("type"), block.get("type"))
        block["settings"] = _migrate_settings(block["type"], block.get("settings") or {})
        block["position"] = index
        blocks.append(block)
    settings = dict(data.get("global_settings") or {})
    settings = {k: _px_to_int(v) for k, v in settings.items() if v is not None}
    settings.setdefault("mobile_breakpoint", config.MOBILE_BREAKPOINT)
    return {"schema_version": LEGACY_SCHEMA_VERSION + 1, "blocks": blocks, "global_settings": settings}


_MIGRATIONS: Dict[int, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    LEGACY_SCHEMA_VERSION: _migrate_v1,
}


def migrate(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Amène un payload persisté à la version courante (sans le valider)."""
    data = dict(payload)
    version = data.get("schema_version", data.get("schemaVersion", LEGACY_SCHEMA_VERSION))
    if not isinstance(version, int) or version < LEGACY_SCHEMA_VERSION:
        raise SchemaVersionError(f"Version de schéma invalide : {version!r}")
    if version not in SUPPORTED_VERSIONS:
        raise SchemaVersionError(
            f"Document en version {version}, version maximale supportée : {SCHEMA_VERSION}"
        )
    while version < SCHEMA_VERSION:
        log.info("Migration du document v%d → v%d", version, version + 1)
        data = _MIGRATIONS[version](data)
        version = data["schema_version"]
    return data


def load_document(payload: Mapping[str, Any]) -> EmailDocument:
    """Payload JSON (toute version supportée) → EmailDocument validé."""
    return EmailDocument.model_validate(migrate(payload))


def dump_document(document: EmailDocument) -> Dict[str, Any]:
    """EmailDocument → payload JSON de la version courante."""
    data = document.model_dump(mode="json")
    data["schema_version"] = SCHEMA_VERSION
    return data
