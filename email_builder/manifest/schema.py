"""
Manifest persisté — forme JSON d'un EmailDocument et versions de schéma.

v1 : payload historique de l'éditeur (clés camelCase, tailles "16px",
     types social_links / feature_grid, positions éventuellement trouées).
v2 : forme actuelle (snake_case, entiers px, positions denses).
"""
from ..core.schemas import SCHEMA_VERSION

LEGACY_SCHEMA_VERSION = 1
SUPPORTED_VERSIONS = tuple(range(LEGACY_SCHEMA_VERSION, SCHEMA_VERSION + 1))

# Types renommés entre v1 et v2
LEGACY_BLOCK_TYPES = {
    "social_links": "social-links",
    "feature_grid": "feature-grid",
}

# Clés de contenu renommées entre v1 et v2 (après passage en snake_case)
LEGACY_GRADIENT_KEYS = {"from": "start", "to": "end"}
