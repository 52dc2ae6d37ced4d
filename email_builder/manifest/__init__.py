"""
Manifest — forme persistée des documents et migrations de schéma.
"""
from .parser import load_document, dump_document, migrate
from .schema import SUPPORTED_VERSIONS, LEGACY_SCHEMA_VERSION

__all__ = ["load_document", "dump_document", "migrate", "SUPPORTED_VERSIONS", "LEGACY_SCHEMA_VERSION"]
