"""
Sections — allocation d'ids, insertion de templates, édition de blocs, registry.
"""
from .allocator import generate_id, renumber
from .inserter import (
    InsertMode, InsertResult, insert_at, insert_relative, insert_section, replace, append, prepend,
    clone_template_blocks,
)
from .editing import create_block, add_block, remove_block, move_block, update_block
from .registry import (
    register_section, unregister_section, get_section, list_sections, list_categories,
    search_sections,
)
from .templates import BUILTIN_SECTIONS

__all__ = [
    "generate_id", "renumber",
    "InsertMode", "InsertResult", "insert_at", "insert_relative", "insert_section", "replace", "append", "prepend",
    "clone_template_blocks",
    "create_block", "add_block", "remove_block", "move_block", "update_block",
    "register_section", "unregister_section", "get_section", "list_sections",
    "list_categories", "search_sections",
    "BUILTIN_SECTIONS",
]
