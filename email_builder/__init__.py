"""
Email Builder — composition, validation et rendu d'emails HTML par blocs.

Usage (session d'édition):
    >>> from email_builder import EditorSession, EmailDocument
    >>> session = EditorSession(EmailDocument())
    >>> session.insert_section("hero-with-cta")
    >>> session.validate()
    >>> email = session.render()
    >>> email.html, email.plain_text

Usage (fonctions pures):
    >>> from email_builder import render, validate, auto_fix_all, append, get_section
    >>> blocks = append(get_section("social-proof"), []).blocks
    >>> render(auto_fix_all(blocks)).html
"""

# ── Modèle ───────────────────────────────────────────────────────────────────
from .blocks import (
    Block, BaseBlock, BlockContent, BlockSettings, Padding,
    LogoBlock, SpacerBlock, HeadingBlock, TextBlock, ImageBlock, ButtonBlock, DividerBlock,
    HeroBlock, StatsBlock, TestimonialBlock, FeatureGridBlock, ComparisonBlock,
    SocialLinksBlock, FooterBlock,
    BLOCK_SPECS, HEAVY_TYPES, WRAPPER_TYPES,
)
from .core.schemas import (
    EmailDocument, GlobalSettings, HistorySnapshot, SectionTemplate, RuleViolation,
    BlockPatch, DocumentChange, SCHEMA_VERSION,
)

# ── Sections ─────────────────────────────────────────────────────────────────
from .sections import (
    generate_id, renumber,
    InsertResult, insert_at, insert_relative, replace, append, prepend,
    create_block, add_block, remove_block, move_block, update_block,
    register_section, get_section, list_sections, search_sections,
)

# ── Rendu ────────────────────────────────────────────────────────────────────
from .renderer import RenderedEmail, render, resolve_assets, PLAIN_TEXT_PLACEHOLDER

# ── Composition ──────────────────────────────────────────────────────────────
from .composition import (
    CompositionEngine, CompositionRule, QualityScore,
    validate, auto_fix, auto_fix_all, score_composition,
)

# ── Historique / session ─────────────────────────────────────────────────────
from .history import EditHistory, PersistenceTracker, SaveStatus
from .builder import EditorSession, CollaboratorRequest

# ── Persistance ──────────────────────────────────────────────────────────────
from .manifest import load_document, dump_document

from .errors import (
    EmailBuilderError, StructuralError, BlockNotFoundError, PositionOutOfRangeError,
    UnknownSectionError, RenderError, HistoryError, MutationInFlightError, RequestClosedError,
    SchemaVersionError,
)

__version__ = "0.1.0"

__all__ = [
    # modèle
    "Block", "BaseBlock", "BlockContent", "BlockSettings", "Padding",
    "LogoBlock", "SpacerBlock", "HeadingBlock", "TextBlock", "ImageBlock", "ButtonBlock",
    "DividerBlock", "HeroBlock", "StatsBlock", "TestimonialBlock", "FeatureGridBlock",
    "ComparisonBlock", "SocialLinksBlock", "FooterBlock",
    "BLOCK_SPECS", "HEAVY_TYPES", "WRAPPER_TYPES",
    "EmailDocument", "GlobalSettings", "HistorySnapshot", "SectionTemplate", "RuleViolation",
    "BlockPatch", "DocumentChange", "SCHEMA_VERSION",
    # sections
    "generate_id", "renumber",
    "InsertResult", "insert_at", "insert_relative", "replace", "append", "prepend",
    "create_block", "add_block", "remove_block", "move_block", "update_block",
    "register_section", "get_section", "list_sections", "search_sections",
    # rendu
    "RenderedEmail", "render", "resolve_assets", "PLAIN_TEXT_PLACEHOLDER",
    # composition
    "CompositionEngine", "CompositionRule", "QualityScore",
    "validate", "auto_fix", "auto_fix_all", "score_composition",
    # historique / session
    "EditHistory", "PersistenceTracker", "SaveStatus", "EditorSession", "CollaboratorRequest",
    # persistance
    "load_document", "dump_document",
    # erreurs
    "EmailBuilderError", "StructuralError", "BlockNotFoundError", "PositionOutOfRangeError",
    "UnknownSectionError", "RenderError", "HistoryError", "MutationInFlightError", "RequestClosedError",
    "SchemaVersionError",
]
