"""
Schémas Pydantic email_builder — document, réglages globaux, snapshots, sections, violations.
"""
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..blocks import Block, BaseBlock, HexColor
from .. import config

SCHEMA_VERSION = 2


def check_block_sequence(blocks: Sequence[BaseBlock]) -> None:
    """Vérifie les invariants d'une liste de blocs : position == index, ids uniques."""
    seen = set()
    for index, block in enumerate(blocks):
        if block.position != index:
            raise ValueError(
                f"Position incohérente pour {block.id!r} : {block.position} (attendu {index})"
            )
        if block.id in seen:
            raise ValueError(f"Identifiant de bloc dupliqué : {block.id!r}")
        seen.add(block.id)


# ── Réglages globaux ─────────────────────────────────────────────────────────

class GlobalSettings(BaseModel):
    """Réglages communs à tout le document."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    background_color: HexColor = "#f3f4f6"
    content_background_color: HexColor = "#ffffff"
    max_width: int = Field(default=config.MAX_WIDTH, ge=320, le=1200)
    font_family: str = "Arial, Helvetica, sans-serif"
    mobile_breakpoint: int = Field(default=config.MOBILE_BREAKPOINT, ge=240, le=1024)


# ── Document ─────────────────────────────────────────────────────────────────

class EmailDocument(BaseModel):
    """Document email persistable : liste ordonnée de blocs + réglages globaux."""
    model_config = ConfigDict(extra="forbid")

    schema_version: int = SCHEMA_VERSION
    blocks: List[Block] = Field(default_factory=list)
    global_settings: GlobalSettings = GlobalSettings()

    @model_validator(mode="after")
    def _check_blocks(self) -> "EmailDocument":
        check_block_sequence(self.blocks)
        return self


class HistorySnapshot(BaseModel):
    """État immuable du document à un instant de l'historique."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    blocks: Tuple[Block, ...] = ()
    global_settings: GlobalSettings = GlobalSettings()

    @model_validator(mode="after")
    def _check_blocks(self) -> "HistorySnapshot":
        check_block_sequence(self.blocks)
        return self

    def to_document(self) -> EmailDocument:
        return EmailDocument(blocks=list(self.blocks), global_settings=self.global_settings)


# ── Sections ─────────────────────────────────────────────────────────────────

class SectionTemplate(BaseModel):
    """Groupe de blocs préconçu, inséré en une seule opération (ids clonés à l'insertion)."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    name: str
    category: str = "content"
    description: str = ""
    tags: Tuple[str, ...] = ()
    blocks: Tuple[Block, ...] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_ids(self) -> "SectionTemplate":
        ids = [b.id for b in self.blocks]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Identifiants dupliqués dans la section {self.id!r}")
        return self


# ── Validation de composition ────────────────────────────────────────────────

Severity = Literal["error", "warning", "suggestion"]


class RuleViolation(BaseModel):
    model_config = ConfigDict(frozen=True)

    block_id: str
    rule_id: str
    severity: Severity
    message: str
    auto_fixable: bool = False


# ── Changements proposés par un collaborateur ────────────────────────────────

class BlockPatch(BaseModel):
    """Mise à jour partielle d'un bloc existant, adressé par id."""
    model_config = ConfigDict(extra="forbid")

    block_id: str
    content: Dict[str, Any] = Field(default_factory=dict)
    settings: Dict[str, Any] = Field(default_factory=dict)


class DocumentChange(BaseModel):
    """Remplacement complet du document OU liste de patchs (exclusifs)."""
    model_config = ConfigDict(extra="forbid")

    document: Optional[EmailDocument] = None
    patches: List[BlockPatch] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_exclusive(self) -> "DocumentChange":
        if (self.document is None) == (not self.patches):
            raise ValueError("Un changement porte soit un document complet, soit des patchs")
        return self
