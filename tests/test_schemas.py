"""Tests schémas — invariants du document, snapshots, changements collaborateur."""
import pytest
from pydantic import ValidationError

from email_builder import config
from email_builder.blocks import TextBlock, HeroBlock
from email_builder.core.schemas import (
    EmailDocument, GlobalSettings, HistorySnapshot, SectionTemplate, DocumentChange, BlockPatch,
    SCHEMA_VERSION,
)


def test_global_settings_defaults():
    gs = GlobalSettings()
    assert gs.max_width == config.MAX_WIDTH
    assert gs.mobile_breakpoint == config.MOBILE_BREAKPOINT
    assert gs.content_background_color == "#ffffff"


def test_document_positions_must_match_index():
    with pytest.raises(ValidationError):
        EmailDocument(blocks=[TextBlock(id="a", position=0), TextBlock(id="b", position=2)])


def test_document_ids_must_be_unique():
    with pytest.raises(ValidationError):
        EmailDocument(blocks=[TextBlock(id="a", position=0), TextBlock(id="a", position=1)])


def test_document_from_dicts():
    doc = EmailDocument.model_validate({
        "blocks": [
            {"id": "h", "type": "hero", "position": 0, "content": {"headline": "Salut"}},
            {"id": "t", "type": "text", "position": 1},
        ],
    })
    assert doc.schema_version == SCHEMA_VERSION
    assert isinstance(doc.blocks[0], HeroBlock)


def test_snapshot_is_immutable():
    snap = HistorySnapshot(blocks=[TextBlock(id="a")])
    assert isinstance(snap.blocks, tuple)
    with pytest.raises(ValidationError):
        snap.blocks = ()


def test_snapshot_checks_invariants():
    with pytest.raises(ValidationError):
        HistorySnapshot(blocks=[TextBlock(id="a", position=1)])


def test_snapshot_to_document():
    snap = HistorySnapshot(blocks=[TextBlock(id="a")])
    doc = snap.to_document()
    assert [b.id for b in doc.blocks] == ["a"]


def test_section_template_rejects_duplicate_ids():
    with pytest.raises(ValidationError):
        SectionTemplate(id="s", name="S", blocks=[TextBlock(id="x"), TextBlock(id="x")])


def test_section_template_requires_blocks():
    with pytest.raises(ValidationError):
        SectionTemplate(id="s", name="S", blocks=[])


# ── DocumentChange ───────────────────────────────────────────────────────────

def test_change_with_patches():
    change = DocumentChange(patches=[BlockPatch(block_id="a", content={"text": "x"})])
    assert change.document is None


def test_change_with_document():
    change = DocumentChange(document=EmailDocument())
    assert change.patches == []


def test_change_requires_exactly_one_kind():
    with pytest.raises(ValidationError):
        DocumentChange()
    with pytest.raises(ValidationError):
        DocumentChange(document=EmailDocument(), patches=[BlockPatch(block_id="a")])
