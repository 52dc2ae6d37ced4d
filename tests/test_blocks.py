"""Tests blocs — modèles figés, union discriminée, registry."""
import pytest
from pydantic import TypeAdapter, ValidationError

from email_builder.blocks import (
    Block, BLOCK_CLASSES, BLOCK_SPECS, HEAVY_TYPES, WRAPPER_TYPES, TYPE_STYLE_DEFAULTS,
    PRIMARY_TEXT_FIELDS, default_content, get_block_class,
    HeadingBlock, HeadingContent, TextBlock, FeatureGridBlock, SocialLinksBlock, Padding,
    ButtonBlock, ButtonSettings, FooterBlock,
)

adapter = TypeAdapter(Block)


# ── Modèles ──────────────────────────────────────────────────────────────────

def test_heading_defaults():
    b = HeadingBlock(id="heading-1")
    assert b.type == "heading"
    assert b.position == 0
    assert b.content.level == 1
    assert b.settings.font_size is None


def test_block_is_frozen():
    b = TextBlock(id="t", content={"text": "Bonjour"})
    with pytest.raises(ValidationError):
        b.position = 3


def test_model_copy_produces_new_instance():
    b = TextBlock(id="t", content={"text": "Bonjour"})
    moved = b.model_copy(update={"position": 2})
    assert moved.position == 2
    assert b.position == 0


def test_unknown_content_key_rejected():
    with pytest.raises(ValidationError):
        HeadingBlock(id="h", content={"text": "Titre", "subtitle": "x"})


def test_invalid_color_rejected():
    with pytest.raises(ValidationError):
        ButtonBlock(id="b", settings=ButtonSettings(color="blue"))


def test_heading_level_bounds():
    with pytest.raises(ValidationError):
        HeadingContent(text="x", level=4)


def test_padding_css():
    assert Padding(top=8, right=16, bottom=24, left=32).css() == "8px 16px 24px 32px"


def test_footer_default_unsubscribe_is_merge_tag():
    assert FooterBlock(id="f").content.unsubscribe_url == "{{unsubscribe_url}}"


# ── Union discriminée ────────────────────────────────────────────────────────

def test_union_dispatch_on_type():
    b = adapter.validate_python({"id": "fg", "type": "feature-grid"})
    assert isinstance(b, FeatureGridBlock)


def test_union_dispatch_social_links():
    b = adapter.validate_python({
        "id": "s", "type": "social-links",
        "content": {"links": [{"platform": "linkedin", "url": "https://linkedin.com"}]},
    })
    assert isinstance(b, SocialLinksBlock)
    assert b.content.links[0].platform == "linkedin"


def test_union_rejects_unknown_type():
    with pytest.raises(ValidationError):
        adapter.validate_python({"id": "c", "type": "carousel"})


# ── Registry ─────────────────────────────────────────────────────────────────

def test_registry_covers_every_type():
    assert set(BLOCK_CLASSES) == set(BLOCK_SPECS) == set(TYPE_STYLE_DEFAULTS)
    assert len(BLOCK_CLASSES) == 14


@pytest.mark.parametrize("block_type", sorted(BLOCK_CLASSES))
def test_default_content_is_valid(block_type):
    cls = get_block_class(block_type)
    block = cls(id="x", content=default_content(block_type))
    assert block.type == block_type


def test_heavy_and_wrapper_types():
    assert HEAVY_TYPES == {"hero", "image", "feature-grid", "testimonial", "stats", "comparison"}
    assert WRAPPER_TYPES == {"logo", "spacer"}


def test_primary_text_fields_exist_on_content():
    for block_type, field in PRIMARY_TEXT_FIELDS.items():
        assert field in get_block_class(block_type).model_fields["content"].annotation.model_fields


def test_get_block_class_unknown():
    with pytest.raises(KeyError):
        get_block_class("carousel")


def test_default_content_returns_copy():
    first = default_content("stats")
    first["stats"].append({"value": "1", "label": "x"})
    assert len(default_content("stats")["stats"]) == 3
