"""Tests registry de sections."""
import pytest

from email_builder.blocks import TextBlock
from email_builder.core.schemas import SectionTemplate
from email_builder.errors import UnknownSectionError
from email_builder.sections import (
    BUILTIN_SECTIONS, get_section, list_sections, list_categories, register_section,
    search_sections, unregister_section,
)


def test_builtin_sections_registered():
    ids = {t.id for t in list_sections()}
    assert {"hero-with-cta", "social-proof", "feature-showcase", "before-after"} <= ids
    assert len(BUILTIN_SECTIONS) == 4


def test_list_sections_by_category():
    assert [t.id for t in list_sections("comparison")] == ["before-after"]
    assert list_sections("inexistante") == []


def test_list_categories():
    assert "hero" in list_categories()


def test_get_unknown_section():
    with pytest.raises(UnknownSectionError):
        get_section("nope")


def test_search_sections():
    assert [t.id for t in search_sections("témoignage")] == ["social-proof"]
    assert [t.id for t in search_sections("AVANT")] == ["before-after"]


def test_search_empty_query_returns_all():
    assert len(search_sections("  ")) == len(list_sections())


def test_register_and_unregister():
    template = SectionTemplate(id="test-custom", name="Custom", blocks=[TextBlock(id="x")])
    register_section(template)
    try:
        assert get_section("test-custom") is template
        with pytest.raises(ValueError):
            register_section(template)
    finally:
        unregister_section("test-custom")
    with pytest.raises(UnknownSectionError):
        get_section("test-custom")


def test_builtin_sections_pass_composition_rules():
    from email_builder.composition import validate
    from email_builder.sections import append
    for template in BUILTIN_SECTIONS:
        assert validate(append(template, []).blocks) == [], template.id
