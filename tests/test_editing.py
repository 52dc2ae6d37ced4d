"""Tests édition bloc par bloc."""
import pytest
from pydantic import ValidationError

from email_builder.blocks import TextBlock, Padding
from email_builder.sections import create_block, add_block, remove_block, move_block, update_block


def test_create_block_uses_default_content():
    block = create_block("button")
    assert block.type == "button"
    assert block.content.text == "En savoir plus"
    assert block.id.startswith("button-")


def test_create_block_with_overrides():
    block = create_block("text", content={"text": "Bonjour"}, settings={"color": "#111111"})
    assert block.content.text == "Bonjour"
    assert block.settings.color == "#111111"


def test_create_block_unknown_type():
    with pytest.raises(KeyError):
        create_block("carousel")


def test_add_block_by_type(build):
    blocks = build("text")
    result = add_block(blocks, "heading", 0)
    assert [b.type for b in result.blocks] == ["heading", "text"]
    assert [b.position for b in result.blocks] == [0, 1]


def test_add_block_duplicate_id_is_reassigned(build):
    blocks = build("text")
    result = add_block(blocks, TextBlock(id=blocks[0].id))
    assert result.success
    assert len({b.id for b in result.blocks}) == 2


def test_add_block_out_of_range(build):
    result = add_block(build("text"), "text", 7)
    assert result.error_code == "out_of_range"


def test_remove_block(build):
    blocks = build("text", "button", "footer")
    result = remove_block(blocks, blocks[1].id)
    assert [b.type for b in result.blocks] == ["text", "footer"]
    assert [b.position for b in result.blocks] == [0, 1]


def test_remove_unknown_block(build):
    assert remove_block(build("text"), "nope").error_code == "not_found"


def test_move_block(build):
    blocks = build("heading", "text", "button")
    result = move_block(blocks, blocks[0].id, 2)
    assert [b.type for b in result.blocks] == ["text", "button", "heading"]
    assert [b.position for b in result.blocks] == [0, 1, 2]


def test_move_block_out_of_range(build):
    blocks = build("heading", "text")
    assert move_block(blocks, blocks[0].id, 2).error_code == "out_of_range"


def test_update_block_partial_content(build):
    blocks = build("testimonial")
    result = update_block(blocks, blocks[0].id, content={"quote": "Génial"})
    updated = result.blocks[0]
    assert updated.content.quote == "Génial"
    assert updated.content.author == blocks[0].content.author
    assert updated.position == 0


def test_update_block_nested_settings_merge(build):
    block = create_block("text", settings={"padding": {"top": 8, "right": 24, "bottom": 8, "left": 24}})
    result = update_block([block], block.id, settings={"padding": {"top": 32}})
    assert result.blocks[0].settings.padding == Padding(top=32, right=24, bottom=8, left=24)


def test_update_block_invalid_raises_and_keeps_original(build):
    blocks = build("text")
    with pytest.raises(ValidationError):
        update_block(blocks, blocks[0].id, settings={"color": "rouge"})
    assert blocks[0].settings.color is None


def test_update_unknown_block(build):
    assert update_block(build("text"), "nope", content={"text": "x"}).error_code == "not_found"
