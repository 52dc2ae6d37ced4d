"""Tests tokens de design et merge tags."""
import pytest

from email_builder.core.design_tokens import (
    best_text_color, ceil_to_grid, contrast_ratio, darken, hex_to_rgb, is_on_grid, scale_step, snap_to_grid,
)
from email_builder.core.merge_tags import resolve_merge_tags


def test_hex_to_rgb():
    assert hex_to_rgb("#2563eb") == (37, 99, 235)


def test_contrast_extremes():
    assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)
    assert contrast_ratio("#ffffff", "#000000") == pytest.approx(21.0)
    assert contrast_ratio("#777777", "#777777") == pytest.approx(1.0)


def test_darken():
    assert darken("#cccccc", 10) == "#b7b7b7"
    assert darken("#000000", 50) == "#000000"


def test_best_text_color():
    assert best_text_color("#111827") == "#ffffff"
    assert best_text_color("#f9fafb") == "#000000"


@pytest.mark.parametrize("value,expected", [(3, 0), (4, 8), (10, 8), (12, 16), (20, 24), (32, 32)])
def test_snap_to_grid(value, expected):
    assert snap_to_grid(value) == expected
    assert is_on_grid(expected)


def test_ceil_to_grid():
    assert ceil_to_grid(12.4) == 16
    assert ceil_to_grid(16) == 16
    assert ceil_to_grid(0) == 0


@pytest.mark.parametrize("size,step", [(11, 0), (12, 1), (16, 3), (17, 3), (48, 9), (60, 10), (72, 10)])
def test_scale_step(size, step):
    assert scale_step(size) == step


def test_merge_tags():
    assert resolve_merge_tags("Bonjour {{ first_name }}", {"first_name": "Ana"}) == "Bonjour Ana"
    assert resolve_merge_tags("{{a}}-{{b}}", {"a": "1"}) == "1-{{b}}"
    assert resolve_merge_tags("{{a}}", None) == "{{a}}"
