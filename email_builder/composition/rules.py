"""
Règles de composition — détection + correction automatique.

Chaque règle est pure : `detect` lit la liste de blocs, `fix` renvoie une
nouvelle liste (les blocs non concernés sont réutilisés tels quels).
L'ordre de DEFAULT_RULES fixe l'ordre de rapport et de correction.
"""
import re
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple

from ..blocks import (
    BLOCK_SPECS, HEAVY_TYPES, BaseBlock, Padding, SpacerBlock, SpacerSettings,
)
from ..core.design_tokens import (
    BUTTON_LINE_HEIGHT, GRID_UNIT, MIN_CONTRAST_RATIO, MIN_TOUCH_TARGET, TYPE_SCALE,
    best_text_color, ceil_to_grid, contrast_ratio, darken, is_on_grid, scale_step, snap_to_grid,
)
from ..core.schemas import RuleViolation, Severity
from ..renderer.styles import effective_style
from ..sections.allocator import block_ids, generate_id, index_of, renumber


def with_settings(block: BaseBlock, **changes: Any) -> BaseBlock:
    return block.model_copy(update={"settings": block.settings.model_copy(update=changes)})


def with_content(block: BaseBlock, **changes: Any) -> BaseBlock:
    return block.model_copy(update={"content": block.content.model_copy(update=changes)})


def _replace_block(blocks: Sequence[BaseBlock], block_id: str, new_block: BaseBlock) -> List[BaseBlock]:
    return [new_block if b.id == block_id else b for b in blocks]


class CompositionRule:
    """Règle de base. Les sous-classes implémentent `check` (et `fix` si auto_fixable)."""

    id: str = ""
    name: str = ""
    category: str = ""
    severity: Severity = "warning"
    auto_fixable: bool = True
    target_types: FrozenSet[str] = frozenset()

    def applies_to(self, block: BaseBlock) -> bool:
        return not self.target_types or block.type in self.target_types

    def check(self, block: BaseBlock, blocks: Sequence[BaseBlock], index: int) -> Optional[str]:
        """Message de violation pour ce bloc, None s'il est conforme."""
        raise NotImplementedError

    def detect(self, blocks: Sequence[BaseBlock]) -> List[RuleViolation]:
        violations = []
        for index, block in enumerate(blocks):
            if not self.applies_to(block):
                continue
            message = self.check(block, blocks, index)
            if message:
                violations.append(RuleViolation(
                    block_id=block.id, rule_id=self.id, severity=self.severity,
                    message=message, auto_fixable=self.auto_fixable,
                ))
        return violations

    def fix(self, blocks: Sequence[BaseBlock], block_id: str) -> List[BaseBlock]:
        return list(blocks)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"


# ── Structure ───────────────────────────────────────────────────────────────

class FooterLastRule(CompositionRule):
    id = "footer-last"
    name = "Footer en dernière position"
    category = "structure"
    severity = "error"
    target_types = frozenset({"footer"})

    def check(self, block, blocks, index):
        # une suite de footers en fin de document est acceptée
        if any(b.type != "footer" for b in blocks[index + 1:]):
            return "Le footer doit être le dernier bloc de l'email"
        return None

    def fix(self, blocks, block_id):
        index = index_of(blocks, block_id)
        if index < 0:
            return list(blocks)
        footer = blocks[index]
        return renumber([b for b in blocks if b.id != block_id] + [footer])


class NoAdjacentHeavyRule(CompositionRule):
    id = "no-adjacent-heavy"
    name = "Pas de blocs lourds identiques consécutifs"
    category = "adjacency"
    severity = "warning"
    target_types = HEAVY_TYPES

    spacer_height = 4 * GRID_UNIT

    def check(self, block, blocks, index):
        if index > 0 and blocks[index - 1].type == block.type:
            name = BLOCK_SPECS[block.type].display_name
            return f"Deux blocs « {name} » consécutifs alourdissent la lecture"
        return None

    def fix(self, blocks, block_id):
        index = index_of(blocks, block_id)
        if index <= 0:
            return list(blocks)
        spacer = SpacerBlock(
            id=generate_id("spacer", block_ids(blocks)),
            settings=SpacerSettings(height=self.spacer_height),
        )
        return renumber(list(blocks[:index]) + [spacer] + list(blocks[index:]))


# ── Typographie ─────────────────────────────────────────────────────────────

FONT_SIZE_BOUNDS: Dict[str, Tuple[str, int, int]] = {
    "text":    ("font_size", 12, 24),
    "heading": ("font_size", 18, 60),
    "button":  ("font_size", 12, 24),
    "hero":    ("headline_font_size", 24, 64),
    "footer":  ("font_size", 10, 16),
}


class FontSizeRangeRule(CompositionRule):
    id = "font-size-range"
    name = "Taille de police lisible"
    category = "range"
    severity = "warning"
    target_types = frozenset(FONT_SIZE_BOUNDS)

    def check(self, block, blocks, index):
        field, low, high = FONT_SIZE_BOUNDS[block.type]
        size = effective_style(block)[field]
        if not low <= size <= high:
            return f"Taille de police {size}px hors plage ({low}–{high}px)"
        return None

    def fix(self, blocks, block_id):
        index = index_of(blocks, block_id)
        if index < 0:
            return list(blocks)
        block = blocks[index]
        field, low, high = FONT_SIZE_BOUNDS[block.type]
        size = effective_style(block)[field]
        return _replace_block(blocks, block_id, with_settings(block, **{field: min(high, max(low, size))}))


class TypographyHierarchyRule(CompositionRule):
    """Un titre doit dépasser d'au moins une marche de l'échelle le texte qui l'entoure."""

    id = "typography-hierarchy"
    name = "Hiérarchie typographique"
    category = "hierarchy"
    severity = "warning"
    target_types = frozenset({"heading"})

    @staticmethod
    def _adjacent_text(blocks, index) -> List[BaseBlock]:
        neighbours = [blocks[i] for i in (index - 1, index + 1) if 0 <= i < len(blocks)]
        return [b for b in neighbours if b.type == "text"]

    def check(self, block, blocks, index):
        heading_size = effective_style(block)["font_size"]
        for text in self._adjacent_text(blocks, index):
            text_size = effective_style(text)["font_size"]
            if scale_step(heading_size) <= scale_step(text_size):
                return f"Titre ({heading_size}px) trop proche du texte voisin ({text_size}px)"
        return None

    def fix(self, blocks, block_id):
        index = index_of(blocks, block_id)
        if index < 0:
            return list(blocks)
        heading = blocks[index]
        texts = self._adjacent_text(blocks, index)
        if not texts:
            return list(blocks)
        result = list(blocks)
        # pas de marche au-dessus du plus grand corps : on réduit d'abord le texte
        ceiling = TYPE_SCALE[-2]
        for text in texts:
            if effective_style(text)["font_size"] > ceiling:
                result = _replace_block(result, text.id, with_settings(text, font_size=ceiling))
        largest = max(effective_style(b)["font_size"] for b in result if b.id in {t.id for t in texts})
        target = TYPE_SCALE[scale_step(largest)]
        heading_size = effective_style(heading)["font_size"]
        if heading_size < target:
            result = _replace_block(result, heading.id, with_settings(heading, font_size=target))
        return result


# ── Espacement ──────────────────────────────────────────────────────────────

_PADDING_FIELDS = ("padding", "container_padding")


class SpacingGridRule(CompositionRule):
    id = "spacing-grid-8px"
    name = "Espacements sur la grille 8px"
    category = "range"
    severity = "suggestion"

    def _off_grid(self, block: BaseBlock) -> Dict[str, Any]:
        style = effective_style(block)
        fields = {}
        for field in _PADDING_FIELDS:
            pad = style.get(field)
            if isinstance(pad, Padding) and field in type(block.settings).model_fields:
                if not all(is_on_grid(v) for v in pad.values()):
                    fields[field] = pad
        if block.type == "spacer" and not is_on_grid(style["height"]):
            fields["height"] = style["height"]
        return fields

    def check(self, block, blocks, index):
        off = self._off_grid(block)
        if off:
            return f"Espacements hors grille {GRID_UNIT}px : {', '.join(sorted(off))}"
        return None

    def fix(self, blocks, block_id):
        index = index_of(blocks, block_id)
        if index < 0:
            return list(blocks)
        block = blocks[index]
        changes = {}
        for field, value in self._off_grid(block).items():
            if isinstance(value, Padding):
                changes[field] = Padding(**{k: snap_to_grid(v) for k, v in value.model_dump().items()})
            else:
                changes[field] = snap_to_grid(value)
        return _replace_block(blocks, block_id, with_settings(block, **changes))


class TouchTargetRule(CompositionRule):
    id = "touch-target-minimum"
    name = "Zone tactile minimale"
    category = "range"
    severity = "error"
    target_types = frozenset({"button"})

    @staticmethod
    def _height(style: Dict[str, Any]) -> float:
        pad = style.get("padding") or Padding()
        return style["font_size"] * BUTTON_LINE_HEIGHT + pad.top + pad.bottom

    def check(self, block, blocks, index):
        height = self._height(effective_style(block))
        if height < MIN_TOUCH_TARGET:
            return f"Bouton de {height:.0f}px de haut (minimum {MIN_TOUCH_TARGET}px)"
        return None

    def fix(self, blocks, block_id):
        index = index_of(blocks, block_id)
        if index < 0:
            return list(blocks)
        block = blocks[index]
        style = effective_style(block)
        pad = style.get("padding") or Padding()
        needed = ceil_to_grid((MIN_TOUCH_TARGET - style["font_size"] * BUTTON_LINE_HEIGHT) / 2)
        padding = pad.model_copy(update={"top": max(pad.top, needed), "bottom": max(pad.bottom, needed)})
        return _replace_block(blocks, block_id, with_settings(block, padding=padding))


# ── Couleur ─────────────────────────────────────────────────────────────────

class ColorContrastRule(CompositionRule):
    id = "color-contrast-wcag"
    name = "Contraste WCAG AA"
    category = "color"
    severity = "error"
    target_types = frozenset({"text", "heading", "button", "footer", "hero"})

    darken_step = 10
    max_darken = 10

    @staticmethod
    def _pairs(block: BaseBlock, style: Dict[str, Any]) -> List[Tuple[str, str, str]]:
        """(champ settings du texte, couleur du texte, couleur du fond)."""
        match block.type:
            case "text" | "heading":
                return [("color", style["color"], style["background_color"])]
            case "footer":
                return [("text_color", style["text_color"], style["background_color"])]
            case "hero":
                gradient = style.get("background_gradient")
                background = gradient.start if gradient is not None else style["background_color"]
                return [
                    ("headline_color", style["headline_color"], background),
                    ("subheadline_color", style["subheadline_color"], background),
                ]
            case "button":
                if style["style"] == "solid":
                    return [("text_color", style["text_color"], style["color"])]
                return [("color", style["color"], style["background_color"])]
        return []

    def _failing(self, block: BaseBlock) -> List[Tuple[str, str, str]]:
        pairs = self._pairs(block, effective_style(block))
        return [p for p in pairs if contrast_ratio(p[1], p[2]) < MIN_CONTRAST_RATIO]

    def check(self, block, blocks, index):
        failing = self._failing(block)
        if failing:
            field, fg, bg = failing[0]
            ratio = contrast_ratio(fg, bg)
            return f"Contraste {ratio:.2f}:1 entre {fg} et {bg} (minimum {MIN_CONTRAST_RATIO}:1)"
        return None

    def _fixed_color(self, foreground: str, background: str) -> str:
        color = foreground
        for _ in range(self.max_darken):
            color = darken(color, self.darken_step)
            if contrast_ratio(color, background) >= MIN_CONTRAST_RATIO:
                return color
        return best_text_color(background)

    def fix(self, blocks, block_id):
        index = index_of(blocks, block_id)
        if index < 0:
            return list(blocks)
        block = blocks[index]
        changes = {field: self._fixed_color(fg, bg) for field, fg, bg in self._failing(block)}
        if not changes:
            return list(blocks)
        return _replace_block(blocks, block_id, with_settings(block, **changes))


# ── Accessibilité ───────────────────────────────────────────────────────────

class ImageAltTextRule(CompositionRule):
    id = "image-alt-text"
    name = "Texte alternatif des images"
    category = "accessibility"
    severity = "suggestion"
    target_types = frozenset({"image", "logo"})

    def check(self, block, blocks, index):
        if not block.content.alt_text.strip():
            return "Image sans texte alternatif"
        return None

    @staticmethod
    def derive_alt_text(block: BaseBlock) -> str:
        caption = getattr(block.content, "caption", None)
        if caption and caption.strip():
            return caption.strip()
        path = (block.content.image_url or "").split("?")[0].split("#")[0]
        stem = path.rstrip("/").rsplit("/", 1)[-1].rsplit(".", 1)[0]
        words = re.sub(r"[-_]+", " ", stem).strip()
        if words and not path.startswith("data:"):
            return words[:1].upper() + words[1:]
        return BLOCK_SPECS[block.type].display_name

    def fix(self, blocks, block_id):
        index = index_of(blocks, block_id)
        if index < 0:
            return list(blocks)
        block = blocks[index]
        return _replace_block(blocks, block_id, with_content(block, alt_text=self.derive_alt_text(block)))


def default_rules() -> List[CompositionRule]:
    """Règles par défaut, dans l'ordre de rapport."""
    return [
        FooterLastRule(),
        NoAdjacentHeavyRule(),
        FontSizeRangeRule(),
        TypographyHierarchyRule(),
        SpacingGridRule(),
        TouchTargetRule(),
        ColorContrastRule(),
        ImageAltTextRule(),
    ]
