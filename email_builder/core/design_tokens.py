"""
Tokens de design email — couleurs, contraste WCAG, grille 8px, échelle typographique.
"""
from bisect import bisect_right
import math

GRID_UNIT = 8
MIN_TOUCH_TARGET = 44
MIN_CONTRAST_RATIO = 4.5
BUTTON_LINE_HEIGHT = 1.2

# Échelle typographique (px) : un « pas » = une marche de cette échelle
TYPE_SCALE = (12, 14, 16, 18, 20, 24, 30, 36, 48, 60)


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convertit #RRGGBB en (R, G, B)."""
    hex_color = hex_color.lstrip("#")
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def darken(hex_color: str, percent: int = 20) -> str:
    """Assombrit une couleur de X%."""
    r, g, b = hex_to_rgb(hex_color)
    factor = 1 - (percent / 100)
    return rgb_to_hex(max(0, int(r * factor)), max(0, int(g * factor)), max(0, int(b * factor)))


def relative_luminance(hex_color: str) -> float:
    """Luminance relative WCAG 2.x (0 = noir, 1 = blanc)."""
    def channel(value: int) -> float:
        c = value / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = hex_to_rgb(hex_color)
    return 0.2126 * channel(r) + 0.7152 * channel(g) + 0.0722 * channel(b)


def contrast_ratio(foreground: str, background: str) -> float:
    """Ratio de contraste WCAG entre deux couleurs (1.0 à 21.0)."""
    l1 = relative_luminance(foreground)
    l2 = relative_luminance(background)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def best_text_color(background: str) -> str:
    """Noir ou blanc, selon ce qui contraste le plus avec le fond."""
    if contrast_ratio("#000000", background) >= contrast_ratio("#ffffff", background):
        return "#000000"
    return "#ffffff"


# ── Grille 8px ───────────────────────────────────────────────────────────────

def is_on_grid(value: int) -> bool:
    return value % GRID_UNIT == 0


def snap_to_grid(value: int) -> int:
    """Valeur de grille la plus proche (arrondi au supérieur à mi-chemin)."""
    return int(math.floor(value / GRID_UNIT + 0.5)) * GRID_UNIT


def ceil_to_grid(value: float) -> int:
    """Plus petite valeur de grille >= value."""
    return int(math.ceil(value / GRID_UNIT)) * GRID_UNIT


# ── Échelle typographique ────────────────────────────────────────────────────

def scale_step(font_size: float) -> int:
    """Nombre de marches de l'échelle inférieures ou égales à font_size."""
    return bisect_right(TYPE_SCALE, font_size)
