"""
Registry des blocs — métadonnées par type, contenus par défaut, styles par défaut.

Les styles par défaut sont fusionnés par le renderer entre les réglages globaux
et les settings du bloc (cf. renderer.styles.effective_style).
"""
import copy
from typing import Dict, FrozenSet, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict

from .base import BaseBlock, Padding
from .logo import LogoBlock
from .spacer import SpacerBlock
from .heading import HeadingBlock
from .text import TextBlock
from .image import ImageBlock
from .button import ButtonBlock
from .divider import DividerBlock
from .hero import HeroBlock
from .stats import StatsBlock
from .testimonial import TestimonialBlock
from .feature_grid import FeatureGridBlock
from .comparison import ComparisonBlock
from .social_links import SocialLinksBlock
from .footer import FooterBlock


class BlockSpec(BaseModel):
    """Fiche catalogue d'un type de bloc."""
    model_config = ConfigDict(frozen=True)

    type: str
    display_name: str
    category: Literal["layout", "content", "media", "action", "structure"]
    description: str = ""
    heavy: bool = False
    wrapper: bool = False


BLOCK_CLASSES: Dict[str, Type[BaseBlock]] = {
    "logo":         LogoBlock,
    "spacer":       SpacerBlock,
    "heading":      HeadingBlock,
    "text":         TextBlock,
    "image":        ImageBlock,
    "button":       ButtonBlock,
    "divider":      DividerBlock,
    "hero":         HeroBlock,
    "stats":        StatsBlock,
    "testimonial":  TestimonialBlock,
    "feature-grid": FeatureGridBlock,
    "comparison":   ComparisonBlock,
    "social-links": SocialLinksBlock,
    "footer":       FooterBlock,
}

BLOCK_SPECS: Dict[str, BlockSpec] = {spec.type: spec for spec in [
    BlockSpec(type="logo", display_name="Logo", category="layout",
              description="Logo de marque en tête d'email", wrapper=True),
    BlockSpec(type="spacer", display_name="Espacement", category="layout",
              description="Espace vertical", wrapper=True),
    BlockSpec(type="heading", display_name="Titre", category="content",
              description="Titre de section"),
    BlockSpec(type="text", display_name="Texte", category="content",
              description="Paragraphe de corps"),
    BlockSpec(type="image", display_name="Image", category="media",
              description="Visuel avec légende optionnelle", heavy=True),
    BlockSpec(type="button", display_name="Bouton", category="action",
              description="Appel à l'action"),
    BlockSpec(type="divider", display_name="Séparateur", category="layout",
              description="Ligne de séparation"),
    BlockSpec(type="hero", display_name="Hero", category="content",
              description="Accroche principale", heavy=True),
    BlockSpec(type="stats", display_name="Chiffres clés", category="content",
              description="Statistiques en colonnes", heavy=True),
    BlockSpec(type="testimonial", display_name="Témoignage", category="content",
              description="Citation client", heavy=True),
    BlockSpec(type="feature-grid", display_name="Grille de fonctionnalités", category="content",
              description="Fonctionnalités en grille", heavy=True),
    BlockSpec(type="comparison", display_name="Avant / Après", category="content",
              description="Comparaison côte à côte", heavy=True),
    BlockSpec(type="social-links", display_name="Réseaux sociaux", category="action",
              description="Liens vers les réseaux sociaux"),
    BlockSpec(type="footer", display_name="Pied de page", category="structure",
              description="Mentions légales et désinscription"),
]}

HEAVY_TYPES: FrozenSet[str] = frozenset(t for t, s in BLOCK_SPECS.items() if s.heavy)
WRAPPER_TYPES: FrozenSet[str] = frozenset(t for t, s in BLOCK_SPECS.items() if s.wrapper)

# Champ texte principal par type, source du rendu texte brut
PRIMARY_TEXT_FIELDS: Dict[str, str] = {
    "heading":     "text",
    "text":        "text",
    "hero":        "headline",
    "button":      "text",
    "testimonial": "quote",
    "footer":      "company_name",
}

# ── Styles par défaut (grille 8px) ──────────────────────────────────────────

TYPE_STYLE_DEFAULTS: Dict[str, dict] = {
    "logo": {
        "align": "center", "width": 160,
        "padding": Padding(top=24, right=24, bottom=16, left=24),
    },
    "spacer": {"height": 32},
    "heading": {
        "font_size": 30, "font_weight": 700, "color": "#111827", "align": "left",
        "line_height": 1.25, "padding": Padding(top=24, right=24, bottom=8, left=24),
    },
    "text": {
        "font_size": 16, "font_weight": 400, "color": "#374151", "align": "left",
        "line_height": 1.6, "padding": Padding(top=8, right=24, bottom=16, left=24),
    },
    "image": {
        "align": "center", "border_radius": 0,
        "padding": Padding(top=16, right=24, bottom=16, left=24),
    },
    "button": {
        "style": "solid", "color": "#2563eb", "text_color": "#ffffff", "align": "center",
        "border_radius": 8, "font_size": 16, "font_weight": 600,
        "padding": Padding(top=16, right=32, bottom=16, left=32),
        "container_padding": Padding(top=16, right=24, bottom=16, left=24),
    },
    "divider": {
        "style": "solid", "color": "#e5e7eb", "thickness": 1, "width": 100, "align": "center",
        "padding": Padding(top=16, right=24, bottom=16, left=24),
    },
    "hero": {
        "background_color": "#111827", "align": "center",
        "headline_font_size": 40, "headline_font_weight": 800, "headline_color": "#ffffff",
        "subheadline_font_size": 18, "subheadline_color": "#d1d5db",
        "padding": Padding(top=48, right=32, bottom=48, left=32),
    },
    "stats": {
        "layout": "3-col", "align": "center",
        "value_font_size": 36, "value_color": "#111827",
        "label_font_size": 14, "label_color": "#6b7280",
        "padding": Padding(top=32, right=24, bottom=32, left=24),
    },
    "testimonial": {
        "background_color": "#f9fafb", "border_color": "#e5e7eb", "border_width": 1,
        "border_radius": 8, "quote_font_size": 18, "quote_color": "#1f2937",
        "author_color": "#4b5563", "padding": Padding(top=32, right=32, bottom=32, left=32),
    },
    "feature-grid": {
        "layout": "2-col", "align": "left",
        "title_font_size": 18, "title_color": "#111827",
        "description_font_size": 14, "description_color": "#4b5563",
        "padding": Padding(top=32, right=24, bottom=32, left=24),
    },
    "comparison": {
        "before_background_color": "#fef2f2", "after_background_color": "#f0fdf4",
        "label_color": "#111827", "content_font_size": 15, "content_color": "#374151",
        "border_radius": 8, "padding": Padding(top=32, right=24, bottom=32, left=24),
    },
    "social-links": {
        "align": "center", "icon_size": 32, "spacing": 8,
        "padding": Padding(top=16, right=24, bottom=16, left=24),
    },
    "footer": {
        "background_color": "#f9fafb", "text_color": "#4b5563", "link_color": "#2563eb",
        "font_size": 12, "align": "center", "line_height": 1.5,
        "padding": Padding(top=32, right=24, bottom=32, left=24),
    },
}

# ── Contenus par défaut (create_block) ──────────────────────────────────────

_DEFAULT_CONTENT: Dict[str, dict] = {
    "logo": {"alt_text": "Logo"},
    "spacer": {},
    "heading": {"text": "Votre titre", "level": 2},
    "text": {"text": "Écrivez votre message ici."},
    "image": {"alt_text": "Image"},
    "button": {"text": "En savoir plus", "url": "https://example.com"},
    "divider": {},
    "hero": {
        "headline": "Une accroche qui compte",
        "subheadline": "Un sous-titre qui précise la promesse.",
    },
    "stats": {"stats": [
        {"value": "98%", "label": "Clients satisfaits"},
        {"value": "2x", "label": "Plus rapide"},
        {"value": "24/7", "label": "Support"},
    ]},
    "testimonial": {
        "quote": "Un outil qui a changé notre façon de travailler.",
        "author": "Camille Martin",
        "role": "Directrice marketing",
    },
    "feature-grid": {"features": [
        {"icon": "⚡", "title": "Rapide", "description": "Prêt en quelques minutes."},
        {"icon": "🔒", "title": "Sûr", "description": "Vos données restent chez vous."},
    ]},
    "comparison": {
        "before": {"label": "Avant", "text": "Des heures de mise en page."},
        "after": {"label": "Après", "text": "Un email prêt en quelques clics."},
    },
    "social-links": {"links": [
        {"platform": "linkedin", "url": "https://www.linkedin.com"},
        {"platform": "instagram", "url": "https://www.instagram.com"},
    ]},
    "footer": {
        "company_name": "Votre entreprise",
        "company_address": "1 rue de l'Exemple, 75000 Paris",
    },
}


def get_block_class(block_type: str) -> Type[BaseBlock]:
    """Classe pydantic d'un type de bloc. KeyError si le type est inconnu."""
    try:
        return BLOCK_CLASSES[block_type]
    except KeyError:
        raise KeyError(f"Type de bloc inconnu : {block_type!r}. Registry : {list(BLOCK_CLASSES)}") from None


def default_content(block_type: str) -> Optional[dict]:
    """Copie du contenu par défaut d'un type (None si inconnu)."""
    content = _DEFAULT_CONTENT.get(block_type)
    return copy.deepcopy(content) if content is not None else None
