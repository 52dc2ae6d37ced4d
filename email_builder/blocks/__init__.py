"""
Blocs email — exports publics + Block discriminé par `type`.
"""
from typing import Annotated, Union
from pydantic import Field

from .base import BaseBlock, BlockContent, BlockSettings, Padding, HexColor, Alignment
from .logo import LogoBlock, LogoContent, LogoSettings
from .spacer import SpacerBlock, SpacerContent, SpacerSettings
from .heading import HeadingBlock, HeadingContent, HeadingSettings
from .text import TextBlock, TextContent, TextSettings
from .image import ImageBlock, ImageContent, ImageSettings
from .button import ButtonBlock, ButtonContent, ButtonSettings
from .divider import DividerBlock, DividerContent, DividerSettings
from .hero import HeroBlock, HeroContent, HeroSettings, Gradient
from .stats import StatsBlock, StatsContent, StatsSettings, StatItem
from .testimonial import TestimonialBlock, TestimonialContent, TestimonialSettings
from .feature_grid import FeatureGridBlock, FeatureGridContent, FeatureGridSettings, FeatureItem
from .comparison import ComparisonBlock, ComparisonContent, ComparisonSettings, ComparisonSide
from .social_links import SocialLinksBlock, SocialLinksContent, SocialLinksSettings, SocialLink
from .footer import FooterBlock, FooterContent, FooterSettings

# Union discriminée par type (ensemble fermé des variantes)
Block = Annotated[
    Union[
        LogoBlock,
        SpacerBlock,
        HeadingBlock,
        TextBlock,
        ImageBlock,
        ButtonBlock,
        DividerBlock,
        HeroBlock,
        StatsBlock,
        TestimonialBlock,
        FeatureGridBlock,
        ComparisonBlock,
        SocialLinksBlock,
        FooterBlock,
    ],
    Field(discriminator="type"),
]

from .registry import (  # noqa: E402
    BLOCK_CLASSES, BLOCK_SPECS, BlockSpec,
    HEAVY_TYPES, WRAPPER_TYPES, PRIMARY_TEXT_FIELDS, TYPE_STYLE_DEFAULTS,
    get_block_class, default_content,
)

__all__ = [
    # Base
    "BaseBlock", "BlockContent", "BlockSettings", "Padding", "HexColor", "Alignment", "Block",
    # Layout
    "LogoBlock", "LogoContent", "LogoSettings",
    "SpacerBlock", "SpacerContent", "SpacerSettings",
    "DividerBlock", "DividerContent", "DividerSettings",
    "FooterBlock", "FooterContent", "FooterSettings",
    # Contenu
    "HeadingBlock", "HeadingContent", "HeadingSettings",
    "TextBlock", "TextContent", "TextSettings",
    "HeroBlock", "HeroContent", "HeroSettings", "Gradient",
    "StatsBlock", "StatsContent", "StatsSettings", "StatItem",
    "TestimonialBlock", "TestimonialContent", "TestimonialSettings",
    "FeatureGridBlock", "FeatureGridContent", "FeatureGridSettings", "FeatureItem",
    "ComparisonBlock", "ComparisonContent", "ComparisonSettings", "ComparisonSide",
    # Média / action
    "ImageBlock", "ImageContent", "ImageSettings",
    "ButtonBlock", "ButtonContent", "ButtonSettings",
    "SocialLinksBlock", "SocialLinksContent", "SocialLinksSettings", "SocialLink",
    # Registry
    "BLOCK_CLASSES", "BLOCK_SPECS", "BlockSpec",
    "HEAVY_TYPES", "WRAPPER_TYPES", "PRIMARY_TEXT_FIELDS", "TYPE_STYLE_DEFAULTS",
    "get_block_class", "default_content",
]
