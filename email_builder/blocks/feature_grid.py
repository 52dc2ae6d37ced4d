"""Bloc Feature Grid — fonctionnalités en grille (icône, titre, description)."""
from typing import List, Literal, Optional
from pydantic import Field
from .base import Alignment, BaseBlock, BlockContent, BlockSettings, HexColor, Padding


class FeatureItem(BlockContent):
    icon: Optional[str] = None
    title: str
    description: str = ""


class FeatureGridSettings(BlockSettings):
    layout: Optional[Literal["single-col", "2-col", "3-col"]] = None
    align: Optional[Alignment] = None
    title_font_size: Optional[int] = Field(default=None, ge=1)
    title_color: Optional[HexColor] = None
    description_font_size: Optional[int] = Field(default=None, ge=1)
    description_color: Optional[HexColor] = None
    padding: Optional[Padding] = None


class FeatureGridContent(BlockContent):
    features: List[FeatureItem] = Field(default_factory=list)


class FeatureGridBlock(BaseBlock):
    type: Literal["feature-grid"] = "feature-grid"
    content: FeatureGridContent = FeatureGridContent()
    settings: FeatureGridSettings = FeatureGridSettings()
