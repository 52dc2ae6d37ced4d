"""Bloc Hero — accroche principale sur fond couleur, gradient ou image."""
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from .base import Alignment, BaseBlock, BlockContent, BlockSettings, HexColor, Padding


class Gradient(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    start: HexColor
    end: HexColor
    direction: Literal["to-right", "to-bottom", "diagonal"] = "to-bottom"


class HeroSettings(BlockSettings):
    background_color: Optional[HexColor] = None
    background_gradient: Optional[Gradient] = None
    align: Optional[Alignment] = None
    headline_font_size: Optional[int] = Field(default=None, ge=1)
    headline_font_weight: Optional[int] = Field(default=None, ge=100, le=900)
    headline_color: Optional[HexColor] = None
    subheadline_font_size: Optional[int] = Field(default=None, ge=1)
    subheadline_color: Optional[HexColor] = None
    padding: Optional[Padding] = None


class HeroContent(BlockContent):
    headline: str = ""
    subheadline: Optional[str] = None
    image_url: Optional[str] = None


class HeroBlock(BaseBlock):
    type: Literal["hero"] = "hero"
    content: HeroContent = HeroContent()
    settings: HeroSettings = HeroSettings()
