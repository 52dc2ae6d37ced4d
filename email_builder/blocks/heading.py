"""Bloc Heading — titre de section (niveaux 1 à 3)."""
from typing import Literal, Optional
from pydantic import Field
from .base import Alignment, BaseBlock, BlockContent, BlockSettings, HexColor, Padding


class HeadingSettings(BlockSettings):
    font_size: Optional[int] = Field(default=None, ge=1)
    font_weight: Optional[int] = Field(default=None, ge=100, le=900)
    color: Optional[HexColor] = None
    align: Optional[Alignment] = None
    line_height: Optional[float] = Field(default=None, gt=0)
    letter_spacing: Optional[str] = Field(default=None, pattern=r"^-?\d+(\.\d+)?(px|em)$")
    background_color: Optional[HexColor] = None
    padding: Optional[Padding] = None


class HeadingContent(BlockContent):
    text: str = ""
    level: Literal[1, 2, 3] = 1


class HeadingBlock(BaseBlock):
    type: Literal["heading"] = "heading"
    content: HeadingContent = HeadingContent()
    settings: HeadingSettings = HeadingSettings()
