"""Bloc Comparison — avant / après côte à côte."""
from typing import Literal, Optional
from pydantic import Field
from .base import BaseBlock, BlockContent, BlockSettings, HexColor, Padding


class ComparisonSide(BlockContent):
    label: str = ""
    text: str = ""


class ComparisonSettings(BlockSettings):
    before_background_color: Optional[HexColor] = None
    after_background_color: Optional[HexColor] = None
    label_color: Optional[HexColor] = None
    content_font_size: Optional[int] = Field(default=None, ge=1)
    content_color: Optional[HexColor] = None
    border_radius: Optional[int] = Field(default=None, ge=0)
    padding: Optional[Padding] = None


class ComparisonContent(BlockContent):
    before: ComparisonSide = ComparisonSide(label="Avant")
    after: ComparisonSide = ComparisonSide(label="Après")


class ComparisonBlock(BaseBlock):
    type: Literal["comparison"] = "comparison"
    content: ComparisonContent = ComparisonContent()
    settings: ComparisonSettings = ComparisonSettings()
