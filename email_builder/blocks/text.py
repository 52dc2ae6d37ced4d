"""Bloc Text — paragraphe de corps."""
from typing import Literal, Optional
from pydantic import Field
from .base import Alignment, BaseBlock, BlockContent, BlockSettings, HexColor, Padding


class TextSettings(BlockSettings):
    font_size: Optional[int] = Field(default=None, ge=1)
    font_weight: Optional[int] = Field(default=None, ge=100, le=900)
    color: Optional[HexColor] = None
    align: Optional[Alignment] = None
    line_height: Optional[float] = Field(default=None, gt=0)
    background_color: Optional[HexColor] = None
    padding: Optional[Padding] = None


class TextContent(BlockContent):
    text: str = ""


class TextBlock(BaseBlock):
    type: Literal["text"] = "text"
    content: TextContent = TextContent()
    settings: TextSettings = TextSettings()
