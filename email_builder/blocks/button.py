"""Bloc Button — CTA (solid rendu en bouton VML pour Outlook)."""
from typing import Literal, Optional
from pydantic import Field
from .base import Alignment, BaseBlock, BlockContent, BlockSettings, HexColor, Padding


class ButtonSettings(BlockSettings):
    style: Optional[Literal["solid", "outline", "ghost"]] = None
    color: Optional[HexColor] = None
    text_color: Optional[HexColor] = None
    align: Optional[Alignment] = None
    border_radius: Optional[int] = Field(default=None, ge=0)
    font_size: Optional[int] = Field(default=None, ge=1)
    font_weight: Optional[int] = Field(default=None, ge=100, le=900)
    padding: Optional[Padding] = None
    container_padding: Optional[Padding] = None


class ButtonContent(BlockContent):
    text: str = ""
    url: str = "#"


class ButtonBlock(BaseBlock):
    type: Literal["button"] = "button"
    content: ButtonContent = ButtonContent()
    settings: ButtonSettings = ButtonSettings()
