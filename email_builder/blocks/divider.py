"""Bloc Divider — séparateur horizontal (ligne ou motif décoratif)."""
from typing import Literal, Optional
from pydantic import Field
from .base import Alignment, BaseBlock, BlockContent, BlockSettings, HexColor, Padding


class DividerSettings(BlockSettings):
    style: Optional[Literal["solid", "dashed", "dotted", "decorative"]] = None
    color: Optional[HexColor] = None
    thickness: Optional[int] = Field(default=None, ge=1)
    width: Optional[int] = Field(default=None, ge=1, le=100)  # pourcentage
    align: Optional[Alignment] = None
    padding: Optional[Padding] = None


class DividerContent(BlockContent):
    decorative_element: Optional[str] = None


class DividerBlock(BaseBlock):
    type: Literal["divider"] = "divider"
    content: DividerContent = DividerContent()
    settings: DividerSettings = DividerSettings()
