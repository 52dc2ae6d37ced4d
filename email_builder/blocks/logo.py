"""Bloc Logo — image de marque en tête d'email."""
from typing import Literal, Optional
from pydantic import Field
from .base import Alignment, BaseBlock, BlockContent, BlockSettings, HexColor, Padding


class LogoSettings(BlockSettings):
    align: Optional[Alignment] = None
    width: Optional[int] = Field(default=None, ge=1)
    height: Optional[int] = Field(default=None, ge=1)
    background_color: Optional[HexColor] = None
    padding: Optional[Padding] = None


class LogoContent(BlockContent):
    image_url: str = ""
    alt_text: str = ""
    link_url: Optional[str] = None


class LogoBlock(BaseBlock):
    type: Literal["logo"] = "logo"
    content: LogoContent = LogoContent()
    settings: LogoSettings = LogoSettings()
