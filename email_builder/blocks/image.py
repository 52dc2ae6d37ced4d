"""Bloc Image — visuel pleine largeur ou aligné, avec légende optionnelle."""
from typing import Literal, Optional
from pydantic import Field
from .base import Alignment, BaseBlock, BlockContent, BlockSettings, Padding


class ImageSettings(BlockSettings):
    align: Optional[Alignment] = None
    width: Optional[int] = Field(default=None, ge=1)
    height: Optional[int] = Field(default=None, ge=1)
    border_radius: Optional[int] = Field(default=None, ge=0)
    padding: Optional[Padding] = None


class ImageContent(BlockContent):
    image_url: str = ""
    alt_text: str = ""
    caption: Optional[str] = None
    link_url: Optional[str] = None


class ImageBlock(BaseBlock):
    type: Literal["image"] = "image"
    content: ImageContent = ImageContent()
    settings: ImageSettings = ImageSettings()
