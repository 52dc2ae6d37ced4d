"""Bloc Spacer — espace vertical vide."""
from typing import Literal, Optional
from pydantic import Field
from .base import BaseBlock, BlockContent, BlockSettings, HexColor


class SpacerSettings(BlockSettings):
    height: Optional[int] = Field(default=None, ge=0)
    background_color: Optional[HexColor] = None


class SpacerContent(BlockContent):
    pass


class SpacerBlock(BaseBlock):
    type: Literal["spacer"] = "spacer"
    content: SpacerContent = SpacerContent()
    settings: SpacerSettings = SpacerSettings()
