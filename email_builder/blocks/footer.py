"""Bloc Footer — mentions légales, adresse et lien de désinscription."""
from typing import Literal, Optional
from pydantic import Field
from .base import Alignment, BaseBlock, BlockContent, BlockSettings, HexColor, Padding


class FooterSettings(BlockSettings):
    background_color: Optional[HexColor] = None
    text_color: Optional[HexColor] = None
    link_color: Optional[HexColor] = None
    font_size: Optional[int] = Field(default=None, ge=1)
    align: Optional[Alignment] = None
    line_height: Optional[float] = Field(default=None, gt=0)
    padding: Optional[Padding] = None


class FooterContent(BlockContent):
    company_name: str = ""
    company_address: Optional[str] = None
    custom_text: Optional[str] = None
    unsubscribe_url: str = "{{unsubscribe_url}}"
    preferences_url: Optional[str] = None


class FooterBlock(BaseBlock):
    type: Literal["footer"] = "footer"
    content: FooterContent = FooterContent()
    settings: FooterSettings = FooterSettings()
