"""Bloc Social Links — rangée d'icônes réseaux sociaux."""
from typing import List, Literal, Optional
from pydantic import Field
from .base import Alignment, BaseBlock, BlockContent, BlockSettings, HexColor, Padding

Platform = Literal["facebook", "twitter", "instagram", "linkedin", "youtube", "tiktok", "website"]


class SocialLink(BlockContent):
    platform: Platform
    url: str


class SocialLinksSettings(BlockSettings):
    align: Optional[Alignment] = None
    icon_size: Optional[int] = Field(default=None, ge=8)
    spacing: Optional[int] = Field(default=None, ge=0)
    icon_color: Optional[HexColor] = None
    padding: Optional[Padding] = None


class SocialLinksContent(BlockContent):
    links: List[SocialLink] = Field(default_factory=list)


class SocialLinksBlock(BaseBlock):
    type: Literal["social-links"] = "social-links"
    content: SocialLinksContent = SocialLinksContent()
    settings: SocialLinksSettings = SocialLinksSettings()
