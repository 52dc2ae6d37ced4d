"""Bloc Testimonial — citation client avec auteur et avatar."""
from typing import Literal, Optional
from pydantic import Field
from .base import BaseBlock, BlockContent, BlockSettings, HexColor, Padding


class TestimonialSettings(BlockSettings):
    background_color: Optional[HexColor] = None
    border_color: Optional[HexColor] = None
    border_width: Optional[int] = Field(default=None, ge=0)
    border_radius: Optional[int] = Field(default=None, ge=0)
    quote_font_size: Optional[int] = Field(default=None, ge=1)
    quote_color: Optional[HexColor] = None
    author_color: Optional[HexColor] = None
    padding: Optional[Padding] = None


class TestimonialContent(BlockContent):
    quote: str = ""
    author: str = ""
    role: Optional[str] = None
    company: Optional[str] = None
    avatar_url: Optional[str] = None


class TestimonialBlock(BaseBlock):
    type: Literal["testimonial"] = "testimonial"
    content: TestimonialContent = TestimonialContent()
    settings: TestimonialSettings = TestimonialSettings()
