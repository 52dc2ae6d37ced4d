"""Bloc Stats — chiffres clés en colonnes."""
from typing import List, Literal, Optional
from pydantic import Field
from .base import Alignment, BaseBlock, BlockContent, BlockSettings, HexColor, Padding


class StatItem(BlockContent):
    value: str
    label: str = ""


class StatsSettings(BlockSettings):
    layout: Optional[Literal["2-col", "3-col", "4-col"]] = None
    align: Optional[Alignment] = None
    value_font_size: Optional[int] = Field(default=None, ge=1)
    value_color: Optional[HexColor] = None
    label_font_size: Optional[int] = Field(default=None, ge=1)
    label_color: Optional[HexColor] = None
    padding: Optional[Padding] = None


class StatsContent(BlockContent):
    stats: List[StatItem] = Field(default_factory=list)


class StatsBlock(BaseBlock):
    type: Literal["stats"] = "stats"
    content: StatsContent = StatsContent()
    settings: StatsSettings = StatsSettings()
