"""
Composition — règles de mise en page email, corrections automatiques, score qualité.
"""
from .rules import (
    CompositionRule, default_rules,
    FooterLastRule, NoAdjacentHeavyRule, FontSizeRangeRule, TypographyHierarchyRule,
    SpacingGridRule, TouchTargetRule, ColorContrastRule, ImageAltTextRule,
)
from .engine import CompositionEngine, default_engine, validate, auto_fix, auto_fix_all, score_composition
from .scoring import QualityScore, CategoryScore, calculate_grade, PASSING_SCORE

__all__ = [
    "CompositionRule", "default_rules",
    "FooterLastRule", "NoAdjacentHeavyRule", "FontSizeRangeRule", "TypographyHierarchyRule",
    "SpacingGridRule", "TouchTargetRule", "ColorContrastRule", "ImageAltTextRule",
    "CompositionEngine", "default_engine", "validate", "auto_fix", "auto_fix_all", "score_composition",
    "QualityScore", "CategoryScore", "calculate_grade", "PASSING_SCORE",
]
