"""
Score de qualité — 0 à 100, quatre catégories de 25 points.

Les violations des règles sont déduites par sévérité, complétées par quelques
heuristiques de composition (nombre de blocs, variété, respirations).
"""
from typing import Dict, List, Sequence

from pydantic import BaseModel, Field

from ..blocks import BaseBlock
from ..core.schemas import RuleViolation

CATEGORY_MAX = 25
PASSING_SCORE = 70

SEVERITY_PENALTY = {"error": 10, "warning": 5, "suggestion": 2}

# Catégorie de score de chaque règle
RULE_CATEGORY = {
    "spacing-grid-8px":     "spacing",
    "touch-target-minimum": "spacing",
    "font-size-range":      "hierarchy",
    "typography-hierarchy": "hierarchy",
    "color-contrast-wcag":  "contrast",
    "no-adjacent-heavy":    "balance",
    "footer-last":          "balance",
    "image-alt-text":       "balance",
}

_GRADES = (
    (97, "A+"), (93, "A"), (90, "A-"),
    (87, "B+"), (83, "B"), (80, "B-"),
    (77, "C+"), (73, "C"), (70, "C-"),
    (67, "D+"), (63, "D"), (60, "D-"),
)


class CategoryScore(BaseModel):
    score: int
    max_score: int = CATEGORY_MAX
    issues: List[str] = Field(default_factory=list)


class QualityScore(BaseModel):
    score: int
    grade: str
    passed: bool
    categories: Dict[str, CategoryScore]
    issues: List[str] = Field(default_factory=list)


def calculate_grade(score: int) -> str:
    for threshold, grade in _GRADES:
        if score >= threshold:
            return grade
    return "F"


def _balance_heuristics(blocks: Sequence[BaseBlock]) -> List[tuple[int, str]]:
    penalties = []
    if len(blocks) < 3:
        penalties.append((5, "Trop peu de blocs de contenu"))
    elif len(blocks) > 20:
        penalties.append((5, "Trop de blocs, l'email devient difficile à parcourir"))
    types = {b.type for b in blocks}
    if len(types) < 3 and len(blocks) > 5:
        penalties.append((5, "Peu de variété dans les types de blocs"))
    if len(blocks) > 5 and "spacer" not in types:
        penalties.append((3, "Aucun espacement entre les sections"))
    return penalties


def _hierarchy_heuristics(blocks: Sequence[BaseBlock]) -> List[tuple[int, str]]:
    texts = sum(1 for b in blocks if b.type == "text")
    if texts > 2 and not any(b.type in ("heading", "hero") for b in blocks):
        return [(10, "Aucun titre pour structurer le texte")]
    return []


def score_from_violations(blocks: Sequence[BaseBlock], violations: Sequence[RuleViolation]) -> QualityScore:
    penalties: Dict[str, List[tuple[int, str]]] = {
        "spacing": [], "hierarchy": _hierarchy_heuristics(blocks), "contrast": [],
        "balance": _balance_heuristics(blocks),
    }
    for violation in violations:
        category = RULE_CATEGORY.get(violation.rule_id, "balance")
        penalties[category].append((SEVERITY_PENALTY[violation.severity], violation.message))

    categories = {}
    for name, items in penalties.items():
        score = max(0, CATEGORY_MAX - sum(points for points, _ in items))
        categories[name] = CategoryScore(score=score, issues=[message for _, message in items])

    total = sum(c.score for c in categories.values())
    return QualityScore(
        score=total,
        grade=calculate_grade(total),
        passed=total >= PASSING_SCORE,
        categories=categories,
        issues=[issue for c in categories.values() for issue in c.issues],
    )
