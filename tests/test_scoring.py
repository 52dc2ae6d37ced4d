"""Tests score de qualité."""
import pytest

from email_builder.composition import default_engine
from email_builder.blocks import TextBlock
from email_builder.composition.scoring import calculate_grade, score_from_violations
from email_builder.sections import renumber


def test_clean_document_scores_full(build):
    score = default_engine.score(build("heading", "text", "button", "footer"))
    assert score.score == 100
    assert score.grade == "A+"
    assert score.passed
    assert score.issues == []
    assert set(score.categories) == {"spacing", "hierarchy", "contrast", "balance"}


def test_adjacent_heroes_penalised(build):
    score = default_engine.score(build("hero", "hero"))
    # 5 (warning) + 5 (moins de 3 blocs), tous deux en équilibre
    assert score.score == 90
    assert score.grade == "A-"
    assert score.categories["balance"].score == 15
    assert len(score.categories["balance"].issues) == 2


def test_empty_document():
    score = default_engine.score([])
    assert score.score == 95
    assert score.grade == "A"


def test_text_without_heading(build):
    score = default_engine.score(build("text", "text", "text"))
    assert score.categories["hierarchy"].score == 15
    assert score.score == 90


def test_category_floor_at_zero(build):
    blocks = build("text")
    violations = default_engine.validate(blocks)
    assert violations == []
    score = score_from_violations(blocks, [])
    assert all(c.score >= 0 for c in score.categories.values())


@pytest.mark.parametrize("value,grade", [
    (100, "A+"), (97, "A+"), (96, "A"), (93, "A"), (90, "A-"), (89, "B+"),
    (80, "B-"), (70, "C-"), (69, "D+"), (60, "D-"), (59, "F"), (0, "F"),
])
def test_grade_boundaries(value, grade):
    assert calculate_grade(value) == grade


def test_low_score_not_passed(build):
    blocks = renumber([
        TextBlock(id=f"t{i}", content={"text": "x"}, settings={"color": "#eeeeee"}) for i in range(3)
    ])
    score = default_engine.score(blocks)
    # 3 erreurs de contraste → contraste 0 ; pas de titre → hiérarchie 15
    assert score.categories["contrast"].score == 0
    assert score.score == 65
    assert not score.passed
