"""Unit tests for the completeness score rubric."""

import pytest

from lumina.contexts.document.model import Document
from lumina.contexts.document.scoring import ScoreReport, score_document


@pytest.mark.unit
def test_empty_document_scores_zero():
    report = score_document(Document())

    assert report.score == 0
    assert len(report.tips) == 5
    assert report.rating == "poor"


@pytest.mark.unit
def test_sample_document(sample_document):
    """Sample has photo, short summary, 6 skills, 2 experiences, 1 education."""
    report = score_document(sample_document)

    assert report.score == 15 + 10 + 20 + 25 + 20
    assert report.tips == [
        "Développez votre résumé (min 150 caractères) pour +10 points."
    ]
    assert report.rating == "good"


@pytest.mark.unit
def test_long_summary_full_points():
    document = Document.from_dict({"personalInfo": {"summary": "x" * 151}})
    assert score_document(document).score == 20


@pytest.mark.unit
def test_summary_at_threshold_is_partial():
    document = Document.from_dict({"personalInfo": {"summary": "x" * 150}})
    assert score_document(document).score == 10


@pytest.mark.unit
def test_skill_threshold():
    four = Document(skills=["a", "b", "c", "d"])
    five = Document(skills=["a", "b", "c", "d", "e"])

    assert score_document(four).score == 0
    assert score_document(five).score == 20


@pytest.mark.unit
@pytest.mark.parametrize("score,rating", [(100, "good"), (71, "good"), (70, "fair"), (41, "fair"), (40, "poor")])
def test_rating_bands(score, rating):
    assert ScoreReport(score=score).rating == rating
