"""
CV completeness score.

A fixed linear rubric over the Document: each section contributes points when
filled in, and each shortfall produces a tip telling the user what to add.
Pure function, no side effects.
"""

from dataclasses import dataclass, field
from typing import List

from lumina.contexts.document.model import Document

# Points per rubric item (sum = 100)
PHOTO_POINTS = 15
SUMMARY_POINTS = 20
SUMMARY_PARTIAL_POINTS = 10
SKILLS_POINTS = 20
EXPERIENCE_POINTS = 25
EDUCATION_POINTS = 20

SUMMARY_MIN_LENGTH = 150
MIN_SKILLS = 5
MIN_EXPERIENCES = 2
MIN_EDUCATION = 1


@dataclass
class ScoreReport:
    """
    Result of scoring a Document.

    Attributes:
        score: Points out of 100
        tips: One improvement hint per rubric item not fully satisfied
    """

    score: int
    tips: List[str] = field(default_factory=list)

    @property
    def rating(self) -> str:
        if self.score > 70:
            return "good"
        if self.score > 40:
            return "fair"
        return "poor"


def score_document(document: Document) -> ScoreReport:
    score = 0
    tips = []
    info = document.personal_info

    if info.photo:
        score += PHOTO_POINTS
    else:
        tips.append(f"Ajoutez une photo pour gagner {PHOTO_POINTS} points.")

    if len(info.summary) > SUMMARY_MIN_LENGTH:
        score += SUMMARY_POINTS
    elif info.summary:
        score += SUMMARY_PARTIAL_POINTS
        tips.append(
            f"Développez votre résumé (min {SUMMARY_MIN_LENGTH} caractères) "
            f"pour +{SUMMARY_POINTS - SUMMARY_PARTIAL_POINTS} points."
        )
    else:
        tips.append(f"Rédigez un résumé pour gagner {SUMMARY_POINTS} points.")

    if len(document.skills) >= MIN_SKILLS:
        score += SKILLS_POINTS
    else:
        tips.append(f"Listez au moins {MIN_SKILLS} compétences pour +{SKILLS_POINTS} points.")

    if len(document.experiences) >= MIN_EXPERIENCES:
        score += EXPERIENCE_POINTS
    else:
        tips.append(f"Ajoutez au moins {MIN_EXPERIENCES} expériences professionnelles.")

    if len(document.education) >= MIN_EDUCATION:
        score += EDUCATION_POINTS
    else:
        tips.append("Ajoutez votre formation.")

    return ScoreReport(score=score, tips=tips)
