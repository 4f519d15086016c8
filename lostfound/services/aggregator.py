"""Weighted match score between a lost item and a found item"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, NamedTuple
from lostfound.services.similarity import SimilarityScorer

# Scoring policy
CATEGORY_WEIGHT = 0.35
TITLE_DESCRIPTION_WEIGHT = 0.40
LOCATION_WEIGHT = 0.20
KEYWORD_WEIGHT = 0.05

ACCEPTANCE_THRESHOLD = 0.70


class MatchScore(NamedTuple):
    score: float
    breakdown: Dict[str, float]


def round_score(value: float) -> float:
    """Round to 2 decimal places, halves rounded up"""
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class ScoreAggregator:
    """Combine the similarity sub-scores into one match score"""

    @staticmethod
    def aggregate(lost_item: Any, found_item: Any) -> MatchScore:
        """
        Calculate the match score of a (lost, found) pair
        Items are read by attribute: title, description, category, location_lost, location_found
        Returns: MatchScore(score, breakdown)
        """
        # Category match (35% weight)
        category_score = 1.0 if _lower(lost_item.category) == _lower(found_item.category) else 0.0

        # Title and description similarity (40% weight)
        title_score = SimilarityScorer.string_similarity(lost_item.title, found_item.title)
        description_score = SimilarityScorer.string_similarity(lost_item.description, found_item.description)
        title_description_score = (title_score + description_score) / 2

        # Location similarity (20% weight) - not symmetric, the lost side prefers
        # where it was lost and the found side where it was found
        location_score = SimilarityScorer.location_similarity(
            lost_item.location_lost or lost_item.location_found,
            found_item.location_found or found_item.location_lost,
        )

        # Keyword overlap (5% weight)
        keyword_score = SimilarityScorer.keyword_overlap(
            f"{lost_item.title} {lost_item.description}",
            f"{found_item.title} {found_item.description}",
        )

        total_score = (
            category_score * CATEGORY_WEIGHT +
            title_description_score * TITLE_DESCRIPTION_WEIGHT +
            location_score * LOCATION_WEIGHT +
            keyword_score * KEYWORD_WEIGHT
        )

        breakdown = {
            "category_score": category_score,
            "title_score": round(title_score, 3),
            "description_score": round(description_score, 3),
            "title_description_score": round(title_description_score, 3),
            "location_score": round(location_score, 3),
            "keyword_score": round(keyword_score, 3),
        }

        return MatchScore(round_score(total_score), breakdown)

    @staticmethod
    def is_match(score: float) -> bool:
        return score >= ACCEPTANCE_THRESHOLD


def _lower(value) -> str:
    return (value or "").lower()
