"""Similarity metrics between lost and found item descriptions"""
from rapidfuzz.distance import Levenshtein
from typing import Optional
from lostfound.services.normalizer import TextNormalizer

SUBSTRING_SIMILARITY = 0.85
LOCATION_TOKEN_BONUS = 0.2


class SimilarityScorer:
    """Pure pairwise similarity metrics, each returning 0.0 to 1.0"""

    @staticmethod
    def string_similarity(a: Optional[str], b: Optional[str]) -> float:
        """
        Normalized edit-distance similarity of two strings
        A whole-string containment scores a flat 0.85
        """
        s1 = TextNormalizer.normalize(a)
        s2 = TextNormalizer.normalize(b)

        if s1 == s2:
            return 1.0

        if not s1 or not s2:
            return 0.0

        longer, shorter = (s1, s2) if len(s1) > len(s2) else (s2, s1)

        if shorter in longer:
            return SUBSTRING_SIMILARITY

        edit_distance = Levenshtein.distance(shorter, longer)
        return max(0.0, 1.0 - edit_distance / len(longer))

    @staticmethod
    def keyword_overlap(text_a: Optional[str], text_b: Optional[str]) -> float:
        """Jaccard index of the keyword sets of two texts"""
        keywords_a = TextNormalizer.tokenize(text_a)
        keywords_b = TextNormalizer.tokenize(text_b)

        if not keywords_a or not keywords_b:
            return 0.0

        return len(keywords_a & keywords_b) / len(keywords_a | keywords_b)

    @staticmethod
    def location_similarity(loc_a: Optional[str], loc_b: Optional[str]) -> float:
        """
        Similarity of two free-text locations
        Sharing any place-name part (longer than two characters) adds 0.2, capped at 1.0
        """
        if not loc_a or not loc_b:
            return 0.0

        similarity = SimilarityScorer.string_similarity(loc_a, loc_b)

        parts_b = set(TextNormalizer.split_location(loc_b))
        shares_part = any(
            len(part) > 2 and part in parts_b
            for part in TextNormalizer.split_location(loc_a)
        )

        if shares_part:
            return min(1.0, similarity + LOCATION_TOKEN_BONUS)

        return similarity
