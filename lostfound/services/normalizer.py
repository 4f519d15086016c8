"""Text normalization shared by the similarity scorer"""
from typing import List, Optional, Set
import re

# Function words that carry no signal when comparing item descriptions
STOP_WORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "is", "was", "are", "been", "be", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might", "can",
    "my", "your", "our", "their",
])

MIN_TOKEN_LENGTH = 3

_WORD_RE = re.compile(r"\b\w+\b", re.ASCII)
_LOCATION_SPLIT_RE = re.compile(r"[,\s]+")


class TextNormalizer:
    """Lower-casing, trimming and keyword extraction for free-text item fields"""

    @staticmethod
    def normalize(text: Optional[str]) -> str:
        """Lower-case and trim; None becomes an empty string"""
        if not text:
            return ""
        return text.lower().strip()

    @staticmethod
    def tokenize(text: Optional[str]) -> Set[str]:
        """
        Extract the keyword set of a text
        Drops stop words and tokens shorter than three characters
        """
        if not text:
            return set()

        words = _WORD_RE.findall(text.lower())
        return {w for w in words if len(w) >= MIN_TOKEN_LENGTH and w not in STOP_WORDS}

    @staticmethod
    def split_location(text: Optional[str]) -> List[str]:
        """Split a free-text location on commas and whitespace"""
        if not text:
            return []
        return [part for part in _LOCATION_SPLIT_RE.split(text.lower()) if part]
