import re
from collections import Counter
from typing import Iterable, List

# ASCII letters plus the Croatian accented letters; anything else separates words
SPLIT_PATTERN = re.compile(r"[^A-Za-zčČćĆžŽšŠđĐ]+")


class RegexSplitTokenizer:
    """Split raw text on every maximal run of characters outside the alphabet."""

    def __init__(self, pattern: re.Pattern = SPLIT_PATTERN):
        self.pattern = pattern

    def tokenize(self, text: str) -> List[str]:
        if not text:
            return []
        return [token for token in self.pattern.split(text) if token]


def count_terms(terms: Iterable[str]) -> Counter:
    """Build a term-count map from a sequence of already preprocessed terms."""
    return Counter(term for term in terms if term)
