"""
TextNormalizer: canonical comparison form of a form question.

The normalized string is only used for scoring. Store keys always keep the
raw question text.
"""

import re
from typing import Iterable, List, Optional

from nltk.stem.porter import PorterStemmer

DEFAULT_PREFIXES = (
    "how many years of work experience do you have with",
    "how many years of do you have with",
    "how many years of do you have",
)

# Word units: latin/cyrillic letters, digits and underscore
_TOKEN_RE = re.compile(r"[A-Za-zА-Яа-я0-9_]+")


class TextNormalizer:
    """
    Strips boilerplate prefixes, lowercases, tokenizes and stems questions.
    """

    def __init__(self, prefixes: Optional[Iterable[str]] = None):
        """
        Args:
            prefixes: Leading phrases to strip. Only the first one matching the
                start of the question (case-insensitive) is removed.
        """
        if prefixes is None:
            prefixes = DEFAULT_PREFIXES
        self.prefixes: List[str] = [p.strip().lower() for p in prefixes if p.strip()]
        # Alternation order is configuration order: the first matching prefix wins
        self._prefix_re = re.compile(
            r"^(?:" + "|".join(re.escape(p) for p in self.prefixes) + r")",
            re.IGNORECASE,
        ) if self.prefixes else None
        self._stemmer = PorterStemmer(mode=PorterStemmer.ORIGINAL_ALGORITHM)

    def strip_prefix(self, text: str) -> str:
        if not self._prefix_re:
            return text
        return self._prefix_re.sub("", text, count=1)

    def tokenize(self, text: str) -> List[str]:
        """Stemmed tokens of the question, in order."""
        if not text:
            return []
        remainder = self.strip_prefix(text).lower()
        return [self._stemmer.stem(token) for token in _TOKEN_RE.findall(remainder)]

    def normalize(self, text: str) -> str:
        """
        Return the canonical comparison string of a question.

        Example:
            >>> TextNormalizer().normalize("How many years of work experience do you have with Java?")
            'java'
        """
        return " ".join(self.tokenize(text))


_default_normalizer: Optional[TextNormalizer] = None


def normalize(text: str) -> str:
    """Normalize with the built-in prefix list."""
    global _default_normalizer
    if _default_normalizer is None:
        _default_normalizer = TextNormalizer()
    return _default_normalizer.normalize(text)
