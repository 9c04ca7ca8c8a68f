"""
Token estimation heuristics.

Provides two interchangeable estimators behind a common interface:

- SimpleTokenEstimator: ~4 characters per token
- EnhancedTokenEstimator: blends word and character counts and adds a
  penalty for punctuation/operators, which are dense in source code

Estimators are stateless and safe to share between threads.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, List

SIMPLE_CHARS_PER_TOKEN = 4
ENHANCED_WORD_MULTIPLIER = 1.3
ENHANCED_SPECIAL_DIVISOR = 10


class TokenEstimator(ABC):
    """Interface for estimating token counts in text."""

    @abstractmethod
    def estimate(self, text: str) -> int:
        """
        Estimate the number of tokens in text.

        Args:
            text: Text to analyze

        Returns:
            0 for empty text, otherwise at least 1
        """
        pass

    def estimate_batch(self, texts: Iterable[str]) -> List[int]:
        """Estimate tokens for each text, in order."""
        return [self.estimate(text) for text in texts]


class SimpleTokenEstimator(TokenEstimator):
    """Character-based estimator: ceil(chars / 4)."""

    def estimate(self, text: str) -> int:
        if not text:
            return 0
        return max(-(-len(text) // SIMPLE_CHARS_PER_TOKEN), 1)


class EnhancedTokenEstimator(TokenEstimator):
    """
    Estimator combining word count, character count and special characters.

    The word estimate (words * 1.3) and the character estimate (chars / 4)
    are averaged, then one token is added per 10 special characters.
    """

    def estimate(self, text: str) -> int:
        if not text:
            return 0

        word_estimate = int(count_words(text) * ENHANCED_WORD_MULTIPLIER)
        char_estimate = len(text) // SIMPLE_CHARS_PER_TOKEN
        special_penalty = count_special_chars(text) // ENHANCED_SPECIAL_DIVISOR

        base_estimate = (word_estimate + char_estimate) // 2
        return max(base_estimate + special_penalty, 1)


class TokenizerKind(Enum):
    """Token estimator selection."""
    SIMPLE = "simple"
    ENHANCED = "enhanced"

    def create(self) -> TokenEstimator:
        """Create a new estimator of this kind."""
        if self is TokenizerKind.ENHANCED:
            return EnhancedTokenEstimator()
        return SimpleTokenEstimator()


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def count_special_chars(text: str) -> int:
    """Count characters that are neither alphanumeric nor whitespace."""
    return sum(1 for char in text if not char.isalnum() and not char.isspace())


def estimate_tokens(text: str, kind: TokenizerKind = TokenizerKind.SIMPLE) -> int:
    """
    Convenience function to estimate tokens.

    Args:
        text: Text to count tokens for
        kind: Estimator to use (default: simple)

    Returns:
        Estimated number of tokens
    """
    return kind.create().estimate(text)
