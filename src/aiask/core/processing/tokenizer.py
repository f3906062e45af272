from __future__ import annotations

"""
Token Estimation Engine.

Estimates how many tokens the aggregated document will cost a downstream
language model. Uses tiktoken BPE encodings and falls back to a
characters-per-token heuristic when an encoding cannot be loaded
(for instance when the encoding files cannot be downloaded offline).
"""

import logging
import math
from abc import ABC, abstractmethod

import tiktoken

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN_AVG = 4
MODERN_ENCODING = "o200k_base"
LEGACY_ENCODING = "cl100k_base"

# -----------------------------------------------------------------------------
# STRATEGY INTERFACES
# -----------------------------------------------------------------------------

class TokenizerStrategy(ABC):
    """Abstract base class for token counting algorithms."""

    @abstractmethod
    def count(self, text: str, model_id: str) -> int:
        """
        Calculate the token count for a given text segment.

        Args:
            text: Input string to be tokenized.
            model_id: Model identifier used to select the encoding.

        Returns:
            int: Total token count.
        """


class HeuristicStrategy(TokenizerStrategy):
    """Character density estimate, used when no encoder is usable."""

    def count(self, text: str, model_id: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / CHARS_PER_TOKEN_AVG)


class TiktokenStrategy(TokenizerStrategy):
    """OpenAI BPE encoder via the tiktoken library."""

    def count(self, text: str, model_id: str) -> int:
        return len(tiktoken.get_encoding(encoding_for_model(model_id)).encode(text, disallowed_special=()))

# -----------------------------------------------------------------------------
# SERVICE
# -----------------------------------------------------------------------------

class TokenizerService:
    """
    Routes a count request to the BPE encoder with a heuristic fallback.
    """

    def __init__(self) -> None:
        self.primary: TokenizerStrategy = TiktokenStrategy()
        self.heuristic: TokenizerStrategy = HeuristicStrategy()

    def count(self, text: str, model: str) -> int:
        if not text:
            return 0
        try:
            return self.primary.count(text, model)
        except Exception as e:
            # tiktoken surfaces download and registry failures with assorted exception types
            logger.warning(f"Tokenizer unavailable for '{model}': {e}. Using heuristic estimate.")
            return self.heuristic.count(text, model)


def encoding_for_model(model_id: str) -> str:
    """Pick the tiktoken encoding name for a model identifier."""
    lower_id = (model_id or "").lower()
    if any(x in lower_id for x in ("gpt-4-", "gpt-3.5", "legacy")):
        return LEGACY_ENCODING
    return MODERN_ENCODING


_SERVICE_INSTANCE = TokenizerService()


def count_tokens(text: str, model: str) -> int:
    """
    Estimate the number of tokens of `text` for the target model.

    Args:
        text: Input string content.
        model: Target model name (e.g., "gpt-4o").

    Returns:
        int: Token count, exact when tiktoken is usable.
    """
    return _SERVICE_INSTANCE.count(text, model)
