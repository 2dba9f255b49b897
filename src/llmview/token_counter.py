"""Counter for tokens, lines, and characters in rendered output.

Without a tokenizer model, token counts are estimated from the character count
(about four characters per token for English text and source code). With a model,
counts are exact for that model's tokenizer through OpenAI's tiktoken library,
an optional dependency installed with the 'token_counting' extra.
"""

import importlib.util
import math
from collections import namedtuple
from typing import Any, Optional

from llmview.constants import CHARS_PER_TOKEN_ESTIMATE
from llmview.exceptions import TokenizationError, TokenizerNotAvailableError

CountResult = namedtuple("CountResult", ["lines", "tokens", "characters"])


def estimate_tokens(text: str) -> int:
    """Estimate the token count of text from its length.

    Example:
        >>> estimate_tokens("")
        0
        >>> estimate_tokens("hello")
        2
    """
    return math.ceil(len(text) / CHARS_PER_TOKEN_ESTIMATE)


def check_tiktoken_available() -> bool:
    """Check if the tiktoken library is available."""
    return importlib.util.find_spec("tiktoken") is not None


class TokenCounter:
    """Counter for tokens, lines, and characters in text content.

    Attributes:
        model (Optional[str]): Model whose tokenizer gives exact counts, or None to
            estimate.
        encoder (Optional[Any]): The tiktoken encoding when a model is set.

    Example:
        >>> counter = TokenCounter()
        >>> counter.count("Hello\\nworld!")
        CountResult(lines=1, tokens=3, characters=12)
        >>> counter.is_exact
        False

    Raises:
        TokenizerNotAvailableError: If a model is given but tiktoken is not installed.
        ValueError: If tiktoken has no tokenizer for the model.
    """

    def __init__(self, model: Optional[str] = None):
        self.model = model
        self.encoder: Optional[Any] = None

        if model is not None:
            if not check_tiktoken_available():
                raise TokenizerNotAvailableError(
                    f"Exact token counts for '{model}' were requested, but tiktoken is not installed."
                )
            self.encoder = self._get_encoder(model)

        self._total_tokens = 0
        self._total_lines = 0
        self._total_characters = 0

    @staticmethod
    def _get_encoder(model: str) -> Any:
        import tiktoken

        try:
            return tiktoken.encoding_for_model(model)
        except KeyError:
            raise ValueError(
                f"Could not load tokenizer for model '{model}'. Consider using a well-supported "
                "model like 'gpt-4' (cl100k_base encoding) or 'gpt-4o' (o200k_base encoding); "
                "counts will not exactly match other models but remain useful approximations."
            )

    @property
    def is_exact(self) -> bool:
        """Whether token counts come from a real tokenizer rather than an estimate."""
        return self.encoder is not None

    def count(self, text: str) -> CountResult:
        """Count lines, tokens, and characters in text and add them to the totals.

        Raises:
            TokenizationError: If the tokenizer fails on the text.
        """
        lines = text.count("\n")
        chars = len(text)

        if self.encoder is None:
            tokens = estimate_tokens(text)
        else:
            try:
                tokens = len(self.encoder.encode(text, disallowed_special=()))
            except Exception as e:
                raise TokenizationError(f"Failed to tokenize text: {str(e)}")

        self._total_lines += lines
        self._total_characters += chars
        self._total_tokens += tokens
        return CountResult(lines=lines, tokens=tokens, characters=chars)

    def get_total_tokens(self) -> int:
        """Get the total number of tokens counted so far."""
        return self._total_tokens

    def get_total_lines(self) -> int:
        """Get the total number of lines counted so far."""
        return self._total_lines

    def get_total_characters(self) -> int:
        """Get the total number of characters counted so far."""
        return self._total_characters

    def reset_counts(self) -> None:
        """Reset all running totals to zero, keeping the tokenizer."""
        self._total_tokens = 0
        self._total_lines = 0
        self._total_characters = 0
