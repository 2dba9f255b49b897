class NoPatternsError(ValueError):
    """
    Exception raised when a selection is requested without any glob patterns.

    An empty pattern list always selects nothing, which is almost certainly a usage
    mistake (an empty or all-comment view file) rather than a meaningful answer.

    Attributes:
        source (str): Where the patterns were loaded from, if known.

    Example:
        >>> error = NoPatternsError("project.llmview")
        >>> str(error)
        'No patterns found in project.llmview'
    """

    def __init__(self, source: str = "view file") -> None:
        """
        Initialize the exception with the pattern source.

        Args:
            source (str, optional): Description of where patterns were read from.
                Defaults to "view file".
        """
        self.source = source
        super().__init__(f"No patterns found in {source}")


class TokenizerNotAvailableError(Exception):
    """
    Exception raised when exact token counting is requested without the tokenizer package.

    The `tiktoken` package is an optional dependency installed through the
    'token_counting' extra. Without it, llmview falls back to a character-based
    estimate unless a tokenizer model was explicitly requested.

    Attributes:
        message (str): Detailed error message including installation instructions.

    Example:
        >>> error = TokenizerNotAvailableError()
        >>> str(error).startswith('Tokenizer (tiktoken) is not installed')
        True
    """

    def __init__(self, message: str = "Tokenizer (tiktoken) is not installed.") -> None:
        self.message = (
            f"{message} To enable exact token counts, install llmview with the 'token_counting' "
            "extra: 'pip install llmview[token_counting]'."
        )
        super().__init__(self.message)


class TokenizationError(Exception):
    """
    Exception raised when the tokenizer is available but fails to process the input text.

    Example:
        >>> error = TokenizationError("Failed to tokenize: invalid input")
        >>> str(error)
        'Failed to tokenize: invalid input'
    """

    pass
