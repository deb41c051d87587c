"""
Error taxonomy for article extraction.

Every failure that aborts an extraction derives from ``ExtractionError``,
which is itself a ``ValueError`` so callers that already guard extraction
with ``except ValueError`` keep working.
"""


class ExtractionError(ValueError):
    """Base class for errors that abort an extraction."""


class ParseError(ExtractionError):
    """Raised when the input cannot be parsed into an HTML tree."""

    def __init__(self, reason: str):
        super().__init__(f"Failed to parse HTML: {reason}")
        self.reason = reason


class MissingBodyError(ExtractionError):
    """Raised when the parsed document has no <body> element."""

    def __init__(self):
        super().__init__("Document has no <body> element")


class NoCandidateError(ExtractionError):
    """Raised when the normalized body contains no node with visible text."""

    def __init__(self, visited: int = 0):
        super().__init__(
            f"No scorable content node found ({visited} nodes visited)"
        )
        self.visited = visited
