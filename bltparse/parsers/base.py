"""Abstract base class for ballot file parsers, and parse errors."""

from abc import ABC, abstractmethod

from bltparse.models import ElectionData


class BallotFileError(ValueError):
    """Raised when a ballot file is malformed.

    Carries the 1-indexed line number in the original text and the
    offending line (after comments and quotes are stripped), when known.
    """

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.line = line

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"Line {self.line_number}: {self.message} (found {self.line!r})"


class StructuralError(BallotFileError):
    """The file's sections (header, ballots, names, title) can't be located."""
    pass


class TokenFormatError(BallotFileError):
    """A ballot line contains a token that isn't a weight, ranking or terminator."""
    pass


class CardinalityError(BallotFileError):
    """The number of candidate names doesn't match the header."""
    pass


class BallotFileParser(ABC):
    """Abstract base class for parsing ballot files.

    Each parser implementation handles one file format. Parsers are
    registered via the @register_parser decorator in
    bltparse/parsers/__init__.py.
    """

    @abstractmethod
    def can_parse(self, source: str) -> bool:
        """Check if this parser can handle the given source.

        Args:
            source: URL or filename to check

        Returns:
            True if this parser can handle the source, False otherwise
        """
        pass

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Check if this parser can handle the given file content.

        Used when the filename gives nothing away. Subclasses should
        override this to inspect file content for tell-tale signs of their
        format.

        Args:
            content: Raw bytes of the file
            filename: Original filename (may help with basic filtering)

        Returns:
            True if this parser can likely handle the content, False otherwise
        """
        return False

    @abstractmethod
    def parse(self, source: str, content: bytes) -> ElectionData:
        """Parse the content into an ElectionData.

        Args:
            source: Original URL or filename (for context)
            content: Raw bytes of the file

        Returns:
            Parsed ElectionData object

        Raises:
            BallotFileError: If the content cannot be parsed
        """
        pass
