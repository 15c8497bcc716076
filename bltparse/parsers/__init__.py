"""Ballot file parsers for the formats we understand."""

from .base import BallotFileParser

# Parser registry - import parsers here to register them
_parsers: list[type[BallotFileParser]] = []


def register_parser(parser_class: type[BallotFileParser]) -> type[BallotFileParser]:
    """Decorator to register a parser class."""
    _parsers.append(parser_class)
    return parser_class


def get_all_parsers() -> list[type[BallotFileParser]]:
    """Return all registered parser classes."""
    return _parsers.copy()


def detect_parser(source: str) -> BallotFileParser | None:
    """Auto-detect and return an appropriate parser instance for the given source."""
    for parser_class in _parsers:
        parser = parser_class()
        if parser.can_parse(source):
            return parser
    return None


def detect_parser_by_content(content: bytes, filename: str) -> BallotFileParser | None:
    """Return a parser instance that recognises the file content, if any."""
    for parser_class in _parsers:
        parser = parser_class()
        if parser.can_parse_content(content, filename):
            return parser
    return None


def get_supported_formats() -> str:
    """Return a user-friendly description of the ballot file formats we read.

    Each line names the format, the file extensions it is recognised by, and
    an example filename, e.g. "BLT ballot files (.blt), e.g. election.blt".
    """
    lines = ["We can read these ballot file formats:"]
    for parser_class in _parsers:
        line = "  - " + getattr(parser_class, "FORMAT_NAME", parser_class.__name__)
        extensions = getattr(parser_class, "FILE_EXTENSIONS", ())
        if extensions:
            line += f" ({', '.join(extensions)})"
        example = getattr(parser_class, "EXAMPLE_FILENAME", None)
        if example:
            line += f", e.g. {example}"
        lines.append(line)
    lines.append("Other files are recognised by their content where possible.")
    return "\n".join(lines)
