"""Orchestrator: pick a parser for a ballot file and parse it."""

import logging

from bltparse.models import ElectionData
from bltparse.parsers import detect_parser, detect_parser_by_content, get_supported_formats
from bltparse.parsers.base import BallotFileError

_log = logging.getLogger(__name__)


class LoadError(Exception):
    """Error loading a ballot file."""
    pass


def load_election(source: str, content: bytes) -> ElectionData:
    """Parse a ballot file with whichever parser recognises it.

    Args:
        source: URL or filename (used to detect the appropriate parser)
        content: Raw bytes of the ballot file

    Returns:
        ElectionData parsed from the file

    Raises:
        LoadError: If no parser is found or parsing fails
    """
    # Find appropriate parser: try filename matching first, then content detection
    parser = detect_parser(source)
    if parser is None:
        parser = detect_parser_by_content(content, source)
    if parser is None:
        raise LoadError(
            f"We couldn't determine the ballot file format.\n\n"
            f"{get_supported_formats()}"
        )
    _log.debug("Parsing %s with %s", source, type(parser).__name__)

    try:
        return parser.parse(source, content)
    except BallotFileError as e:
        _log.info("Failed to parse %s: %s", source, e)
        raise LoadError(
            f"There was an error reading the ballot file. Make sure your BLT "
            f"text is properly formatted.\n\n{e}"
        ) from e
