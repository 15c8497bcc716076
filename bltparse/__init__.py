"""Parse BLT ballot files into structured election data."""

from bltparse.models import Ballot, Candidate, ElectionData, Ranking
from bltparse.parsers.base import (
    BallotFileError,
    CardinalityError,
    StructuralError,
    TokenFormatError,
)

# Import parsers to register them
from bltparse.parsers.blt import BltParser, parse_blt

from bltparse.load import LoadError, load_election

__all__ = [
    "Ballot",
    "BallotFileError",
    "BltParser",
    "Candidate",
    "CardinalityError",
    "ElectionData",
    "LoadError",
    "Ranking",
    "StructuralError",
    "TokenFormatError",
    "load_election",
    "parse_blt",
]
