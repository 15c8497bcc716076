"""Parser for BLT ballot files."""

import logging
import re
from typing import NamedTuple
from urllib.parse import urlparse

from bltparse.models import Ballot, Candidate, ElectionData, Ranking
from bltparse.parsers import register_parser
from bltparse.parsers.base import (
    BallotFileParser,
    BallotFileError,
    CardinalityError,
    StructuralError,
    TokenFormatError,
)

_log = logging.getLogger(__name__)


class RawLine(NamedTuple):
    """A line of input after clean-up, with its 1-indexed line number."""
    number: int
    text: str


def normalize_lines(text: str) -> list[RawLine]:
    """Strip comments, double quotes and surrounding whitespace; drop blank lines.

    A "#" always starts a comment, even inside a quoted name. Only straight
    double quotes are removed: curly quotes survive into names and titles.
    """
    lines = []
    for number, line in enumerate(text.split("\n"), start=1):
        line = line.split("#", 1)[0].replace('"', "").strip()
        if line:
            lines.append(RawLine(number, line))
    return lines


@register_parser
class BltParser(BallotFileParser):
    """Parser for BLT ballot files, as exported by OpaVote.

    A BLT file has five sections, in order:
    - Header: number of candidates, then number of seats
    - Withdrawn candidates (optional): a line of negative candidate
      numbers, e.g. "-1 -3" means candidates 1 and 3 have withdrawn
    - Ballots: one per line. The first number is the weight (how many
      identical ballots the line stands for), then candidate numbers in
      preference order, then 0. "-" marks a skipped rank and "2=3" marks
      candidates 2 and 3 tied at the same rank.
    - End-of-ballots marker: a line containing only 0
    - Candidate names, one per line in candidate-number order, then the
      election title on the last line

    Anything after a "#" is a comment. Blank lines, extra whitespace and
    straight double quotes are ignored.

    Example:
        4 2          # Four candidates are competing for two seats
        -2           # Bob has withdrawn
        1 4 1 3 2 0  # Amy, Diane, Chuck, Bob
        6 4 3 0      # Amy first, Chuck second, with a weight of 6
        1 0          # An empty ballot
        1 2 - 3 0    # Bob first, no one second, Chuck third
        1 2=3 1 0    # Bob and Chuck first, Diane second
        0            # End of ballots marker
        "Diane"
        "Bob"
        "Chuck"
        "Amy"
        "Gardening Club Election"

    The withdrawal line is recognised by its shape alone. This relies on
    ballot weights never being negative.
    """

    FORMAT_NAME = "BLT ballot files"
    EXAMPLE_FILENAME = "election.blt"
    FILE_EXTENSIONS = (".blt",)

    END_OF_BALLOTS = "0"
    END_OF_BALLOT = "0"
    SKIP = "-"

    HEADER_PATTERN = re.compile(r"\d+\s+\d+(?:\s+\S+)*")
    WITHDRAWN_PATTERN = re.compile(r"-\d+(?:\s+-\d+)*")
    TIE_PATTERN = re.compile(r"\d+(?:=\d+)+")
    INTEGER_PATTERN = re.compile(r"-?\d+")

    def __init__(self, check_candidate_count: bool = False):
        """
        Args:
            check_candidate_count: If True, raise CardinalityError when the
                number of candidate names differs from the header.
        """
        self.check_candidate_count = check_candidate_count

    def can_parse(self, source: str) -> bool:
        """Check if the source is a filename or URL ending in .blt."""
        return urlparse(source).path.lower().endswith(self.FILE_EXTENSIONS)

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Check if this looks like a BLT file.

        Tell-tale sign: the first line, ignoring comments and blank lines,
        starts with two whole numbers. Further tokens are allowed, since
        parse_text ignores them too.
        """
        lines = normalize_lines(self._decode(content))
        return bool(lines) and bool(self.HEADER_PATTERN.fullmatch(lines[0].text))

    def parse(self, source: str, content: bytes) -> ElectionData:
        """Parse BLT file content into an ElectionData."""
        return self.parse_text(self._decode(content))

    def parse_text(self, text: str) -> ElectionData:
        """Parse BLT text into an ElectionData.

        Raises:
            StructuralError: If the header, end-of-ballots marker, names or
                title can't be found
            TokenFormatError: If a ballot line can't be read
            CardinalityError: If check_candidate_count is set and the name
                count doesn't match the header
        """
        lines = normalize_lines(text)
        if not lines:
            raise StructuralError("Ballot file is empty")

        number_of_candidates, number_of_seats = self._parse_header(lines[0])

        cursor = 1
        withdrawn_candidates: tuple[int, ...] = ()
        if cursor < len(lines) and self.WITHDRAWN_PATTERN.fullmatch(lines[cursor].text):
            withdrawn_candidates = self._parse_withdrawn(lines[cursor])
            cursor += 1

        ballot_lines, name_lines, title_line = self._segment(
            lines, cursor, number_of_candidates
        )

        candidates = {
            number: Candidate(name=line.text, number=number)
            for number, line in enumerate(name_lines, start=1)
        }
        if self.check_candidate_count and len(candidates) != number_of_candidates:
            raise CardinalityError(
                f"Header declares {number_of_candidates} candidates "
                f"but {len(candidates)} candidate names were found"
            )

        ballots = tuple(self._parse_ballot(line) for line in ballot_lines)

        _log.debug(
            "Parsed %d ballot lines, %d candidates and %d withdrawals from %d lines",
            len(ballots), len(candidates), len(withdrawn_candidates), len(lines),
        )

        return ElectionData(
            number_of_candidates=number_of_candidates,
            number_of_seats=number_of_seats,
            withdrawn_candidates=withdrawn_candidates,
            ballots=ballots,
            candidates=candidates,
            election_name=title_line.text,
        )

    def _decode(self, content: bytes) -> str:
        return content.decode("utf-8-sig", errors="replace")

    def _parse_header(self, line: RawLine) -> tuple[int, int]:
        """Read the number of candidates and seats. Extra tokens are ignored."""
        tokens = line.text.split()
        if len(tokens) < 2:
            raise StructuralError(
                "Header must give the number of candidates and the number of seats",
                line.number, line.text,
            )
        number_of_candidates = self._to_int(
            tokens[0], line, "the number of candidates", StructuralError
        )
        number_of_seats = self._to_int(
            tokens[1], line, "the number of seats", StructuralError
        )
        return number_of_candidates, number_of_seats

    def _parse_withdrawn(self, line: RawLine) -> tuple[int, ...]:
        # Withdrawn candidates are written as negative numbers
        return tuple(
            self._to_int(token.lstrip("-"), line, "a withdrawn candidate number", StructuralError)
            for token in line.text.split()
        )

    def _segment(
        self, lines: list[RawLine], start: int, number_of_candidates: int
    ) -> tuple[list[RawLine], list[RawLine], RawLine]:
        """Split lines[start:] into ballot lines, candidate name lines and the title.

        Everything before the end-of-ballots marker is a ballot. After it,
        the last line is the title and the rest are candidate names.
        """
        marker = next(
            (i for i in range(start, len(lines)) if lines[i].text == self.END_OF_BALLOTS),
            None,
        )
        if marker is None:
            raise StructuralError(
                f'No end-of-ballots marker (a line containing only '
                f'"{self.END_OF_BALLOTS}") was found'
            )

        after = lines[marker + 1:]
        if not after:
            raise StructuralError(
                "Expected candidate names and an election title after the "
                "end-of-ballots marker",
                lines[marker].number, lines[marker].text,
            )
        if len(after) < 2 and number_of_candidates > 0:
            raise StructuralError(
                f"Expected {number_of_candidates} candidate names and an election "
                f"title after the end-of-ballots marker, but found only one line",
                after[0].number, after[0].text,
            )

        return lines[start:marker], after[:-1], after[-1]

    def _parse_ballot(self, line: RawLine) -> Ballot:
        """Parse a ballot line: weight, ranking tokens, then the terminating 0."""
        tokens = line.text.split()
        if len(tokens) < 2:
            raise TokenFormatError(
                f'Ballot line needs a weight and a closing "{self.END_OF_BALLOT}"',
                line.number, line.text,
            )
        if tokens[-1] != self.END_OF_BALLOT:
            raise TokenFormatError(
                f'Ballot line must end with "{self.END_OF_BALLOT}", not {tokens[-1]!r}',
                line.number, line.text,
            )

        weight = self._to_int(tokens[0], line, "a ballot weight")
        return Ballot(weight=weight, rankings=self._parse_rankings(tokens[1:-1], line))

    def _parse_rankings(self, tokens: list[str], line: RawLine) -> tuple[Ranking, ...]:
        """Decode ranking tokens. Rank is the 1-indexed position of the token.

        - "2=3": tie, candidates 2 and 3 share this rank
        - "-": skipped rank, no candidates
        - "2": candidate 2
        """
        rankings = []
        for rank, token in enumerate(tokens, start=1):
            if self.TIE_PATTERN.fullmatch(token):
                candidates = tuple(
                    self._to_int(c, line, f"a candidate number at rank {rank}")
                    for c in token.split("=")
                )
            elif token == self.SKIP:
                candidates = ()
            else:
                candidates = (
                    self._to_int(token, line, f"a candidate number at rank {rank}"),
                )
            rankings.append(Ranking(rank=rank, candidates=candidates))
        return tuple(rankings)

    def _to_int(
        self, token: str, line: RawLine, expected: str,
        error_class: type[BallotFileError] = TokenFormatError,
    ) -> int:
        if not self.INTEGER_PATTERN.fullmatch(token):
            raise error_class(
                f"Expected {expected}, not {token!r}", line.number, line.text
            )
        try:
            return int(token)
        except ValueError:
            # int() refuses digit strings past sys.get_int_max_str_digits()
            raise error_class(
                f"Expected {expected}, but {len(token)} digits is too long",
                line.number, line.text,
            ) from None


def parse_blt(text: str, check_candidate_count: bool = False) -> ElectionData:
    """Parse BLT text into an ElectionData.

    Shortcut for BltParser(...).parse_text(text).
    """
    return BltParser(check_candidate_count=check_candidate_count).parse_text(text)
