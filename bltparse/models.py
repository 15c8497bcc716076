"""Core data models for parsed ballot files."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class Candidate:
    """A candidate named in the ballot file.

    Attributes:
        name: Candidate name, with quotes stripped
        number: 1-indexed position among the name lines. Ballot rankings
            refer to candidates by this number.
    """
    name: str
    number: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "number": self.number}


@dataclass(frozen=True)
class Ranking:
    """One preference position on a ballot.

    Attributes:
        rank: 1-indexed position in the ballot's preference order
        candidates: Candidate numbers marked at this rank, in the order
            written. Empty for a skipped rank (undervote), two or more for
            a tie (overvote).
    """
    rank: int
    candidates: tuple[int, ...] = ()

    @property
    def is_skip(self) -> bool:
        return not self.candidates

    @property
    def is_overvote(self) -> bool:
        return len(self.candidates) > 1

    def to_dict(self) -> dict[str, Any]:
        return {"rank": self.rank, "candidates": list(self.candidates)}


@dataclass(frozen=True)
class Ballot:
    """A ballot line.

    Attributes:
        weight: Number of identical physical ballots this line stands for.
            Always 1 except in "packed" files.
        rankings: Rankings ordered by rank, one per ranking token
    """
    weight: int
    rankings: tuple[Ranking, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.rankings

    def to_dict(self) -> dict[str, Any]:
        return {
            "weight": self.weight,
            "rankings": [r.to_dict() for r in self.rankings],
        }


@dataclass(frozen=True)
class ElectionData:
    """Complete contents of a ballot file.

    Attributes:
        number_of_candidates: Candidate count declared in the header
        number_of_seats: Seat count declared in the header
        withdrawn_candidates: Numbers of withdrawn candidates (positive)
        ballots: Ballots in file order
        candidates: Read-only mapping of candidate number -> Candidate
        election_name: Title of the election

    Example:
        >>> election = ElectionData(
        ...     number_of_candidates=2,
        ...     number_of_seats=1,
        ...     withdrawn_candidates=(),
        ...     ballots=(Ballot(weight=3, rankings=(Ranking(1, (2,)),)),),
        ...     candidates={1: Candidate("Diane", 1), 2: Candidate("Bob", 2)},
        ...     election_name="Gardening Club Election",
        ... )
        >>> election.total_weight
        3
    """
    number_of_candidates: int
    number_of_seats: int
    withdrawn_candidates: tuple[int, ...]
    ballots: tuple[Ballot, ...]
    candidates: Mapping[int, Candidate] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    election_name: str = ""

    def __post_init__(self):
        # Read-only view of a private copy, so the record can't be changed
        object.__setattr__(self, "candidates", MappingProxyType(dict(self.candidates)))

    @property
    def num_ballot_lines(self) -> int:
        return len(self.ballots)

    @property
    def total_weight(self) -> int:
        """Number of physical ballots, counting each line by its weight."""
        return sum(b.weight for b in self.ballots)

    @property
    def candidate_names(self) -> list[str]:
        """Candidate names in candidate-number order."""
        return [self.candidates[n].name for n in sorted(self.candidates)]

    def get_candidate(self, number: int) -> Candidate:
        """Get a candidate by number. Raises KeyError if there is none."""
        return self.candidates[number]

    def is_withdrawn(self, number: int) -> bool:
        return number in self.withdrawn_candidates

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary.

        Keys follow the field names used by BLT tooling on the web, so the
        output can be handed to JavaScript tally code unchanged. Candidate
        keys are strings because JSON object keys must be.
        """
        return {
            "withdrawnCandidates": list(self.withdrawn_candidates),
            "numberOfCandidates": self.number_of_candidates,
            "numberOfSeats": self.number_of_seats,
            "electionName": self.election_name,
            "ballots": [b.to_dict() for b in self.ballots],
            "candidates": {
                str(number): candidate.to_dict()
                for number, candidate in self.candidates.items()
            },
        }
