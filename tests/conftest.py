"""Shared test helpers."""


def make_blt(
    header: str,
    ballots: list[str],
    names: list[str],
    title: str,
    withdrawn: str | None = None,
) -> str:
    """Build BLT text from its sections.

    Args:
        header: Header line, e.g. "4 2"
        ballots: Ballot lines, e.g. ["1 4 1 3 2 0", "1 0"]
        names: Candidate names, written with double quotes
        title: Election title, written with double quotes
        withdrawn: Optional withdrawal line, e.g. "-2"

    Returns:
        BLT text with the end-of-ballots marker in place.
    """
    lines = [header]
    if withdrawn is not None:
        lines.append(withdrawn)
    lines.extend(ballots)
    lines.append("0")
    lines.extend(f'"{name}"' for name in names)
    lines.append(f'"{title}"')
    return "\n".join(lines) + "\n"


def ranking_candidates(ballot) -> list[list[int]]:
    """Candidates at each rank of a ballot, as plain lists."""
    return [list(r.candidates) for r in ballot.rankings]
