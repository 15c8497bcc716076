"""Shared fixtures for parser tests."""

from pathlib import Path

import pytest
from faker import Faker

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# --- BLT fixtures ---

@pytest.fixture
def gardening_club_blt():
    """The annotated example from the OpaVote BLT documentation."""
    path = FIXTURES_DIR / "gardening-club.blt"
    return path.read_bytes()


@pytest.fixture
def gardening_club_text(gardening_club_blt):
    return gardening_club_blt.decode("utf-8")


@pytest.fixture
def packed_crlf_blt():
    """Packed ballots (weights > 1), Windows line endings, no withdrawals."""
    path = FIXTURES_DIR / "packed-crlf.blt"
    return path.read_bytes()


# --- other formats ---

@pytest.fixture
def html_bytes():
    return b"<html><body>Hello world</body></html>"


@pytest.fixture
def pdf_bytes():
    """Trivial PDF-like bytes for rejection tests."""
    return b"%PDF-1.4 fake"


# --- generated names ---

@pytest.fixture
def fake():
    """Faker with a fixed seed, so generated names are the same every run."""
    fake = Faker(["en_US", "en_GB", "de_DE", "fr_FR"])
    Faker.seed(2024)
    return fake
