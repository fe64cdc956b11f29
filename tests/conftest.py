import pytest

from swisscore.models import GameResult, Pairing, RoundData
from swisscore.player import Competitor


def _competitors(count, base_rating=2000, step=10):
    return [
        Competitor(id=i + 1, name=f"Player {i + 1}", rating=base_rating - i * step)
        for i in range(count)
    ]


def _completed_round(round_number, games, bye=None, result=GameResult.DRAW):
    """Build a finished round from (white, black) competitor pairs."""
    pairings = [
        Pairing(white=w, black=b, board_number=i + 1, result=result)
        for i, (w, b) in enumerate(games)
    ]
    if bye is not None:
        pairings.append(Pairing.bye(bye, len(pairings) + 1))
    return RoundData(round_number=round_number, pairings=pairings, is_completed=True)


@pytest.fixture
def make_competitors():
    return _competitors


@pytest.fixture
def make_round():
    return _completed_round


@pytest.fixture
def eight_competitors():
    # ratings 2000, 1990, ..., 1930
    return _competitors(8)
