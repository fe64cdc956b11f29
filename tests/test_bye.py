from swisscore.pairing.bye import choose_bye
from swisscore.player import Competitor


def test_even_pool_has_no_bye(make_competitors):
    assert choose_bye(make_competitors(4), {}) is None


def test_lowest_score_gets_the_bye():
    pool = [
        Competitor(id=1, rating=1500, score=2.0),
        Competitor(id=2, rating=1500, score=0.5),
        Competitor(id=3, rating=1500, score=1.0),
    ]
    assert choose_bye(pool, {}).id == 2


def test_rating_then_id_break_ties():
    pool = [
        Competitor(id=3, rating=1400, score=1.0),
        Competitor(id=2, rating=None, score=1.0),
        Competitor(id=1, rating=None, score=1.0),
    ]
    # unrated counts as 0, then lower id
    assert choose_bye(pool, {}).id == 1


def test_previous_bye_recipients_are_skipped():
    pool = [
        Competitor(id=1, score=0.0),
        Competitor(id=2, score=0.0),
        Competitor(id=3, score=3.0),
    ]
    assert choose_bye(pool, {1: 1, 2: 1}).id == 3


def test_everyone_had_a_bye_falls_back_to_first_in_order():
    pool = [
        Competitor(id=1, score=2.0),
        Competitor(id=2, score=1.0),
        Competitor(id=3, score=1.5),
    ]
    assert choose_bye(pool, {1: 1, 2: 1, 3: 1}).id == 2
