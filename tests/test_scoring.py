from termtetris.scoring import LEVEL_TABLE, LevelEntry, Score, Scoring, fall_interval


def test_first_level_entry():
    assert LEVEL_TABLE[0] == LevelEntry(1000, 0, 3, 1)
    assert fall_interval(Score()) == 1000


def test_single_then_double_clear():
    scoring = Scoring()
    score = scoring.update(1)
    assert score.score == 10
    assert score.bonus == 2

    score = scoring.update(2)
    assert score.score == 10 + 40
    assert score.bonus == 6


def test_update_without_rows_keeps_score():
    scoring = Scoring(Score(level=3, bonus=5, score=120))
    for _ in range(10):
        assert scoring.update(0).score == 120


def test_clearing_rows_strictly_increases_score():
    scoring = Scoring()
    previous = scoring.score.score
    for rows in (1, 4, 2, 3, 1):
        current = scoring.update(rows).score
        assert current > previous
        previous = current


def test_bonus_decays_every_third_lock_without_clear():
    scoring = Scoring()
    scoring.update(1)
    assert scoring.update(0).bonus == 2
    assert scoring.update(0).bonus == 2
    assert scoring.update(0).bonus == 1
    for _ in range(5):
        assert scoring.update(0).bonus == 1


def test_level_up_after_enough_clears():
    scoring = Scoring()
    for _ in range(3):
        scoring.update(1)
    assert scoring.score.level == 1
    score = scoring.update(1)
    assert score.level == 2
    assert score.score == 10 + 20 + 40 + 60
    assert score.bonus == 6 + 2 + 1
    assert scoring.fall_interval() == LEVEL_TABLE[1].fall_interval_ms


def test_level_is_capped_at_table_length():
    last = len(LEVEL_TABLE)
    scoring = Scoring(Score(level=last, bonus=1, score=0))
    for _ in range(50):
        scoring.update(1)
    assert scoring.score.level == last
    assert fall_interval(Score(level=last + 5)) == LEVEL_TABLE[-1].fall_interval_ms
