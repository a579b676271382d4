import random
from collections import Counter

import pytest

from stroop_experiment.context import load_context
from stroop_experiment.stimuli import (
    BLANK_STIMULUS,
    WHITE,
    color_of,
    generate_block,
    make_stimulus,
)


@pytest.fixture
def color_table():
    return load_context().color_table


@pytest.mark.parametrize("seed", range(20))
def test_block_balance(color_table, seed):
    block = generate_block(color_table, rng=random.Random(seed))

    assert len(block) == 60
    assert sum(s.is_congruent for s in block) == 30
    assert sum(not s.is_congruent for s in block) == 30


@pytest.mark.parametrize("seed", range(20))
def test_block_congruency_matches_colors(color_table, seed):
    block = generate_block(color_table, rng=random.Random(seed))

    for s in block:
        if s.is_congruent:
            assert s.word == color_of(s.display_color, color_table)
        else:
            assert s.word != color_of(s.display_color, color_table)


def test_block_word_cycling(color_table):
    block = generate_block(color_table, rng=random.Random(1))

    # 30 words cycling through 4 colors -> 8, 8, 7, 7 in both halves
    expected = {"red": 8, "blue": 8, "green": 7, "yellow": 7}
    assert Counter(s.word for s in block if s.is_congruent) == expected
    assert Counter(s.word for s in block if not s.is_congruent) == expected


def test_block_is_shuffled(color_table):
    block = generate_block(color_table, rng=random.Random(3))

    # unshuffled, all congruent stimuli would be in front
    assert [s.is_congruent for s in block] != [True] * 30 + [False] * 30


def test_blocks_are_independent(color_table):
    rng = random.Random(7)
    block1 = generate_block(color_table, rng=rng)
    block2 = generate_block(color_table, rng=rng)

    assert block1 != block2
    assert sum(s.is_congruent for s in block2) == 30


def test_block_size_parameter(color_table):
    block = generate_block(color_table, n_trials=8, rng=random.Random(0))
    assert len(block) == 8
    assert sum(s.is_congruent for s in block) == 4

    with pytest.raises(ValueError):
        generate_block(color_table, n_trials=7)


def test_blank_stimulus():
    assert BLANK_STIMULUS.word is None
    assert BLANK_STIMULUS.display_color == WHITE
    assert not BLANK_STIMULUS.is_congruent


def test_color_of_unknown(color_table):
    assert color_of((59, 130, 246, 255), color_table) == "blue"
    with pytest.raises(KeyError):
        color_of(WHITE, color_table)


def test_make_stimulus(color_table):
    stim = make_stimulus("red", "green", color_table)
    assert stim.display_color == (34, 197, 94, 255)
    assert not stim.is_congruent
    assert make_stimulus("red", "red", color_table).is_congruent
