import pytest

from stroop_experiment.context import load_context
from stroop_experiment.responses import NoActiveStimulusError, resolve_key, score
from stroop_experiment.stimuli import BLANK_STIMULUS, make_stimulus


@pytest.fixture
def color_table():
    return load_context().color_table


def test_resolve_key(color_table):
    assert resolve_key("r", color_table) == "red"
    assert resolve_key("B", color_table) == "blue"
    assert resolve_key("x", color_table) is None
    assert resolve_key("", color_table) is None
    assert resolve_key("rb", color_table) is None


def test_score_correct_on_display_color(color_table):
    # word says red, ink is green -> green key is correct
    stim = make_stimulus("red", "green", color_table)

    resp = score("g", stim, presentation_start_s=1.0, now_s=1.5, color_table=color_table)
    assert resp.is_correct
    assert resp.stimulus == stim
    assert resp.key_pressed == "g"
    assert resp.response_time_ms == pytest.approx(500)

    resp = score("r", stim, presentation_start_s=1.0, now_s=1.5, color_table=color_table)
    assert not resp.is_correct


def test_score_case_insensitive(color_table):
    stim = make_stimulus("blue", "blue", color_table)
    assert score("B", stim, 0.0, 0.3, color_table).is_correct


def test_score_is_deterministic(color_table):
    stim = make_stimulus("yellow", "blue", color_table)
    results = {score("y", stim, 0.0, t, color_table).is_correct for t in (0.1, 0.5, 2)}
    assert results == {False}


def test_score_latency_not_negative(color_table):
    stim = make_stimulus("red", "red", color_table)
    assert score("r", stim, 2.0, 1.0, color_table).response_time_ms == 0


def test_score_without_stimulus(color_table):
    with pytest.raises(NoActiveStimulusError):
        score("r", None, 0.0, 1.0, color_table)

    with pytest.raises(NoActiveStimulusError):
        score("r", BLANK_STIMULUS, 0.0, 1.0, color_table)
