import pytest

import stroop_experiment.main as main


@pytest.fixture(autouse=True)
def no_log_file(monkeypatch):
    # do not attach file handlers during the tests
    monkeypatch.setattr(main, "configure_logging", lambda *args, **kwargs: None)


def test_simulation_runs_both_blocks():
    stats = main.run_simulation(seed=3, p_correct=1.0)

    assert stats["block1"].total == 60
    assert stats["block2"].total == 60
    assert stats["overall"].total_correct == 120
    assert stats["overall"].congruent_avg_time_ms > 0

    # simulated interference of 80ms
    assert stats["overall"].incongruent_avg_time_ms > stats["overall"].congruent_avg_time_ms


def test_simulation_with_errors():
    stats = main.run_simulation(seed=5, p_correct=0.5)
    assert stats["overall"].total == 120
    assert stats["overall"].total_correct < 120


def test_cli_simulate(monkeypatch):
    called = {}
    monkeypatch.setattr(main, "run_simulation", lambda **kw: called.update(kw))

    main.run_paradigm_cli(simulate=True, seed=2)
    assert called["seed"] == 2
