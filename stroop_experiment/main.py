# A pyglet implementation of the two block Stroop experiment

import random

import pyglet
from fire import Fire

from stroop_experiment.context import CONFIG_DIR, load_context
from stroop_experiment.stats import BlockStats, stroop_effect_ms
from stroop_experiment.task_manager import StroopExperimentStateManager
from stroop_experiment.utils.clock import ManualScheduler, PygletScheduler
from stroop_experiment.utils.logging import configure_logging, logger


def run_paradigm(
    language: str = "english",
    logger_level: str | None = None,
    fullscreen: bool | None = None,
    seed: int | None = None,
):
    # import here so that the simulation also runs without a display
    from stroop_experiment.display import StroopDisplay

    configure_logging(CONFIG_DIR / "logging.yaml", logger_level=logger_level)

    overrides = {"seed": seed} if seed is not None else {}
    if fullscreen is not None:
        overrides["fullscreen"] = fullscreen
    ctx = load_context(language=language, **overrides)

    window = pyglet.window.Window(
        fullscreen=ctx.fullscreen, height=ctx.screen_height, width=ctx.screen_width
    )
    smgr = StroopExperimentStateManager(ctx=ctx, scheduler=PygletScheduler())
    display = StroopDisplay(ctx, smgr, window)  # noqa: F841 -> keeps handlers alive

    try:
        pyglet.app.run()
    finally:
        smgr.shutdown()


def run_simulation(
    language: str = "english",
    logger_level: str | None = None,
    seed: int | None = None,
    mean_rt_s: float = 0.6,
    interference_s: float = 0.08,
    sd_rt_s: float = 0.1,
    p_correct: float = 0.95,
) -> dict[str, BlockStats]:
    """
    Run both blocks with a simulated subject on a virtual clock, e.g. to check
    a configuration without a window. The subject answers with a normally
    distributed latency, slower by `interference_s` for incongruent stimuli.
    """
    configure_logging(CONFIG_DIR / "logging.yaml", logger_level=logger_level)

    ctx = load_context(language=language, **({"seed": seed} if seed is not None else {}))
    scheduler = ManualScheduler()
    smgr = StroopExperimentStateManager(
        ctx=ctx, scheduler=scheduler, rng=random.Random(seed)
    )
    subject_rng = random.Random(None if seed is None else seed + 1)
    keys = {c.rgba: c.key for c in ctx.color_table}

    smgr.start()
    while smgr.phase != "results":
        if smgr.session.accepts_response:
            stim = smgr.session.active_stimulus
            rt_s = subject_rng.gauss(mean_rt_s, sd_rt_s)
            if not stim.is_congruent:
                rt_s += interference_s
            scheduler.advance(max(rt_s, 0.15))

            key = keys[stim.display_color]
            if subject_rng.random() > p_correct:
                key = subject_rng.choice([k for k in keys.values() if k != key])
            smgr.handle_input(key)
        elif not scheduler.advance_to_next():
            raise RuntimeError(f"Simulation stalled in phase `{smgr.phase}`")

    stats = smgr.block_stats()
    for name, st in stats.items():
        print(f"{name}: {st.to_dict()}")
    print(f"Stroop effect: {stroop_effect_ms(stats['overall']):.1f} ms")

    return stats


def run_paradigm_cli(
    language: str = "english",
    logger_level: str | None = None,
    fullscreen: bool | None = None,
    seed: int | None = None,
    simulate: bool = False,
):
    """Starting the Stroop experiment standalone in a pyglet window

    Parameters
    ----------
    language : str (default: "english")
        Language to use. Currently available:

            - "english"

            - "spanish"

    logger_level : str | None  (default: None)
        Configuration level for the logger. This will overwrite the value from `configs/logging.yaml`.
        Common python logging names are accepted: DEBUG, INFO, WARNING, ERROR

    fullscreen : bool | None (default: None)
        Overwrite the fullscreen setting from `configs/gui.yaml`.

    seed : int | None (default: None)
        Seed for the block generation. If None, every run uses new sequences.

    simulate : bool (default: False)
        If True, no window is opened, but both blocks are run with a simulated
        subject on a virtual clock and the summaries are printed.

    """

    if simulate:
        run_simulation(language=language, logger_level=logger_level, seed=seed)
    else:
        logger.debug("Starting paradigm in a pyglet window")
        run_paradigm(
            language=language,
            logger_level=logger_level,
            fullscreen=fullscreen,
            seed=seed,
        )


if __name__ == "__main__":
    Fire(run_paradigm_cli)
