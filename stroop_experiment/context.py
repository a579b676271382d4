from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import yaml

from stroop_experiment.responses import Response
from stroop_experiment.stimuli import ColorSpec, Stimulus, build_color_table
from stroop_experiment.utils.logging import logger

CONFIG_DIR = Path(__file__).resolve().parent.parent / "configs"

Phase = Literal["instructions", "block1", "pause", "block2", "results"]
TrialPhase = Literal["gap", "fixation", "word", "blank"]


@dataclass
class StroopContext:
    # language specific
    language: str
    color_table: tuple[ColorSpec, ...] = field(default_factory=tuple)
    msgs: dict = field(default_factory=dict)

    # parametrization
    n_trials: int = 60  # per block
    fixation_time_s: float = 1.0  # time to show the fixation
    stimulus_time_s: float = 0.75  # word visible, afterwards blanked
    inter_trial_time_s: float = 0.5  # empty screen before the next fixation
    pause_time_s: int = 10  # countdown between the blocks
    pause_tick_s: float = 1.0
    seed: int | None = None

    # GUI
    fullscreen: bool = False
    screen_width: int = 1000
    screen_height: int = 700
    font_size: int = 56
    instruction_font_size: int = 16
    button_width_px: int = 160
    button_height_px: int = 60
    background_color: tuple = (255, 255, 255, 255)
    text_color: tuple = (0, 0, 0, 255)

    def __post_init__(self):
        if self.n_trials <= 0 or self.n_trials % 2 != 0:
            raise ValueError(f"{self.n_trials=} must be a positive, even number")


@dataclass
class Session:
    """All mutable state of the running experiment"""

    phase: Phase = "instructions"
    block: list[Stimulus] = field(default_factory=list)
    current_stimulus_idx: int = 0
    trial_phase: TrialPhase | None = None
    shown_stimulus: Stimulus | None = None  # what is currently drawn
    active_stimulus: Stimulus | None = None  # what a response is scored against
    tic: float = 0  # presentation start of the active stimulus
    block1_responses: list[Response] = field(default_factory=list)
    block2_responses: list[Response] = field(default_factory=list)
    pause_remaining: int = 0

    @property
    def accepts_response(self) -> bool:
        return self.trial_phase in ("word", "blank")

    @property
    def current_responses(self) -> list[Response]:
        return self.block2_responses if self.phase == "block2" else self.block1_responses

    def clear_trial(self):
        self.trial_phase = None
        self.shown_stimulus = None
        self.active_stimulus = None
        self.tic = 0

    def reset(self):
        self.phase = "instructions"
        self.block = []
        self.current_stimulus_idx = 0
        self.clear_trial()
        self.block1_responses = []
        self.block2_responses = []
        self.pause_remaining = 0


def load_context(
    language: str = "english", config_dir: Path = CONFIG_DIR, **kwargs
) -> StroopContext:
    task_cfg = yaml.safe_load(open(config_dir / "task.yaml"))
    language_file = config_dir / f"{language}.yaml"
    if not language_file.exists():
        raise FileNotFoundError(f"No language config for {language=} at {language_file}")
    language_cfg = yaml.safe_load(open(language_file))
    gui_cfg = yaml.safe_load(open(config_dir / "gui.yaml"))

    kw = {
        **task_cfg["general"],
        **gui_cfg,
        "color_table": build_color_table(language_cfg["colors"]),
        "msgs": language_cfg["msgs"],
    }
    for k in ("background_color", "text_color"):
        if k in kw:
            kw[k] = tuple(kw[k])

    # use kwargs to overwrite
    kw.update(**kwargs)

    # log the parameters to the data as well
    logger.info(f"Creating StroopContext with {kw=}")

    ctx = StroopContext(language=language, **kw)

    return ctx
