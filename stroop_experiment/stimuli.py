import random
from dataclasses import dataclass

from stroop_experiment.utils.logging import logger

# canonical color names, also the cycling order of words within a block
COLORS: tuple[str, ...] = ("red", "blue", "green", "yellow")

WHITE: tuple[int, int, int, int] = (255, 255, 255, 255)


@dataclass(frozen=True)
class ColorSpec:
    name: str  # one of COLORS
    word: str  # the text shown, language specific
    key: str  # response key, lower case
    rgba: tuple[int, int, int, int]


@dataclass(frozen=True)
class Stimulus:
    word: str | None  # color name, None for the blanked word
    display_color: tuple[int, int, int, int]
    is_congruent: bool


BLANK_STIMULUS = Stimulus(word=None, display_color=WHITE, is_congruent=False)


def build_color_table(colors_cfg: dict) -> tuple[ColorSpec, ...]:
    """Create the static color table from the `colors` section of a
    language config, e.g. {"red": {"word": "RED", "key": "r", "rgba": [...]}}
    """
    missing = [c for c in COLORS if c not in colors_cfg]
    if missing:
        raise ValueError(f"Color config is missing entries for {missing=}")

    table = tuple(
        ColorSpec(
            name=name,
            word=str(colors_cfg[name]["word"]),
            key=str(colors_cfg[name]["key"]).lower(),
            rgba=tuple(colors_cfg[name]["rgba"]),  # type: ignore
        )
        for name in COLORS
    )

    keys = [c.key for c in table]
    rgbas = [c.rgba for c in table]
    if len(set(keys)) != len(keys) or any(len(k) != 1 for k in keys):
        raise ValueError(f"Response keys must be unique single characters, got {keys=}")
    if len(set(rgbas)) != len(rgbas) or WHITE in rgbas:
        raise ValueError(
            f"Display colors must be unique and differ from white, got {rgbas=}"
        )

    return table


def color_of(display_color: tuple, color_table: tuple[ColorSpec, ...]) -> str:
    """Name of the color whose display value is `display_color`"""
    for c in color_table:
        if c.rgba == tuple(display_color):
            return c.name
    raise KeyError(f"No color with display value {display_color=}")


def make_stimulus(
    word: str, color: str, color_table: tuple[ColorSpec, ...]
) -> Stimulus:
    rgba = {c.name: c.rgba for c in color_table}[color]
    return Stimulus(word=word, display_color=rgba, is_congruent=word == color)


def generate_block(
    color_table: tuple[ColorSpec, ...],
    n_trials: int = 60,
    rng: random.Random | None = None,
) -> list[Stimulus]:
    """Create the stimuli of one block

    Half of the trials are congruent, half incongruent. In both halves the
    word cycles through the colors (red, blue, green, yellow, red, ...). For
    incongruent trials the display color is drawn uniformly from the other
    colors. The concatenation is shuffled afterwards.

    Parameters
    ----------
    color_table : tuple[ColorSpec, ...]
        the static color table as created by `build_color_table`

    n_trials : int
        number of trials in the block, needs to be even

    rng : random.Random | None
        random source, a fresh unseeded one is used if None

    Returns
    -------
    list[Stimulus]
        the shuffled block
    """

    if n_trials % 2 != 0:
        raise ValueError(
            f"Please select {n_trials=} to be a multiple of 2 to allow for an even"
            " split of congruent and incongruent stimuli"
        )

    rng = rng or random.Random()
    names = [c.name for c in color_table]
    n_each = n_trials // 2

    stimuli = []
    for i in range(n_each):
        word = names[i % len(names)]
        stimuli.append(make_stimulus(word, word, color_table))

    for i in range(n_each):
        word = names[i % len(names)]
        color = word
        while color == word:
            color = rng.choice(names)
        stimuli.append(make_stimulus(word, color, color_table))

    # random.shuffle is a Fisher-Yates shuffle -> uniform permutations
    rng.shuffle(stimuli)

    logger.debug(f"block stimuli: {stimuli}")
    return stimuli
