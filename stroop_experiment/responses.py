from dataclasses import dataclass

from stroop_experiment.stimuli import ColorSpec, Stimulus, color_of


class NoActiveStimulusError(RuntimeError):
    """Raised if a response is scored while no stimulus is active"""


@dataclass(frozen=True)
class Response:
    stimulus: Stimulus
    response_time_ms: float
    is_correct: bool
    key_pressed: str


def resolve_key(key: str, color_table: tuple[ColorSpec, ...]) -> str | None:
    """Color name bound to `key` (case insensitive), None if unbound"""
    if not isinstance(key, str) or len(key) != 1:
        return None

    key = key.lower()
    for c in color_table:
        if c.key == key:
            return c.name
    return None


def score(
    key: str,
    stimulus: Stimulus | None,
    presentation_start_s: float,
    now_s: float,
    color_table: tuple[ColorSpec, ...],
) -> Response:
    """
    Create the response record for `key` given the stimulus shown at
    `presentation_start_s`. A response is correct if the key is bound to the
    display color of the stimulus.
    """
    if stimulus is None or stimulus.word is None:
        raise NoActiveStimulusError(
            f"Cannot score {key=} without an active stimulus, got {stimulus=}"
        )

    chosen = resolve_key(key, color_table)
    expected = color_of(stimulus.display_color, color_table)

    return Response(
        stimulus=stimulus,
        response_time_ms=max(now_s - presentation_start_s, 0.0) * 1000,
        is_correct=chosen is not None and chosen == expected,
        key_pressed=key,
    )
