import random
from dataclasses import dataclass, field

from stroop_experiment.context import Phase, Session, StroopContext
from stroop_experiment.presenter import TrialPresenter
from stroop_experiment.responses import resolve_key, score
from stroop_experiment.stats import BlockStats, stroop_effect_ms, summarize
from stroop_experiment.stimuli import generate_block
from stroop_experiment.utils.clock import PygletScheduler, ScheduledCall
from stroop_experiment.utils.logging import logger


@dataclass(frozen=True)
class RenderState:
    """Everything the display needs to draw a frame"""

    phase: Phase
    show_fixation: bool = False
    word_text: str = ""
    word_color: tuple = (255, 255, 255, 255)
    progress: float = 0.0
    pause_remaining: int = 0
    stats: dict[str, BlockStats] = field(default_factory=dict)
    stroop_effect_ms: float = 0.0


class StroopExperimentStateManager:
    """
    A state manager for the two block Stroop experiment providing
    callbacks for the transitions:
    instructions -> block1 -> pause -> block2 -> results -> instructions

    Within a block the trials are run by the TrialPresenter. Input is
    forwarded by the display via `start`, `handle_input` and `restart`,
    all of which are no-ops if called in the wrong phase.
    """

    def __init__(
        self,
        ctx: StroopContext,
        scheduler=None,
        rng: random.Random | None = None,
    ):
        self.ctx = ctx  # the context under which to operate
        self.scheduler = scheduler or PygletScheduler()
        self.rng = rng or random.Random(ctx.seed)

        self.session = Session()
        self.presenter = TrialPresenter(ctx, self.session, self.scheduler)
        self.pause_call: ScheduledCall | None = None

    @property
    def phase(self) -> Phase:
        return self.session.phase

    def transition(self, next_phase: Phase):
        logger.debug(f"Transitioning from `{self.session.phase}` to `{next_phase}`")
        self.session.phase = next_phase

    # ------------------------------------------------------------------------
    #                      Blocks
    # ------------------------------------------------------------------------
    def start(self):
        """Leave the instructions and start the first block"""
        if self.session.phase != "instructions":
            logger.debug(f"Ignoring start in phase `{self.session.phase}`")
            return

        logger.info("User finished instructions")
        self.start_block(1)

    def start_block(self, block_nr: int):
        self.session.block = generate_block(
            self.ctx.color_table, n_trials=self.ctx.n_trials, rng=self.rng
        )
        self.session.current_stimulus_idx = 0
        self.transition("block1" if block_nr == 1 else "block2")
        logger.info(f"Starting block {block_nr} with {len(self.session.block)} trials")

        self.presenter.start_trial(with_gap=False)

    def end_block(self):
        self.presenter.end_trial()
        if self.session.phase == "block1":
            logger.info(f"Block 1 finished: {summarize(self.session.block1_responses)}")
            self.start_pause()
        else:
            logger.info(f"Block 2 finished: {summarize(self.session.block2_responses)}")
            self.transition("results")
            self.log_results()

    # ------------------------------------------------------------------------
    #                      Responses
    # ------------------------------------------------------------------------
    def handle_input(self, key: str) -> bool:
        """
        Score `key` against the active stimulus. Returns True if the input
        was accepted, i.e. a response was recorded.
        """
        if self.session.phase not in ("block1", "block2"):
            return False
        if resolve_key(key, self.ctx.color_table) is None:
            logger.debug(f"Ignoring unbound {key=}")
            return False
        if not self.session.accepts_response:
            logger.debug(f"Ignoring {key=} during `{self.session.trial_phase}`")
            return False

        response = score(
            key,
            self.session.active_stimulus,
            self.session.tic,
            self.scheduler.now(),
            self.ctx.color_table,
        )
        self.session.current_responses.append(response)
        logger.info(
            f"Reaction: {key=}, rtime_ms={response.response_time_ms:.1f},"
            f" {response.is_correct=}"
        )

        self.session.current_stimulus_idx += 1
        if self.session.current_stimulus_idx < len(self.session.block):
            self.presenter.start_trial(with_gap=True)
        else:
            self.end_block()

        return True

    # ------------------------------------------------------------------------
    #                      Pause
    # ------------------------------------------------------------------------
    def start_pause(self):
        self.transition("pause")
        self.session.pause_remaining = max(self.ctx.pause_time_s, 0)
        if self.session.pause_remaining == 0:
            self.start_block(2)
        else:
            self.schedule_pause_tick()

    def schedule_pause_tick(self):
        self.pause_call = self.scheduler.schedule_after(
            self.ctx.pause_tick_s, self.pause_tick
        )

    def pause_tick(self):
        self.session.pause_remaining -= 1
        logger.debug(f"Pause countdown {self.session.pause_remaining=}")

        if self.session.pause_remaining <= 0:
            self.session.pause_remaining = 0
            self.pause_call = None
            self.start_block(2)
        else:
            self.schedule_pause_tick()

    # ------------------------------------------------------------------------
    #                      Results and reset
    # ------------------------------------------------------------------------
    def block_stats(self) -> dict[str, BlockStats]:
        return {
            "block1": summarize(self.session.block1_responses),
            "block2": summarize(self.session.block2_responses),
            "overall": summarize(
                self.session.block1_responses + self.session.block2_responses
            ),
        }

    def log_results(self):
        stats = self.block_stats()
        for name, st in stats.items():
            logger.info(f"Results {name}: {st.to_dict()}")
        logger.info(f"Stroop effect: {stroop_effect_ms(stats['overall']):.1f} ms")

    def cancel_pending(self):
        self.presenter.cancel()
        if self.pause_call is not None:
            self.pause_call.cancel()
            self.pause_call = None

    def restart(self):
        """Go back to the instructions, dropping all responses"""
        if self.session.phase != "results":
            logger.debug(f"Ignoring restart in phase `{self.session.phase}`")
            return

        self.cancel_pending()
        self.session.reset()
        logger.info("Restarting experiment")

    def shutdown(self):
        self.cancel_pending()

    # ------------------------------------------------------------------------
    #                      Rendering
    # ------------------------------------------------------------------------
    def render_state(self) -> RenderState:
        s = self.session

        if s.phase in ("block1", "block2"):
            stim = s.shown_stimulus
            words = {c.name: c.word for c in self.ctx.color_table}
            return RenderState(
                phase=s.phase,
                show_fixation=s.trial_phase == "fixation",
                word_text=words.get(stim.word, "") if stim and stim.word else "",
                word_color=stim.display_color if stim else (255, 255, 255, 255),
                progress=s.current_stimulus_idx / len(s.block) if s.block else 0.0,
            )

        if s.phase == "pause":
            return RenderState(phase=s.phase, pause_remaining=s.pause_remaining)

        if s.phase == "results":
            stats = self.block_stats()
            return RenderState(
                phase=s.phase,
                stats=stats,
                stroop_effect_ms=stroop_effect_ms(stats["overall"]),
            )

        return RenderState(phase=s.phase)
