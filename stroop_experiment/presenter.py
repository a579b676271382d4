from typing import Callable

from stroop_experiment.context import Session, StroopContext
from stroop_experiment.stimuli import BLANK_STIMULUS
from stroop_experiment.utils.clock import ScheduledCall
from stroop_experiment.utils.logging import logger


class TrialPresenter:
    """
    Drives the timeline of a single trial:
    (gap ->) fixation -> word -> blank

    The word is blanked after `stimulus_time_s` whether or not a response
    arrived. The blank phase keeps the presentation start of the word, so
    latencies are always measured from word onset.
    """

    def __init__(self, ctx: StroopContext, session: Session, scheduler):
        self.ctx = ctx
        self.session = session
        self.scheduler = scheduler
        self.pending: list[ScheduledCall] = []

    def schedule(self, delay_s: float, action: Callable[[], None]):
        self.pending = [c for c in self.pending if c.pending]
        self.pending.append(self.scheduler.schedule_after(delay_s, action))

    def cancel(self):
        """Cancel all pending transitions of the current trial"""
        for call in self.pending:
            call.cancel()
        self.pending = []

    def start_trial(self, with_gap: bool = False):
        self.cancel()
        if with_gap and self.ctx.inter_trial_time_s > 0:
            self.session.clear_trial()
            self.session.trial_phase = "gap"
            self.schedule(self.ctx.inter_trial_time_s, self.show_fixation)
        else:
            self.show_fixation()

    def show_fixation(self):
        logger.debug(
            f"Showing fixation for trial {self.session.current_stimulus_idx=}"
        )
        self.session.clear_trial()
        self.session.trial_phase = "fixation"
        self.schedule(self.ctx.fixation_time_s, self.show_word)

    def show_word(self):
        stim = self.session.block[self.session.current_stimulus_idx]

        self.session.trial_phase = "word"
        self.session.shown_stimulus = stim
        self.session.active_stimulus = stim

        # start taking time
        self.session.tic = self.scheduler.now()

        logger.info(
            f"Showing stimulus {self.session.current_stimulus_idx + 1} of"
            f" {len(self.session.block)}: {stim.word=}, {stim.display_color=},"
            f" {stim.is_congruent=}"
        )
        self.schedule(self.ctx.stimulus_time_s, self.blank_word)

    def blank_word(self):
        logger.debug("Blanking word")
        self.session.trial_phase = "blank"
        self.session.shown_stimulus = BLANK_STIMULUS

    def end_trial(self):
        self.cancel()
        self.session.clear_trial()
