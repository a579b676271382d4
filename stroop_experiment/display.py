import pyglet

from stroop_experiment.context import StroopContext
from stroop_experiment.stimuli import ColorSpec
from stroop_experiment.task_manager import RenderState, StroopExperimentStateManager
from stroop_experiment.utils.logging import logger


def button_layout(
    n_buttons: int, window_width: int, width: int, height: int, y: int, gap: int = 20
) -> list[tuple[int, int, int, int]]:
    """(x, y, width, height) of `n_buttons` centered in a row"""
    total = n_buttons * width + (n_buttons - 1) * gap
    x0 = (window_width - total) // 2
    return [(x0 + i * (width + gap), y, width, height) for i in range(n_buttons)]


def hit(box: tuple[int, int, int, int], x: int, y: int) -> bool:
    bx, by, bw, bh = box
    return bx <= x <= bx + bw and by <= y <= by + bh


class StroopDisplay:
    """
    The window side of the experiment: draws the RenderState of the state
    manager and forwards key presses and button clicks to it
    """

    def __init__(
        self,
        ctx: StroopContext,
        smgr: StroopExperimentStateManager,
        window: pyglet.window.BaseWindow,
    ):
        self.ctx = ctx
        self.smgr = smgr
        self.window = window
        self.known_stimuli: dict = {}
        self.response_buttons: list[tuple[ColorSpec, tuple]] = []
        self.start_button: tuple = ()

        r, g, b, a = ctx.background_color
        pyglet.gl.glClearColor(r / 255, g / 255, b / 255, a / 255)

        self.create_stimuli()

        self.window.push_handlers(
            on_draw=self.on_draw,
            on_key_press=self.on_key_press,
            on_text=self.on_text,
            on_mouse_press=self.on_mouse_press,
            on_close=self.on_close,
        )

    def label(self, text: str = "", **kwargs) -> pyglet.text.Label:
        kw = dict(
            color=self.ctx.text_color,
            font_size=self.ctx.instruction_font_size,
            x=self.window.width // 2,
            y=self.window.height // 2,
            anchor_x="center",
            anchor_y="center",
        )
        kw.update(kwargs)
        return pyglet.text.Label(text=text, **kw)

    def create_stimuli(self):
        """Create all labels and shapes once, phases only pick what to draw"""
        w, h = self.window.width, self.window.height
        msgs = self.ctx.msgs

        instruction_batch = pyglet.graphics.Batch()
        self.known_stimuli["instruction_header"] = self.label(
            msgs["instruction_headline"],
            font_size=int(self.ctx.instruction_font_size * 1.5),
            y=int(h // 10 * 9),
            batch=instruction_batch,
        )
        self.known_stimuli["instruction"] = self.label(
            msgs["instruction"],
            y=int(h // 10 * 6),
            width=int(w * 0.8),
            multiline=True,
            batch=instruction_batch,
        )
        self.known_stimuli["instruction_keys"] = self.label(
            "   ".join(f"{c.word} = {c.key.upper()}" for c in self.ctx.color_table),
            y=int(h // 10 * 4),
            batch=instruction_batch,
        )
        self.known_stimuli["instruction_footer"] = self.label(
            msgs["instruction_footer"],
            y=int(h // 12),
            batch=instruction_batch,
        )
        self.start_button = button_layout(
            1,
            w,
            self.ctx.button_width_px,
            self.ctx.button_height_px,
            y=int(h // 10 * 2),
        )[0]
        bx, by, bw, bh = self.start_button
        self.known_stimuli["start_button"] = pyglet.shapes.Rectangle(
            bx, by, bw, bh, color=(60, 60, 60, 255), batch=instruction_batch
        )
        self.known_stimuli["start_button_label"] = self.label(
            msgs["start_button"],
            x=bx + bw // 2,
            y=by + bh // 2,
            color=(255, 255, 255, 255),
            batch=instruction_batch,
        )
        self.known_stimuli["instruction_batch"] = instruction_batch

        self.known_stimuli["fixation"] = self.label(
            "+", color=(80, 80, 80, 255), font_size=self.ctx.font_size
        )
        self.known_stimuli["word"] = self.label("", font_size=self.ctx.font_size)

        # progress bar on top
        self.known_stimuli["progress_bg"] = pyglet.shapes.Rectangle(
            w // 10, h - 40, w * 8 // 10, 12, color=(220, 220, 220, 255)
        )
        self.known_stimuli["progress"] = pyglet.shapes.Rectangle(
            w // 10, h - 40, 0, 12, color=(80, 80, 80, 255)
        )

        # response buttons, one per color
        button_batch = pyglet.graphics.Batch()
        boxes = button_layout(
            len(self.ctx.color_table),
            w,
            self.ctx.button_width_px,
            self.ctx.button_height_px,
            y=h // 10,
        )
        shapes = []
        for c, box in zip(self.ctx.color_table, boxes):
            bx, by, bw, bh = box
            shapes.append(
                pyglet.shapes.Rectangle(bx, by, bw, bh, color=c.rgba, batch=button_batch)
            )
            shapes.append(
                self.label(
                    f"{c.word} ({c.key.upper()})",
                    x=bx + bw // 2,
                    y=by + bh // 2,
                    color=(255, 255, 255, 255),
                    batch=button_batch,
                )
            )
            self.response_buttons.append((c, box))
        self.known_stimuli["button_batch"] = button_batch
        # keep references, otherwise the shapes are garbage collected
        self.known_stimuli["button_shapes"] = shapes

        self.known_stimuli["pause"] = self.label(
            "", font_size=int(self.ctx.instruction_font_size * 1.5), width=int(w * 0.8),
            multiline=True,
        )
        self.known_stimuli["results"] = self.label(
            "", y=h // 2, width=int(w * 0.9), multiline=True
        )

    # ------------------------------------------------------------------------
    #                      Drawing
    # ------------------------------------------------------------------------
    def results_text(self, state: RenderState) -> str:
        msgs = self.ctx.msgs
        names = {"block1": "1", "block2": "2", "overall": "Total"}
        lines = [msgs["results_headline"], ""]
        lines.append(msgs["results_total"].format(**state.stats["overall"].to_dict()))
        for key, st in state.stats.items():
            lines.append(msgs["results_block"].format(name=names[key], **st.to_dict()))
        lines.append("")
        lines.append(msgs["stroop_effect"].format(stroop_effect_ms=state.stroop_effect_ms))
        lines.append("")
        lines.append(msgs["results_footer"])
        return "\n".join(lines)

    def set_text(self, name: str, text: str):
        lbl = self.known_stimuli[name]
        if lbl.text != text:
            lbl.text = text

    def on_draw(self):
        self.window.clear()
        state = self.smgr.render_state()

        match state.phase:
            case "instructions":
                self.known_stimuli["instruction_batch"].draw()

            case "block1" | "block2":
                self.known_stimuli["progress_bg"].draw()
                self.known_stimuli["progress"].width = (
                    self.known_stimuli["progress_bg"].width * state.progress
                )
                self.known_stimuli["progress"].draw()

                if state.show_fixation:
                    self.known_stimuli["fixation"].draw()
                elif state.word_text:
                    word = self.known_stimuli["word"]
                    self.set_text("word", state.word_text)
                    word.color = state.word_color
                    word.draw()

                self.known_stimuli["button_batch"].draw()

            case "pause":
                self.set_text(
                    "pause", f"{self.ctx.msgs['pause'].strip()} {state.pause_remaining} s"
                )
                self.known_stimuli["pause"].draw()

            case "results":
                self.set_text("results", self.results_text(state))
                self.known_stimuli["results"].draw()

    # ------------------------------------------------------------------------
    #                      Handlers
    # ------------------------------------------------------------------------
    def on_key_press(self, symbol, modifiers):
        match symbol:
            case pyglet.window.key.ESCAPE:
                logger.debug("Escape key pressed")
                self.smgr.shutdown()
                self.window.close()
                return True
            case pyglet.window.key.SPACE:
                self.smgr.start()
                return True

    def on_text(self, text: str):
        if self.smgr.phase == "results" and text.lower() == "r":
            self.smgr.restart()
        else:
            self.smgr.handle_input(text)
        return True

    def on_mouse_press(self, x, y, button, modifiers):
        if self.smgr.phase == "instructions" and hit(self.start_button, x, y):
            self.smgr.start()
            return True

        for c, box in self.response_buttons:
            if hit(box, x, y):
                logger.debug(f"Button {c.name} clicked")
                self.smgr.handle_input(c.key)
                return True

    def on_close(self):
        self.smgr.shutdown()
