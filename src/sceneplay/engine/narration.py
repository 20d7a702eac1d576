"""Pick the narration text to display for the current step."""

from typing import Optional

from ..core.script import SlideScript
from .steps import StepContext


def select_script_text(script: Optional[SlideScript], ctx: StepContext) -> str:
    if script is None or ctx.scene is None:
        return ""

    if ctx.is_overview or ctx.is_exit:
        return script.opening.text

    widget_id = ctx.current_widget_id
    if widget_id is not None:
        text = script.element_text(widget_id)
        if text is not None:
            return text

    if ctx.scene.widget_state_layer.enter_behavior.reveal_mode == "all-at-once":
        return script.opening.text
    return ""
