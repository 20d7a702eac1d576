"""Per-item visibility for a given scene step.

Results depend on the full step context, so callers ask again for every item
on every render; nothing here is cached.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.scenes import Scene, Slide, collect_item_ids
from .steps import has_overview_step, is_exit_step


@dataclass(frozen=True)
class ItemVisibility:
    visible: bool = True
    is_focused: bool = False
    hidden: bool = False

    def to_dict(self) -> dict:
        return {"visible": self.visible, "isFocused": self.is_focused, "hidden": self.hidden}


# Unknown items, exit steps and overview steps all resolve to this.
DEFAULT_VISIBILITY = ItemVisibility()


def get_visibility(item_id: str, scene: Optional[Scene],
                   step_index: int, total_steps: int) -> ItemVisibility:
    """Resolve visible/focused/hidden for one item at one step.

    Unknown items (not animated and without an initial state) and slides
    without scenes resolve to the default: visible, unfocused, not hidden.
    """
    if scene is None:
        return DEFAULT_VISIBILITY

    if is_exit_step(scene, step_index, total_steps):
        return DEFAULT_VISIBILITY

    layer = scene.widget_state_layer
    try:
        widget_index = layer.animated_widget_ids.index(item_id)
    except ValueError:
        widget_index = -1

    if widget_index >= 0:
        overview = has_overview_step(scene)
        if overview and step_index == 0:
            return DEFAULT_VISIBILITY
        effective = step_index - 1 if overview else step_index

        if layer.enter_behavior.reveal_mode == "sequential":
            return ItemVisibility(
                visible=widget_index <= effective,
                is_focused=widget_index == effective,
                hidden=False,
            )
        all_revealed = step_index > 0 or total_steps <= 1
        return ItemVisibility(visible=all_revealed, is_focused=False, hidden=False)

    entry = layer.initial_state_for(item_id)
    if entry is not None:
        return ItemVisibility(
            visible=entry.visible,
            is_focused=entry.is_focused,
            hidden=not entry.visible and entry.display_mode == "hidden",
        )

    return DEFAULT_VISIBILITY


def resolve_slide_visibility(slide: Slide, scene: Optional[Scene],
                             step_index: int, total_steps: int) -> dict[str, ItemVisibility]:
    """Visibility of every item in the slide's content tree at one step."""
    return {
        item_id: get_visibility(item_id, scene, step_index, total_steps)
        for item_id in collect_item_ids(slide.items)
    }
