"""Scene and widget state layer models."""

from typing import Optional
from pydantic import Field

from ..base import AuthoredModel
from .behaviors import AnimationBehavior, InteractionBehavior, WidgetVisualState


class WidgetStateLayer(AuthoredModel):
    """Animation and interaction contract for the widgets of one scene.

    animated_widget_ids is ordered: it is the reveal/focus sequence for
    'sequential' mode. Widgets not listed fall back to initial_states.
    An exit_behavior adds one trailing step where everything is shown.
    """
    initial_states: list[WidgetVisualState] = Field(default_factory=list)
    enter_behavior: AnimationBehavior = Field(default_factory=AnimationBehavior)
    exit_behavior: Optional[AnimationBehavior] = None
    interaction_behaviors: list[InteractionBehavior] = Field(default_factory=list)
    animated_widget_ids: list[str] = Field(default_factory=list)

    def initial_state_for(self, widget_id: str) -> Optional[WidgetVisualState]:
        for state in self.initial_states:
            if state.widget_id == widget_id:
                return state
        return None


class Scene(AuthoredModel):
    """One animation phase of a slide."""
    id: str
    title: str = ""
    description: str = ""
    order: int = 0
    trigger_mode: Optional[str] = None  # "auto" or "click"
    duration: Optional[int] = None  # ms, informational for auto-play
    activated_by_widget_ids: Optional[list[str]] = None
    widget_state_layer: WidgetStateLayer = Field(default_factory=WidgetStateLayer)

    def is_activated_by(self, widget_id: str) -> bool:
        return bool(self.activated_by_widget_ids) and widget_id in self.activated_by_widget_ids
