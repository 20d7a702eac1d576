"""Declarative widget behavior models: visual states, enter/exit and interaction.

Pure data that the engine reads to decide what each widget looks like at a step.
"""

from typing import Literal, Optional
from ..base import AuthoredModel


RevealMode = Literal["sequential", "all-at-once"]
DisplayMode = Literal["normal", "expanded", "minimized", "hidden"]


class WidgetVisualState(AuthoredModel):
    """Resting state of a widget that is not part of the animated sequence."""
    widget_id: str
    visible: bool = True
    is_focused: bool = False
    display_mode: DisplayMode = "normal"


class AnimationBehavior(AuthoredModel):
    """How widgets enter (or exit) a scene.

    'sequential' reveals one widget per step in animated_widget_ids order;
    'all-at-once' reveals every animated widget together.
    animation_type: none, fade-in, fade-out, slide-up, slide-down, slide-left,
                    slide-right, scale-in, scale-out, bounce, typewriter.
    """
    reveal_mode: RevealMode = "sequential"
    animation_type: str = "fade-in"
    duration: float = 0.5  # seconds per widget
    easing: str = "ease-out"  # linear, ease-in, ease-out, ease-in-out, spring
    stagger_delay: Optional[float] = None
    trigger_mode: Optional[str] = None  # "auto" or "click"
    step_duration: Optional[int] = None  # ms between auto-play steps
    include_overview_step: bool = False


class InteractionBehavior(AuthoredModel):
    """A user-triggered reaction on a widget. Not an animation step."""
    trigger: str = "click"  # click, hover
    action: str = "toggle-expand"  # expand, collapse, toggle-expand, show-detail, highlight
    target_display_mode: Optional[DisplayMode] = None
    exclusive: bool = True
    available_in_auto_mode: bool = False
