"""Scene animation engine — public API re-exports."""

from .steps import (
    StepContext,
    calc_scene_steps,
    effective_step,
    generate_step_labels,
    has_overview_step,
    is_exit_step,
)
from .visibility import DEFAULT_VISIBILITY, ItemVisibility, get_visibility, resolve_slide_visibility
from .interaction import (
    Action,
    JumpScene,
    NoOp,
    ToggleExpand,
    effective_expanded_card,
    is_click_only_popup,
    resolve_click,
    step_expanded_card_id,
)
from .narration import select_script_text
from .timer import AutoAdvanceTimer, Scheduler, ThreadingScheduler
from .navigation import NavigationController, NavigationState, PlaybackFrame

__all__ = [
    "StepContext",
    "calc_scene_steps",
    "effective_step",
    "generate_step_labels",
    "has_overview_step",
    "is_exit_step",
    "DEFAULT_VISIBILITY",
    "ItemVisibility",
    "get_visibility",
    "resolve_slide_visibility",
    "Action",
    "JumpScene",
    "NoOp",
    "ToggleExpand",
    "effective_expanded_card",
    "is_click_only_popup",
    "resolve_click",
    "step_expanded_card_id",
    "select_script_text",
    "AutoAdvanceTimer",
    "Scheduler",
    "ThreadingScheduler",
    "NavigationController",
    "NavigationState",
    "PlaybackFrame",
]
