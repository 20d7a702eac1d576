"""Click resolution: turns a widget click into one navigation decision.

Rules are tried in order and the first one that matches wins:

1. menu/tab navigation -- the widget activates another scene
2. click-only popup    -- toggle the widget's expanded card
3. nothing             -- in step-driven popup mode expansion follows the step
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..core.scenes import AnimationBehavior, InteractionBehavior, Scene
from .steps import StepContext


@dataclass(frozen=True)
class JumpScene:
    index: int


@dataclass(frozen=True)
class ToggleExpand:
    card_id: Optional[str]


@dataclass(frozen=True)
class NoOp:
    pass


Action = Union[JumpScene, ToggleExpand, NoOp]


@dataclass(frozen=True)
class ClickContext:
    widget_id: str
    scenes: list[Scene]
    current_scene_index: int
    enter_behavior: Optional[AnimationBehavior]
    interaction_behaviors: list[InteractionBehavior]
    expanded_card_id: Optional[str]


def is_click_only_popup(enter_behavior: Optional[AnimationBehavior],
                        interaction_behaviors: list[InteractionBehavior]) -> bool:
    """True when cards expand on click instead of following the step."""
    if enter_behavior is None or enter_behavior.reveal_mode != "all-at-once":
        return False
    return any(
        b.action == "toggle-expand" and not b.available_in_auto_mode
        for b in interaction_behaviors
    )


def _menu_navigation(ctx: ClickContext) -> Optional[Action]:
    for i, scene in enumerate(ctx.scenes):
        if i != ctx.current_scene_index and scene.is_activated_by(ctx.widget_id):
            return JumpScene(i)
    return None


def _click_only_popup(ctx: ClickContext) -> Optional[Action]:
    if not is_click_only_popup(ctx.enter_behavior, ctx.interaction_behaviors):
        return None
    if ctx.expanded_card_id == ctx.widget_id:
        return ToggleExpand(None)
    return ToggleExpand(ctx.widget_id)


CLICK_RULES: tuple[Callable[[ClickContext], Optional[Action]], ...] = (
    _menu_navigation,
    _click_only_popup,
)


def resolve_click(widget_id: str, scenes: list[Scene], current_scene_index: int,
                  enter_behavior: Optional[AnimationBehavior],
                  interaction_behaviors: list[InteractionBehavior],
                  expanded_card_id: Optional[str]) -> Action:
    ctx = ClickContext(
        widget_id=widget_id,
        scenes=scenes,
        current_scene_index=current_scene_index,
        enter_behavior=enter_behavior,
        interaction_behaviors=interaction_behaviors,
        expanded_card_id=expanded_card_id,
    )
    for rule in CLICK_RULES:
        action = rule(ctx)
        if action is not None:
            return action
    return NoOp()


def step_expanded_card_id(scene: Optional[Scene], step_index: int,
                          total_steps: int) -> Optional[str]:
    """Card expanded by the step itself (sequential scenes only)."""
    if scene is None or scene.widget_state_layer.enter_behavior.reveal_mode != "sequential":
        return None
    return StepContext(scene, step_index, total_steps).current_widget_id


def effective_expanded_card(scene: Optional[Scene], step_index: int, total_steps: int,
                            expanded_card_id: Optional[str]) -> Optional[str]:
    """The card a renderer should show expanded right now."""
    if scene is None:
        return None
    layer = scene.widget_state_layer
    if is_click_only_popup(layer.enter_behavior, layer.interaction_behaviors):
        return expanded_card_id
    return step_expanded_card_id(scene, step_index, total_steps)
