"""Step counting for scenes.

A scene's steps are laid out as::

    [overview?] [widget_0 .. widget_{N-1}] [exit?]

The overview step only exists for 'sequential' reveal; the exit step exists
whenever the layer has an exit behavior. Every scene has at least one step.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.scenes import Scene


def calc_scene_steps(scene: Optional[Scene]) -> int:
    """Total number of steps in a scene (always >= 1)."""
    if scene is None:
        return 1
    layer = scene.widget_state_layer
    steps = max(1, len(layer.animated_widget_ids))
    if has_overview_step(scene):
        steps += 1
    if layer.exit_behavior is not None:
        steps += 1
    return steps


def has_overview_step(scene: Optional[Scene]) -> bool:
    if scene is None:
        return False
    enter = scene.widget_state_layer.enter_behavior
    return enter.include_overview_step and enter.reveal_mode == "sequential"


def is_exit_step(scene: Optional[Scene], step_index: int, total_steps: int) -> bool:
    if scene is None:
        return False
    return scene.widget_state_layer.exit_behavior is not None and step_index == total_steps - 1


def effective_step(scene: Optional[Scene], step_index: int) -> int:
    """Step index with the overview step taken out (-1 on the overview)."""
    return step_index - 1 if has_overview_step(scene) else step_index


@dataclass(frozen=True)
class StepContext:
    """Snapshot of where playback is inside one scene."""
    scene: Optional[Scene]
    step_index: int
    total_steps: int

    @classmethod
    def for_scene(cls, scene: Optional[Scene], step_index: int) -> "StepContext":
        return cls(scene=scene, step_index=step_index, total_steps=calc_scene_steps(scene))

    @property
    def has_overview(self) -> bool:
        return has_overview_step(self.scene)

    @property
    def is_overview(self) -> bool:
        return self.has_overview and self.step_index == 0

    @property
    def is_exit(self) -> bool:
        return is_exit_step(self.scene, self.step_index, self.total_steps)

    @property
    def effective_step(self) -> int:
        return effective_step(self.scene, self.step_index)

    @property
    def current_widget_id(self) -> Optional[str]:
        """Widget the current step belongs to, or None on overview/exit steps."""
        if self.scene is None or self.is_overview or self.is_exit:
            return None
        ids = self.scene.widget_state_layer.animated_widget_ids
        idx = self.effective_step
        if 0 <= idx < len(ids):
            return ids[idx]
        return None


def generate_step_labels(scene: Optional[Scene], widget_titles: dict[str, str]) -> list[str]:
    """Human-readable label for each step, one entry per step."""
    if scene is None:
        return ["Scene"]

    layer = scene.widget_state_layer
    ids = layer.animated_widget_ids
    labels: list[str] = []

    if has_overview_step(scene):
        labels.append("Overview")

    if not ids:
        labels.append(scene.title or "Scene")
    elif layer.enter_behavior.reveal_mode == "sequential":
        for widget_id in ids:
            labels.append(widget_titles.get(widget_id) or f"Widget {widget_id}")
    else:
        name = scene.title or "Enter"
        labels.extend(f"{name} ({n}/{len(ids)})" for n in range(1, len(ids) + 1))

    if layer.exit_behavior is not None:
        labels.append("Exit")

    return labels
