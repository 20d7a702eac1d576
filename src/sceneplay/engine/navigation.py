"""Playback navigation: the single owner of NavigationState.

Every input (user action, key press, timer fire) runs to completion under one
re-entrant lock. Whenever the slide, scene, step or playing flag changes, the
pending auto-play timer is cancelled and, while playing, a fresh one is armed.
"""

import logging
import threading
from dataclasses import asdict, dataclass, replace
from typing import Callable, Optional

from ..core.config import PlaybackConfig
from ..core.scenes import Scene, Slide
from ..core.script import SlideScript
from .interaction import (
    Action,
    JumpScene,
    ToggleExpand,
    effective_expanded_card,
    resolve_click,
)
from .narration import select_script_text
from .steps import StepContext, calc_scene_steps, generate_step_labels
from .timer import AutoAdvanceTimer, Scheduler, ThreadingScheduler
from .visibility import ItemVisibility, get_visibility, resolve_slide_visibility

logger = logging.getLogger("ScenePlayMCP.engine.navigation")

Listener = Callable[["NavigationState"], None]


@dataclass(frozen=True)
class NavigationState:
    slide_index: int = 0
    scene_index: int = 0
    step_index: int = 0
    is_playing: bool = False
    expanded_card_id: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PlaybackFrame:
    """Everything a renderer paints for one step, read under a single lock."""
    state: NavigationState
    slide: Optional[Slide]
    slide_count: int
    scene_count: int
    total_steps: int
    step_labels: list[str]
    step_label: str
    expanded_card_id: Optional[str]
    script_text: str
    items: dict[str, ItemVisibility]


class NavigationController:
    """Drives playback across steps, scenes and slides of a fixed deck."""

    def __init__(self, slides: list[Slide],
                 scripts: Optional[list[SlideScript]] = None,
                 config: Optional[PlaybackConfig] = None,
                 scheduler: Optional[Scheduler] = None):
        self._slides = list(slides)
        self._scripts = {s.slide_id: s for s in scripts or []}
        self._config = config or PlaybackConfig()
        self._lock = threading.RLock()
        self._state = NavigationState()
        self._listeners: list[Listener] = []
        self._timer = AutoAdvanceTimer(scheduler or ThreadingScheduler(), self._on_timer)
        self._closed = False

    # ── Read API ────────────────────────────────────────────────────────

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def slides(self) -> list[Slide]:
        return self._slides

    @property
    def current_slide(self) -> Optional[Slide]:
        if 0 <= self._state.slide_index < len(self._slides):
            return self._slides[self._state.slide_index]
        return None

    @property
    def scenes(self) -> list[Scene]:
        slide = self.current_slide
        return slide.scenes if slide else []

    @property
    def current_scene(self) -> Optional[Scene]:
        slide = self.current_slide
        return slide.get_scene(self._state.scene_index) if slide else None

    @property
    def total_steps(self) -> int:
        return calc_scene_steps(self.current_scene)

    @property
    def step_context(self) -> StepContext:
        return StepContext.for_scene(self.current_scene, self._state.step_index)

    @property
    def timer_pending(self) -> bool:
        return self._timer.pending

    def get_item_visibility(self, item_id: str) -> ItemVisibility:
        with self._lock:
            return get_visibility(item_id, self.current_scene,
                                  self._state.step_index, self.total_steps)

    def frame(self) -> dict[str, ItemVisibility]:
        """Visibility of every item on the current slide."""
        with self._lock:
            slide = self.current_slide
            if slide is None:
                return {}
            return resolve_slide_visibility(slide, self.current_scene,
                                            self._state.step_index, self.total_steps)

    @property
    def effective_expanded_card(self) -> Optional[str]:
        with self._lock:
            return effective_expanded_card(self.current_scene, self._state.step_index,
                                           self.total_steps, self._state.expanded_card_id)

    def step_labels(self) -> list[str]:
        with self._lock:
            slide = self.current_slide
            titles = slide.widget_titles() if slide else {}
            return generate_step_labels(self.current_scene, titles)

    def current_script_text(self) -> str:
        with self._lock:
            slide = self.current_slide
            script = self._scripts.get(slide.id) if slide else None
            return select_script_text(script, self.step_context)

    def snapshot(self) -> PlaybackFrame:
        """Read the whole renderable state at once.

        A timer fire on another thread waits until the snapshot is complete,
        so every field describes the same step.
        """
        with self._lock:
            labels = self.step_labels()
            step = self._state.step_index
            return PlaybackFrame(
                state=self._state,
                slide=self.current_slide,
                slide_count=len(self._slides),
                scene_count=len(self.scenes),
                total_steps=self.total_steps,
                step_labels=labels,
                step_label=labels[step] if step < len(labels) else "",
                expanded_card_id=self.effective_expanded_card,
                script_text=self.current_script_text(),
                items=self.frame(),
            )

    # ── Subscriptions ──────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state listener. Returns a function that unsubscribes it.

        Listeners run on the thread that made the change, with the controller
        lock held. They may read the controller but must not wait on another
        thread that uses it.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ── Actions ────────────────────────────────────────────────────────

    def advance(self) -> bool:
        with self._lock:
            target = self._next_position()
            if target is None:
                return False
            self._commit(target)
            return True

    def retreat(self) -> bool:
        with self._lock:
            s = self._state
            if s.step_index > 0:
                target = replace(s, step_index=s.step_index - 1)
            elif s.scene_index > 0:
                target = replace(s, scene_index=s.scene_index - 1, step_index=0)
            elif s.slide_index > 0:
                target = replace(s, slide_index=s.slide_index - 1, scene_index=0, step_index=0)
            else:
                return False
            self._commit(target)
            return True

    def jump_to_scene(self, widget_id: str) -> bool:
        with self._lock:
            for i, scene in enumerate(self.scenes):
                if scene.is_activated_by(widget_id):
                    if i == self._state.scene_index:
                        return False
                    self._commit(replace(self._state, scene_index=i, step_index=0))
                    return True
            return False

    def jump_to_slide(self, index: int) -> bool:
        with self._lock:
            if not 0 <= index < len(self._slides):
                logger.debug(f"Ignoring jump to slide {index}: out of range")
                return False
            self._commit(replace(self._state, slide_index=index, scene_index=0,
                                 step_index=0, expanded_card_id=None))
            return True

    def set_playing(self, playing: bool) -> None:
        with self._lock:
            if playing and not self._slides:
                logger.debug("Ignoring play request: deck has no slides")
                return
            self._commit(replace(self._state, is_playing=playing))

    def toggle_play(self) -> bool:
        with self._lock:
            self.set_playing(not self._state.is_playing)
            return self._state.is_playing

    def set_expanded_card(self, card_id: Optional[str]) -> None:
        # Single slot: a new card replaces the previous one.
        with self._lock:
            self._commit(replace(self._state, expanded_card_id=card_id))

    def collapse(self) -> None:
        self.set_expanded_card(None)

    def handle_item_click(self, widget_id: str) -> Action:
        with self._lock:
            scene = self.current_scene
            layer = scene.widget_state_layer if scene else None
            action = resolve_click(
                widget_id,
                self.scenes,
                self._state.scene_index,
                layer.enter_behavior if layer else None,
                layer.interaction_behaviors if layer else [],
                self._state.expanded_card_id,
            )
            if isinstance(action, JumpScene):
                self._commit(replace(self._state, scene_index=action.index, step_index=0))
            elif isinstance(action, ToggleExpand):
                self.set_expanded_card(action.card_id)
            logger.debug(f"Click on {widget_id!r} resolved to {action}")
            return action

    def handle_key(self, key: str) -> bool:
        """Apply the keyboard contract. Returns False for unbound keys."""
        if key in ("ArrowRight", " ", "Space"):
            self.advance()
        elif key == "ArrowLeft":
            self.retreat()
        elif key in ("p", "P"):
            self.toggle_play()
        elif key == "Escape":
            self.collapse()
        else:
            return False
        return True

    def close(self) -> None:
        """Stop playback for good and cancel any pending timer."""
        with self._lock:
            self._closed = True
            self._timer.cancel()
            self._listeners.clear()

    # ── Internals ──────────────────────────────────────────────────────

    def _next_position(self) -> Optional[NavigationState]:
        s = self._state
        if s.step_index < self.total_steps - 1:
            return replace(s, step_index=s.step_index + 1)
        if s.scene_index < len(self.scenes) - 1:
            return replace(s, scene_index=s.scene_index + 1, step_index=0)
        if s.slide_index < len(self._slides) - 1:
            return replace(s, slide_index=s.slide_index + 1, scene_index=0, step_index=0)
        return None

    def _step_duration_ms(self) -> int:
        scene = self.current_scene
        if scene is not None:
            step_duration = scene.widget_state_layer.enter_behavior.step_duration
            if step_duration is not None:
                return step_duration
        return self._config.default_step_duration_ms

    def _commit(self, new: NavigationState) -> None:
        old = self._state
        if (new.slide_index, new.scene_index) != (old.slide_index, old.scene_index):
            new = replace(new, expanded_card_id=None)
        if new == old:
            return
        self._state = new

        if new.slide_index != old.slide_index:
            logger.info(f"Slide {old.slide_index} -> {new.slide_index}")
        if new.is_playing != old.is_playing:
            logger.info("Playback started" if new.is_playing else "Playback paused")

        moved = (new.slide_index, new.scene_index, new.step_index, new.is_playing) != \
            (old.slide_index, old.scene_index, old.step_index, old.is_playing)
        if moved:
            self._reschedule()
        self._notify()

    def _reschedule(self) -> None:
        self._timer.cancel()
        if self._closed or not self._state.is_playing or not self._slides:
            return
        self._timer.arm(self._step_duration_ms())

    def _on_timer(self, token: object) -> None:
        with self._lock:
            if not self._timer.is_current(token):
                return
            self._timer.release(token)
            target = self._next_position()
            if target is None:
                logger.info("Reached the end of the deck, stopping playback")
                self._commit(replace(self._state, is_playing=False))
            else:
                self._commit(target)

    def _notify(self) -> None:
        state = self._state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(f"Navigation listener failed: {str(e)}")
