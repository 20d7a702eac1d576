"""Tests for sceneplay.engine.visibility — reveal scenarios and fallbacks."""

import pytest

from sceneplay.core.scenes import (
    AnimationBehavior,
    ContentItem,
    Scene,
    Slide,
    WidgetStateLayer,
    WidgetVisualState,
)
from sceneplay.engine.steps import calc_scene_steps
from sceneplay.engine.visibility import (
    DEFAULT_VISIBILITY,
    ItemVisibility,
    get_visibility,
    resolve_slide_visibility,
)

IDS = ["a", "b", "c"]


def _scene(mode="sequential", overview=False, exit=False, ids=IDS, initial=()) -> Scene:
    return Scene(
        id="s",
        widget_state_layer=WidgetStateLayer(
            animated_widget_ids=list(ids),
            initial_states=list(initial),
            enter_behavior=AnimationBehavior(reveal_mode=mode, include_overview_step=overview),
            exit_behavior=AnimationBehavior(reveal_mode="all-at-once") if exit else None,
        ),
    )


def _vis(item_id, scene, step):
    return get_visibility(item_id, scene, step, calc_scene_steps(scene))


def _visible_set(scene, step):
    return {w for w in IDS if _vis(w, scene, step).visible}


# ── Sequential reveal ─────────────────────────────────────────────────

class TestSequentialReveal:
    def test_step_0(self):
        scene = _scene()
        assert _vis("a", scene, 0) == ItemVisibility(visible=True, is_focused=True)
        assert _vis("b", scene, 0).visible is False
        assert _vis("c", scene, 0).visible is False

    def test_step_1(self):
        scene = _scene()
        assert _vis("a", scene, 1) == ItemVisibility(visible=True, is_focused=False)
        assert _vis("b", scene, 1) == ItemVisibility(visible=True, is_focused=True)
        assert _vis("c", scene, 1).visible is False

    def test_step_2(self):
        scene = _scene()
        assert _vis("a", scene, 2).is_focused is False
        assert _vis("b", scene, 2) == ItemVisibility(visible=True, is_focused=False)
        assert _vis("c", scene, 2) == ItemVisibility(visible=True, is_focused=True)

    @pytest.mark.parametrize("step", [0, 1, 2])
    def test_visible_iff_index_at_most_step(self, step):
        scene = _scene()
        for i, w in enumerate(IDS):
            assert _vis(w, scene, step).visible is (i <= step)

    @pytest.mark.parametrize("step", [0, 1, 2])
    def test_exactly_one_focused(self, step):
        scene = _scene()
        assert sum(_vis(w, scene, step).is_focused for w in IDS) == 1

    def test_never_hidden(self):
        scene = _scene()
        assert not any(_vis(w, scene, s).hidden for w in IDS for s in range(3))

    def test_monotonic(self):
        scene = _scene()
        for step in range(2):
            assert _visible_set(scene, step) <= _visible_set(scene, step + 1)


class TestOverviewStep:
    def test_overview_shows_all_unfocused(self):
        scene = _scene(overview=True)
        assert calc_scene_steps(scene) == 4
        for w in IDS:
            assert _vis(w, scene, 0) == ItemVisibility(visible=True, is_focused=False)

    @pytest.mark.parametrize("step", [1, 2, 3])
    def test_steps_shift_by_one(self, step):
        shifted = _scene(overview=True)
        plain = _scene()
        for w in IDS:
            assert _vis(w, shifted, step) == _vis(w, plain, step - 1)


class TestAllAtOnce:
    def test_two_step_scene(self):
        scene = _scene(mode="all-at-once", ids=["a", "b"])
        assert calc_scene_steps(scene) == 2
        assert _vis("a", scene, 0).visible is False
        assert _vis("b", scene, 0).visible is False
        assert _vis("a", scene, 1) == ItemVisibility(visible=True, is_focused=False)
        assert _vis("b", scene, 1) == ItemVisibility(visible=True, is_focused=False)

    def test_single_step_scene_is_revealed(self):
        scene = _scene(mode="all-at-once", ids=["a"])
        assert _vis("a", scene, 0).visible is True


class TestExitStep:
    @pytest.mark.parametrize("mode", ["sequential", "all-at-once"])
    def test_exit_shows_everything(self, mode):
        scene = _scene(mode=mode, exit=True)
        last = calc_scene_steps(scene) - 1
        assert last == 3
        for w in IDS + ["unknown"]:
            assert _vis(w, scene, last) == ItemVisibility(visible=True, is_focused=False)

    def test_exit_overrides_initial_states(self):
        scene = _scene(exit=True, initial=[WidgetVisualState(widget_id="x", visible=False,
                                                            display_mode="hidden")])
        assert _vis("x", scene, 3) == DEFAULT_VISIBILITY


# ── Non-animated widgets ──────────────────────────────────────────────

class TestInitialStates:
    def test_hidden_display_mode(self):
        scene = _scene(initial=[WidgetVisualState(widget_id="x", visible=False,
                                                  display_mode="hidden")])
        assert _vis("x", scene, 0) == ItemVisibility(visible=False, is_focused=False, hidden=True)

    def test_invisible_but_not_hidden(self):
        scene = _scene(initial=[WidgetVisualState(widget_id="x", visible=False,
                                                  display_mode="minimized")])
        assert _vis("x", scene, 1) == ItemVisibility(visible=False, is_focused=False, hidden=False)

    def test_focused_initial_state(self):
        scene = _scene(initial=[WidgetVisualState(widget_id="x", is_focused=True)])
        assert _vis("x", scene, 0).is_focused is True

    def test_animated_id_wins_over_initial_state(self):
        scene = _scene(initial=[WidgetVisualState(widget_id="c", visible=True)])
        assert _vis("c", scene, 0).visible is False


class TestFallbacks:
    def test_unknown_widget_default(self):
        for step in range(3):
            assert _vis("ghost", _scene(), step) == DEFAULT_VISIBILITY

    def test_no_scene_default(self):
        assert get_visibility("a", None, 0, 1) == DEFAULT_VISIBILITY

    def test_overview_and_exit_share_default(self):
        overview = _scene(overview=True)
        exit_scene = _scene(exit=True)
        assert _vis(IDS[0], overview, 0) is DEFAULT_VISIBILITY
        assert _vis(IDS[0], exit_scene, calc_scene_steps(exit_scene) - 1) is DEFAULT_VISIBILITY

    def test_pure(self):
        scene = _scene(overview=True, exit=True)
        for step in range(calc_scene_steps(scene)):
            assert _vis("b", scene, step) == _vis("b", scene, step)

    def test_to_dict(self):
        assert ItemVisibility(visible=False).to_dict() == {
            "visible": False, "isFocused": False, "hidden": False,
        }


class TestSlideVisibility:
    def test_whole_tree(self):
        slide = Slide(items=[
            ContentItem(id="title"),
            ContentItem(id="grid", type="layout", children=[
                ContentItem(id="a", type="card"),
                ContentItem(id="b", type="card"),
            ]),
        ])
        scene = _scene(ids=["a", "b"])
        frame = resolve_slide_visibility(slide, scene, 0, 2)
        assert list(frame) == ["title", "grid", "a", "b"]
        assert frame["a"].is_focused is True
        assert frame["b"].visible is False
        assert frame["title"] == DEFAULT_VISIBILITY
