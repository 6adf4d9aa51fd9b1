import pytest

from core import Core, EventBus
from modules.cursor_effects import (
    TOUCH_LAYER_FILTER,
    CursorEffects,
    PointerState,
    Viewport,
    build_layers,
    parallax_offset,
)
from modules.dom import Element
from modules.environment import Environment


def make_effects(environment=Environment(), viewport=Viewport(1000, 500)):
    glow = Element(classes={"cursor-glow"})
    layers = build_layers([Element(classes={"gradient-layer"}) for _ in range(3)])
    effects = CursorEffects(glow, layers, viewport, environment)
    core = Core([effects], event_bus=EventBus())
    return core, effects


def test_burst_of_moves_coalesces_into_one_update():
    core, effects = make_effects()
    for i in range(50):
        core.dispatch("pointer_move", {"x": i, "y": i * 2})
    assert core.scheduler.pending == 1

    assert core.run_frame() == 1
    assert effects.update_count == 1
    assert effects.glow.style["left"] == "49px"
    assert effects.glow.style["top"] == "98px"
    assert not effects.frame_pending


def test_only_first_move_requests_a_frame():
    core, _ = make_effects()
    first = core.dispatch("pointer_move", {"x": 1, "y": 1})
    second = core.dispatch("pointer_move", {"x": 2, "y": 2})
    assert first.payload is True
    assert second.payload is False


def test_clean_frame_does_not_write_styles():
    core, effects = make_effects()
    core.dispatch("pointer_move", {"x": 10, "y": 10})
    effects.needs_update = False
    core.run_frame()
    assert effects.update_count == 0
    assert "left" not in effects.glow.style


def test_layer_transforms_follow_pointer():
    core, effects = make_effects()
    core.dispatch("pointer_move", {"x": 1000, "y": 0})
    core.run_frame()
    transforms = [layer.element.style["transform"] for layer in effects.layers]
    assert transforms == [
        "translate3d(-0.4px, 0.4px, 0)",
        "translate3d(-0.8px, 0.8px, 0)",
        "translate3d(-1.2px, 1.2px, 0)",
    ]


def test_centred_pointer_has_no_offset():
    assert parallax_offset(PointerState(500, 250), Viewport(1000, 500), 0.06) == (0.0, 0.0)


def test_zero_viewport_keeps_layers_centred():
    tx, ty = parallax_offset(PointerState(10, 10), Viewport(0, 0), 0.04)
    assert (tx, ty) == (0.0, 0.0)


def test_resize_records_viewport_and_schedules_update():
    core, effects = make_effects()
    core.dispatch("resize", {"width": 800, "height": 600})
    assert effects.viewport == Viewport(800, 600)
    core.run_frame()
    assert effects.update_count == 1
    assert effects.glow.style["left"] == "500px"


def test_enter_and_leave_toggle_glow():
    core, effects = make_effects()
    assert effects.glow.style["opacity"] == "1"
    core.dispatch("pointer_leave")
    assert effects.glow.style["opacity"] == "0"
    core.dispatch("pointer_enter")
    assert effects.glow.style["opacity"] == "1"


@pytest.mark.parametrize(
    "environment",
    [Environment(coarse_pointer=True), Environment(touch_start=True)],
)
def test_touch_devices_never_register_pointer_listeners(environment):
    core, effects = make_effects(environment)
    assert "pointer_move" not in core.commands
    assert core.dispatch("pointer_move", {"x": 1, "y": 1}).handled is False
    assert core.scheduler.pending == 0
    assert effects.glow.style["opacity"] == "0"
    for layer in effects.layers:
        assert layer.element.style["filter"] == TOUCH_LAYER_FILTER
        assert layer.element.style["animation-play-state"] == "paused"
        assert layer.element.style["animation-duration"] == "0s"


def test_reduced_motion_pauses_layers_but_keeps_listeners():
    core, effects = make_effects(Environment(reduced_motion=True))
    assert "pointer_move" in core.commands
    assert effects.glow.style["opacity"] == "0"
    for layer in effects.layers:
        assert layer.element.style["animation-play-state"] == "paused"
        assert "filter" not in layer.element.style


def test_environment_from_media_queries():
    queries = {"(pointer: coarse)": False, "(prefers-reduced-motion: reduce)": True}
    env = Environment.from_media(queries.get)
    assert not env.touch_primary
    assert env.reduced_motion
    assert not env.heavy_effects
    assert Environment.from_media(lambda q: False, touch_start=True).touch_primary
