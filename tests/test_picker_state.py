import dataclasses
import random

import pytest

from color_logic import NamedPalette
from errors import InvalidFormat
from picker_state import (initial_state, remove_palette, save_palette, set_color,
                          set_hsl_channel, set_rgb_channel, suggest_random_palette,
                          toggle_selected)
from settings import DEFAULT_SETTINGS


@pytest.fixture
def state():
    return initial_state()


def test_initial_state(state):
    assert state.color == "#00d66f"
    assert state.rgb == (0, 214, 111)
    assert state.hsl == (151, 100, 42)
    assert state.history == ("#00d66f",)
    assert state.selected == ()
    assert state.saved_palettes == ()
    assert state.suggested is None
    assert state.info.rgb == "rgb(0, 214, 111)"

def test_initial_state_from_settings():
    settings = dict(DEFAULT_SETTINGS, default_color="#FF0000")
    assert initial_state(settings=settings).color == "#ff0000"
    assert initial_state("#0000ff").hsl == (240, 100, 50)

def test_initial_state_rejects_bad_color():
    with pytest.raises(InvalidFormat):
        initial_state("blue")

def test_state_is_immutable(state):
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.color = "#000000"

def test_set_color(state):
    new = set_color(state, "#FF0000")
    assert new.color == "#ff0000"
    assert new.rgb == (255, 0, 0)
    assert new.hsl == (0, 100, 50)
    assert new.history == ("#00d66f", "#ff0000")
    assert state.color == "#00d66f"

@pytest.mark.parametrize("value", ["not-a-color", "#12345", "", None])
def test_set_color_keeps_last_valid_color(state, value):
    assert set_color(state, value) is state

def test_set_rgb_channel(state):
    new = set_rgb_channel(state, "r", 255)
    assert new.color == "#ffd66f"
    assert new.rgb == (255, 214, 111)

def test_set_rgb_channel_clamps(state):
    assert set_rgb_channel(state, "g", 300).rgb == (0, 255, 111)

def test_set_hsl_channel():
    red = initial_state("#ff0000")
    green = set_hsl_channel(red, "h", 120)
    assert green.color == "#00ff00"
    assert green.hsl == (120, 100, 50)
    assert set_hsl_channel(red, "l", 100).color == "#ffffff"
    assert set_hsl_channel(red, "s", 0).color == "#808080"

def test_unknown_channel(state):
    with pytest.raises(ValueError):
        set_rgb_channel(state, "h", 1)
    with pytest.raises(ValueError):
        set_hsl_channel(state, "r", 1)

def test_toggle_selected(state):
    state = toggle_selected(state, "#FF0000")
    state = toggle_selected(state, "#00ff00")
    assert state.selected == ("#ff0000", "#00ff00")
    state = toggle_selected(state, "#ff0000")
    assert state.selected == ("#00ff00",)

def test_save_palette_without_selection_uses_current_color(state):
    state = save_palette(state)
    assert state.saved_palettes == (NamedPalette("Palette 1", ("#00d66f",)),)

def test_save_palette_with_selection(state):
    state = toggle_selected(state, "#ff0000")
    state = toggle_selected(state, "#0000ff")
    state = save_palette(save_palette(state))
    assert state.saved_palettes[0] == NamedPalette("Palette 1", ("#ff0000", "#0000ff"))
    assert state.saved_palettes[1] == NamedPalette("Palette 2", ("#00d66f",))
    assert state.selected == ()

def test_remove_palette(state):
    state = save_palette(save_palette(state))
    state = remove_palette(state, 0)
    assert [p.name for p in state.saved_palettes] == ["Palette 2"]
    assert remove_palette(state, 5).saved_palettes == state.saved_palettes

def test_history_is_bounded():
    state = initial_state(settings=dict(DEFAULT_SETTINGS, history_size=3))
    for color in ("#000001", "#000002", "#000003", "#000004"):
        state = set_color(state, color)
    assert state.history == ("#000002", "#000003", "#000004")

def test_history_skips_repeats(state):
    state = set_color(set_color(state, "#00d66f"), "#00D66F")
    assert state.history == ("#00d66f",)

def test_suggest_random_palette(state):
    new = suggest_random_palette(state, random.Random(7))
    assert new.suggested.name == "Random"
    assert len(new.suggested.colors) == 6
    assert new.color == state.color

def test_zero_history_size_keeps_no_history():
    state = initial_state(settings=dict(DEFAULT_SETTINGS, history_size=0))
    assert state.history == ()
    for color in ("#000001", "#000002", "#000003"):
        state = set_color(state, color)
    assert state.history == ()
    assert state.color == "#000003"
